from __future__ import annotations

import json
from typing import Mapping

from sharesaver.models import FetchResponse


class FakeFetcher:
    """Replays queued responses (or raises queued exceptions) in call order."""

    def __init__(self, responses: list[object]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, dict]] = []

    async def fetch(self, url: str, headers: Mapping[str, str]) -> FetchResponse:
        self.calls.append((url, dict(headers)))
        if not self._responses:
            raise RuntimeError("No fake response configured")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


def backend_body(*turns: tuple[str, list[str]], title: str | None = None) -> str:
    """Build a share-endpoint body shaped like the proxy's JSON output."""
    mapping = {}
    for idx, (role, parts) in enumerate(turns):
        mapping[f"node-{idx}"] = {
            "message": {
                "author": {"role": role},
                "content": {"content_type": "text", "parts": parts},
            }
        }
    payload: dict = {"mapping": mapping}
    if title is not None:
        payload = {"title": title, **payload}
    return json.dumps(payload)
