"""
Structured extraction from the backend share endpoint.

The proxy does not return well-formed JSON reliably: bodies may be wrapped
in rendered text, partially escaped or truncated. Instead of parsing the
whole body, it is scanned for role/parts pairs and each captured parts span
is decoded on its own. A span that cannot be decoded only degrades its own
turn to a best-effort unescape.
"""

from __future__ import annotations

import json
import re
from typing import Optional, Sequence

from .config import Settings
from .errors import TransportError
from .fetcher import NO_CACHE_HEADERS, Fetcher
from .log import log_debug
from .markdown import has_surrogates, json_unescape
from .models import Role, Transcript, Turn

TURN_RE = re.compile(r'"role"\s*:\s*"(user|assistant)"[\s\S]*?"parts"\s*:\s*\[(.*?)\]')
TITLE_RE = re.compile(r'"title"\s*:\s*"(.*?)"')

def parse_parts(span: str) -> str:
    try:
        parts = json.loads(f"[{span}]")
    except ValueError:
        parts = None
    if isinstance(parts, list) and all(isinstance(p, str) and not has_surrogates(p) for p in parts):
        return "\n\n".join(parts)
    return json_unescape(span)

def extract_turns(body: str) -> list[Turn]:
    turns: list[Turn] = []
    for match in TURN_RE.finditer(body):
        # only user and assistant are captured, other roles never reach a Turn
        turns.append(Turn(role=Role(match.group(1)), text=parse_parts(match.group(2))))
    return turns

def extract_title(body: str) -> Optional[str]:
    match = TITLE_RE.search(body)
    return json_unescape(match.group(1)) if match else None

def parse_backend_body(body: str, source: str, settings: Optional[Settings] = None) -> Optional[Transcript]:
    """Build a Transcript from a proxy body, or None when no turn was found."""
    settings = settings or Settings()
    turns = extract_turns(body)
    if not turns:
        return None
    title = extract_title(body) or settings.default_title
    return Transcript(title=title, source=source, turns=turns)

async def extract_structured(
    fetcher: Fetcher,
    candidates: Sequence[str],
    source: str,
    settings: Optional[Settings] = None,
) -> Optional[Transcript]:
    """Try each candidate in order; None means no candidate produced a turn."""
    for url in candidates:
        try:
            response = await fetcher.fetch(url, NO_CACHE_HEADERS)
        except TransportError as e:
            log_debug(f"Candidate skipped: {e}")
            continue
        if not response.ok:
            log_debug(f"Candidate skipped: HTTP {response.status} for {url}")
            continue
        transcript = parse_backend_body(response.body, source, settings)
        if transcript is None:
            log_debug(f"No role/parts pairs in response from {url}")
            continue
        log_debug(f"Extracted {len(transcript.turns)} turns from {url}")
        return transcript
    return None
