"""Retrieval targets for the structured backend endpoint."""

import time
from typing import Optional

from .config import Settings

def cache_buster(now: Optional[float] = None) -> int:
    return int(time.time() if now is None else now)

def with_cache_buster(url: str, ts: int) -> str:
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}_ts={ts}"

def build_candidates(share_id: str, settings: Settings, now: Optional[float] = None) -> list[str]:
    """Both inner schemes of the backend share endpoint, http first."""
    ts = cache_buster(now)
    return [
        with_cache_buster(f"{settings.proxy_base_url}/{scheme}://{settings.backend_host}/backend-api/share/{share_id}", ts)
        for scheme in ("http", "https")
    ]
