"""Input reference handling: scheme stripping and share id lookup."""

import re
from typing import Optional

from .errors import EmptyInput

_SHARE_ID_RE = re.compile(r"/share/([a-f0-9\-]+)")

def normalize_reference(raw: str) -> str:
    """Trim the link and drop one leading https:// or http:// prefix."""
    ref = (raw or "").strip()
    if not ref:
        raise EmptyInput()
    for scheme in ("https://", "http://"):
        if ref.startswith(scheme):
            return ref[len(scheme):]
    return ref

def extract_share_id(normalized: str) -> Optional[str]:
    match = _SHARE_ID_RE.search(normalized)
    return match.group(1) if match else None
