"""Share link to Markdown: structured extraction first, rendered page second."""

from __future__ import annotations

from typing import Optional

from .candidates import build_candidates
from .config import Settings
from .fetcher import Fetcher, HttpxFetcher
from .log import log_debug
from .markdown import render_fallback, render_transcript
from .readability import extract_fallback
from .reference import extract_share_id, normalize_reference
from .structured import extract_structured

async def convert(reference: str, fetcher: Optional[Fetcher] = None, settings: Optional[Settings] = None) -> str:
    """
    Turn a share link into a Markdown document.

    Raises EmptyInput for a blank link, and TransportError or
    UpstreamStatusError when the fallback fetch fails. Failures of
    individual structured candidates are absorbed.
    """
    settings = settings or Settings()
    normalized = normalize_reference(reference)
    share_id = extract_share_id(normalized) or normalized
    log_debug(f"Share id: {share_id}")

    if fetcher is None:
        async with HttpxFetcher(settings) as own_fetcher:
            return await _convert(reference, normalized, share_id, own_fetcher, settings)
    return await _convert(reference, normalized, share_id, fetcher, settings)

async def _convert(reference: str, normalized: str, share_id: str, fetcher: Fetcher, settings: Settings) -> str:
    candidates = build_candidates(share_id, settings)
    transcript = await extract_structured(fetcher, candidates, normalized, settings)
    if transcript is not None:
        return render_transcript(transcript, settings)

    log_debug("No structured result, falling back to the rendered page")
    page = await extract_fallback(fetcher, normalized, reference.strip(), settings)
    return render_fallback(page)
