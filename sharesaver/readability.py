"""Full-page fallback through the proxy's rendered text view."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup

from .candidates import cache_buster, with_cache_buster
from .config import Settings
from .errors import UpstreamStatusError
from .fetcher import NO_CACHE_HEADERS, Fetcher
from .log import log_debug
from .models import FallbackPage

TITLE_LINE_RE = re.compile(r"^Title:\s*(.*)$", re.M)
_HTML_RE = re.compile(r"<html[\s>]|<title[\s>]", re.I)

def build_fallback_url(normalized: str, settings: Settings, now: Optional[float] = None) -> str:
    return with_cache_buster(f"{settings.proxy_base_url}/http://{normalized}", cache_buster(now))

def _html_title(text: str) -> Optional[str]:
    # The proxy occasionally passes the page through as HTML
    if not _HTML_RE.search(text):
        return None
    soup = BeautifulSoup(text, "html.parser")
    if soup.title and soup.title.get_text().strip():
        return soup.title.get_text().strip()
    return None

def find_title(text: str) -> Optional[str]:
    match = TITLE_LINE_RE.search(text)
    if match:
        return match.group(1).strip()
    return _html_title(text)

def trim_to_marker(text: str, marker: str) -> str:
    """Drop proxy boilerplate before the first turn-boundary line, if there is one."""
    if not marker:
        return text
    match = re.search(rf"^{re.escape(marker)}", text, re.M)
    return text[match.start():] if match else text

def parse_rendered_page(text: str, source: str, settings: Optional[Settings] = None) -> FallbackPage:
    settings = settings or Settings()
    title = find_title(text) or settings.default_title
    return FallbackPage(title=title, source=source, body=trim_to_marker(text, settings.boundary_marker))

async def extract_fallback(
    fetcher: Fetcher,
    normalized: str,
    source: str,
    settings: Optional[Settings] = None,
) -> FallbackPage:
    """Fetch the rendered page. TransportError and UpstreamStatusError propagate."""
    settings = settings or Settings()
    url = build_fallback_url(normalized, settings)
    response = await fetcher.fetch(url, NO_CACHE_HEADERS)
    if not response.ok:
        raise UpstreamStatusError(url, response.status)
    log_debug(f"Fallback page: {len(response.body)} chars")
    return parse_rendered_page(response.body, source, settings)
