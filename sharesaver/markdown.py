"""Markdown rendering for transcripts and fallback pages."""

import json
import re

from .config import Settings
from .models import FallbackPage, Transcript

_SURROGATE_RE = re.compile("[\ud800-\udfff]")

def has_surrogates(text: str) -> bool:
    """True for lone surrogates, e.g. an emoji escape cut in half by truncation."""
    return bool(_SURROGATE_RE.search(text))

def json_unescape(fragment: str) -> str:
    """Decode a fragment as the body of a JSON string literal, or return it as-is."""
    try:
        decoded = json.loads(f'"{fragment}"')
    except ValueError:
        return fragment
    if not isinstance(decoded, str) or has_surrogates(decoded):
        return fragment
    return decoded

def render_transcript(transcript: Transcript, settings: Settings) -> str:
    out = [f"# {transcript.title}\n\n", f"**Source**: https://{transcript.source}\n\n"]
    for turn in transcript.turns:
        who = settings.role_labels.get(turn.role.value, turn.role.value.capitalize())
        text = turn.text.replace("\r\n", "\n")
        out.append(f"> {who}: {text}\n\n")
    return "".join(out)

def render_fallback(page: FallbackPage) -> str:
    return f"# {page.title}\n\n**Source**: {page.source}\n\n{page.body}"
