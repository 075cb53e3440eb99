"""Save public ChatGPT share links as Markdown transcripts."""

from .errors import (
    EmptyInput,
    SaveError,
    ShareSaverError,
    TransportError,
    UnsupportedFormat,
    UpstreamStatusError,
)
from .pipeline import convert

__all__ = [
    "convert",
    "EmptyInput",
    "SaveError",
    "ShareSaverError",
    "TransportError",
    "UnsupportedFormat",
    "UpstreamStatusError",
]

__version__ = "0.1.0"
