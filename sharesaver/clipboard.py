"""Read-only clipboard access for picking up a share link."""

from typing import Optional

import pyperclip

from .log import log_debug

def try_repair_mojibake(text: str) -> str:
    """Repair strings where UTF-8 bytes were misinterpreted as Latin-1 or CP1252."""
    if any(ord(c) > 0x1000 for c in text):
        return text
    for enc in ("latin-1", "cp1252"):
        try:
            repaired = text.encode(enc).decode("utf-8")
        except (UnicodeEncodeError, UnicodeDecodeError):
            continue
        if repaired != text:
            return repaired
    return text

def read_clipboard() -> Optional[str]:
    try:
        text = pyperclip.paste()
    except pyperclip.PyperclipException as e:
        log_debug(f"Clipboard unavailable: {e}")
        return None
    if not text or not text.strip():
        return None
    return try_repair_mojibake(text.strip())
