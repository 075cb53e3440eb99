"""Save collaborator: choose a destination and write the document."""

from __future__ import annotations

import datetime as dt
import re
from pathlib import Path
from typing import Callable, Optional

from .errors import SaveError

DEFAULT_FILENAME = "chatgpt_conversation.md"
_CANCEL_ANSWERS = {"n", "no", "-", "q"}

def sanitize_filename(name: str) -> str:
    name = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", name)
    name = re.sub(r'[<>:"/\\|?*#]', "_", name)
    name = name.replace("`", "").strip()
    return name[:80]

def suggest_filename(template: str = DEFAULT_FILENAME, title: str = "") -> str:
    """Resolve {title} and {date} in the configured filename template."""
    filename = template or DEFAULT_FILENAME
    filename = filename.replace("{date}", dt.datetime.now().strftime("%Y%m%d"))
    filename = filename.replace("{title}", sanitize_filename(title) or "conversation")
    return filename

def choose_destination(
    suggested: Path,
    output: Optional[Path] = None,
    assume_yes: bool = False,
    ask: Callable[[str], str] = input,
) -> Optional[Path]:
    """Return the path to write to, or None if the user cancelled."""
    if output is not None:
        return output / suggested.name if output.is_dir() else output
    if assume_yes:
        return suggested
    try:
        answer = ask(f"Save to [{suggested}] (enter a path, or 'n' to cancel): ").strip()
    except EOFError:
        return None
    if answer.lower() in _CANCEL_ANSWERS:
        return None
    if not answer:
        return suggested
    path = Path(answer).expanduser()
    return path / suggested.name if path.is_dir() else path

def save_document(path: Path, document: str) -> Path:
    try:
        data = document.encode("utf-8")
    except UnicodeError as e:
        raise SaveError(path, f"document is not valid UTF-8 text ({e.reason})") from e
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise SaveError(path, e.strerror or str(e)) from e
    return path
