#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ShareSaver - Save a public ChatGPT share link as a Markdown transcript

This script takes a share link (from the command line or the clipboard),
retrieves the conversation through a rendering proxy and writes it to a
Markdown file chosen by the user.
"""

import sys
import os
import time
import asyncio
import tempfile
import argparse
from pathlib import Path

from sharesaver import convert
from sharesaver.activity import DEFAULT_MAX_ENTRIES, ActivityLog
from sharesaver.clipboard import read_clipboard
from sharesaver.config import Settings, config_section, load_config
from sharesaver.errors import ShareSaverError, UnsupportedFormat
from sharesaver.log import log_debug, set_debug
from sharesaver.save import choose_destination, save_document, suggest_filename

# --- Lock ---
_LOCK_DIR = Path(tempfile.gettempdir()) / "sharesaver"
_LOCK_FILE = _LOCK_DIR / "sharesaver.lock"
_LOCK_MAX_AGE = 300  # seconds before a lock file is considered stale (crash recovery)

PREVIEW_CHARS = 600

def acquire_lock(lock_file: Path = None) -> bool:
    """Try to acquire a process lock. Returns True if acquired, False if another download is running."""
    lock_file = lock_file or _LOCK_FILE
    lock_file.parent.mkdir(parents=True, exist_ok=True)
    if lock_file.exists():
        age = time.time() - lock_file.stat().st_mtime
        if age < _LOCK_MAX_AGE:
            return False
        lock_file.unlink(missing_ok=True)  # Stale lock (e.g. previous crash)
    lock_file.write_text(str(os.getpid()), encoding="utf-8")
    return True

def release_lock(lock_file: Path = None):
    (lock_file or _LOCK_FILE).unlink(missing_ok=True)

def document_title(document: str) -> str:
    first = document.split("\n", 1)[0]
    return first[2:].strip() if first.startswith("# ") else ""

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Save a public ChatGPT share link as Markdown.")
    parser.add_argument("url", nargs="?", help="Share link. Read from the clipboard when omitted.")
    parser.add_argument("--format", choices=("md", "pdf"), default=None, help="Output format (PDF is not available yet).")
    parser.add_argument("-o", "--output", help="Destination file or directory; skips the save prompt.")
    parser.add_argument("-y", "--yes", action="store_true", help="Save to the suggested path without asking.")
    parser.add_argument("--print", dest="print_doc", action="store_true", help="Print the whole document instead of a preview.")
    parser.add_argument("--config", help="Path to a config.yaml to use instead of the default lookup.")
    parser.add_argument("--debug", action="store_true", help="Show debug information.")
    return parser

def run(argv=None, ask=input) -> int:
    args = build_parser().parse_args(argv)
    set_debug(args.debug)

    # Fix Windows console encoding
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
        except AttributeError:
            pass

    config = load_config(base_dir=Path(__file__).resolve().parent,
                         explicit=Path(args.config) if args.config else None)
    try:
        settings = Settings.from_config(config)
        output_cfg = config_section(config, "output")
        activity = ActivityLog(int(config_section(config, "activity").get("max_entries", DEFAULT_MAX_ENTRIES)))
    except (TypeError, ValueError) as e:
        ActivityLog().append(f"Error: invalid configuration: {e}")
        return 2

    fmt = args.format or output_cfg.get("format") or "md"
    if fmt != "md":
        activity.append(str(UnsupportedFormat(fmt)))
        return 2

    url = args.url
    if not url:
        url = read_clipboard()
        if url:
            activity.append(f"Using link from clipboard: {url}")
    if not url:
        activity.append("Error: no share link given and the clipboard is empty.")
        return 2

    if not acquire_lock():
        activity.append("Another download is already running, please wait.")
        return 1

    try:
        activity.append(f"Downloading {url.strip()} ...")
        try:
            document = asyncio.run(convert(url, settings=settings))
        except ShareSaverError as e:
            activity.append(f"Error: {e}")
            return 1

        activity.append("Done. Choose where to save the file.")
        if args.print_doc:
            print(document)
        else:
            preview = document[:PREVIEW_CHARS]
            print("-" * 40)
            print(preview + ("\n..." if len(document) > PREVIEW_CHARS else ""))
            print("-" * 40)

        out_dir = Path(str(output_cfg.get("dir") or ".")).expanduser()
        suggested = out_dir / suggest_filename(output_cfg.get("filename"), document_title(document))
        destination = choose_destination(
            suggested,
            output=Path(args.output).expanduser() if args.output else None,
            assume_yes=args.yes,
            ask=ask,
        )
        if destination is None:
            activity.append("Save cancelled")
            return 0

        try:
            saved = save_document(destination, document)
        except ShareSaverError as e:
            activity.append(str(e))
            return 1
        activity.append(f"Saved to: {saved}")
        log_debug(f"Activity log holds {len(activity)} entries")
        return 0
    finally:
        release_lock()

def main():
    sys.exit(run())

if __name__ == "__main__":
    main()
