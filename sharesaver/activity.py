"""Bounded activity log kept by the front end."""

from __future__ import annotations

import datetime as dt
from collections import deque
from typing import Iterator

DEFAULT_MAX_ENTRIES = 500


class ActivityLog:
    """Append-only log of short status strings; the oldest entries are evicted first."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES, echo: bool = True):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._entries: deque[str] = deque(maxlen=max_entries)
        self._echo = echo

    @property
    def max_entries(self) -> int:
        return self._entries.maxlen

    def append(self, message: str):
        stamp = dt.datetime.now().strftime("%H:%M:%S")
        self._entries.append(f"[{stamp}] {message}")
        if self._echo:
            print(message)

    def entries(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
