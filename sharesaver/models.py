"""Entities produced and consumed within a single pipeline run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Turn:
    role: Role
    text: str


@dataclass
class Transcript:
    title: str
    source: str
    turns: list[Turn] = field(default_factory=list)


@dataclass
class FallbackPage:
    title: str
    source: str
    body: str


@dataclass(frozen=True)
class FetchResponse:
    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
