"""Snippet models exchanged with the snippet service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_LANGUAGE = "text"
DEFAULT_BULK_LANGUAGE = "bash"


@dataclass(frozen=True, slots=True)
class Snippet:
    """A titled piece of code ready to be submitted."""

    title: str
    code: str
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValueError("Snippet title must not be empty")
        if not self.code.strip():
            raise ValueError("Snippet code must not be empty")

    def to_payload(self) -> dict[str, str]:
        return {
            "title": self.title,
            "code_content": self.code,
            "language": self.language,
        }


@dataclass(frozen=True, slots=True)
class SearchResult:
    title: str
    language: str
    code: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> SearchResult:
        return cls(
            title=str(payload.get("title") or ""),
            language=str(payload.get("language") or ""),
            code=str(payload.get("code_content") or ""),
        )


__all__ = [
    "DEFAULT_BULK_LANGUAGE",
    "DEFAULT_LANGUAGE",
    "SearchResult",
    "Snippet",
]
