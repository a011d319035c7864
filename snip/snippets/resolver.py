"""Decide how a list of search results turns into one copied snippet."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from snip.snippets import SearchResult


@dataclass(frozen=True, slots=True)
class Choice:
    label: str
    result: SearchResult


@dataclass(frozen=True, slots=True)
class NoMatch:
    pass


@dataclass(frozen=True, slots=True)
class AutoSelected:
    result: SearchResult

    @property
    def code(self) -> str:
        return self.result.code


@dataclass(frozen=True, slots=True)
class NeedsSelection:
    choices: tuple[Choice, ...]


@dataclass(frozen=True, slots=True)
class Selected:
    result: SearchResult

    @property
    def code(self) -> str:
        return self.result.code


Resolution = NoMatch | AutoSelected | NeedsSelection


def resolve_results(results: Sequence[SearchResult]) -> Resolution:
    """Return the interaction needed to pick one of ``results``.

    Results keep the order the service returned them in.
    """

    if not results:
        return NoMatch()
    if len(results) == 1:
        return AutoSelected(result=results[0])
    return NeedsSelection(choices=tuple(Choice(label=format_label(r), result=r) for r in results))


def select(choice: Choice) -> Selected:
    return Selected(result=choice.result)


def format_label(result: SearchResult) -> str:
    return f"{result.title} [{result.language}]"


__all__ = [
    "AutoSelected",
    "Choice",
    "NeedsSelection",
    "NoMatch",
    "Resolution",
    "Selected",
    "format_label",
    "resolve_results",
    "select",
]
