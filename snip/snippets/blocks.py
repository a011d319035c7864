"""Split pasted cheat sheets into individual snippets.

A cheat sheet is a run of blocks separated by blank lines. Each block names
its snippet on a line starting with ``#``; every other line is code::

    # List containers
    docker ps -a

    # Tail logs
    docker logs -f web
"""

from __future__ import annotations

from dataclasses import dataclass

from snip.snippets import DEFAULT_BULK_LANGUAGE, Snippet

BLOCK_SEPARATOR = "\n\n"
TITLE_MARKER = "#"


@dataclass(frozen=True, slots=True)
class ParsedBlocks:
    """Snippets extracted from a cheat sheet plus the number of blocks examined."""

    snippets: tuple[Snippet, ...]
    block_count: int

    @property
    def skipped_count(self) -> int:
        return self.block_count - len(self.snippets)


def parse_blocks(text: str, *, language: str = DEFAULT_BULK_LANGUAGE) -> ParsedBlocks:
    """Parse ``text`` into snippets, skipping blocks without a title or code."""

    if not text:
        return ParsedBlocks(snippets=(), block_count=0)

    blocks = text.replace("\r\n", "\n").split(BLOCK_SEPARATOR)
    snippets: list[Snippet] = []
    for block in blocks:
        parsed = _parse_block(block, language)
        if parsed is not None:
            snippets.append(parsed)
    return ParsedBlocks(snippets=tuple(snippets), block_count=len(blocks))


def _parse_block(block: str, language: str) -> Snippet | None:
    lines = block.split("\n")
    title_line = next((line for line in lines if _is_marker_line(line)), None)
    if title_line is None:
        return None

    title = title_line.strip()[len(TITLE_MARKER) :].strip()
    code = "\n".join(line for line in lines if not _is_marker_line(line)).strip()
    if not title or not code:
        return None
    return Snippet(title=title, code=code, language=language)


def _is_marker_line(line: str) -> bool:
    return line.strip().startswith(TITLE_MARKER)


__all__ = ["BLOCK_SEPARATOR", "ParsedBlocks", "TITLE_MARKER", "parse_blocks"]
