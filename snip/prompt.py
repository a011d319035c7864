"""Interactive list selection backed by prompt_toolkit."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.shortcuts import choice

from snip.snippets.resolver import Choice

Chooser = Callable[[str, Sequence[Choice]], Choice | None]

LANGUAGE_STYLE = "fg:ansibrightblack"


def prompt_list(message: str, choices: Sequence[Choice]) -> Choice | None:
    """Let the user pick one of ``choices`` with the arrow keys.

    Returns ``None`` when the prompt is interrupted (Ctrl-C / Ctrl-D).
    """

    if not choices:
        return None
    options = [(index, render_label(item)) for index, item in enumerate(choices)]
    try:
        picked = choice(message, options=options)
    except (KeyboardInterrupt, EOFError):
        return None
    return choices[picked]


def render_label(item: Choice) -> FormattedText:
    """Show the title as-is and dim the ``[language]`` tag."""
    return FormattedText(
        [
            ("", item.result.title),
            (LANGUAGE_STYLE, f" [{item.result.language}]"),
        ]
    )


__all__ = ["Chooser", "prompt_list", "render_label"]
