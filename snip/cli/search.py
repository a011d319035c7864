"""`snip search`: find a snippet and copy it to the clipboard."""

from __future__ import annotations

import argparse

from snip.cli._common import Services
from snip.errors import MissingInputError, SelectionCancelledError
from snip.snippets.resolver import AutoSelected, NoMatch, resolve_results, select

SELECT_MESSAGE = "Use arrow keys to select a snippet to copy:"
RULE = "-" * 40


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "search",
        help="Fuzzy search your snippets and copy the best match to your clipboard.",
    )
    parser.add_argument("query", help="Search terms.")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, services: Services) -> int:
    query = args.query.strip()
    if not query:
        raise MissingInputError("Provide something to search for.")

    with services.open_client() as client:
        results = client.search(query)

    resolution = resolve_results(results)
    if isinstance(resolution, NoMatch):
        print(f'No snippets found matching "{query}".')
        return 0

    if isinstance(resolution, AutoSelected):
        services.clipboard.write(resolution.code)
        print(f"Found: {resolution.result.title}")
        print("Copied to clipboard!")
        return 0

    print(f'Found {len(resolution.choices)} matches for "{query}":')
    picked = services.chooser(SELECT_MESSAGE, resolution.choices)
    if picked is None:
        raise SelectionCancelledError()

    selected = select(picked)
    services.clipboard.write(selected.code)
    print(RULE)
    print(selected.code)
    print(RULE)
    print("Copied to clipboard!")
    return 0


__all__ = ["RULE", "SELECT_MESSAGE", "register", "run"]
