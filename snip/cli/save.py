"""`snip save`: store one snippet, or bulk import a cheat sheet from the clipboard."""

from __future__ import annotations

import argparse
import logging
import sys

from snip.cli._common import Services
from snip.errors import EmptyClipboardError, MissingInputError, TransportError
from snip.snippets import DEFAULT_BULK_LANGUAGE, DEFAULT_LANGUAGE, Snippet
from snip.snippets.blocks import parse_blocks

logger = logging.getLogger(__name__)


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "save",
        help="Save a new snippet to your database.",
        description=(
            "Save a single snippet, or bulk import blocks of '# Title' + code from the clipboard."
        ),
    )
    parser.add_argument("title", nargs="?", help="Snippet title (ignored with --bulk).")
    parser.add_argument(
        "code", nargs="?", help="Snippet code, quoted (ignored with --clipboard or --bulk)."
    )
    parser.add_argument(
        "-l",
        "--language",
        help=(
            f"Programming language (default: {DEFAULT_LANGUAGE}, "
            f"or {DEFAULT_BULK_LANGUAGE} with --bulk)."
        ),
    )
    parser.add_argument(
        "-c",
        "--clipboard",
        action="store_true",
        help="Take the snippet code from the system clipboard.",
    )
    parser.add_argument(
        "-b",
        "--bulk",
        action="store_true",
        help=(
            "Bulk import a cheat sheet from the clipboard "
            "(blocks of '# Title' then code, separated by blank lines)."
        ),
    )
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, services: Services) -> int:
    if args.bulk:
        return save_bulk(services, language=args.language or DEFAULT_BULK_LANGUAGE)
    return save_single(
        services,
        title=args.title,
        code=args.code,
        language=args.language or DEFAULT_LANGUAGE,
        from_clipboard=args.clipboard,
    )


def save_single(
    services: Services,
    *,
    title: str | None,
    code: str | None,
    language: str,
    from_clipboard: bool = False,
) -> int:
    title = (title or "").strip()
    if not title:
        raise MissingInputError('You must provide a "title" unless you are using the --bulk flag.')

    if from_clipboard:
        code = services.clipboard.read()
        if not code.strip():
            raise EmptyClipboardError()
    elif not code or not code.strip():
        raise MissingInputError("Provide the code block in quotes, or use the --clipboard flag.")

    snippet = Snippet(title=title, code=code, language=language)
    with services.open_client() as client:
        client.create_snippet(snippet)

    print(f'Snippet "{title}" saved successfully!')
    return 0


def save_bulk(services: Services, *, language: str) -> int:
    """Submit every parsed block in order; a failed block does not stop the rest."""

    text = services.clipboard.read()
    if not text.strip():
        raise EmptyClipboardError()

    parsed = parse_blocks(text, language=language)
    print(f"Processing {parsed.block_count} blocks from clipboard...")
    if not parsed.snippets:
        print("No blocks with a '# Title' line and code were found.")
        return 0

    saved = 0
    failed = 0
    with services.open_client() as client:
        for snippet in parsed.snippets:
            try:
                client.create_snippet(snippet)
            except TransportError as exc:
                failed += 1
                logger.info(
                    "Bulk import block failed",
                    extra={"title": snippet.title, "error": exc.reason},
                )
                print(f"Failed: {snippet.title}: {exc.reason}", file=sys.stderr)
                continue
            saved += 1
            print(f"Saved: {snippet.title}")

    print(f"Successfully bulk imported {saved} individual snippets!")
    if parsed.skipped_count:
        print(f"Skipped {parsed.skipped_count} blocks without a title or code.")
    if failed:
        print(f"{failed} snippets failed to save.", file=sys.stderr)
        return 1
    return 0


__all__ = ["register", "run", "save_bulk", "save_single"]
