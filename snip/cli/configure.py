"""`snip config <url>`: point the client at a snippet service."""

from __future__ import annotations

import argparse

from snip.cli._common import Services
from snip.config import API_URL_KEY
from snip.errors import MissingInputError


def register(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("config", help="Set the backend API URL.")
    parser.add_argument("url", help="Base URL of the snippet API.")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, services: Services) -> int:
    url = args.url.strip()
    if not url:
        raise MissingInputError("Provide the API URL, e.g. snip config <url>.")

    services.config_store.update({API_URL_KEY: url})
    print(f"API URL set to: {url}")
    return 0


__all__ = ["register", "run"]
