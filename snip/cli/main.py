"""`snip` CLI entrypoint."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from snip.cli import _common, auth, configure, save, search

PROG_NAME = "snip"
DESCRIPTION = "A lightning-fast CLI for your personal code snippets."
VERSION = "1.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = _common.build_parser(prog=PROG_NAME, description=DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
    auth.register(subparsers)
    save.register(subparsers)
    search.register(subparsers)
    configure.register(subparsers)
    return parser


def run(args: argparse.Namespace, services: _common.Services) -> int:
    return args.handler(args, services)


def main(
    argv: Sequence[str] | None = None,
    *,
    services_factory: _common.ServicesFactory | None = None,
) -> int:
    parser = build_parser()
    return _common.run_cli(
        parser,
        argv,
        cli_name=PROG_NAME,
        runner=run,
        services_factory=services_factory,
    )


if __name__ == "__main__":  # pragma: no cover - manual execution guard
    raise SystemExit(main())


__all__ = ["build_parser", "main", "run"]
