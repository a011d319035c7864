"""Utilities shared by the snip subcommands."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from snip.api.client import SnippetApiClient
from snip.clipboard import Clipboard, SystemClipboard
from snip.config import ClientSettings, ConfigStore, resolve_config_file
from snip.errors import SnipError
from snip.logging import DEFAULT_LOG_LEVEL, configure_logging
from snip.prompt import Chooser, prompt_list

_LOG_LEVEL_CHOICES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")
_LOG_FORMAT_CHOICES = ("text", "json")
_LOG_DESTINATION_CHOICES = ("auto", "stdout", "stderr")


@dataclass(slots=True)
class Services:
    """Collaborators handed to every command handler."""

    config_store: ConfigStore
    clipboard: Clipboard = field(default_factory=SystemClipboard)
    chooser: Chooser = prompt_list
    client_factory: Callable[[ClientSettings], SnippetApiClient] = SnippetApiClient.from_settings

    def open_client(self) -> SnippetApiClient:
        """Build an API client, failing before any request when not logged in."""
        return self.client_factory(self.config_store.client_settings())


CliRunner = Callable[[argparse.Namespace, Services], int]
ServicesFactory = Callable[[ConfigStore], Services]


class CLIArgs(argparse.Namespace):
    log_level: str
    log_format: str
    log_destination: str
    config: Path | None
    command: str
    handler: CliRunner


def build_parser(*, prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to the JSON config file (overrides $SNIP_CONFIG_FILE and ~/.snippet-cli.json).",
    )
    parser.add_argument(
        "--log-level",
        type=_log_level_type,
        choices=_LOG_LEVEL_CHOICES,
        default=DEFAULT_LOG_LEVEL,
        help="Logging verbosity (case-insensitive).",
    )
    parser.add_argument(
        "--log-format",
        type=_log_format_type,
        choices=_LOG_FORMAT_CHOICES,
        default="text",
        help="Structured JSON or human-readable text logs.",
    )
    parser.add_argument(
        "--log-destination",
        type=_log_destination_type,
        choices=_LOG_DESTINATION_CHOICES,
        default="auto",
        help="Write logs to stdout, stderr, or split automatically by level.",
    )
    return parser


def run_cli(
    parser: argparse.ArgumentParser,
    argv: Sequence[str] | None,
    *,
    cli_name: str,
    runner: CliRunner,
    services_factory: ServicesFactory | None = None,
) -> int:
    args = cast(CLIArgs, parser.parse_args(argv))
    configure_logging(
        level=args.log_level,
        fmt=args.log_format,
        destination=args.log_destination,
    )
    logger = logging.getLogger(f"snip.cli.{cli_name}")

    store = ConfigStore(resolve_config_file(args.config))
    services = services_factory(store) if services_factory is not None else Services(store)
    command = getattr(args, "command", None)
    logger.debug(
        "Running command",
        extra={"cli": cli_name, "command": command, "config_file": str(store.path)},
    )
    try:
        return runner(args, services)
    except SnipError as exc:
        logger.debug(
            "Command failed",
            extra={"cli": cli_name, "command": command, "error": str(exc)},
        )
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized not in _LOG_LEVEL_CHOICES:
        raise argparse.ArgumentTypeError(
            f"Invalid log level '{value}'. Expected one of: {', '.join(_LOG_LEVEL_CHOICES)}"
        )
    return normalized


def _log_format_type(value: str) -> str:
    normalized = value.lower()
    if normalized not in _LOG_FORMAT_CHOICES:
        raise argparse.ArgumentTypeError(
            f"Invalid log format '{value}'. Expected one of: {', '.join(_LOG_FORMAT_CHOICES)}"
        )
    return normalized


def _log_destination_type(value: str) -> str:
    normalized = value.lower()
    if normalized not in _LOG_DESTINATION_CHOICES:
        expected = ", ".join(_LOG_DESTINATION_CHOICES)
        raise argparse.ArgumentTypeError(
            f"Invalid log destination '{value}'. Expected one of: {expected}"
        )
    return normalized


__all__ = [
    "CliRunner",
    "Services",
    "ServicesFactory",
    "build_parser",
    "run_cli",
]
