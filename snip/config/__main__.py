from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import doctor


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Configuration utilities for snip.")
    subparsers = parser.add_subparsers(dest="command")

    doctor_parser = subparsers.add_parser("doctor", help="Show the stored configuration.")
    doctor_parser.add_argument(
        "--config-file", type=Path, help="Path to the snip config file (JSON)."
    )

    args = parser.parse_args(argv)
    if args.command == "doctor":
        success = doctor(config_file=args.config_file)
        return 0 if success else 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
