"""`snip login` and `snip whoami`."""

from __future__ import annotations

import argparse

from snip.cli._common import Services
from snip.config import TOKEN_KEY, mask_secret
from snip.errors import MissingInputError


def register(subparsers: argparse._SubParsersAction) -> None:
    login_parser = subparsers.add_parser("login", help="Store your API token locally.")
    login_parser.add_argument("token", help="Bearer token issued by the snippet service.")
    login_parser.set_defaults(handler=run_login)

    whoami_parser = subparsers.add_parser("whoami", help="Show whether you are logged in.")
    whoami_parser.set_defaults(handler=run_whoami)


def run_login(args: argparse.Namespace, services: Services) -> int:
    token = args.token.strip()
    if not token:
        raise MissingInputError("Provide the token to store, e.g. snip login <token>.")

    services.config_store.update({TOKEN_KEY: token})
    print(f"Authentication successful! Token saved to {services.config_store.path}.")
    return 0


def run_whoami(args: argparse.Namespace, services: Services) -> int:
    store = services.config_store
    token = store.require_token()
    print("You are logged in and ready to snip.")
    print(f"  API URL: {store.api_url()}")
    print(f"  Token: {mask_secret(token)}")
    return 0


__all__ = ["register", "run_login", "run_whoami"]
