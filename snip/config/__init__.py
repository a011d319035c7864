from __future__ import annotations

import json
import logging
import os
import sys
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from snip.errors import ConfigError, UnauthenticatedError

DEFAULT_CONFIG_FILE = Path.home() / ".snippet-cli.json"
DEFAULT_API_URL = "http://localhost:3000/api"
CONFIG_FILE_ENV_VAR = "SNIP_CONFIG_FILE"
API_URL_ENV_VAR = "SNIP_API_URL"

TOKEN_KEY = "token"
API_URL_KEY = "apiUrl"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClientSettings:
    api_url: str
    token: str


class ConfigStore:
    """Flat JSON record holding the login token and API base URL."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, Any]:
        """Return the stored record, or an empty one when missing or corrupt."""
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise ConfigError(f"Failed to read config file {self._path}: {exc}") from exc

        try:
            data = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.info("Ignoring unreadable config file", extra={"path": str(self._path)})
            return {}
        if not isinstance(data, dict):
            logger.info("Ignoring non-object config file", extra={"path": str(self._path)})
            return {}
        return data

    def update(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Merge ``values`` into the stored record and write it back."""
        merged = {**self.read(), **values}
        self._write(merged)
        logger.debug(
            "Updated config file",
            extra={"path": str(self._path), "keys": sorted(values)},
        )
        return merged

    def token(self) -> str | None:
        value = self.read().get(TOKEN_KEY)
        if isinstance(value, str) and value.strip():
            return value
        return None

    def require_token(self) -> str:
        token = self.token()
        if token is None:
            raise UnauthenticatedError()
        return token

    def api_url(self, *, environ: Mapping[str, str] | None = None) -> str:
        return self.resolve_api_url(environ)[0]

    def client_settings(self, *, environ: Mapping[str, str] | None = None) -> ClientSettings:
        token = self.require_token()
        return ClientSettings(api_url=self.api_url(environ=environ), token=token)

    def resolve_api_url(self, environ: Mapping[str, str] | None = None) -> tuple[str, str]:
        """Return the effective API URL and where it came from."""
        runtime_values = environ if environ is not None else os.environ
        override = runtime_values.get(API_URL_ENV_VAR, "").strip()
        if override:
            return override, API_URL_ENV_VAR
        stored = self.read().get(API_URL_KEY)
        if isinstance(stored, str) and stored.strip():
            return stored.strip(), str(self._path)
        return DEFAULT_API_URL, "default"

    def _write(self, data: Mapping[str, Any]) -> None:
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise ConfigError(f"Failed to write config file {self._path}: {exc}") from exc


def resolve_config_file(explicit: Path | str | None = None) -> Path:
    if explicit is not None:
        return Path(explicit)
    override = os.environ.get(CONFIG_FILE_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_CONFIG_FILE


def mask_secret(value: str) -> str:
    if len(value) <= 8:
        return "***"
    return f"{value[:4]}...{value[-4:]}"


def doctor(*, config_file: Path | str | None = None) -> bool:
    """Print where the configuration lives and whether a token is stored."""
    store = ConfigStore(resolve_config_file(config_file))
    try:
        api_url, source = store.resolve_api_url()
        token = store.token()
    except ConfigError as exc:
        print("Configuration invalid:", file=sys.stderr)
        print(f"  {exc}", file=sys.stderr)
        return False

    print(f"  Config file: {store.path}", file=sys.stdout)
    print(f"  API URL: {api_url} (from {source})", file=sys.stdout)
    if token is None:
        print("Not logged in. Run: snip login <token>", file=sys.stderr)
        return False

    print(f"  Token: {mask_secret(token)}", file=sys.stdout)
    print("Configuration looks good.", file=sys.stdout)
    return True


__all__ = [
    "API_URL_ENV_VAR",
    "API_URL_KEY",
    "CONFIG_FILE_ENV_VAR",
    "ClientSettings",
    "ConfigError",
    "ConfigStore",
    "DEFAULT_API_URL",
    "DEFAULT_CONFIG_FILE",
    "doctor",
    "mask_secret",
    "resolve_config_file",
    "TOKEN_KEY",
]
