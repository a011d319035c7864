from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import requests

from snip.config import ClientSettings, mask_secret
from snip.errors import TransportError
from snip.snippets import SearchResult, Snippet

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class SnippetApiClient:
    """Thin wrapper over the snippet service's REST endpoints."""

    def __init__(
        self,
        api_url: str,
        token: str,
        *,
        session: requests.Session | None = None,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers["Authorization"] = f"Bearer {token}"
        self._masked_token = mask_secret(token)

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> SnippetApiClient:
        return cls(settings.api_url, settings.token)

    @property
    def base_url(self) -> str:
        return self._base_url

    def create_snippet(self, snippet: Snippet) -> dict[str, Any]:
        response = self._request("save snippet", "POST", "/snippets", json=snippet.to_payload())
        body = _json_or_none(response)
        return body if isinstance(body, dict) else {}

    def search(self, query: str) -> list[SearchResult]:
        response = self._request("search", "GET", "/search", params={"q": query})
        body = _json_or_none(response)
        results = body.get("results") if isinstance(body, dict) else None
        if not isinstance(results, list):
            raise TransportError("search", "unexpected response from server")
        decoded = [SearchResult.from_payload(item) for item in results if isinstance(item, dict)]
        usable = [result for result in decoded if result.code.strip()]
        if len(usable) != len(decoded):
            logger.info(
                "Skipping search results without code",
                extra={"skipped": len(decoded) - len(usable), "query": query},
            )
        return usable

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> SnippetApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self._base_url}{path}"
        logger.debug(
            "Sending request",
            extra={
                "operation": operation,
                "method": method,
                "url": url,
                "token": self._masked_token,
            },
        )
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise self._transport_error(operation, exc, exc.response) from exc
        except requests.RequestException as exc:
            raise self._transport_error(operation, exc, None) from exc
        return response

    def _transport_error(
        self,
        operation: str,
        exc: requests.RequestException,
        response: requests.Response | None,
    ) -> TransportError:
        status_code = response.status_code if response is not None else None
        logger.info(
            "Request failed",
            extra={"operation": operation, "status_code": status_code, "url": self._base_url},
        )
        return TransportError(operation, _error_message(exc, response), status_code=status_code)


def _error_message(exc: requests.RequestException, response: requests.Response | None) -> str:
    if response is None:
        return str(exc) or exc.__class__.__name__
    body = _json_or_none(response)
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
        if isinstance(message, Sequence) and not isinstance(message, str) and message:
            return "; ".join(str(part) for part in message)
    return f"{response.status_code} {response.reason or ''}".strip()


def _json_or_none(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "SnippetApiClient"]
