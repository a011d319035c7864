from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from snip.cli._common import Services
from snip.config import ClientSettings, ConfigStore
from snip.errors import TransportError
from snip.snippets import SearchResult, Snippet
from snip.snippets.resolver import Choice


@pytest.fixture(autouse=True)
def clear_snip_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SNIP_CONFIG_FILE", raising=False)
    monkeypatch.delenv("SNIP_API_URL", raising=False)


@dataclass(slots=True)
class FakeClipboard:
    content: str = ""
    writes: list[str] = field(default_factory=list)

    def read(self) -> str:
        return self.content

    def write(self, text: str) -> None:
        self.writes.append(text)
        self.content = text


@dataclass(slots=True)
class FakeApiClient:
    search_results: list[SearchResult] = field(default_factory=list)
    fail_titles: set[str] = field(default_factory=set)
    created: list[Snippet] = field(default_factory=list)
    queries: list[str] = field(default_factory=list)
    settings: list[ClientSettings] = field(default_factory=list)
    closed: int = 0

    def bind(self, settings: ClientSettings) -> FakeApiClient:
        self.settings.append(settings)
        return self

    def create_snippet(self, snippet: Snippet) -> dict[str, str]:
        if snippet.title in self.fail_titles:
            raise TransportError("save snippet", "Duplicate title", status_code=409)
        self.created.append(snippet)
        return {"id": str(len(self.created))}

    def search(self, query: str) -> list[SearchResult]:
        self.queries.append(query)
        return list(self.search_results)

    def __enter__(self) -> FakeApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed += 1


@dataclass(slots=True)
class FakeChooser:
    pick_index: int | None = 0
    calls: list[tuple[str, tuple[Choice, ...]]] = field(default_factory=list)

    def __call__(self, message: str, choices: Sequence[Choice]) -> Choice | None:
        self.calls.append((message, tuple(choices)))
        if self.pick_index is None:
            return None
        return choices[self.pick_index]


@dataclass(slots=True)
class CliHarness:
    config_path: Path
    clipboard: FakeClipboard
    client: FakeApiClient
    chooser: FakeChooser

    @property
    def store(self) -> ConfigStore:
        return ConfigStore(self.config_path)

    def login(self, token: str = "test-token-123456") -> None:
        self.store.update({"token": token})

    def services_factory(self) -> Callable[[ConfigStore], Services]:
        def _factory(store: ConfigStore) -> Services:
            return Services(
                config_store=store,
                clipboard=self.clipboard,
                chooser=self.chooser,
                client_factory=self.client.bind,
            )

        return _factory

    def run(self, *argv: str) -> int:
        from snip.cli.main import main

        return main(
            ["--config", str(self.config_path), *argv],
            services_factory=self.services_factory(),
        )


@pytest.fixture()
def harness(tmp_path: Path) -> CliHarness:
    return CliHarness(
        config_path=tmp_path / "snippet-cli.json",
        clipboard=FakeClipboard(),
        client=FakeApiClient(),
        chooser=FakeChooser(),
    )
