"""Integration test fixtures.

Provides a fully wired Engine over the bundled reference catalog, with a
short debounce and a host that records completion requests.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tfwrsense.config import Settings
from tfwrsense.engine import Engine, create_engine

DEBOUNCE_MS = 20


class RecordingHost:
    def __init__(self) -> None:
        self.suggest_calls = 0

    def trigger_suggest(self) -> None:
        self.suggest_calls += 1


@pytest.fixture()
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture()
def settings() -> Settings:
    return Settings(indexer={"debounce_ms": DEBOUNCE_MS})


@pytest.fixture()
def engine(settings: Settings, host: RecordingHost) -> Iterator[Engine]:
    eng = create_engine(settings, host=host)
    yield eng
    eng.dispose()
