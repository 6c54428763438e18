from __future__ import annotations

import pytest

from overlay_kit.api.overlays import OverlayRecord
from overlay_kit.runtime.config import OverlayConfig, load_overlay_config
from overlay_kit.runtime.history_platform import InMemoryHistory
from overlay_kit.runtime.logging import shutdown_overlay_logging
from overlay_kit.runtime.overlay_store import RuntimeOverlayStore


class Recorder:
    """Collects every snapshot delivered to an observer."""

    def __init__(self) -> None:
        self.snapshots: list[tuple[OverlayRecord, ...]] = []

    def __call__(self, records: tuple[OverlayRecord, ...]) -> None:
        self.snapshots.append(records)

    @property
    def calls(self) -> int:
        return len(self.snapshots)

    @property
    def last_ids(self) -> list[str]:
        return [record.id for record in self.snapshots[-1]]


class CallCounter:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


@pytest.fixture(autouse=True)
def _reset_package_logging():
    yield
    shutdown_overlay_logging()


@pytest.fixture
def config() -> OverlayConfig:
    return load_overlay_config(env={})


@pytest.fixture
def history() -> InMemoryHistory:
    return InMemoryHistory(url="/projects")


@pytest.fixture
def store(config: OverlayConfig, history: InMemoryHistory):
    instance = RuntimeOverlayStore(config=config, history=history)
    yield instance
    instance.destroy()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def counter_factory():
    return CallCounter
