import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class FakeClock:
    def __init__(self, start: datetime = datetime(2024, 3, 10, 9, 30, 0)):
        self.current = start

    def __call__(self) -> str:
        return self.current.isoformat(timespec="seconds")

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class SequentialIds:
    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"{self.prefix}{self.n}"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    from stockbook.services.notification_service import RecordingNotifier

    return RecordingNotifier()


@pytest.fixture
def store():
    from stockbook.repositories.memory_store import MemoryKeyValueStore

    return MemoryKeyValueStore()


@pytest.fixture
def tracker(tmp_path, store, notifier, clock):
    from stockbook.application.tracker import InventoryTracker

    t = InventoryTracker(store, notifier, exports_dir=tmp_path / "exports", id_factory=SequentialIds(), clock=clock)
    return t.open()


def add_widget(tracker, **overrides):
    data = dict(
        name="Widget",
        code="W-1",
        category="Tools",
        supplier="ACME",
        quantity=10,
        min_quantity=5,
        purchase_price=2.0,
        sale_price=3.0,
    )
    data.update(overrides)
    return tracker.add_product(**data)
