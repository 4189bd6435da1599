import json
import logging
from pathlib import Path

import pytest
from conftest import SequentialIds, add_widget

from stockbook.application.container import build_container
from stockbook.application.tracker import InventoryTracker
from stockbook.domain.errors import StorageError
from stockbook.repositories.codec import movements_from_json, products_from_json
from stockbook.repositories.memory_store import MemoryKeyValueStore
from stockbook.repositories.sqlite_store import SqliteKeyValueStore
from stockbook.services.notification_service import RecordingNotifier


class FailingStore(MemoryKeyValueStore):
    def save(self, key, value):
        raise OSError("disk full")


def test_state_survives_reopen_on_sqlite(tmp_path: Path):
    db = tmp_path / "stockbook.db"
    first = build_container(db, notifier=RecordingNotifier()).tracker
    p = add_widget(first)
    first.record_movement(p.id, "OUT", 4, description="counter sale")

    reopened = build_container(db, notifier=RecordingNotifier()).tracker

    assert reopened.products == first.products
    assert reopened.movements == first.movements
    assert reopened.resolve_product(p.id).quantity == 6
    assert reopened.movements[0].description == "counter sale"


def test_records_are_stored_under_separate_keys(tmp_path: Path, store, notifier):
    tracker = InventoryTracker(store, notifier, exports_dir=tmp_path, id_factory=SequentialIds()).open()
    p = add_widget(tracker)
    tracker.record_movement(p.id, "IN", 1)

    products = json.loads(store.load("products"))
    movements = json.loads(store.load("movements"))

    assert [r["name"] for r in products] == ["Widget"]
    assert products[0]["quantity"] == 11
    assert movements[0]["product_id"] == p.id
    assert movements[0]["type"] == "IN"
    assert movements[0]["total"] == 2.0


def test_save_failure_keeps_memory_state(tmp_path: Path, notifier, caplog):
    tracker = InventoryTracker(FailingStore(), notifier, exports_dir=tmp_path).open()

    with caplog.at_level(logging.ERROR):
        p = add_widget(tracker)
        result = tracker.record_movement(p.id, "OUT", 2)

    assert result.applied
    assert tracker.resolve_product(p.id).quantity == 8
    assert len(tracker.movements) == 1
    assert "persist_failed key=products" in caplog.text


def test_open_rejects_malformed_records(tmp_path: Path, notifier):
    store = MemoryKeyValueStore({"products": "{not json"})
    tracker = InventoryTracker(store, notifier, exports_dir=tmp_path)

    with pytest.raises(StorageError):
        tracker.open()
    assert not tracker.is_open


def test_codec_rejects_wrong_shapes():
    with pytest.raises(StorageError):
        products_from_json('{"id": "x"}')
    with pytest.raises(StorageError):
        movements_from_json('[{"id": "m1"}]')
    assert products_from_json(None) == []
    assert movements_from_json("") == []


def test_sqlite_store_upserts_values(tmp_path: Path):
    store = SqliteKeyValueStore(tmp_path / "kv.db")
    store.init_db()

    assert store.load("products") is None
    store.save("products", "[]")
    store.save("products", '[{"id": "a"}]')
    store.save("movements", "[]")

    assert store.load("products") == '[{"id": "a"}]'
    assert store.keys() == ["movements", "products"]
    assert store.integrity_check() == "ok"
