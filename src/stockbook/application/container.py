from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from stockbook.application.tracker import InventoryTracker
from stockbook.config import TrackerSettings, get_app_paths
from stockbook.logging_config import setup_logging
from stockbook.repositories.contracts import NotificationSink
from stockbook.repositories.sqlite_store import SqliteKeyValueStore
from stockbook.services.notification_service import LoggingNotifier


@dataclass(frozen=True)
class AppContainer:
    store: SqliteKeyValueStore
    notifier: NotificationSink
    tracker: InventoryTracker


def build_container(
    db_path: Path | str,
    notifier: NotificationSink | None = None,
    settings: TrackerSettings | None = None,
) -> AppContainer:
    store = SqliteKeyValueStore(db_path)
    store.init_db()

    notifier = notifier or LoggingNotifier()
    tracker = InventoryTracker(
        store,
        notifier,
        exports_dir=Path(db_path).parent / "exports",
        settings=settings,
    )
    tracker.open()

    return AppContainer(store=store, notifier=notifier, tracker=tracker)


def open_default_tracker(notifier: NotificationSink | None = None, base_dir: Path | str | None = None) -> InventoryTracker:
    paths = get_app_paths(base_dir=base_dir)
    setup_logging(paths.logs_dir, level=logging.INFO)
    return build_container(paths.db_path, notifier=notifier).tracker
