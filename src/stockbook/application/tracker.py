from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from stockbook.config import TrackerSettings
from stockbook.domain.errors import (
    ContextNotInitializedError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from stockbook.domain.models import (
    REASON_INSUFFICIENT_STOCK,
    REASON_INVALID_INPUT,
    REASON_PRODUCT_NOT_FOUND,
    STATUS_IGNORED,
    STATUS_REJECTED,
    DailyTotals,
    DashboardStats,
    Movement,
    MovementResult,
    Product,
)
from stockbook.repositories.catalog_store import CatalogStore
from stockbook.repositories.codec import (
    movements_from_json,
    movements_to_json,
    products_from_json,
    products_to_json,
)
from stockbook.repositories.contracts import KeyValueStore, NotificationSink
from stockbook.repositories.ids import new_id, now_iso
from stockbook.repositories.movement_ledger import MovementLedger
from stockbook.services.catalog_service import CatalogService
from stockbook.services.export_service import ExportService
from stockbook.services.movement_service import MovementService
from stockbook.services.notification_service import LEVEL_ERROR, LEVEL_INFO
from stockbook.services.reporting_service import ReportingService

log = logging.getLogger(__name__)


class InventoryTracker:
    """Single-writer inventory session.

    Owns the catalog and the movement ledger for one user session. State is read
    from ``store`` by :meth:`open` and written back after every mutation; a failed
    write is logged and the in-memory state stays authoritative. Every public
    operation raises ContextNotInitializedError until the tracker has been opened.
    """

    def __init__(
        self,
        store: KeyValueStore,
        notifier: NotificationSink,
        exports_dir: Path | str,
        settings: TrackerSettings | None = None,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], str] = now_iso,
    ):
        self.store = store
        self.notifier = notifier
        self.settings = settings or TrackerSettings()
        self.exporter = ExportService(exports_dir)
        self._id_factory = id_factory
        self._clock = clock

        self._catalog: CatalogStore | None = None
        self._ledger: MovementLedger | None = None
        self._products: CatalogService | None = None
        self._movements: MovementService | None = None
        self._reporting: ReportingService | None = None

    # ---------- Session ----------
    def open(self) -> "InventoryTracker":
        products = products_from_json(self.store.load(self.settings.products_key))
        movements = movements_from_json(self.store.load(self.settings.movements_key))

        self._catalog = CatalogStore(products, id_factory=self._id_factory, clock=self._clock)
        self._ledger = MovementLedger(movements)
        self._products = CatalogService(self._catalog)
        self._movements = MovementService(self._catalog, self._ledger, id_factory=self._id_factory, clock=self._clock)
        self._reporting = ReportingService(self._catalog, self._ledger)
        log.info("tracker_opened products=%s movements=%s", len(products), len(movements))
        return self

    def close(self) -> None:
        self._catalog = None
        self._ledger = None
        self._products = None
        self._movements = None
        self._reporting = None

    def __enter__(self) -> "InventoryTracker":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._catalog is not None

    def _require_open(self) -> None:
        if self._catalog is None:
            raise ContextNotInitializedError("InventoryTracker must be opened before use.")

    def _persist(self, products: bool = False, movements: bool = False) -> None:
        pending = []
        if products:
            pending.append((self.settings.products_key, products_to_json(self._catalog.all())))
        if movements:
            pending.append((self.settings.movements_key, movements_to_json(self._ledger.all())))
        for key, payload in pending:
            try:
                self.store.save(key, payload)
            except Exception:
                log.exception("persist_failed key=%s", key)

    # ---------- Snapshots ----------
    @property
    def products(self) -> list[Product]:
        self._require_open()
        return self._catalog.all()

    @property
    def movements(self) -> list[Movement]:
        self._require_open()
        return self._ledger.all()

    @property
    def catalog(self) -> CatalogService:
        self._require_open()
        return self._products

    @property
    def reporting(self) -> ReportingService:
        self._require_open()
        return self._reporting

    def resolve_product(self, product_id: str) -> Product:
        self._require_open()
        return self._reporting.resolve_product(product_id)

    # ---------- Products ----------
    def add_product(self, **data) -> Product:
        self._require_open()
        product = self._products.add_product(**data)
        self._persist(products=True)
        self.notifier.notify(LEVEL_INFO, "Product added successfully.")
        return product

    def update_product(self, product_id: str, **changes) -> None:
        self._require_open()
        if self._products.update_product(product_id, **changes) is None:
            return
        self._persist(products=True)
        self.notifier.notify(LEVEL_INFO, "Product updated successfully.")

    def delete_product(self, product_id: str) -> None:
        self._require_open()
        if not self._products.delete_product(product_id):
            return
        self._persist(products=True)
        self.notifier.notify(LEVEL_INFO, "Product removed successfully.")

    # ---------- Movements ----------
    def record_movement(
        self,
        product_id: str,
        movement_type: str,
        quantity: int,
        unit_price: Optional[float] = None,
        description: str = "",
    ) -> MovementResult:
        self._require_open()
        try:
            result = self._movements.record_movement(product_id, movement_type, quantity, unit_price, description)
        except NotFoundError:
            log.warning("movement_ignored product_id=%s reason=product_not_found", product_id)
            return MovementResult(status=STATUS_IGNORED, reason=REASON_PRODUCT_NOT_FOUND)
        except InsufficientStockError:
            self.notifier.notify(LEVEL_ERROR, "Insufficient stock quantity!")
            return MovementResult(status=STATUS_REJECTED, reason=REASON_INSUFFICIENT_STOCK)
        except ValidationError as e:
            self.notifier.notify(LEVEL_ERROR, str(e))
            return MovementResult(status=STATUS_REJECTED, reason=REASON_INVALID_INPUT)

        self._persist(products=True, movements=True)
        if result.low_stock:
            name = self._reporting.resolve_product(product_id).name
            self.notifier.notify(LEVEL_ERROR, f"Alert: low stock for {name}!")
        return result

    # ---------- Read side ----------
    def get_dashboard_stats(self) -> DashboardStats:
        self._require_open()
        return self._reporting.dashboard_stats(self.settings.recent_movements_limit)

    def daily_totals(self, days: int | None = None, today: date | None = None) -> list[DailyTotals]:
        self._require_open()
        return self._reporting.daily_totals(self.settings.trend_days if days is None else days, today)

    def critical_stock(self) -> list[Product]:
        self._require_open()
        return self._reporting.critical_stock(self.settings.critical_stock_limit)

    # ---------- Exports ----------
    def export_products_csv(self, filename: str = "products", directory: Path | str | None = None) -> Path:
        self._require_open()
        return self.exporter.export_products_csv(self._catalog.all(), filename, directory)

    def export_report(self, path: Path | str, today: date | None = None) -> Path:
        self._require_open()
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._reporting.export_dashboard_excel(
            str(target),
            recent_limit=self.settings.recent_movements_limit,
            days=self.settings.trend_days,
            today=today,
        )
        log.info("report_exported path=%s", target)
        return target
