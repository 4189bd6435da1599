from __future__ import annotations

import logging
from typing import Callable, Optional

from stockbook.domain.errors import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from stockbook.domain.models import (
    MOVEMENT_IN,
    MOVEMENT_TYPES,
    STATUS_APPLIED,
    Movement,
    MovementResult,
)
from stockbook.repositories.catalog_store import CatalogStore
from stockbook.repositories.ids import new_id, now_iso
from stockbook.repositories.movement_ledger import MovementLedger
from stockbook.services.validators import non_negative_amount, whole_number

log = logging.getLogger("stockbook.ledger")


class MovementService:
    def __init__(
        self,
        catalog: CatalogStore,
        ledger: MovementLedger,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], str] = now_iso,
    ):
        self.catalog = catalog
        self.ledger = ledger
        self._new_id = id_factory
        self._now = clock

    def record_movement(
        self,
        product_id: str,
        movement_type: str,
        quantity: int,
        unit_price: Optional[float] = None,
        description: str = "",
    ) -> MovementResult:
        """
        Applies an IN/OUT movement to the product's on-hand quantity and appends it
        to the ledger.

        The product is checked before anything is written: a movement that would
        leave the quantity below zero raises InsufficientStockError and leaves both
        the catalog and the ledger untouched. When the movement is applied, the
        result's ``low_stock`` flag is set if the new quantity is at or below the
        product's ``min_quantity``.

        unit_price defaults to the product's purchase price for IN and its sale
        price for OUT.
        """
        movement_type = str(movement_type or "").strip().upper()
        if movement_type not in MOVEMENT_TYPES:
            raise ValidationError("Movement type must be IN or OUT.")
        qty = whole_number(quantity, "Qty")
        if qty <= 0:
            raise ValidationError("Qty must be >= 1.")

        product = self.catalog.find_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found.")

        if unit_price is None:
            unit_price = product.purchase_price if movement_type == MOVEMENT_IN else product.sale_price
        price = non_negative_amount(unit_price, "Unit price")

        if movement_type == MOVEMENT_IN:
            new_qty = product.quantity + qty
        else:
            new_qty = product.quantity - qty

        if new_qty < 0:
            log.info(
                "movement_rejected product_id=%s type=%s qty=%s available=%s",
                product.id, movement_type, qty, product.quantity,
            )
            raise InsufficientStockError(product.id, product.name, available=product.quantity, requested=qty)

        self.catalog.update(product.id, {"quantity": new_qty})
        movement = Movement(
            id=self._new_id(),
            product_id=product.id,
            type=movement_type,
            quantity=qty,
            unit_price=price,
            total=qty * price,
            date=self._now(),
            description=(description or "").strip(),
        )
        self.ledger.append(movement)

        low = new_qty <= product.min_quantity
        log.info(
            "movement_recorded movement_id=%s product_id=%s type=%s qty=%s total=%.2f stock_after=%s low=%s",
            movement.id, product.id, movement_type, qty, movement.total, new_qty, low,
        )
        return MovementResult(status=STATUS_APPLIED, movement=movement, low_stock=low)
