from __future__ import annotations

import logging
from typing import Optional

from stockbook.domain.errors import ValidationError, NotFoundError
from stockbook.domain.models import Product
from stockbook.repositories.catalog_store import CatalogStore
from stockbook.services.validators import non_negative_amount, whole_number

log = logging.getLogger(__name__)

_TEXT_FIELDS = ("name", "code", "category", "supplier")
_COUNT_FIELDS = ("quantity", "min_quantity")
_PRICE_FIELDS = ("purchase_price", "sale_price")

INPUT_FIELDS = _TEXT_FIELDS + _COUNT_FIELDS + _PRICE_FIELDS


def _normalize(changes: dict) -> dict:
    unknown = set(changes) - set(INPUT_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown product fields: {', '.join(sorted(unknown))}")
    out = {}
    for key, value in changes.items():
        if key in _TEXT_FIELDS:
            out[key] = str(value or "").strip()
        elif key in _COUNT_FIELDS:
            n = whole_number(value, key)
            if n < 0:
                raise ValidationError(f"{key} must be >= 0.")
            out[key] = n
        else:
            out[key] = non_negative_amount(value, key)
    return out


class CatalogService:
    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog

    def list_products(self) -> list[Product]:
        return self.catalog.all()

    def get_product(self, product_id: str) -> Product:
        p = self.catalog.find_by_id(product_id)
        if not p:
            raise NotFoundError("Product not found.")
        return p

    def add_product(self, **data) -> Product:
        """
        data: name (required), code, category, supplier, quantity, min_quantity,
        purchase_price, sale_price. Missing optional fields default to empty/zero.
        """
        data = _normalize(data)
        if not data.get("name"):
            raise ValidationError("Name is required.")
        product = self.catalog.create(data)
        log.info("product_added product_id=%s code=%s qty=%s", product.id, product.code, product.quantity)
        return product

    def update_product(self, product_id: str, **changes) -> Optional[Product]:
        """Returns None when the id is unknown."""
        data = _normalize(changes)
        if "name" in data and not data["name"]:
            raise ValidationError("Name is required.")
        updated = self.catalog.update(product_id, data)
        if updated is None:
            log.info("product_update_skipped product_id=%s reason=not_found", product_id)
            return None
        log.info("product_updated product_id=%s fields=%s", product_id, ",".join(sorted(data)))
        return updated

    def delete_product(self, product_id: str) -> bool:
        removed = self.catalog.delete(product_id)
        if removed:
            log.info("product_deleted product_id=%s", product_id)
        return removed

    def categories(self) -> list[str]:
        seen: dict[str, None] = {}
        for p in self.catalog.all():
            if p.category:
                seen.setdefault(p.category, None)
        return list(seen)

    def search(self, text: str = "", category: str = "", low_stock_only: bool = False) -> list[Product]:
        needle = (text or "").strip().lower()
        out = []
        for p in self.catalog.all():
            if needle and needle not in p.name.lower() and needle not in p.code.lower():
                continue
            if category and p.category != category:
                continue
            if low_stock_only and not p.is_low_stock:
                continue
            out.append(p)
        return out
