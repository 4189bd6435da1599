from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Mapping, Optional

from stockbook.domain.errors import ValidationError
from stockbook.domain.models import Product
from stockbook.repositories.ids import new_id, now_iso

_MANAGED = ("id", "created_at", "updated_at")
_DEFAULTS = {
    "name": "",
    "code": "",
    "category": "",
    "supplier": "",
    "quantity": 0,
    "min_quantity": 0,
    "purchase_price": 0.0,
    "sale_price": 0.0,
}


class CatalogStore:
    """Authoritative in-memory set of products, kept in insertion order."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], str] = now_iso,
    ):
        self._items: dict[str, Product] = {p.id: p for p in products}
        self._new_id = id_factory
        self._now = clock

    def __len__(self) -> int:
        return len(self._items)

    def all(self) -> list[Product]:
        return list(self._items.values())

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return self._items.get(product_id)

    def create(self, data: Mapping[str, object]) -> Product:
        unknown = set(data) - set(_DEFAULTS)
        if unknown:
            raise ValidationError(f"Unknown product fields: {', '.join(sorted(unknown))}")

        pid = self._new_id()
        while pid in self._items:
            pid = self._new_id()

        ts = self._now()
        values = {**_DEFAULTS, **data}
        product = Product(id=pid, created_at=ts, updated_at=ts, **values)
        self._items[pid] = product
        return product

    def update(self, product_id: str, partial: Mapping[str, object]) -> Optional[Product]:
        blocked = set(partial) & set(_MANAGED)
        if blocked:
            raise ValidationError(f"Fields cannot be changed: {', '.join(sorted(blocked))}")
        unknown = set(partial) - set(_DEFAULTS)
        if unknown:
            raise ValidationError(f"Unknown product fields: {', '.join(sorted(unknown))}")

        current = self._items.get(product_id)
        if current is None:
            return None
        updated = replace(current, **partial, updated_at=self._now())
        self._items[product_id] = updated
        return updated

    def delete(self, product_id: str) -> bool:
        return self._items.pop(product_id, None) is not None
