from __future__ import annotations

import json
from dataclasses import asdict, fields
from typing import Iterable, Optional

from stockbook.domain.errors import StorageError
from stockbook.domain.models import Movement, Product

PRODUCT_FIELDS = tuple(f.name for f in fields(Product))
MOVEMENT_FIELDS = tuple(f.name for f in fields(Movement))


def _dump(records: Iterable) -> str:
    return json.dumps([asdict(r) for r in records], ensure_ascii=False)


def _load_rows(raw: Optional[str], what: str) -> list[dict]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise StorageError(f"Stored {what} are not valid JSON: {e}") from e
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise StorageError(f"Stored {what} must be a list of objects.")
    return data


def products_to_json(products: Iterable[Product]) -> str:
    return _dump(products)


def products_from_json(raw: Optional[str]) -> list[Product]:
    out = []
    for r in _load_rows(raw, "products"):
        try:
            out.append(
                Product(
                    id=str(r["id"]),
                    name=str(r.get("name", "")),
                    code=str(r.get("code", "")),
                    category=str(r.get("category", "")),
                    supplier=str(r.get("supplier", "")),
                    quantity=int(r["quantity"]),
                    min_quantity=int(r.get("min_quantity", 0)),
                    purchase_price=float(r.get("purchase_price", 0.0)),
                    sale_price=float(r.get("sale_price", 0.0)),
                    created_at=str(r.get("created_at", "")),
                    updated_at=str(r.get("updated_at", "")),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed product record: {r!r}") from e
    return out


def movements_to_json(movements: Iterable[Movement]) -> str:
    return _dump(movements)


def movements_from_json(raw: Optional[str]) -> list[Movement]:
    out = []
    for r in _load_rows(raw, "movements"):
        try:
            out.append(
                Movement(
                    id=str(r["id"]),
                    product_id=str(r["product_id"]),
                    type=str(r["type"]),
                    quantity=int(r["quantity"]),
                    unit_price=float(r["unit_price"]),
                    total=float(r["total"]),
                    date=str(r["date"]),
                    description=str(r.get("description") or ""),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed movement record: {r!r}") from e
    return out
