from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

MOVEMENT_IN = "IN"
MOVEMENT_OUT = "OUT"
MOVEMENT_TYPES = (MOVEMENT_IN, MOVEMENT_OUT)

STATUS_APPLIED = "applied"
STATUS_REJECTED = "rejected"
STATUS_IGNORED = "ignored"

REASON_INSUFFICIENT_STOCK = "insufficient_stock"
REASON_INVALID_INPUT = "invalid_input"
REASON_PRODUCT_NOT_FOUND = "product_not_found"


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    code: str
    category: str
    supplier: str
    quantity: int
    min_quantity: int
    purchase_price: float
    sale_price: float
    created_at: str
    updated_at: str

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_quantity


# Stand-in for movements whose product was deleted.
UNKNOWN_PRODUCT = Product(
    id="",
    name="Unknown product",
    code="",
    category="",
    supplier="",
    quantity=0,
    min_quantity=0,
    purchase_price=0.0,
    sale_price=0.0,
    created_at="",
    updated_at="",
)


@dataclass(frozen=True)
class Movement:
    id: str
    product_id: str
    type: str
    quantity: int
    unit_price: float
    total: float
    date: str
    description: str = ""


@dataclass(frozen=True)
class MovementResult:
    status: str
    reason: Optional[str] = None
    movement: Optional[Movement] = None
    low_stock: bool = False

    @property
    def applied(self) -> bool:
        return self.status == STATUS_APPLIED


@dataclass(frozen=True)
class DailyTotals:
    day: str
    sales: float
    purchases: float
    profit: float


@dataclass(frozen=True)
class DashboardStats:
    total_products: int
    low_stock_products: int
    total_quantity: int
    total_purchases: float
    total_sales: float
    profit: float
    recent_movements: tuple[Movement, ...] = field(default_factory=tuple)
