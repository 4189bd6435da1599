from .models import (
    DashboardStats,
    DailyTotals,
    Movement,
    MovementResult,
    Product,
    UNKNOWN_PRODUCT,
    MOVEMENT_IN,
    MOVEMENT_OUT,
)
from .errors import (
    ValidationError,
    NotFoundError,
    InsufficientStockError,
    StorageError,
    ContextNotInitializedError,
)

__all__ = [
    "DashboardStats",
    "DailyTotals",
    "Movement",
    "MovementResult",
    "Product",
    "UNKNOWN_PRODUCT",
    "MOVEMENT_IN",
    "MOVEMENT_OUT",
    "ValidationError",
    "NotFoundError",
    "InsufficientStockError",
    "StorageError",
    "ContextNotInitializedError",
]
