class AppError(Exception):
    """Base app error."""


class ValidationError(AppError):
    pass


class NotFoundError(AppError):
    pass


class InsufficientStockError(AppError):
    def __init__(self, product_id: str, product_name: str, available: int, requested: int):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(f"Not enough stock for {product_name}. Available: {available}, requested: {requested}")


class StorageError(AppError):
    """Stored products or movements could not be decoded."""


class ContextNotInitializedError(AppError):
    """Raised when the tracker is used before it has been opened."""
