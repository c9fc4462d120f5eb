class InventoryError(Exception):
    """Base error; `status_code` is the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProductNotFound(InventoryError):
    status_code = 404

    def __init__(self, product_id: int):
        super().__init__("Product not found")
        self.product_id = product_id


class InvalidPayload(InventoryError):
    status_code = 400


class InsufficientStock(InventoryError):
    status_code = 409

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__("Not enough stock")
        self.product_id = product_id
        self.requested = requested
        self.available = available


class StoreCorrupted(InventoryError):
    status_code = 500
