class OrderError(Exception):
    """Base class for business-rule failures while placing an order."""


class InsufficientStockError(OrderError):
    """
    A cart line names a product that does not exist or asks for more units
    than are in stock. Raised for the first offending line only.
    """

    def __init__(self, message: str, product_id: int):
        super().__init__(message)
        self.product_id = product_id

    @classmethod
    def missing(cls, product_id: int):
        return cls(f"Product {product_id} not found", product_id)

    @classmethod
    def short(cls, product_id: int, product_name: str):
        return cls(f"Insufficient stock for product: {product_name}", product_id)
