"""Error kinds raised by the inventory and billing core.

Business errors are meant to be shown to the user, who can then retry;
none of them is fatal.
"""


class PosError(Exception):
    """Base class for every error raised by ``pos_core``."""


class InvalidInput(PosError, ValueError):
    """A quantity or price could not be parsed or is out of range."""


class ProductNotFound(PosError, LookupError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__("Product not found")


class InsufficientStock(PosError):
    """Requested quantity exceeds what is on hand."""

    def __init__(self, product_id: str, available: int, requested: int):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(f"Insufficient stock! Available: {available}")


class EmptySale(PosError):
    def __init__(self):
        super().__init__("No items added!")


class SaleClosed(PosError):
    """The sale was already completed or abandoned."""


class PersistenceFailure(PosError):
    """Reading or writing the catalog file or a bill failed."""


class BillNotFound(PosError, LookupError):
    pass
