"""In-memory product catalog persisted after every mutation."""
from __future__ import annotations

import logging
from typing import List, Optional

from pos_core.constants import LOW_STOCK_THRESHOLD, MAX_QUANTITY
from pos_core.errors import InvalidInput, PersistenceFailure
from pos_core.models import Product
from pos_core.storage import CatalogBackend

logger = logging.getLogger(__name__)


class CatalogStore:
    """Owns the list of products and writes the full list to its backend
    after each change.

    Lookups scan the list and resolve to the first matching id; duplicate
    ids are accepted on ``add``.

    A failed save is logged and kept on ``last_error``; the in-memory change
    is not undone, so memory and disk can diverge until the next good save.
    """

    def __init__(self, backend: CatalogBackend):
        self.backend = backend
        self.products: List[Product] = []
        self.last_error: Optional[PersistenceFailure] = None
        self.load()

    def load(self) -> None:
        """Replace the in-memory catalog with the stored one.

        Falls back to an empty catalog when the backend cannot be read
        (missing file, first run, corrupt data).
        """
        try:
            self.products = self.backend.load()
        except PersistenceFailure as e:
            logger.info("Starting with an empty catalog: %s", e)
            self.products = []

    def _save(self) -> None:
        try:
            self.backend.save(self.products)
        except PersistenceFailure as e:
            logger.exception("Catalog save failed; in-memory changes kept")
            self.last_error = e
        else:
            self.last_error = None

    def add(self, product: Product) -> None:
        if product.quantity < 0:
            raise InvalidInput("Quantity cannot be negative")
        if product.quantity > MAX_QUANTITY:
            raise InvalidInput("Quantity is too large")
        if product.price < 0:
            raise InvalidInput("Price cannot be negative")
        self.products.append(product)
        logger.info("Added product %s (%s)", product.id, product.name)
        self._save()

    def delete(self, product_id: str) -> int:
        """Remove every product with ``product_id``. Returns how many went."""
        before = len(self.products)
        self.products[:] = [p for p in self.products if p.id != product_id]
        removed = before - len(self.products)
        if removed:
            logger.info("Deleted %d product(s) with id %s", removed, product_id)
        self._save()
        return removed

    def update_quantity(self, product_id: str, qty: int) -> bool:
        """Set the stock of the first matching product to ``qty``."""
        if qty < 0:
            raise InvalidInput("Quantity cannot be negative")
        if qty > MAX_QUANTITY:
            raise InvalidInput("Quantity is too large")
        product = self.find(product_id)
        if product is not None:
            product.quantity = qty
            logger.info("Set quantity of %s to %d", product_id, qty)
        self._save()
        return product is not None

    def reduce_stock(self, product_id: str, qty: int) -> bool:
        """Take ``qty`` units off the first matching product.

        Nothing changes (and nothing is saved) when the product is unknown
        or has fewer than ``qty`` units.
        """
        product = self.find(product_id)
        if product is None or product.quantity < qty:
            return False
        product.quantity -= qty
        self._save()
        return True

    def get_all(self) -> List[Product]:
        return self.products

    def find(self, product_id: str) -> Optional[Product]:
        for p in self.products:
            if p.id == product_id:
                return p
        return None

    def low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> List[Product]:
        return [p for p in self.products if p.quantity < threshold]
