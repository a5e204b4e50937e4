"""A single sale in progress: line items, running total, and the bill it ends with."""
from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional, Union

from pos_core.bills import BillArchive, BillReceipt
from pos_core.catalog import CatalogStore
from pos_core.constants import LOW_STOCK_THRESHOLD
from pos_core.errors import (
    EmptySale,
    InsufficientStock,
    ProductNotFound,
    SaleClosed,
)
from pos_core.models import BillLine, Product, parse_quantity

logger = logging.getLogger(__name__)


class SaleState(enum.Enum):
    OPEN = "open"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class BillingSession:
    """Working state of one sale.

    Stock is taken off the catalog (and saved) as each item is added, so
    abandoning the sale does not put it back. Nothing about the sale itself
    is stored until ``complete`` writes the bill.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        archive: BillArchive,
        on_low_stock: Optional[Callable[[Product], None]] = None,
    ):
        self.catalog = catalog
        self.archive = archive
        self.on_low_stock = on_low_stock
        self.lines: List[BillLine] = []
        self.total: float = 0.0
        self.state = SaleState.OPEN

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def _ensure_open(self) -> None:
        if self.state is not SaleState.OPEN:
            raise SaleClosed(f"Sale already {self.state.value}")

    def add_item(self, product_id: str, qty: Union[str, int]) -> BillLine:
        """Sell ``qty`` units of ``product_id`` as the next line of the bill.

        Raises InvalidInput, ProductNotFound or InsufficientStock; on any of
        them the catalog and the running total are left as they were.
        """
        self._ensure_open()
        qty = parse_quantity(qty, positive=True)
        product_id = str(product_id).strip()

        product = self.catalog.find(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        if qty > product.quantity:
            raise InsufficientStock(product_id, available=product.quantity, requested=qty)

        if not self.catalog.reduce_stock(product_id, qty):
            raise InsufficientStock(product_id, available=product.quantity, requested=qty)

        line = BillLine(name=product.name, quantity=qty, line_total=qty * product.price)
        self.lines.append(line)
        self.total += line.line_total

        if product.quantity < LOW_STOCK_THRESHOLD:
            logger.warning(
                "Low stock for %s: only %d left", product.name, product.quantity
            )
            if self.on_low_stock is not None:
                self.on_low_stock(product)
        return line

    def complete(self) -> BillReceipt:
        """Write the bill and close the sale.

        If the bill cannot be written the sale stays open with its lines,
        so the caller can try again.
        """
        self._ensure_open()
        if self.is_empty:
            raise EmptySale()
        receipt = self.archive.write_bill(self.lines, self.total)
        self.lines = []
        self.total = 0.0
        self.state = SaleState.COMPLETED
        return receipt

    def abandon(self) -> None:
        self._ensure_open()
        if self.lines:
            logger.info("Sale abandoned with %d line(s) already taken from stock", len(self.lines))
        self.lines = []
        self.total = 0.0
        self.state = SaleState.ABANDONED
