# ---------- services.py ----------
"""Wiring for the catalog and bill archive, plus DataFrame views used by the pages."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import pandas as pd

from pos_core import constants
from pos_core.bills import BillArchive, bill_number
from pos_core.catalog import CatalogStore
from pos_core.models import BillLine, Product
from pos_core.storage import SqliteCatalogBackend

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = ["id", "name", "quantity", "price"]
LINE_COLUMNS = ["name", "quantity", "line_total"]
BILL_COLUMNS = ["file", "bill_no", "created"]


def open_catalog(path: Optional[str] = None) -> CatalogStore:
    """Catalog store backed by the SQLite file at ``path`` (config default)."""
    path = path or constants.CATALOG_DB_PATH
    logger.info("Opening catalog at %s", path)
    return CatalogStore(SqliteCatalogBackend(path))


def open_archive(directory: Optional[str] = None) -> BillArchive:
    return BillArchive(directory or constants.BILLS_DIR)


def products_frame(products: Iterable[Product]) -> pd.DataFrame:
    """Return products as a pandas DataFrame, in catalog order."""
    rows = [(p.id, p.name, p.quantity, p.price) for p in products]
    df = pd.DataFrame(rows, columns=PRODUCT_COLUMNS)
    df["quantity"] = df["quantity"].astype("int64")
    df["price"] = df["price"].astype("float64")
    return df


def lines_frame(lines: Iterable[BillLine]) -> pd.DataFrame:
    rows = [(line.name, line.quantity, line.line_total) for line in lines]
    return pd.DataFrame(rows, columns=LINE_COLUMNS)


def _bill_created(number: Optional[int]):
    if number is None:
        return pd.NaT
    try:
        return pd.Timestamp(number, unit="ms")
    except (pd.errors.OutOfBoundsDatetime, OverflowError, ValueError):
        return pd.NaT


def bills_frame(names: List[str]) -> pd.DataFrame:
    """Archive listing with the bill number and its timestamp when the name has one.

    Rows keep directory-listing order; sorting is left to the caller.
    """
    numbers = [bill_number(name) for name in names]
    df = pd.DataFrame({"file": names, "bill_no": pd.array(numbers, dtype="Int64")})
    df["created"] = pd.to_datetime(
        [_bill_created(n) for n in numbers],
        utc=True,
    )
    return df[BILL_COLUMNS]
