"""Persistence backends for the product catalog.

A backend stores the whole catalog as one snapshot: ``save`` replaces
everything previously stored, ``load`` returns the last snapshot in its
original order. Failures surface as :class:`PersistenceFailure`.
"""
from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import closing
from typing import List, Optional, Sequence

from pos_core.db_init import connect_sqlite
from pos_core.errors import PersistenceFailure
from pos_core.models import Product

logger = logging.getLogger(__name__)


class CatalogBackend(ABC):
    @abstractmethod
    def load(self) -> List[Product]:
        """Return the stored catalog (empty when nothing was saved yet)."""

    @abstractmethod
    def save(self, products: Sequence[Product]) -> None:
        """Replace the stored catalog with ``products``."""


class SqliteCatalogBackend(CatalogBackend):
    """Catalog snapshot kept in a single SQLite file.

    Each save deletes and re-inserts every row inside one transaction, so
    a crash mid-save leaves the previous snapshot intact.
    """

    def __init__(self, path: str):
        self.path = path

    def load(self) -> List[Product]:
        try:
            with closing(connect_sqlite(self.path)) as conn:
                rows = conn.execute(
                    "SELECT id, name, quantity, price FROM products ORDER BY position"
                ).fetchall()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceFailure(f"Could not load catalog from {self.path}: {e}") from e
        return [
            Product(id=row[0], name=row[1], quantity=int(row[2]), price=float(row[3]))
            for row in rows
        ]

    def save(self, products: Sequence[Product]) -> None:
        try:
            rows = [
                (position, p.id, p.name, int(p.quantity), float(p.price))
                for position, p in enumerate(products)
            ]
            with closing(connect_sqlite(self.path)) as conn:
                with conn:
                    conn.execute("DELETE FROM products")
                    conn.executemany(
                        "INSERT INTO products (position, id, name, quantity, price) "
                        "VALUES (?, ?, ?, ?, ?)",
                        rows,
                    )
        # OverflowError: integers past SQLite's 64-bit range
        except (sqlite3.Error, OSError, OverflowError, ValueError) as e:
            raise PersistenceFailure(f"Could not save catalog to {self.path}: {e}") from e
        logger.debug("Saved %d products to %s", len(rows), self.path)


class InMemoryCatalogBackend(CatalogBackend):
    """Keeps the snapshot in memory. Used by tests and throwaway sessions."""

    def __init__(self, products: Optional[Sequence[Product]] = None):
        self._snapshot: Optional[List[tuple]] = None
        if products is not None:
            self._snapshot = [self._freeze(p) for p in products]
        self.save_count = 0
        self.fail_loads = False
        self.fail_saves = False

    @staticmethod
    def _freeze(p: Product) -> tuple:
        return (p.id, p.name, p.quantity, p.price)

    def load(self) -> List[Product]:
        if self.fail_loads:
            raise PersistenceFailure("in-memory load failure")
        if self._snapshot is None:
            raise PersistenceFailure("nothing saved yet")
        return [Product(*row) for row in self._snapshot]

    def save(self, products: Sequence[Product]) -> None:
        if self.fail_saves:
            raise PersistenceFailure("in-memory save failure")
        self._snapshot = [self._freeze(p) for p in products]
        self.save_count += 1
