"""Plain data types shared by the catalog, the sale session and the bills."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from pos_core.constants import MAX_QUANTITY
from pos_core.errors import InvalidInput

_QUANTITY_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class Product:
    """A catalog entry. Mutated in place by quantity updates and sales."""

    id: str
    name: str
    quantity: int
    price: float

    def __str__(self) -> str:
        return f"{self.id} - {self.name}"


@dataclass(frozen=True)
class BillLine:
    """One row of a bill: what was sold, how many, and for how much."""

    name: str
    quantity: int
    line_total: float


def parse_quantity(value: Union[str, int], *, positive: bool = False) -> int:
    """Parse a whole-unit quantity typed by the user.

    Raises InvalidInput for text that is not an integer, for negative values,
    and for zero when ``positive`` is set.
    """
    if isinstance(value, bool):
        raise InvalidInput("Enter valid quantity")
    text = str(value).strip()
    # optional sign and digits only; int() alone would also take "1_000"
    if not _QUANTITY_RE.fullmatch(text):
        raise InvalidInput("Enter valid quantity")
    qty = int(text)
    if qty < 0 or qty > MAX_QUANTITY or (positive and qty == 0):
        raise InvalidInput("Enter valid quantity")
    return qty


def parse_price(value: Union[str, float]) -> float:
    """Parse a non-negative unit price."""
    try:
        price = float(str(value).strip())
    except ValueError:
        raise InvalidInput("Invalid Quantity/Price") from None
    # NaN fails every comparison, so test the valid range instead
    if not price >= 0:
        raise InvalidInput("Invalid Quantity/Price")
    return price


def product_from_input(product_id: str, name: str, quantity, price) -> Product:
    """Build a Product from raw form fields."""
    try:
        qty = parse_quantity(quantity)
    except InvalidInput:
        raise InvalidInput("Invalid Quantity/Price") from None
    return Product(
        id=str(product_id).strip(),
        name=str(name).strip(),
        quantity=qty,
        price=parse_price(price),
    )
