"""Bill archive: one plain-text file per completed sale.

The file layout is what other tools read, so it is kept byte for byte::

    Bill No: 1700000000000
    -------------------------------------
    Widget  Qty:3  Price:7.5
    -------------------------------------
    Total: 7.5
"""
from __future__ import annotations

import logging
import math
import os
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, List, Optional

from pos_core.constants import (
    BILL_FILE_PREFIX,
    BILL_FILE_SUFFIX,
    BILL_SEPARATOR,
    NO_BILLS_MESSAGE,
)
from pos_core.errors import BillNotFound, PersistenceFailure
from pos_core.models import BillLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillReceipt:
    number: int
    path: str


def now_millis() -> int:
    return time.time_ns() // 1_000_000


def format_amount(value: float) -> str:
    """Render a price the way bills have always shown it.

    Plain decimals between 1e-3 and 1e7 (``7.5``, ``10.0``), scientific
    notation with a capital E outside that range (``1.0E7``).
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0 or 1e-3 <= abs(value) < 1e7:
        return repr(value)
    d = Decimal(repr(value)).normalize()
    sign, digits, _ = d.as_tuple()
    mantissa = f"{digits[0]}." + ("".join(str(x) for x in digits[1:]) or "0")
    return f"{'-' if sign else ''}{mantissa}E{d.adjusted()}"


def format_bill(number: int, lines: Iterable[BillLine], total: float) -> str:
    out = [f"Bill No: {number}", BILL_SEPARATOR]
    for line in lines:
        out.append(
            f"{line.name}  Qty:{line.quantity}  Price:{format_amount(line.line_total)}"
        )
    out.append(BILL_SEPARATOR)
    out.append(f"Total: {format_amount(total)}")
    return "\n".join(out) + "\n"


def bill_file_name(number: int) -> str:
    return f"{BILL_FILE_PREFIX}{number}{BILL_FILE_SUFFIX}"


def bill_number(file_name: str) -> Optional[int]:
    """Bill number encoded in an archive file name, if it has one."""
    if not (file_name.startswith(BILL_FILE_PREFIX) and file_name.endswith(BILL_FILE_SUFFIX)):
        return None
    stem = file_name[len(BILL_FILE_PREFIX):-len(BILL_FILE_SUFFIX)]
    # ASCII digits only: str.isdigit also accepts superscripts like "²"
    if not (stem.isascii() and stem.isdigit()):
        return None
    number = int(stem)
    return number if number < 2**63 else None


def format_bill_listing(names: List[str]) -> str:
    if not names:
        return NO_BILLS_MESSAGE
    return "".join(f"Bill: {name}\n" for name in names)


class BillArchive:
    """Directory of bill files named after the millisecond they were written."""

    def __init__(self, directory: str, clock: Callable[[], int] = now_millis):
        self.directory = directory
        self.clock = clock

    def write_bill(self, lines: Iterable[BillLine], total: float) -> BillReceipt:
        """Write one new bill and return its number and path.

        If a bill with the same millisecond already exists the number is
        bumped until a free one is found, so no bill is ever overwritten.
        """
        lines = list(lines)
        number = self.clock()
        try:
            os.makedirs(self.directory, exist_ok=True)
            while True:
                path = os.path.join(self.directory, bill_file_name(number))
                try:
                    with open(path, "x", encoding="utf-8", newline="\n") as f:
                        f.write(format_bill(number, lines, total))
                except FileExistsError:
                    number += 1
                    continue
                break
        except OSError as e:
            raise PersistenceFailure(f"Could not write bill to {self.directory}: {e}") from e
        logger.info("Saved bill %s with %d line(s), total %s", number, len(lines), total)
        return BillReceipt(number=number, path=path)

    def list_bills(self) -> List[str]:
        """Names of all archive entries in directory-listing order.

        Empty when the directory does not exist yet or holds nothing.
        """
        try:
            return os.listdir(self.directory)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise PersistenceFailure(f"Could not list bills in {self.directory}: {e}") from e

    def read_bill(self, name: str) -> str:
        if os.path.basename(name) != name or name in ("", ".", ".."):
            raise BillNotFound(name)
        path = os.path.join(self.directory, name)
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except (FileNotFoundError, IsADirectoryError):
            raise BillNotFound(name) from None
        except OSError as e:
            raise PersistenceFailure(f"Could not read bill {name}: {e}") from e
