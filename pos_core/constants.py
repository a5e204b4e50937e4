# ---------- constants.py ----------
"""Project-wide constants and configuration helpers."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Local overrides live in a .env file at the project root.
env_path = Path(__file__).resolve().parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

LOW_STOCK_THRESHOLD: int = 5

BILL_SEPARATOR: str = "-" * 37
BILL_FILE_PREFIX: str = "Bill_"
BILL_FILE_SUFFIX: str = ".txt"
NO_BILLS_MESSAGE: str = "No bills found."

# Largest stock count a quantity field accepts (32-bit signed int).
MAX_QUANTITY: int = 2**31 - 1

DATA_DIR: str = os.getenv("POS_DATA_DIR", "data")
CATALOG_DB_PATH: str = os.getenv(
    "POS_CATALOG_DB", os.path.join(DATA_DIR, "inventory.db")
)
BILLS_DIR: str = os.getenv("POS_BILLS_DIR", "bills")

# Single fixed login. Override through the environment for anything but a demo.
POS_USERNAME: str = os.getenv("POS_USERNAME", "admin")
POS_PASSWORD: str = os.getenv("POS_PASSWORD", "1234")

LOG_LEVEL: str = os.getenv("POS_LOG_LEVEL", "INFO").upper()

# Sidebar menu labels (keep in sync across app and sidebar)
MENU_DASHBOARD = "\U0001F4C8 Dashboard"
MENU_NEW_SALE = "\U0001F9FE New Sale"
MENU_HISTORY = "\U0001F4DC Sales History"
MENU_ALERTS = "\U0001F6A8 Stock Alerts"
