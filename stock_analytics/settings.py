import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# --- Path Configuration ---
# Use Path objects for robust, OS-agnostic path handling.
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")

# --- Snapshot Source ---
# "csv": one export per month, "json": a single dump of the order store.
SNAPSHOT_SOURCE = os.getenv("SNAPSHOT_SOURCE", "csv").lower()
SNAPSHOT_FILENAME_PREFIX = os.getenv("SNAPSHOT_FILENAME_PREFIX", "stock_snapshot_")
SNAPSHOT_JSON_FILENAME = os.getenv("SNAPSHOT_JSON_FILENAME", "orders.json")
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME_BASE", "stock_analytics")

# --- Output Toggles ---
SAVE_JSON_OUTPUT = _env_flag("SAVE_JSON_OUTPUT")

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Shared Business Logic ---
# Product names normally come from the first month only. Turn this on to fall back
# to the first non-empty name found in any later month.
NAME_FROM_ANY_MONTH = _env_flag("NAME_FROM_ANY_MONTH")

# Snapshot CSV headers -> row fields.
SNAPSHOT_COLUMN_MAP = {
    "Product ID": "productId",
    "Product Name": "productName",
    "Stock Status": "stockStatus",
}

AVAILABLE = "Available"
OUT_OF_STOCK = "Out of Stock"
