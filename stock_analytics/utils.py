import logging
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Optional
import pandas as pd

logger = logging.getLogger(__name__)

MONTH_FORMATS = ("%Y-%m", "%Y-%m-%d")


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def parse_month_period(month_id: str) -> Optional[date]:
    """
    Turns a month identifier like '2024-03' (or a full ISO date) into the first day of
    that month. Returns None for identifiers that carry no recognizable date.
    """
    for fmt in MONTH_FORMATS:
        try:
            return datetime.strptime(str(month_id).strip(), fmt).date().replace(day=1)
        except ValueError:
            continue
    return None


def round_half_up(value: float, places: int = 2) -> float:
    """
    Rounds ties away from zero on the float's exact binary value, so 1.125 becomes
    1.13 where round() would give 1.12.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def find_snapshot_reports(input_dir: Path, prefix: str) -> list[tuple[Path, str]]:
    """
    Finds every '<prefix><month>.csv' file in input_dir.
    Returns (path, month identifier) pairs, ordered by filename.
    """
    month_pattern = re.compile(rf"^{re.escape(prefix)}(.+)\.csv$", re.IGNORECASE)

    reports = []
    for path in sorted(input_dir.glob("*.csv")):
        match = month_pattern.match(path.name)
        if match:
            reports.append((path, match.group(1)))
    return reports


def load_csv(file_path: Path) -> pd.DataFrame | None:
    """
    A more robust CSV loader with a multi-stage encoding fallback.
    It will attempt to read a file in the following order:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1 - A permissive fallback that never fails but might misinterpret characters.
    All columns are read as strings; callers convert what they need.
    """
    try:
        return pd.read_csv(file_path, encoding="utf-8-sig", dtype=str)

    except UnicodeDecodeError:
        # This block only runs if the first attempt failed specifically due to encoding.
        logger.info(
            f"INFO: UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return pd.read_csv(file_path, encoding="latin-1", dtype=str)
        except Exception as e_latin1:
            logger.error(
                f"ERROR: Could not read {file_path.name} even with latin-1. Reason: {e_latin1}"
            )
            return None

    except FileNotFoundError:
        logger.info(f"INFO: Report not found at {file_path}, skipping.")
        return None

    except Exception as e_general:
        logger.error(
            f"ERROR: An unexpected error occurred while reading {file_path.name}. Reason: {e_general}"
        )
        return None
