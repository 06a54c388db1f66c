import json
import logging
from pathlib import Path
import pandas as pd
from pydantic import ValidationError

from . import settings
from .schemas import Snapshot
from .utils import load_csv, parse_month_period

logger = logging.getLogger(__name__)


def _normalize_snapshot_rows(df: pd.DataFrame, source_name: str) -> list[dict] | None:
    """
    Renames the export headers to row fields and cleans the values:
    - rows without a product id are dropped,
    - missing names become "",
    - non-numeric stock is treated as 0.
    """
    missing = [col for col in settings.SNAPSHOT_COLUMN_MAP if col not in df.columns]
    # The name column is optional; id and stock are not.
    required_missing = [
        col for col in missing if settings.SNAPSHOT_COLUMN_MAP[col] != "productName"
    ]
    if required_missing:
        logger.error(
            f"  > ERROR: {source_name} is missing required columns: {', '.join(required_missing)}"
        )
        return None

    temp_df = df.rename(columns=settings.SNAPSHOT_COLUMN_MAP)
    if "productName" not in temp_df.columns:
        temp_df["productName"] = ""
    temp_df = temp_df[["productId", "productName", "stockStatus"]].copy()

    temp_df["productId"] = temp_df["productId"].fillna("").astype(str).str.strip()
    blank_ids = temp_df["productId"] == ""
    if blank_ids.any():
        logger.warning(
            f"  > ⚠️  {source_name}: dropping {int(blank_ids.sum())} rows without a product id."
        )
        temp_df = temp_df[~blank_ids]

    temp_df["productName"] = temp_df["productName"].fillna("").astype(str).str.strip()
    temp_df["stockStatus"] = pd.to_numeric(
        temp_df["stockStatus"], errors="coerce"
    ).fillna(0)

    return [
        {
            "productId": str(row["productId"]),
            "productName": row["productName"],
            "stockStatus": float(row["stockStatus"]),
        }
        for row in temp_df.to_dict("records")
    ]


def parse_snapshot_report(file_path: Path, month_id: str) -> Snapshot | None:
    """Loads one monthly CSV export into a Snapshot."""
    df = load_csv(file_path)
    if df is None:
        return None

    rows = _normalize_snapshot_rows(df, file_path.name)
    if rows is None:
        return None

    try:
        snapshot = Snapshot(
            name=month_id, period=parse_month_period(month_id), rows=rows
        )
    except ValidationError as e:
        logger.error(f"❌ Snapshot validation failed for {file_path.name}!")
        logger.error(e)
        return None

    logger.info(f"✅ Parsed {file_path.name} successfully ({len(rows)} rows).")
    return snapshot


def parse_snapshot_export(file_path: Path) -> list[Snapshot] | None:
    """
    Loads a JSON dump of the order store: a list of records with `name`, `rows` and
    an optional `period`. Store-side summary fields are ignored.
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            records = json.load(f)
    except FileNotFoundError:
        logger.error(f"ERROR: Snapshot export not found at {file_path}.")
        return None
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"ERROR: Could not read {file_path.name}. Reason: {e}")
        return None

    if not isinstance(records, list):
        logger.error(f"ERROR: {file_path.name} does not hold a list of snapshots.")
        return None

    snapshots = []
    try:
        for record in records:
            snapshot = Snapshot.model_validate(record)
            if snapshot.period is None:
                snapshot = snapshot.model_copy(
                    update={"period": parse_month_period(snapshot.name)}
                )
            snapshots.append(snapshot)
    except ValidationError as e:
        logger.error(f"❌ Snapshot validation failed for {file_path.name}!")
        logger.error(e)
        return None

    logger.info(f"✅ Parsed {file_path.name} successfully ({len(snapshots)} snapshots).")
    return snapshots
