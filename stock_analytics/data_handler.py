import logging
import pandas as pd
import requests
from pathlib import Path
from typing import Any, Optional

from . import parsers, settings, utils
from .exceptions import DataAccessFailure
from .schemas import ProductAnalytics, Snapshot

logger = logging.getLogger(__name__)


def fetch_snapshots(source: Optional[str] = None) -> list[Snapshot]:
    """
    Reads every monthly snapshot from the configured source.
    Raises DataAccessFailure when the source is missing or any record set is malformed.
    """
    source = (source or settings.SNAPSHOT_SOURCE).lower()

    if not settings.INPUT_DIR.is_dir():
        raise DataAccessFailure(f"Input directory not found: {settings.INPUT_DIR}")

    if source == "json":
        export_path = settings.INPUT_DIR / settings.SNAPSHOT_JSON_FILENAME
        snapshots = parsers.parse_snapshot_export(export_path)
        if snapshots is None:
            raise DataAccessFailure(f"Could not load snapshot export {export_path.name}")
        return snapshots

    if source != "csv":
        raise DataAccessFailure(f"Unknown snapshot source '{source}'")

    reports = utils.find_snapshot_reports(
        settings.INPUT_DIR, settings.SNAPSHOT_FILENAME_PREFIX
    )
    if not reports:
        logger.warning(
            f"⚠️ No '{settings.SNAPSHOT_FILENAME_PREFIX}*.csv' files in {settings.INPUT_DIR}."
        )
        return []

    snapshots = []
    for path, month_id in reports:
        logger.info(f"  > Found: {path.name} (Month: {month_id})")
        snapshot = parsers.parse_snapshot_report(path, month_id)
        if snapshot is None:
            raise DataAccessFailure(f"Could not load snapshot report {path.name}")
        snapshots.append(snapshot)
    return snapshots


def _report_frame(validated_data: list[ProductAnalytics]) -> pd.DataFrame:
    columns = [
        field.alias or name for name, field in ProductAnalytics.model_fields.items()
    ]
    df = pd.DataFrame(
        [item.model_dump(by_alias=True) for item in validated_data], columns=columns
    )
    return df.sort_values("productId", kind="stable").reset_index(drop=True)


def save_outputs(
    validated_data: list[ProductAnalytics], report_name: Optional[str] = None
) -> dict[str, Path]:
    """Saves the report to CSV and conditionally to JSON, with dated filenames."""
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    report_name = report_name or settings.REPORT_FILENAME_BASE
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.json"

    df = _report_frame(validated_data)
    df.to_csv(csv_path, index=False)
    logger.info(f"✅ Stock report saved to: {csv_path}")
    written = {"csv": csv_path}

    if settings.SAVE_JSON_OUTPUT:
        df.to_json(json_path, orient="records", indent=2)
        logger.info(f"✅ JSON output saved to: {json_path}")
        written["json"] = json_path
    else:
        logger.info("INFO: Skipping JSON file save as per configuration.")

    return written


def post_to_webhook(
    validated_data: list[ProductAnalytics],
    metadata: dict[str, Any],
    report_type: str,
) -> bool:
    """
    Posts the report AND its metadata to the webhook.
    Returns True when the post went through.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {report_type} data to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "reportData": [
            item.model_dump(mode="json", by_alias=True) for item in validated_data
        ],
        "metadata": metadata,
    }

    try:
        response = requests.post(settings.WEBHOOK_URL, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Data and metadata successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
