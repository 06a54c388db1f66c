import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stock_analytics import settings
from stock_analytics.schemas import Snapshot


def make_snapshot(name, rows=None, period=None):
    """Builds a Snapshot from (productId, stock) or (productId, name, stock) tuples."""
    raw_rows = []
    for row in rows or []:
        if len(row) == 2:
            product_id, stock = row
            product_name = f"Product {product_id}"
        else:
            product_id, product_name, stock = row
        raw_rows.append(
            {"productId": product_id, "productName": product_name, "stockStatus": stock}
        )
    return Snapshot(name=name, period=period, rows=raw_rows)


@pytest.fixture
def snapshot_factory():
    return make_snapshot


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Points the input/output folders at a throwaway directory."""
    input_dir = tmp_path / "input"
    output_dir = tmp_path / "output"
    input_dir.mkdir()
    monkeypatch.setattr(settings, "INPUT_DIR", input_dir)
    monkeypatch.setattr(settings, "OUTPUT_DIR", output_dir)
    monkeypatch.setattr(settings, "SNAPSHOT_SOURCE", "csv")
    monkeypatch.setattr(settings, "SNAPSHOT_FILENAME_PREFIX", "stock_snapshot_")
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", False)
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    return tmp_path
