import pandas as pd
import requests

import main
from stock_analytics import data_handler, settings
from stock_analytics.pipelines.stock import StockAnalyticsPipeline


def write_month(month, body):
    path = settings.INPUT_DIR / f"stock_snapshot_{month}.csv"
    path.write_text("Product ID,Product Name,Stock Status\n" + body, encoding="utf-8")


def seed_series():
    write_month("2024-01", "A,Apple,60\nA,Apple,40\nB,Bolt,5\n")
    write_month("2024-02", "A,Apple,60\nB,Bolt,5\n")
    write_month("2024-03", "A,Apple,60\n")


def test_pipeline_writes_report(workspace):
    seed_series()

    pipeline = StockAnalyticsPipeline(test_mode=True)
    assert pipeline.run() is True

    (report,) = list(settings.OUTPUT_DIR.glob("*.csv"))
    df = pd.read_csv(report).set_index("productId")
    assert df.loc["A", "totalSales"] == 40
    assert df.loc["A", "enoughForMonths"] == 1.5
    assert df.loc["B", "leftOver"] == 0
    assert df.loc["B", "availability"] == "Out of Stock"

    assert pipeline.status_summary["Months"] == 3
    assert pipeline.status_summary["First Month"] == "2024-01"
    assert pipeline.status_summary["Last Month"] == "2024-03"
    assert pipeline.status_summary["Products"] == 2
    assert pipeline.status_summary["Out of Stock"] == 1


def test_pipeline_posts_unless_in_test_mode(workspace, monkeypatch):
    seed_series()
    posted = []
    monkeypatch.setattr(
        data_handler,
        "post_to_webhook",
        lambda validated_data, metadata, report_type: posted.append(report_type),
    )

    StockAnalyticsPipeline(test_mode=True).run()
    assert posted == []

    StockAnalyticsPipeline(test_mode=False).run()
    assert posted == ["stock"]


def test_empty_input_saves_nothing(workspace):
    assert StockAnalyticsPipeline(test_mode=True).run() is True
    assert not settings.OUTPUT_DIR.exists()


def test_broken_snapshot_fails_the_whole_run(workspace):
    seed_series()
    write_month("2024-04", "A,Apple,-1\n")

    assert StockAnalyticsPipeline(test_mode=True).run() is False
    assert not settings.OUTPUT_DIR.exists()


def test_name_fallback_follows_settings(workspace, monkeypatch):
    write_month("2024-01", "A,Apple,10\n")
    write_month("2024-02", "B,Bolt,10\n")
    monkeypatch.setattr(settings, "NAME_FROM_ANY_MONTH", True)

    pipeline = StockAnalyticsPipeline(test_mode=True)
    results = pipeline.transform(pipeline.extract())

    assert {r.product_id: r.product_name for r in results} == {"A": "Apple", "B": "Bolt"}


def test_main_exit_codes(workspace, monkeypatch):
    monkeypatch.setattr(requests, "post", lambda *a, **k: None)
    seed_series()
    assert main.run_process(["--test"]) == 0

    write_month("2024-04", "A,Apple,-1\n")
    assert main.run_process(["--test"]) == 1
