import logging
from datetime import date

import pytest

from stock_analytics import service
from stock_analytics.exceptions import AnalysisFailure, DataAccessFailure
from stock_analytics.schemas import Snapshot


def test_empty_snapshot_list_gives_empty_result():
    assert service.compute_stock_analytics([]) == []


def test_compute_stock_analytics_end_to_end(snapshot_factory):
    snapshots = [
        snapshot_factory("2024-01", [("A", "Apple", 60), ("A", "Apple", 40)]),
        snapshot_factory("2024-02", [("A", "Apple", 60)]),
        snapshot_factory("2024-03", [("A", "Apple", 60)]),
    ]

    (result,) = service.compute_stock_analytics(snapshots)

    assert result.model_dump(by_alias=True) == {
        "productId": "A",
        "productName": "Apple",
        "stockStatus": 100,
        "leftOver": 60,
        "availability": "Available",
        "average": 40.0,
        "totalSales": 40,
        "months": 1,
        "enoughForMonths": 1.5,
    }


def test_periods_take_precedence_over_names(snapshot_factory):
    # Identifiers that do not sort as strings in calendar order
    snapshots = [
        snapshot_factory("Feb 2024", [("A", 70)], period=date(2024, 2, 1)),
        snapshot_factory("Jan 2024", [("A", 100)], period=date(2024, 1, 1)),
        snapshot_factory("Mar 2024", [("A", 40)], period=date(2024, 3, 1)),
    ]

    assert service.chronological_months(snapshots) == ["Jan 2024", "Feb 2024", "Mar 2024"]
    (result,) = service.compute_stock_analytics(snapshots)
    assert result.left_over == 40
    assert result.total_sales == 60


def test_names_are_sorted_when_any_period_is_missing(snapshot_factory):
    snapshots = [
        snapshot_factory("b", [], period=date(2024, 1, 1)),
        snapshot_factory("a", []),
    ]

    assert service.chronological_months(snapshots) == ["a", "b"]


def test_month_like_names_get_a_period():
    snapshot = Snapshot.model_validate({"name": "2024-07", "period": "2024-07", "rows": []})

    assert snapshot.period == date(2024, 7, 1)


def test_bulk_returns_empty_without_analyzing():
    def never_called(_snapshots):
        raise AssertionError("analysis should not run")

    assert service.stock_analysis_bulk(lambda: None, never_called) == []
    assert service.stock_analysis_bulk(lambda: [], never_called) == []


def test_bulk_runs_analysis_on_fetched_snapshots(snapshot_factory):
    snapshots = [snapshot_factory("2024-01", [("A", 5)])]

    results = service.stock_analysis_bulk(lambda: snapshots)

    assert [r.product_id for r in results] == ["A"]


def test_fetch_failure_is_wrapped(caplog):
    def broken_fetch():
        raise DataAccessFailure("store unreachable")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(AnalysisFailure) as excinfo:
            service.stock_analysis_bulk(broken_fetch)

    assert str(excinfo.value) == "Error While searching data"
    assert isinstance(excinfo.value.__cause__, DataAccessFailure)
    assert "store unreachable" in caplog.text


def test_analysis_failure_is_wrapped(snapshot_factory):
    def broken_analysis(_snapshots):
        raise ValueError("boom")

    with pytest.raises(AnalysisFailure):
        service.stock_analysis_bulk(
            lambda: [snapshot_factory("2024-01", [("A", 1)])], broken_analysis
        )


def test_repeated_calls_give_identical_results(snapshot_factory):
    snapshots = [
        snapshot_factory("2024-01", [("A", 50), ("B", 9)]),
        snapshot_factory("2024-02", [("A", 30), ("B", 9)]),
    ]

    first = service.compute_stock_analytics(snapshots)
    second = service.compute_stock_analytics(snapshots)

    assert first == second
