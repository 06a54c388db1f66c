import logging
from typing import Any, Callable, Optional

from .analyzer import analyze_series
from .consolidator import consolidate_snapshots
from .exceptions import AnalysisFailure
from .schemas import ProductAnalytics, Snapshot

logger = logging.getLogger(__name__)


def chronological_months(snapshots: list[Snapshot]) -> list[str]:
    """
    Orders month identifiers in time. Explicit periods win when every snapshot has
    one; otherwise the identifiers are sorted as strings.
    """
    if snapshots and all(s.period is not None for s in snapshots):
        ordered = sorted(snapshots, key=lambda s: (s.period, s.name))
        return list(dict.fromkeys(s.name for s in ordered))
    return sorted({s.name for s in snapshots})


def compute_stock_analytics(
    snapshots: list[Snapshot], name_from_any_month: bool = False
) -> list[ProductAnalytics]:
    """Full recompute of the per-product analytics from every snapshot."""
    if not snapshots:
        return []

    monthly = consolidate_snapshots(snapshots)
    return analyze_series(
        monthly,
        month_order=chronological_months(snapshots),
        name_from_any_month=name_from_any_month,
    )


def stock_analysis_bulk(
    fetch_snapshots: Callable[[], Optional[list[Snapshot]]],
    analyze: Callable[[list[Snapshot]], Any] = compute_stock_analytics,
) -> Any:
    """
    Fetches the snapshots once and analyzes them.

    Any failure, from the fetch or from the analysis, is logged and surfaced as a single
    AnalysisFailure. Nothing partial is ever returned.
    """
    try:
        snapshots = fetch_snapshots()
        if not snapshots:
            logger.warning("⚠️ No snapshots found. Nothing to analyze.")
            return []
        return analyze(snapshots)
    except Exception as e:
        logger.exception(f"❌ Error while consolidating stock data: {e}")
        raise AnalysisFailure() from e
