import logging

from .schemas import ConsolidatedProductRecord, Snapshot

logger = logging.getLogger(__name__)


def consolidate_snapshot(snapshot: Snapshot) -> list[ConsolidatedProductRecord]:
    """
    Collapses duplicate product rows of one month into a single record per product.
    Stock is summed; the first row's name is kept.
    """
    names: dict[str, str] = {}
    totals: dict[str, float] = {}

    for row in snapshot.rows:
        if row.product_id in totals:
            totals[row.product_id] += row.stock_status
        else:
            names[row.product_id] = row.product_name
            totals[row.product_id] = row.stock_status

    return [
        ConsolidatedProductRecord(
            product_id=product_id,
            product_name=names[product_id],
            stock_status=stock,
        )
        for product_id, stock in totals.items()
    ]


def consolidate_snapshots(
    snapshots: list[Snapshot],
) -> dict[str, list[ConsolidatedProductRecord]]:
    """Builds the month -> consolidated records mapping for the whole series."""
    monthly: dict[str, list[ConsolidatedProductRecord]] = {}

    for snapshot in snapshots:
        if snapshot.name in monthly:
            logger.warning(
                f"⚠️ Month '{snapshot.name}' appears more than once; keeping the later snapshot."
            )
        records = consolidate_snapshot(snapshot)
        monthly[snapshot.name] = records
        logger.debug(
            f"  > {snapshot.name}: {len(snapshot.rows)} rows -> {len(records)} products"
        )

    return monthly
