import logging
from typing import Optional

from . import settings
from .schemas import ConsolidatedProductRecord, ProductAnalytics
from .utils import round_half_up

logger = logging.getLogger(__name__)


def _index_months(
    monthly: dict[str, list[ConsolidatedProductRecord]], month_keys: list[str]
) -> list[dict[str, ConsolidatedProductRecord]]:
    """One productId -> record lookup per month, in chronological order."""
    return [
        {record.product_id: record for record in monthly[month]} for month in month_keys
    ]


def _resolve_name(
    product_id: str,
    by_month: list[dict[str, ConsolidatedProductRecord]],
    name_from_any_month: bool,
) -> str:
    first = by_month[0].get(product_id)
    if first is not None and first.product_name:
        return first.product_name
    if name_from_any_month:
        for month in by_month[1:]:
            record = month.get(product_id)
            if record is not None and record.product_name:
                return record.product_name
    return ""


def analyze_product(
    product_id: str,
    by_month: list[dict[str, ConsolidatedProductRecord]],
    name_from_any_month: bool = False,
) -> ProductAnalytics:
    """
    Walks one product through the chronologically ordered months.

    The walk starts from the product's peak stock. Every strict decrease against the
    previous level counts as a sales month; flat months and restocks only move the
    baseline. Months where the product is missing leave the baseline untouched, but the
    leftover is only ever read from the final month.
    """
    stocks = [
        month[product_id].stock_status if product_id in month else None
        for month in by_month
    ]

    # --- 1. Peak stock doubles as the initial stock ---
    initial_stock = max((s for s in stocks if s is not None), default=0)

    # --- 2. Sales walk ---
    total_sales = 0
    valid_months = 0
    previous_stock = 0
    for i, stock in enumerate(stocks):
        if stock is None:
            continue
        if i == 0:
            previous_stock = initial_stock
            continue

        sales = previous_stock - stock
        if sales > 0:
            total_sales += sales
            valid_months += 1
        previous_stock = stock

    # --- 3. Derived figures ---
    left_over = stocks[-1] if stocks and stocks[-1] is not None else 0
    availability = settings.AVAILABLE if left_over > 0 else settings.OUT_OF_STOCK
    average = round_half_up(total_sales / valid_months) if valid_months > 0 else 0
    enough_for_months = round_half_up(left_over / average) if average > 0 else 0

    return ProductAnalytics(
        product_id=product_id,
        product_name=_resolve_name(product_id, by_month, name_from_any_month),
        stock_status=initial_stock,
        left_over=left_over,
        availability=availability,
        average=average,
        total_sales=total_sales,
        months=valid_months,
        enough_for_months=enough_for_months,
    )


def analyze_series(
    monthly: dict[str, list[ConsolidatedProductRecord]],
    month_order: Optional[list[str]] = None,
    name_from_any_month: bool = False,
) -> list[ProductAnalytics]:
    """
    Computes one ProductAnalytics per distinct product across all months.

    `month_order` gives the chronological order of the month keys; without it the keys
    are sorted lexicographically. The result follows the order in which products are
    first seen and carries no other ordering guarantee.
    """
    if month_order is None:
        month_keys = sorted(monthly)
    else:
        month_keys = [m for m in dict.fromkeys(month_order) if m in monthly]

    if not month_keys:
        return []

    by_month = _index_months(monthly, month_keys)

    # dict keeps first-seen order, unlike a set
    product_ids = list(
        dict.fromkeys(product_id for month in by_month for product_id in month)
    )
    logger.info(
        f"Analyzing {len(product_ids)} products over {len(month_keys)} months "
        f"({month_keys[0]} -> {month_keys[-1]})..."
    )

    return [
        analyze_product(product_id, by_month, name_from_any_month)
        for product_id in product_ids
    ]
