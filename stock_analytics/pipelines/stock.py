import logging
from datetime import date
from typing import Optional

from stock_analytics import data_handler, service, settings
from stock_analytics.pipeline import DataPipeline
from stock_analytics.schemas import ProductAnalytics, Snapshot

logger = logging.getLogger(__name__)


class StockAnalyticsPipeline(DataPipeline):
    def __init__(
        self,
        source: Optional[str] = None,
        name_from_any_month: Optional[bool] = None,
        test_mode: bool = False,
    ):
        super().__init__("stock", test_mode=test_mode)
        self.system_date = date.today()
        self.source = source or settings.SNAPSHOT_SOURCE
        self.name_from_any_month = (
            settings.NAME_FROM_ANY_MONTH
            if name_from_any_month is None
            else name_from_any_month
        )

    def extract(self) -> list[Snapshot]:
        logger.info(f"--- Loading Stock Snapshots ({self.source}) ---")

        snapshots = data_handler.fetch_snapshots(self.source)
        months = service.chronological_months(snapshots)

        self.status_summary = {
            "Source": self.source,
            "Months": len(months),
            "First Month": months[0] if months else None,
            "Last Month": months[-1] if months else None,
            "Generated": self.system_date.isoformat(),
        }
        logger.info(f"Loaded {len(snapshots)} snapshots.")
        return snapshots

    def transform(self, snapshots: list[Snapshot]) -> list[ProductAnalytics]:
        logger.info("\n--- Consolidating Months & Analyzing Products ---")

        analytics = service.compute_stock_analytics(
            snapshots, name_from_any_month=self.name_from_any_month
        )

        out_of_stock = sum(
            1 for item in analytics if item.availability == settings.OUT_OF_STOCK
        )
        self.status_summary["Products"] = len(analytics)
        self.status_summary["Out of Stock"] = out_of_stock
        logger.info(
            f"✅ Analyzed {len(analytics)} products ({out_of_stock} out of stock)."
        )
        return analytics
