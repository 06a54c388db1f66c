import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from . import data_handler, service
from .exceptions import AnalysisFailure

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern; extract and transform run
    behind the analysis boundary, so either everything is loaded or nothing is.
    """

    def __init__(self, report_type: str, test_mode: bool = False):
        self.report_type = report_type
        self.test_mode = test_mode
        # Filled by extract(): what the report was built from
        self.status_summary: dict[str, Any] = {}

    def run(self) -> bool:
        """
        Orchestrates the pipeline execution. Returns False when the analysis failed.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT + 2. TRANSFORM ---
        try:
            validated_data = service.stock_analysis_bulk(self.extract, self.transform)
        except AnalysisFailure as e:
            logger.error(f"❌ {self.report_type.capitalize()} pipeline failed: {e}")
            return False

        if not validated_data:
            logger.warning(f"⚠️ No data produced for {self.report_type}.")

        # --- 3. LOAD ---
        self.load(validated_data)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return True

    @abstractmethod
    def extract(self) -> Optional[list[Any]]:
        """
        Responsible for reading the source records.
        Should also populate self.status_summary as it processes sources.
        """
        pass

    @abstractmethod
    def transform(self, records: list[Any]) -> list[Any]:
        """
        Responsible for turning source records into validated report rows.
        """
        pass

    def load(self, validated_data: list[Any]):
        """
        Saves data to disk and posts to webhook.
        """
        # 1. Print Status Summary
        if self.status_summary:
            logger.info("\n--- Final Status Summary ---")
            for key, value in self.status_summary.items():
                logger.info(f"{key}: {value if value is not None else 'No data'}")

        # 2. Save Outputs (CSV/JSON)
        if validated_data:
            data_handler.save_outputs(validated_data)
        else:
            logger.warning("No data to save to disk.")

        # 3. Post to Webhook
        if not self.test_mode:
            data_handler.post_to_webhook(
                validated_data=validated_data,
                metadata=self.status_summary,
                report_type=self.report_type,
            )
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
