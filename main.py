import argparse
import sys

from stock_analytics.logger import setup_logger
from stock_analytics.pipelines.stock import StockAnalyticsPipeline


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Builds the per-product stock analytics report from monthly snapshots."
    )
    parser.add_argument(
        "--source",
        choices=["csv", "json"],
        default=None,
        help="Snapshot source (defaults to SNAPSHOT_SOURCE).",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Run without posting to the webhook.",
    )
    return parser.parse_args(argv)


def run_process(argv=None) -> int:
    """Main orchestration function to run the entire reporting process."""
    args = parse_args(argv)
    setup_logger()

    pipeline = StockAnalyticsPipeline(source=args.source, test_mode=args.test)
    return 0 if pipeline.run() else 1


if __name__ == "__main__":
    sys.exit(run_process())
