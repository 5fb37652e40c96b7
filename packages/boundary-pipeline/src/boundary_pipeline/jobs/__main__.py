from __future__ import annotations

import asyncio
import logging
import sys

from devkit.config import load_settings
from district_engine.cache import BoundaryCache

from boundary_pipeline.jobs.loader import LoadStatus
from boundary_pipeline.jobs.refresh import DatasetRefresher
from boundary_pipeline.monitoring.state import ingestion_metrics

logger = logging.getLogger(__name__)


def main() -> int:
    """Load every configured dataset once and report the outcome."""
    logging.basicConfig(level=logging.INFO)
    settings = load_settings()
    refresher = DatasetRefresher.from_settings(settings, BoundaryCache(), metrics=ingestion_metrics)
    reports = asyncio.run(refresher.refresh_all())
    for report in reports:
        logger.info(
            "dataset_load_report",
            extra={
                "dataset": report.dataset,
                "status": report.status.value,
                "record_count": report.record_count,
                "skipped_count": report.skipped_count,
                "error": report.error,
            },
        )
    return 1 if any(report.status == LoadStatus.FAILED for report in reports) else 0


if __name__ == "__main__":
    sys.exit(main())
