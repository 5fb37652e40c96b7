from __future__ import annotations

from boundary_pipeline.jobs.refresh import DatasetRefresher
from boundary_pipeline.monitoring.state import ingestion_metrics
from devkit.config import AssignmentSettings, load_settings
from district_engine.assignment import AssignmentOrchestrator
from district_engine.cache import BoundaryCache

from assignment_api.services.assignment_service import AssignmentService
from assignment_api.services.boundary_service import BoundaryService

_settings = load_settings()
_boundary_cache = BoundaryCache()
_dataset_refresher = DatasetRefresher.from_settings(_settings, _boundary_cache, metrics=ingestion_metrics)
_assignment_service = AssignmentService(AssignmentOrchestrator(_boundary_cache), metrics=ingestion_metrics)
_boundary_service = BoundaryService(
    _boundary_cache,
    _dataset_refresher,
    default_tolerance=_settings.BOUNDARY_SIMPLIFY_TOLERANCE,
)


def get_settings() -> AssignmentSettings:
    return _settings


def get_dataset_refresher() -> DatasetRefresher:
    return _dataset_refresher


def get_assignment_service() -> AssignmentService:
    return _assignment_service


def get_boundary_service() -> BoundaryService:
    return _boundary_service
