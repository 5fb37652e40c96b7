from __future__ import annotations

import logging

from boundary_pipeline.core.metrics import InMemoryIngestionMetricsCollector
from district_engine.assignment import AssignmentOrchestrator
from district_engine.models import AgencyType, AssignmentResult, GeoPoint
from opentelemetry import trace

from assignment_api.observability import get_trace_id
from assignment_api.schemas.assignment import StationAssignmentResult

logger = logging.getLogger(__name__)
_tracer = trace.get_tracer("station-assignment-api")


class AssignmentService:
    def __init__(
        self,
        orchestrator: AssignmentOrchestrator,
        metrics: InMemoryIngestionMetricsCollector | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._metrics = metrics

    async def find_by_location(self, latitude: float, longitude: float, agency_type: str) -> StationAssignmentResult:
        with _tracer.start_as_current_span("station.assign") as span:
            span.set_attribute("assignment.agency_type", agency_type)
            result = self._orchestrator.assign(GeoPoint(lat=latitude, lng=longitude), agency_type)
            span.set_attribute("assignment.found", result.found)
            span.set_attribute("assignment.method", result.method.value)

        agency = AgencyType.parse(agency_type)
        agency_label = agency.value if agency else "unknown"
        if self._metrics:
            self._metrics.increment_assignment(agency_label, result.method.value)
        logger.info(
            "station_assigned",
            extra={
                "agency_type": agency_label,
                "found": result.found,
                "method": result.method.value,
                "station_id": result.station_id,
                "trace_id": get_trace_id(),
            },
        )
        return _to_schema(result)


def _to_schema(result: AssignmentResult) -> StationAssignmentResult:
    return StationAssignmentResult(
        found=result.found,
        assignment_method=result.method.value,
        message=result.message,
        station_id=result.station_id,
        station_name=result.station_name,
        region=result.region,
        district_name=result.district_name,
        distance=round(result.distance_meters, 2) if result.distance_meters is not None else None,
    )
