from __future__ import annotations

from fastapi import APIRouter, Depends

from assignment_api.dependencies import get_assignment_service
from assignment_api.response import success_response
from assignment_api.schemas.assignment import StationAssignmentRequest
from assignment_api.services.assignment_service import AssignmentService

router = APIRouter(prefix="/v1/station-assignment", tags=["station-assignment"])


@router.post("/find-by-location")
async def find_by_location(
    payload: StationAssignmentRequest,
    service: AssignmentService = Depends(get_assignment_service),
) -> dict:
    result = await service.find_by_location(payload.latitude, payload.longitude, payload.agency_type)
    return success_response(result.model_dump(by_alias=True), meta={})
