from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Depends, Query

from assignment_api.dependencies import get_boundary_service
from assignment_api.errors import ApiError
from assignment_api.response import success_response
from assignment_api.services.boundary_service import BoundaryService

router = APIRouter(prefix="/v1", tags=["boundaries"])


async def _call_with_guards(action: Callable[[], Awaitable[object]]) -> object:
    try:
        return await action()
    except ValueError as exc:
        raise ApiError("VALIDATION_ERROR", str(exc), 422) from exc


@router.get("/boundaries/{agency_type}")
async def boundaries(
    agency_type: str,
    simplify: bool = Query(default=True),
    tolerance: float | None = Query(default=None, ge=0),
    limit: int | None = Query(default=None, ge=1),
    service: BoundaryService = Depends(get_boundary_service),
) -> dict:
    collection = await _call_with_guards(
        lambda: service.boundaries(agency_type, simplify=simplify, tolerance=tolerance, limit=limit)
    )
    return success_response(
        collection.model_dump(by_alias=True),
        meta={"count": len(collection.features)},
    )


@router.get("/datasets")
async def datasets(service: BoundaryService = Depends(get_boundary_service)) -> dict:
    items = await service.datasets()
    return success_response([item.model_dump(by_alias=True, mode="json") for item in items], meta={})


@router.post("/datasets/refresh")
async def refresh_datasets(service: BoundaryService = Depends(get_boundary_service)) -> dict:
    results = await service.refresh()
    failed = sum(1 for item in results if item.status == "failed")
    return success_response(
        [item.model_dump(by_alias=True) for item in results],
        meta={"failed": failed},
    )
