import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from vehicle_checks.base.dependencies import get_store, get_vehicle_directory
from vehicle_checks.base.errors import FieldProblem, NotFound, ValidationFailed
from vehicle_checks.check.schemas import CheckFilters, CheckRead
from vehicle_checks.check.store import CheckStore
from vehicle_checks.check.validation import parse_check
from vehicle_checks.vehicle.directory import VehicleDirectory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checks")


def _parse_filters(vehicle_id: str | None, has_issue: str | None) -> CheckFilters:
    """Any supplied hasIssue other than "true" filters for checks without issues."""
    if vehicle_id:
        return CheckFilters(
            vehicle_id=vehicle_id,
            has_issue=None if has_issue is None else has_issue == "true",
        )
    raise ValidationFailed([FieldProblem("vehicleId", "is required")])


@router.post(
    "",
    response_model=CheckRead,
    response_model_exclude_none=True,
    status_code=201,
)
async def create_check(
    payload: Any = Body(default=None),
    store: CheckStore = Depends(get_store),
    vehicles: VehicleDirectory = Depends(get_vehicle_directory),
) -> CheckRead:
    try:
        data = parse_check(payload, vehicles)
    except ValidationFailed as exc:
        logger.info(
            "Rejected check: %s", ", ".join(problem.field for problem in exc.details)
        )
        raise
    return await store.create(data)


@router.get("", response_model=list[CheckRead], response_model_exclude_none=True)
async def list_checks(
    vehicle_id: str | None = Query(default=None, alias="vehicleId"),
    has_issue: str | None = Query(default=None, alias="hasIssue"),
    store: CheckStore = Depends(get_store),
) -> list[CheckRead]:
    return await store.list_checks(_parse_filters(vehicle_id, has_issue))


@router.get("/{check_id}", response_model=CheckRead, response_model_exclude_none=True)
async def get_check(
    check_id: str,
    store: CheckStore = Depends(get_store),
) -> CheckRead:
    check = await store.get(check_id)
    if check is None:
        raise NotFound()
    return check


@router.delete("/{check_id}", status_code=204)
async def delete_check(
    check_id: str,
    store: CheckStore = Depends(get_store),
) -> None:
    if not await store.delete_by_id(check_id):
        raise NotFound()
