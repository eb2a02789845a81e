from fastapi import APIRouter, Depends
from pydantic import BaseModel

from vehicle_checks.base.dependencies import get_vehicle_directory
from vehicle_checks.vehicle.directory import Vehicle, VehicleDirectory

router = APIRouter(prefix="/vehicles")


class VehicleResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    registration: str
    make: str
    model: str
    year: int


@router.get("", response_model=list[VehicleResponse])
async def list_vehicles(
    directory: VehicleDirectory = Depends(get_vehicle_directory),
) -> list[Vehicle]:
    return directory.get_vehicles()
