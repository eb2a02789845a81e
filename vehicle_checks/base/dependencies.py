from fastapi import Request

from vehicle_checks.check.store import CheckStore
from vehicle_checks.vehicle.directory import VehicleDirectory

_directory = VehicleDirectory()


def get_store(request: Request) -> CheckStore:
    return request.app.state.store


def get_vehicle_directory() -> VehicleDirectory:
    return _directory
