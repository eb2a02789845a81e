from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Vehicle:
    id: str
    registration: str
    make: str
    model: str
    year: int


FLEET: tuple[Vehicle, ...] = (
    Vehicle(id="VH001", registration="ABC-123", make="Toyota", model="Hilux", year=2021),
    Vehicle(id="VH002", registration="XYZ-789", make="Ford", model="Ranger", year=2020),
    Vehicle(id="VH003", registration="DEF-456", make="Isuzu", model="D-Max", year=2022),
    Vehicle(id="VH004", registration="GHI-321", make="Nissan", model="Navara", year=2019),
    Vehicle(id="VH005", registration="JKL-654", make="Mitsubishi", model="Triton", year=2023),
)


class VehicleDirectory:
    """Read-only lookup over a fixed set of vehicles."""

    def __init__(self, vehicles: Sequence[Vehicle] = FLEET) -> None:
        self._vehicles = tuple(vehicles)
        self._by_id = {vehicle.id: vehicle for vehicle in self._vehicles}

    def get_vehicles(self) -> list[Vehicle]:
        return list(self._vehicles)

    def exists(self, vehicle_id: str) -> bool:
        return vehicle_id in self._by_id
