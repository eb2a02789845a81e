from collections.abc import AsyncGenerator
from typing import Any

import pytest

from vehicle_checks.check.models import CheckItemKey
from vehicle_checks.check.store import CheckStore
from vehicle_checks.vehicle.directory import VehicleDirectory

IN_MEMORY_URI = "sqlite+aiosqlite://"


@pytest.fixture
async def store() -> AsyncGenerator[CheckStore]:
    check_store = await CheckStore.open(IN_MEMORY_URI)
    yield check_store
    await check_store.close()


@pytest.fixture
def vehicles() -> VehicleDirectory:
    return VehicleDirectory()


def _items(**statuses: str) -> list[dict[str, str]]:
    return [
        {"key": key.value, "status": statuses.get(key.value, "OK")}
        for key in CheckItemKey
    ]


@pytest.fixture
def valid_payload() -> dict[str, Any]:
    return {
        "vehicleId": "VH001",
        "odometerKm": 15000,
        "items": _items(),
        "note": "Routine check",
    }
