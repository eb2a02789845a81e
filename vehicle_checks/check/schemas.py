from dataclasses import dataclass

from pydantic import field_validator

from vehicle_checks.base.schemas import BaseDTO, CamelModel
from vehicle_checks.check.models import CheckItem


class CheckCreate(CamelModel):
    """A submission that already passed validation."""

    vehicle_id: str
    odometer_km: float
    items: list[CheckItem]
    note: str | None = None


class CheckRead(BaseDTO):
    vehicle_id: str
    odometer_km: int | float
    items: list[CheckItem]
    note: str | None = None
    has_issue: bool

    @field_validator("odometer_km")
    @classmethod
    def _whole_km_as_int(cls, value: int | float) -> int | float:
        # 15000 goes out as 15000, not 15000.0
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


@dataclass(frozen=True)
class CheckFilters:
    vehicle_id: str
    has_issue: bool | None = None
