from __future__ import annotations

import enum
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Boolean, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vehicle_checks.base.models import BaseDbModel
from vehicle_checks.base.schemas import PydanticJSONB

NOTE_MAX_LENGTH = 300


class CheckItemKey(enum.Enum):
    TYRES = "TYRES"
    BRAKES = "BRAKES"
    LIGHTS = "LIGHTS"
    OIL = "OIL"
    COOLANT = "COOLANT"


class CheckStatus(enum.Enum):
    OK = "OK"
    FAIL = "FAIL"


class CheckItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: CheckItemKey
    status: CheckStatus


def has_issue(items: Iterable[CheckItem]) -> bool:
    return any(item.status is CheckStatus.FAIL for item in items)


def canonical_order(items: Iterable[CheckItem]) -> list[CheckItem]:
    """Sort items into checklist order (TYRES first, COOLANT last)."""
    order = list(CheckItemKey)
    return sorted(items, key=lambda item: order.index(item.key))


class InspectionCheck(BaseDbModel):
    __tablename__ = "inspection_checks"

    # Insertion order, breaks ties between equal created_at values
    sequence: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    vehicle_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    odometer_km: Mapped[float] = mapped_column(Float, nullable=False)
    items: Mapped[list[CheckItem]] = mapped_column(
        PydanticJSONB(list[CheckItem]), nullable=False
    )
    note: Mapped[str | None] = mapped_column(String(NOTE_MAX_LENGTH), nullable=True)
    has_issue: Mapped[bool] = mapped_column(Boolean, nullable=False)
