"""
Validation of raw check submissions.

`validate_check` never raises: it walks the payload field by field
(vehicleId, odometerKm, items, note) and collects every problem it finds, so
the same bad payload always produces the same list in the same order.
`parse_check` is the entry point for the API: it raises `ValidationFailed`
with those problems, or returns a typed `CheckCreate`.
"""

from __future__ import annotations

import math
from typing import Any

from vehicle_checks.base.errors import FieldProblem, ValidationFailed
from vehicle_checks.check.models import (
    NOTE_MAX_LENGTH,
    CheckItem,
    CheckItemKey,
    CheckStatus,
    canonical_order,
)
from vehicle_checks.check.schemas import CheckCreate
from vehicle_checks.vehicle.directory import VehicleDirectory

ITEM_KEYS = tuple(key.value for key in CheckItemKey)
ITEM_STATUSES = tuple(status.value for status in CheckStatus)


def validate_check(payload: Any, vehicles: VehicleDirectory) -> list[FieldProblem]:
    if not isinstance(payload, dict):
        return [FieldProblem("body", "must be an object")]

    return [
        *_validate_vehicle_id(payload.get("vehicleId"), vehicles),
        *_validate_odometer(payload.get("odometerKm")),
        *_validate_items(payload.get("items")),
        *_validate_note(payload.get("note")),
    ]


def parse_check(payload: Any, vehicles: VehicleDirectory) -> CheckCreate:
    problems = validate_check(payload, vehicles)
    if problems:
        raise ValidationFailed(problems)

    items = canonical_order(
        CheckItem(key=CheckItemKey(entry["key"]), status=CheckStatus(entry["status"]))
        for entry in payload["items"]
    )
    return CheckCreate(
        vehicle_id=payload["vehicleId"],
        odometer_km=payload["odometerKm"],
        items=items,
        note=normalize_note(payload.get("note")),
    )


def normalize_note(note: str | None) -> str | None:
    """Blank notes are stored as absent, never as an empty string."""
    if note is None or not note.strip():
        return None
    return note


def _validate_vehicle_id(value: Any, vehicles: VehicleDirectory) -> list[FieldProblem]:
    if not isinstance(value, str) or not value:
        return [FieldProblem("vehicleId", "is required")]
    if not vehicles.exists(value):
        return [FieldProblem("vehicleId", "unknown vehicle")]
    return []


def _validate_odometer(value: Any) -> list[FieldProblem]:
    if value is None:
        return [FieldProblem("odometerKm", "is required")]
    # bool is an int subclass, but `true` is not an odometer reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return [FieldProblem("odometerKm", "must be a number")]
    try:
        reading = float(value)
    except OverflowError:
        return [FieldProblem("odometerKm", "must be a number")]
    if not math.isfinite(reading):
        return [FieldProblem("odometerKm", "must be a number")]
    if reading <= 0:
        return [FieldProblem("odometerKm", "must be > 0")]
    return []


def _validate_items(value: Any) -> list[FieldProblem]:
    if value is None:
        return [FieldProblem("items", "is required")]
    if not isinstance(value, list):
        return [FieldProblem("items", "must be an array")]

    problems: list[FieldProblem] = []
    if len(value) != len(ITEM_KEYS):
        problems.append(
            FieldProblem("items", f"must contain exactly {len(ITEM_KEYS)} items")
        )

    seen: set[str] = set()
    for index, entry in enumerate(value):
        field = f"items[{index}]"
        if not isinstance(entry, dict):
            problems.append(FieldProblem(field, "must be an object"))
            continue

        key = entry.get("key")
        if not isinstance(key, str) or key not in ITEM_KEYS:
            problems.append(
                FieldProblem(f"{field}.key", f"must be one of {', '.join(ITEM_KEYS)}")
            )
        elif key in seen:
            problems.append(FieldProblem(f"{field}.key", "is duplicated"))
        else:
            seen.add(key)

        status = entry.get("status")
        if not isinstance(status, str) or status not in ITEM_STATUSES:
            problems.append(FieldProblem(f"{field}.status", "must be OK or FAIL"))

    missing = [key for key in ITEM_KEYS if key not in seen]
    if missing:
        problems.append(
            FieldProblem("items", f"missing categories: {', '.join(missing)}")
        )
    return problems


def _validate_note(value: Any) -> list[FieldProblem]:
    if value is None:
        return []
    if not isinstance(value, str):
        return [FieldProblem("note", "must be a string")]
    if len(value) > NOTE_MAX_LENGTH:
        return [
            FieldProblem("note", f"must be at most {NOTE_MAX_LENGTH} characters")
        ]
    return []
