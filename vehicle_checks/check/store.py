from __future__ import annotations

import asyncio
import logging
from typing import Self
from uuid import UUID, uuid4

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from vehicle_checks.base.db import DATABASE_URI, create_engine
from vehicle_checks.base.models import BaseDbModel, utcnow
from vehicle_checks.check.models import InspectionCheck, has_issue
from vehicle_checks.check.schemas import CheckCreate, CheckFilters, CheckRead

logger = logging.getLogger(__name__)


def _parse_id(check_id: str | UUID) -> UUID | None:
    if isinstance(check_id, UUID):
        return check_id
    try:
        return UUID(check_id)
    except ValueError:
        return None


class CheckStore:
    """
    Owns the inspection check collection.

    Built at application start-up with `open()` and released with `close()`.
    Every transaction runs under one lock: the in-memory engine shares a single
    connection, so serializing is what keeps a list from seeing (or rolling
    back) a concurrent create or delete.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessions = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )
        self._lock = asyncio.Lock()

    @classmethod
    async def open(cls, uri: str = DATABASE_URI) -> Self:
        engine = create_engine(uri)
        async with engine.begin() as conn:
            await conn.run_sync(BaseDbModel.metadata.create_all)
        logger.info("Check store opened (%s)", engine.url.render_as_string())
        return cls(engine)

    async def close(self) -> None:
        await self._engine.dispose()
        logger.info("Check store closed")

    async def create(self, data: CheckCreate) -> CheckRead:
        items = list(data.items)
        async with self._lock, self._sessions() as session:
            last = (
                await session.execute(
                    select(func.coalesce(func.max(InspectionCheck.sequence), 0))
                )
            ).scalar_one()
            check = InspectionCheck(
                id=uuid4(),
                created_at=utcnow(),
                sequence=last + 1,
                vehicle_id=data.vehicle_id,
                odometer_km=data.odometer_km,
                items=items,
                note=data.note,
                has_issue=has_issue(items),
            )
            session.add(check)
            await session.commit()

        logger.info(
            "Created check %s for vehicle %s (has_issue=%s)",
            check.id,
            check.vehicle_id,
            check.has_issue,
        )
        return CheckRead.model_validate(check)

    async def list_checks(self, filters: CheckFilters) -> list[CheckRead]:
        """Checks of one vehicle, newest first."""
        stmt = select(InspectionCheck).where(
            InspectionCheck.vehicle_id == filters.vehicle_id
        )
        if filters.has_issue is not None:
            stmt = stmt.where(InspectionCheck.has_issue.is_(filters.has_issue))
        stmt = stmt.order_by(
            InspectionCheck.created_at.desc(), InspectionCheck.sequence.desc()
        )

        async with self._lock, self._sessions() as session:
            checks = (await session.execute(stmt)).scalars().all()
        return [CheckRead.model_validate(check) for check in checks]

    async def get(self, check_id: str | UUID) -> CheckRead | None:
        parsed = _parse_id(check_id)
        if parsed is None:
            return None

        async with self._lock, self._sessions() as session:
            check = await session.get(InspectionCheck, parsed)
        return CheckRead.model_validate(check) if check is not None else None

    async def delete_by_id(self, check_id: str | UUID) -> bool:
        parsed = _parse_id(check_id)
        if parsed is None:
            return False

        async with self._lock, self._sessions() as session:
            result = await session.execute(
                delete(InspectionCheck).where(InspectionCheck.id == parsed)
            )
            await session.commit()

        removed = result.rowcount > 0
        if removed:
            logger.info("Deleted check %s", parsed)
        return removed
