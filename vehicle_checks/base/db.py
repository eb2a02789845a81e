import os

from sqlalchemy import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

DATABASE_URI = os.environ.get("VEHICLE_CHECKS_DATABASE_URI", "sqlite+aiosqlite://")


def is_in_memory(uri: str) -> bool:
    url = make_url(uri)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_engine(uri: str = DATABASE_URI) -> AsyncEngine:
    if is_in_memory(uri):
        # One shared connection, otherwise every checkout gets an empty database
        return create_async_engine(
            uri,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(uri)
