import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vehicle_checks.base.db import DATABASE_URI
from vehicle_checks.base.errors import register_error_handlers
from vehicle_checks.check.router import router as check_router
from vehicle_checks.check.store import CheckStore
from vehicle_checks.vehicle.router import router as vehicle_router

logging.basicConfig(level=os.environ.get("VEHICLE_CHECKS_LOG_LEVEL", "INFO"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "VEHICLE_CHECKS_CORS_ORIGINS", "http://localhost:5173"
    ).split(",")
    if origin.strip()
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    store = await CheckStore.open(DATABASE_URI)
    app.state.store = store
    yield
    await store.close()


app = FastAPI(title="Vehicle Checks", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)
app.include_router(check_router)
app.include_router(vehicle_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
