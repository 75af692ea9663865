"""
dealbook.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide a root greeting and liveness probe (`/`, `/healthz`).
- Provide readiness probe (`/readyz`) with DB connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dealbook.api.deps import db_session
from dealbook.errors import GatewayFailure

router = APIRouter()


@router.get("/")
async def root() -> dict[str, str]:
    return {"message": "dealbook API is running."}


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # Readiness: verify critical dependency (DB) is reachable.
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise GatewayFailure("Database is not reachable.") from e
    return {"status": "ready"}
