"""
Health check endpoints.

Liveness reports only that the process is up. Readiness also checks the
database connection and that the upload directory exists.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tarotdeck.api.uploads import get_upload_dir
from tarotdeck.db.database import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    uploads: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Does not check dependencies."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    upload_dir: Annotated[Path, Depends(get_upload_dir)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the database is unreachable or the upload directory is
    missing.
    """
    try:
        await session.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError:
        logger.warning("Readiness check: database unavailable", exc_info=True)
        database = "disconnected"

    uploads = "available" if upload_dir.is_dir() else "missing"

    if database != "connected" or uploads != "available":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database=database, uploads=uploads)

    return HealthResponse(status="ready", database=database, uploads=uploads)
