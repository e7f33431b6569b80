"""
Reading API endpoints.

Records single-card readings and lists the most recent ones.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tarotdeck.api.schemas import CamelModel, ReadingResponse
from tarotdeck.db import create_reading, get_card, get_recent_readings
from tarotdeck.db.database import get_session

router = APIRouter(prefix="/api/readings", tags=["readings"])


class ReadingCreateRequest(CamelModel):
    """Request model for recording a reading."""

    card_id: str
    interpretation: str | None = None


@router.get("", response_model=list[ReadingResponse])
async def list_recent_readings(
    session: Annotated[AsyncSession, Depends(get_session)],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> list[ReadingResponse]:
    """Get the most recent readings, newest first."""
    readings = await get_recent_readings(session, limit=limit)
    return [ReadingResponse.model_validate(r) for r in readings]


@router.post("", response_model=ReadingResponse, status_code=status.HTTP_201_CREATED)
async def record_reading(
    request: ReadingCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ReadingResponse:
    """
    Record a reading for a drawn card.

    Returns 404 if the card does not exist.
    """
    if await get_card(session, request.card_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card '{request.card_id}' not found",
        )

    reading = await create_reading(
        session, card_id=request.card_id, interpretation=request.interpretation
    )
    await session.commit()
    return ReadingResponse.model_validate(reading)
