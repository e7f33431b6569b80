"""
Deck API endpoints.

Provides CRUD for decks plus per-deck card listing, upload listing, and
random card draws.
"""

import random
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from tarotdeck.api.schemas import CamelModel, CardResponse, DeckResponse, UploadResponse
from tarotdeck.db import (
    create_deck,
    delete_deck,
    get_cards_by_deck,
    get_deck,
    get_decks,
    get_uploads_by_deck,
    update_deck,
)
from tarotdeck.db.database import get_session

router = APIRouter(prefix="/api/decks", tags=["decks"])


class DeckCreateRequest(CamelModel):
    """Request model for creating a deck."""

    name: str = Field(..., min_length=1, examples=["Moonlit Garden"])
    description: str | None = None
    theme: str | None = None
    card_back_image_url: str | None = None
    is_custom: bool = False


class DeckUpdateRequest(CamelModel):
    """Request model for a partial deck update. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    theme: str | None = None
    card_back_image_url: str | None = None
    is_custom: bool | None = None


def _deck_not_found(deck_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Deck '{deck_id}' not found",
    )


@router.get("", response_model=list[DeckResponse])
async def list_decks(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[DeckResponse]:
    """List all decks."""
    decks = await get_decks(session)
    return [DeckResponse.model_validate(d) for d in decks]


@router.get("/{deck_id}", response_model=DeckResponse)
async def get_deck_by_id(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Get a deck by id.

    Returns 404 if deck not found.
    """
    deck = await get_deck(session, deck_id)
    if deck is None:
        raise _deck_not_found(deck_id)
    return DeckResponse.model_validate(deck)


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def create_new_deck(
    request: DeckCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """Create a deck."""
    deck = await create_deck(
        session,
        name=request.name,
        description=request.description,
        theme=request.theme,
        card_back_image_url=request.card_back_image_url,
        is_custom=request.is_custom,
    )
    await session.commit()
    return DeckResponse.model_validate(deck)


@router.put("/{deck_id}", response_model=DeckResponse)
async def update_existing_deck(
    deck_id: str,
    request: DeckUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Partially update a deck.

    Only fields present in the request body are changed.
    """
    fields = request.model_dump(exclude_unset=True)
    if any(key in fields and fields[key] is None for key in ("name", "is_custom")):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="name and isCustom cannot be null",
        )

    deck = await update_deck(session, deck_id, fields)
    if deck is None:
        raise _deck_not_found(deck_id)
    await session.commit()
    return DeckResponse.model_validate(deck)


@router.delete("/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_existing_deck(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Response:
    """Delete a deck with its cards and uploads."""
    if not await delete_deck(session, deck_id):
        raise _deck_not_found(deck_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{deck_id}/cards", response_model=list[CardResponse])
async def list_deck_cards(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[CardResponse]:
    """List the cards in a deck. Unknown decks have no cards."""
    cards = await get_cards_by_deck(session, deck_id)
    return [CardResponse.model_validate(c) for c in cards]


@router.get("/{deck_id}/uploads", response_model=list[UploadResponse])
async def list_deck_uploads(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[UploadResponse]:
    """List the files uploaded for a deck."""
    uploads = await get_uploads_by_deck(session, deck_id)
    return [UploadResponse.model_validate(u) for u in uploads]


@router.get("/{deck_id}/random-card", response_model=CardResponse)
async def draw_random_card(
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """
    Draw one card uniformly at random from a deck.

    Returns 404 if the deck has no cards.
    """
    cards = await get_cards_by_deck(session, deck_id)
    if not cards:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No cards found in deck",
        )
    return CardResponse.model_validate(random.choice(cards))
