"""
Card API endpoints.

Provides CRUD operations for individual tarot cards.

Major cards carry no suit. Minor cards always carry a suit and a number
in 1-14. Creation validates the request body; partial updates validate
the card as it would look after the update.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import Field, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from tarotdeck.api.schemas import CamelModel, CardResponse
from tarotdeck.db import create_card, delete_card, get_card, get_deck, update_card
from tarotdeck.db.database import get_session
from tarotdeck.models.card_identity import Arcana, Suit

router = APIRouter(prefix="/api/cards", tags=["cards"])

# Non-nullable columns a partial update may not clear
_REQUIRED_CARD_FIELDS = ("name", "arcana")


def check_arcana_fields(arcana: Arcana, suit: Suit | None, number: int | None) -> None:
    """
    Check that suit and number agree with the arcana.

    Raises:
        ValueError: If the combination cannot describe a tarot card
    """
    if arcana == Arcana.MAJOR:
        if suit is not None:
            raise ValueError("Major arcana cards cannot have a suit")
        if number is not None and not 0 <= number <= 21:
            raise ValueError("Major arcana numbers must be between 0 and 21")
        return

    if suit is None:
        raise ValueError("Minor arcana cards require a suit")
    if number is None:
        raise ValueError("Minor arcana cards require a number")
    if not 1 <= number <= 14:
        raise ValueError("Minor arcana numbers must be between 1 and 14")


class CardCreateRequest(CamelModel):
    """Request model for creating a card."""

    deck_id: str
    name: str = Field(..., min_length=1, examples=["The Star"])
    arcana: Arcana
    suit: Suit | None = None
    number: int | None = Field(default=None, ge=0, le=21)
    image_url: str | None = None
    upright_meaning: str | None = None
    reversed_meaning: str | None = None
    keywords: list[str] | None = None

    @model_validator(mode="after")
    def validate_arcana_fields(self) -> "CardCreateRequest":
        check_arcana_fields(self.arcana, self.suit, self.number)
        return self


class CardUpdateRequest(CamelModel):
    """Request model for a partial card update. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1)
    arcana: Arcana | None = None
    suit: Suit | None = None
    number: int | None = Field(default=None, ge=0, le=21)
    image_url: str | None = None
    upright_meaning: str | None = None
    reversed_meaning: str | None = None
    keywords: list[str] | None = None


def _card_not_found(card_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Card '{card_id}' not found",
    )


@router.get("/{card_id}", response_model=CardResponse)
async def get_card_by_id(
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """
    Get a card by id.

    Returns 404 if card not found.
    """
    card = await get_card(session, card_id)
    if card is None:
        raise _card_not_found(card_id)
    return CardResponse.model_validate(card)


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_new_card(
    request: CardCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """
    Create a card in an existing deck.

    Returns 404 if the deck does not exist.
    """
    if await get_deck(session, request.deck_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Deck '{request.deck_id}' not found",
        )

    card = await create_card(
        session,
        deck_id=request.deck_id,
        name=request.name,
        arcana=request.arcana.value,
        suit=request.suit.value if request.suit else None,
        number=request.number,
        image_url=request.image_url,
        upright_meaning=request.upright_meaning,
        reversed_meaning=request.reversed_meaning,
        keywords=request.keywords,
    )
    await session.commit()
    return CardResponse.model_validate(card)


@router.put("/{card_id}", response_model=CardResponse)
async def update_existing_card(
    card_id: str,
    request: CardUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """
    Partially update a card, e.g. to add meanings to a bulk-uploaded card.

    Only fields present in the request body are changed. Returns 400 if the
    updated card would break the arcana rules.
    """
    fields = request.model_dump(exclude_unset=True, mode="json")
    if any(key in fields and fields[key] is None for key in _REQUIRED_CARD_FIELDS):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="name and arcana cannot be null",
        )

    existing = await get_card(session, card_id)
    if existing is None:
        raise _card_not_found(card_id)

    arcana = fields.get("arcana", existing.arcana)
    suit = fields.get("suit", existing.suit)
    number = fields.get("number", existing.number)
    try:
        check_arcana_fields(Arcana(arcana), Suit(suit) if suit else None, number)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    card = await update_card(session, card_id, fields)
    if card is None:
        raise _card_not_found(card_id)
    await session.commit()
    return CardResponse.model_validate(card)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_existing_card(
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Response:
    """Delete a card and its readings."""
    if not await delete_card(session, card_id):
        raise _card_not_found(card_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
