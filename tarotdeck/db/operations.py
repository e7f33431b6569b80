"""
Database CRUD operations.

Provides async functions for creating, reading, updating, and deleting
decks, cards, readings, and uploads.
"""

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tarotdeck.models.card_identity import UploadCategory
from tarotdeck.models.db import CustomUploadDB, DeckDB, ReadingDB, TarotCardDB

# Columns a partial update may touch
DECK_UPDATABLE_FIELDS = frozenset(
    {"name", "description", "theme", "card_back_image_url", "is_custom"}
)
CARD_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "arcana",
        "suit",
        "number",
        "image_url",
        "upright_meaning",
        "reversed_meaning",
        "keywords",
    }
)


def _apply_fields(target: object, fields: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(fields) - allowed
    if unknown:
        msg = f"Cannot update fields: {sorted(unknown)}"
        raise ValueError(msg)
    for name, value in fields.items():
        setattr(target, name, value)


# --- Deck Operations ---


async def get_decks(session: AsyncSession) -> list[DeckDB]:
    """Get all decks, oldest first."""
    result = await session.execute(select(DeckDB).order_by(DeckDB.created_at))
    return list(result.scalars().all())


async def count_decks(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(DeckDB))
    return int(result.scalar_one())


async def get_deck(session: AsyncSession, deck_id: str) -> DeckDB | None:
    """
    Get a deck by id.

    Returns None if the deck does not exist.
    """
    return await session.get(DeckDB, deck_id)


async def create_deck(
    session: AsyncSession,
    name: str,
    description: str | None = None,
    theme: str | None = None,
    card_back_image_url: str | None = None,
    is_custom: bool = False,
) -> DeckDB:
    """Create a new deck."""
    deck = DeckDB(
        name=name,
        description=description,
        theme=theme,
        card_back_image_url=card_back_image_url,
        is_custom=is_custom,
    )
    session.add(deck)
    await session.flush()
    return deck


async def update_deck(
    session: AsyncSession, deck_id: str, fields: dict[str, Any]
) -> DeckDB | None:
    """
    Apply a partial update to a deck.

    Returns None if the deck does not exist.
    Raises ValueError for fields that are not deck columns.
    """
    deck = await get_deck(session, deck_id)
    if deck is None:
        return None

    _apply_fields(deck, fields, DECK_UPDATABLE_FIELDS)
    await session.flush()
    return deck


async def delete_deck(session: AsyncSession, deck_id: str) -> bool:
    """
    Delete a deck together with its cards, their readings, and its uploads.

    Returns True if deleted, False if not found.
    """
    deck = await get_deck(session, deck_id)
    if deck is None:
        return False

    deck_card_ids = select(TarotCardDB.id).where(TarotCardDB.deck_id == deck_id)
    await session.execute(delete(ReadingDB).where(ReadingDB.card_id.in_(deck_card_ids)))
    await session.execute(delete(TarotCardDB).where(TarotCardDB.deck_id == deck_id))
    await session.execute(delete(CustomUploadDB).where(CustomUploadDB.deck_id == deck_id))
    await session.delete(deck)
    await session.flush()
    return True


# --- Card Operations ---


async def get_cards_by_deck(session: AsyncSession, deck_id: str) -> list[TarotCardDB]:
    """Get all cards in a deck, major arcana first, then by suit and number."""
    result = await session.execute(
        select(TarotCardDB)
        .where(TarotCardDB.deck_id == deck_id)
        .order_by(
            TarotCardDB.arcana,
            TarotCardDB.suit.nulls_first(),
            TarotCardDB.number.nulls_last(),
            TarotCardDB.name,
        )
    )
    return list(result.scalars().all())


async def get_card(session: AsyncSession, card_id: str) -> TarotCardDB | None:
    """Get a card by id. Returns None if not found."""
    return await session.get(TarotCardDB, card_id)


async def create_card(
    session: AsyncSession,
    deck_id: str,
    name: str,
    arcana: str,
    suit: str | None = None,
    number: int | None = None,
    image_url: str | None = None,
    upright_meaning: str | None = None,
    reversed_meaning: str | None = None,
    keywords: list[str] | None = None,
) -> TarotCardDB:
    """
    Create a card in a deck.

    Empty keyword lists are stored as NULL.
    """
    card = TarotCardDB(
        deck_id=deck_id,
        name=name,
        arcana=arcana,
        suit=suit,
        number=number,
        image_url=image_url,
        upright_meaning=upright_meaning,
        reversed_meaning=reversed_meaning,
        keywords=keywords or None,
    )
    session.add(card)
    await session.flush()
    return card


async def update_card(
    session: AsyncSession, card_id: str, fields: dict[str, Any]
) -> TarotCardDB | None:
    """
    Apply a partial update to a card.

    Returns None if the card does not exist.
    """
    card = await get_card(session, card_id)
    if card is None:
        return None

    _apply_fields(card, fields, CARD_UPDATABLE_FIELDS)
    await session.flush()
    return card


async def delete_card(session: AsyncSession, card_id: str) -> bool:
    """
    Delete a card and its readings.

    Returns True if deleted, False if not found.
    """
    card = await get_card(session, card_id)
    if card is None:
        return False

    await session.execute(delete(ReadingDB).where(ReadingDB.card_id == card_id))
    await session.delete(card)
    await session.flush()
    return True


# --- Reading Operations ---


async def get_recent_readings(session: AsyncSession, limit: int = 10) -> list[ReadingDB]:
    """Get the most recent readings, newest first."""
    result = await session.execute(
        select(ReadingDB).order_by(ReadingDB.timestamp.desc()).limit(limit)
    )
    return list(result.scalars().all())


async def create_reading(
    session: AsyncSession, card_id: str, interpretation: str | None = None
) -> ReadingDB:
    """Record a reading of a card."""
    reading = ReadingDB(card_id=card_id, interpretation=interpretation)
    session.add(reading)
    await session.flush()
    return reading


# --- Upload Operations ---


async def get_uploads_by_deck(session: AsyncSession, deck_id: str) -> list[CustomUploadDB]:
    """Get all uploads for a deck in upload order."""
    result = await session.execute(
        select(CustomUploadDB)
        .where(CustomUploadDB.deck_id == deck_id)
        .order_by(CustomUploadDB.uploaded_at)
    )
    return list(result.scalars().all())


async def get_upload(session: AsyncSession, upload_id: str) -> CustomUploadDB | None:
    return await session.get(CustomUploadDB, upload_id)


async def create_upload(
    session: AsyncSession,
    deck_id: str,
    filename: str,
    original_name: str,
    file_url: str,
    card_type: UploadCategory | str,
) -> CustomUploadDB:
    """Record an uploaded file. Upload records are never updated afterwards."""
    upload = CustomUploadDB(
        deck_id=deck_id,
        filename=filename,
        original_name=original_name,
        file_url=file_url,
        card_type=UploadCategory(card_type).value,
    )
    session.add(upload)
    await session.flush()
    return upload


async def delete_upload(session: AsyncSession, upload_id: str) -> bool:
    """
    Delete an upload record.

    The stored file itself is left in place. Returns False if not found.
    """
    upload = await get_upload(session, upload_id)
    if upload is None:
        return False

    await session.delete(upload)
    await session.flush()
    return True
