"""
SQLAlchemy ORM models for persistent storage.

Primary keys are generated UUID strings so that identifiers can be handed
to clients and used in URLs directly.
"""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class DeckDB(Base):
    """
    A tarot deck.

    Custom decks are built from uploaded artwork; the card-back image is
    shared by every face-down card in the deck.
    """

    __tablename__ = "decks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    theme: Mapped[str | None] = mapped_column(Text, nullable=True)
    card_back_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<DeckDB(id={self.id}, name={self.name})>"


class TarotCardDB(Base):
    """
    A drawable card belonging to a deck.

    `number` holds the rank: 0-21 for major arcana, 1-14 for minor arcana.
    """

    __tablename__ = "tarot_cards"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    deck_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("decks.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(Text)
    arcana: Mapped[str] = mapped_column(String(10))
    suit: Mapped[str | None] = mapped_column(String(20), nullable=True)
    number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    upright_meaning: Mapped[str | None] = mapped_column(Text, nullable=True)
    reversed_meaning: Mapped[str | None] = mapped_column(Text, nullable=True)
    keywords: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<TarotCardDB(name={self.name}, deck_id={self.deck_id})>"


class ReadingDB(Base):
    """A single-card reading."""

    __tablename__ = "readings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    card_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tarot_cards.id", ondelete="CASCADE"), index=True
    )
    interpretation: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<ReadingDB(id={self.id}, card_id={self.card_id})>"


class CustomUploadDB(Base):
    """
    A raw uploaded image file.

    Upload records are written once and never updated.
    """

    __tablename__ = "custom_uploads"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    deck_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("decks.id", ondelete="CASCADE"), index=True
    )
    filename: Mapped[str] = mapped_column(Text)
    original_name: Mapped[str] = mapped_column(Text)
    file_url: Mapped[str] = mapped_column(Text)
    card_type: Mapped[str] = mapped_column(String(20))
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<CustomUploadDB(original_name={self.original_name}, card_type={self.card_type})>"
