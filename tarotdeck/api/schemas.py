"""
Response and request models shared across routers.

Field names are camelCase on the wire (deckId, fileUrl, cardType) and
snake_case in Python. Responses are built directly from ORM rows.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tarotdeck.models.card_identity import Arcana, Suit


class CamelModel(BaseModel):
    """Base model serializing field names in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DeckResponse(CamelModel):
    """Response model for a single deck."""

    id: str
    name: str
    description: str | None = None
    theme: str | None = None
    card_back_image_url: str | None = None
    is_custom: bool = False
    created_at: datetime | None = None


class CardResponse(CamelModel):
    """Response model for a single card."""

    id: str
    deck_id: str
    name: str
    arcana: Arcana
    suit: Suit | None = None
    number: int | None = None
    image_url: str | None = None
    upright_meaning: str | None = None
    reversed_meaning: str | None = None
    keywords: list[str] | None = None


class UploadResponse(CamelModel):
    """Response model for an upload record."""

    id: str
    deck_id: str
    filename: str
    original_name: str
    file_url: str
    card_type: str
    uploaded_at: datetime | None = None


class ReadingResponse(CamelModel):
    """Response model for a reading."""

    id: str
    card_id: str
    interpretation: str | None = None
    timestamp: datetime | None = None


class BulkUploadResponse(CamelModel):
    """Manifest returned by the bulk deck upload."""

    uploads: list[UploadResponse] = Field(default_factory=list)
    cards: list[CardResponse] = Field(default_factory=list)
    message: str
