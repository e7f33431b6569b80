"""
Card Identity Models.

A CardIdentity is what the filename resolver derives from an uploaded file
name. It is never persisted directly; the ingestion pipeline copies its
fields into a TarotCardDB row.

INVARIANTS:
- Every identity has a non-empty name
- MAJOR identities never carry a suit
- MINOR identities always carry a suit and a rank in 1-14
- When is_card_back is True the remaining fields are not meaningful
"""

from dataclasses import dataclass
from enum import Enum


class Arcana(str, Enum):
    """Two-part tarot classification."""

    MAJOR = "major"
    MINOR = "minor"


class Suit(str, Enum):
    """Minor Arcana suits."""

    WANDS = "wands"
    CUPS = "cups"
    SWORDS = "swords"
    PENTACLES = "pentacles"


class UploadCategory(str, Enum):
    """Category tag stored on every upload record."""

    MAJOR_ARCANA = "major_arcana"
    MINOR_ARCANA = "minor_arcana"
    CARD_BACK = "card_back"
    BULK_UPLOAD = "bulk_upload"


CARD_BACK_NAME = "Card Back"


@dataclass(frozen=True, slots=True)
class CardIdentity:
    """
    Canonical identity of a tarot card derived from a filename.

    Attributes:
        name: Display name (e.g., "The Fool", "Ace of Wands")
        arcana: MAJOR or MINOR; unresolved names fall into MAJOR
        suit: Suit for MINOR cards, None for MAJOR
        rank: 0-21 for MAJOR, 1-14 for MINOR, None when unresolved
        is_card_back: True if the file is the deck's card-back artwork
    """

    name: str
    arcana: Arcana = Arcana.MAJOR
    suit: Suit | None = None
    rank: int | None = None
    is_card_back: bool = False

    @classmethod
    def card_back(cls) -> "CardIdentity":
        return cls(name=CARD_BACK_NAME, is_card_back=True)

    @property
    def is_resolved(self) -> bool:
        """True if the identity maps to a real card rather than a display-name fallback."""
        return self.is_card_back or self.rank is not None
