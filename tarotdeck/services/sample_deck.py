"""
Default deck seeded on first startup.

The classic Rider-Waite deck with a few fully described Major Arcana cards,
so a fresh install has something to draw from before any artwork has been
uploaded.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from tarotdeck.db.operations import count_decks, create_card, create_deck
from tarotdeck.models.card_identity import Arcana
from tarotdeck.models.db import DeckDB

logger = logging.getLogger(__name__)

_IMAGE_PARAMS = "?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=600"


@dataclass(frozen=True, slots=True)
class SampleCard:
    name: str
    number: int
    upright_meaning: str
    keywords: tuple[str, ...]
    image_url: str


SAMPLE_DECK_NAME = "Rider-Waite Classic"
SAMPLE_DECK_DESCRIPTION = (
    "The traditional and most widely recognized tarot deck "
    "with rich symbolism and detailed artwork."
)
SAMPLE_DECK_THEME = "classic"
SAMPLE_DECK_CARD_BACK = (
    f"https://images.unsplash.com/photo-1578662996442-48f60103fc96{_IMAGE_PARAMS}"
)

SAMPLE_CARDS: tuple[SampleCard, ...] = (
    SampleCard(
        name="The Fool",
        number=0,
        upright_meaning=(
            "New beginnings, innocence, spontaneity, and a free spirit. "
            "The Fool represents the start of a journey and the courage "
            "to step into the unknown."
        ),
        keywords=("New beginnings", "Innocence", "Adventure", "Trust"),
        image_url=f"https://images.unsplash.com/photo-1551029506-0807df4e2031{_IMAGE_PARAMS}",
    ),
    SampleCard(
        name="The Magician",
        number=1,
        upright_meaning=(
            "Manifestation, resourcefulness, power, and inspired action. "
            "The Magician represents the ability to turn dreams into reality."
        ),
        keywords=("Manifestation", "Power", "Skill", "Concentration"),
        image_url=f"https://images.unsplash.com/photo-1540747913346-19e32dc3e97e{_IMAGE_PARAMS}",
    ),
    SampleCard(
        name="The High Priestess",
        number=2,
        upright_meaning=(
            "Intuition, sacred knowledge, divine feminine, and the subconscious "
            "mind. She represents inner wisdom and mysteries."
        ),
        keywords=("Intuition", "Mystery", "Subconscious", "Wisdom"),
        image_url=f"https://images.unsplash.com/photo-1506905925346-21bda4d32df4{_IMAGE_PARAMS}",
    ),
)


async def seed_sample_deck(session: AsyncSession) -> DeckDB | None:
    """
    Create the sample deck if the database has no decks yet.

    Returns the created deck, or None if decks already exist.
    """
    if await count_decks(session) > 0:
        return None

    deck = await create_deck(
        session,
        name=SAMPLE_DECK_NAME,
        description=SAMPLE_DECK_DESCRIPTION,
        theme=SAMPLE_DECK_THEME,
        card_back_image_url=SAMPLE_DECK_CARD_BACK,
        is_custom=False,
    )
    for card in SAMPLE_CARDS:
        await create_card(
            session,
            deck_id=deck.id,
            name=card.name,
            arcana=Arcana.MAJOR.value,
            number=card.number,
            image_url=card.image_url,
            upright_meaning=card.upright_meaning,
            keywords=list(card.keywords),
        )

    logger.info("Seeded sample deck %r with %d cards", deck.name, len(SAMPLE_CARDS))
    return deck
