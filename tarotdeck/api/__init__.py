from tarotdeck.api.cards import router as cards_router
from tarotdeck.api.decks import router as decks_router
from tarotdeck.api.health import router as health_router
from tarotdeck.api.readings import router as readings_router
from tarotdeck.api.uploads import router as uploads_router

__all__ = [
    "cards_router",
    "decks_router",
    "health_router",
    "readings_router",
    "uploads_router",
]
