from tarotdeck.db.database import get_session, init_db
from tarotdeck.db.operations import (
    count_decks,
    create_card,
    create_deck,
    create_reading,
    create_upload,
    delete_card,
    delete_deck,
    delete_upload,
    get_card,
    get_cards_by_deck,
    get_deck,
    get_decks,
    get_recent_readings,
    get_upload,
    get_uploads_by_deck,
    update_card,
    update_deck,
)
from tarotdeck.db.store import SqlCardStore

__all__ = [
    "SqlCardStore",
    "count_decks",
    "create_card",
    "create_deck",
    "create_reading",
    "create_upload",
    "delete_card",
    "delete_deck",
    "delete_upload",
    "get_card",
    "get_cards_by_deck",
    "get_deck",
    "get_decks",
    "get_recent_readings",
    "get_session",
    "get_upload",
    "get_uploads_by_deck",
    "init_db",
    "update_card",
    "update_deck",
]
