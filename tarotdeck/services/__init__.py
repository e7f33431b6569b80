"""
Tarot deck services.

Filename recognition, bulk deck ingestion, upload handling and seed data.
"""

from tarotdeck.services.bulk_ingestion import (
    BulkIngestionResult,
    CardStore,
    StoredFile,
    ingest_bulk_deck,
)
from tarotdeck.services.card_identity_resolver import (
    resolve_card_identity,
    resolve_filename,
)
from tarotdeck.services.file_storage import save_upload, save_uploads, validate_image_upload
from tarotdeck.services.sample_deck import seed_sample_deck

__all__ = [
    "BulkIngestionResult",
    "CardStore",
    "StoredFile",
    "ingest_bulk_deck",
    "resolve_card_identity",
    "resolve_filename",
    "save_upload",
    "save_uploads",
    "seed_sample_deck",
    "validate_image_upload",
]
