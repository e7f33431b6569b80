"""
Bulk Deck Ingestion Pipeline.

Turns a batch of stored image files into upload records and card records
for one deck. Each filename is resolved to a card identity; card-back files
are recorded as uploads but produce no card.

INVARIANTS:
1. Files are processed strictly sequentially, in input order
2. Returned uploads and cards preserve input order
3. An empty batch is rejected before any record is written
4. A storage failure aborts the whole batch - no partial manifest is returned
5. Records written before a failure are NOT rolled back here
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from tarotdeck.models.card_identity import CardIdentity, UploadCategory
from tarotdeck.models.db import CustomUploadDB, DeckDB, TarotCardDB
from tarotdeck.models.failure import EmptyBatchError, StorageError
from tarotdeck.services.card_identity_resolver import resolve_filename

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoredFile:
    """
    A raw file already written by the upload handler.

    Attributes:
        filename: Generated name the file was stored under
        original_name: Filename as submitted by the client
        file_url: URL the stored file is served from
    """

    filename: str
    original_name: str
    file_url: str


class CardStore(Protocol):
    """Entity store collaborator used by the pipeline."""

    async def create_upload(
        self,
        deck_id: str,
        filename: str,
        original_name: str,
        file_url: str,
        card_type: UploadCategory,
    ) -> CustomUploadDB: ...

    async def create_card(
        self,
        deck_id: str,
        identity: CardIdentity,
        image_url: str | None,
        upright_meaning: str | None = None,
        reversed_meaning: str | None = None,
        keywords: list[str] | None = None,
    ) -> TarotCardDB: ...

    async def update_deck(self, deck_id: str, fields: dict[str, Any]) -> DeckDB | None: ...


@dataclass
class BulkIngestionResult:
    """Manifest of everything created for one batch."""

    uploads: list[CustomUploadDB] = field(default_factory=list)
    cards: list[TarotCardDB] = field(default_factory=list)

    card_back_upload: CustomUploadDB | None = None
    """Last upload in the batch that resolved to the card back, if any."""

    @property
    def message(self) -> str:
        return (
            f"Successfully uploaded {len(self.uploads)} files "
            f"and created {len(self.cards)} cards"
        )


async def ingest_bulk_deck(
    store: CardStore,
    deck_id: str,
    files: Sequence[StoredFile],
) -> BulkIngestionResult:
    """
    Create upload and card records for a batch of stored files.

    Args:
        store: Entity store to write records through
        deck_id: Deck every record is bound to
        files: Stored files, in the order the client submitted them

    Returns:
        BulkIngestionResult with uploads and cards in input order

    Raises:
        EmptyBatchError: If files is empty
        StorageError: If any record cannot be written (batch aborted)
    """
    if not files:
        raise EmptyBatchError()

    result = BulkIngestionResult()

    for index, stored in enumerate(files):
        try:
            upload = await store.create_upload(
                deck_id=deck_id,
                filename=stored.filename,
                original_name=stored.original_name,
                file_url=stored.file_url,
                card_type=UploadCategory.BULK_UPLOAD,
            )

            identity = resolve_filename(stored.original_name)
            logger.debug(
                "Resolved %r -> %s (%s)",
                stored.original_name,
                identity.name,
                identity.arcana.value,
            )

            if identity.is_card_back:
                result.card_back_upload = upload
            else:
                card = await store.create_card(
                    deck_id=deck_id,
                    identity=identity,
                    image_url=upload.file_url,
                )
                result.cards.append(card)

            result.uploads.append(upload)
        except StorageError:
            logger.error(
                "Bulk upload aborted",
                extra={
                    "deck_id": deck_id,
                    "file_index": index,
                    "original_name": stored.original_name,
                    "batch_size": len(files),
                },
            )
            raise

    logger.info(
        "Bulk upload complete for deck %s: %d uploads, %d cards",
        deck_id,
        len(result.uploads),
        len(result.cards),
    )
    return result
