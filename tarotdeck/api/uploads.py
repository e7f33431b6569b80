"""
Upload API endpoints.

Three upload flows share the same file limits (JPEG/PNG/WebP, 5MB each):

- bulk-deck: a whole deck at once; filenames are resolved to cards
- card-images: upload records only, tagged with a caller-chosen category
- card-back: a single image that becomes the deck's card-back artwork

Failures are raised as KnownError subclasses and rendered by the handler
in main.py: 400 for empty or oversized batches, 413/415 for rejected
files, 500 when storage fails (no partial manifest is returned).

Each upload route commits before building its response, so a failed
commit surfaces as a StorageError rather than after a 201 is sent.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from tarotdeck.api.schemas import BulkUploadResponse, CardResponse, UploadResponse
from tarotdeck.config import MAX_BULK_FILES, settings
from tarotdeck.db import SqlCardStore, delete_upload, get_deck
from tarotdeck.db.database import get_session
from tarotdeck.models.card_identity import UploadCategory
from tarotdeck.models.failure import BatchTooLargeError, EmptyBatchError
from tarotdeck.services.bulk_ingestion import ingest_bulk_deck
from tarotdeck.services.file_storage import save_upload, save_uploads

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


def get_upload_dir() -> Path:
    """Dependency providing the directory uploaded files are written to."""
    return settings.upload_dir


async def _require_deck(session: AsyncSession, deck_id: str) -> None:
    if await get_deck(session, deck_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Deck '{deck_id}' not found",
        )


def _check_batch(files: list[UploadFile] | None) -> list[UploadFile]:
    if not files:
        raise EmptyBatchError()
    if len(files) > MAX_BULK_FILES:
        raise BatchTooLargeError(len(files), MAX_BULK_FILES)
    return files


@router.post(
    "/upload/bulk-deck",
    response_model=BulkUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_bulk_deck(
    deck_id: Annotated[str, Form(alias="deckId")],
    session: Annotated[AsyncSession, Depends(get_session)],
    upload_dir: Annotated[Path, Depends(get_upload_dir)],
    cards: Annotated[list[UploadFile] | None, File()] = None,
) -> BulkUploadResponse:
    """
    Upload a whole deck and create cards from the filenames.

    Each file becomes an upload record; each file whose name is not a card
    back becomes a card. Unrecognized filenames still produce a card named
    after the file. A card-back file becomes the deck's card-back image.
    """
    files = _check_batch(cards)
    await _require_deck(session, deck_id)

    stored = await save_uploads(files, upload_dir, settings.upload_url_prefix)

    store = SqlCardStore(session)
    result = await ingest_bulk_deck(store, deck_id, stored)

    if result.card_back_upload is not None:
        await store.update_deck(
            deck_id, {"card_back_image_url": result.card_back_upload.file_url}
        )
    await store.commit()

    return BulkUploadResponse(
        uploads=[UploadResponse.model_validate(u) for u in result.uploads],
        cards=[CardResponse.model_validate(c) for c in result.cards],
        message=result.message,
    )


@router.post(
    "/upload/card-images",
    response_model=list[UploadResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_card_images(
    deck_id: Annotated[str, Form(alias="deckId")],
    session: Annotated[AsyncSession, Depends(get_session)],
    upload_dir: Annotated[Path, Depends(get_upload_dir)],
    cards: Annotated[list[UploadFile] | None, File()] = None,
    card_type: Annotated[UploadCategory, Form(alias="cardType")] = UploadCategory.MAJOR_ARCANA,
) -> list[UploadResponse]:
    """
    Upload card images without creating cards.

    Used by the manual per-section upload flow; cards are created
    separately once the user has assigned each image.
    """
    files = _check_batch(cards)
    await _require_deck(session, deck_id)

    stored = await save_uploads(files, upload_dir, settings.upload_url_prefix)

    store = SqlCardStore(session)
    uploads = []
    for item in stored:
        upload = await store.create_upload(
            deck_id=deck_id,
            filename=item.filename,
            original_name=item.original_name,
            file_url=item.file_url,
            card_type=card_type,
        )
        uploads.append(UploadResponse.model_validate(upload))
    await store.commit()

    logger.info("Stored %d %s images for deck %s", len(uploads), card_type.value, deck_id)
    return uploads


@router.post(
    "/upload/card-back",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_card_back(
    deck_id: Annotated[str, Form(alias="deckId")],
    session: Annotated[AsyncSession, Depends(get_session)],
    upload_dir: Annotated[Path, Depends(get_upload_dir)],
    card_back: Annotated[UploadFile | None, File(alias="cardBack")] = None,
) -> UploadResponse:
    """Upload a deck's card-back image and point the deck at it."""
    if card_back is None:
        raise EmptyBatchError()
    await _require_deck(session, deck_id)

    stored = await save_upload(card_back, upload_dir, settings.upload_url_prefix)

    store = SqlCardStore(session)
    upload = await store.create_upload(
        deck_id=deck_id,
        filename=stored.filename,
        original_name=stored.original_name,
        file_url=stored.file_url,
        card_type=UploadCategory.CARD_BACK,
    )
    await store.update_deck(deck_id, {"card_back_image_url": upload.file_url})
    await store.commit()

    return UploadResponse.model_validate(upload)


@router.delete("/uploads/{upload_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_upload_record(
    upload_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Response:
    """Delete an upload record. The stored file is kept."""
    if not await delete_upload(session, upload_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Upload '{upload_id}' not found",
        )
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
