"""
SQLAlchemy-backed CardStore for the ingestion pipeline.

Wraps the CRUD operations for one session and turns database errors into
StorageError so the pipeline sees a single failure type.
"""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tarotdeck.db import operations
from tarotdeck.models.card_identity import CardIdentity, UploadCategory
from tarotdeck.models.db import CustomUploadDB, DeckDB, TarotCardDB
from tarotdeck.models.failure import StorageError


class SqlCardStore:
    """CardStore implementation over an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_upload(
        self,
        deck_id: str,
        filename: str,
        original_name: str,
        file_url: str,
        card_type: UploadCategory,
    ) -> CustomUploadDB:
        try:
            return await operations.create_upload(
                self._session,
                deck_id=deck_id,
                filename=filename,
                original_name=original_name,
                file_url=file_url,
                card_type=card_type,
            )
        except SQLAlchemyError as e:
            raise StorageError("store upload", detail=type(e).__name__) from e

    async def create_card(
        self,
        deck_id: str,
        identity: CardIdentity,
        image_url: str | None,
        upright_meaning: str | None = None,
        reversed_meaning: str | None = None,
        keywords: list[str] | None = None,
    ) -> TarotCardDB:
        try:
            return await operations.create_card(
                self._session,
                deck_id=deck_id,
                name=identity.name,
                arcana=identity.arcana.value,
                suit=identity.suit.value if identity.suit else None,
                number=identity.rank,
                image_url=image_url,
                upright_meaning=upright_meaning,
                reversed_meaning=reversed_meaning,
                keywords=keywords,
            )
        except SQLAlchemyError as e:
            raise StorageError("create card", detail=type(e).__name__) from e

    async def update_deck(self, deck_id: str, fields: dict[str, Any]) -> DeckDB | None:
        try:
            return await operations.update_deck(self._session, deck_id, fields)
        except SQLAlchemyError as e:
            raise StorageError("update deck", detail=type(e).__name__) from e

    async def commit(self) -> None:
        """
        Commit everything written through this store.

        Called by routes before the response is built, so a failed commit
        is reported instead of a manifest of records that were never saved.
        """
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StorageError("save upload records", detail=type(e).__name__) from e
