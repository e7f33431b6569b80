"""Tests for database CRUD operations and the SQL-backed card store."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

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
from tarotdeck.models.card_identity import Arcana, CardIdentity, Suit, UploadCategory
from tarotdeck.models.failure import StorageError


class TestDeckOperations:
    async def test_create_deck(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit", theme="night")

        assert deck.id is not None
        assert deck.name == "Moonlit"
        assert deck.is_custom is False
        assert deck.created_at is not None

    async def test_get_deck(self, session: AsyncSession) -> None:
        created = await create_deck(session, name="Moonlit")
        await session.commit()

        deck = await get_deck(session, created.id)

        assert deck is not None
        assert deck.name == "Moonlit"

    async def test_get_deck_not_found(self, session: AsyncSession) -> None:
        assert await get_deck(session, "nonexistent") is None

    async def test_get_decks_and_count(self, session: AsyncSession) -> None:
        await create_deck(session, name="One")
        await create_deck(session, name="Two")

        decks = await get_decks(session)

        assert {d.name for d in decks} == {"One", "Two"}
        assert await count_decks(session) == 2

    async def test_update_deck_partial(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit", description="old")

        updated = await update_deck(session, deck.id, {"card_back_image_url": "/uploads/b.png"})

        assert updated is not None
        assert updated.card_back_image_url == "/uploads/b.png"
        assert updated.description == "old"

    async def test_update_deck_not_found(self, session: AsyncSession) -> None:
        assert await update_deck(session, "missing", {"name": "x"}) is None

    async def test_update_deck_rejects_unknown_field(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")

        with pytest.raises(ValueError, match="id"):
            await update_deck(session, deck.id, {"id": "hijack"})

    async def test_delete_deck_removes_dependents(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")
        card = await create_card(session, deck_id=deck.id, name="The Sun", arcana="major")
        await create_reading(session, card_id=card.id)
        await create_upload(
            session, deck.id, "a.png", "sun.png", "/uploads/a.png", UploadCategory.BULK_UPLOAD
        )
        await session.commit()

        assert await delete_deck(session, deck.id) is True
        await session.commit()

        assert await get_deck(session, deck.id) is None
        assert await get_cards_by_deck(session, deck.id) == []
        assert await get_uploads_by_deck(session, deck.id) == []
        assert await get_recent_readings(session) == []

    async def test_delete_deck_not_found(self, session: AsyncSession) -> None:
        assert await delete_deck(session, "missing") is False


class TestCardOperations:
    async def test_create_card(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")

        card = await create_card(
            session,
            deck_id=deck.id,
            name="Ace of Cups",
            arcana="minor",
            suit="cups",
            number=1,
            keywords=["Love"],
        )

        assert card.id is not None
        assert card.suit == "cups"
        assert card.keywords == ["Love"]

    async def test_empty_keywords_stored_as_null(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")

        card = await create_card(session, deck_id=deck.id, name="Death", arcana="major", keywords=[])

        assert card.keywords is None

    async def test_cards_by_deck_ordering(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")
        other = await create_deck(session, name="Other")
        await create_card(session, deck_id=deck.id, name="Two of Wands", arcana="minor", suit="wands", number=2)
        await create_card(session, deck_id=deck.id, name="The Sun", arcana="major", number=19)
        await create_card(session, deck_id=deck.id, name="The Fool", arcana="major", number=0)
        await create_card(session, deck_id=other.id, name="The Moon", arcana="major", number=18)

        cards = await get_cards_by_deck(session, deck.id)

        assert [c.name for c in cards] == ["The Fool", "The Sun", "Two of Wands"]

    async def test_update_card(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")
        card = await create_card(session, deck_id=deck.id, name="The Star", arcana="major")

        updated = await update_card(session, card.id, {"upright_meaning": "Hope"})

        assert updated is not None
        assert updated.upright_meaning == "Hope"

    async def test_delete_card(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")
        card = await create_card(session, deck_id=deck.id, name="The Star", arcana="major")
        await create_reading(session, card_id=card.id, interpretation="hope")

        assert await delete_card(session, card.id) is True
        assert await get_card(session, card.id) is None
        assert await get_recent_readings(session) == []
        assert await delete_card(session, card.id) is False


class TestReadingOperations:
    async def test_recent_readings_limit(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")
        card = await create_card(session, deck_id=deck.id, name="The Star", arcana="major")
        for i in range(5):
            await create_reading(session, card_id=card.id, interpretation=f"reading {i}")

        readings = await get_recent_readings(session, limit=3)

        assert len(readings) == 3


class TestUploadOperations:
    async def test_create_upload(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")

        upload = await create_upload(
            session, deck.id, "abc.png", "The Fool.png", "/uploads/abc.png", "card_back"
        )

        assert upload.card_type == "card_back"
        assert upload.uploaded_at is not None
        assert await get_upload(session, upload.id) is upload

    async def test_create_upload_invalid_category(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")

        with pytest.raises(ValueError):
            await create_upload(session, deck.id, "a.png", "a.png", "/uploads/a.png", "poster")

    async def test_delete_upload(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")
        upload = await create_upload(
            session, deck.id, "a.png", "a.png", "/uploads/a.png", UploadCategory.MAJOR_ARCANA
        )

        assert await delete_upload(session, upload.id) is True
        assert await delete_upload(session, upload.id) is False


class TestSqlCardStore:
    async def test_create_card_from_identity(self, session: AsyncSession) -> None:
        deck = await create_deck(session, name="Moonlit")
        store = SqlCardStore(session)
        identity = CardIdentity(name="Queen of Swords", arcana=Arcana.MINOR, suit=Suit.SWORDS, rank=13)

        card = await store.create_card(deck.id, identity, image_url="/uploads/q.png")

        assert card.arcana == "minor"
        assert card.suit == "swords"
        assert card.number == 13
        assert card.image_url == "/uploads/q.png"

    async def test_database_error_becomes_storage_error(
        self, session: AsyncSession, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def broken_create_upload(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("database is locked"))

        monkeypatch.setattr("tarotdeck.db.operations.create_upload", broken_create_upload)
        store = SqlCardStore(session)

        with pytest.raises(StorageError) as exc_info:
            await store.create_upload("d", "a.png", "a.png", "/uploads/a.png", UploadCategory.BULK_UPLOAD)

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "OperationalError"
