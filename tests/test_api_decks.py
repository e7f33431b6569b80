"""Tests for deck API endpoints."""

import pytest
from httpx import AsyncClient


class TestDeckCrud:
    async def test_list_decks_empty(self, client: AsyncClient) -> None:
        response = await client.get("/api/decks")

        assert response.status_code == 200
        assert response.json() == []

    async def test_create_deck(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/decks",
            json={"name": "Moonlit Garden", "theme": "night", "isCustom": True},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Moonlit Garden"
        assert data["theme"] == "night"
        assert data["isCustom"] is True
        assert data["cardBackImageUrl"] is None
        assert data["id"]
        assert data["createdAt"]

    async def test_create_deck_requires_name(self, client: AsyncClient) -> None:
        response = await client.post("/api/decks", json={"name": ""})

        assert response.status_code == 422

    async def test_get_deck(self, client: AsyncClient, deck_id: str) -> None:
        response = await client.get(f"/api/decks/{deck_id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Test Deck"

    async def test_get_deck_not_found(self, client: AsyncClient) -> None:
        response = await client.get("/api/decks/nonexistent")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"].lower()

    async def test_list_decks(self, client: AsyncClient, deck_id: str) -> None:
        response = await client.get("/api/decks")

        assert [d["id"] for d in response.json()] == [deck_id]

    async def test_update_deck_partial(self, client: AsyncClient, deck_id: str) -> None:
        response = await client.put(
            f"/api/decks/{deck_id}", json={"description": "Painted in ink"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["description"] == "Painted in ink"
        assert data["name"] == "Test Deck"
        assert data["isCustom"] is True

    async def test_update_deck_null_name_rejected(
        self, client: AsyncClient, deck_id: str
    ) -> None:
        response = await client.put(f"/api/decks/{deck_id}", json={"name": None})

        assert response.status_code == 400

    async def test_update_deck_not_found(self, client: AsyncClient) -> None:
        response = await client.put("/api/decks/missing", json={"theme": "x"})

        assert response.status_code == 404

    async def test_delete_deck(self, client: AsyncClient, deck_id: str) -> None:
        response = await client.delete(f"/api/decks/{deck_id}")

        assert response.status_code == 204
        assert (await client.get(f"/api/decks/{deck_id}")).status_code == 404

    async def test_delete_deck_not_found(self, client: AsyncClient) -> None:
        response = await client.delete("/api/decks/missing")

        assert response.status_code == 404


class TestDeckCards:
    async def test_cards_empty(self, client: AsyncClient, deck_id: str) -> None:
        response = await client.get(f"/api/decks/{deck_id}/cards")

        assert response.status_code == 200
        assert response.json() == []

    async def test_cards_listed(self, client: AsyncClient, deck_id: str) -> None:
        await client.post(
            "/api/cards", json={"deckId": deck_id, "name": "The Sun", "arcana": "major", "number": 19}
        )

        response = await client.get(f"/api/decks/{deck_id}/cards")

        assert [c["name"] for c in response.json()] == ["The Sun"]


class TestRandomCard:
    async def test_empty_deck(self, client: AsyncClient, deck_id: str) -> None:
        response = await client.get(f"/api/decks/{deck_id}/random-card")

        assert response.status_code == 404
        assert response.json()["detail"] == "No cards found in deck"

    async def test_draws_from_deck(
        self, client: AsyncClient, deck_id: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        for name, number in (("The Fool", 0), ("The Magician", 1)):
            await client.post(
                "/api/cards",
                json={"deckId": deck_id, "name": name, "arcana": "major", "number": number},
            )
        monkeypatch.setattr("tarotdeck.api.decks.random.choice", lambda cards: cards[-1])

        response = await client.get(f"/api/decks/{deck_id}/random-card")

        assert response.status_code == 200
        assert response.json()["name"] == "The Magician"
