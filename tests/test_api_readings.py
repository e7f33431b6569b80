"""Tests for reading API endpoints."""

from httpx import AsyncClient


async def _card_id(client: AsyncClient, deck_id: str) -> str:
    response = await client.post(
        "/api/cards", json={"deckId": deck_id, "name": "The Moon", "arcana": "major", "number": 18}
    )
    return response.json()["id"]


class TestReadings:
    async def test_record_reading(self, client: AsyncClient, deck_id: str) -> None:
        card_id = await _card_id(client, deck_id)

        response = await client.post(
            "/api/readings", json={"cardId": card_id, "interpretation": "Trust your intuition"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["cardId"] == card_id
        assert data["interpretation"] == "Trust your intuition"
        assert data["timestamp"]

    async def test_record_reading_unknown_card(self, client: AsyncClient) -> None:
        response = await client.post("/api/readings", json={"cardId": "missing"})

        assert response.status_code == 404

    async def test_recent_readings(self, client: AsyncClient, deck_id: str) -> None:
        card_id = await _card_id(client, deck_id)
        for _ in range(3):
            await client.post("/api/readings", json={"cardId": card_id})

        response = await client.get("/api/readings", params={"limit": 2})

        assert response.status_code == 200
        assert len(response.json()) == 2

    async def test_limit_bounds(self, client: AsyncClient) -> None:
        assert (await client.get("/api/readings", params={"limit": 0})).status_code == 422
        assert (await client.get("/api/readings", params={"limit": 101})).status_code == 422
