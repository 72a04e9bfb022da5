"""Tests for API endpoints."""

from dataclasses import replace

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api import storage
from api.main import app
from core.cards import Card, full_deck
from core.codec import encode
from core.models import Game
from core.scoring import score


@pytest_asyncio.fixture
async def client():
    """Create test client over fresh in-memory stores."""
    storage.reset_stores()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    storage.reset_stores()


@pytest_asyncio.fixture
async def alice(client):
    """Register Alice through the API."""
    response = await client.post("/api/players", json={"name": "Alice"})
    return response.json()


def _cards(*codes):
    return [Card.from_string(code) for code in codes]


async def store_game(player_id, player_cards, dealer_cards, deck_front=()):
    """Put a game with known hands straight into the active store."""
    games, _ = await storage.get_stores()
    used = set(player_cards) | set(dealer_cards) | set(deck_front)
    game = await games.save(
        replace(
            _blank_game(player_id),
            deck_blob=encode(list(deck_front) + [c for c in full_deck() if c not in used]),
            player_hand_blob=encode(player_cards),
            dealer_hand_blob=encode(dealer_cards),
            player_score=score(player_cards),
            dealer_score=score(dealer_cards),
        )
    )
    return game.id


def _blank_game(player_id):
    return Game(player_id=player_id, deck_blob="[]", player_hand_blob="[]", dealer_hand_blob="[]")


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


class TestPlayers:
    """Tests for the player endpoints."""

    @pytest.mark.asyncio
    async def test_register_player(self, client):
        response = await client.post("/api/players", json={"name": "Alice"})

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Alice"
        assert data["games_played"] == 0
        assert "id" in data

    @pytest.mark.asyncio
    async def test_register_duplicate(self, client, alice):
        response = await client.post("/api/players", json={"name": "Alice"})

        assert response.status_code == 409
        assert response.json()["status"] == 409

    @pytest.mark.asyncio
    async def test_register_blank_name(self, client):
        response = await client.post("/api/players", json={"name": "   "})

        assert response.status_code == 400
        assert response.json()["path"] == "/api/players"

    @pytest.mark.asyncio
    async def test_register_missing_name(self, client):
        response = await client.post("/api/players", json={})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_and_list(self, client, alice):
        response = await client.get(f"/api/players/{alice['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Alice"

        response = await client.get("/api/players")
        assert [p["name"] for p in response.json()] == ["Alice"]

    @pytest.mark.asyncio
    async def test_get_unknown_player(self, client):
        response = await client.get("/api/players/nobody")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Not Found"
        assert "nobody" in data["message"]

    @pytest.mark.asyncio
    async def test_rename(self, client, alice):
        response = await client.put(f"/api/players/{alice['id']}", json={"name": "Alicia"})

        assert response.status_code == 200
        assert response.json()["name"] == "Alicia"

    @pytest.mark.asyncio
    async def test_delete(self, client, alice):
        response = await client.delete(f"/api/players/{alice['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/players/{alice['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_ranking(self, client, alice):
        await client.post("/api/players", json={"name": "Bob"})
        game_id = await store_game(alice["id"], _cards("TS", "9H"), _cards("9C", "8D"))
        await client.post(f"/api/games/{game_id}/stand")

        response = await client.get("/api/players/ranking")

        assert response.status_code == 200
        rows = response.json()
        assert [r["name"] for r in rows] == ["Alice", "Bob"]
        assert rows[0]["win_rate"] == 1.0
        assert rows[0]["total_score"] == 19


class TestGames:
    """Tests for the game endpoints."""

    @pytest.mark.asyncio
    async def test_create_game(self, client, alice):
        response = await client.post("/api/games", json={"player_name": "Alice"})

        assert response.status_code == 201
        data = response.json()
        assert data["player_id"] == alice["id"]
        assert data["status"] == "IN_PROGRESS"
        assert data["turn"] == "PLAYER_TURN"
        assert len(data["player_cards"]) == 2
        assert len(data["dealer_cards"]) == 2
        assert {"rank", "suit", "points", "label"} <= data["player_cards"][0].keys()

    @pytest.mark.asyncio
    async def test_create_game_for_unknown_player(self, client):
        response = await client.post("/api/games", json={"player_name": "Bob"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_create_game_with_blank_name(self, client):
        response = await client.post("/api/games", json={"player_name": "  "})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_list_delete(self, client, alice):
        created = (await client.post("/api/games", json={"player_name": "Alice"})).json()

        response = await client.get(f"/api/games/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

        response = await client.get("/api/games")
        assert [g["id"] for g in response.json()] == [created["id"]]

        response = await client.delete(f"/api/games/{created['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/games/{created['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_hit_to_bust(self, client, alice):
        game_id = await store_game(
            alice["id"], _cards("TS", "5H"), _cards("9C", "8D"), deck_front=_cards("KS")
        )

        response = await client.post(f"/api/games/{game_id}/hit")

        assert response.status_code == 200
        data = response.json()
        assert data["player_score"] == 25
        assert data["status"] == "FINISHED_DEALER_WON"
        assert data["turn"] == "FINISHED"

    @pytest.mark.asyncio
    async def test_stand_then_act_again(self, client, alice):
        game_id = await store_game(alice["id"], _cards("TS", "7H"), _cards("9C", "8D"))

        response = await client.post(f"/api/games/{game_id}/stand")
        assert response.status_code == 200
        assert response.json()["status"] == "FINISHED_DRAW"

        response = await client.post(f"/api/games/{game_id}/hit")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid Game State"

        player = (await client.get(f"/api/players/{alice['id']}")).json()
        assert player["games_played"] == 1
        assert player["total_score"] == 17

    @pytest.mark.asyncio
    async def test_hit_unknown_game(self, client):
        response = await client.post("/api/games/999/hit")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_corrupted_game_is_a_server_error(self, client, alice):
        games, _ = await storage.get_stores()
        game = await games.save(_blank_game(alice["id"]))

        response = await client.post(f"/api/games/{game.id}/hit")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal Server Error"
