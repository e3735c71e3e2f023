"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.coordinator import get_coordinator
from api.main import app


@pytest_asyncio.fixture
async def client(coordinator):
    """Create test client bound to a fresh table."""
    app.dependency_overrides[get_coordinator] = lambda: coordinator
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def post_action(client, **payload):
    return await client.post("/api/game/actions", json=payload)


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_initial_state(client):
    """Test the empty table snapshot."""
    response = await client.get("/api/game/state")
    assert response.status_code == 200
    assert response.json() == {
        "players": [],
        "deck": [],
        "currentTurn": "",
        "gameStarted": False,
        "gameEnded": False,
        "winner": None,
    }


@pytest.mark.asyncio
async def test_join_and_start(client):
    """Test playing through the HTTP action path."""
    await post_action(client, type="JOIN", playerId="p1", playerName="Alice")
    await post_action(client, type="JOIN", playerId="p2", playerName="Bob")
    response = await post_action(client, type="START")

    assert response.status_code == 200
    data = response.json()
    assert data["gameStarted"] is True
    assert data["currentTurn"] == "p2"
    assert data["players"][0]["isHouse"] is True
    assert data["players"][1]["isHouse"] is False
    card = data["players"][0]["hand"][0]
    assert set(card) == {"suit", "rank", "code"}
    assert card["code"] == card["rank"] + card["suit"][0].upper()


@pytest.mark.asyncio
async def test_play_to_the_end(client):
    """Test a finished game reports its winner."""
    await post_action(client, type="JOIN", playerId="p1", playerName="Alice")
    await post_action(client, type="JOIN", playerId="p2", playerName="Bob")
    await post_action(client, type="START")
    response = await post_action(client, type="STAND", playerId="p2")

    data = response.json()
    assert data["gameEnded"] is True
    assert data["currentTurn"] == ""
    assert data["winner"]["id"] in {"p1", "p2"}


@pytest.mark.asyncio
async def test_unknown_action_type_is_ignored(client):
    """Test that unknown actions leave the table alone."""
    response = await post_action(client, type="SPLIT", playerId="p1")

    assert response.status_code == 200
    assert response.json()["players"] == []


@pytest.mark.asyncio
async def test_action_without_type_is_rejected(client):
    """Test request validation on the HTTP path."""
    response = await client.post("/api/game/actions", json={"playerId": "p1"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_history(client):
    """Test the event log of the current game."""
    await post_action(client, type="JOIN", playerId="p1", playerName="Alice")
    await post_action(client, type="START")

    response = await client.get("/api/game/history")
    assert response.status_code == 200
    events = response.json()
    assert [e["type"] for e in events] == ["PLAYER_JOINED", "ACTION_IGNORED"]
    assert events[0]["data"]["player_id"] == "p1"
    assert "timestamp" in events[0]


@pytest.mark.asyncio
async def test_reset_clears_history(client):
    """Test that RESET starts a new log."""
    await post_action(client, type="JOIN", playerId="p1", playerName="Alice")
    await post_action(client, type="RESET")

    events = (await client.get("/api/game/history")).json()
    assert [e["type"] for e in events] == ["GAME_RESET"]
