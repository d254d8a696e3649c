"""Tests for game API endpoints."""

import pytest
from factories import FakeCandidateSource, likes_page
from httpx import ASGITransport, AsyncClient

from buzzdeck.api.games import get_candidate_source
from buzzdeck.main import app
from buzzdeck.models.social import PostRecord, ProfileRecord
from buzzdeck.services.game_store import GameStore, get_game_store

AUTHORS = [f"did:plc:a{i}" for i in range(8)]


@pytest.fixture
def fake_source() -> FakeCandidateSource:
    """Source with eight authors, one liked post each."""
    page = likes_page(AUTHORS, cursor=None)
    return FakeCandidateSource(
        like_pages=[page],
        profiles={
            did: ProfileRecord(did=did, handle=f"a{i}.bsky.social", followers_count=10)
            for i, did in enumerate(AUTHORS)
        },
        posts={
            ref.uri: PostRecord(uri=ref.uri, author_did=ref.author_did, author_handle="x")
            for ref in page.post_refs
        },
    )


@pytest.fixture
async def client(fake_source: FakeCandidateSource):
    """Provide an async test client with a fresh store and fake source."""
    store = GameStore()
    app.dependency_overrides[get_game_store] = lambda: store
    app.dependency_overrides[get_candidate_source] = lambda: fake_source

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def _create_game(client: AsyncClient) -> str:
    response = await client.post("/games", json={"actor": "did:plc:player", "seed": 3})
    assert response.status_code == 201
    return response.json()["game_id"]


class TestCreateGame:
    async def test_creates_game_from_actor(self, client: AsyncClient) -> None:
        """A new game holds a full deck in the draw phase."""
        response = await client.post("/games", json={"actor": "did:plc:player"})

        assert response.status_code == 201
        data = response.json()
        assert data["actor"] == "did:plc:player"
        assert data["deck_size"] == 16
        state = data["state"]
        assert state["phase"] == "draw"
        assert state["turn_count"] == 0
        assert len(state["player"]["deck"]) == 16
        assert state["buzz_history"] == [0]

    async def test_rejects_empty_actor(self, client: AsyncClient) -> None:
        """An empty actor fails validation."""
        response = await client.post("/games", json={"actor": ""})

        assert response.status_code == 422

    async def test_unreachable_source_still_creates_game(
        self, client: AsyncClient, fake_source: FakeCandidateSource
    ) -> None:
        """Source failures give an empty deck, not an error."""
        fake_source.fail_like_pages = {0}
        fake_source.fail_follows = True

        response = await client.post("/games", json={"actor": "did:plc:player"})

        assert response.status_code == 201
        assert response.json()["deck_size"] == 0


class TestGetGame:
    async def test_returns_snapshot(self, client: AsyncClient) -> None:
        """A created game can be fetched by id."""
        game_id = await _create_game(client)

        response = await client.get(f"/games/{game_id}")

        assert response.status_code == 200
        assert response.json()["game_id"] == game_id

    async def test_unknown_game_404(self, client: AsyncClient) -> None:
        """Unknown ids return 404."""
        response = await client.get("/games/nope")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"]


class TestActions:
    async def test_start_turn(self, client: AsyncClient) -> None:
        """Starting a turn draws five and refills PDS."""
        game_id = await _create_game(client)

        response = await client.post(f"/games/{game_id}/turn/start")

        data = response.json()
        assert data["applied"] is True
        assert data["state"]["phase"] == "main"
        assert len(data["state"]["player"]["hand"]) == 5
        assert data["state"]["player"]["pds_current"] == 10

    async def test_play_and_end_turn(self, client: AsyncClient) -> None:
        """Playing a card spends PDS; ending the turn records history."""
        game_id = await _create_game(client)
        await client.post(f"/games/{game_id}/turn/start")

        played = await client.post(f"/games/{game_id}/hand/0/play")
        ended = await client.post(f"/games/{game_id}/turn/end")

        assert played.json()["applied"] is True
        assert len(played.json()["state"]["player"]["hand"]) == 4
        assert played.json()["state"]["player"]["pds_current"] < 10
        assert ended.json()["state"]["phase"] == "end"
        assert len(ended.json()["state"]["buzz_history"]) == 2

    async def test_archive_doubles_multiplier(self, client: AsyncClient) -> None:
        """Archiving reports the doubled multiplier."""
        game_id = await _create_game(client)
        await client.post(f"/games/{game_id}/turn/start")

        response = await client.post(f"/games/{game_id}/hand/0/archive")

        assert response.json()["state"]["archive_multiplier"] == 2
        assert len(response.json()["state"]["player"]["discard"]) == 1

    async def test_boost_draws_one(self, client: AsyncClient) -> None:
        """Boosting spends three PDS for one card."""
        game_id = await _create_game(client)
        await client.post(f"/games/{game_id}/turn/start")

        response = await client.post(f"/games/{game_id}/boost")

        state = response.json()["state"]
        assert response.json()["applied"] is True
        assert state["player"]["pds_current"] == 7
        assert len(state["player"]["hand"]) == 6

    async def test_rejected_action_reports_not_applied(self, client: AsyncClient) -> None:
        """Out-of-phase actions return applied=false and unchanged state."""
        game_id = await _create_game(client)
        before = (await client.get(f"/games/{game_id}")).json()["state"]

        response = await client.post(f"/games/{game_id}/hand/0/play")

        assert response.status_code == 200
        assert response.json()["applied"] is False
        assert response.json()["state"] == before

    async def test_finish_assigns_rank(self, client: AsyncClient) -> None:
        """Finishing early ranks the current total."""
        game_id = await _create_game(client)

        response = await client.post(f"/games/{game_id}/finish")

        state = response.json()["state"]
        assert state["game_over"] is True
        assert state["final_rank"] == "C"
        assert state["victory"] is False

    async def test_action_on_unknown_game_404(self, client: AsyncClient) -> None:
        """Actions on unknown games return 404."""
        response = await client.post("/games/nope/turn/start")

        assert response.status_code == 404


class TestDeleteGame:
    async def test_delete(self, client: AsyncClient) -> None:
        """Deleted games are gone."""
        game_id = await _create_game(client)

        response = await client.delete(f"/games/{game_id}")

        assert response.status_code == 204
        assert (await client.get(f"/games/{game_id}")).status_code == 404

    async def test_delete_unknown_404(self, client: AsyncClient) -> None:
        """Deleting an unknown game returns 404."""
        response = await client.delete("/games/nope")

        assert response.status_code == 404
