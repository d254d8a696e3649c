"""
Game API endpoints.

Creates games from an actor's social graph and exposes the engine
operations. Every action returns whether it was applied along with the
resulting state snapshot; rejected actions leave the state unchanged.
"""

import random
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from buzzdeck.config import game_config_from_settings
from buzzdeck.engine.game_engine import GameEngine
from buzzdeck.models.game_state import game_state_to_dict
from buzzdeck.services.game_store import GameSession, GameStore, get_game_store
from buzzdeck.services.pipeline import fetch_game_deck
from buzzdeck.sources.base import CandidateSource
from buzzdeck.sources.bluesky import BlueskySource

router = APIRouter(prefix="/games", tags=["games"])


def get_candidate_source() -> CandidateSource:
    """Social-graph reader used to build new decks."""
    return BlueskySource()


class CreateGameRequest(BaseModel):
    """Request body for starting a game."""

    actor: str = Field(..., min_length=1, description="Handle or DID whose likes build the deck")
    seed: int | None = Field(default=None, description="Seed for deck shuffling")


class GameResponse(BaseModel):
    """Response model for a game snapshot."""

    game_id: str
    actor: str
    deck_size: int
    state: dict[str, Any]


class ActionResponse(BaseModel):
    """Response model for an engine action."""

    game_id: str
    applied: bool
    state: dict[str, Any]


def _get_session(game_id: str, store: GameStore) -> GameSession:
    session = store.get(game_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Game '{game_id}' not found",
        )
    return session


def _game_response(session: GameSession) -> GameResponse:
    state = session.engine.state
    player = state.player
    deck_size = len(player.deck) + len(player.hand) + len(player.discard) + len(player.field)
    return GameResponse(
        game_id=session.game_id,
        actor=session.actor,
        deck_size=deck_size,
        state=game_state_to_dict(state),
    )


async def _run_action(
    game_id: str,
    store: GameStore,
    action: Callable[[GameEngine], bool],
) -> ActionResponse:
    session = _get_session(game_id, store)
    async with session.lock:
        applied = action(session.engine)
        snapshot = game_state_to_dict(session.engine.state)
    return ActionResponse(game_id=game_id, applied=applied, state=snapshot)


@router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
async def create_game(
    request: CreateGameRequest,
    store: Annotated[GameStore, Depends(get_game_store)],
    source: Annotated[CandidateSource, Depends(get_candidate_source)],
) -> GameResponse:
    """
    Build a deck for the actor and start a new game.

    Source failures produce a smaller deck, not an error.
    """
    config = game_config_from_settings()
    deck = await fetch_game_deck(source, request.actor, config, rng=random.Random(request.seed))
    session = store.add(request.actor, GameEngine.new_game(deck, config))
    return _game_response(session)


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(
    game_id: str,
    store: Annotated[GameStore, Depends(get_game_store)],
) -> GameResponse:
    """Get the current state of a game."""
    return _game_response(_get_session(game_id, store))


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(
    game_id: str,
    store: Annotated[GameStore, Depends(get_game_store)],
) -> Response:
    """Discard a game."""
    if not store.remove(game_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Game '{game_id}' not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{game_id}/turn/start", response_model=ActionResponse)
async def start_turn(
    game_id: str,
    store: Annotated[GameStore, Depends(get_game_store)],
) -> ActionResponse:
    """Draw up to a full hand and refill PDS."""
    return await _run_action(game_id, store, lambda engine: engine.start_turn())


@router.post("/{game_id}/turn/end", response_model=ActionResponse)
async def end_turn(
    game_id: str,
    store: Annotated[GameStore, Depends(get_game_store)],
) -> ActionResponse:
    """Score the field and close the turn."""
    return await _run_action(game_id, store, lambda engine: engine.end_turn())


@router.post("/{game_id}/hand/{hand_index}/play", response_model=ActionResponse)
async def play_card(
    game_id: str,
    hand_index: int,
    store: Annotated[GameStore, Depends(get_game_store)],
) -> ActionResponse:
    """Play the card at hand_index."""
    return await _run_action(game_id, store, lambda engine: engine.play_card(hand_index))


@router.post("/{game_id}/hand/{hand_index}/archive", response_model=ActionResponse)
async def archive_card(
    game_id: str,
    hand_index: int,
    store: Annotated[GameStore, Depends(get_game_store)],
) -> ActionResponse:
    """Archive the card at hand_index to double the next play."""
    return await _run_action(game_id, store, lambda engine: engine.archive_card(hand_index))


@router.post("/{game_id}/boost", response_model=ActionResponse)
async def pds_boost(
    game_id: str,
    store: Annotated[GameStore, Depends(get_game_store)],
) -> ActionResponse:
    """Spend PDS to draw one card."""
    return await _run_action(game_id, store, lambda engine: engine.pds_boost())


@router.post("/{game_id}/finish", response_model=ActionResponse)
async def finish_game(
    game_id: str,
    store: Annotated[GameStore, Depends(get_game_store)],
) -> ActionResponse:
    """End the game early and assign the final rank."""
    return await _run_action(game_id, store, lambda engine: engine.finish_game())
