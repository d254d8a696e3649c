"""
Health check endpoints.

Provides a liveness probe. The service keeps no external dependencies
open, so there is no readiness check.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from buzzdeck.services.game_store import GameStore, get_game_store

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    active_games: int


@router.get("/health", response_model=HealthResponse)
async def health(store: Annotated[GameStore, Depends(get_game_store)]) -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running, with the number of games
    held in memory.
    """
    return HealthResponse(status="healthy", active_games=len(store))
