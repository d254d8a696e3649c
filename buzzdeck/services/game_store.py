"""
In-process registry of running games.

Games live only as long as the process. Each game carries its own lock so
operations on one game run strictly one at a time.
"""

import asyncio
import uuid
from dataclasses import dataclass, field

from buzzdeck.engine.game_engine import GameEngine


@dataclass
class GameSession:
    """A running game and the lock serializing access to it."""

    game_id: str
    actor: str
    engine: GameEngine
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class GameStore:
    """Maps game ids to sessions."""

    def __init__(self) -> None:
        self._sessions: dict[str, GameSession] = {}

    def add(self, actor: str, engine: GameEngine) -> GameSession:
        session = GameSession(game_id=uuid.uuid4().hex, actor=actor, engine=engine)
        self._sessions[session.game_id] = session
        return session

    def get(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def remove(self, game_id: str) -> bool:
        return self._sessions.pop(game_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


_store = GameStore()


def get_game_store() -> GameStore:
    """FastAPI dependency returning the process-wide store."""
    return _store
