from buzzdeck.engine.game_engine import (
    GameEngine,
    create_initial_state,
    pds_capacity_for,
    rank_for,
    tier,
)

__all__ = [
    "GameEngine",
    "create_initial_state",
    "pds_capacity_for",
    "rank_for",
    "tier",
]
