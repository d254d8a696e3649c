"""
Build a deck for an actor and play it out.

Runs the full pipeline against the public AppView, then plays every turn
with a simple greedy policy and reports the final rank.
"""

import argparse
import asyncio
import logging
import random

from buzzdeck.config import game_config_from_settings
from buzzdeck.engine.game_engine import GameEngine
from buzzdeck.models.card import Card, UserCard
from buzzdeck.services.pipeline import fetch_game_deck
from buzzdeck.sources.bluesky import BlueskySource
from buzzdeck.utils.format import format_score

logger = logging.getLogger(__name__)


def _affordable_index(hand: list[Card], pds: int) -> int | None:
    """Best playable card: user cards first, then highest power."""
    playable = [(i, c) for i, c in enumerate(hand) if c.cost <= pds]
    if not playable:
        return None
    index, _ = max(playable, key=lambda item: (isinstance(item[1], UserCard), item[1].power))
    return index


def play_greedy(engine: GameEngine) -> None:
    """Play turns until the game finishes, spending PDS on the best affordable card."""
    while not engine.state.game_over:
        engine.start_turn()
        player = engine.state.player

        while (index := _affordable_index(player.hand, player.pds_current)) is not None:
            engine.play_card(index)

        engine.end_turn()
        logger.info(
            "Turn %d: %s buzz, %d lanes",
            engine.state.turn_count,
            format_score(player.buzz_points),
            len(player.field),
        )


async def run_simulation(actor: str, seed: int | None = None) -> GameEngine:
    """Build a deck for actor and play it to completion."""
    config = game_config_from_settings()
    rng = random.Random(seed)

    deck = await fetch_game_deck(BlueskySource(), actor, config, rng=rng)
    logger.info("Built deck of %d cards for %s", len(deck), actor)

    engine = GameEngine.new_game(deck, config)
    play_greedy(engine)
    return engine


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Simulate a BuzzDeck game for an account")
    parser.add_argument("actor", help="Handle or DID whose likes build the deck")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for deck shuffling (default: random)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    engine = asyncio.run(run_simulation(args.actor, seed=args.seed))
    state = engine.state

    print(f"Final buzz: {format_score(state.player.buzz_points)}")
    print(f"Rank: {state.final_rank}")
    if state.mvp_cards and state.mvp_cards.user:
        print(f"MVP account: @{state.mvp_cards.user.handle}")


if __name__ == "__main__":
    main()
