"""
Deck construction pipeline.

Runs collection, hydration, synthesis and deck building for one actor.
Source failures shrink the deck rather than failing the build.
"""

import logging
import random

from buzzdeck.config import GameConfig
from buzzdeck.models.card import Card, PostCard, UserCard
from buzzdeck.services.collector import CollectionTargets, collect
from buzzdeck.services.deck_builder import build_deck
from buzzdeck.services.hydration import hydrate_posts, hydrate_profiles
from buzzdeck.services.synthesizer import post_card_from_post, user_card_from_profile
from buzzdeck.sources.base import CandidateSource

logger = logging.getLogger(__name__)


async def fetch_game_deck(
    source: CandidateSource,
    actor: str,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
) -> list[Card]:
    """
    Build a deck from an actor's likes and follows.

    Authors and posts whose hydration failed are left out.

    Args:
        source: Social-graph reader
        actor: DID or handle of the player
        config: Game configuration, defaults to GameConfig()
        rng: Random source for shuffling and instance ids

    Returns:
        Deck in draw order. May be short or empty.
    """
    config = config or GameConfig()

    candidates = await collect(source, actor, CollectionTargets.from_config(config))

    profiles = await hydrate_profiles(source, candidates.author_ids, config.profile_chunk_size)
    posts = await hydrate_posts(source, candidates.post_refs, config.profile_chunk_size)

    user_cards: list[UserCard] = [
        user_card_from_profile(profiles[did]) for did in candidates.author_ids if did in profiles
    ]
    post_cards: list[PostCard] = [
        post_card_from_post(posts[uri]) for uri in candidates.post_refs if uri in posts
    ]

    deck = build_deck(
        user_cards,
        post_cards,
        config.user_pool_size,
        config.post_pool_size,
        rng=rng,
    )

    if len(deck) < config.user_pool_size + config.post_pool_size:
        logger.info(
            "Short deck for %s: %d user, %d post cards available",
            actor,
            len(user_cards),
            len(post_cards),
        )
    return deck
