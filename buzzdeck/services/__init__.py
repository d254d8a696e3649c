"""
BuzzDeck services.

Deck construction from social-graph activity.
"""

from buzzdeck.services.collector import CollectionTargets, collect
from buzzdeck.services.deck_builder import build_deck, fisher_yates_shuffle
from buzzdeck.services.hydration import chunked, hydrate_posts, hydrate_profiles
from buzzdeck.services.pipeline import fetch_game_deck
from buzzdeck.services.synthesizer import (
    CardStats,
    post_card_from_post,
    synthesize_post_card,
    synthesize_user_card,
    user_card_from_profile,
)

__all__ = [
    # Collection
    "CollectionTargets",
    "collect",
    # Hydration
    "chunked",
    "hydrate_posts",
    "hydrate_profiles",
    # Synthesis
    "CardStats",
    "post_card_from_post",
    "synthesize_post_card",
    "synthesize_user_card",
    "user_card_from_profile",
    # Deck building
    "build_deck",
    "fisher_yates_shuffle",
    "fetch_game_deck",
]
