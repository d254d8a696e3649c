"""
Deck building service.

Shuffles the synthesized user and post pools, trims each to its configured
size, and merges them into one playable deck.
"""

import random
import uuid
from collections.abc import MutableSequence, Sequence
from dataclasses import replace
from typing import TypeVar

from buzzdeck.models.card import Card, PostCard, UserCard

T = TypeVar("T")


def fisher_yates_shuffle(items: MutableSequence[T], rng: random.Random) -> None:
    """Uniformly permute items in place."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def new_instance_id(rng: random.Random) -> str:
    """UUID4 drawn from rng, so seeded builds are reproducible."""
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def build_deck(
    user_candidates: Sequence[UserCard],
    post_candidates: Sequence[PostCard],
    user_pool_size: int,
    post_pool_size: int,
    rng: random.Random | None = None,
) -> list[Card]:
    """
    Build a shuffled deck from candidate pools.

    Strategy:
    1. Shuffle each pool independently and keep the first N of each
    2. Concatenate and shuffle again
    3. Give every card a fresh instance id

    A pool smaller than its target contributes everything it has.

    Args:
        user_candidates: Synthesized user cards
        post_candidates: Synthesized post cards
        user_pool_size: User cards to keep
        post_pool_size: Post cards to keep
        rng: Random source, defaults to a fresh unseeded Random

    Returns:
        Deck in draw order, front first
    """
    rng = rng or random.Random()

    users: list[UserCard] = list(user_candidates)
    posts: list[PostCard] = list(post_candidates)
    fisher_yates_shuffle(users, rng)
    fisher_yates_shuffle(posts, rng)

    deck: list[Card] = [*users[: max(0, user_pool_size)], *posts[: max(0, post_pool_size)]]
    fisher_yates_shuffle(deck, rng)

    return [replace(card, instance_id=new_instance_id(rng)) for card in deck]
