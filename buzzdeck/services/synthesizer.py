"""
Card synthesis.

Maps hydrated profiles and posts onto card power and cost. The formulas
set game balance; integer flooring is part of the rule.
"""

import math
from dataclasses import dataclass

from buzzdeck.models.card import PostCard, UserCard
from buzzdeck.models.social import PostRecord, ProfileRecord

MIN_COST = 1
MAX_COST = 10

MIN_USER_POWER = 1
MIN_POST_POWER = 10

# Cost modifiers for user cards
INFLUENCER_DISCOUNT = -2  # followers > 10x follows
FOLLOWBACK_PENALTY = 2  # follows > followers

# Characters of post text per extra point of cost
POST_COST_CHARS = 40


@dataclass(frozen=True, slots=True)
class CardStats:
    """Power and PDS cost of a synthesized card."""

    power: int
    cost: int


def synthesize_user_card(followers: int, follows: int) -> CardStats:
    """
    Price a user card from follower counts.

    Power grows logarithmically with audience plus a square-root bonus.
    Cost tracks audience magnitude, cheaper for accounts followed far more
    than they follow, dearer for accounts following more than follow them.
    """
    magnitude = math.log10(followers + 1)

    power = max(MIN_USER_POWER, math.floor(20 * magnitude + math.sqrt(followers)))

    discount = INFLUENCER_DISCOUNT if followers > 10 * follows else 0
    penalty = FOLLOWBACK_PENALTY if follows > followers else 0
    cost = min(MAX_COST, max(MIN_COST, math.floor(magnitude + discount + penalty)))

    return CardStats(power=power, cost=cost)


def synthesize_post_card(like_count: int, text_length: int) -> CardStats:
    """
    Price a post card from its likes and length.

    Short, heavily liked posts hit hardest; every 40 characters adds a point
    of cost.
    """
    power = max(MIN_POST_POWER, (like_count * 1000) // (text_length + 10))
    cost = max(MIN_COST, 1 + text_length // POST_COST_CHARS)
    return CardStats(power=power, cost=cost)


def user_card_from_profile(profile: ProfileRecord, instance_id: str = "") -> UserCard:
    """Build a user card for a profile. Deck building assigns the instance id."""
    stats = synthesize_user_card(profile.followers_count, profile.follows_count)
    return UserCard(
        id=profile.did,
        instance_id=instance_id,
        power=stats.power,
        cost=stats.cost,
        handle=profile.handle,
        display_name=profile.display_name,
        avatar_url=profile.avatar_url,
        description=profile.description,
    )


def post_card_from_post(post: PostRecord, instance_id: str = "") -> PostCard:
    """Build a post card for a post. Deck building assigns the instance id."""
    stats = synthesize_post_card(post.like_count, len(post.text))
    return PostCard(
        id=post.uri,
        instance_id=instance_id,
        power=stats.power,
        cost=stats.cost,
        handle=post.author_handle,
        display_name=post.author_display_name,
        text=post.text,
        image_url=post.embed_images[0] if post.embed_images else None,
        like_count=post.like_count,
    )
