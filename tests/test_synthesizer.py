"""Tests for card synthesis formulas."""

import pytest

from buzzdeck.models.social import PostRecord, ProfileRecord
from buzzdeck.services.synthesizer import (
    CardStats,
    post_card_from_post,
    synthesize_post_card,
    synthesize_user_card,
    user_card_from_profile,
)


class TestSynthesizeUserCard:
    @pytest.mark.parametrize(
        ("followers", "follows", "expected"),
        [
            (0, 0, CardStats(power=1, cost=1)),
            (100, 100, CardStats(power=50, cost=2)),
            (9_999, 10, CardStats(power=179, cost=2)),
            (10, 500, CardStats(power=23, cost=3)),
            (1_000_000, 0, CardStats(power=1120, cost=4)),
            (5, 0, CardStats(power=17, cost=1)),
        ],
    )
    def test_known_values(self, followers: int, follows: int, expected: CardStats) -> None:
        """Power and cost match the balance formula with floor semantics."""
        assert synthesize_user_card(followers, follows) == expected

    def test_power_never_below_one(self) -> None:
        """An account with no audience still has power 1."""
        assert synthesize_user_card(0, 5000).power == 1

    def test_influencer_discount(self) -> None:
        """Followers above ten times follows lowers cost by two."""
        discounted = synthesize_user_card(9_999, 999)
        full_price = synthesize_user_card(9_999, 1000)

        assert full_price.cost - discounted.cost == 2

    def test_followback_penalty(self) -> None:
        """Following more accounts than follow back raises cost by two."""
        balanced = synthesize_user_card(999, 999)
        penalized = synthesize_user_card(999, 1000)

        assert penalized.cost - balanced.cost == 2

    def test_cost_clamped_to_ten(self) -> None:
        """Very large audiences with a penalty still cost at most 10."""
        stats = synthesize_user_card(999_999_999_999, 1_000_000_000_000)

        assert stats.cost == 10

    def test_cost_clamped_to_one(self) -> None:
        """Discounts never push cost below 1."""
        assert synthesize_user_card(5, 0).cost == 1


class TestSynthesizePostCard:
    @pytest.mark.parametrize(
        ("likes", "length", "expected"),
        [
            (0, 0, CardStats(power=10, cost=1)),
            (100, 40, CardStats(power=2000, cost=2)),
            (3, 290, CardStats(power=10, cost=8)),
            (1, 39, CardStats(power=20, cost=1)),
            (7, 80, CardStats(power=77, cost=3)),
        ],
    )
    def test_known_values(self, likes: int, length: int, expected: CardStats) -> None:
        """Power and cost match the balance formula with floor semantics."""
        assert synthesize_post_card(likes, length) == expected

    def test_power_floor_of_ten(self) -> None:
        """Unliked posts still hit for 10."""
        assert synthesize_post_card(0, 300).power == 10

    def test_cost_grows_every_forty_chars(self) -> None:
        """Cost steps up at each 40-character boundary."""
        assert synthesize_post_card(10, 39).cost == 1
        assert synthesize_post_card(10, 40).cost == 2
        assert synthesize_post_card(10, 79).cost == 2
        assert synthesize_post_card(10, 80).cost == 3


class TestCardFactories:
    def test_user_card_from_profile(self) -> None:
        """Profile metadata and synthesized stats land on the card."""
        profile = ProfileRecord(
            did="did:plc:alice",
            handle="alice.bsky.social",
            display_name="Alice",
            avatar_url="https://cdn.example/alice.jpg",
            description="hi",
            followers_count=100,
            follows_count=100,
        )

        card = user_card_from_profile(profile)

        assert card.id == "did:plc:alice"
        assert card.handle == "alice.bsky.social"
        assert card.display_name == "Alice"
        assert card.avatar_url == "https://cdn.example/alice.jpg"
        assert (card.power, card.cost) == (50, 2)
        assert card.instance_id == ""

    def test_post_card_from_post(self) -> None:
        """Post text length drives cost; first embedded image is kept."""
        post = PostRecord(
            uri="at://did:plc:bob/app.bsky.feed.post/1",
            author_did="did:plc:bob",
            author_handle="bob.bsky.social",
            like_count=100,
            text="x" * 40,
            embed_images=("https://cdn.example/1.jpg", "https://cdn.example/2.jpg"),
        )

        card = post_card_from_post(post, instance_id="abc")

        assert card.id == post.uri
        assert card.instance_id == "abc"
        assert card.handle == "bob.bsky.social"
        assert (card.power, card.cost) == (2000, 2)
        assert card.image_url == "https://cdn.example/1.jpg"
        assert card.like_count == 100
        assert card.played_score is None

    def test_post_card_without_images(self) -> None:
        """Posts without embeds have no image."""
        post = PostRecord(uri="at://x/app.bsky.feed.post/2", author_did="x", author_handle="x")

        assert post_card_from_post(post).image_url is None
