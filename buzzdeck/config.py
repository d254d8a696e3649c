from dataclasses import dataclass, field

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "BuzzDeck"
    debug: bool = False

    # Public AppView serving unauthenticated social-graph reads
    appview_url: str = "https://public.api.bsky.app"
    http_timeout: float = 30.0

    # Deck construction targets
    user_pool_size: int = 50
    post_pool_size: int = 50


settings = Settings()


# =============================================================================
# GAME RULES
# =============================================================================

# Phase multiplier tiers: (first turn of tier, multiplier), ascending
DEFAULT_PHASE_TIERS: tuple[tuple[int, int], ...] = ((1, 1), (6, 10), (11, 100))

# Rank thresholds in buzz points, checked in descending order
DEFAULT_RANK_THRESHOLDS: tuple[tuple[str, int], ...] = (
    ("SS", 100_000_000),
    ("S", 50_000_000),
    ("A", 10_000_000),
    ("B", 1_000_000),
)
FALLBACK_RANK = "C"


@dataclass(frozen=True, slots=True)
class GameConfig:
    """
    Balance and pacing constants for deck construction and play.

    Attributes:
        user_pool_size: User cards kept in the deck
        post_pool_size: Post cards kept in the deck
        initial_hand_size: Hand size refilled to at the start of each turn
        max_turns: Turn after which the game finishes
        initial_capacity: PDS capacity on turn 1
        capacity_increment: PDS capacity gained each subsequent turn
        boost_cost: PDS spent by a boost draw
        phase_tiers: Turn breakpoints for the phase multiplier
        rank_thresholds: Buzz point breakpoints for the final rank
        likes_page_size: Records requested per likes page
        max_like_pages: Page ceiling for likes collection
        profile_chunk_size: Ids per hydration request
    """

    user_pool_size: int = 50
    post_pool_size: int = 50

    initial_hand_size: int = 5
    max_turns: int = 15

    initial_capacity: int = 10
    capacity_increment: int = 1
    boost_cost: int = 3

    phase_tiers: tuple[tuple[int, int], ...] = field(default=DEFAULT_PHASE_TIERS)
    rank_thresholds: tuple[tuple[str, int], ...] = field(default=DEFAULT_RANK_THRESHOLDS)

    likes_page_size: int = 100
    max_like_pages: int = 10
    profile_chunk_size: int = 25


def game_config_from_settings(app_settings: Settings = settings) -> GameConfig:
    """Build the game configuration, applying pool sizes from the environment."""
    return GameConfig(
        user_pool_size=app_settings.user_pool_size,
        post_pool_size=app_settings.post_pool_size,
    )
