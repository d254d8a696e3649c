"""Tests for configuration."""

from buzzdeck.config import GameConfig, Settings, game_config_from_settings


class TestGameConfig:
    def test_defaults(self) -> None:
        """Defaults match the standard ruleset."""
        config = GameConfig()

        assert config.initial_hand_size == 5
        assert config.max_turns == 15
        assert config.initial_capacity == 10
        assert config.capacity_increment == 1
        assert config.boost_cost == 3
        assert config.likes_page_size == 100
        assert config.max_like_pages == 10
        assert config.profile_chunk_size == 25
        assert dict(config.rank_thresholds)["SS"] == 100_000_000


class TestSettings:
    def test_pool_sizes_from_environment(self, monkeypatch) -> None:
        """Pool sizes can be overridden through the environment."""
        monkeypatch.setenv("USER_POOL_SIZE", "12")
        monkeypatch.setenv("POST_POOL_SIZE", "8")

        config = game_config_from_settings(Settings())

        assert config.user_pool_size == 12
        assert config.post_pool_size == 8
        assert config.max_turns == 15
