"""Tests for environment configuration."""

import os
from unittest.mock import patch


class TestSettings:
    """Settings configuration tests."""

    def test_settings_has_app_name(self) -> None:
        """Settings should have app_name attribute."""
        from rpg_api.config import Settings

        settings = Settings()
        assert settings.app_name == "rpg-api"

    def test_settings_debug_defaults_to_false(self) -> None:
        """Debug mode should default to False."""
        from rpg_api.config import Settings

        settings = Settings()
        assert settings.debug is False

    def test_settings_reads_from_environment(self) -> None:
        """Settings should read DEBUG from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true"}):
            from rpg_api.config import Settings

            settings = Settings()
            assert settings.debug is True

    def test_settings_database_url_has_default(self) -> None:
        """Database URL should have a default value for development."""
        from rpg_api.config import Settings

        settings = Settings()
        assert "postgresql" in settings.database_url

    def test_character_rule_defaults(self) -> None:
        """Health cap and role names should default to the game rules."""
        from rpg_api.config import Settings

        settings = Settings()
        assert settings.max_health_points == 100
        assert settings.admin_role == "Admin"
        assert settings.player_role == "Jogador"

    def test_max_health_points_reads_from_environment(self) -> None:
        with patch.dict(os.environ, {"MAX_HEALTH_POINTS": "250"}):
            from rpg_api.config import Settings

            assert Settings().max_health_points == 250


class TestGetSettings:
    """get_settings function tests."""

    def test_get_settings_returns_settings_instance(self) -> None:
        """get_settings should return a Settings instance."""
        from rpg_api.config import Settings, get_settings

        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_returns_cached_instance(self) -> None:
        """get_settings should return the same cached instance."""
        from rpg_api.config import get_settings

        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
