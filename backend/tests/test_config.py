"""Tests for environment-driven settings."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from pydantic import ValidationError

from resume_advisor.config import Settings
from resume_advisor.core.constants import DEFAULT_AI_BASE_URL, DEFAULT_AI_MODEL, DEFAULT_PORT

_ENV_VARS = (
    "OPENROUTER_API_KEY", "AI_BASE_URL", "AI_MODEL", "OPENROUTER_SITE_URL",
    "OPENROUTER_APP_TITLE", "PORT", "ALLOWED_ORIGINS", "RATE_LIMIT_PER_MINUTE",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.openrouter_api_key == ""
        assert settings.has_api_key is False
        assert settings.ai_base_url == DEFAULT_AI_BASE_URL
        assert settings.ai_model == DEFAULT_AI_MODEL
        assert settings.port == DEFAULT_PORT == 3001

    def test_reads_environment(self, clean_env):
        clean_env.setenv("OPENROUTER_API_KEY", "sk-or-env")
        clean_env.setenv("AI_MODEL", "deepseek/deepseek-chat")
        clean_env.setenv("PORT", "8080")

        settings = Settings(_env_file=None)
        assert settings.has_api_key is True
        assert settings.ai_model == "deepseek/deepseek-chat"
        assert settings.port == 8080

    def test_settings_are_immutable(self, clean_env):
        settings = Settings(_env_file=None)
        with pytest.raises(ValidationError):
            settings.ai_model = "something/else"

    def test_invalid_port_rejected(self, clean_env):
        clean_env.setenv("PORT", "not-a-port")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
