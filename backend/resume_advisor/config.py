"""Application settings loaded from environment variables.

Read once per process; the instance is frozen and handed to the
suggestion client rather than consulted through module globals.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from resume_advisor.core.constants import (
    DEFAULT_AI_BASE_URL, DEFAULT_AI_MODEL, DEFAULT_PORT, DEFAULT_SITE_URL,
)


class Settings(BaseSettings):
    openrouter_api_key: str = ""
    ai_base_url: str = DEFAULT_AI_BASE_URL
    ai_model: str = DEFAULT_AI_MODEL
    openrouter_site_url: str = DEFAULT_SITE_URL
    openrouter_app_title: str = ""
    port: int = DEFAULT_PORT
    allowed_origins: str = "*"
    log_level: str = "INFO"
    rate_limit_per_minute: int = 20

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @property
    def has_api_key(self) -> bool:
        return bool(self.openrouter_api_key)


_settings: Settings | None = None


def load_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
