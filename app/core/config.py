"""Application settings.

Centralizes configuration (especially matcher tuning) so the rest of the app
can depend on a single settings object rather than scattered env reads.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.mapper.matcher import BOOST_AMOUNT, BOOST_TOKENS, DENYLIST_TOKENS, FUZZY_MATCH_THRESHOLD


class Settings(BaseSettings):
    """Application configuration loaded from environment variables and .env."""

    # Fuzzy matching
    match_threshold: float = FUZZY_MATCH_THRESHOLD
    denylist_tokens: list[str] = list(DENYLIST_TOKENS)
    boost_tokens: list[str] = list(BOOST_TOKENS)
    boost_amount: float = BOOST_AMOUNT

    # Sheet reading
    sample_rows: int = 9
    max_columns: int = 200

    # Load variables from a local .env file when present.
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


# Singleton settings instance used throughout the application.
settings = Settings()
