"""
Configuration module - centralized settings for the asset router.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To enable model-assisted parsing in production:
        export OPENAI_API_KEY=sk-...
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    APP_NAME: str = "DAM Butler"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # LLM SETTINGS
    # ---------------------------------------------------------------------------
    # LLM_PROVIDER: which provider backs model-assisted intent parsing
    # - "openai" (default) or "gemini"
    # - Model-assisted parsing only runs when that provider's key is set
    LLM_PROVIDER: str = "openai"

    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"

    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Upper bound for one model call, in seconds. A timeout counts as a
    # model failure and the resolver falls back to pattern matching.
    AI_REQUEST_TIMEOUT: int = 30

    # ---------------------------------------------------------------------------
    # DAM (BRANDFOLDER) SETTINGS
    # ---------------------------------------------------------------------------
    # Client credentials for the Brandfolder API. Live search is only
    # attempted when both are set AND BRANDFOLDER_LIVE_SEARCH is true;
    # otherwise results are templated from the resolved intent.
    # BRANDFOLDER_ID is required too, it names the brandfolder to search.
    BRANDFOLDER_CLIENT_ID: str = ""
    BRANDFOLDER_CLIENT_SECRET: str = ""
    BRANDFOLDER_ID: str = ""
    BRANDFOLDER_API_URL: str = "https://api.brandfolder.com/v4"
    BRANDFOLDER_LIVE_SEARCH: bool = False

    # Base URL for templated download/thumbnail links
    VAULT_BASE_URL: str = "https://vault.breville.com"


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from dam_butler.core.config import settings
settings = Settings()
