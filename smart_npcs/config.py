"""Application configuration loaded from environment variables and .env file."""

from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AIBackend(str, Enum):
    """Text-generation backends that can serve character replies."""

    NONE = "none"
    MOCK = "mock"
    GEMINI = "gemini"
    OPENAI = "openai"
    AZURE_OPENAI = "azure_openai"


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATABASE_URL: str = "sqlite:///./dev.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # AI Provider settings
    AI_PROVIDER: AIBackend = AIBackend.NONE
    AI_API_KEY: Optional[str] = None
    AI_MODEL: Optional[str] = None
    AI_BASE_URL: Optional[str] = None
    AZURE_OPENAI_ENDPOINT: Optional[str] = None
    AZURE_OPENAI_API_VERSION: str = "2025-01-01-preview"
    AI_TIMEOUT_SECONDS: float = 5.0
    AI_MAX_TOKENS: int = 300
    AI_TEMPERATURE: float = 0.9

    # Conversation turn settings
    HISTORY_WINDOW: int = 5
    RANDOM_SEED: Optional[int] = None


settings = Settings()
