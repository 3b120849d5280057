"""
Process-level settings for the Cohere processor.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development. Per-processor options (model, API key,
backoff, response field) are NOT read from here: the host passes them to
Processor.configure().
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Cohere Processor"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # development | production
    
    # === Cohere HTTP client ===
    COHERE_BASE_URL: Optional[str] = None  # None = SDK default endpoint
    COHERE_TIMEOUT: float = 60.0  # seconds
    COHERE_MAX_CONNECTIONS: int = 10
    COHERE_MAX_KEEPALIVE_CONNECTIONS: int = 5


# Global settings instance
settings = Settings()
