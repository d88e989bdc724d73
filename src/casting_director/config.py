"""
Configuration settings for the Casting Director backend.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Casting Director API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # === Gemini ===
    GEMINI_API_KEY: str = ""
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    GEMINI_API_VERSION: str = "v1beta"
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_PRO_MODEL: str = "gemini-2.5-pro"  # Movie results need the stronger model
    GEMINI_TIMEOUT: int = 60  # seconds, per attempt
    
    # === Retry & Backoff ===
    MAX_ATTEMPTS: int = 6  # 1 initial + 5 retries
    RETRY_BASE_DELAY_MS: int = 2000
    RETRY_UNAVAILABLE_BASE_DELAY_MS: int = 3000  # Used for HTTP 503
    RETRY_MAX_JITTER_MS: int = 1000
    
    # === Document Store ===
    DOCUMENT_STORE_BACKEND: str = "redis"  # "redis" or "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 20
    
    # === Actor Cache ===
    APP_ID: str = "default-app-id"
    ACTOR_CACHE_TTL_SECONDS: int = 30 * 24 * 60 * 60
    ACTOR_CACHE_SOURCE: str = "gemini-api"
    
    # === Prompts ===
    PROMPT_TEMPLATES_DIR: str = str(PACKAGE_DIR / "llm" / "templates")
    SCHEMAS_DIR: str = str(PACKAGE_DIR / "llm" / "schemas")
    
    # === HTTP ===
    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
