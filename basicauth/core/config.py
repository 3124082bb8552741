"""
Application configuration using pydantic-settings.
All environment variables are loaded from .env file with sensible defaults.
Server and client settings share one object; each side reads its own fields.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    APP_NAME: str = "BasicAuth API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database (SQLite, matching the users.db file of the reference server)
    DATABASE_URL: str = "sqlite:///./users.db"

    # Token signing
    JWT_SECRET: str = "basicauth-dev-secret"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_HOURS: int = 24
    BCRYPT_ROUNDS: int = 12

    # Client: server address the screens talk to
    API_BASE_URL: str = "http://localhost:8080/"
    HTTP_TIMEOUT: float = 10.0

    # Client: local key-value area holding the bearer token
    SESSION_STORE_PATH: str = "~/.basicauth/session.json"
    SESSION_NAMESPACE: str = "auth"
    SESSION_TOKEN_KEY: str = "token"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance to avoid re-reading .env on every call."""
    return Settings()
