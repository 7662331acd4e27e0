# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Optional env vars (.env):
      - DATABASE_URL (defaults to a local SQLite file)
      - SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY (media host for uploads)
      - STORAGE_BUCKET (defaults to "assets")

    Client-side (app.client):
      - API_BASE_URL
      - CLIENT_CACHE_DIR
    """

    PROJECT_NAME: str = "Vargo-Agro Content API"
    API_PREFIX: str = "/api"

    # Database config
    DATABASE_URL: str = "sqlite:///./vargo_agro.db"

    # Supabase Storage (media host)
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    STORAGE_BUCKET: str = "assets"
    UPLOAD_FOLDER: str = "vargo-agro"

    # Activity log retention (most recent N entries)
    ACTIVITY_LOG_LIMIT: int = 100
    DEFAULT_ACTOR: str = "Admin"

    # Admin client (cache + sync)
    API_BASE_URL: str = "http://localhost:8000"
    CLIENT_CACHE_DIR: str = ".vargo-cache"
    CLIENT_TIMEOUT: float = 10.0

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
