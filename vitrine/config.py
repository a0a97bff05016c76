from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "LS Pratas"
    ENVIRONMENT: str = "local"
    STORE_NAME: str = "L.S. PRATAS"
    OWNER_NAME: str = "Laureane Simões"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./vitrine.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Admin login
    # ==============================
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_PASSWORD_HASH: Optional[str] = None
    ADMIN_PASSWORD_SALT: Optional[str] = None
    ADMIN_PBKDF2_ROUNDS: int = 200_000
    SESSION_SECRET: Optional[str] = None
    SESSION_COOKIE: str = "vitrine_session"

    # ==============================
    # Media uploads
    # ==============================
    MEDIA_DIR: str = "media"
    MEDIA_BASE_URL: str = "/media"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # ==============================
    # Contact / WhatsApp handoff
    # ==============================
    WHATSAPP_NUMBER: str = "5567991116421"
    WHATSAPP_BASE_URL: str = "https://wa.me"
    INSTAGRAM_URL: str = "https://www.instagram.com/llspratas"
    INSTAGRAM_HANDLE: str = "@llspratas"

    # ==============================
    # UI
    # ==============================
    NOTIFICATION_TTL_MS: int = 3000
    STORE_TIMEZONE: str = "America/Campo_Grande"


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
