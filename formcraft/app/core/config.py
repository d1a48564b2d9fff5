"""Application configuration.

Defines `Settings` read from environment variables and an optional `.env` file.
"""
# app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Formcraft"
    DEBUG: bool = False
    DATABASE_URL: str = "sqlite:///./formcraft.db"

    LOG_PATH: str = "logging"
    LOG_LEVEL: str = "INFO"

    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024  # 5MB
    ALLOWED_IMAGE_EXTENSIONS: tuple[str, ...] = (".jpeg", ".jpg", ".png", ".gif")

    CORS_ORIGINS: list[str] = ["*"]


settings = Settings()
