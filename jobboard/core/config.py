"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "Mern_Stack_Job_App"
    mongodb_connect_timeout_ms: int = 10000
    mongodb_socket_timeout_ms: int = 45000

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 7 * 24 * 60

    # Auth cookie
    cookie_name: str = "token"
    cookie_expire_days: int = 7
    cookie_secure: bool = False
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    # CORS (frontend dev server)
    frontend_url: str = "http://localhost:5173"

    # Resume uploads
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    max_resume_size_mb: int = 5

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def cookie_max_age(self) -> int:
        """Cookie lifetime in seconds"""
        return self.cookie_expire_days * 24 * 60 * 60

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
