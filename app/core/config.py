"""Application configuration from environment."""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Users API"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Database
    database_url: str = "sqlite+aiosqlite:///./users.db"
    # disable | require (TLS, peer not verified) | verify
    database_ssl: Literal["disable", "require", "verify"] = "require"
    database_echo: bool = False

    cors_origins: list[str] = ["*"]

    # 404 instead of an empty object for missing ids on get/update
    strict_not_found: bool = False
    # Put raw driver messages in 500 bodies
    expose_store_errors: bool = False

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
