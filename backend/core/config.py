"""Application settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./timeline.db"
    database_echo: bool = False

    # bcrypt accepts 4..31; tests lower this to keep hashing fast.
    bcrypt_rounds: int = 12

    default_page_size: int = 30
    log_level: str = "INFO"


settings = Settings()
