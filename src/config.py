"""Application settings loaded from environment variables."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """Memo app configuration. All values come from environment variables."""

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Storage
    data_file: Path = Field(default=Path("data/memos.json"))
    backup_enabled: bool = Field(default=False)

    # Read cache
    cache_enabled: bool = Field(default=True)
    cache_ttl_ms: int = Field(default=5000, ge=0)

    # Ids: give the highest id back when its memo is deleted
    reclaim_top_id: bool = Field(default=True)

    # Static files served under /public/
    static_dir: Path = Field(default=Path("public"))

    # Shut the process down when a handler fails unexpectedly
    fail_fast: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)


settings = Settings()
