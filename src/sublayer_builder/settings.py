from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from `SUBLAYER_BUILDER_*` environment variables or `.env`."""

    model_config = SettingsConfigDict(
        env_prefix="SUBLAYER_BUILDER_",
        env_file=".env",
        extra="ignore",
    )

    # Gradio server
    server_name: str = "127.0.0.1"
    server_port: int = 7860

    log_level: str = "INFO"

    default_sublayer_char: str = "o"

    # Where exported rule files are written before they are offered for download.
    # None means a fresh temporary directory.
    export_dir: Path | None = None


def get_settings() -> Settings:
    return Settings()
