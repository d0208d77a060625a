"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for typequal runs.

    Values are read from ``TYPEQUAL_``-prefixed environment variables and
    from a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPEQUAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Resolve qualifiers through Elm's default imports (List, Maybe, Platform.Cmd as Cmd, ...)
    implicit_imports: bool = True


def configure_logging(settings: Settings | None = None) -> None:
    """Set up root logging from ``settings`` (reads the environment when omitted)."""
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())
