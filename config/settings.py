#!/usr/bin/env python3
"""
Application settings for the station estimator.

Loaded from environment variables (prefix ``STREAMCOST_``) and an optional
``.env`` file. Covers where the persisted configuration lives, where
estimate exports are written, and the log level.

Usage:
    from config.settings import get_settings

    settings = get_settings()
    store_path = settings.state_path
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppSettings(BaseSettings):
    """
    Runtime settings for the Streamlit app.

    Attributes:
        state_dir: Directory holding the persisted configuration blob.
        state_key: Well-known key (file stem) of the persisted configuration.
        export_dir: Root directory for "export to estimate" bundles.
        log_level: Root log level name.
    """

    model_config = SettingsConfigDict(
        env_prefix='STREAMCOST_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    state_dir: Path = Path.home() / ".streamcost"
    state_key: str = "wrcx-calculator-state"
    export_dir: Path = Path("exports")
    log_level: str = "INFO"

    @property
    def state_path(self) -> Path:
        return self.state_dir / f"{self.state_key}.json"


@lru_cache()
def get_settings() -> AppSettings:
    """Return the cached settings instance."""
    return AppSettings()


def configure_logging(level: str = "INFO") -> None:
    """Apply a basic logging configuration once per process."""
    numeric = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
