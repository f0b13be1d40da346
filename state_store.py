#!/usr/bin/env python3
"""
state_store.py

Persistence adapter: one JSON-serialized StationConfig under a single
well-known key (a file named after the key in the state directory).
Reads fall back to the compiled-in defaults; writes are best-effort.
Failures are logged and never raised to the caller.
"""

import json
import logging
import os
from pathlib import Path
from typing import Union

from config_manager import StationConfig

logger = logging.getLogger(__name__)


class StateStore:
    """Loads and saves the configuration snapshot at ``path``."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @classmethod
    def from_settings(cls, settings) -> 'StateStore':
        """Store at ``<state_dir>/<state_key>.json``."""
        return cls(settings.state_path)

    def load(self) -> StationConfig:
        """
        Read the persisted snapshot merged over the defaults.

        Returns:
            StationConfig; defaults when the file is absent or unreadable
        """
        if not self.path.exists():
            logger.info("No saved configuration at %s; using defaults", self.path)
            return StationConfig()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read saved configuration %s: %s; using defaults", self.path, e)
            return StationConfig()

        try:
            return StationConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning("Saved configuration %s is malformed: %s; using defaults", self.path, e)
            return StationConfig()

    def save(self, config: StationConfig) -> bool:
        """
        Write the snapshot atomically.

        Returns:
            True on success, False when the write failed (logged)
        """
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2)
            os.replace(tmp_path, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save configuration to %s: %s", self.path, e)
            return False

    def clear(self) -> None:
        """Remove the persisted snapshot, if any."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error("Failed to clear saved configuration %s: %s", self.path, e)
