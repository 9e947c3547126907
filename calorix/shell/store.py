"""State Store - Persistence for the application snapshot.

This module handles all storage I/O. The whole AppState is written as one
JSON document under a versioned storage key; bumping the key abandons old
snapshots instead of migrating them.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from ..core.models import AppState


logger = logging.getLogger(__name__)

STORAGE_KEY = "calorix_super_state_v7"


def _default_data_dir() -> Path:
    return Path(os.environ.get("CALORIX_DATA_DIR", Path.home() / ".calorix"))


@dataclass
class StoreConfig:
    """Configuration for the local snapshot store.

    Attributes:
        data_dir: Directory holding snapshot files
        storage_key: Versioned key the snapshot is stored under
    """

    data_dir: Path = field(default_factory=_default_data_dir)
    storage_key: str = field(default_factory=lambda: os.environ.get("CALORIX_STORAGE_KEY", STORAGE_KEY))


class StateStore(Protocol):
    def load(self) -> Optional[AppState]: ...

    def save(self, state: AppState) -> bool: ...


class JsonFileStore:
    """On-device key-value storage: one JSON file per storage key."""

    def __init__(self, config: StoreConfig | None = None) -> None:
        """Initialize the store.

        Args:
            config: Store configuration
        """
        self.config = config or StoreConfig()

    @property
    def path(self) -> Path:
        return Path(self.config.data_dir) / f"{self.config.storage_key}.json"

    def load(self) -> Optional[AppState]:
        """Read the saved snapshot.

        Returns:
            AppState if a valid snapshot exists, None otherwise
        """
        logger.debug("Loading snapshot from %s", self.path)
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to read snapshot: %s", str(e))
            return None

        try:
            return AppState.model_validate_json(raw)
        except ValueError as e:
            logger.error("Discarding unreadable snapshot: %s", str(e))
            return None

    def save(self, state: AppState) -> bool:
        """Write the snapshot, replacing the previous one.

        Args:
            state: The state to persist

        Returns:
            True if successful
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(".tmp")
            tmp.write_text(state.model_dump_json(), encoding="utf-8")
            tmp.replace(self.path)
            logger.debug("Saved snapshot to %s", self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save snapshot: %s", str(e))
            return False


class InMemoryStore:
    """Keeps the last saved snapshot in memory."""

    def __init__(self, state: Optional[AppState] = None) -> None:
        self.state = state
        self.saves = 0

    def load(self) -> Optional[AppState]:
        return self.state

    def save(self, state: AppState) -> bool:
        self.state = state
        self.saves += 1
        return True
