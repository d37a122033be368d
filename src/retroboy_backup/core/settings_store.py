"""General settings (controls, cheats) kept in the reserved settings slot."""

import json
from typing import Any

from .reconciliation import SETTINGS_KEY
from .storage import KeyValueStore
from .validators import parse_json_object
from ..logging_config import get_logger

logger = get_logger("settings_store")


class SettingsStore:
    """Reads and merges the emulator's general settings.

    Settings live as one JSON object under the ``settings`` key of the
    emulator storage. Storing new settings merges them over the current ones
    at the top level: keys present in the new data replace existing keys,
    keys absent from it are kept.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self) -> dict[str, Any]:
        """Load the current settings.

        Returns:
            Settings dictionary, empty if nothing valid is stored
        """
        raw = self.store.get_item(SETTINGS_KEY)
        if raw is None:
            return {}

        try:
            return parse_json_object(raw)
        except ValueError as e:
            logger.warning(f"Stored settings are not a JSON object, ignoring them: {e}")
            return {}

    def store_settings(self, data: dict[str, Any]) -> dict[str, Any]:
        """Merge settings into the stored ones and persist the result.

        Args:
            data: Settings to merge in

        Returns:
            The merged settings that were written

        Raises:
            TypeError: If data is not a dictionary
        """
        if not isinstance(data, dict):
            raise TypeError(f"Settings must be a dictionary, got {type(data).__name__}")

        merged = self.load()
        merged.update(data)
        self.store.set_item(SETTINGS_KEY, json.dumps(merged))
        logger.info(f"Stored general settings ({len(data)} keys merged)")
        return merged
