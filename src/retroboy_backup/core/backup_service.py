"""Backup import and export operations for emulator storage.

Import reads a backup file into a snapshot, reconciles it into import
options and applies the options the user selected. Export dumps the whole
emulator storage, unfiltered, into one JSON document.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from .reconciliation import SETTINGS_KEY, ImportOption, reconcile, rtc_key_for
from .settings_store import SettingsStore
from .storage import KeyValueStore, StorageError
from .validators import parse_json_object
from ..config.path_validator import sanitize_filename, validate_backup_file, validate_export_path
from ..logging_config import get_logger

logger = get_logger("backup_service")

EXPORT_FILENAME_PREFIX = "retroboy-backup"


class BackupError(Exception):
    """Base exception for backup operation errors"""
    pass


class BackupReadError(BackupError):
    """Exception raised when a backup file cannot be read"""
    pass


class BackupFormatError(BackupError):
    """Exception raised when a backup is not a JSON object"""
    pass


class RestoreError(BackupError):
    """Exception raised when a selected entry cannot be applied"""
    pass


class EmptyStorageError(BackupError):
    """Exception raised when there is nothing stored to export"""
    pass


class ExportError(BackupError):
    """Exception raised when an export cannot be written"""
    pass


@dataclass
class ImportResult:
    """Outcome of applying a selection of import options"""
    imported: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failed


def default_export_filename(now: Optional[datetime] = None) -> str:
    """Build a timestamped filename for an export.

    Args:
        now: Timestamp to use, defaults to the current time

    Returns:
        Filename like retroboy-backup_20260119_143052.json
    """
    now = now or datetime.now()
    return f"{EXPORT_FILENAME_PREFIX}_{now.strftime('%Y%m%d_%H%M%S')}.json"


def parse_backup_text(text: str) -> dict[str, Any]:
    """Parse the text of a backup file into a snapshot.

    Args:
        text: Full backup file contents

    Returns:
        The snapshot mapping

    Raises:
        BackupFormatError: If the text is not JSON or not a JSON object
    """
    try:
        snapshot = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise BackupFormatError(f"Backup is not valid JSON: {e}") from e

    if not isinstance(snapshot, dict):
        raise BackupFormatError("Backup must contain a JSON object at the top level")
    return snapshot


def read_backup_file(path: Path) -> dict[str, Any]:
    """Read and parse a backup file.

    Args:
        path: Backup file selected by the user

    Returns:
        The snapshot mapping

    Raises:
        BackupReadError: If the file is rejected or cannot be read
        BackupFormatError: If the contents are not a JSON object
    """
    is_valid, error = validate_backup_file(path)
    if not is_valid:
        raise BackupReadError(error)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read backup file {path}: {e}")
        raise BackupReadError(f"Could not read backup file: {e}") from e

    snapshot = parse_backup_text(text)
    logger.info(f"Read backup {path} with {len(snapshot)} entries")
    return snapshot


class BackupService:
    """Handle backup import and export against an emulator store.

    The store is injected so the same operations work against the on-disk
    JSON store of the application and an in-memory store in tests.
    """

    def __init__(self, store: KeyValueStore, settings_store: Optional[SettingsStore] = None):
        self.store = store
        self.settings_store = settings_store or SettingsStore(store)

    def build_import_options(self, snapshot: Mapping[str, Any]) -> list[ImportOption]:
        """Reconcile a snapshot into the ordered list of import options."""
        return reconcile(snapshot)

    def apply_option(self, key: str, snapshot: Mapping[str, Any]) -> None:
        """Apply one selected import option.

        General settings are parsed and merged into the settings store.
        Cartridge RAM, and its RTC companion when the snapshot has one, is
        written verbatim into the emulator storage.

        Args:
            key: Key of the selected import option
            snapshot: The snapshot the option was built from

        Raises:
            RestoreError: If the entry cannot be applied
        """
        if key not in snapshot:
            raise RestoreError(f"{key} is not present in the backup")

        if key == SETTINGS_KEY:
            self._apply_settings(snapshot[key])
        else:
            self._apply_cartridge_data(key, snapshot)

    def _apply_settings(self, raw: Any):
        """Merge a raw settings value into the settings store."""
        if not isinstance(raw, str):
            raise RestoreError("General settings in the backup are not a JSON document")

        try:
            settings = parse_json_object(raw)
        except ValueError as e:
            raise RestoreError(f"General settings in the backup are not a JSON object: {e}") from e

        try:
            self.settings_store.store_settings(settings)
        except StorageError as e:
            raise RestoreError(str(e)) from e

    def _apply_cartridge_data(self, key: str, snapshot: Mapping[str, Any]):
        """Write cartridge RAM and its RTC companion verbatim."""
        writes = [(key, snapshot[key])]
        rtc_key = rtc_key_for(key)
        if rtc_key in snapshot:
            writes.append((rtc_key, snapshot[rtc_key]))

        # A key is applied entirely or not at all
        for write_key, value in writes:
            if not isinstance(value, str):
                raise RestoreError(f"{write_key} in the backup is not a string value")

        try:
            self.store.set_items(writes)
        except StorageError as e:
            raise RestoreError(str(e)) from e

        logger.debug(f"Wrote {', '.join(k for k, _ in writes)} to storage")

    def apply_selection(self, snapshot: Mapping[str, Any], keys: Iterable[str]) -> ImportResult:
        """Apply every selected import option independently.

        A failure for one key is recorded and does not stop the others.

        Args:
            snapshot: The snapshot the options were built from
            keys: Keys of the selected import options

        Returns:
            ImportResult listing applied and failed keys
        """
        result = ImportResult()
        for key in keys:
            try:
                self.apply_option(key, snapshot)
            except RestoreError as e:
                logger.warning(f"Failed to import {key}: {e}")
                result.failed[key] = str(e)
            else:
                result.imported.append(key)

        logger.info(f"Imported {len(result.imported)} entries, {len(result.failed)} failed")
        return result

    def export_backup(self) -> str:
        """Dump the whole emulator storage into a JSON document.

        Returns:
            JSON text with every stored key/value pair

        Raises:
            EmptyStorageError: If nothing is stored
        """
        entries = dict(self.store.items())
        if not entries:
            raise EmptyStorageError("There is no saved data to export")

        logger.info(f"Exporting {len(entries)} storage entries")
        return json.dumps(entries, indent=2)

    def write_export(self, destination: Path, now: Optional[datetime] = None) -> Path:
        """Export the storage into a file.

        Args:
            destination: Target file, or a directory to place a timestamped file in.
                Characters not allowed in filenames are replaced in a target file name.
            now: Timestamp for the generated filename

        Returns:
            Path of the written export

        Raises:
            EmptyStorageError: If nothing is stored
            ExportError: If the destination is rejected or cannot be written
        """
        if destination.is_dir():
            destination = destination / default_export_filename(now)
        else:
            destination = destination.with_name(sanitize_filename(destination.name))

        is_valid, error = validate_export_path(destination)
        if not is_valid:
            raise ExportError(error)

        document = self.export_backup()

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(document, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write export {destination}: {e}")
            raise ExportError(f"Could not write export: {e}") from e

        logger.info(f"Export written to {destination}")
        return destination
