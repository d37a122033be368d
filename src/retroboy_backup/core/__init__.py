"""Core business logic module.

This module contains the backup reconciliation engine and the services built on it.

Submodules:
    validators: Well-formedness predicates (base64, JSON object, upper case identifier)
    reconciliation: Classification of backup entries into ordered import options
    storage: KeyValueStore interface with in-memory and JSON file implementations
    settings_store: SettingsStore merging general settings into the settings slot
    backup_service: BackupService for reading, applying and exporting backups

Reconciliation is pure: it never touches storage and never mutates the snapshot.
"""

from .reconciliation import ImportOption, reconcile

__all__ = [
    "ImportOption",
    "reconcile",
]
