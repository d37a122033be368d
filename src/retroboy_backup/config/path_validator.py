"""Path validation utilities for backup files and export destinations.

Provides validation for paths used in file operations to prevent:
- Reading files that cannot be a backup (wrong type, oversized)
- Writing exports into protected system directories
"""

import os
from pathlib import Path

from ..logging_config import get_logger

logger = get_logger("path_validator")

BACKUP_SUFFIX = ".json"

# Backups are a few hundred KB at most; anything far larger is not ours
MAX_BACKUP_SIZE = 64 * 1024 * 1024

# Protected system directories that should never be written to
PROTECTED_DIRECTORIES = [
    "C:\\Windows",
    "C:\\Program Files",
    "C:\\Program Files (x86)",
    "C:\\ProgramData",
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/proc",
    "/sbin",
    "/sys",
    "/usr",
]

# Additional protected paths based on environment variables
PROTECTED_ENV_PATHS = [
    "WINDIR",
    "SYSTEMROOT",
    "PROGRAMFILES",
    "PROGRAMFILES(X86)",
    "PROGRAMDATA",
]


def _get_protected_paths() -> set[Path]:
    """Build the set of protected paths including environment-based ones."""
    protected = set()

    candidates = list(PROTECTED_DIRECTORIES)
    candidates.extend(os.environ[var] for var in PROTECTED_ENV_PATHS if os.environ.get(var))

    for dir_path in candidates:
        path = Path(dir_path)
        # Only directories native to this platform are meaningful
        if not path.is_absolute():
            continue
        try:
            protected.add(path.resolve())
        except (OSError, ValueError):
            pass

    return protected


def is_safe_path(path: Path) -> bool:
    """Check if a path is outside every protected system directory.

    Args:
        path: The path to validate

    Returns:
        True if the path is safe, False otherwise
    """
    try:
        resolved = path.resolve()
    except (OSError, ValueError) as e:
        logger.warning("Failed to resolve path %s: %s", path, e)
        return False

    for protected_path in _get_protected_paths():
        if resolved == protected_path or protected_path in resolved.parents:
            logger.warning("Path %s is in protected directory %s", path, protected_path)
            return False

    return True


def validate_backup_file(backup_file: Path) -> tuple[bool, str]:
    """Validate a backup file before reading it.

    Args:
        backup_file: The file selected for import

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not backup_file:
        return False, "Backup file path is empty"

    try:
        resolved = backup_file.resolve()
    except (OSError, ValueError) as e:
        return False, f"Invalid path: {e}"

    if not resolved.exists():
        return False, "Backup file does not exist"

    if not resolved.is_file():
        return False, "Backup path is not a file"

    if resolved.suffix.lower() != BACKUP_SUFFIX:
        return False, f"Backup file must have a {BACKUP_SUFFIX} extension"

    if resolved.stat().st_size > MAX_BACKUP_SIZE:
        return False, "Backup file is too large"

    return True, ""


def validate_export_path(export_path: Path) -> tuple[bool, str]:
    """Validate an export destination (file or directory).

    Args:
        export_path: Where the export will be written

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not export_path:
        return False, "Export path is empty"

    try:
        export_path.resolve()
    except (OSError, ValueError) as e:
        return False, f"Invalid path: {e}"

    if not is_safe_path(export_path):
        return False, "Path is in a protected system directory"

    return True, ""


def sanitize_filename(filename: str) -> str:
    """Sanitize a filename by removing dangerous characters.

    Args:
        filename: The filename to sanitize

    Returns:
        Sanitized filename safe for use in file operations
    """
    dangerous_chars = ['<', '>', ':', '"', '/', '\\', '|', '?', '*', '\0']
    result = filename

    for char in dangerous_chars:
        result = result.replace(char, '_')

    # Remove leading/trailing dots and spaces
    result = result.strip('. ')

    if len(result) > 200:
        result = result[:200]

    if not result:
        result = "unnamed"

    return result
