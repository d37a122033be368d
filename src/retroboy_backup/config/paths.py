"""Default paths for configuration, emulator storage and exports"""

import os
from pathlib import Path


def _config_root() -> Path:
    """Resolve the per-user configuration root.

    Uses %APPDATA% on Windows and ~/.config elsewhere.
    """
    appdata = os.environ.get("APPDATA")
    if appdata:
        return Path(appdata)
    return Path.home() / ".config"


class AppPaths:
    """Default paths used by the application.

    The config root follows the platform convention (APPDATA or ~/.config).
    """

    # Configuration file location
    CONFIG_DIR = _config_root() / "RetroBoyBackup"
    CONFIG_FILE = CONFIG_DIR / "configuration.xml"

    # Emulator key/value storage (stands in for browser local storage)
    STORAGE_DEFAULT = CONFIG_DIR / "storage.json"

    # Default export location
    EXPORT_DEFAULT = Path.home() / "RetroBoyBackups"

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand environment variables and ~ in path string.

        Args:
            path_str: Path string potentially containing environment variables

        Returns:
            Path object with expanded variables
        """
        return Path(os.path.expandvars(path_str)).expanduser()

    @classmethod
    def ensure_export_dir(cls, export_path: Path | None = None) -> Path:
        """Ensure the export directory exists.

        Args:
            export_path: Optional custom export path, uses default if None

        Returns:
            Path to the export directory
        """
        path = export_path or cls.EXPORT_DEFAULT
        path.mkdir(parents=True, exist_ok=True)
        return path
