"""Configuration data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class AppSettings:
    """Application settings"""
    first_run_complete: bool = False
    storage_path: Optional[Path] = None
    export_directory: Optional[Path] = None
    last_import_directory: Optional[Path] = None


@dataclass
class AppConfiguration:
    """Complete application configuration"""
    settings: AppSettings = field(default_factory=AppSettings)

    def get_storage_path(self, default: Path) -> Path:
        """Get the configured emulator storage file.

        Args:
            default: Path to use when no storage file is configured

        Returns:
            Path to the JSON storage file
        """
        return self.settings.storage_path or default

    def get_export_directory(self, default: Path) -> Path:
        """Get the configured export directory.

        Args:
            default: Path to use when no export directory is configured

        Returns:
            Path to the export directory
        """
        return self.settings.export_directory or default
