"""Configuration management - load/save XML configuration"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional
from xml.dom import minidom

from .paths import AppPaths
from .schema import AppConfiguration, AppSettings
from ..logging_config import get_logger

logger = get_logger("config_manager")


class ConfigurationManager:
    """Manages application configuration persistence.

    Handles loading and saving configuration to XML format,
    including first-run detection and default configuration creation.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or AppPaths.CONFIG_FILE
        self.config: Optional[AppConfiguration] = None

    def is_first_run(self) -> bool:
        """Check if this is the first run of the application.

        First run is detected if:
        - Configuration file does not exist, OR
        - Configuration exists but FirstRunComplete is False

        Returns:
            True if this is the first run
        """
        if not self.config_path.exists():
            return True

        try:
            self.load()
            return not self.config.settings.first_run_complete
        except (ET.ParseError, FileNotFoundError, ValueError) as e:
            # Corrupted config = treat as first run
            logger.warning(f"Could not load config, treating as first run: {e}")
            return True

    def load(self) -> AppConfiguration:
        """Load configuration from XML file.

        Returns:
            AppConfiguration object with loaded settings

        Raises:
            FileNotFoundError: If config file doesn't exist
            ET.ParseError: If XML is malformed
        """
        logger.debug(f"Loading configuration from {self.config_path}")
        tree = ET.parse(self.config_path)
        root = tree.getroot()

        settings_elem = root.find("Settings")

        # Use defaults if Settings element is missing
        if settings_elem is not None:
            settings = AppSettings(
                first_run_complete=self._parse_bool(settings_elem, "FirstRunComplete", False),
                storage_path=self._parse_path(settings_elem, "StoragePath"),
                export_directory=self._parse_path(settings_elem, "ExportDirectory"),
                last_import_directory=self._parse_path(settings_elem, "LastImportDirectory"),
            )
        else:
            settings = AppSettings()

        self.config = AppConfiguration(settings=settings)
        logger.debug("Configuration loaded")
        return self.config

    def save(self) -> None:
        """Save current configuration to XML file.

        Creates the configuration directory if it doesn't exist.
        """
        if self.config is None:
            raise ValueError("No configuration to save")

        logger.debug(f"Saving configuration to {self.config_path}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        root = ET.Element("RetroBoyBackup", version="1.0")

        settings = self.config.settings
        settings_elem = ET.SubElement(root, "Settings")
        ET.SubElement(settings_elem, "FirstRunComplete").text = str(settings.first_run_complete).lower()
        ET.SubElement(settings_elem, "StoragePath").text = str(settings.storage_path or AppPaths.STORAGE_DEFAULT)
        ET.SubElement(settings_elem, "ExportDirectory").text = str(settings.export_directory or AppPaths.EXPORT_DEFAULT)
        ET.SubElement(settings_elem, "LastImportDirectory").text = (
            str(settings.last_import_directory) if settings.last_import_directory else ""
        )

        # Write pretty-printed XML
        xml_str = minidom.parseString(ET.tostring(root, encoding="unicode")).toprettyxml(indent="  ")
        # Remove extra blank lines that minidom adds
        lines = [line for line in xml_str.split('\n') if line.strip()]
        xml_str = '\n'.join(lines)

        self.config_path.write_text(xml_str, encoding="utf-8")

    def create_default(self) -> AppConfiguration:
        """Create a default configuration.

        Returns:
            New AppConfiguration with default values
        """
        self.config = AppConfiguration(
            settings=AppSettings(
                first_run_complete=False,
                storage_path=AppPaths.STORAGE_DEFAULT,
                export_directory=AppPaths.EXPORT_DEFAULT,
            ),
        )
        return self.config

    def remember_import_directory(self, directory: Path) -> bool:
        """Store the directory of the last imported backup and save.

        A failed save is logged and otherwise ignored; the directory is still
        remembered for the rest of the session.

        Args:
            directory: Directory the backup file was read from

        Returns:
            True if the configuration was saved
        """
        if self.config is None:
            raise ValueError("No configuration loaded")
        self.config.settings.last_import_directory = directory
        try:
            self.save()
        except OSError as e:
            logger.warning(f"Could not save last import directory: {e}")
            return False
        return True

    # Helper methods for XML parsing
    @staticmethod
    def _parse_bool(parent: ET.Element, tag: str, default: bool = False) -> bool:
        """Parse a boolean value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text:
            return elem.text.lower() == "true"
        return default

    @staticmethod
    def _parse_path(parent: ET.Element, tag: str) -> Optional[Path]:
        """Parse a path value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text and elem.text.strip():
            return AppPaths.expand_path(elem.text.strip())
        return None
