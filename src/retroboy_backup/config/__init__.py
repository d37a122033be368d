"""Configuration management module.

This module provides configuration storage, loading, and data models for the application.

Submodules:
    manager: ConfigurationManager for loading/saving XML configuration
    schema: Data classes defining configuration structure (AppSettings, AppConfiguration)
    paths: AppPaths with default locations for config, storage and exports
    path_validator: Validation of backup files and export destinations

The configuration is stored as XML in <config dir>/configuration.xml.
ConfigurationManager is imported from its submodule because it depends on
logging_config, which itself depends on paths.
"""

from .schema import AppConfiguration, AppSettings
from .paths import AppPaths

__all__ = [
    "AppConfiguration",
    "AppSettings",
    "AppPaths",
]
