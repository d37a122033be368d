"""GUI module using CustomTkinter for a modern interface.

Components:
    MainWindow: Main application window showing the emulator storage with
        Import Backup / Export Backup / Settings actions
    ImportBackupDialog: Checklist of import options for a selected backup
    ConfigDialog: Settings dialog for first-run setup and configuration

Submodules:
    styles: Theme constants (colors, fonts, padding, window sizes)
    widgets: Reusable widget components (PathSelector)
"""

from .main_window import MainWindow
from .config_dialog import ConfigDialog
from .import_dialog import ImportBackupDialog

__all__ = [
    "MainWindow",
    "ConfigDialog",
    "ImportBackupDialog",
]
