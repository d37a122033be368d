"""RetroBoy Backup Manager - backup import/export for the RetroBoy emulator.

This application provides:
    - Export of everything the emulator has persisted (settings, cartridge RAM, RTC data)
      into a single portable JSON backup file
    - Selective import of a backup: every entry is classified, cartridge RAM is
      paired with its RTC companion, and the user picks which groups to restore
    - General settings (controls/cheats) merged into the settings store on import

The application uses CustomTkinter for the GUI and stores its configuration
in %APPDATA%/RetroBoyBackup (or ~/.config/RetroBoyBackup).

Package Structure:
    app: Main application entry point and orchestrator
    config: Configuration management, paths, schemas, and path validation
    core: Backup reconciliation engine, storage, settings store, backup service
    gui: User interface components (main window, dialogs, widgets)

Quick Start:
    Run from command line::

        python -m retroboy_backup

    Or programmatically::

        from retroboy_backup.core.reconciliation import reconcile
        options = reconcile({"POKEMON": "dGVzdA=="})

Configuration:
    - Config file: <config dir>/configuration.xml
    - Log file: <config dir>/retroboy_backup.log
    - Emulator storage: <config dir>/storage.json
"""

__version__ = "1.0.0"
__app_name__ = "RetroBoy Backup Manager"
