"""Main application window: storage overview with import and export actions."""

from pathlib import Path
from tkinter import filedialog, messagebox
from typing import Optional

import customtkinter as ctk

from .. import __app_name__, __version__
from ..config.manager import ConfigurationManager
from ..config.paths import AppPaths
from ..core.backup_service import (
    BackupError,
    BackupService,
    EmptyStorageError,
    read_backup_file,
)
from ..core.reconciliation import reconcile, rtc_key_for
from ..core.storage import JsonFileStore, StorageError
from ..logging_config import get_logger
from .config_dialog import ConfigDialog
from .import_dialog import ImportBackupDialog
from .styles import COLORS, FONTS, PADDING, WINDOW_SIZES

logger = get_logger("main_window")

BACKUP_FILETYPES = [("Backup files", "*.json"), ("All files", "*.*")]


class MainWindow(ctk.CTk):
    """Main application window.

    Layout:
    - Top: toolbar with Import, Export and Settings buttons
    - Center: what is currently in the emulator storage
    - Bottom: status bar
    """

    def __init__(self, config_manager: ConfigurationManager):
        super().__init__()

        self.config_manager = config_manager
        self.backup_service: Optional[BackupService] = None

        self.title(f"{__app_name__} v{__version__}")
        width, height = WINDOW_SIZES["main"]
        min_width, min_height = WINDOW_SIZES["min_main"]
        self.geometry(f"{width}x{height}")
        self.minsize(min_width, min_height)

        self._create_ui()
        self._open_storage()
        self._refresh_ui()

    def _create_ui(self):
        """Create the main UI layout."""
        self._create_toolbar()

        self.content = ctk.CTkScrollableFrame(self, label_text="Stored data")
        self.content.pack(fill="both", expand=True, padx=PADDING["medium"], pady=(0, PADDING["medium"]))

        self._create_status_bar()

    def _create_toolbar(self):
        """Create the top toolbar."""
        toolbar = ctk.CTkFrame(self, height=50, fg_color=("#3d3d3d", "#1a1a1a"))
        toolbar.pack(fill="x", padx=PADDING["medium"], pady=PADDING["medium"])
        toolbar.pack_propagate(False)

        title = ctk.CTkLabel(toolbar, text=__app_name__, font=FONTS["title"])
        title.pack(side="left", padx=PADDING["medium"], pady=PADDING["small"])

        version = ctk.CTkLabel(toolbar, text=f"v{__version__}", font=FONTS["small"], text_color="gray")
        version.pack(side="left", pady=PADDING["small"])

        self.settings_btn = ctk.CTkButton(
            toolbar, text="Settings", width=90, command=self._show_config_dialog,
        )
        self.settings_btn.pack(side="right", padx=(5, PADDING["small"]))

        self.export_btn = ctk.CTkButton(
            toolbar, text="Export Backup", width=120, command=self._export_backup,
        )
        self.export_btn.pack(side="right", padx=5)

        self.import_btn = ctk.CTkButton(
            toolbar, text="Import Backup", width=120,
            fg_color=COLORS["success"], hover_color=COLORS["success_hover"],
            command=self._import_backup,
        )
        self.import_btn.pack(side="right", padx=5)

    def _create_status_bar(self):
        """Create the bottom status bar."""
        self.status_bar = ctk.CTkFrame(self, height=30, fg_color=("#3d3d3d", "#1a1a1a"))
        self.status_bar.pack(fill="x", side="bottom")
        self.status_bar.pack_propagate(False)

        self.status_label = ctk.CTkLabel(self.status_bar, text="Ready", font=FONTS["small"], text_color=("#cccccc", "#999999"))
        self.status_label.pack(side="left", padx=PADDING["medium"], pady=2)

    def _storage_path(self) -> Path:
        return self.config_manager.config.get_storage_path(AppPaths.STORAGE_DEFAULT)

    def _open_storage(self):
        """Open the configured emulator storage file."""
        path = self._storage_path()
        try:
            self.backup_service = BackupService(JsonFileStore(path))
            logger.info(f"Opened emulator storage {path}")
        except StorageError as e:
            logger.error(f"Could not open emulator storage: {e}")
            self.backup_service = None
            messagebox.showerror("Storage Error", str(e))

    def _refresh_ui(self):
        """Rebuild the stored data list."""
        for widget in self.content.winfo_children():
            widget.destroy()

        state = "normal" if self.backup_service else "disabled"
        self.import_btn.configure(state=state)
        self.export_btn.configure(state=state)

        if self.backup_service is None:
            self._add_message_row("Emulator storage could not be opened. Check Settings.")
            return

        stored = dict(self.backup_service.store.items())
        if not stored:
            self._add_message_row("Nothing stored yet. Import a backup to get started.")
            return

        # Same classification as imports, so users see what an export would restore
        options = reconcile(stored)
        for option in options:
            row = ctk.CTkLabel(self.content, text=option.label, font=FONTS["body"], anchor="w")
            row.pack(fill="x", padx=PADDING["small"], pady=2)

        # Companions are part of their cartridge entry, not "other" data
        covered = {option.key for option in options}
        covered.update(rtc_key_for(option.key) for option in options)
        other_count = len([key for key in stored if key not in covered])
        if other_count:
            self._add_message_row(f"{other_count} other stored entries")

    def _add_message_row(self, text: str):
        label = ctk.CTkLabel(self.content, text=text, font=FONTS["body"], text_color="gray")
        label.pack(pady=PADDING["large"])

    def _import_backup(self):
        """Pick a backup file and open the import dialog for it."""
        if self.backup_service is None:
            return

        initial_dir = self.config_manager.config.settings.last_import_directory
        selected = filedialog.askopenfilename(
            title="Select Backup",
            initialdir=str(initial_dir) if initial_dir else None,
            filetypes=BACKUP_FILETYPES,
        )
        if not selected:
            return

        path = Path(selected)
        try:
            snapshot = read_backup_file(path)
        except BackupError as e:
            messagebox.showerror("Import Error", f"Could not read the backup:\n\n{e}")
            self._set_status(f"Import failed: {e}")
            return

        # Failure only loses the file dialog start folder
        self.config_manager.remember_import_directory(path.parent)

        import_options = self.backup_service.build_import_options(snapshot)
        if not import_options:
            messagebox.showinfo("Import Backup", "No valid data found in the backup to import.")
            self._set_status("Nothing to import")
            return

        dialog = ImportBackupDialog(self, self.backup_service, import_options, snapshot)
        self.wait_window(dialog)

        result = dialog.result
        if result is None:
            self._set_status("Import cancelled")
            return

        if result.success:
            messagebox.showinfo("Import Backup", "All selected settings have imported successfully!")
            self._set_status(f"Imported {len(result.imported)} entries")
        else:
            failures = "\n".join(f"{key}: {reason}" for key, reason in result.failed.items())
            messagebox.showwarning(
                "Import Backup",
                f"Imported {len(result.imported)} entries, {len(result.failed)} failed:\n\n{failures}",
            )
            self._set_status(f"Imported {len(result.imported)} entries, {len(result.failed)} failed")

        self._refresh_ui()

    def _export_backup(self):
        """Export the emulator storage to the configured export folder."""
        if self.backup_service is None:
            return

        export_dir = self.config_manager.config.get_export_directory(AppPaths.EXPORT_DEFAULT)
        try:
            AppPaths.ensure_export_dir(export_dir)
            path = self.backup_service.write_export(export_dir)
        except EmptyStorageError:
            messagebox.showinfo("Export Backup", "There is no saved data to export yet.")
            self._set_status("Nothing to export")
            return
        except (BackupError, OSError) as e:
            messagebox.showerror("Export Error", str(e))
            self._set_status(f"Export failed: {e}")
            return

        self._set_status(f"Exported to {path}")

    def _show_config_dialog(self):
        """Show the settings dialog and reopen storage if it changed."""
        dialog = ConfigDialog(self, self.config_manager)
        self.wait_window(dialog)

        if dialog.config_changed:
            self._open_storage()
            self._refresh_ui()
            self._set_status("Settings saved")

    def _set_status(self, message: str):
        """Update the status bar."""
        self.status_label.configure(text=message)
