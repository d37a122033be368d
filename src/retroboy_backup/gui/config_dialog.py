"""Configuration/Settings dialog"""

import customtkinter as ctk

from ..config.manager import ConfigurationManager
from ..config.paths import AppPaths
from .styles import FONTS, PADDING, WINDOW_SIZES
from .widgets.path_selector import PathSelector


class ConfigDialog(ctk.CTkToplevel):
    """Settings dialog for the storage file and export location.

    This dialog is shown automatically on first run and can be accessed
    anytime via the Settings button in the main window.
    """

    def __init__(
        self,
        parent,
        config_manager: ConfigurationManager,
        first_run: bool = False,
    ):
        """Initialize the configuration dialog.

        Args:
            parent: Parent window
            config_manager: Configuration manager instance
            first_run: If True, shows first-run specific messaging
        """
        super().__init__(parent)

        self.config_manager = config_manager
        self.config_changed = False
        self.first_run = first_run

        self.title("Initial Setup" if first_run else "Settings")
        width, height = WINDOW_SIZES["config_dialog"]
        self.geometry(f"{width}x{height}")
        self.resizable(False, False)

        self.transient(parent)
        self.grab_set()

        self._create_ui()
        self.focus_force()

    def _create_ui(self):
        """Create the dialog UI."""
        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["large"], pady=PADDING["large"])

        if self.first_run:
            title_text = "Welcome to RetroBoy Backup Manager"
            subtitle_text = "Tell us where the emulator keeps its data"
        else:
            title_text = "Settings"
            subtitle_text = "Configure the emulator storage and export location"

        title = ctk.CTkLabel(container, text=title_text, font=FONTS["title"])
        title.pack(anchor="w", pady=(0, 5))

        subtitle = ctk.CTkLabel(container, text=subtitle_text, font=FONTS["body"], text_color="gray")
        subtitle.pack(anchor="w", pady=(0, PADDING["medium"]))

        settings = self.config_manager.config.settings

        self.storage_selector = PathSelector(
            container,
            label="Storage File:",
            initial_path=settings.storage_path or AppPaths.STORAGE_DEFAULT,
            directory=False,
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        self.storage_selector.pack(fill="x", pady=PADDING["small"])

        self.export_selector = PathSelector(
            container,
            label="Export Folder:",
            initial_path=settings.export_directory or AppPaths.EXPORT_DEFAULT,
            directory=True,
        )
        self.export_selector.pack(fill="x", pady=PADDING["small"])

        self._create_buttons(container)

    def _create_buttons(self, parent):
        """Create the dialog buttons."""
        button_frame = ctk.CTkFrame(parent, fg_color="transparent")
        button_frame.pack(fill="x", side="bottom", pady=(PADDING["medium"], 0))

        # Cancel button (not shown on first run)
        if not self.first_run:
            cancel_btn = ctk.CTkButton(
                button_frame,
                text="Cancel",
                width=100,
                fg_color="transparent",
                border_width=1,
                text_color=("gray10", "gray90"),
                command=self.destroy,
            )
            cancel_btn.pack(side="left")

        save_text = "Get Started" if self.first_run else "Save"
        save_btn = ctk.CTkButton(
            button_frame,
            text=save_text,
            width=120,
            command=self._save_and_close,
        )
        save_btn.pack(side="right")

    def _save_and_close(self):
        """Save configuration and close dialog."""
        settings = self.config_manager.config.settings

        storage_path = self.storage_selector.get_path()
        if storage_path:
            settings.storage_path = storage_path

        export_path = self.export_selector.get_path()
        if export_path:
            settings.export_directory = export_path

        settings.first_run_complete = True

        self.config_manager.save()

        self.config_changed = True
        self.destroy()
