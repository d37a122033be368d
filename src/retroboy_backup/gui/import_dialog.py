"""Import dialog: choose which groups of a backup to restore"""

from typing import Any, Mapping, Optional

import customtkinter as ctk

from ..core.backup_service import BackupService, ImportResult
from ..core.reconciliation import ImportOption
from ..logging_config import get_logger
from .styles import COLORS, FONTS, PADDING, WINDOW_SIZES

logger = get_logger("import_dialog")


class ImportBackupDialog(ctk.CTkToplevel):
    """Modal dialog listing the import options of a backup.

    Every option starts checked. Pressing Import applies the checked options
    through the backup service; the outcome is kept in ``result`` for the
    caller once the dialog closes.
    """

    def __init__(
        self,
        parent,
        backup_service: BackupService,
        import_options: list[ImportOption],
        snapshot: Mapping[str, Any],
    ):
        """Initialize the import dialog.

        Args:
            parent: Parent window
            backup_service: Service used to apply the selection
            import_options: Ordered options from reconciliation
            snapshot: The backup snapshot the options were built from
        """
        super().__init__(parent)

        self.backup_service = backup_service
        self.import_options = import_options
        self.snapshot = snapshot
        self.result: Optional[ImportResult] = None

        self.option_vars: dict[str, ctk.BooleanVar] = {}

        self.title("Import Backup")
        width, height = WINDOW_SIZES["import_dialog"]
        self.geometry(f"{width}x{height}")
        self.resizable(False, True)

        self.transient(parent)
        self.grab_set()

        self._create_ui()
        self.focus_force()

    def _create_ui(self):
        """Create the dialog UI."""
        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["medium"], pady=PADDING["medium"])

        title = ctk.CTkLabel(container, text="Import Backup", font=FONTS["title"])
        title.pack(anchor="w", pady=(0, 5))

        subtitle = ctk.CTkLabel(
            container,
            text="Please choose which settings from the backup to import.",
            font=FONTS["body"],
            text_color="gray",
        )
        subtitle.pack(anchor="w", pady=(0, PADDING["small"]))

        option_list = ctk.CTkScrollableFrame(container)
        option_list.pack(fill="both", expand=True, pady=(0, PADDING["small"]))

        for option in self.import_options:
            var = ctk.BooleanVar(value=True)
            self.option_vars[option.key] = var
            cb = ctk.CTkCheckBox(option_list, text=option.label, variable=var, font=FONTS["body"])
            cb.pack(anchor="w", padx=PADDING["small"], pady=4)

        self._create_buttons(container)

    def _create_buttons(self, parent):
        """Create the dialog buttons."""
        button_frame = ctk.CTkFrame(parent, fg_color="transparent")
        button_frame.pack(fill="x", pady=(PADDING["small"], 0))

        close_btn = ctk.CTkButton(
            button_frame,
            text="Close",
            width=100,
            fg_color="transparent",
            border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        )
        close_btn.pack(side="left")

        import_btn = ctk.CTkButton(
            button_frame,
            text="Import",
            width=120,
            fg_color=COLORS["success"],
            hover_color=COLORS["success_hover"],
            command=self._import_and_close,
        )
        import_btn.pack(side="right")

    def selected_keys(self) -> list[str]:
        """Keys of the checked options, in display order."""
        return [option.key for option in self.import_options if self.option_vars[option.key].get()]

    def _import_and_close(self):
        """Apply the checked options and close the dialog."""
        keys = self.selected_keys()
        logger.debug(f"Importing {len(keys)} selected options")
        self.result = self.backup_service.apply_selection(self.snapshot, keys)
        self.destroy()
