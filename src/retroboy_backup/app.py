"""Main application entry point and orchestrator"""

import sys

import customtkinter as ctk

from .config.manager import ConfigurationManager
from .gui.config_dialog import ConfigDialog
from .gui.main_window import MainWindow
from .logging_config import setup_logging, get_logger
from . import __app_name__, __version__


class RetroBoyBackupApp:
    """Main application orchestrator.

    Handles initialization, first-run detection, and application lifecycle.
    """

    def __init__(self):
        self.config_manager = ConfigurationManager()
        self.main_window: MainWindow | None = None

    def run(self):
        """Run the application."""
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        is_first_run = self.config_manager.is_first_run()

        if is_first_run:
            self.config_manager.create_default()
        else:
            self.config_manager.load()

        self.main_window = MainWindow(self.config_manager)

        # If first run, show config dialog immediately after main window renders
        if is_first_run:
            self.main_window.after(100, self._show_first_run_config)

        self.main_window.mainloop()

    def _show_first_run_config(self):
        """Show the configuration dialog for first-run setup."""
        if self.main_window is None:
            return

        dialog = ConfigDialog(
            self.main_window,
            self.config_manager,
            first_run=True
        )
        self.main_window.wait_window(dialog)

        # Closed through the window manager instead of "Get Started"
        if not self.config_manager.config.settings.first_run_complete:
            self.config_manager.config.settings.first_run_complete = True
            self.config_manager.save()

        self.main_window._open_storage()
        self.main_window._refresh_ui()


def main():
    """Application entry point."""
    logger = setup_logging(debug="--debug" in sys.argv)
    logger.info(f"Starting {__app_name__} v{__version__}")

    try:
        app = RetroBoyBackupApp()
        app.run()
    except Exception as e:
        logger.exception("Fatal error during startup")
        import tkinter as tk
        from tkinter import messagebox

        root = tk.Tk()
        root.withdraw()
        messagebox.showerror(
            "Startup Error",
            f"Failed to start {__app_name__}:\n\n{e}"
        )
        root.destroy()
        sys.exit(1)
    finally:
        logger.info(f"{__app_name__} shutting down")


if __name__ == "__main__":
    main()
