"""
Main entry point for the Remote Desktop Manager.

LEGAL NOTICE:
This tool is for personal use only. It stores remote-desktop credentials for
machines you own or administer and must not be used to collect credentials
from anyone else.
"""

import sys
import os
import signal
import logging
import argparse
from typing import List, Optional
from PyQt5.QtWidgets import QApplication, QDialog

from .ui import MainWindow, MasterKeyDialog
from .presenter import PresentationState
from .session import VaultSession
from . import config

logger = logging.getLogger(__name__)


def get_default_vault_path() -> str:
    """Get the vault path from the environment or the user's home directory."""
    override = os.environ.get(config.VAULT_PATH_ENV)
    if override:
        return os.path.abspath(os.path.expanduser(override))
    home = os.path.expanduser("~")
    return os.path.join(home, config.CONFIG_DIR_NAME, config.DEFAULT_VAULT_FILE)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="rdmanager", description=config.APP_NAME)
    parser.add_argument("--vault", help="Path to the encrypted client vault")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args, _ = parser.parse_known_args(argv)
    return args


class RemoteDesktopManagerApp:
    """Main application class for the Remote Desktop Manager."""

    def __init__(self, vault_path: str):
        """Initialize the application."""
        self.app = QApplication(sys.argv)
        self.app.setApplicationName(config.APP_NAME)
        self.app.setOrganizationName(config.APP_NAME)
        self.app.setStyle(config.APP_STYLE)

        self.session = VaultSession(vault_path)
        self.presenter = PresentationState(self.session)
        self.main_window: Optional[MainWindow] = None

        # Handle Ctrl+C gracefully
        signal.signal(signal.SIGINT, signal.SIG_DFL)

    def run(self) -> int:
        """Run the application."""
        logger.info(f"{config.APP_NAME} is running with vault {self.session.filepath}")
        dialog = MasterKeyDialog(self.presenter)
        if dialog.exec_() != QDialog.Accepted:
            logger.info("Master key dialog cancelled, exiting")
            return 0

        self.main_window = MainWindow(self.presenter)
        self.main_window.show()
        return self.app.exec_()

    def cleanup(self):
        """Wipe the key and clear the clipboard timer."""
        if self.main_window is not None:
            self.main_window.clipboard_timer.stop()
        self.session.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    level = logging.DEBUG if args.debug else getattr(logging, config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(level=level, format=config.LOG_FORMAT)

    vault_path = os.path.abspath(os.path.expanduser(args.vault)) if args.vault else get_default_vault_path()

    app = RemoteDesktopManagerApp(vault_path)
    try:
        return app.run()
    finally:
        app.cleanup()


if __name__ == "__main__":
    sys.exit(main())
