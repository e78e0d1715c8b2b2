"""
User interface for the Remote Desktop Manager.

LEGAL NOTICE:
This tool is for personal use only. It stores remote-desktop credentials for
machines you own or administer and must not be used to collect credentials
from anyone else.
"""

import os
from PyQt5.QtWidgets import (
    QMainWindow, QDialog, QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QLineEdit, QPushButton, QTableWidget, QTableWidgetItem,
    QMessageBox, QFileDialog, QDialogButtonBox, QHeaderView, QAction, QApplication,
)
from PyQt5.QtCore import Qt, QTimer

from .presenter import AppMode, PresentationState
from .session import SessionState
from . import config


def show_pending_error(parent, presenter: PresentationState) -> None:
    """Pop up and clear the presenter's error message, if any."""
    if presenter.error_message:
        QMessageBox.warning(parent, "Error", presenter.error_message)
        presenter.dismiss_error()


class MasterKeyDialog(QDialog):
    """Create-vault or unlock dialog, depending on the session state."""

    def __init__(self, presenter: PresentationState, parent=None):
        super().__init__(parent)
        self.presenter = presenter
        self.is_new_vault = presenter.is_first_run
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        if self.is_new_vault:
            self.setWindowTitle(f"{config.APP_TITLE_PREFIX} - Create Master Key")
        else:
            self.setWindowTitle(f"{config.APP_TITLE_PREFIX} - Enter Master Key")
        self.setMinimumSize(400, 160)
        self.setModal(True)

        layout = QVBoxLayout()

        vault_label = QLabel(f"Vault: {os.path.basename(self.presenter.session.filepath)}")
        vault_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(vault_label)

        layout.addWidget(QLabel(config.MSG_CREATE_PROMPT if self.is_new_vault else config.MSG_UNLOCK_PROMPT))

        self.password_input = QLineEdit()
        self.password_input.setEchoMode(QLineEdit.Password)
        self.password_input.returnPressed.connect(self.submit)
        layout.addWidget(self.password_input)

        if self.is_new_vault:
            layout.addWidget(QLabel("Confirm Master Key"))
            self.confirm_input = QLineEdit()
            self.confirm_input.setEchoMode(QLineEdit.Password)
            self.confirm_input.returnPressed.connect(self.submit)
            layout.addWidget(self.confirm_input)

        self.submit_button = QPushButton("Create" if self.is_new_vault else "Submit")
        self.submit_button.clicked.connect(self.submit)
        layout.addWidget(self.submit_button)

        layout.addStretch()
        self.setLayout(layout)
        self.password_input.setFocus()

    def submit(self):
        """Create or unlock the vault."""
        self.presenter.master_key_input = self.password_input.text()
        if self.is_new_vault:
            self.presenter.confirm_master_key_input = self.confirm_input.text()

        state = self.presenter.submit_master_key()
        if state is SessionState.UNLOCKED:
            self.accept()
            return

        if state is SessionState.REJECTED_KEY:
            QMessageBox.warning(self, "Incorrect Master Key", config.MSG_REJECTED_KEY)
            self.presenter.acknowledge_rejection()
            self.password_input.clear()
            self.password_input.setFocus()
            return

        show_pending_error(self, self.presenter)


class ProfileDialog(QDialog):
    """Dialog for adding/editing a client."""

    def __init__(self, presenter: PresentationState, parent=None):
        super().__init__(parent)
        self.presenter = presenter
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        editing = self.presenter.mode is AppMode.EDITING
        self.setWindowTitle("Edit Client" if editing else "Add New Client")
        self.setModal(True)
        self.setMinimumWidth(400)

        layout = QFormLayout()

        self.name_input = QLineEdit(self.presenter.name_input)
        layout.addRow("Name:", self.name_input)

        self.address_input = QLineEdit(self.presenter.address_input)
        layout.addRow("IP:", self.address_input)

        password_layout = QHBoxLayout()
        self.password_input = QLineEdit(self.presenter.secret_input)
        self.password_input.setEchoMode(QLineEdit.Normal if self.presenter.show_password else QLineEdit.Password)
        password_layout.addWidget(self.password_input)

        self.show_password_button = QPushButton("Hide" if self.presenter.show_password else "Show")
        self.show_password_button.setCheckable(True)
        self.show_password_button.setChecked(self.presenter.show_password)
        self.show_password_button.toggled.connect(self.toggle_password_visibility)
        password_layout.addWidget(self.show_password_button)
        layout.addRow("Password:", password_layout)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

        self.setLayout(layout)

    def toggle_password_visibility(self, checked: bool):
        """Toggle password visibility."""
        self.presenter.toggle_password()
        if checked:
            self.password_input.setEchoMode(QLineEdit.Normal)
            self.show_password_button.setText("Hide")
        else:
            self.password_input.setEchoMode(QLineEdit.Password)
            self.show_password_button.setText("Show")

    def collect(self):
        """Copy the form into the presenter."""
        self.presenter.name_input = self.name_input.text()
        self.presenter.address_input = self.address_input.text()
        self.presenter.secret_input = self.password_input.text()


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, presenter: PresentationState):
        super().__init__()
        self.presenter = presenter
        self.clipboard_timer = QTimer()
        self.clipboard_timer.setSingleShot(True)
        self.clipboard_timer.timeout.connect(self.clear_clipboard)
        self.init_ui()
        self.load_clients()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(config.APP_TITLE_PREFIX)
        self.resize(config.WINDOW_WIDTH, config.WINDOW_HEIGHT)

        self.create_menu_bar()

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        central_widget.setLayout(layout)

        self.table = QTableWidget()
        self.table.setColumnCount(2)
        self.table.setHorizontalHeaderLabels(["Client", ""])
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setSelectionMode(QTableWidget.SingleSelection)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.itemSelectionChanged.connect(self.selection_changed)
        layout.addWidget(self.table)

        self.statusBar().showMessage("Vault unlocked")

    def create_menu_bar(self):
        """Create the menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")

        new_action = QAction("New", self)
        new_action.setShortcut("Ctrl+N")
        new_action.triggered.connect(self.add_client)
        file_menu.addAction(new_action)

        edit_action = QAction("Edit", self)
        edit_action.setShortcut("Ctrl+E")
        edit_action.triggered.connect(self.edit_client)
        file_menu.addAction(edit_action)

        remove_action = QAction("Remove", self)
        remove_action.setShortcut("Del")
        remove_action.triggered.connect(self.remove_client)
        file_menu.addAction(remove_action)

        import_action = QAction("Import...", self)
        import_action.triggered.connect(self.import_clients)
        file_menu.addAction(import_action)

        file_menu.addSeparator()

        exit_action = QAction("Exit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        help_menu = menubar.addMenu("Help")
        about_action = QAction("About", self)
        about_action.triggered.connect(self.show_about)
        help_menu.addAction(about_action)

    def load_clients(self):
        """Load clients into the table."""
        selected = self.presenter.selected
        self.table.blockSignals(True)
        self.table.setRowCount(0)
        for index, name in self.presenter.rows():
            row = self.table.rowCount()
            self.table.insertRow(row)
            self.table.setItem(row, 0, QTableWidgetItem(name))

            connect_button = QPushButton("Connect")
            connect_button.clicked.connect(lambda _, i=index: self.connect_client(i))
            self.table.setCellWidget(row, 1, connect_button)

        if selected is not None and selected < self.table.rowCount():
            self.table.selectRow(selected)
        else:
            selected = None
        self.table.blockSignals(False)
        self.presenter.select(selected)
        self.statusBar().showMessage(f"{self.table.rowCount()} clients")

    def selection_changed(self):
        rows = self.table.selectionModel().selectedRows()
        self.presenter.select(rows[0].row() if rows else None)

    def add_client(self):
        self.presenter.begin_add()
        self._run_profile_dialog()

    def edit_client(self):
        if self.presenter.begin_edit():
            self._run_profile_dialog()
        else:
            show_pending_error(self, self.presenter)

    def _run_profile_dialog(self):
        dialog = ProfileDialog(self.presenter, self)
        if dialog.exec_():
            dialog.collect()
            self.presenter.save()
            self.load_clients()
            show_pending_error(self, self.presenter)
        else:
            self.presenter.cancel()

    def remove_client(self):
        if not self.presenter.begin_remove():
            show_pending_error(self, self.presenter)
            return

        name = self.presenter.session.profiles()[self.presenter.selected].name
        reply = QMessageBox.question(
            self, "Remove Client", f"Remove Client: {name}",
            QMessageBox.Yes | QMessageBox.No, QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self.presenter.confirm_remove()
            self.load_clients()
            show_pending_error(self, self.presenter)
        else:
            self.presenter.cancel()

    def import_clients(self):
        """Import clients from a file written by an old release."""
        filepath, _ = QFileDialog.getOpenFileName(self, "Import Clients")
        if not filepath:
            return
        count = self.presenter.import_file(filepath)
        self.load_clients()
        if self.presenter.error_message:
            show_pending_error(self, self.presenter)
        else:
            self.statusBar().showMessage(f"Imported {count} clients", 5000)

    def connect_client(self, index: int):
        """Copy the password and start the remote desktop client."""
        if self.presenter.connect(index, QApplication.clipboard()):
            if config.CLIPBOARD_CLEAR_TIMEOUT_DEFAULT > 0:
                self.clipboard_timer.start(config.CLIPBOARD_CLEAR_TIMEOUT_DEFAULT)
                self.statusBar().showMessage(
                    f"Password copied to clipboard (auto-clear in {config.CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS}s)", 2000
                )
        else:
            show_pending_error(self, self.presenter)

    def clear_clipboard(self):
        """Clear the clipboard."""
        QApplication.clipboard().clear()

    def show_about(self):
        self.presenter.show_about()
        QMessageBox.about(self, "About", f"{config.APP_TITLE_PREFIX}\n\n{config.APP_ABOUT_TEXT}")
        self.presenter.cancel()

    def closeEvent(self, event):
        self.clipboard_timer.stop()
        super().closeEvent(event)
