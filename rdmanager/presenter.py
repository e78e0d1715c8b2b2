"""
UI-only state for the Remote Desktop Manager.

PresentationState holds what the widgets need between events (form text,
selection, the password toggle, the pending error message) and forwards the
real work to a VaultSession. It never touches the key or the file itself, and
it turns vault errors into the strings the UI shows.
"""

import enum
import logging
from typing import Callable, List, Optional, Tuple

from .exceptions import LaunchError, VaultError
from .launcher import launch
from .session import SessionState, VaultSession
from .storage import Profile
from . import config

logger = logging.getLogger(__name__)


class AppMode(enum.Enum):
    NORMAL = "normal"
    ADDING = "adding"
    EDITING = "editing"
    REMOVING = "removing"
    ABOUT = "about"


class PresentationState:
    """Form buffers and view flags layered over a VaultSession."""

    def __init__(self, session: VaultSession, launcher: Callable = launch):
        self.session = session
        self.launcher = launcher
        self.mode = AppMode.NORMAL
        self.selected: Optional[int] = None
        self.name_input = ""
        self.address_input = ""
        self.secret_input = ""
        self.show_password = False
        self.master_key_input = ""
        self.confirm_master_key_input = ""
        self.error_message: Optional[str] = None

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def is_first_run(self) -> bool:
        return self.session.state is SessionState.NO_CONTAINER

    def rows(self) -> List[Tuple[int, str]]:
        """(index, name) for every client, in display order."""
        return [(i, p.name) for i, p in enumerate(self.session.profiles())]

    def masked_secret(self) -> str:
        if self.show_password:
            return self.secret_input
        return config.PASSWORD_MASK_CHAR * len(self.secret_input)

    def toggle_password(self) -> None:
        self.show_password = not self.show_password

    def dismiss_error(self) -> None:
        self.error_message = None

    # Master key dialogs

    def submit_master_key(self) -> SessionState:
        """Create or unlock the vault with the typed master key."""
        if self.is_first_run and self.master_key_input != self.confirm_master_key_input:
            self.error_message = config.MSG_KEYS_DO_NOT_MATCH
            return self.state

        creating = self.is_first_run
        try:
            state = self.session.submit(self.master_key_input)
        except VaultError as e:
            if creating:
                self.error_message = f"Failed to save clients: {e}"
            else:
                self.error_message = f"Failed to open vault: {e}"
            return self.state

        if state is SessionState.UNLOCKED:
            self.master_key_input = ""
            self.confirm_master_key_input = ""
            self.error_message = None
        return state

    def acknowledge_rejection(self) -> SessionState:
        state = self.session.acknowledge()
        self.master_key_input = ""
        self.confirm_master_key_input = ""
        return state

    # Client list

    def select(self, index: Optional[int]) -> None:
        self.selected = index

    def begin_add(self) -> None:
        self.clear_fields()
        self.mode = AppMode.ADDING

    def begin_edit(self) -> bool:
        if self.selected is None:
            self.error_message = config.MSG_SELECT_TO_EDIT
            return False
        profile = self.session.profiles()[self.selected]
        self.name_input = profile.name
        self.address_input = profile.address
        self.secret_input = profile.secret
        self.mode = AppMode.EDITING
        return True

    def begin_remove(self) -> bool:
        if self.selected is None:
            self.error_message = config.MSG_SELECT_TO_REMOVE
            return False
        self.mode = AppMode.REMOVING
        return True

    def show_about(self) -> None:
        self.mode = AppMode.ABOUT

    def cancel(self) -> None:
        self.clear_fields()
        self.mode = AppMode.NORMAL

    def clear_fields(self) -> None:
        self.name_input = ""
        self.address_input = ""
        self.secret_input = ""

    def save(self) -> bool:
        """
        Store the form as a new client (ADDING) or over the selection (EDITING).

        The change is kept in memory even when writing the vault fails; the
        failure is reported through error_message.
        """
        profile = Profile(self.name_input, self.address_input, self.secret_input)
        try:
            if self.mode is AppMode.ADDING:
                self.session.add_profile(profile)
            elif self.mode is AppMode.EDITING and self.selected is not None:
                self.session.edit_profile(self.selected, profile)
            else:
                return False
        except VaultError as e:
            self.error_message = f"Failed to save clients: {e}"
            return False
        finally:
            self.clear_fields()
            self.mode = AppMode.NORMAL
        return True

    def confirm_remove(self) -> bool:
        if self.selected is None:
            return False
        index, self.selected = self.selected, None
        try:
            self.session.remove_profile(index)
        except VaultError as e:
            self.error_message = f"Failed to save clients: {e}"
            return False
        finally:
            self.clear_fields()
            self.mode = AppMode.NORMAL
        return True

    def import_file(self, filepath: str) -> int:
        """
        Import a legacy client file; returns the number of clients added.

        If the clients were read but the vault could not be rewritten they stay
        in memory, and the failure is reported as a save error.
        """
        before = len(self.session.profiles())
        try:
            return self.session.import_legacy(filepath)
        except VaultError as e:
            added = len(self.session.profiles()) - before
            if added:
                self.error_message = f"Failed to save clients: {e}"
            else:
                self.error_message = f"Failed to import clients: {e}"
            return added

    def connect(self, index: int, clipboard=None) -> bool:
        profile = self.session.profiles()[index]
        try:
            self.launcher(profile, clipboard)
        except LaunchError as e:
            self.error_message = f"Failed to connect to client: {e}"
            return False
        return True
