"""
Key lifecycle for the client vault.

A VaultSession owns the vault key and the client list. The UI drives it through
submit()/acknowledge() until it is unlocked, then through the add/edit/remove
operations, each of which re-encrypts and rewrites the whole vault file.

    NO_CONTAINER --submit--> UNLOCKED
    LOCKED --submit--> UNLOCKED | REJECTED_KEY
    REJECTED_KEY --acknowledge--> LOCKED
"""

import enum
import logging
from typing import List, Optional, Union

from .crypto import CryptoManager
from .exceptions import (
    AuthenticationError, FormatError, InvalidStateError, VaultIOError, VaultLockedError,
)
from .storage import (
    Profile, container_exists, decode_profiles, encode_profiles, read_container, write_container,
)
from . import config

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    NO_CONTAINER = "no_container"
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    REJECTED_KEY = "rejected_key"


class VaultSession:
    """Owns the vault key and the client list for one vault file."""

    def __init__(self, filepath: str, crypto: Optional[CryptoManager] = None):
        """
        Initialize the session.
        Args:
            filepath: Path to the encrypted vault file
            crypto: Crypto primitives, mainly for tests
        """
        self.filepath = filepath
        self.crypto = crypto or CryptoManager()
        self._key: Optional[bytearray] = None
        self._profiles: List[Profile] = []
        self._state = self._initial_state()
        logger.debug(f"Vault session for {filepath} starts in state {self._state.name}")

    def _initial_state(self) -> SessionState:
        if container_exists(self.filepath):
            return SessionState.LOCKED
        return SessionState.NO_CONTAINER

    @property
    def state(self) -> SessionState:
        return self._state

    def is_unlocked(self) -> bool:
        """Check if vault is unlocked."""
        return self._state is SessionState.UNLOCKED

    def profiles(self) -> List[Profile]:
        """
        Get all clients in display order.
        The list is a copy; Profile values are immutable.
        """
        self._require_unlocked()
        return list(self._profiles)

    def submit(self, passphrase: Union[str, bytes]) -> SessionState:
        """
        Present a master passphrase.

        With no vault on disk this creates one holding an empty list. With a
        vault on disk this tries to open it; a failed authentication moves the
        session to REJECTED_KEY.

        Returns:
            The new state

        Raises:
            InvalidStateError: If the session is UNLOCKED or REJECTED_KEY
            VaultIOError: If the vault cannot be read or created
            FormatError: If the vault authenticates but does not decode
        """
        if self._state is SessionState.NO_CONTAINER:
            self._create(passphrase)
        elif self._state is SessionState.LOCKED:
            self._unlock(passphrase)
        else:
            raise InvalidStateError(f"Cannot submit a master key in state {self._state.name}")
        return self._state

    def acknowledge(self) -> SessionState:
        """Dismiss a rejected passphrase and return to LOCKED."""
        if self._state is not SessionState.REJECTED_KEY:
            raise InvalidStateError(f"Nothing to acknowledge in state {self._state.name}")
        self._wipe_key()
        self._state = SessionState.LOCKED
        return self._state

    def _create(self, passphrase: Union[str, bytes]) -> None:
        self._set_key(self.crypto.derive_key(passphrase))
        self._profiles = []
        try:
            self._write()
        except VaultIOError:
            self._wipe_key()
            raise
        self._state = SessionState.UNLOCKED
        logger.info(f"Created new vault at {self.filepath}")

    def _unlock(self, passphrase: Union[str, bytes]) -> None:
        if not container_exists(self.filepath):
            logger.warning(f"Vault {self.filepath} disappeared before unlock, creating a new one")
            self._state = SessionState.NO_CONTAINER
            self._create(passphrase)
            return

        self._set_key(self.crypto.derive_key(passphrase))
        try:
            container = read_container(self.filepath)
            plaintext = self.crypto.open(container, self._key)
            profiles = decode_profiles(plaintext)
        except AuthenticationError:
            logger.warning(f"Unlock: master key rejected for {self.filepath}")
            self._state = SessionState.REJECTED_KEY
            return
        except (VaultIOError, FormatError):
            self._wipe_key()
            raise

        self._profiles = profiles
        self._state = SessionState.UNLOCKED
        logger.info(f"Unlocked vault {self.filepath} with {len(profiles)} clients")

    def add_profile(self, profile: Profile) -> None:
        """Append a client and save."""
        self._require_unlocked()
        self._profiles.append(profile)
        logger.debug(f"Added client {profile.name!r}")
        self.persist()

    def edit_profile(self, index: int, profile: Profile) -> None:
        """Replace the client at index and save."""
        self._require_unlocked()
        self._check_index(index)
        self._profiles[index] = profile
        logger.debug(f"Edited client #{index} ({profile.name!r})")
        self.persist()

    def remove_profile(self, index: int) -> Profile:
        """Remove the client at index, save, and return it."""
        self._require_unlocked()
        self._check_index(index)
        removed = self._profiles.pop(index)
        logger.debug(f"Removed client #{index} ({removed.name!r})")
        self.persist()
        return removed

    def import_legacy(self, filepath: str, key: bytes = config.LEGACY_KEY) -> int:
        """
        Append the clients of another vault file and re-save under the session key.

        Files written by old releases are encrypted with the all-zero key, which
        is the default here. The current list is left alone if the file cannot
        be read, authenticated or decoded.

        Returns:
            Number of clients imported
        """
        self._require_unlocked()
        container = read_container(filepath)
        plaintext = self.crypto.open_with_explicit_key(container, key)
        imported = decode_profiles(plaintext)
        self._profiles.extend(imported)
        logger.info(f"Imported {len(imported)} clients from {filepath}")
        self.persist()
        return len(imported)

    def persist(self) -> None:
        """
        Encrypt the client list and replace the vault file.

        A failure leaves the state and the in-memory list as they are, so the
        caller can retry.
        """
        self._require_unlocked()
        self._write()

    def _write(self) -> None:
        container = self.crypto.seal(encode_profiles(self._profiles), self._key)
        write_container(self.filepath, container)

    def close(self) -> None:
        """Lock the vault and clear sensitive data."""
        self._wipe_key()
        self._profiles = []
        self._state = self._initial_state()

    def __enter__(self) -> 'VaultSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _set_key(self, key: bytes) -> None:
        self._wipe_key()
        self._key = bytearray(key)

    def _wipe_key(self) -> None:
        if self._key is not None:
            self.crypto.clear_bytes(self._key)
        self._key = None

    def _require_unlocked(self) -> None:
        if self._state is not SessionState.UNLOCKED:
            raise VaultLockedError()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._profiles):
            raise IndexError(f"Client index {index} out of range (have {len(self._profiles)})")
