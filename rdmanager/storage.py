"""
Storage management for the client vault.

LEGAL NOTICE:
This module handles secure storage of remote-desktop credentials. All data is
encrypted locally and never transmitted. Use only on devices you own or administer.
"""

import os
import json
import stat
import logging
import platform
from typing import List, Dict, Any
from dataclasses import dataclass

from .exceptions import FormatError, VaultIOError
from . import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    """A single remote-desktop connection record."""
    name: str
    address: str
    secret: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the on-disk record. Field names match earlier releases."""
        return {'name': self.name, 'ip': self.address, 'password': self.secret}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Profile':
        """Create from an on-disk record."""
        if not isinstance(data, dict):
            raise FormatError(f"Client record must be an object, got {type(data).__name__}")
        try:
            fields = (data['name'], data['ip'], data['password'])
        except KeyError as e:
            raise FormatError(f"Client record is missing field {e.args[0]!r}") from e
        if not all(isinstance(value, str) for value in fields):
            raise FormatError("Client record fields must be strings")
        return cls(*fields)


def encode_profiles(profiles: List[Profile]) -> bytes:
    """Serialize the client list to compact UTF-8 JSON, preserving order."""
    data = [p.to_dict() for p in profiles]
    return json.dumps(data, ensure_ascii=False, separators=(',', ':')).encode('utf-8')


def decode_profiles(data: bytes) -> List[Profile]:
    """
    Deserialize a client list produced by encode_profiles().

    Raises:
        FormatError: If the bytes are not a JSON array of client records
    """
    try:
        records = json.loads(bytes(data).decode('utf-8'))
    except (UnicodeDecodeError, ValueError) as e:
        raise FormatError(f"Vault data is not valid JSON: {e}") from e

    if not isinstance(records, list):
        raise FormatError(f"Vault data must be a list, got {type(records).__name__}")
    return [Profile.from_dict(r) for r in records]


def container_exists(filepath: str) -> bool:
    """A vault is identified by nothing more than a file at its path."""
    return os.path.isfile(filepath)


def read_container(filepath: str) -> bytes:
    """
    Read the whole vault file.

    Raises:
        VaultIOError: If the file cannot be read
    """
    try:
        with open(filepath, 'rb') as f:
            return f.read()
    except OSError as e:
        logger.error(f"Error reading vault file {filepath}: {e}")
        raise VaultIOError(filepath, e.strerror or str(e)) from e


def write_container(filepath: str, container: bytes) -> None:
    """
    Replace the vault file with a new container.

    The data goes to a scratch file first and is then moved over the vault, so a
    crash leaves either the old or the new container on disk, never a mix.

    Raises:
        VaultIOError: If the file cannot be written
    """
    tmp_path = filepath + config.TEMP_FILE_SUFFIX
    try:
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(tmp_path, 'wb') as f:
            f.write(container)
            f.flush()
            os.fsync(f.fileno())

        # Atomic replace, also over an existing file on Windows
        os.replace(tmp_path, filepath)

        if not _set_file_permissions(filepath):
            logger.warning(f"Failed to set secure file permissions for vault: {filepath}")

    except OSError as e:
        logger.error(f"Error saving vault file {filepath}: {e}", exc_info=True)
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise VaultIOError(filepath, e.strerror or str(e)) from e


def _set_file_permissions(filepath: str) -> bool:
    """Set file to be readable/writable by owner only."""
    if platform.system() == 'Windows':
        # NTFS ACLs are inherited from the user's profile directory
        return True
    try:
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)  # 600
    except OSError:
        return False
    return True
