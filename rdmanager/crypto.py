"""
Cryptographic operations for the client vault.

LEGAL NOTICE:
This module handles encryption/decryption of stored remote-desktop credentials.
It must only be used for legitimate personal credential management on devices
you own or administer.

Container layout: nonce (12 bytes) || ciphertext || tag (16 bytes), AES-256-GCM,
no associated data, no header.
"""

import os
import logging
from typing import Union
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.backends import default_backend
from cryptography.exceptions import InvalidTag

from . import config
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class CryptoManager:
    """Handles all cryptographic operations for the client vault."""

    # Constants
    KEY_SIZE = config.KEY_SIZE      # 256 bits for AES-256
    NONCE_SIZE = config.NONCE_SIZE  # 96 bits for GCM
    TAG_SIZE = config.TAG_SIZE      # 128 bits

    def __init__(self):
        """Initialize the crypto manager."""
        self.backend = default_backend()

    def derive_key(self, passphrase: Union[str, BytesLike]) -> bytes:
        """
        Derive the vault key from a master passphrase.

        The key is the SHA-256 digest of the passphrase bytes. There is no salt,
        so the same passphrase always yields the same key and existing vaults
        stay readable. The empty passphrase is accepted.

        Args:
            passphrase: The master passphrase; str is UTF-8 encoded

        Returns:
            32-byte vault key
        """
        if isinstance(passphrase, str):
            passphrase = passphrase.encode('utf-8')
        digest = hashes.Hash(hashes.SHA256(), backend=self.backend)
        digest.update(bytes(passphrase))
        return digest.finalize()

    def seal(self, plaintext: BytesLike, key: BytesLike) -> bytes:
        """
        Encrypt data using AES-256-GCM under a fresh random nonce.

        Args:
            plaintext: Data to encrypt, may be empty
            key: 32-byte vault key

        Returns:
            The container: nonce || ciphertext || tag
        """
        self._check_key(key)
        nonce = os.urandom(self.NONCE_SIZE)
        cipher = Cipher(
            algorithms.AES(bytes(key)),
            modes.GCM(nonce),
            backend=self.backend
        )
        encryptor = cipher.encryptor()
        ciphertext = encryptor.update(bytes(plaintext)) + encryptor.finalize()
        return nonce + ciphertext + encryptor.tag

    def open(self, container: BytesLike, key: BytesLike) -> bytes:
        """
        Decrypt a container produced by seal().

        Args:
            container: nonce || ciphertext || tag
            key: 32-byte vault key

        Returns:
            Decrypted plaintext

        Raises:
            AuthenticationError: If the container is too short or the tag does
                not verify (wrong key, corruption or truncation)
        """
        self._check_key(key)
        container = bytes(container)
        if len(container) < self.NONCE_SIZE + self.TAG_SIZE:
            raise AuthenticationError(
                f"Container too short ({len(container)} bytes)."
            )

        nonce = container[:self.NONCE_SIZE]
        ciphertext = container[self.NONCE_SIZE:-self.TAG_SIZE]
        tag = container[-self.TAG_SIZE:]
        cipher = Cipher(
            algorithms.AES(bytes(key)),
            modes.GCM(nonce, tag),
            backend=self.backend
        )
        decryptor = cipher.decryptor()
        try:
            return decryptor.update(ciphertext) + decryptor.finalize()
        except InvalidTag as e:
            raise AuthenticationError() from e

    def open_with_explicit_key(self, container: BytesLike, key: BytesLike) -> bytes:
        """
        Decrypt a container under a caller-supplied key rather than a session key.

        This is the only path that should ever see config.LEGACY_KEY.
        """
        if bytes(key) == config.LEGACY_KEY:
            logger.info("Opening container with the legacy all-zero key")
        else:
            logger.debug("Opening container with an explicit key")
        return self.open(container, key)

    def clear_bytes(self, data: bytearray) -> None:
        """Overwrite a mutable key buffer with zeros."""
        if isinstance(data, bytearray):
            for i in range(len(data)):
                data[i] = 0

    def _check_key(self, key: BytesLike) -> None:
        if len(key) != self.KEY_SIZE:
            raise ValueError(
                f"Key must be {self.KEY_SIZE} bytes, got {len(key)}"
            )
