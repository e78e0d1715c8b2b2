"""Exceptions raised by the client vault."""


class VaultError(Exception):
    """Base exception for vault operations."""

    pass


class AuthenticationError(VaultError):
    """Raised when a container fails authentication.

    A wrong key and a corrupted or truncated file look the same from here.
    """

    def __init__(self, message: str = "Vault could not be authenticated (wrong key or corrupted file)."):
        super().__init__(message)


class FormatError(VaultError):
    """Raised when authenticated bytes do not decode to a client list."""

    def __init__(self, message: str = "Vault data is not a valid client list."):
        super().__init__(message)


class VaultIOError(VaultError):
    """Raised when the vault file cannot be read or written."""

    def __init__(self, path: str = "", reason: str = ""):
        message = f"Vault file error: {path}" if path else "Vault file error."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class VaultLockedError(VaultError):
    """Raised when attempting to change a vault that is not unlocked."""

    def __init__(self, message: str = "Vault is locked. Unlock with the master key first."):
        super().__init__(message)


class InvalidStateError(VaultError):
    """Raised when a session action is not valid in the current state."""

    pass


class LaunchError(VaultError):
    """Raised when the remote desktop client cannot be started."""

    def __init__(self, message: str = "Failed to start the remote desktop client."):
        super().__init__(message)
