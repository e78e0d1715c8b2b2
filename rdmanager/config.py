"""
Configuration constants for the Remote Desktop Manager application.
"""

import os

# Application Metadata
APP_VERSION = "0.2.0"  # Use: Current version of the application. Type: str. Range: Semantic versioning string (e.g., "1.0.0")
APP_AUTHOR = "Jerry Yu"  # Use: Author credited in the About view. Type: str. Range: Any valid string representing the author's name.
APP_NAME = "Remote Desktop Manager"  # Use: Full name of the application. Type: str. Range: Any valid string.
APP_TITLE_PREFIX = f"{APP_NAME} v{APP_VERSION}"  # Use: Prefix for the application window titles, combining name and version. Type: str (f-string). Range: Derived from APP_NAME and APP_VERSION.
APP_ABOUT_TEXT = f"Powered By {APP_AUTHOR}"  # Use: Text shown in the About view. Type: str. Range: Any valid string.

# Security Settings
KEY_SIZE = 32  # Use: Size of the vault key in bytes. Corresponds to AES-256. Type: int. Range: 32 bytes; the container format has no room for another size.
NONCE_SIZE = 12  # Use: Size of the Nonce (Number used once) in bytes for AES-GCM, stored at the start of the container. Type: int. Range: 12 bytes (96 bits) is the recommended size for GCM.
TAG_SIZE = 16  # Use: Size of the authentication tag in bytes for AES-GCM, stored at the end of the container. Type: int. Range: 16 bytes (128 bits).
LEGACY_KEY = bytes(KEY_SIZE)  # Use: The all-zero key used by old releases to encrypt client files. Only ever used to read legacy imports, never to write. Type: bytes. Range: KEY_SIZE zero bytes.

# Logging
LOG_LEVEL = os.environ.get("RDMANAGER_LOG_LEVEL", "INFO").upper()  # Use: Root logging level set by main(). Type: str. Range: DEBUG, INFO, WARNING, ERROR, CRITICAL.
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'  # Use: Format string passed to logging.basicConfig. Type: str. Range: Any valid logging format string.

# File and Directory Names
CONFIG_DIR_NAME = ".rdmanager"  # Use: Name of the hidden directory within the user's home directory where the vault is stored. Type: str. Range: Any valid directory name.
DEFAULT_VAULT_FILE = "clients.json"  # Use: Default filename for the encrypted client vault. The name is kept from earlier releases even though the content is binary. Type: str. Range: Any valid filename.
VAULT_PATH_ENV = "RDMANAGER_VAULT"  # Use: Environment variable that overrides the vault path. Type: str. Range: Any valid environment variable name.
TEMP_FILE_SUFFIX = ".tmp"  # Use: Suffix of the scratch file written before atomically replacing the vault. Type: str. Range: Any valid filename suffix.

# Remote Desktop Client
RDP_CLIENT_COMMAND = os.environ.get("RDMANAGER_RDP_CLIENT", "mstsc")  # Use: Executable spawned to open a remote desktop session. Type: str. Range: Name or path of an executable.
RDP_CLIENT_ARGS = ["/v", "{address}", "/prompt"]  # Use: Argument template for the client; "{address}" is replaced by the profile address. Type: list[str]. Range: Any list of strings.

# UI Settings
CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS = 30  # Use: Default timeout in seconds after which a copied password is cleared from the clipboard. Type: int. Range: 0 (disabled) or a positive integer.
CLIPBOARD_CLEAR_TIMEOUT_DEFAULT = CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS * 1000  # Use: Clipboard clear timeout in milliseconds. Derived from CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS. Type: int. Range: Derived value.
PASSWORD_MASK_CHAR = "*"  # Use: Character repeated to mask a password in the profile form. Type: str. Range: A single character.
WINDOW_WIDTH = 600  # Use: Initial width of the main window in pixels. Type: int. Range: Positive integer.
WINDOW_HEIGHT = 400  # Use: Initial height of the main window in pixels. Type: int. Range: Positive integer.
APP_STYLE = 'Fusion'  # Use: PyQt5 application style. Type: str. Range: Valid PyQt5 style names (e.g., 'Fusion', 'Windows', 'Macintosh').

# User-facing messages
MSG_CREATE_PROMPT = "Please create a master key to encrypt your data."  # Use: Label on the first-run dialog. Type: str. Range: Any descriptive string.
MSG_UNLOCK_PROMPT = "Please enter the master key to decrypt your data."  # Use: Label on the unlock dialog. Type: str. Range: Any descriptive string.
MSG_REJECTED_KEY = "The master key is incorrect. Please try again."  # Use: Text shown after a rejected passphrase. Type: str. Range: Any descriptive string.
MSG_KEYS_DO_NOT_MATCH = "Master keys do not match."  # Use: Error when the passphrase and its confirmation differ. Type: str. Range: Any descriptive string.
MSG_SELECT_TO_EDIT = "Please select a target to edit."  # Use: Error when Edit is chosen without a selection. Type: str. Range: Any descriptive string.
MSG_SELECT_TO_REMOVE = "Please select a target to remove."  # Use: Error when Remove is chosen without a selection. Type: str. Range: Any descriptive string.
