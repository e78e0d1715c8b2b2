"""
Remote Desktop Manager
Copyright (c) 2025

LEGAL NOTICE AND THREAT MODEL:
This tool is for personal use only. It stores remote-desktop credentials
encrypted on the device where it is installed. Connection passwords are only
decrypted in memory and copied to the clipboard when the owner asks to connect.
The vault key is derived from the master passphrase alone (no salt), so two
vaults created with the same passphrase share one key.
"""

__version__ = "0.2.0"
