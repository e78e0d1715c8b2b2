"""
Starting a remote desktop session for a stored client.
"""

import logging
import subprocess
from typing import List

from .exceptions import LaunchError
from .storage import Profile
from . import config

logger = logging.getLogger(__name__)


def build_command(profile: Profile) -> List[str]:
    """Build the client command line for a profile."""
    args = [arg.format(address=profile.address) for arg in config.RDP_CLIENT_ARGS]
    return [config.RDP_CLIENT_COMMAND] + args


def launch(profile: Profile, clipboard=None) -> subprocess.Popen:
    """
    Copy the client password to the clipboard and start the remote desktop client.

    The client is started with /prompt, so the user pastes the password into
    its own credential dialog.

    Args:
        profile: The client to connect to
        clipboard: Object with a setText(str) method, e.g. QApplication.clipboard()

    Returns:
        The spawned process

    Raises:
        LaunchError: If the client executable cannot be started
    """
    if clipboard is not None:
        clipboard.setText(profile.secret)

    command = build_command(profile)
    logger.info(f"Connecting to {profile.name!r} at {profile.address}")
    try:
        return subprocess.Popen(command)
    except OSError as e:
        logger.error(f"Failed to start {command[0]}: {e}")
        raise LaunchError(f"{command[0]}: {e.strerror or e}") from e
