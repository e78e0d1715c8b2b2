import pytest

from rdmanager.crypto import CryptoManager
from rdmanager.session import VaultSession
from rdmanager.storage import Profile


@pytest.fixture
def crypto():
    return CryptoManager()


@pytest.fixture
def vault_path(tmp_path):
    """Path of a vault file that does not exist yet."""
    return str(tmp_path / "clients.json")


@pytest.fixture
def alpha():
    return Profile(name="alpha", address="10.0.0.1", secret="s3cret-a")


@pytest.fixture
def bravo():
    return Profile(name="bravo", address="bravo.example.lan:3390", secret="pässwörd-b")


@pytest.fixture
def unlocked_session(vault_path):
    """A freshly created vault, unlocked with 'correct'."""
    session = VaultSession(vault_path)
    session.submit("correct")
    yield session
    session.close()
