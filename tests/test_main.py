"""
Tests for vault path resolution in the entry point.
"""
import os

import pytest

pytest.importorskip("PyQt5.QtWidgets")

from rdmanager import config  # noqa: E402
from rdmanager.main import get_default_vault_path, parse_args  # noqa: E402


def test_default_path_is_in_home(monkeypatch, tmp_path):
    monkeypatch.delenv(config.VAULT_PATH_ENV, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert get_default_vault_path() == os.path.join(str(tmp_path), ".rdmanager", "clients.json")


def test_environment_override(monkeypatch, tmp_path):
    target = str(tmp_path / "elsewhere.bin")
    monkeypatch.setenv(config.VAULT_PATH_ENV, target)
    assert get_default_vault_path() == target


def test_parse_args():
    args = parse_args(["--vault", "v.bin", "--debug"])
    assert args.vault == "v.bin"
    assert args.debug is True
