"""
Tests for the client list encoding and the vault file helpers.
"""
import json
import os
import stat
import sys

import pytest

from rdmanager.exceptions import FormatError, VaultIOError
from rdmanager.storage import (
    Profile, container_exists, decode_profiles, encode_profiles, read_container, write_container,
)


class TestProfile:

    def test_is_immutable(self, alpha):
        with pytest.raises(AttributeError):
            alpha.secret = "changed"

    def test_to_dict_uses_legacy_field_names(self, alpha):
        assert alpha.to_dict() == {"name": "alpha", "ip": "10.0.0.1", "password": "s3cret-a"}

    def test_from_dict(self):
        assert Profile.from_dict({"name": "n", "ip": "h", "password": "p"}) == Profile("n", "h", "p")

    def test_no_uniqueness_constraint(self, alpha):
        assert decode_profiles(encode_profiles([alpha, alpha])) == [alpha, alpha]


class TestEncodeDecode:

    def test_empty_list_round_trip(self):
        assert encode_profiles([]) == b"[]"
        assert decode_profiles(encode_profiles([])) == []

    def test_round_trip_preserves_order(self, alpha, bravo):
        profiles = [bravo, alpha, Profile("", "", "")]
        assert decode_profiles(encode_profiles(profiles)) == profiles

    def test_unicode_round_trip(self):
        profiles = [Profile("Büro ☃", "fe80::1", "密码\"\\\n")]
        assert decode_profiles(encode_profiles(profiles)) == profiles

    def test_encoding_is_compact_json_array(self, alpha):
        assert json.loads(encode_profiles([alpha])) == [{"name": "alpha", "ip": "10.0.0.1", "password": "s3cret-a"}]
        assert b" " not in encode_profiles([Profile("a", "b", "c")])

    def test_decodes_records_written_by_earlier_releases(self):
        data = b'[{"name":"srv","ip":"192.168.1.10","password":"pw"}]'
        assert decode_profiles(data) == [Profile("srv", "192.168.1.10", "pw")]

    @pytest.mark.parametrize("data", [
        b"",
        b"not json",
        b"\xff\xfe",
        b'{"name":"a","ip":"b","password":"c"}',
        b"[1, 2]",
        b'[{"name":"a","ip":"b"}]',
        b'[{"name":"a","ip":"b","password":3}]',
        b"null",
    ])
    def test_malformed_data_raises_format_error(self, data):
        with pytest.raises(FormatError):
            decode_profiles(data)


class TestContainerFile:

    def test_write_then_read(self, vault_path):
        write_container(vault_path, b"\x01\x02\x03")
        assert container_exists(vault_path)
        assert read_container(vault_path) == b"\x01\x02\x03"

    def test_write_replaces_whole_file(self, vault_path):
        write_container(vault_path, b"a much longer first container")
        write_container(vault_path, b"short")
        assert read_container(vault_path) == b"short"

    def test_replace_goes_through_os_replace(self, vault_path, monkeypatch):
        write_container(vault_path, b"old")
        calls = []
        real_replace = os.replace

        def recording_replace(src, dst):
            calls.append((src, dst))
            real_replace(src, dst)

        monkeypatch.setattr("rdmanager.storage.os.replace", recording_replace)
        write_container(vault_path, b"new")
        assert calls == [(vault_path + ".tmp", vault_path)]
        assert read_container(vault_path) == b"new"

    def test_no_temp_file_left_behind(self, vault_path):
        write_container(vault_path, b"data")
        assert not os.path.exists(vault_path + ".tmp")

    def test_creates_missing_directory(self, tmp_path):
        path = str(tmp_path / "nested" / "dir" / "clients.json")
        write_container(path, b"data")
        assert read_container(path) == b"data"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_file_is_owner_only(self, vault_path):
        write_container(vault_path, b"data")
        assert stat.S_IMODE(os.stat(vault_path).st_mode) == 0o600

    def test_missing_file_raises_io_error(self, vault_path):
        assert not container_exists(vault_path)
        with pytest.raises(VaultIOError):
            read_container(vault_path)

    def test_directory_is_not_a_container(self, tmp_path):
        assert not container_exists(str(tmp_path))

    def test_unwritable_location_raises_io_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")
        with pytest.raises(VaultIOError):
            write_container(str(blocker / "clients.json"), b"data")
