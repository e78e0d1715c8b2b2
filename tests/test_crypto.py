"""
Tests for key derivation and the AES-GCM container.
"""
import hashlib
import os

import pytest

from rdmanager import config
from rdmanager.crypto import CryptoManager
from rdmanager.exceptions import AuthenticationError


class TestDeriveKey:

    def test_key_is_32_bytes(self, crypto):
        assert len(crypto.derive_key(b"hunter2")) == 32

    def test_deterministic(self, crypto):
        assert crypto.derive_key(b"hunter2") == crypto.derive_key(b"hunter2")

    def test_is_sha256_of_passphrase(self, crypto):
        """Existing vaults must keep opening with the same key."""
        assert crypto.derive_key(b"hunter2") == hashlib.sha256(b"hunter2").digest()

    def test_str_is_utf8_encoded(self, crypto):
        assert crypto.derive_key("pässword") == crypto.derive_key("pässword".encode("utf-8"))

    def test_empty_passphrase_is_accepted(self, crypto):
        key = crypto.derive_key(b"")
        assert len(key) == 32
        assert key != config.LEGACY_KEY

    def test_different_passphrases_differ(self, crypto):
        assert crypto.derive_key(b"correct") != crypto.derive_key(b"wrong")


class TestSealOpen:

    @pytest.mark.parametrize("plaintext", [b"", b"x", b"[]", os.urandom(1024), os.urandom(70000)])
    def test_round_trip(self, crypto, plaintext):
        key = os.urandom(32)
        assert crypto.open(crypto.seal(plaintext, key), key) == plaintext

    def test_container_layout(self, crypto):
        container = crypto.seal(b"hello", os.urandom(32))
        assert len(container) == CryptoManager.NONCE_SIZE + 5 + CryptoManager.TAG_SIZE

    def test_empty_plaintext_container_is_nonce_and_tag(self, crypto):
        container = crypto.seal(b"", os.urandom(32))
        assert len(container) == 12 + 16

    def test_wrong_key_fails(self, crypto):
        for _ in range(50):
            k1, k2 = os.urandom(32), os.urandom(32)
            container = crypto.seal(b"client list", k1)
            with pytest.raises(AuthenticationError):
                crypto.open(container, k2)

    def test_accepts_bytearray_key(self, crypto):
        key = bytearray(os.urandom(32))
        assert crypto.open(crypto.seal(b"data", key), key) == b"data"

    @pytest.mark.parametrize("length", [0, 1, 11, 12, 27])
    def test_short_container_fails(self, crypto, length):
        with pytest.raises(AuthenticationError):
            crypto.open(b"\x00" * length, os.urandom(32))

    def test_truncated_container_fails(self, crypto):
        key = os.urandom(32)
        container = crypto.seal(b"some clients", key)
        with pytest.raises(AuthenticationError):
            crypto.open(container[:-1], key)

    def test_appended_byte_fails(self, crypto):
        key = os.urandom(32)
        container = crypto.seal(b"some clients", key)
        with pytest.raises(AuthenticationError):
            crypto.open(container + b"\x00", key)

    def test_every_single_bit_flip_fails(self, crypto):
        key = os.urandom(32)
        container = crypto.seal(b"abcde", key)
        for byte_index in range(len(container)):
            for bit in range(8):
                tampered = bytearray(container)
                tampered[byte_index] ^= 1 << bit
                with pytest.raises(AuthenticationError):
                    crypto.open(bytes(tampered), key)

    def test_nonces_are_unique(self, crypto):
        key = os.urandom(32)
        nonces = {crypto.seal(b"", key)[:12] for _ in range(10000)}
        assert len(nonces) == 10000

    def test_same_plaintext_gives_different_containers(self, crypto):
        key = os.urandom(32)
        assert crypto.seal(b"same", key) != crypto.seal(b"same", key)

    @pytest.mark.parametrize("size", [0, 16, 31, 33])
    def test_bad_key_size_is_rejected(self, crypto, size):
        with pytest.raises(ValueError):
            crypto.seal(b"data", b"\x01" * size)
        with pytest.raises(ValueError):
            crypto.open(b"\x00" * 40, b"\x01" * size)


class TestExplicitKey:

    def test_legacy_key_round_trip(self, crypto):
        container = crypto.seal(b"old data", config.LEGACY_KEY)
        assert crypto.open_with_explicit_key(container, config.LEGACY_KEY) == b"old data"

    def test_legacy_key_does_not_open_session_vaults(self, crypto):
        container = crypto.seal(b"new data", crypto.derive_key(b"hunter2"))
        with pytest.raises(AuthenticationError):
            crypto.open_with_explicit_key(container, config.LEGACY_KEY)


class TestClearBytes:

    def test_zeroes_bytearray(self, crypto):
        buf = bytearray(b"\xff" * 32)
        crypto.clear_bytes(buf)
        assert buf == bytearray(32)

    def test_ignores_immutable_bytes(self, crypto):
        data = b"\xff" * 4
        crypto.clear_bytes(data)
        assert data == b"\xff" * 4
