"""Tests for the wallet cipher: PBKDF2-HMAC-SHA256 + AES-256-GCM.

Covers:
  - encrypt/decrypt round trip and blob layout
  - fresh salt and nonce per encryption
  - wrong password and tampering both surface as DecryptionFailed
  - short blobs rejected as MalformedData
  - base64 helpers
  - random password generation
"""

import pytest

from safe_wallet.wallet import encryption
from safe_wallet.wallet.encryption import (
    NONCE_LENGTH,
    PASSWORD_ALPHABET,
    SALT_LENGTH,
    TAG_LENGTH,
    decrypt,
    decrypt_from_base64,
    derive_key,
    encrypt,
    encrypt_to_base64,
    generate_password,
)
from safe_wallet.wallet.errors import DecryptionFailed, MalformedData


class TestKeyDerivation:

    def test_key_is_256_bits(self):
        key = derive_key("pw1", b"\x00" * SALT_LENGTH)
        assert len(key) == 32

    def test_same_inputs_same_key(self):
        salt = encryption.generate_salt()
        assert derive_key("pw1", salt) == derive_key("pw1", salt)

    def test_different_salt_different_key(self):
        assert derive_key("pw1", b"\x01" * 32) != derive_key("pw1", b"\x02" * 32)

    def test_default_iterations_are_fixed(self, monkeypatch):
        salt = b"\x03" * SALT_LENGTH
        assert encryption.PBKDF2_ITERATIONS == 100_000
        assert derive_key("pw1", salt) == derive_key("pw1", salt, iterations=100_000)

        monkeypatch.setenv("SAFE_WALLET_KDF_ITERATIONS", "200000")
        assert derive_key("pw1", salt) == derive_key("pw1", salt, iterations=100_000)

    def test_salt_and_nonce_sizes(self):
        assert len(encryption.generate_salt()) == 32
        assert len(encryption.generate_nonce()) == 12


class TestEncryptDecrypt:

    def test_roundtrip(self):
        message = b'{"version":1,"groups":[]}'
        assert decrypt(encrypt(message, "pw1"), "pw1") == message

    def test_roundtrip_empty_plaintext(self):
        assert decrypt(encrypt(b"", "pw1"), "pw1") == b""

    def test_roundtrip_unicode_password(self):
        assert decrypt(encrypt(b"data", "pässwörd🔑"), "pässwörd🔑") == b"data"

    def test_blob_layout(self):
        message = b"hello wallet"
        blob = encrypt(message, "pw1")
        assert len(blob) == SALT_LENGTH + NONCE_LENGTH + len(message) + TAG_LENGTH

    def test_fresh_salt_and_nonce_each_time(self):
        a = encrypt(b"same", "pw1")
        b = encrypt(b"same", "pw1")
        assert a != b
        assert a[:SALT_LENGTH] != b[:SALT_LENGTH]
        assert a[SALT_LENGTH:SALT_LENGTH + NONCE_LENGTH] != b[SALT_LENGTH:SALT_LENGTH + NONCE_LENGTH]

    def test_wrong_password_fails(self):
        blob = encrypt(b"secret", "pw1")
        with pytest.raises(DecryptionFailed):
            decrypt(blob, "pw2")

    @pytest.mark.parametrize("offset", [0, SALT_LENGTH, SALT_LENGTH + NONCE_LENGTH, -1])
    def test_single_byte_change_fails(self, offset):
        blob = bytearray(encrypt(b"secret payload", "pw1"))
        blob[offset] ^= 0x01
        with pytest.raises(DecryptionFailed):
            decrypt(bytes(blob), "pw1")

    def test_truncated_body_fails_authentication(self):
        blob = encrypt(b"secret payload", "pw1")
        with pytest.raises(DecryptionFailed):
            decrypt(blob[:SALT_LENGTH + NONCE_LENGTH + 4], "pw1")

    def test_too_short_is_malformed(self):
        with pytest.raises(MalformedData):
            decrypt(b"\x00" * (SALT_LENGTH + NONCE_LENGTH - 1), "pw1")

    def test_wrong_password_and_tamper_share_message(self):
        blob = encrypt(b"secret", "pw1")
        tampered = blob[:-1] + bytes([blob[-1] ^ 0xFF])

        with pytest.raises(DecryptionFailed) as wrong_pw:
            decrypt(blob, "nope")
        with pytest.raises(DecryptionFailed) as corrupted:
            decrypt(tampered, "pw1")

        assert str(wrong_pw.value) == str(corrupted.value)


class TestBase64:

    def test_roundtrip(self):
        text = encrypt_to_base64(b"note", "pw1")
        assert isinstance(text, str)
        assert decrypt_from_base64(text, "pw1") == b"note"

    def test_invalid_base64_is_malformed(self):
        with pytest.raises(MalformedData):
            decrypt_from_base64("not base64 at all!!", "pw1")

    def test_wrong_password(self):
        text = encrypt_to_base64(b"note", "pw1")
        with pytest.raises(DecryptionFailed):
            decrypt_from_base64(text, "pw2")


class TestGeneratePassword:

    def test_default_length(self):
        assert len(generate_password()) == 20

    def test_custom_length(self):
        assert len(generate_password(32)) == 32

    def test_uses_alphabet_only(self):
        assert set(generate_password(200)) <= set(PASSWORD_ALPHABET)

    def test_rejects_zero_length(self):
        with pytest.raises(ValueError):
            generate_password(0)
