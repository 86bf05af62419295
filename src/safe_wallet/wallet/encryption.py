# Wallet - Encryption Service
#
# Master password → Encryption key (PBKDF2-HMAC-SHA256)
# Wallet payload encryption (AES-256-GCM)
# Blob layout: salt(32) || nonce(12) || ciphertext+tag(16)

import base64
import binascii
import os
import secrets
import string
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import DecryptionFailed, MalformedData

KEY_LENGTH = 32  # 256 bits for AES-256
SALT_LENGTH = 32  # 256-bit salt
NONCE_LENGTH = 12  # 96-bit nonce for GCM (recommended)
TAG_LENGTH = 16  # GCM authentication tag

# Part of the file format: the count is not stored in the blob
PBKDF2_ITERATIONS = 100_000

PASSWORD_ALPHABET = (
    string.ascii_lowercase
    + string.ascii_uppercase
    + string.digits
    + "!@#$%^&*()-_=+[]{}|;:,.<>?"
)


def derive_key(password: str, salt: bytes, iterations: Optional[int] = None) -> bytes:
    """
    Derive encryption key from master password using PBKDF2.

    Args:
        password: User's master password
        salt: Random salt (stored at the head of the blob)
        iterations: PBKDF2 rounds (default: PBKDF2_ITERATIONS)

    Returns:
        256-bit encryption key
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=iterations or PBKDF2_ITERATIONS,
    )

    return kdf.derive(password.encode('utf-8'))


def generate_salt() -> bytes:
    """Generate cryptographically random salt."""
    return os.urandom(SALT_LENGTH)


def generate_nonce() -> bytes:
    """Generate a random GCM nonce (never reused: one per encryption)."""
    return os.urandom(NONCE_LENGTH)


def encrypt(plaintext: bytes, password: str) -> bytes:
    """
    Encrypt plaintext with a key derived from password.

    Every call draws a fresh salt and nonce, so encrypting the same
    plaintext twice yields different blobs.

    Returns:
        salt || nonce || ciphertext_with_tag
    """
    salt = generate_salt()
    key = derive_key(password, salt)
    nonce = generate_nonce()

    ciphertext = AESGCM(key).encrypt(nonce, plaintext, None)

    return salt + nonce + ciphertext


def decrypt(blob: bytes, password: str) -> bytes:
    """
    Decrypt a blob produced by encrypt().

    Raises:
        MalformedData: blob shorter than salt + nonce
        DecryptionFailed: wrong password or corrupted/tampered data
    """
    if len(blob) < SALT_LENGTH + NONCE_LENGTH:
        raise MalformedData("encrypted data too short")

    salt = blob[:SALT_LENGTH]
    nonce = blob[SALT_LENGTH:SALT_LENGTH + NONCE_LENGTH]
    ciphertext = blob[SALT_LENGTH + NONCE_LENGTH:]

    key = derive_key(password, salt)
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag:
        raise DecryptionFailed(
            "decryption failed: invalid password or corrupted data"
        ) from None


def encrypt_to_base64(plaintext: bytes, password: str) -> str:
    """Encrypt and return the blob as standard base64 text."""
    return base64.b64encode(encrypt(plaintext, password)).decode('utf-8')


def decrypt_from_base64(data: str, password: str) -> bytes:
    """Decode base64 text produced by encrypt_to_base64() and decrypt it."""
    try:
        blob = base64.b64decode(data.encode('utf-8'), validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedData(f"invalid base64 data: {e}") from e
    return decrypt(blob, password)


def generate_password(length: int = 20) -> str:
    """Generate a random password from letters, digits and symbols."""
    if length < 1:
        raise ValueError("Password length must be at least 1")
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
