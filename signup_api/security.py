"""
Password hashing helpers.

Passwords are stretched with PBKDF2-SHA256 and a per-user random salt and
stored as ``pbkdf2_sha256$<iterations>$<salt>$<hash>`` (salt and hash are
urlsafe base64).
"""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 260_000
SALT_BYTES = 16
KEY_LENGTH = 32


def _kdf(salt: bytes, iterations: int) -> PBKDF2HMAC:
    return PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=iterations,
    )


def hash_password(password: str, *, iterations: int = ITERATIONS) -> str:
    salt = os.urandom(SALT_BYTES)
    key = _kdf(salt, iterations).derive(password.encode("utf-8"))
    return "$".join(
        [
            ALGORITHM,
            str(iterations),
            base64.urlsafe_b64encode(salt).decode("ascii"),
            base64.urlsafe_b64encode(key).decode("ascii"),
        ]
    )


def verify_password(password: str, encoded: str) -> bool:
    """Check ``password`` against a value produced by :func:`hash_password`."""
    try:
        algorithm, iterations, salt, expected = encoded.split("$", 3)
        rounds = int(iterations)
        salt_bytes = base64.urlsafe_b64decode(salt.encode("ascii"))
        expected_key = base64.urlsafe_b64decode(expected.encode("ascii"))
    except (ValueError, binascii.Error):
        return False
    if algorithm != ALGORITHM:
        return False
    try:
        _kdf(salt_bytes, rounds).verify(password.encode("utf-8"), expected_key)
    except InvalidKey:
        return False
    return True
