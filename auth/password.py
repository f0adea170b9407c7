"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and a configurable work factor.

bcrypt only reads the first 72 bytes of its input; longer passwords are
cut to that length before both hashing and checking.
"""

from __future__ import annotations

import bcrypt

_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode()[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh bcrypt salt."""
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(_password_bytes(password), password_hash.encode())
        except (ValueError, TypeError):
            return False
