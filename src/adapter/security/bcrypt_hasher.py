"""bcrypt implementation of PasswordHasher."""

import base64
import hashlib

import bcrypt

from domain.model.errors import HashingFailure

BCRYPT_ROUNDS = 12


def _prehash(plaintext: str) -> bytes:
    # bcrypt only reads 72 bytes; a base64 SHA-256 digest is 44 bytes with no NUL
    return base64.b64encode(hashlib.sha256(plaintext.encode("utf-8")).digest())


class BcryptPasswordHasher:
    """Salted one-way password hashing.

    bcrypt embeds a fresh random salt in every digest, so hashing the same
    password twice yields two different strings that both verify. Passwords
    are pre-hashed with SHA-256 so any length is accepted and every byte counts.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(_prehash(plaintext), salt).decode("utf-8")
        except (ValueError, TypeError) as e:
            raise HashingFailure(str(e)) from e

    def verify(self, digest: str, plaintext: str) -> bool:
        """Constant-time check. A malformed digest counts as a mismatch."""
        if not digest:
            return False
        try:
            return bcrypt.checkpw(_prehash(plaintext), digest.encode("utf-8"))
        except (ValueError, TypeError):
            return False
