"""Port definition for password hashing."""

from typing import Protocol


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str: ...
    def verify(self, digest: str, plaintext: str) -> bool: ...
