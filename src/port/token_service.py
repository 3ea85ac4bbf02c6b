"""Port definition for bearer token issuance and validation."""

from typing import Protocol

from domain.model.user import TokenClaims


class TokenService(Protocol):
    def issue(self, user_id: int, email: str) -> str: ...
    def validate(self, token: str) -> TokenClaims:
        """Return the claims of a valid token. Raises InvalidTokenError otherwise."""
        ...
