"""JWT implementation of TokenService (python-jose)."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt

from domain.model.errors import InvalidTokenError, TokenSigningFailure
from domain.model.user import TokenClaims

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION = timedelta(hours=24)
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class JWTTokenService:
    """Issues and validates HMAC-signed identity tokens.

    The signing key belongs to this instance; it is handed in by the
    startup routine and never read from module state.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = JWT_EXPIRATION,
        algorithm: str = JWT_ALGORITHM,
        clock: Callable[[], datetime] | None = None,
    ):
        if not secret:
            raise ValueError("JWT signing secret must not be empty")
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")
        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(self, user_id: int, email: str) -> str:
        """Create a signed token for the user, valid for ``ttl``."""
        issued_at = self._clock()
        payload = {
            "user_id": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self.algorithm)
        except JWTError as e:
            raise TokenSigningFailure(str(e)) from e

    def validate(self, token: str) -> TokenClaims:
        """Verify algorithm, signature and expiry, and extract the claims.

        Every failure raises the same InvalidTokenError; the reason only
        goes to the debug log.
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") not in HMAC_ALGORITHMS:
                raise JWTError(f"unexpected signing method: {header.get('alg')}")
            payload = jwt.decode(token, self._secret, algorithms=list(HMAC_ALGORITHMS))
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError() from None

        user_id = payload.get("user_id")
        email = payload.get("email")
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id < 0:
            logger.debug("JWT verification failed: bad user_id claim")
            raise InvalidTokenError()
        if not isinstance(email, str) or not email:
            logger.debug("JWT verification failed: bad email claim")
            raise InvalidTokenError()

        return TokenClaims(user_id=user_id, email=email)
