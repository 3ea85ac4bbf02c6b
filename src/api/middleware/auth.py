"""Bearer token guard for protected routes.

Used as a route dependency: it runs before the route body, so a rejected
request never reaches IdentityService. On success the decoded claims are
stored on ``request.state.claims`` and returned to the route.
"""

from fastapi import Depends, Request

from api.dependencies import get_token_service
from domain.model.errors import UnauthorizedError
from domain.model.user import TokenClaims
from port.token_service import TokenService

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header value.

    Raises:
        UnauthorizedError: header missing, not a Bearer header, or token empty
    """
    if not authorization:
        raise UnauthorizedError("Authorization header required")

    if not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError("Bearer token required")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise UnauthorizedError("Bearer token required")
    return token


def require_claims(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Resolve the caller's identity or reject the request.

    Raises:
        UnauthorizedError: no usable bearer token
        InvalidTokenError: token failed validation
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    claims = token_service.validate(token)
    request.state.claims = claims
    return claims
