"""Authentication routes (register, login, profile)."""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_identity_service
from api.middleware.auth import require_claims
from api.models import (
    APIResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UpdateUserRequest,
    UserResponse,
    parse_birthday,
    to_user_response,
)
from domain.model.user import TokenClaims
from services.identity_service import IdentityService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, service: IdentityService = Depends(get_identity_service)):
    """Register a new user.

    Raises:
        409 if the email is already registered, 400 on invalid input
    """
    birthday = parse_birthday(request.birthday)

    profile = service.register(
        email=request.email,
        password=request.password,
        first_name=request.firstname,
        last_name=request.lastname,
        phone=request.phone,
        birthday=birthday,
    )

    logger.info("User registered", extra={"userId": profile.id})

    return APIResponse(message="User registered successfully", data=to_user_response(profile))


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, service: IdentityService = Depends(get_identity_service)):
    """Login user and return JWT token.

    Raises:
        401 if credentials are invalid
    """
    token, profile = service.login(request.email, request.password)

    logger.info("User logged in", extra={"userId": profile.id})

    return LoginResponse(token=token, user=to_user_response(profile))


@router.get("/me", response_model=UserResponse)
def get_me(
    claims: TokenClaims = Depends(require_claims),
    service: IdentityService = Depends(get_identity_service),
):
    """Get current authenticated user info.

    Raises:
        401 if not authenticated, 404 if the account no longer exists
    """
    return to_user_response(service.get_user_profile(claims.user_id))


@router.put("/me", response_model=APIResponse)
def update_me(
    request: UpdateUserRequest,
    claims: TokenClaims = Depends(require_claims),
    service: IdentityService = Depends(get_identity_service),
):
    """Partially update the current user's profile."""
    profile = service.update_user(
        claims.user_id,
        first_name=request.firstname,
        last_name=request.lastname,
        phone=request.phone,
        birthday=parse_birthday(request.birthday),
    )

    logger.info("User updated", extra={"userId": profile.id})

    return APIResponse(message="User updated successfully", data=to_user_response(profile))
