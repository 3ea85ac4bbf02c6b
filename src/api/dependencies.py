from fastapi import Request

from api.container import Container
from port.token_service import TokenService
from services.identity_service import IdentityService


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_identity_service(request: Request) -> IdentityService:
    return get_container(request).identity_service


def get_token_service(request: Request) -> TokenService:
    return get_container(request).token_service
