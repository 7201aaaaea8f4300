"""
Blog API Backend - FastAPI Dependencies
========================================

What:  Dependency providers injected into route handlers via Depends().
How:   Services are built once by create_app() and kept on `app.state`;
       these functions hand them to the handlers of the current request.

`require_user` is the authentication gate. It is attached only to the three
mutating routes.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.schemas.post import TokenPayload
from app.services.auth_service import AuthService
from app.services.post_service import PostService

# auto_error=False: a missing header must become our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def require_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPayload:
    """
    Validate the `Authorization: Bearer <token>` header.

    Returns:
        The decoded token principal, for log attribution. The username is
        also put on `request.state` for the access log.

    Raises:
        UnauthorizedError: Header absent, token invalid, or token expired.
    """
    token = credentials.credentials if credentials else None
    user = auth_service.authenticate(token)
    request.state.username = user.username
    return user
