"""
Blog API Backend - Login Route Handler
=======================================

What:  Handles POST /login.
How:   Delegates the credential check and token signing to AuthService.

The body is read as raw JSON rather than validated against LoginRequest up
front: a missing body, a non-JSON content type, a non-object body or wrongly
typed fields all count as bad credentials (401), never as a 400.
Malformed JSON sent as application/json is still a 400.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError as PydanticValidationError

from app.dependencies import get_auth_service
from app.schemas.post import ErrorResponse, LoginRequest, TokenResponse
from app.services.auth_service import AuthService

router = APIRouter(tags=["Auth"])


def credentials_from_body(body: Any) -> LoginRequest:
    if not isinstance(body, dict):
        return LoginRequest()
    try:
        return LoginRequest.model_validate(body)
    except PydanticValidationError:
        return LoginRequest()


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        200: {"description": "Signed bearer token", "model": TokenResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Exchange username and password for a bearer token",
)
async def login(
    body: Any = Body(default=None),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Issue a signed token valid for the configured window (default one hour).
    """
    payload = credentials_from_body(body)
    token = auth_service.login(payload.username, payload.password)
    return TokenResponse(token=token)
