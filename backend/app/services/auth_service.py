"""
Blog API Backend - Authentication Service
==========================================

What:  Login (credentials → signed token) and token verification.
How:   Composes two pluggable capabilities:
       - CredentialVerifier: decides whether a username/password pair is valid
       - TokenService: signs a payload into a token and verifies it back
Who:   Called by the /login route and by the `require_user` dependency.

Sessions are stateless: nothing about a token is stored server-side. A token
that verifies and has not expired is the whole authorization model; there are
no roles and no per-post ownership.

Design Decision:
    Both capabilities are abstract base classes (same pattern as PostStore) so
    a real user store or another signing scheme can replace the placeholder
    single-user check without touching the route contract.
"""

import hmac
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from app.config import Settings
from app.exceptions import UnauthorizedError
from app.schemas.post import TokenPayload

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = "Authorization token is missing"
INVALID_TOKEN_MESSAGE = "Authorization token is invalid or expired"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


# ══════════════════════════════════════════════════════════════════════════
# Credential Verification
# ══════════════════════════════════════════════════════════════════════════


class CredentialVerifier(ABC):
    """Decides whether a username/password pair may log in."""

    @abstractmethod
    def verify(self, username: str, password: str) -> bool:
        ...


class StaticCredentialVerifier(CredentialVerifier):
    """
    Accepts exactly one configured username/password pair.

    Placeholder single-user gate: no user store, no password hashing.
    Comparison is constant-time over the UTF-8 bytes.
    """

    def __init__(self, username: str, password: str):
        self._username = username.encode("utf-8")
        self._password = password.encode("utf-8")

    def verify(self, username: str, password: str) -> bool:
        # Evaluate both comparisons so timing does not reveal which one failed
        username_ok = hmac.compare_digest(username.encode("utf-8"), self._username)
        password_ok = hmac.compare_digest(password.encode("utf-8"), self._password)
        return username_ok and password_ok


# ══════════════════════════════════════════════════════════════════════════
# Token Signing
# ══════════════════════════════════════════════════════════════════════════


class TokenService(ABC):
    """Signs payloads into opaque tokens and verifies them back."""

    @abstractmethod
    def sign(self, payload: Dict[str, Any]) -> str:
        ...

    @abstractmethod
    def verify(self, token: str) -> Dict[str, Any]:
        """
        Returns the decoded payload.

        Raises:
            UnauthorizedError: Signature is invalid or the token has expired.
        """


class JWTTokenService(TokenService):
    """
    HMAC-signed JSON Web Tokens via PyJWT.

    Every token carries `iat` and `exp`; verification requires `exp` and
    rejects expired tokens with no leeway.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: int = 3600):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def sign(self, payload: Dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            **payload,
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_in),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise UnauthorizedError(message=INVALID_TOKEN_MESSAGE, context={"reason": "expired"})
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid token: %s", type(e).__name__)
            raise UnauthorizedError(
                message=INVALID_TOKEN_MESSAGE, context={"reason": type(e).__name__}
            )


# ══════════════════════════════════════════════════════════════════════════
# Service
# ══════════════════════════════════════════════════════════════════════════


class AuthService:
    """
    Login and token authentication.

    Responsibilities:
        - login(): verify credentials, issue a token embedding {username}
        - authenticate(): turn a presented token into a TokenPayload
    """

    def __init__(self, credentials: CredentialVerifier, tokens: TokenService):
        self.credentials = credentials
        self.tokens = tokens

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "AuthService":
        return cls(
            credentials=StaticCredentialVerifier(
                app_settings.auth_username, app_settings.auth_password
            ),
            tokens=JWTTokenService(
                secret=app_settings.jwt_secret,
                algorithm=app_settings.jwt_algorithm,
                expires_in=app_settings.jwt_expires_in,
            ),
        )

    def login(self, username: Optional[str], password: Optional[str]) -> str:
        """
        Issue a signed token for a valid credential pair.

        Raises:
            UnauthorizedError: Either field is missing or the pair does not match.
        """
        if username is None or password is None or not self.credentials.verify(username, password):
            logger.warning("Failed login attempt for user '%s'", username)
            raise UnauthorizedError(message=INVALID_CREDENTIALS_MESSAGE)

        token = self.tokens.sign({"username": username})
        logger.info("User '%s' logged in successfully.", username)
        return token

    def authenticate(self, token: Optional[str]) -> TokenPayload:
        """
        Verify a bearer token and return its principal.

        Raises:
            UnauthorizedError: Token is absent, invalid, expired, or lacks a username.
        """
        if not token:
            raise UnauthorizedError(message=MISSING_TOKEN_MESSAGE)

        payload = self.tokens.verify(token)
        try:
            return TokenPayload.model_validate(payload)
        except PydanticValidationError:
            raise UnauthorizedError(
                message=INVALID_TOKEN_MESSAGE, context={"reason": "missing username claim"}
            )
