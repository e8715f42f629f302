"""Auth dependencies: bearer token verification and the /users gating policy."""

from typing import Annotated

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from account_api.core.config import Settings, get_settings
from account_api.core.errors import UnauthorizedError
from account_api.core.security import decode_access_token
from account_api.schemas.auth import TokenClaims

# Scheme match is case-sensitive with exactly one space, unlike HTTPBearer's own parsing.
BEARER_PREFIX = "Bearer "

# Registered for the OpenAPI security scheme only; the raw header is parsed below.
bearer_scheme = HTTPBearer(auto_error=False, bearerFormat="JWT")


def extract_bearer_token(authorization: str | None) -> str:
    """Token from an 'Authorization: Bearer <token>' header, or '' if absent or malformed."""
    header = authorization or ""
    if not header.startswith(BEARER_PREFIX):
        return ""
    return header[len(BEARER_PREFIX):].strip()


def require_token(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    _credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> TokenClaims:
    """
    Dependency: require a valid bearer token and return its claims.

    401 "Missing token" before any parsing when the header is absent or malformed;
    500 when no signing secret is configured (ConfigError from decode);
    401 "Invalid token" for bad signature, malformed or expired tokens alike.
    On success the claims are also attached to request.state.user.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        raise UnauthorizedError("Missing token")
    try:
        payload = decode_access_token(token, settings.signing_secret, settings.JWT_ALGORITHM)
        claims = TokenClaims.model_validate(payload)
    except (jwt.PyJWTError, ValidationError):
        raise UnauthorizedError("Invalid token")
    request.state.user = claims
    return claims


def users_guard(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> TokenClaims | None:
    """Dependency for /users list/get/update/delete: token required unless USERS_REQUIRE_AUTH is off."""
    if not settings.USERS_REQUIRE_AUTH:
        return None
    return require_token(request, settings, credentials)
