"""Pydantic request/response schemas."""

from account_api.schemas.auth import LoginRequest, LoginResponse, TokenClaims
from account_api.schemas.common import ErrorResponse, MessageResponse
from account_api.schemas.health import PingResponse
from account_api.schemas.user import UserCreate, UserOut, UserUpdate

__all__ = [
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PingResponse",
    "TokenClaims",
    "UserCreate",
    "UserOut",
    "UserUpdate",
]
