"""Request/response schemas for auth endpoints."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from account_api.schemas.common import coerce_text
from account_api.schemas.user import UserOut


class LoginRequest(BaseModel):
    """
    Credentials for login.

    Username is whitespace-trimmed; password is kept verbatim. Empty values are
    accepted here and rejected by the login flow with a 400.
    """

    username: str = Field(default="", description="Username", examples=["john"])
    password: str = Field(default="", description="Password", examples=["1234"])

    @field_validator("username", mode="before")
    @classmethod
    def normalize_username(cls, v: Any) -> str:
        return coerce_text(v).strip()

    @field_validator("password", mode="before")
    @classmethod
    def coerce_password(cls, v: Any) -> str:
        return coerce_text(v)


class LoginResponse(BaseModel):
    """Successful login: signed bearer token plus the user record without password."""

    message: str = Field(default="Login successful")
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    user: UserOut


class TokenClaims(BaseModel):
    """Claims carried by an access token, attached to request.state.user once verified."""

    role: str
    id: int
    fullname: str | None = None
    lastname: str | None = None
    status: str | None = None
    iat: int | None = None
    exp: int
