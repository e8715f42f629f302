"""Login, logout and registration endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from account_api.api.deps import require_token
from account_api.api.errors import store_errors
from account_api.api.users import register
from account_api.core.config import Settings, get_settings
from account_api.core.database import get_db
from account_api.schemas.auth import LoginRequest, LoginResponse, TokenClaims
from account_api.schemas.common import ErrorResponse, MessageResponse
from account_api.schemas.user import UserOut
from account_api.services.auth import authenticate

router = APIRouter()

LOGIN_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing credentials"},
    401: {"model": ErrorResponse, "description": "User not found or invalid password"},
    500: {"model": ErrorResponse, "description": "Server missing secret or query failure"},
}


@router.post("/login", response_model=LoginResponse, responses=LOGIN_RESPONSES)
@router.post("", response_model=LoginResponse, responses=LOGIN_RESPONSES, include_in_schema=False)
@router.post("/", response_model=LoginResponse, responses=LOGIN_RESPONSES, include_in_schema=False)
def login(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    body: Annotated[LoginRequest | None, Body()] = None,
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT valid for one hour.

    Legacy plaintext passwords are upgraded to bcrypt on the first successful login.
    Include the token in the Authorization header as: Bearer <token>
    """
    credentials = body or LoginRequest()
    with store_errors("Login failed", "POST /login"):
        result = authenticate(db, settings, credentials.username, credentials.password)
    return LoginResponse(message="Login successful", token=result.token, user=result.user)


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
def logout(_user: Annotated[TokenClaims, Depends(require_token)]) -> MessageResponse:
    """Tokens are stateless; this only confirms the presented token is valid."""
    return MessageResponse(message="Logged out")


router.add_api_route(
    "/register",
    register,
    methods=["POST"],
    status_code=status.HTTP_201_CREATED,
    response_model=UserOut,
    responses={
        400: {"model": ErrorResponse, "description": "Missing field"},
        409: {"model": ErrorResponse, "description": "Duplicate username"},
        500: {"model": ErrorResponse, "description": "Server error"},
    },
    summary="Register a new user",
)
