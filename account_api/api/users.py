"""User resource: public registration plus list/get/update/delete behind users_guard."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from account_api.api.deps import users_guard
from account_api.api.errors import store_errors
from account_api.core.config import Settings, get_settings
from account_api.core.database import get_db
from account_api.core.errors import BadRequestError
from account_api.schemas.auth import TokenClaims
from account_api.schemas.common import ErrorResponse, MessageResponse
from account_api.schemas.user import UserCreate, UserOut, UserUpdate
from account_api.services import users as users_service

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Bad request"},
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    404: {"model": ErrorResponse, "description": "User not found"},
    409: {"model": ErrorResponse, "description": "Duplicate username"},
    500: {"model": ErrorResponse, "description": "Server error"},
}


def _responses(*codes: int) -> dict:
    return {code: ERROR_RESPONSES[code] for code in codes}


def register(
    body: UserCreate,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserOut:
    """Create a new user. The password is stored as a bcrypt hash and never returned."""
    with store_errors("Insert failed", "POST /users"):
        user = users_service.create_user(db, body, settings.BCRYPT_ROUNDS)
        return UserOut.model_validate(user)


for path, in_schema in (("", True), ("/", False)):
    router.add_api_route(
        path,
        register,
        methods=["POST"],
        status_code=status.HTTP_201_CREATED,
        response_model=UserOut,
        responses=_responses(400, 409, 500),
        summary="Create a new user",
        include_in_schema=in_schema,
    )


@router.get("", response_model=list[UserOut], responses=_responses(401, 500))
@router.get("/", response_model=list[UserOut], responses=_responses(401, 500), include_in_schema=False)
def list_users(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[TokenClaims | None, Depends(users_guard)],
) -> list[UserOut]:
    """List all users, newest first."""
    with store_errors("Query failed", "GET /users"):
        return [UserOut.model_validate(u) for u in users_service.list_users(db)]


@router.get("/{user_id}", response_model=UserOut, responses=_responses(400, 401, 404, 500))
def get_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[TokenClaims | None, Depends(users_guard)],
) -> UserOut:
    uid = users_service.parse_user_id(user_id)
    with store_errors("Query failed", "GET /users/:id"):
        return UserOut.model_validate(users_service.get_user(db, uid))


def _update(db: Session, user_id: int, body: UserUpdate, rounds: int) -> MessageResponse:
    with store_errors("Update failed", "PUT /users"):
        users_service.update_user(db, user_id, body, rounds)
    return MessageResponse(message="User updated successfully")


@router.put(
    "/{user_id}",
    response_model=MessageResponse,
    responses=_responses(400, 401, 404, 409, 500),
)
def update_user(
    user_id: str,
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    _user: Annotated[TokenClaims | None, Depends(users_guard)],
) -> MessageResponse:
    """Update any subset of the user's fields. A new password is hashed before storage."""
    uid = users_service.parse_user_id(user_id)
    return _update(db, uid, body, settings.BCRYPT_ROUNDS)


@router.put("", response_model=MessageResponse, responses=_responses(400, 401, 404, 409, 500))
@router.put(
    "/",
    response_model=MessageResponse,
    responses=_responses(400, 401, 404, 409, 500),
    include_in_schema=False,
)
def update_user_by_body_id(
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    _user: Annotated[TokenClaims | None, Depends(users_guard)],
) -> MessageResponse:
    """Same as PUT /{id}, with the id taken from the request body."""
    if body.id is None:
        raise BadRequestError("Invalid id")
    uid = users_service.parse_user_id(body.id)
    return _update(db, uid, body, settings.BCRYPT_ROUNDS)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses=_responses(400, 401, 404, 500),
)
def delete_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[TokenClaims | None, Depends(users_guard)],
) -> MessageResponse:
    uid = users_service.parse_user_id(user_id)
    with store_errors("Delete failed", "DELETE /users/:id"):
        users_service.delete_user(db, uid)
    return MessageResponse(message="User deleted successfully")
