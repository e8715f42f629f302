"""User CRUD over the tbl_users table. Passwords are always stored hashed."""

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from account_api.core.errors import BadRequestError, ConflictError, NotFoundError
from account_api.core.security import hash_password
from account_api.models import User
from account_api.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"
DUPLICATE_USERNAME_MESSAGE = "Username already exists"


def parse_user_id(raw: Any) -> int:
    """Parse a path/body id; anything but a positive integer is a 400."""
    try:
        user_id = int(str(raw).strip())
    except (TypeError, ValueError):
        raise BadRequestError("Invalid id")
    if user_id <= 0:
        raise BadRequestError("Invalid id")
    return user_id


def _username_taken(session: Session, username: str, exclude_id: int | None = None) -> bool:
    query = session.query(User.id).filter(User.username == username)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def create_user(session: Session, data: UserCreate, rounds: int) -> User:
    """Register a new user. Raises BadRequestError or ConflictError."""
    if not data.username:
        raise BadRequestError("Username is required")
    if not data.password:
        raise BadRequestError("Password is required")
    if _username_taken(session, data.username):
        raise ConflictError(DUPLICATE_USERNAME_MESSAGE)

    user = User(
        firstname=data.firstname or None,
        fullname=data.fullname or None,
        lastname=data.lastname or None,
        username=data.username,
        password=hash_password(data.password, rounds),
        address=data.address or None,
        sex=data.sex or None,
        birthday=data.birthday,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same username.
        session.rollback()
        raise ConflictError(DUPLICATE_USERNAME_MESSAGE) from e
    session.refresh(user)
    logger.info("User created", extra={"user_id": user.id})
    return user


def list_users(session: Session) -> list[User]:
    """All users, newest first."""
    return session.query(User).order_by(User.id.desc()).all()


def get_user(session: Session, user_id: int) -> User:
    user = session.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return user


def _build_changes(
    session: Session, user_id: int, data: UserUpdate, rounds: int
) -> dict[str, Any]:
    provided = data.provided_fields()
    changes: dict[str, Any] = {}

    if "username" in provided:
        username = provided["username"]
        if not username:
            raise BadRequestError("Username cannot be empty")
        if _username_taken(session, username, exclude_id=user_id):
            raise ConflictError(DUPLICATE_USERNAME_MESSAGE)
        changes["username"] = username

    for name in ("firstname", "fullname", "lastname", "address", "sex"):
        if name in provided:
            changes[name] = provided[name] or None

    # status is free-form; an explicit null leaves the column (NOT NULL) untouched.
    if provided.get("status") is not None:
        changes["status"] = provided["status"]

    if "birthday" in provided:
        changes["birthday"] = provided["birthday"]

    if "password" in provided:
        if not provided["password"]:
            raise BadRequestError("Password cannot be empty")
        changes["password"] = hash_password(provided["password"], rounds)

    return changes


def update_user(session: Session, user_id: int, data: UserUpdate, rounds: int) -> None:
    """
    Apply a partial update. Raises BadRequestError when nothing is sent or a
    required field is blanked, ConflictError on a taken username, NotFoundError
    for an unknown id.
    """
    changes = _build_changes(session, user_id, data, rounds)
    if not changes:
        raise BadRequestError("No fields to update")
    changes["updated_at"] = func.now()

    try:
        affected = (
            session.query(User)
            .filter(User.id == user_id)
            .update(changes, synchronize_session=False)
        )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError(DUPLICATE_USERNAME_MESSAGE) from e
    if affected == 0:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    logger.info("User updated", extra={"user_id": user_id, "fields": sorted(changes)})


def delete_user(session: Session, user_id: int) -> None:
    affected = (
        session.query(User)
        .filter(User.id == user_id)
        .delete(synchronize_session=False)
    )
    session.commit()
    if affected == 0:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    logger.info("User deleted", extra={"user_id": user_id})
