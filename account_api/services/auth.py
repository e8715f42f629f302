"""Login flow: credential lookup, password check with lazy plaintext-to-bcrypt migration, token issuance."""

import logging
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from account_api.core.errors import BadRequestError, UnauthorizedError
from account_api.core.security import (
    hash_password,
    is_password_hash,
    issue_access_token,
    legacy_password_matches,
    verify_password,
)
from account_api.models import User
from account_api.schemas.user import UserOut

if TYPE_CHECKING:
    from account_api.core.config import Settings

logger = logging.getLogger(__name__)

TOKEN_ROLE = "user"

MISSING_CREDENTIALS_MESSAGE = "username/password is required"
USER_NOT_FOUND_MESSAGE = "User not found"
INVALID_PASSWORD_MESSAGE = "Invalid password"


class MigrationOutcome(str, Enum):
    """Result of the best-effort legacy password rewrite. Logged, never returned to clients."""

    NOT_NEEDED = "not_needed"
    MIGRATED = "migrated"
    FAILED = "failed"


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: UserOut
    migration: MigrationOutcome


def build_token_claims(user: User) -> dict[str, Any]:
    """Identity claims embedded in every access token issued by login."""
    return {
        "role": TOKEN_ROLE,
        "id": user.id,
        "fullname": user.fullname,
        "lastname": user.lastname,
        "status": user.status,
    }


def _check_password(user: User, password: str) -> bool:
    """
    Verify the password against the stored credential.

    Returns True when the stored value is legacy plaintext and matched, i.e. the
    caller must migrate it. Raises UnauthorizedError on mismatch.
    """
    stored = user.password or ""
    if is_password_hash(stored):
        if not verify_password(password, stored):
            raise UnauthorizedError(INVALID_PASSWORD_MESSAGE)
        return False
    if not legacy_password_matches(password, stored):
        raise UnauthorizedError(INVALID_PASSWORD_MESSAGE)
    return True


def migrate_legacy_password(
    session: Session, user_id: int, password: str, rounds: int
) -> MigrationOutcome:
    """
    Rewrite a verified plaintext credential as a bcrypt hash and refresh updated_at.

    Failures are rolled back and logged; they never reach the caller as exceptions,
    so a successful authentication cannot be turned into a failed response.
    """
    try:
        new_hash = hash_password(password, rounds)
        session.execute(
            update(User)
            .where(User.id == user_id)
            .values(password=new_hash, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        session.commit()
    except (SQLAlchemyError, ValueError) as e:
        session.rollback()
        logger.warning(
            "Legacy password migration failed",
            extra={"user_id": user_id, "reason": type(e).__name__},
        )
        return MigrationOutcome.FAILED
    logger.info("Legacy password migrated to bcrypt", extra={"user_id": user_id})
    return MigrationOutcome.MIGRATED


def authenticate(
    session: Session,
    settings: "Settings",
    username: str,
    password: str,
) -> LoginResult:
    """
    Authenticate username/password and issue an access token.

    Raises BadRequestError for empty credentials (no store access),
    UnauthorizedError for an unknown user or wrong password,
    ConfigError when no signing secret is configured. Store errors during
    lookup propagate unchanged.
    """
    username = (username or "").strip()
    if not username or not password:
        raise BadRequestError(MISSING_CREDENTIALS_MESSAGE)

    user = session.query(User).filter(User.username == username).first()
    if user is None:
        raise UnauthorizedError(USER_NOT_FOUND_MESSAGE)

    needs_migration = _check_password(user, password)

    # Snapshot before the write-back: a failed migration rolls back and expires the instance.
    safe_user = UserOut.model_validate(user)
    claims = build_token_claims(user)

    migration = MigrationOutcome.NOT_NEEDED
    if needs_migration:
        migration = migrate_legacy_password(
            session, user.id, password, settings.BCRYPT_ROUNDS
        )

    token = issue_access_token(
        claims,
        settings.signing_secret,
        timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        algorithm=settings.JWT_ALGORITHM,
    )
    logger.info(
        "Login succeeded",
        extra={"user_id": safe_user.id, "migration": migration.value},
    )
    return LoginResult(token=token, user=safe_user, migration=migration)
