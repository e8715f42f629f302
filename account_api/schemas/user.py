"""Request/response schemas for the user resource. No schema here exposes the password."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from account_api.schemas.common import coerce_optional_text, coerce_text

# Fields a PUT may change, in the order they are applied.
UPDATABLE_FIELDS = (
    "username",
    "firstname",
    "fullname",
    "lastname",
    "status",
    "address",
    "sex",
    "birthday",
    "password",
)


def _blank_date_is_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class UserCreate(BaseModel):
    """Registration body. username and password are required (checked by the service)."""

    firstname: str | None = None
    fullname: str | None = None
    lastname: str | None = None
    username: str = Field(default="", examples=["john"])
    password: str = Field(default="", examples=["1234"])
    address: str | None = None
    sex: str | None = None
    birthday: date | None = None

    @field_validator("firstname", "fullname", "lastname", "address", "sex", mode="before")
    @classmethod
    def normalize_optional(cls, v: Any) -> str | None:
        return coerce_optional_text(v)

    @field_validator("username", mode="before")
    @classmethod
    def normalize_username(cls, v: Any) -> str:
        return coerce_text(v).strip()

    @field_validator("password", mode="before")
    @classmethod
    def coerce_password(cls, v: Any) -> str:
        return coerce_text(v)

    @field_validator("birthday", mode="before")
    @classmethod
    def blank_birthday(cls, v: Any) -> Any:
        return _blank_date_is_none(v)


class UserUpdate(BaseModel):
    """
    Partial update body. Only fields present in the request are applied
    (see provided_fields); id is used by PUT without a path id.
    """

    id: int | None = None
    firstname: str | None = None
    fullname: str | None = None
    lastname: str | None = None
    username: str | None = None
    password: str | None = None
    status: str | None = None
    address: str | None = None
    sex: str | None = None
    birthday: date | None = None

    @field_validator("firstname", "fullname", "lastname", "username", "address", "sex", mode="before")
    @classmethod
    def normalize_optional(cls, v: Any) -> str | None:
        return coerce_optional_text(v)

    @field_validator("password", "status", mode="before")
    @classmethod
    def keep_verbatim(cls, v: Any) -> str | None:
        return None if v is None else coerce_text(v)

    @field_validator("birthday", mode="before")
    @classmethod
    def blank_birthday(cls, v: Any) -> Any:
        return _blank_date_is_none(v)

    def provided_fields(self) -> dict[str, Any]:
        """Updatable fields the client actually sent, with their values."""
        return {
            name: getattr(self, name)
            for name in UPDATABLE_FIELDS
            if name in self.model_fields_set
        }


class UserOut(BaseModel):
    """User record as returned to clients (password omitted)."""

    id: int
    firstname: str | None = None
    fullname: str | None = None
    lastname: str | None = None
    username: str
    address: str | None = None
    sex: str | None = None
    birthday: date | None = None
    status: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
