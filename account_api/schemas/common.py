"""Shared response envelopes and input coercion helpers."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Canonical error envelope for every non-2xx response."""

    error: str = Field(..., description="Client-safe error message", examples=["Invalid token"])


class MessageResponse(BaseModel):
    message: str


def coerce_text(value: Any) -> str:
    """Missing/null becomes empty string; any other scalar is stringified."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def coerce_optional_text(value: Any) -> str | None:
    """Like coerce_text but keeps None, and trims surrounding whitespace."""
    if value is None:
        return None
    return coerce_text(value).strip()
