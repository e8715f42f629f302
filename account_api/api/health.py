"""Health check endpoint backed by a database round trip."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from account_api.api.errors import store_errors
from account_api.core.database import fetch_db_time, get_db
from account_api.schemas.common import ErrorResponse
from account_api.schemas.health import PingResponse

router = APIRouter()


@router.get(
    "/ping",
    response_model=PingResponse,
    responses={500: {"model": ErrorResponse, "description": "Database error"}},
)
def ping(db: Annotated[Session, Depends(get_db)]) -> PingResponse:
    """
    Return service status and the database server time.
    Used by load balancers and monitoring.
    """
    with store_errors("Database error", "GET /ping"):
        now = fetch_db_time(db)
    return PingResponse(status="ok", time=now)
