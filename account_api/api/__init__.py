"""API routes."""

from fastapi import APIRouter

from account_api.api import auth, users

router = APIRouter()
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(auth.router, prefix="/login", tags=["auth"], include_in_schema=False)
