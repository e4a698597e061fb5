"""Auth: issues access tokens for the companies API."""

import logging

from fastapi import APIRouter, Depends

from registry.config import Settings, get_settings
from registry.infrastructure.security import login
from registry.schemas.auth import LoginRequest, TokenResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login_route(
    body: LoginRequest, settings: Settings = Depends(get_settings),
):
    token, expires_in = login(body.username, body.password, settings)
    logger.info(f"Authenticated user: {body.username}")
    return TokenResponse(token=token, expires_in=expires_in)
