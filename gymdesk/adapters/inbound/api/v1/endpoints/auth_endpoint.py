# gymdesk/adapters/inbound/api/v1/endpoints/auth_endpoint.py (async version)

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.application.use_cases.auth_use_cases import AsyncAuthService
from gymdesk.adapters.inbound.api.deps import get_session, get_client_ip
from gymdesk.application.dtos.user_dto import LoginRequest, TokenData

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/login",
    response_model=TokenData,
    summary="Login - Generates access token",
    description=(
            "Authenticates a gym staff user (username/password) and returns a JWT "
            "scoped to the user's gym. Attempts are limited per IP address."
    ),
    responses={
        401: {
            "description": "Invalid username or password",
            "content": {
                "application/json": {
                    "example": {"detail": "Invalid username or password", "code": "INVALID_CREDENTIALS"}
                }
            }
        },
        429: {
            "description": "Too many login attempts from this address",
            "content": {
                "application/json": {
                    "example": {"detail": "Too many requests. Try again later.", "code": "RATE_LIMIT_EXCEEDED"}
                }
            }
        },
    }
)
async def login_user(
        credentials: LoginRequest,
        db: AsyncSession = Depends(get_session),
        client_ip: str = Depends(get_client_ip),
):
    service = AsyncAuthService(db, client_ip=client_ip)
    return await service.login_user(credentials)
