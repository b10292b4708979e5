# gymdesk/adapters/inbound/api/deps.py (async version)

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via
FastAPI Depends() for database access, caller identity and the per-request
tenant context.
"""

import logging
from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.adapters.outbound.persistence.database import get_db
from gymdesk.adapters.outbound.persistence.repositories.user_repository import UserStore
from gymdesk.adapters.outbound.security.auth_user_manager import UserAuthManager
from gymdesk.domain.models.tenant_domain_model import TenantContext, UNKNOWN_CALLER

# Configure logger
logger = logging.getLogger(__name__)

# Create bearer scheme for authentication
bearer_scheme = HTTPBearer()

########################################################################
# Database Session Management
########################################################################

# Alias kept for endpoint signatures
get_session = get_db


########################################################################
# Caller identity
########################################################################

def get_client_ip(request: Request) -> str:
    """Remote address of the caller, ``"unknown"`` when the server does not report one."""
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CALLER


########################################################################
# Tenant resolution
########################################################################

async def get_tenant_context(
        credentials: HTTPAuthorizationCredentials = Security(bearer_scheme),
        db: AsyncSession = Depends(get_db),
        client_ip: str = Depends(get_client_ip),
) -> TenantContext:
    """
    Resolve the tenant of the current request from its bearer token.

    The token's ``gym_id`` claim must belong to an active user of that gym;
    a user moved to another gym or disabled loses access immediately.

    Raises:
        HTTPException: 401 if the token is invalid or the user doesn't exist/is inactive
    """
    payload = await UserAuthManager.verify_access_token(credentials.credentials)
    username = payload["sub"]
    gym_id = payload["gym_id"]

    user = await UserStore(db).get_by_username(username)
    if not user or not user.is_active or user.gym_id != gym_id:
        logger.warning(f"Token rejected for '{username}' (gym {gym_id}): user missing, inactive or moved")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TenantContext(gym_id=gym_id, username=username, client_ip=client_ip)
