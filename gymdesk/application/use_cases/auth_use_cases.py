# gymdesk/application/use_cases/auth_use_cases.py (async version)

"""
Service for staff authentication.

Login exchanges a username and password for an access token that carries
the user's gym; that claim is the only source of the tenant for later
requests.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.adapters.outbound.persistence.models import User
from gymdesk.adapters.outbound.persistence.repositories.user_repository import user_repository
from gymdesk.adapters.outbound.security.auth_user_manager import UserAuthManager
from gymdesk.application.dtos.user_dto import LoginRequest, TokenData
from gymdesk.application.ports.inbound import IAuthUseCase
from gymdesk.domain.models.tenant_domain_model import TenantContext, UNKNOWN_CALLER
from gymdesk.domain.services.audit_service import audit_service

logger = logging.getLogger(__name__)


class AsyncAuthService(IAuthUseCase):
    """
    Service for user authentication.
    """

    def __init__(self, db_session: AsyncSession, client_ip: str = UNKNOWN_CALLER):
        """
        Initialize the service with a database session.

        Args:
            db_session: Active SQLAlchemy session
            client_ip: Caller address, recorded in the audit trail
        """
        self.db = db_session
        self.client_ip = client_ip

    async def login_user(self, credentials: LoginRequest) -> TokenData:
        """
        Authenticate a user and generate an access token.

        Raises:
            InvalidCredentialsException: If credentials are invalid
            ResourceInactiveException: If the user is disabled
        """
        user = await user_repository.authenticate(
            self.db,
            username=credentials.username,
            password=credentials.password
        )

        token, expires_at = await UserAuthManager.create_access_token(
            subject=user.username,
            gym_id=user.gym_id,
        )

        logger.info(f"Successful login: {user.username} (gym {user.gym_id})")
        audit_service.log(
            "LOGIN", "USER", user.id,
            TenantContext(gym_id=user.gym_id, username=user.username, client_ip=self.client_ip),
        )
        return TokenData(access_token=token, expires_at=expires_at)

    async def ensure_admin(self, username: Optional[str], password: Optional[str], gym_id: int) -> Optional[User]:
        """
        Create the bootstrap admin user of ``gym_id`` if it does not exist.

        Returns:
            The created user, or None when nothing was configured or it already exists
        """
        if not username or not password:
            return None

        if await user_repository.get_by_username(self.db, username):
            logger.debug(f"Admin user '{username}' already present")
            return None

        try:
            user = await user_repository.create_with_password(
                self.db, username=username, password=password, gym_id=gym_id
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Admin user '{username}' created for gym {gym_id}")
        return user
