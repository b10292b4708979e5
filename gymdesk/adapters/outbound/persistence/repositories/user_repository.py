# gymdesk/adapters/outbound/persistence/repositories/user_repository.py (async version)

"""
Repository for gym staff users.

Users are looked up by username before any tenant is known (login), so this
repository is not tenant-scoped; it implements ``IUserStore``.
"""

import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from gymdesk.adapters.outbound.persistence.models import User
from gymdesk.adapters.outbound.security.auth_user_manager import UserAuthManager
from gymdesk.application.ports.outbound import IUserStore
from gymdesk.domain.exceptions import (
    ResourceAlreadyExistsException,
    DatabaseOperationException,
    InvalidCredentialsException,
    ResourceInactiveException,
)


class AsyncUserCRUD:
    """
    Async CRUD repository for the User entity: lookup by username,
    creation with a hashed password and credential verification.
    """

    def __init__(self, model=User):
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        """
        Find a user by username.

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            query = select(User).where(User.username == username)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching user by username '{username}': {e}")
            raise DatabaseOperationException(
                detail="Error fetching user by username",
                original_error=e
            )

    async def create_with_password(
            self, db: AsyncSession, *, username: str, password: str, gym_id: int
    ) -> User:
        """
        Create a new user with a hashed password. Flushes only.

        Raises:
            ResourceAlreadyExistsException: If the username is already in use
            DatabaseOperationException: In case of database error
        """
        if await self.get_by_username(db, username):
            self.logger.warning(f"Attempt to create user with existing username: {username}")
            raise ResourceAlreadyExistsException(
                detail=f"User '{username}' already exists"
            )

        db_obj = User(
            username=username,
            password=await UserAuthManager.hash_password(password),
            gym_id=gym_id,
            is_active=True,
        )
        try:
            db.add(db_obj)
            await db.flush()
            await db.refresh(db_obj)
            self.logger.info(f"User '{username}' created for gym {gym_id}")
            return db_obj
        except IntegrityError as e:
            self.logger.warning(f"Uniqueness violation creating user '{username}': {e}")
            raise ResourceAlreadyExistsException(
                detail=f"User '{username}' already exists"
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating user: {e}")
            raise DatabaseOperationException(
                detail="Error creating user",
                original_error=e
            )

    async def authenticate(self, db: AsyncSession, *, username: str, password: str) -> User:
        """
        Check username and password.

        Raises:
            InvalidCredentialsException: Unknown user or wrong password
            ResourceInactiveException: User is disabled
        """
        user = await self.get_by_username(db, username)
        if not user or not await UserAuthManager.verify_password(password, user.password):
            self.logger.info(f"Failed login for username '{username}'")
            raise InvalidCredentialsException(detail="Invalid username or password")
        if not user.is_active:
            raise ResourceInactiveException(detail="User is inactive", resource_id=user.id)
        return user


# Create singleton instance of the repository
user_repository = AsyncUserCRUD(User)


class UserStore(IUserStore):
    """``IUserStore`` bound to one session."""

    def __init__(self, db: AsyncSession, repository: AsyncUserCRUD = user_repository):
        self.db = db
        self.repository = repository

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self.repository.get_by_username(self.db, username)
