# gymdesk/adapters/outbound/persistence/repositories/base_repository.py (async version)

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from sqlalchemy import Select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.future import select
import logging

from gymdesk.adapters.outbound.persistence.models.base_model import Base
from gymdesk.domain.exceptions import (
    ResourceAlreadyExistsException,
    DatabaseOperationException
)
from gymdesk.domain.models.tenant_domain_model import TenantContext, require_tenant

# Define generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)

# Configure logger
logger = logging.getLogger(__name__)


class AsyncTenantCRUDBase(Generic[ModelType]):
    """
    Async base class for tenant-owned entities.

    Every read is filtered by the gym of the caller's tenant context. Writes
    only flush: the calling use case owns the transaction and commits once,
    so several writes (a payment and the renewal it triggers) land together.

    Attributes:
        model: SQLAlchemy model class, must have a ``gym_id`` column
        logger: Configured logger for the class
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize the repository with an SQLAlchemy model.

        Args:
            model: SQLAlchemy model class associated with this repository
        """
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    async def get(self, db: AsyncSession, tenant: TenantContext, id: Any) -> Optional[ModelType]:
        """
        Get an entity of the tenant's gym by ID.

        Args:
            db: Async database session
            tenant: Caller's tenant context
            id: ID of the entity

        Returns:
            Entity found or None if it doesn't exist in this gym
        """
        gym_id = require_tenant(tenant)
        try:
            query = select(self.model).where(self.model.id == id, self.model.gym_id == gym_id)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.model.__name__} with ID {id}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error fetching {self.model.__name__}",
                original_error=e
            )

    async def get_multi(self, db: AsyncSession, query: Select) -> List[ModelType]:
        """Run a prepared (already tenant-scoped) select."""
        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error listing {self.model.__name__}s",
                original_error=e
            )

    async def create(self, db: AsyncSession, tenant: TenantContext, *, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new entity in the tenant's gym.

        Args:
            db: Async database session
            tenant: Caller's tenant context; its gym is stamped on the row
            obj_in: Column values

        Returns:
            Newly created entity, with its ID assigned

        Raises:
            ResourceAlreadyExistsException: If the entity already exists
            DatabaseOperationException: If another database error occurs
        """
        gym_id = require_tenant(tenant)
        db_obj = self.model(**{**obj_in, "gym_id": gym_id})
        return await self.save(db, db_obj)

    async def update(self, db: AsyncSession, *, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """
        Update an existing entity with the given column values.

        Args:
            db: Async database session
            db_obj: Model instance to update
            obj_in: Dictionary with data to update; ``id`` and ``gym_id`` are ignored

        Returns:
            Updated entity
        """
        for field, value in obj_in.items():
            if field in ("id", "gym_id"):
                continue
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        return await self.save(db, db_obj)

    async def save(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """
        Add the entity to the session and flush it.

        Raises:
            ResourceAlreadyExistsException: If the write violates a uniqueness constraint
            DatabaseOperationException: If another database error occurs
        """
        try:
            db.add(db_obj)
            await db.flush()
            await db.refresh(db_obj)
            self.logger.debug(f"{self.model.__name__} with ID {db_obj.id} flushed")
            return db_obj

        except IntegrityError as e:
            error_msg = str(e).lower()
            if 'unique' in error_msg or 'duplicate' in error_msg:
                self.logger.warning(f"Uniqueness violation saving {self.model.__name__}: {str(e)}")
                raise ResourceAlreadyExistsException(
                    detail=f"{self.model.__name__} with these data already exists"
                )
            self.logger.error(f"Integrity error saving {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(original_error=e)

        except SQLAlchemyError as e:
            self.logger.error(f"Error saving {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error saving {self.model.__name__}",
                original_error=e
            )

    async def remove(self, db: AsyncSession, *, db_obj: ModelType) -> ModelType:
        """
        Remove an entity previously loaded through ``get``.

        Raises:
            DatabaseOperationException: If an error occurs during removal
        """
        try:
            await db.delete(db_obj)
            await db.flush()
            self.logger.info(f"{self.model.__name__} with ID {db_obj.id} removed")
            return db_obj

        except IntegrityError as e:
            self.logger.error(f"Integrity error removing {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Cannot remove {self.model.__name__} as it is being used by other entities",
                original_error=e
            )

        except SQLAlchemyError as e:
            self.logger.error(f"Error removing {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error removing {self.model.__name__}",
                original_error=e
            )

    async def remove_where(self, db: AsyncSession, tenant: TenantContext, **filters) -> int:
        """
        Bulk delete the tenant's entities matching ``field=value`` filters.

        Returns:
            Number of deleted rows
        """
        gym_id = require_tenant(tenant)
        try:
            stmt = delete(self.model).where(self.model.gym_id == gym_id)
            for field, value in filters.items():
                stmt = stmt.where(getattr(self.model, field) == value)
            result = await db.execute(stmt)
            return result.rowcount or 0
        except SQLAlchemyError as e:
            self.logger.error(f"Error bulk removing {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error removing {self.model.__name__}s",
                original_error=e
            )
