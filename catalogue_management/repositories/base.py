"""Base repository with generic CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_management.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic repository providing common CRUD operations.

    Every write flushes immediately so constraint violations surface inside
    the calling service rather than at commit time.

    Attributes:
        model: The SQLAlchemy model class this repository manages.
        session: The async database session.
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """Initialize repository with model and session.

        Args:
            model: SQLAlchemy model class.
            session: Async database session.
        """
        self.model = model
        self.session = session

    async def add(self, instance: ModelType) -> ModelType:
        """Persist a new, already-built entity.

        Args:
            instance: Transient entity.

        Returns:
            The persisted entity with server defaults loaded.
        """
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get_all(self, *order_by: Any) -> list[ModelType]:
        """Get all entities.

        Args:
            *order_by: Columns to order by.

        Returns:
            List of entities.
        """
        query = select(self.model)
        if order_by:
            query = query.order_by(*order_by)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update(
        self,
        entity: ModelType,
        **kwargs: Any,
    ) -> ModelType:
        """Update an entity with given fields.

        Args:
            entity: The entity to update.
            **kwargs: Fields to update.

        Returns:
            The updated entity.
        """
        for key, value in kwargs.items():
            if hasattr(entity, key):
                setattr(entity, key, value)

        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        """Delete an entity.

        Args:
            entity: The entity to delete.
        """
        await self.session.delete(entity)
        await self.session.flush()

    async def count(self) -> int:
        """Count total number of entities.

        Returns:
            Total count.
        """
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()
