"""
Base Repository.

Base class for all repositories with common CRUD operations.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from keepnotes.backend.core.exceptions import NotFoundError
from keepnotes.backend.core.logging import get_logger
from keepnotes.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class NoteRepository(BaseRepository[NoteDocument]):
            model = NoteDocument
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, id: str | UUID, for_update: bool = False) -> ModelType:
        """
        Get a single record by ID.

        Args:
            id: Record ID
            for_update: Lock the row until the surrounding transaction ends

        Raises:
            NotFoundError: If record not found
        """
        statement = select(self.model).where(self.model.id == str(id))
        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        instance = result.scalar_one_or_none()

        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")

        return instance

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: str | UUID, **kwargs: Any) -> ModelType:
        """
        Update an existing record.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: str | UUID) -> None:
        """
        Delete a record by ID.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)
        await self.session.delete(instance)
        await self.session.flush()
