"""Generic repository over one ORM model."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.models.orm.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Primary key lookup, insert and delete shared by the access repositories.

    Repositories flush but never commit; the calling service owns the
    transaction.
    """

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, record_id: UUID) -> T | None:
        """Get a record by primary key, None if it does not exist."""
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> T:
        """Insert a record and return it with server defaults loaded.

        Args:
            **kwargs: Column values

        Returns:
            Created record
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: T) -> None:
        """Delete a loaded record."""
        await self.session.delete(instance)
        await self.session.flush()
