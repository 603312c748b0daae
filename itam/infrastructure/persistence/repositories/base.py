"""Base repository: generic lookup, insert, save and delete with unique-violation translation."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from itam.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_one_by, get_all, insert, save and remove.

    Writes run inside a SAVEPOINT so a unique violation rolls back only the
    failing statement; subclasses map it to a domain exception through
    _duplicate_error. LSP: subclasses are substitutable for BaseRepository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_one_by(self, **filters: Any) -> ModelType | None:
        """Return the single record matching column == value filters, or None."""
        model: Any = self.model
        stmt = select(self.model).where(
            *(getattr(model, column) == value for column, value in filters.items())
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self, *order_by: Any) -> list[ModelType]:
        """Return every record, optionally ordered."""
        result = await self.db.execute(select(self.model).order_by(*order_by))
        return list(result.scalars().all())

    async def insert(self, obj: ModelType) -> ModelType:
        """Persist a new record. Raises the subclass duplicate error on unique violation."""
        try:
            async with self.db.begin_nested():
                self.db.add(obj)
                await self.db.flush()
        except IntegrityError as exc:
            duplicate = self._duplicate_error(obj)
            if duplicate is None:
                raise
            raise duplicate from exc
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record (same duplicate translation as insert)."""
        try:
            async with self.db.begin_nested():
                await self.db.flush()
        except IntegrityError as exc:
            duplicate = self._duplicate_error(obj)
            if duplicate is None:
                raise
            raise duplicate from exc
        return obj

    async def remove(self, obj: ModelType) -> None:
        """Delete the record."""
        await self.db.delete(obj)
        await self.db.flush()

    def _duplicate_error(self, obj: ModelType) -> Exception | None:
        """Override to map a unique violation on obj to a domain exception."""
        return None
