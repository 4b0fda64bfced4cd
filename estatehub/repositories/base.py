from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from estatehub.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Holds the database session and the CRUD every collection shares.

    Every concrete repository receives an ``AsyncSession`` at
    construction time so that multiple repositories can share the same
    unit-of-work within a single request.
    """

    model: Type[ModelT]

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_by_id(self, record_id: str) -> Optional[ModelT]:
        """Return a single document by primary key, or ``None``."""
        return await self._db.get(self.model, record_id)

    async def create(self, **kwargs: Any) -> ModelT:
        """Insert a new document and return the model instance."""
        record = self.model(**kwargs)
        self._db.add(record)
        await self._db.flush()
        await self._db.refresh(record)
        return record

    async def update(self, record: ModelT, changes: Dict[str, Any]) -> ModelT:
        """Apply *changes* to an existing document."""
        for key, value in changes.items():
            setattr(record, key, value)
        await self._db.flush()
        await self._db.refresh(record)
        return record

    async def delete(self, record: ModelT) -> None:
        await self._db.delete(record)
        await self._db.flush()

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._db.commit()

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        await self._db.rollback()
