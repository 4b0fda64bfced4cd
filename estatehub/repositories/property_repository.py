from typing import List

from sqlalchemy import select

from estatehub.models.property import Property
from estatehub.repositories.base import BaseRepository


class PropertyRepository(BaseRepository[Property]):
    """Encapsulates every SQL query that touches the ``properties`` table."""

    model = Property

    async def list_newest_first(self) -> List[Property]:
        """Return every listing, most recently created first."""
        result = await self._db.execute(
            select(Property).order_by(Property.created_at.desc())
        )
        return list(result.scalars().all())
