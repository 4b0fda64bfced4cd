from typing import List, Optional, Tuple

from sqlalchemy import select

from estatehub.models.lead import Lead
from estatehub.models.property import Property
from estatehub.repositories.base import BaseRepository


class LeadRepository(BaseRepository[Lead]):
    """Encapsulates every SQL query that touches the ``leads`` table."""

    model = Lead

    async def list_with_property(self) -> List[Tuple[Lead, Optional[Property]]]:
        """Return every lead, newest first, paired with its property.

        The property is ``None`` when the lead has no ``property_id`` or
        when the listing it points at has since been deleted.
        """
        result = await self._db.execute(
            select(Lead, Property)
            .outerjoin(Property, Lead.property_id == Property.id)
            .order_by(Lead.created_at.desc())
        )
        return [(lead, prop) for lead, prop in result.all()]
