from typing import List, Optional, Tuple

from sqlalchemy import select

from estatehub.models.property import Property
from estatehub.models.site_visit import SiteVisit
from estatehub.repositories.base import BaseRepository


class SiteVisitRepository(BaseRepository[SiteVisit]):
    """Encapsulates every SQL query that touches the ``site_visits`` table."""

    model = SiteVisit

    async def list_with_property(
        self,
    ) -> List[Tuple[SiteVisit, Optional[Property]]]:
        """Return every visit in calendar order, paired with its property."""
        result = await self._db.execute(
            select(SiteVisit, Property)
            .outerjoin(Property, SiteVisit.property_id == Property.id)
            .order_by(SiteVisit.date.asc())
        )
        return [(visit, prop) for visit, prop in result.all()]
