from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from estatehub.core.database import get_db
from estatehub.repositories.lead_repository import LeadRepository
from estatehub.repositories.property_repository import PropertyRepository
from estatehub.repositories.site_visit_repository import SiteVisitRepository


# ---------------------------------------------------------------------------
# Repository factory functions (one per repository, each gets the shared db)
# ---------------------------------------------------------------------------


async def get_property_repo(
    db: AsyncSession = Depends(get_db),
) -> PropertyRepository:
    return PropertyRepository(db)


async def get_lead_repo(
    db: AsyncSession = Depends(get_db),
) -> LeadRepository:
    return LeadRepository(db)


async def get_site_visit_repo(
    db: AsyncSession = Depends(get_db),
) -> SiteVisitRepository:
    return SiteVisitRepository(db)
