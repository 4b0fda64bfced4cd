import logging
from typing import List

from fastapi import APIRouter, Depends, Request

from estatehub.core.config import settings
from estatehub.core.exceptions import SiteVisitNotFoundError
from estatehub.core.rate_limit import limiter
from estatehub.dependencies import get_site_visit_repo
from estatehub.repositories.site_visit_repository import SiteVisitRepository
from estatehub.schemas.common import MessageResponse
from estatehub.schemas.site_visit import (
    SiteVisitCreate,
    SiteVisitOut,
    SiteVisitUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/site-visits", tags=["Site Visits"])


@router.get("", response_model=List[SiteVisitOut])
async def list_site_visits(
    repo: SiteVisitRepository = Depends(get_site_visit_repo),
):
    """Return every booking, earliest visit first."""
    rows = await repo.list_with_property()
    return [SiteVisitOut.populated(visit, prop) for visit, prop in rows]


@router.post("", response_model=SiteVisitOut, status_code=201)
@limiter.limit(settings.PUBLIC_FORM_RATE_LIMIT)
async def create_site_visit(
    request: Request,
    payload: SiteVisitCreate,
    repo: SiteVisitRepository = Depends(get_site_visit_repo),
):
    visit = await repo.create(**payload.model_dump())
    await repo.commit()
    logger.info("Site visit booked: %s for property %s", visit.id, visit.property_id)
    return visit


@router.put("/{visit_id}", response_model=SiteVisitOut)
async def update_site_visit(
    visit_id: str,
    payload: SiteVisitUpdate,
    repo: SiteVisitRepository = Depends(get_site_visit_repo),
):
    visit = await repo.get_by_id(visit_id)
    if visit is None:
        raise SiteVisitNotFoundError()
    visit = await repo.update(visit, payload.model_dump(exclude_unset=True))
    await repo.commit()
    return visit


@router.delete("/{visit_id}", response_model=MessageResponse)
async def delete_site_visit(
    visit_id: str,
    repo: SiteVisitRepository = Depends(get_site_visit_repo),
):
    visit = await repo.get_by_id(visit_id)
    if visit is None:
        raise SiteVisitNotFoundError()
    await repo.delete(visit)
    await repo.commit()
    return MessageResponse(message="Site visit deleted successfully")
