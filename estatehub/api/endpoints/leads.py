import logging
from typing import List

from fastapi import APIRouter, Depends, Request

from estatehub.core.config import settings
from estatehub.core.exceptions import LeadNotFoundError
from estatehub.core.rate_limit import limiter
from estatehub.dependencies import get_lead_repo
from estatehub.repositories.lead_repository import LeadRepository
from estatehub.schemas.common import MessageResponse
from estatehub.schemas.lead import LeadCreate, LeadOut, LeadUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["Leads"])


@router.get("", response_model=List[LeadOut])
async def list_leads(
    repo: LeadRepository = Depends(get_lead_repo),
):
    """Return every lead, newest first, with ``propertyId`` populated."""
    rows = await repo.list_with_property()
    return [LeadOut.populated(lead, prop) for lead, prop in rows]


@router.post("", response_model=LeadOut, status_code=201)
@limiter.limit(settings.PUBLIC_FORM_RATE_LIMIT)
async def create_lead(
    request: Request,
    payload: LeadCreate,
    repo: LeadRepository = Depends(get_lead_repo),
):
    lead = await repo.create(**payload.model_dump())
    await repo.commit()
    logger.info("Lead created: %s (status=%s)", lead.id, lead.status)
    return lead


@router.put("/{lead_id}", response_model=LeadOut)
async def update_lead(
    lead_id: str,
    payload: LeadUpdate,
    repo: LeadRepository = Depends(get_lead_repo),
):
    lead = await repo.get_by_id(lead_id)
    if lead is None:
        raise LeadNotFoundError()
    lead = await repo.update(lead, payload.model_dump(exclude_unset=True))
    await repo.commit()
    return lead


@router.delete("/{lead_id}", response_model=MessageResponse)
async def delete_lead(
    lead_id: str,
    repo: LeadRepository = Depends(get_lead_repo),
):
    lead = await repo.get_by_id(lead_id)
    if lead is None:
        raise LeadNotFoundError()
    await repo.delete(lead)
    await repo.commit()
    return MessageResponse(message="Lead deleted successfully")
