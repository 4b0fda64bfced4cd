import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from estatehub.core.exceptions import (
    InvalidPropertyDataError,
    PropertyNotFoundError,
    RecordCreationError,
)
from estatehub.dependencies import get_property_repo
from estatehub.repositories.property_repository import PropertyRepository
from estatehub.schemas.common import MessageResponse
from estatehub.schemas.property import PropertyCreate, PropertyOut, PropertyUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get("", response_model=List[PropertyOut])
async def list_properties(
    repo: PropertyRepository = Depends(get_property_repo),
):
    """Return the whole catalog, newest listing first."""
    return await repo.list_newest_first()


@router.get("/{property_id}", response_model=PropertyOut)
async def get_property(
    property_id: str,
    repo: PropertyRepository = Depends(get_property_repo),
):
    prop = await repo.get_by_id(property_id)
    if prop is None:
        raise PropertyNotFoundError()
    return prop


@router.post("", response_model=PropertyOut, status_code=201)
async def create_property(
    payload: PropertyCreate,
    repo: PropertyRepository = Depends(get_property_repo),
):
    missing = payload.missing_required_fields()
    if missing:
        logger.warning("Property rejected, missing fields: %s", ", ".join(missing))
        raise InvalidPropertyDataError()

    try:
        prop = await repo.create(**payload.model_dump())
        await repo.commit()
    except SQLAlchemyError as exc:
        await repo.rollback()
        logger.error("Failed to store property %r: %s", payload.title, exc)
        raise RecordCreationError("Failed to create property", details=str(exc))

    logger.info("Property created: %s", prop.id)
    return prop


@router.put("/{property_id}", response_model=PropertyOut)
async def update_property(
    property_id: str,
    payload: PropertyUpdate,
    repo: PropertyRepository = Depends(get_property_repo),
):
    prop = await repo.get_by_id(property_id)
    if prop is None:
        raise PropertyNotFoundError()
    prop = await repo.update(prop, payload.model_dump(exclude_unset=True))
    await repo.commit()
    return prop


@router.delete("/{property_id}", response_model=MessageResponse)
async def delete_property(
    property_id: str,
    repo: PropertyRepository = Depends(get_property_repo),
):
    prop = await repo.get_by_id(property_id)
    if prop is None:
        raise PropertyNotFoundError()
    await repo.delete(prop)
    await repo.commit()
    logger.info("Property deleted: %s", property_id)
    return MessageResponse(message="Property deleted successfully")
