"""Site-visit schemas (create, update, response)."""

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from estatehub.schemas.common import CamelModel, PartialUpdate, SiteVisitStatus
from estatehub.schemas.property import PropertyOut


class SiteVisitCreate(CamelModel):
    """Body for POST /api/site-visits."""

    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    property_id: str = Field(..., min_length=1)
    date: datetime
    status: SiteVisitStatus = SiteVisitStatus.pending


class SiteVisitUpdate(PartialUpdate):
    """Body for PUT /api/site-visits/{id}."""

    not_nullable = ("name", "phone", "property_id", "date", "status")

    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    property_id: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    status: Optional[SiteVisitStatus] = None


class SiteVisitOut(CamelModel):
    id: str = Field(..., alias="_id")
    name: str
    phone: str
    property_id: Union[PropertyOut, str]
    date: datetime
    status: SiteVisitStatus
    created_at: datetime

    @classmethod
    def populated(cls, visit, prop=None) -> "SiteVisitOut":
        """Build a response with ``propertyId`` replaced by *prop* if found."""
        out = cls.model_validate(visit)
        if prop is not None:
            out.property_id = PropertyOut.model_validate(prop)
        return out
