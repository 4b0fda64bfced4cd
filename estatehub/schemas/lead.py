"""Lead schemas (create, update, response)."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import EmailStr, Field, field_validator

from estatehub.schemas.common import CamelModel, LeadStatus, PartialUpdate
from estatehub.schemas.property import PropertyOut


class NumericRange(CamelModel):
    min: Optional[float] = None
    max: Optional[float] = None


class RequirementDetails(CamelModel):
    """Structured buying/renting requirements captured by the lead form."""

    property_type: Optional[str] = None
    transaction_type: Optional[str] = None
    budget_range: Optional[NumericRange] = None
    preferred_locations: List[str] = Field(default_factory=list)
    city: Optional[str] = None
    area_range: Optional[NumericRange] = None
    configuration: Optional[str] = None
    purpose: Optional[str] = None
    timeline: Optional[str] = None
    loan_requirement: Optional[bool] = None
    special_notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class LeadCreate(CamelModel):
    """Body for POST /api/leads."""

    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    property_id: Optional[str] = None
    status: LeadStatus = LeadStatus.raw
    source: Optional[str] = None
    assigned_to: Optional[str] = None
    requirement_details: Optional[RequirementDetails] = None
    visit_date: Optional[datetime] = None

    @field_validator("email", "property_id", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        """Forms submit untouched optional inputs as empty strings."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LeadUpdate(PartialUpdate):
    """Body for PUT /api/leads/{id}; any status may be set at any time."""

    not_nullable = ("name", "phone", "status")

    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    property_id: Optional[str] = None
    status: Optional[LeadStatus] = None
    source: Optional[str] = None
    assigned_to: Optional[str] = None
    requirement_details: Optional[RequirementDetails] = None
    visit_date: Optional[datetime] = None

    @field_validator("email", "property_id", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        """Forms submit untouched optional inputs as empty strings."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeadOut(CamelModel):
    """A stored lead.

    ``property_id`` is the raw identifier, or the full property document
    when the listing endpoint populated it.
    """

    id: str = Field(..., alias="_id")
    name: str
    phone: str
    email: Optional[str] = None
    property_id: Union[PropertyOut, str, None] = None
    status: LeadStatus
    source: Optional[str] = None
    assigned_to: Optional[str] = None
    requirement_details: Optional[RequirementDetails] = None
    visit_date: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def populated(cls, lead, prop=None) -> "LeadOut":
        """Build a response with ``propertyId`` replaced by *prop* if found."""
        out = cls.model_validate(lead)
        if prop is not None:
            out.property_id = PropertyOut.model_validate(prop)
        return out
