"""Property schemas (create, update, response)."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from estatehub.core.constants import PROPERTY_REQUIRED_FIELDS
from estatehub.schemas.common import (
    CamelModel,
    PartialUpdate,
    PropertyStatus,
    PropertyType,
)


class Location(CamelModel):
    lat: float = 0.0
    lng: float = 0.0


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PropertyCreate(CamelModel):
    """Body for POST /api/properties.

    ``title``, ``city``, ``price`` and ``area`` are optional at the schema
    level so that a listing missing any of them is answered with the
    dedicated 400 message rather than a generic validation error.  Use
    :meth:`missing_required_fields` before persisting.
    """

    title: Optional[str] = None
    price: Optional[int] = Field(None, ge=0)
    city: Optional[str] = None
    area: Optional[float] = Field(None, ge=0)
    bedrooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    property_type: Optional[PropertyType] = None
    status: PropertyStatus = PropertyStatus.active
    images: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    description: str = ""
    is_featured: bool = False
    is_premium: bool = False
    is_budget_friendly: bool = False
    location: Location = Field(default_factory=Location)

    def missing_required_fields(self) -> List[str]:
        """Return the required fields that are absent or blank."""
        missing = []
        for name in PROPERTY_REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing


class PropertyUpdate(PartialUpdate):
    """Body for PUT /api/properties/{id}; only supplied fields change.

    ``propertyType`` is the one field that may be cleared with ``null``.
    """

    not_nullable = (
        "title",
        "price",
        "city",
        "area",
        "bedrooms",
        "bathrooms",
        "status",
        "images",
        "amenities",
        "description",
        "is_featured",
        "is_premium",
        "is_budget_friendly",
        "location",
    )

    title: Optional[str] = Field(None, min_length=1)
    price: Optional[int] = Field(None, ge=0)
    city: Optional[str] = Field(None, min_length=1)
    area: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    property_type: Optional[PropertyType] = None
    status: Optional[PropertyStatus] = None
    images: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    description: Optional[str] = None
    is_featured: Optional[bool] = None
    is_premium: Optional[bool] = None
    is_budget_friendly: Optional[bool] = None
    location: Optional[Location] = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PropertyOut(CamelModel):
    """A stored property as it travels on the wire (``_id`` identifier)."""

    id: str = Field(..., alias="_id")
    title: str
    price: int
    city: str
    area: float
    bedrooms: int
    bathrooms: int
    property_type: Optional[PropertyType] = None
    status: PropertyStatus
    images: List[str]
    amenities: List[str]
    description: str
    is_featured: bool
    is_premium: bool
    is_budget_friendly: bool
    location: Location
    created_at: datetime
