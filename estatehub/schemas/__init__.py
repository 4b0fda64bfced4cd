"""Pydantic schemas package – re-exports for convenience."""

from estatehub.schemas.common import (
    PropertyType as PropertyType,
    PropertyStatus as PropertyStatus,
    LeadStatus as LeadStatus,
    SiteVisitStatus as SiteVisitStatus,
    MessageResponse as MessageResponse,
    HealthResponse as HealthResponse,
)
from estatehub.schemas.property import (
    Location as Location,
    PropertyCreate as PropertyCreate,
    PropertyUpdate as PropertyUpdate,
    PropertyOut as PropertyOut,
)
from estatehub.schemas.lead import (
    RequirementDetails as RequirementDetails,
    LeadCreate as LeadCreate,
    LeadUpdate as LeadUpdate,
    LeadOut as LeadOut,
)
from estatehub.schemas.site_visit import (
    SiteVisitCreate as SiteVisitCreate,
    SiteVisitUpdate as SiteVisitUpdate,
    SiteVisitOut as SiteVisitOut,
)
