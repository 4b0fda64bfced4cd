from estatehub.models.base import Base
from estatehub.models.property import Property
from estatehub.models.lead import Lead
from estatehub.models.site_visit import SiteVisit

__all__ = [
    "Base",
    "Property",
    "Lead",
    "SiteVisit",
]
