"""Repository layer – all database access goes through here.

Repositories encapsulate SQLAlchemy queries so that the route handlers
only translate between HTTP and documents.
"""

from estatehub.repositories.property_repository import PropertyRepository
from estatehub.repositories.lead_repository import LeadRepository
from estatehub.repositories.site_visit_repository import SiteVisitRepository

__all__ = [
    "PropertyRepository",
    "LeadRepository",
    "SiteVisitRepository",
]
