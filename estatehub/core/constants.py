from typing import FrozenSet

from estatehub.schemas.common import (
    LeadStatus,
    PropertyStatus,
    PropertyType,
    SiteVisitStatus,
)

PROPERTY_TYPES: FrozenSet[str] = frozenset(t.value for t in PropertyType)
PROPERTY_STATUSES: FrozenSet[str] = frozenset(s.value for s in PropertyStatus)
LEAD_STATUSES: FrozenSet[str] = frozenset(s.value for s in LeadStatus)
SITE_VISIT_STATUSES: FrozenSet[str] = frozenset(s.value for s in SiteVisitStatus)


def _in_clause(column: str, values: FrozenSet[str]) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in sorted(values))})"


PROPERTY_TYPE_CHECK_CLAUSE: str = (
    "property_type IS NULL OR " + _in_clause("property_type", PROPERTY_TYPES)
)
PROPERTY_STATUS_CHECK_CLAUSE: str = _in_clause("status", PROPERTY_STATUSES)
LEAD_STATUS_CHECK_CLAUSE: str = _in_clause("status", LEAD_STATUSES)
SITE_VISIT_STATUS_CHECK_CLAUSE: str = _in_clause("status", SITE_VISIT_STATUSES)

# Fields a property listing cannot be created without
PROPERTY_REQUIRED_FIELDS = ("title", "city", "price", "area")
