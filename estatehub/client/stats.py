"""Headline numbers for the home page and the admin dashboard."""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Sequence

from pydantic import BaseModel

from estatehub.client.normalize import Record, parse_timestamp

NEW_LISTING_WINDOW = timedelta(days=7)
UPCOMING_VISIT_STATUSES = frozenset({"pending", "confirmed"})


class CatalogStats(BaseModel):
    total_properties: int
    new_listings: int
    upcoming_site_visits: int
    hot_deals: int


class AdminStats(BaseModel):
    total_properties: int
    total_leads: int
    total_site_visits: int
    leads_in_negotiation: int


def catalog_stats(
    properties: Sequence[Record],
    site_visits: Sequence[Record],
    now: Optional[datetime] = None,
) -> CatalogStats:
    now = now or datetime.now(timezone.utc)
    cutoff = now - NEW_LISTING_WINDOW

    new_listings = 0
    for prop in properties:
        created = parse_timestamp(prop.get("createdAt"))
        if created is not None and created > cutoff:
            new_listings += 1

    return CatalogStats(
        total_properties=len(properties),
        new_listings=new_listings,
        upcoming_site_visits=sum(
            1 for v in site_visits if v.get("status") in UPCOMING_VISIT_STATUSES
        ),
        hot_deals=sum(1 for p in properties if p.get("status") == "hot-deal"),
    )


def admin_stats(
    properties: Sequence[Record],
    leads: Sequence[Record],
    site_visits: Sequence[Record],
) -> AdminStats:
    return AdminStats(
        total_properties=len(properties),
        total_leads=len(leads),
        total_site_visits=len(site_visits),
        leads_in_negotiation=sum(
            1 for lead in leads if lead.get("status") == "negotiation"
        ),
    )


def lead_status_breakdown(leads: Sequence[Record]) -> Dict[str, int]:
    """Lead count per funnel status, statuses with no leads omitted."""
    return dict(Counter(lead.get("status", "raw") for lead in leads))
