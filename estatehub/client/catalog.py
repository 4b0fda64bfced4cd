"""Browsing helpers for the property catalog.

Pure functions over normalized property records: listing views, the
advanced filter panel, free-text search, the side-by-side comparison
and rupee price formatting.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

from estatehub.client.normalize import Record, parse_timestamp

MAX_COMPARED_PROPERTIES = 3

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ListingView(str, Enum):
    all = "all"
    featured = "featured"
    latest = "latest"
    budget = "budget"
    premium = "premium"

    @property
    def heading(self) -> str:
        return _VIEW_TITLES[self]


_VIEW_TITLES = {
    ListingView.all: "All Properties",
    ListingView.featured: "Featured Properties",
    ListingView.latest: "Latest Listings",
    ListingView.budget: "Budget Friendly",
    ListingView.premium: "Premium Properties",
}


class PropertyFilters(BaseModel):
    """State of the advanced filter panel.

    Zero and empty values mean "not filtering on this": a minimum of 0
    bedrooms is the same as no minimum at all.
    """

    price_min: Optional[int] = None
    price_max: Optional[int] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    property_type: Optional[str] = None
    city: Optional[str] = None
    area_min: Optional[float] = None
    area_max: Optional[float] = None
    status: Optional[str] = None

    @property
    def active_count(self) -> int:
        return sum(1 for value in self.model_dump().values() if value not in (None, ""))


def _created_at(record: Record) -> datetime:
    return parse_timestamp(record.get("createdAt")) or _EPOCH


def apply_view(properties: Sequence[Record], view: ListingView) -> List[Record]:
    if view is ListingView.featured:
        return [p for p in properties if p.get("isFeatured")]
    if view is ListingView.budget:
        return [p for p in properties if p.get("isBudgetFriendly")]
    if view is ListingView.premium:
        return [p for p in properties if p.get("isPremium")]
    if view is ListingView.latest:
        return sorted(properties, key=_created_at, reverse=True)
    return list(properties)


def _passes(record: Record, filters: PropertyFilters) -> bool:
    if filters.price_min and record.get("price", 0) < filters.price_min:
        return False
    if filters.price_max and record.get("price", 0) > filters.price_max:
        return False
    if filters.bedrooms and record.get("bedrooms", 0) < filters.bedrooms:
        return False
    if filters.bathrooms and record.get("bathrooms", 0) < filters.bathrooms:
        return False
    if filters.property_type and record.get("propertyType") != filters.property_type:
        return False
    if filters.status and record.get("status") != filters.status:
        return False
    if filters.area_min and record.get("area", 0) < filters.area_min:
        return False
    if filters.area_max and record.get("area", 0) > filters.area_max:
        return False
    return True


def matches_query(record: Record, query: str) -> bool:
    """Case-insensitive substring search over the visible text fields."""
    needle = query.lower()
    haystack = (
        record.get("title"),
        record.get("city"),
        record.get("propertyType"),
        record.get("description"),
    )
    return any(needle in value.lower() for value in haystack if value)


def filter_properties(
    properties: Sequence[Record],
    filters: Optional[PropertyFilters] = None,
    view: ListingView = ListingView.all,
    city: Optional[str] = None,
    query: Optional[str] = None,
) -> List[Record]:
    """Everything the listing page applies, in the order it applies it.

    *city* is the selected city tab; when set it takes precedence over
    the city chosen in the filter panel.
    """
    filters = filters or PropertyFilters()
    result = [p for p in apply_view(properties, view) if _passes(p, filters)]

    selected_city = city or filters.city
    if selected_city:
        result = [p for p in result if p.get("city") == selected_city]

    if query:
        result = [p for p in result if matches_query(p, query)]
    return result


def facet_values(properties: Sequence[Record]) -> Dict[str, List[str]]:
    """Distinct cities, property types and statuses in first-seen order."""
    facets: Dict[str, List[str]] = {"city": [], "propertyType": [], "status": []}
    for prop in properties:
        for key, seen in facets.items():
            value = prop.get(key)
            if value and value not in seen:
                seen.append(value)
    return facets


class CompareSelection:
    """Up to three properties picked for side-by-side comparison."""

    def __init__(self, limit: int = MAX_COMPARED_PROPERTIES) -> None:
        self._limit = limit
        self._items: List[Record] = []

    @property
    def items(self) -> List[Record]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, property_id: object) -> bool:
        return any(p["id"] == property_id for p in self._items)

    def toggle(self, prop: Record) -> bool:
        """Add or remove *prop*; return whether it is selected afterwards.

        Adding to a full selection is ignored.
        """
        if prop["id"] in self:
            self._items = [p for p in self._items if p["id"] != prop["id"]]
            return False
        if len(self._items) >= self._limit:
            return False
        self._items.append(prop)
        return True

    def clear(self) -> None:
        self._items.clear()


COMPARISON_SPECS = (
    ("Price", "price"),
    ("Bedrooms", "bedrooms"),
    ("Bathrooms", "bathrooms"),
    ("Area (sqft)", "area"),
    ("Property Type", "propertyType"),
    ("Status", "status"),
    ("Featured", "isFeatured"),
    ("Premium", "isPremium"),
    ("Budget Friendly", "isBudgetFriendly"),
)


def _display(key: str, value: Any) -> str:
    if key == "price" and isinstance(value, (int, float)):
        return format_price(value)
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if value is None:
        return "-"
    return str(value)


def comparison_table(properties: Sequence[Record]) -> List[Dict[str, Any]]:
    """One row per attribute, one display value per compared property."""
    if not properties:
        return []
    return [
        {"label": label, "values": [_display(key, p.get(key)) for p in properties]}
        for label, key in COMPARISON_SPECS
    ]


def format_price(price: float) -> str:
    """Format a rupee amount the way Indian listings do (crore / lakh)."""
    if price >= 10_000_000:
        return f"₹{price / 10_000_000:.2f} Cr"
    if price >= 100_000:
        return f"₹{price / 100_000:.2f} L"
    return f"₹{price:,}"
