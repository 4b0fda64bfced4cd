"""Map server-shaped documents onto the canonical client shape.

Two wire conventions coexist for identifiers (``_id`` from the document
store and plain ``id``); every record leaving this module carries ``id``
only.  Property image URLs that cannot be dereferenced outside the
session that produced them are swapped for a placeholder.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

PLACEHOLDER_IMAGE = "/placeholder.svg"

# Temporary object URLs created by the browser for a local upload preview
_EPHEMERAL_SCHEMES = ("blob:",)
# Bundler source paths that only resolve on a developer's machine
_DEV_ASSET_MARKERS = ("/src/assets/",)

_TIMESTAMP_FIELDS = ("createdAt", "date", "visitDate")

_datetime_adapter = TypeAdapter(datetime)

Record = Dict[str, Any]


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Return *value* as an aware datetime, or ``None`` if it is not one.

    Naive values are taken to be UTC.
    """
    if value is None or value == "":
        return None
    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_persistable_image(url: Any) -> bool:
    if not isinstance(url, str) or not url:
        return False
    if url.startswith(_EPHEMERAL_SCHEMES):
        return False
    return not any(marker in url for marker in _DEV_ASSET_MARKERS)


def sanitize_images(images: Optional[Iterable[Any]]) -> List[str]:
    """Replace unusable image URLs, keeping the list order.

    An absent or empty list becomes a single placeholder.
    """
    cleaned = [
        url if is_persistable_image(url) else PLACEHOLDER_IMAGE
        for url in (images or [])
    ]
    return cleaned or [PLACEHOLDER_IMAGE]


def normalize_record(raw: Record) -> Record:
    """Unify the identifier and parse timestamps on any document."""
    record = dict(raw)
    server_id = record.pop("_id", None)
    record["id"] = server_id if server_id is not None else record.get("id")
    record.pop("__v", None)
    for field in _TIMESTAMP_FIELDS:
        if field in record:
            parsed = parse_timestamp(record[field])
            if parsed is not None:
                record[field] = parsed
    if isinstance(record.get("propertyId"), dict):
        record["propertyId"] = normalize_property(record["propertyId"])
    return record


def normalize_property(raw: Record) -> Record:
    record = normalize_record(raw)
    record["images"] = sanitize_images(record.get("images"))
    return record


def normalize_many(raws: Iterable[Record], *, properties: bool = False) -> List[Record]:
    normalize = normalize_property if properties else normalize_record
    return [normalize(raw) for raw in raws]


def property_ref(record: Record) -> Optional[str]:
    """Return the property id a lead or visit points at.

    Works whether ``propertyId`` is the raw id or a populated document.
    """
    ref = record.get("propertyId")
    if isinstance(ref, dict):
        return ref.get("id")
    return ref
