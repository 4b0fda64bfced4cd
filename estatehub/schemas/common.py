from enum import Enum
from typing import ClassVar, Tuple

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class PropertyType(str, Enum):
    villa = "villa"
    apartment = "apartment"
    penthouse = "penthouse"
    townhouse = "townhouse"
    plot = "plot"


class PropertyStatus(str, Enum):
    active = "active"
    hot_deal = "hot-deal"
    sold = "sold"


class LeadStatus(str, Enum):
    raw = "raw"
    verified = "verified"
    site_visit_requested = "site-visit-requested"
    site_visit_done = "site-visit-done"
    negotiation = "negotiation"
    deal_closed = "deal-closed"


class SiteVisitStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class CamelModel(BaseModel):
    """Base for every wire schema.

    Attributes are snake_case in Python and camelCase on the wire; both
    spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class PartialUpdate(CamelModel):
    """Base for PUT bodies: omitted fields stay as stored.

    Fields named in ``not_nullable`` back NOT NULL columns, so an explicit
    ``null`` for them is rejected here instead of failing at flush time.
    """

    not_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulled = [
            name
            for name in self.not_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


class MessageResponse(BaseModel):
    """Body returned by the DELETE endpoints."""

    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "Server is running"
