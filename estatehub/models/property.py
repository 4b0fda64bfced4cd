from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
)

from estatehub.core.constants import (
    PROPERTY_STATUS_CHECK_CLAUSE,
    PROPERTY_TYPE_CHECK_CLAUSE,
)
from estatehub.models.base import Base, new_document_id, utcnow


class Property(Base):
    """A listing in the public catalog.

    ``images`` and ``amenities`` are ordered JSON arrays and ``location``
    is a ``{"lat": ..., "lng": ...}`` object, so the row maps one-to-one
    onto the document the front-end renders.
    """

    __tablename__ = "properties"

    id = Column(String(32), primary_key=True, default=new_document_id)
    title = Column(String(255), nullable=False)
    price = Column(Integer, nullable=False)
    city = Column(String(100), nullable=False)
    area = Column(Float, nullable=False)
    bedrooms = Column(Integer, nullable=False, default=0)
    bathrooms = Column(Integer, nullable=False, default=0)
    property_type = Column(String(20))
    status = Column(String(20), nullable=False, default="active")
    images = Column(JSON, nullable=False, default=list)
    amenities = Column(JSON, nullable=False, default=list)
    description = Column(Text, nullable=False, default="")
    is_featured = Column(Boolean, nullable=False, default=False)
    is_premium = Column(Boolean, nullable=False, default=False)
    is_budget_friendly = Column(Boolean, nullable=False, default=False)
    location = Column(
        JSON, nullable=False, default=lambda: {"lat": 0.0, "lng": 0.0}
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_properties_created_at", "created_at"),
        CheckConstraint("price >= 0", name="ck_property_price_non_negative"),
        CheckConstraint(
            "bedrooms >= 0 AND bathrooms >= 0", name="ck_property_rooms_non_negative"
        ),
        CheckConstraint(PROPERTY_TYPE_CHECK_CLAUSE, name="ck_property_type"),
        CheckConstraint(PROPERTY_STATUS_CHECK_CLAUSE, name="ck_property_status"),
    )
