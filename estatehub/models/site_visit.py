from sqlalchemy import CheckConstraint, Column, DateTime, Index, String

from estatehub.core.constants import SITE_VISIT_STATUS_CHECK_CLAUSE
from estatehub.models.base import Base, new_document_id, utcnow


class SiteVisit(Base):
    """A scheduled physical viewing of a property."""

    __tablename__ = "site_visits"

    id = Column(String(32), primary_key=True, default=new_document_id)
    name = Column(String(200), nullable=False)
    phone = Column(String(30), nullable=False)
    property_id = Column(String(32), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_site_visits_date", "date"),
        CheckConstraint(SITE_VISIT_STATUS_CHECK_CLAUSE, name="ck_site_visit_status"),
    )
