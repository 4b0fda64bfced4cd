from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Index, String

from estatehub.core.constants import LEAD_STATUS_CHECK_CLAUSE
from estatehub.models.base import Base, new_document_id, utcnow


class Lead(Base):
    """Prospective buyer or renter moving through the sales funnel.

    ``property_id`` is a plain column with no foreign key: a lead keeps
    pointing at a listing even after that listing is deleted.  Status
    values are constrained but transitions between them are not.
    """

    __tablename__ = "leads"

    id = Column(String(32), primary_key=True, default=new_document_id)
    name = Column(String(200), nullable=False)
    phone = Column(String(30), nullable=False)
    email = Column(String(255))
    property_id = Column(String(32))
    status = Column(String(30), nullable=False, default="raw")
    source = Column(String(100))
    assigned_to = Column(String(200))
    requirement_details = Column(JSON)
    visit_date = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_leads_created_at", "created_at"),
        Index("idx_leads_property_id", "property_id"),
        CheckConstraint(LEAD_STATUS_CHECK_CLAUSE, name="ck_lead_status"),
    )
