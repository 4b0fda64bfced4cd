"""create properties, leads and site_visits

Revision ID: 0001_catalog
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from alembic import op
import sqlalchemy as sa

from estatehub.core.constants import (
    LEAD_STATUS_CHECK_CLAUSE,
    PROPERTY_STATUS_CHECK_CLAUSE,
    PROPERTY_TYPE_CHECK_CLAUSE,
    SITE_VISIT_STATUS_CHECK_CLAUSE,
)

# revision identifiers, used by Alembic.
revision = "0001_catalog"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "properties",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("area", sa.Float(), nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=False),
        sa.Column("bathrooms", sa.Integer(), nullable=False),
        sa.Column("property_type", sa.String(length=20), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("amenities", sa.JSON(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.Column("is_premium", sa.Boolean(), nullable=False),
        sa.Column("is_budget_friendly", sa.Boolean(), nullable=False),
        sa.Column("location", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("price >= 0", name="ck_property_price_non_negative"),
        sa.CheckConstraint(
            "bedrooms >= 0 AND bathrooms >= 0", name="ck_property_rooms_non_negative"
        ),
        sa.CheckConstraint(PROPERTY_TYPE_CHECK_CLAUSE, name="ck_property_type"),
        sa.CheckConstraint(PROPERTY_STATUS_CHECK_CLAUSE, name="ck_property_status"),
    )
    op.create_index("idx_properties_created_at", "properties", ["created_at"])

    # property_id carries no foreign key: leads outlive deleted listings
    op.create_table(
        "leads",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("property_id", sa.String(length=32), nullable=True),
        sa.Column("status", sa.String(length=30), nullable=False),
        sa.Column("source", sa.String(length=100), nullable=True),
        sa.Column("assigned_to", sa.String(length=200), nullable=True),
        sa.Column("requirement_details", sa.JSON(), nullable=True),
        sa.Column("visit_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(LEAD_STATUS_CHECK_CLAUSE, name="ck_lead_status"),
    )
    op.create_index("idx_leads_created_at", "leads", ["created_at"])
    op.create_index("idx_leads_property_id", "leads", ["property_id"])

    op.create_table(
        "site_visits",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("property_id", sa.String(length=32), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            SITE_VISIT_STATUS_CHECK_CLAUSE, name="ck_site_visit_status"
        ),
    )
    op.create_index("idx_site_visits_date", "site_visits", ["date"])


def downgrade() -> None:
    op.drop_index("idx_site_visits_date", table_name="site_visits")
    op.drop_table("site_visits")
    op.drop_index("idx_leads_property_id", table_name="leads")
    op.drop_index("idx_leads_created_at", table_name="leads")
    op.drop_table("leads")
    op.drop_index("idx_properties_created_at", table_name="properties")
    op.drop_table("properties")
