"""Initial migration — users, roles and properties.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17
"""
import uuid
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── users ──
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # ── roles ──
    roles = op.create_table(
        "roles",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(30), nullable=False, unique=True),
    )
    op.bulk_insert(roles, [
        {"id": uuid.uuid4(), "name": "USER"},
        {"id": uuid.uuid4(), "name": "ADMIN"},
    ])

    # ── user_roles ──
    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("role_id", sa.Uuid, sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    )

    # ── properties ──
    op.create_table(
        "properties",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("rent_price", sa.Numeric(14, 2), nullable=True),
        sa.Column("sale_price", sa.Numeric(14, 2), nullable=True),
        sa.Column("condo_fee", sa.Numeric(14, 2), nullable=True),
        sa.Column("property_tax", sa.Numeric(14, 2), nullable=True),
        sa.Column("description", sa.String(2000), nullable=True),
        sa.Column("property_type", sa.String(20), nullable=False),
        sa.Column("listing_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PUBLISHED"),
        sa.Column("bedrooms", sa.Integer, nullable=False),
        sa.Column("bathrooms", sa.Integer, nullable=False),
        sa.Column("parking_spaces", sa.Integer, nullable=False),
        sa.Column("area", sa.Numeric(12, 2), nullable=False),
        sa.Column("is_furnished", sa.Boolean, nullable=False),
        sa.Column("accepts_pets", sa.Boolean, nullable=False),
        sa.Column("addr_street", sa.String(255), nullable=True),
        sa.Column("addr_number", sa.String(20), nullable=True),
        sa.Column("addr_complement", sa.String(255), nullable=True),
        sa.Column("addr_neighborhood", sa.String(255), nullable=True),
        sa.Column("addr_city", sa.String(255), nullable=True),
        sa.Column("addr_state", sa.String(2), nullable=True),
        sa.Column("addr_zipcode", sa.String(8), nullable=True),
        sa.Column("addr_formatted", sa.String(300), nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("owner_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False),
        sa.CheckConstraint(
            "(listing_type = 'SALE' AND sale_price IS NOT NULL AND rent_price IS NULL)"
            " OR (listing_type = 'RENT' AND rent_price IS NOT NULL AND sale_price IS NULL)",
            name="ck_properties_price_matches_listing_type",
        ),
    )
    op.create_index("ix_properties_addr_city", "properties", ["addr_city"])
    op.create_index("ix_properties_addr_state", "properties", ["addr_state"])
    op.create_index("ix_properties_listing_type", "properties", ["listing_type"])
    op.create_index("ix_properties_property_type", "properties", ["property_type"])
    op.create_index("ix_properties_created_at", "properties", ["created_at"])
    op.create_index("ix_properties_owner_id", "properties", ["owner_id"])


def downgrade() -> None:
    op.drop_table("properties")
    op.drop_table("user_roles")
    op.drop_table("roles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
