"""Create users, properties, tenants and activities tables

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19

Owner-partitioned ledger: every property, tenant and activity row carries
owner_id. At most one generated rent charge per tenant per month.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PROPERTY_STATUS = ("Active", "Inactive", "Maintenance")
TENANT_STATUS = ("Active", "Inactive", "Pending")
ACTIVITY_TYPE = (
    "Payment",
    "Expense",
    "Electricity Bill",
    "Maintenance",
    "Complaint",
    "Notice",
    "Other",
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(200), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("units", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "status",
            sa.Enum(*PROPERTY_STATUS, name="property_status"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["owner_id"], ["users.id"], name="fk_properties_owner_id"
        ),
    )
    op.create_index("ix_properties_owner_id", "properties", ["owner_id"])

    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=True),
        sa.Column("property_name", sa.String(255), nullable=True),
        sa.Column("unit_number", sa.String(50), nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("lease_start", sa.Date(), nullable=True),
        sa.Column("lease_end", sa.Date(), nullable=True),
        sa.Column("rent_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column(
            "status",
            sa.Enum(*TENANT_STATUS, name="tenant_status"),
            nullable=False,
        ),
        sa.Column("base_electricity_multiplier", sa.Numeric(10, 2), nullable=True),
        sa.Column("start_month_meter_reading", sa.Numeric(12, 2), nullable=True),
        sa.Column("last_meter_reading", sa.Numeric(12, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["owner_id"], ["users.id"], name="fk_tenants_owner_id"
        ),
        sa.ForeignKeyConstraint(
            ["property_id"], ["properties.id"], name="fk_tenants_property_id"
        ),
    )
    op.create_index("ix_tenants_owner_id", "tenants", ["owner_id"])
    op.create_index("ix_tenants_property_id", "tenants", ["property_id"])
    op.create_index("ix_tenants_status", "tenants", ["status"])

    op.create_table(
        "activities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column(
            "type",
            sa.Enum(*ACTIVITY_TYPE, name="activity_type"),
            nullable=False,
        ),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("current_meter_reading", sa.Numeric(12, 2), nullable=True),
        sa.Column("previous_meter_reading", sa.Numeric(12, 2), nullable=True),
        sa.Column("base_electricity_multiplier", sa.Numeric(10, 2), nullable=True),
        sa.Column("generated_kind", sa.String(20), nullable=True),
        sa.Column("rent_year", sa.Integer(), nullable=True),
        sa.Column("rent_month", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        # No ON DELETE actions: MS SQL rejects multiple cascade paths, and
        # tenant deletion removes activities in the application first
        sa.ForeignKeyConstraint(
            ["owner_id"], ["users.id"], name="fk_activities_owner_id"
        ),
        sa.ForeignKeyConstraint(
            ["tenant_id"], ["tenants.id"], name="fk_activities_tenant_id"
        ),
    )
    op.create_index("ix_activities_owner_id", "activities", ["owner_id"])
    op.create_index("ix_activities_tenant_id", "activities", ["tenant_id"])
    op.create_index("ix_activities_type", "activities", ["type"])
    op.create_index("ix_activities_date", "activities", ["date"])
    op.create_index(
        "uq_activities_generated_month",
        "activities",
        ["tenant_id", "generated_kind", "rent_year", "rent_month"],
        unique=True,
        sqlite_where=sa.text("generated_kind IS NOT NULL"),
        postgresql_where=sa.text("generated_kind IS NOT NULL"),
        mssql_where=sa.text("generated_kind IS NOT NULL"),
    )


def downgrade() -> None:
    op.drop_index("uq_activities_generated_month", table_name="activities")
    op.drop_index("ix_activities_date", table_name="activities")
    op.drop_index("ix_activities_type", table_name="activities")
    op.drop_index("ix_activities_tenant_id", table_name="activities")
    op.drop_index("ix_activities_owner_id", table_name="activities")
    op.drop_table("activities")
    op.drop_index("ix_tenants_status", table_name="tenants")
    op.drop_index("ix_tenants_property_id", table_name="tenants")
    op.drop_index("ix_tenants_owner_id", table_name="tenants")
    op.drop_table("tenants")
    op.drop_index("ix_properties_owner_id", table_name="properties")
    op.drop_table("properties")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
