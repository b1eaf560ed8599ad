"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("guid", sa.String(length=36), nullable=False, unique=True),
        sa.Column("name", sa.String(length=45), nullable=False),
        sa.Column("address", sa.String(length=45), nullable=True),
        sa.Column("city", sa.String(length=45), nullable=True),
        sa.Column("locale", sa.String(length=45), nullable=True),
        sa.Column("postal_code", sa.String(length=16), nullable=True),
        sa.Column("disabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("enable_billing", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("guid", sa.String(length=36), nullable=False, unique=True),
        sa.Column("location_id", sa.Integer(), sa.ForeignKey("locations.id"), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("account_type", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("payment_amount", sa.Float(), nullable=True),
        sa.Column("pend_cancel", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("pend_cancel_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("period_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("period_end", sa.DateTime(timezone=True), nullable=False),
        sa.Column("next_billing", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("status >= 0 AND status <= 4", name="ck_account_status_range"),
    )

    op.create_index("ix_accounts_location_status", "accounts", ["location_id", "status"], unique=False)

    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("guid", sa.String(length=36), nullable=False, unique=True),
        sa.Column("account_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("location_id", sa.Integer(), sa.ForeignKey("locations.id"), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("cancelled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("first_name", sa.String(length=45), nullable=True),
        sa.Column("last_name", sa.String(length=45), nullable=True),
        sa.Column("address", sa.String(length=45), nullable=True),
        sa.Column("city", sa.String(length=45), nullable=True),
        sa.Column("locale", sa.String(length=16), nullable=True),
        sa.Column("postal_code", sa.String(length=16), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_index("ix_members_account_created", "members", ["account_id", "created_at", "id"], unique=False)
    op.create_index(
        "uq_members_account_primary",
        "members",
        ["account_id"],
        unique=True,
        postgresql_where=sa.text("is_primary"),
    )


def downgrade() -> None:
    op.drop_index("uq_members_account_primary", table_name="members")
    op.drop_index("ix_members_account_created", table_name="members")
    op.drop_table("members")
    op.drop_index("ix_accounts_location_status", table_name="accounts")
    op.drop_table("accounts")
    op.drop_table("locations")
