"""Create users and the three moderated listing tables.

Revision ID: 5f3a9c1e2b7d
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "5f3a9c1e2b7d"
down_revision = None
branch_labels = None
depends_on = None

LISTING_TABLES = ("lost_pet_reports", "adoption_pet_reports", "donation_campaign_reports")


def _moderation_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("image_url", sa.String(2000), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by", sa.String(36), nullable=True),
        sa.Column("rejection_reason", sa.Text, nullable=True),
    ]


def _pet_columns() -> list[sa.Column]:
    return [
        sa.Column("pet_name", sa.String(100), nullable=False),
        sa.Column("species", sa.String(20), nullable=False),
        sa.Column("breed", sa.String(100), nullable=False),
        sa.Column("gender", sa.String(10), nullable=False),
        sa.Column("age", sa.String(50), nullable=True),
        sa.Column("size", sa.String(10), nullable=False),
        sa.Column("color", sa.String(100), nullable=False),
    ]


def _contact_columns() -> list[sa.Column]:
    return [
        sa.Column("contact_name", sa.String(100), nullable=False),
        sa.Column("contact_phone", sa.String(50), nullable=False),
        sa.Column("contact_email", sa.String(254), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(256), nullable=False),
        sa.Column("display_name", sa.String(100), nullable=True),
        sa.Column("role", sa.String(10), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "lost_pet_reports",
        *_moderation_columns(),
        *_pet_columns(),
        sa.Column("distinctive_features", sa.Text, nullable=True),
        sa.Column("last_seen_date", sa.Date, nullable=False),
        sa.Column("last_seen_location", sa.String(300), nullable=False),
        sa.Column("additional_info", sa.Text, nullable=True),
        sa.Column("urgency", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("has_reward", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("reward_amount", sa.String(50), nullable=True),
        *_contact_columns(),
    )
    op.create_table(
        "adoption_pet_reports",
        *_moderation_columns(),
        *_pet_columns(),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("location", sa.String(300), nullable=False),
        sa.Column("med_status", sa.JSON, nullable=True),
        sa.Column("adoption_requirements", sa.Text, nullable=True),
        *_contact_columns(),
    )
    op.create_table(
        "donation_campaign_reports",
        *_moderation_columns(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("goal", sa.Float, nullable=False),
        sa.Column("urgency", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("pet_name", sa.String(100), nullable=False),
        sa.Column("cbu", sa.String(30), nullable=False),
        sa.Column("alias", sa.String(60), nullable=False),
        sa.Column("account_holder", sa.String(150), nullable=False),
        sa.Column("responsible_name", sa.String(150), nullable=False),
        sa.Column("contact_info", sa.String(400), nullable=False),
        sa.Column("deadline", sa.String(50), nullable=False),
    )

    for table in LISTING_TABLES:
        op.create_index(f"ix_{table}_status", table, ["status"])
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])
        op.create_index(f"ix_{table}_submitted_at", table, ["submitted_at"])


def downgrade() -> None:
    for table in reversed(LISTING_TABLES):
        op.drop_table(table)
    op.drop_index("ix_users_email", "users")
    op.drop_table("users")
