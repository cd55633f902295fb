"""init schema

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "app_users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=True),
        sa.Column("photo_url", sa.String(length=500), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="guest"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_app_users_email", "app_users", ["email"], unique=True)

    op.create_table(
        "audit_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("actor_email", sa.String(length=200), nullable=True),
        sa.Column("action", sa.String(length=80), nullable=False),
        sa.Column("entity_type", sa.String(length=80), nullable=False),
        sa.Column("entity_id", sa.String(length=80), nullable=False),
        sa.Column("before_json", sa.Text(), nullable=True),
        sa.Column("after_json", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_audit_events_actor_email", "audit_events", ["actor_email"])

    op.create_table(
        "agreement_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("user_name", sa.String(length=160), nullable=True),
        sa.Column("floor_no", sa.String(length=20), nullable=True),
        sa.Column("block_name", sa.String(length=40), nullable=True),
        sa.Column("apartment_no", sa.String(length=40), nullable=False),
        sa.Column("rent", sa.Float(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("email", name="uq_agreement_requests_email"),
    )
    op.create_index("ix_agreement_requests_email", "agreement_requests", ["email"])

    op.create_table(
        "active_contracts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("user_name", sa.String(length=160), nullable=True),
        sa.Column("floor_no", sa.String(length=20), nullable=True),
        sa.Column("block_name", sa.String(length=40), nullable=True),
        sa.Column("apartment_no", sa.String(length=40), nullable=False),
        sa.Column("rent", sa.Float(), nullable=False),
        sa.Column("month", sa.String(length=20), nullable=True),
        sa.Column("agreement_date", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("email", name="uq_active_contracts_email"),
    )
    op.create_index("ix_active_contracts_email", "active_contracts", ["email"])

    op.create_table(
        "coupon_codes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=60), nullable=False),
        sa.Column("discount", sa.Float(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_coupon_codes_code", "coupon_codes", ["code"], unique=True)

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("accept_request_id", sa.String(length=80), nullable=False),
        sa.Column("month", sa.String(length=20), nullable=True),
        sa.Column("transaction_id", sa.String(length=200), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("email", name="uq_payments_email"),
    )
    op.create_index("ix_payments_email", "payments", ["email"])

    op.create_table(
        "apartments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("floor_no", sa.String(length=20), nullable=True),
        sa.Column("block_name", sa.String(length=40), nullable=True),
        sa.Column("apartment_no", sa.String(length=40), nullable=False),
        sa.Column("rent", sa.Float(), nullable=False),
    )
    op.create_index("ix_apartments_rent", "apartments", ["rent"])

    op.create_table(
        "announcements",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )


def downgrade():
    op.drop_table("announcements")
    op.drop_index("ix_apartments_rent", table_name="apartments")
    op.drop_table("apartments")
    op.drop_index("ix_payments_email", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_coupon_codes_code", table_name="coupon_codes")
    op.drop_table("coupon_codes")
    op.drop_index("ix_active_contracts_email", table_name="active_contracts")
    op.drop_table("active_contracts")
    op.drop_index("ix_agreement_requests_email", table_name="agreement_requests")
    op.drop_table("agreement_requests")
    op.drop_index("ix_audit_events_actor_email", table_name="audit_events")
    op.drop_table("audit_events")
    op.drop_index("ix_app_users_email", table_name="app_users")
    op.drop_table("app_users")
