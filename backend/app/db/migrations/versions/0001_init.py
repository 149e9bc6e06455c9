"""init

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    ]


def _soft_delete():
    return [
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.Integer(), nullable=True),
    ]


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("login", sa.String(length=64), nullable=False),
        sa.Column("full_name", sa.String(length=256), nullable=True),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_user_login", "user", ["login"], unique=True)

    op.create_table(
        "project",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("direct_project_id", sa.BigInteger(), nullable=True),
        sa.Column("billing_account_id", sa.BigInteger(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("updated_by", sa.Integer(), nullable=False),
        *_soft_delete(),
        *_timestamps(),
    )
    op.create_index("ix_project_deleted_at", "project", ["deleted_at"])

    op.create_table(
        "work_stream",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("updated_by", sa.Integer(), nullable=False),
        *_soft_delete(),
        *_timestamps(),
    )
    op.create_index("ix_work_stream_project_id", "work_stream", ["project_id"])
    op.create_index("ix_work_stream_deleted_at", "work_stream", ["deleted_at"])

    op.create_table(
        "project_phase",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("budget", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("progress", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("updated_by", sa.Integer(), nullable=False),
        *_soft_delete(),
        *_timestamps(),
    )
    op.create_index("ix_project_phase_project_id", "project_phase", ["project_id"])
    op.create_index("ix_project_phase_deleted_at", "project_phase", ["deleted_at"])

    op.create_table(
        "phase_work_stream",
        sa.Column("work_stream_id", sa.Integer(), sa.ForeignKey("work_stream.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("phase_id", sa.Integer(), sa.ForeignKey("project_phase.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "phase_product",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("phase_id", sa.Integer(), sa.ForeignKey("project_phase.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=255), nullable=False),
        sa.Column("template_id", sa.BigInteger(), nullable=True),
        sa.Column("direct_project_id", sa.BigInteger(), nullable=True),
        sa.Column("billing_account_id", sa.BigInteger(), nullable=True),
        sa.Column("estimated_price", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("actual_price", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("utm", sa.JSON(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("updated_by", sa.Integer(), nullable=False),
        *_soft_delete(),
        *_timestamps(),
    )
    op.create_index("ix_phase_product_project_id", "phase_product", ["project_id"])
    op.create_index("ix_phase_product_phase_id", "phase_product", ["phase_id"])
    op.create_index("ix_phase_product_deleted_at", "phase_product", ["deleted_at"])

    op.create_table(
        "event_outbox",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("routing_key", sa.String(length=128), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("correlation_id", sa.String(length=128), nullable=True),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_error", sa.Text(), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("claimed_until", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_event_outbox_routing_key", "event_outbox", ["routing_key"])
    op.create_index("ix_event_outbox_published_at", "event_outbox", ["published_at"])


def downgrade():
    op.drop_table("event_outbox")
    op.drop_table("phase_product")
    op.drop_table("phase_work_stream")
    op.drop_table("project_phase")
    op.drop_table("work_stream")
    op.drop_table("project")
    op.drop_table("user")
