"""initial budget schema

Revision ID: 4b1e2c9d7a10
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


revision = "4b1e2c9d7a10"
down_revision = None
branch_labels = None
depends_on = None

# Enum columns store member names, matching SAEnum(<PythonEnum>) on the ORM side.
_PROJECT_STATUS = sa.Enum("ACTIVE", "ARCHIVED", name="projectstatus")
_DEDUCTION_TYPE = sa.Enum("MANUAL", "AUTOMATIC", name="deductiontype")
_CHANGE_ORDER_TYPE = sa.Enum("POSITIVE", "NEGATIVE", name="changeordertype")
_CHANGE_ORDER_STATUS = sa.Enum("PENDING", "APPROVED", "REJECTED", name="changeorderstatus")
_AUDIT_ACTION = sa.Enum(
    "COST_ADDED",
    "COST_EDITED",
    "COST_DELETED",
    "CHANGE_ORDER_ADDED",
    "CHANGE_ORDER_APPROVED",
    "CHANGE_ORDER_REJECTED",
    "FORECAST_UPDATED",
    "PROJECT_CREATED",
    "PROJECT_UPDATED",
    "PROJECT_ARCHIVED",
    name="auditaction",
)


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("status", _PROJECT_STATUS, nullable=False),
        sa.Column("baseline_budget", sa.Float(), nullable=False),
        sa.Column("overhead_percent", sa.Float(), nullable=False),
        sa.Column("overhead_amount", sa.Float(), nullable=False),
        sa.Column("currency", sa.String(length=8), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("baseline_locked_at", sa.DateTime(), nullable=True),
        sa.Column("collaborator_ids_json", sa.Text(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("pending_invites_json", sa.Text(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_projects_owner", "projects", ["owner_id"], unique=False)
    op.create_index("idx_projects_status", "projects", ["status"], unique=False)

    op.create_table(
        "costs",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("vendor", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("deduction_type", _DEDUCTION_TYPE, nullable=False),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_costs_project", "costs", ["project_id"], unique=False)
    op.create_index("idx_costs_date", "costs", ["date"], unique=False)

    op.create_table(
        "change_orders",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("type", _CHANGE_ORDER_TYPE, nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("status", _CHANGE_ORDER_STATUS, nullable=False),
        sa.Column("approved_by", sa.String(), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_change_orders_project", "change_orders", ["project_id"], unique=False)
    op.create_index("idx_change_orders_status", "change_orders", ["status"], unique=False)

    op.create_table(
        "forecasts",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("cost_to_date", sa.Float(), nullable=False),
        sa.Column("burn_rate", sa.Float(), nullable=False),
        sa.Column("remaining_budget", sa.Float(), nullable=False),
        sa.Column("projected_total", sa.Float(), nullable=False),
        sa.Column("manual_override", sa.Float(), nullable=True),
        sa.Column("insight_text", sa.Text(), nullable=True),
        sa.Column("ai_summary", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_forecasts_project", "forecasts", ["project_id"], unique=False)
    op.create_index(
        "ux_forecasts_project_version",
        "forecasts",
        ["project_id", "version"],
        unique=True,
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("action", _AUDIT_ACTION, nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("metadata_json", sa.Text(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_audit_logs_project", "audit_logs", ["project_id"], unique=False)
    op.create_index("idx_audit_logs_created_at", "audit_logs", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_audit_logs_created_at", table_name="audit_logs")
    op.drop_index("idx_audit_logs_project", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_index("ux_forecasts_project_version", table_name="forecasts")
    op.drop_index("idx_forecasts_project", table_name="forecasts")
    op.drop_table("forecasts")
    op.drop_index("idx_change_orders_status", table_name="change_orders")
    op.drop_index("idx_change_orders_project", table_name="change_orders")
    op.drop_table("change_orders")
    op.drop_index("idx_costs_date", table_name="costs")
    op.drop_index("idx_costs_project", table_name="costs")
    op.drop_table("costs")
    op.drop_index("idx_projects_status", table_name="projects")
    op.drop_index("idx_projects_owner", table_name="projects")
    op.drop_table("projects")
