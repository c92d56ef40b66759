"""Initial schema - employees, attendance, payments, users, permissions, logs.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

MANAGED_TABLES = (
    "attendance",
    "payments",
    "error_records",
    "audit_logs",
    "activity_logs",
    "error_logs",
)


def _employee_fk() -> sa.Column:
    return sa.Column(
        "employee_id",
        sa.UUID(),
        sa.ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("cpf", sa.String(11), nullable=False),
        sa.Column("pix_key", sa.String(255), nullable=True),
        sa.Column("pix_type", sa.String(20), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_employees_cpf", "employees", ["cpf"], unique=True)

    op.create_table(
        "attendance",
        sa.Column("id", sa.UUID(), primary_key=True),
        _employee_fk(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(10), nullable=False),
        sa.Column("exit_time", sa.String(5), nullable=True),
        sa.Column("marked_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("status IN ('present', 'absent')", name="ck_attendance_status"),
    )
    op.create_index(
        "ix_attendance_employee_date", "attendance", ["employee_id", "date"], unique=True
    )
    op.create_index("ix_attendance_date", "attendance", ["date"])

    op.create_table(
        "payments",
        sa.Column("id", sa.UUID(), primary_key=True),
        _employee_fk(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("daily_rate", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("bonus", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("total", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_payments_employee_date", "payments", ["employee_id", "date"], unique=True
    )

    op.create_table(
        "bonuses",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("applied_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_bonuses_date", "bonuses", ["date"], unique=True)

    op.create_table(
        "error_records",
        sa.Column("id", sa.UUID(), primary_key=True),
        _employee_fk(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("error_count", sa.Integer(), nullable=False),
        sa.Column("observations", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("error_count >= 0", name="ck_error_records_count"),
    )
    op.create_index("ix_error_records_employee_date", "error_records", ["employee_id", "date"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("role", sa.String(50), nullable=False, server_default="supervisor"),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "user_permissions",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("permissions", JSONB(), nullable=False),
        sa.Column("updated_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_user_permissions_user_id", "user_permissions", ["user_id"], unique=True)

    op.create_table(
        "permission_logs",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("changed_by", sa.String(255), nullable=False),
        sa.Column("permissions_before", JSONB(), nullable=True),
        sa.Column("permissions_after", JSONB(), nullable=False),
        sa.Column("change_summary", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_permission_logs_user_created", "permission_logs", ["user_id", "created_at"]
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("action_type", sa.String(20), nullable=False),
        sa.Column("module", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=True),
        sa.Column("entity_id", sa.String(255), nullable=True),
        sa.Column("old_data", JSONB(), nullable=True),
        sa.Column("new_data", JSONB(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
    )
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("activity_type", sa.String(50), nullable=False),
        sa.Column("module", sa.String(50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("details", JSONB(), nullable=True),
        sa.Column("duration_ms", sa.Integer(), nullable=True),
    )
    op.create_index("ix_activity_logs_created_at", "activity_logs", ["created_at"])

    op.create_table(
        "error_logs",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("error_type", sa.String(30), nullable=False),
        sa.Column("severity", sa.String(10), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("component", sa.String(255), nullable=False, server_default=""),
        sa.Column("occurrence_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("first_occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("module", sa.String(50), nullable=True),
        sa.Column("stack_trace", sa.Text(), nullable=True),
        sa.Column("error_context", JSONB(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("resolved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("resolved_by", sa.String(255), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_error_logs_signature", "error_logs", ["error_type", "component", "resolved"]
    )

    op.create_table(
        "settings",
        sa.Column("setting_key", sa.String(100), primary_key=True),
        sa.Column("setting_value", JSONB(), nullable=False),
        sa.Column("updated_by", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "retention_policies",
        sa.Column("table_name", sa.String(50), primary_key=True),
        sa.Column("retention_days", sa.Integer(), nullable=False),
        sa.Column("auto_cleanup", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("updated_by", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("retention_days >= 1", name="ck_retention_days_positive"),
    )

    op.execute("""
        INSERT INTO settings (setting_key, setting_value, updated_at) VALUES
        ('error_tracking_enabled', 'true'::jsonb, now()),
        ('critical_error_notifications', 'false'::jsonb, now()),
        ('daily_rate', '"0"'::jsonb, now())
    """)
    values = ", ".join(f"('{name}', 365, false, now())" for name in MANAGED_TABLES)
    op.execute(
        "INSERT INTO retention_policies (table_name, retention_days, auto_cleanup, updated_at) "
        f"VALUES {values}"
    )


def downgrade() -> None:
    for table in (
        "retention_policies",
        "settings",
        "error_logs",
        "activity_logs",
        "audit_logs",
        "permission_logs",
        "user_permissions",
        "users",
        "error_records",
        "bonuses",
        "payments",
        "attendance",
        "employees",
    ):
        op.drop_table(table)
