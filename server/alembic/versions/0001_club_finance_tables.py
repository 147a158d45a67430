"""Club finance base tables."""

from alembic import op
import sqlalchemy as sa


revision = "0001_club_finance_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("display_name", sa.String(length=150), nullable=False),
        sa.Column("nickname", sa.String(length=60), nullable=False),
        sa.Column("position", sa.String(length=120), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="member"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("requires_password_change", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
    )
    op.create_index("ix_members_nickname", "members", ["nickname"], unique=True)

    op.create_table(
        "fee_configs",
        sa.Column("month", sa.String(length=7), primary_key=True),
        sa.Column("expected_amount", sa.Numeric(precision=12, scale=2), nullable=False),
    )

    op.create_table(
        "fee_payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("reference_month", sa.String(length=7), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("proof", sa.Text(), nullable=True),
        sa.Column("note", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
    )
    op.create_index("ix_fee_payments_member_id", "fee_payments", ["member_id"])
    op.create_index("ix_fee_payments_reference_month", "fee_payments", ["reference_month"])

    op.create_table(
        "vaquinhas",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("goal", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
    )

    op.create_table(
        "contributions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("vaquinhas.id", ondelete="CASCADE"), nullable=False),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("proof", sa.Text(), nullable=True),
    )
    op.create_index("ix_contributions_campaign_id", "contributions", ["campaign_id"])
    op.create_index("ix_contributions_member_id", "contributions", ["member_id"])

    op.create_table(
        "expenses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("category", sa.String(length=40), nullable=False),
        sa.Column("responsible_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
        sa.Column("reference_month", sa.String(length=7), nullable=False),
        sa.Column("proof", sa.Text(), nullable=True),
    )
    op.create_index("ix_expenses_responsible_id", "expenses", ["responsible_id"])
    op.create_index("ix_expenses_reference_month", "expenses", ["reference_month"])

    op.create_table(
        "closures",
        sa.Column("month", sa.String(length=7), primary_key=True),
        sa.Column("is_closed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("closed_by", sa.String(length=60), nullable=True),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
        sa.Column("username", sa.String(length=60), nullable=False, server_default="system"),
        sa.Column("action", sa.String(length=60), nullable=False),
        sa.Column("details", sa.Text(), nullable=False, server_default=""),
    )
    op.create_index("ix_audit_logs_timestamp", "audit_logs", ["timestamp"])


def downgrade() -> None:
    op.drop_index("ix_audit_logs_timestamp", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_table("closures")
    op.drop_index("ix_expenses_reference_month", table_name="expenses")
    op.drop_index("ix_expenses_responsible_id", table_name="expenses")
    op.drop_table("expenses")
    op.drop_index("ix_contributions_member_id", table_name="contributions")
    op.drop_index("ix_contributions_campaign_id", table_name="contributions")
    op.drop_table("contributions")
    op.drop_table("vaquinhas")
    op.drop_index("ix_fee_payments_reference_month", table_name="fee_payments")
    op.drop_index("ix_fee_payments_member_id", table_name="fee_payments")
    op.drop_table("fee_payments")
    op.drop_table("fee_configs")
    op.drop_index("ix_members_nickname", table_name="members")
    op.drop_table("members")
