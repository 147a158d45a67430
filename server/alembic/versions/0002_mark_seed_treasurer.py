"""Mark the seeded treasurer account."""

from alembic import op
import sqlalchemy as sa


revision = "0002_mark_seed_treasurer"
down_revision = "0001_club_finance_tables"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column(
        "members",
        sa.Column("is_seed_treasurer", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.execute(
        """
        UPDATE members
        SET is_seed_treasurer = TRUE
        WHERE nickname = 'admin' AND role = 'treasurer'
        """
    )


def downgrade() -> None:
    op.drop_column("members", "is_seed_treasurer")
