"""add description and hide results to polls

Revision ID: 9b1e64d0c2a7
Revises: 3f7a2c91d4e8
Create Date: 2026-10-04 09:47:12.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "9b1e64d0c2a7"
down_revision = "3f7a2c91d4e8"
branch_labels = None
depends_on = None


def upgrade():
    op.add_column("polls", sa.Column("description", sa.Text(), nullable=True))
    op.add_column(
        "polls",
        sa.Column(
            "hide_results",
            sa.String(length=20),
            nullable=False,
            server_default="none",
        ),
    )


def downgrade():
    op.drop_column("polls", "hide_results")
    op.drop_column("polls", "description")
