"""widen image option url

Revision ID: c5d8f1a3e620
Revises: 9b1e64d0c2a7
Create Date: 2026-10-19 10:21:05.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "c5d8f1a3e620"
down_revision = "9b1e64d0c2a7"
branch_labels = None
depends_on = None


def upgrade():
    op.alter_column(
        "image_options",
        "image_url",
        existing_type=sa.String(length=1000),
        type_=sa.Text(),
        existing_nullable=False,
    )


def downgrade():
    op.alter_column(
        "image_options",
        "image_url",
        existing_type=sa.Text(),
        type_=sa.String(length=1000),
        existing_nullable=False,
    )
