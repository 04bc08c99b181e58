"""create record_blobs

Revision ID: 4f2a9c1d7e10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4f2a9c1d7e10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'record_blobs',
        sa.Column('key', sa.String(length=64), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('key')
    )


def downgrade():
    op.drop_table('record_blobs')
