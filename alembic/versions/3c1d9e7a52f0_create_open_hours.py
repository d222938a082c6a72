"""Create open_hours table

Revision ID: 3c1d9e7a52f0
Revises: 
Create Date: 2025-09-02 10:14:03.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1d9e7a52f0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('open_hours',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('shop_id', sa.String(length=255), nullable=False),
    sa.Column('day_of_week', sa.String(length=16), nullable=False),
    sa.Column('open_time', sa.String(length=5), nullable=False),
    sa.Column('close_time', sa.String(length=5), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('shop_id', 'day_of_week', name='uq_open_hours_shop_day')
    )
    op.create_index(op.f('ix_open_hours_id'), 'open_hours', ['id'], unique=False)
    op.create_index(op.f('ix_open_hours_shop_id'), 'open_hours', ['shop_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_open_hours_shop_id'), table_name='open_hours')
    op.drop_index(op.f('ix_open_hours_id'), table_name='open_hours')
    op.drop_table('open_hours')
