"""Create wildlife_reports and hotspots tables

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'wildlife_reports',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('user_id', sa.String(128), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('latitude', sa.Double(), nullable=False),
        sa.Column('longitude', sa.Double(), nullable=False),
        sa.Column('animal_count', sa.Integer(), nullable=False),
        sa.Column('animal_type', sa.String(50), nullable=False),
    )
    op.create_index('ix_wildlife_reports_timestamp', 'wildlife_reports', ['timestamp'])

    op.create_table(
        'hotspots',
        sa.Column('grid_id', sa.String(64), primary_key=True),
        sa.Column('latitude', sa.Double(), nullable=False),
        sa.Column('longitude', sa.Double(), nullable=False),
        sa.Column('heat_level', sa.String(10), nullable=False),
        sa.Column('report_count', sa.Integer(), nullable=False),
        sa.Column('radius', sa.Double(), nullable=False),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_hotspots_last_updated', 'hotspots', ['last_updated'])


def downgrade() -> None:
    op.drop_index('ix_hotspots_last_updated', table_name='hotspots')
    op.drop_table('hotspots')
    op.drop_index('ix_wildlife_reports_timestamp', table_name='wildlife_reports')
    op.drop_table('wildlife_reports')
