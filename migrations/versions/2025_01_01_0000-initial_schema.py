"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the urls table: short code -> long URL records with click counts.
    """
    bind = op.get_bind()
    existing_tables = inspect(bind).get_table_names()

    if 'urls' in existing_tables:
        return

    op.create_table(
        'urls',
        sa.Column('short_code', sa.String(length=32), nullable=False),
        sa.Column('long_url', sa.Text(), nullable=False),
        sa.Column('click_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('short_code')
    )

    op.create_index(
        'ix_urls_created_at',
        'urls',
        ['created_at']
    )


def downgrade() -> None:
    op.drop_index('ix_urls_created_at', table_name='urls')
    op.drop_table('urls')
