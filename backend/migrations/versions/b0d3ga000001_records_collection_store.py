"""records collection store

Revision ID: b0d3ga000001
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the single `records` table that backs every named collection
(products, customers, suppliers, sellers, sales, purchases, settings).
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b0d3ga000001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'records',
        sa.Column('collection', sa.String(length=32), nullable=False),
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('seq', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('collection', 'id'),
    )
    op.create_index('ix_records_seq', 'records', ['seq'])


def downgrade():
    op.drop_index('ix_records_seq', table_name='records')
    op.drop_table('records')
