"""create tracker tables

Revision ID: 5e1c0a7d2b94
Revises:
Create Date: 2026-01-05 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5e1c0a7d2b94'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'children' not in tables:
        op.create_table(
            'children',
            sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('avatar_url', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        )
        op.create_index('ix_children_id', 'children', ['id'])

    if 'objectives' not in tables:
        op.create_table(
            'objectives',
            sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.String(), nullable=True),
            sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id', ondelete='CASCADE'), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
            sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        )
        op.create_index('ix_objectives_id', 'objectives', ['id'])
        op.create_index('ix_objectives_child_id', 'objectives', ['child_id'])

    if 'daily_logs' not in tables:
        op.create_table(
            'daily_logs',
            sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('objective_id', sa.Integer(), sa.ForeignKey('objectives.id', ondelete='CASCADE'), nullable=False),
            sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id', ondelete='CASCADE'), nullable=False),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('is_completed', sa.Boolean(), server_default=sa.true(), nullable=False),
            sa.UniqueConstraint('objective_id', 'child_id', 'date', name='uq_daily_logs_objective_child_date'),
        )
        op.create_index('ix_daily_logs_id', 'daily_logs', ['id'])
        op.create_index('ix_daily_logs_objective_id', 'daily_logs', ['objective_id'])
        op.create_index('ix_daily_logs_child_id', 'daily_logs', ['child_id'])

    if 'objective_exclusions' not in tables:
        op.create_table(
            'objective_exclusions',
            sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('objective_id', sa.Integer(), sa.ForeignKey('objectives.id', ondelete='CASCADE'), nullable=False),
            sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id', ondelete='CASCADE'), nullable=False),
            sa.Column('week_start', sa.Date(), nullable=False),
            sa.UniqueConstraint('objective_id', 'child_id', 'week_start', name='uq_objective_exclusions_week'),
        )
        op.create_index('ix_objective_exclusions_id', 'objective_exclusions', ['id'])
        op.create_index('ix_objective_exclusions_objective_id', 'objective_exclusions', ['objective_id'])
        op.create_index('ix_objective_exclusions_child_id', 'objective_exclusions', ['child_id'])

    if 'point_transactions' not in tables:
        op.create_table(
            'point_transactions',
            sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('child_id', sa.Integer(), sa.ForeignKey('children.id', ondelete='CASCADE'), nullable=False),
            sa.Column('amount', sa.Integer(), nullable=False),
            sa.Column('description', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        )
        op.create_index('ix_point_transactions_id', 'point_transactions', ['id'])
        op.create_index('ix_point_transactions_child_id', 'point_transactions', ['child_id'])


def downgrade() -> None:
    # Safe drops, children last
    op.execute('DROP TABLE IF EXISTS point_transactions')
    op.execute('DROP TABLE IF EXISTS objective_exclusions')
    op.execute('DROP TABLE IF EXISTS daily_logs')
    op.execute('DROP TABLE IF EXISTS objectives')
    op.execute('DROP TABLE IF EXISTS children')
