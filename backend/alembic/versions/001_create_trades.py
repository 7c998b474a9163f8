"""Create trades table

This migration creates the database schema for the Gold Trade Journal.

Tables:
    - trades: Logged trades with their raw inputs and valuation-derived fields

Revision ID: 001
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ==========================================================================
    # TRADES
    # ==========================================================================
    op.create_table(
        'trades',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('owner_id', sa.String(128), nullable=False, index=True),
        sa.Column('pair', sa.String(16), nullable=False, server_default='XAUUSD'),
        sa.Column('direction', sa.Enum('LONG', 'SHORT', name='tradedirection'), nullable=False),

        # Raw inputs
        sa.Column('entry_price', sa.Numeric(18, 8), nullable=False),
        sa.Column('exit_price', sa.Numeric(18, 8), nullable=False),
        sa.Column('stop_loss', sa.Numeric(18, 8), nullable=True),
        sa.Column('take_profit', sa.Numeric(18, 8), nullable=True),
        sa.Column('position_size', sa.Numeric(18, 8), nullable=False),
        sa.Column('risk_percent', sa.Numeric(9, 4), nullable=True),
        sa.Column('contract_size', sa.Numeric(18, 8), nullable=False, server_default='100'),

        # Derived (valuation engine output)
        sa.Column('pnl_quote', sa.Numeric(38, 8), nullable=False, server_default='0'),
        sa.Column('pnl_secondary', sa.Numeric(38, 8), nullable=False, server_default='0'),
        sa.Column('pnl_percent', sa.Numeric(38, 8), nullable=False, server_default='0'),
        sa.Column('risk_reward_ratio', sa.Numeric(38, 8), nullable=True),
        sa.Column('suggested_position_size', sa.Numeric(38, 8), nullable=True),

        # Journal fields
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column(
            'emotional_state',
            sa.Enum('CALM', 'EMOTIONAL', 'OVERCONFIDENT', 'FEARFUL', 'GREEDY', 'DISCIPLINED', name='emotionalstate'),
            nullable=False,
            server_default='CALM',
        ),

        sa.Column('occurred_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_trades_owner_occurred_at', 'trades', ['owner_id', 'occurred_at'])


def downgrade() -> None:
    op.drop_index('ix_trades_owner_occurred_at', table_name='trades')
    op.drop_table('trades')

    # Drop enums
    op.execute('DROP TYPE IF EXISTS tradedirection')
    op.execute('DROP TYPE IF EXISTS emotionalstate')
