"""Create prospects, intelligence_items and intelligence_refresh_log

Revision ID: 3f9a1c7d2e40
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c7d2e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('prospects',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('company', sa.Text(), nullable=False),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('website', sa.Text(), nullable=True),
        sa.Column('prospect_type', sa.Text(), nullable=True),
        sa.Column('country', sa.Text(), nullable=True),
        sa.Column('linkedin_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('intelligence_items',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('prospect_id', sa.Text(), nullable=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('source_type', sa.Text(), nullable=True),
        sa.Column('intelligence_type', sa.Text(), nullable=True),
        sa.Column('url', sa.Text(), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ai_tip', sa.Text(), nullable=True),
        sa.Column('relevance_score', sa.Float(), nullable=True),
        sa.Column('company_name', sa.Text(), nullable=True),
        sa.Column('source_name', sa.Text(), nullable=True),
        sa.Column('content_quote', sa.Text(), nullable=True),
        sa.Column('match_home_team', sa.Text(), nullable=True),
        sa.Column('match_away_team', sa.Text(), nullable=True),
        sa.Column('match_home_score', sa.Integer(), nullable=True),
        sa.Column('match_away_score', sa.Integer(), nullable=True),
        sa.Column('match_league', sa.Text(), nullable=True),
        sa.Column('person_name', sa.Text(), nullable=True),
        sa.Column('person_position', sa.Text(), nullable=True),
        sa.Column('person_linkedin_url', sa.Text(), nullable=True),
        sa.Column('dismissed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['prospect_id'], ['prospects.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_intelligence_items_prospect_id', 'intelligence_items', ['prospect_id'])

    op.create_table('intelligence_refresh_log',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('prospect_id', sa.Text(), nullable=False),
        sa.Column('source', sa.Text(), nullable=False),
        sa.Column('last_refresh_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('items_found', sa.Integer(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['prospect_id'], ['prospects.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('prospect_id', 'source', name='uq_refresh_log_prospect_source'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('intelligence_refresh_log')
    op.drop_index('ix_intelligence_items_prospect_id', table_name='intelligence_items')
    op.drop_table('intelligence_items')
    op.drop_table('prospects')
