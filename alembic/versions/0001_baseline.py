"""Baseline migration - staff users, campaigns, and recruit pipeline

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates users, campaigns with their click log, application intakes, and
recruits.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    # ==========================================================================
    # Users
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('display_name', sa.String(255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('token_version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )

    # ==========================================================================
    # Campaigns
    # ==========================================================================
    op.create_table(
        'campaigns',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('case_ref', sa.String(64), nullable=False, unique=True),
        sa.Column('channel', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('launched_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_campaigns_created', 'campaigns', ['created_at'])

    op.create_table(
        'campaign_clicks',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'campaign_id',
            sa.Uuid(),
            sa.ForeignKey('campaigns.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_campaign_clicks_campaign', 'campaign_clicks', ['campaign_id'])

    # ==========================================================================
    # Recruit pipeline
    # ==========================================================================
    answer_columns = [
        'social_handle',
        'project_description',
        'enthusiasm',
        'camp_scenario',
        'gentle_reminder',
        'approach_strangers',
        'theatrical',
        'straight_face',
        'being_approached',
        'ideal_balance',
        'burn_experience',
        'camping_setup',
        'skills_resources',
        'dues_questions',
        'anything_else',
    ]
    op.create_table(
        'recruit_intakes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name_pronouns', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        *[
            sa.Column(name, sa.String(255) if name == 'social_handle' else sa.Text(), nullable=True)
            for name in answer_columns
        ],
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'recruits',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('social_handle', sa.String(255), nullable=True),
        sa.Column('stage', sa.String(20), nullable=False, server_default='prospect'),
        sa.Column('confidence', sa.Integer(), nullable=False, server_default='50'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('last_contact_date', sa.Date(), nullable=True),
        sa.Column(
            'intake_id',
            sa.Uuid(),
            sa.ForeignKey('recruit_intakes.id', ondelete='SET NULL'),
            nullable=True,
            unique=True,
        ),
        sa.Column(
            'assigned_to_id',
            sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('referred_by_id', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_recruits_stage', 'recruits', ['stage'])
    op.create_index('idx_recruits_referred_by', 'recruits', ['referred_by_id'])
    op.create_index('idx_recruits_updated', 'recruits', ['updated_at'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('recruits')
    op.drop_table('recruit_intakes')
    op.drop_table('campaign_clicks')
    op.drop_table('campaigns')
    op.drop_table('users')
