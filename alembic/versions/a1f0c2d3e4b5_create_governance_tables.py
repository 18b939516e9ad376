"""create governance tables

Revision ID: a1f0c2d3e4b5
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from src.infrastructure.db.orm.types import StringList

# revision identifiers, used by Alembic.
revision: str = 'a1f0c2d3e4b5'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'membership_tokens',
        sa.Column('owner_id', sa.String(length=64), nullable=False),
        sa.Column('issuance_seq', sa.Integer(), nullable=False),
        sa.Column('minting_round', sa.Integer(), nullable=False),
        sa.Column('round_order', sa.Integer(), nullable=False),
        sa.Column('unique_hash', sa.String(length=255), nullable=False),
        sa.Column('governance_role', sa.String(length=64), nullable=False),
        sa.Column('cooperative_id', sa.String(length=128), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('avatar', sa.String(length=1024), nullable=True),
        sa.Column('image', sa.String(length=1024), nullable=True),
        sa.Column('did', sa.String(length=255), nullable=True),
        sa.Column('external_handle', sa.String(length=255), nullable=True),
        sa.Column('titles', StringList(), nullable=False),
        sa.Column(
            'issued_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint('owner_id', name='pk_membership_tokens'),
        sa.UniqueConstraint('issuance_seq', name='ux_membership_tokens_issuance_seq'),
        sa.UniqueConstraint('unique_hash', name='ux_membership_tokens_unique_hash'),
    )
    op.create_index(
        'ix_membership_tokens_cooperative_id', 'membership_tokens', ['cooperative_id']
    )

    op.create_table(
        'proposals',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('proposer', sa.String(length=64), nullable=False),
        sa.Column('votes_for', sa.Integer(), nullable=False),
        sa.Column('votes_against', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=8), nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_proposals'),
    )

    op.create_table(
        'proposal_votes',
        sa.Column('proposal_id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.String(length=64), nullable=False),
        sa.Column('in_favor', sa.Boolean(), nullable=False),
        sa.Column('seq', sa.Integer(), nullable=False),
        sa.Column(
            'cast_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.ForeignKeyConstraint(
            ['proposal_id'],
            ['proposals.id'],
            name='fk_proposal_votes_proposal_id_proposals',
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('proposal_id', 'account_id', name='pk_proposal_votes'),
    )

    registry_state = op.create_table(
        'registry_state',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('next_issuance_seq', sa.Integer(), nullable=False),
        sa.Column('minting_round', sa.Integer(), nullable=False),
        sa.Column('round_order', sa.Integer(), nullable=False),
        sa.Column('next_proposal_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_registry_state'),
    )
    op.bulk_insert(
        registry_state,
        [
            {
                'id': 1,
                'next_issuance_seq': 1,
                'minting_round': 1,
                'round_order': 0,
                'next_proposal_id': 0,
            }
        ],
    )


def downgrade() -> None:
    op.drop_table('registry_state')
    op.drop_table('proposal_votes')
    op.drop_table('proposals')
    op.drop_index('ix_membership_tokens_cooperative_id', table_name='membership_tokens')
    op.drop_table('membership_tokens')
