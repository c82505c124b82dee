"""create player table

Revision ID: 5c2d9e7a1b04
Revises:
Create Date: 2025-11-02 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2d9e7a1b04'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'player',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('external_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('picture', sa.String(length=1024), nullable=True),
        sa.Column('high_score', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('player') as batch_op:
        batch_op.create_index(batch_op.f('ix_player_external_id'), ['external_id'], unique=True)
        batch_op.create_index(batch_op.f('ix_player_high_score'), ['high_score'], unique=False)


def downgrade():
    with op.batch_alter_table('player') as batch_op:
        batch_op.drop_index(batch_op.f('ix_player_high_score'))
        batch_op.drop_index(batch_op.f('ix_player_external_id'))
    op.drop_table('player')
