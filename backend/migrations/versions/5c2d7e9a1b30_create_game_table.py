"""create game table holding the serialized aggregate and its fingerprint

Revision ID: 5c2d7e9a1b30
Revises: 
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2d7e9a1b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # Fresh installs created through db-reset already have the table
    if 'game' in set(insp.get_table_names()):
        return

    op.create_table(
        'game',
        sa.Column('id', sa.String(length=4), primary_key=True),
        sa.Column('state', sa.Text(), nullable=False),
        sa.Column('fingerprint', sa.String(length=64), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_game_fingerprint', 'game', ['fingerprint'])


def downgrade():
    op.drop_index('ix_game_fingerprint', table_name='game')
    op.drop_table('game')
