"""create track, progress and score tables

Revision ID: 5c2e9a7b1f30
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2e9a7b1f30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'track' not in existing_tables:
        op.create_table(
            'track',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('uri', sa.String(length=256), nullable=False),
            sa.Column('offset_ms', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('title', sa.String(length=256), nullable=False),
            sa.Column('artists', sa.Text(), nullable=False, server_default='[]'),
            sa.Column('img', sa.String(length=512), nullable=True),
        )
        op.create_index('ix_track_position', 'track', ['position'])

    if 'progress' not in existing_tables:
        op.create_table(
            'progress',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('done_tracks', sa.Integer(), nullable=False, server_default='0'),
        )

    if 'score' not in existing_tables:
        op.create_table(
            'score',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('nick', sa.String(length=64), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        )
        op.create_index('ix_score_nick', 'score', ['nick'], unique=True)


def downgrade():
    op.drop_index('ix_score_nick', table_name='score')
    op.drop_table('score')
    op.drop_table('progress')
    op.drop_index('ix_track_position', table_name='track')
    op.drop_table('track')
