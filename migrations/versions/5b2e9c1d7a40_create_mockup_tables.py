"""create mockups, mockup_versions and mockup_comments tables

Revision ID: 5b2e9c1d7a40
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b2e9c1d7a40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('mockups',
    sa.Column('content', sa.JSON(none_as_null=True), nullable=False),
    sa.Column('password_hash', sa.String(), nullable=True),
    sa.Column('view_count', sa.Integer(), nullable=False),
    sa.Column('current_version', sa.Integer(), nullable=False),
    sa.Column('id', sa.String(length=32), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )

    op.create_table('mockup_versions',
    sa.Column('mockup_id', sa.String(length=32), nullable=False),
    sa.Column('version_number', sa.Integer(), nullable=False),
    sa.Column('content', sa.JSON(), nullable=False),
    sa.Column('comment_snapshot', sa.JSON(), nullable=False),
    sa.Column('id', sa.String(length=32), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['mockup_id'], ['mockups.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('mockup_id', 'version_number', name='uq_mockup_version')
    )
    op.create_index(op.f('ix_mockup_versions_mockup_id'), 'mockup_versions', ['mockup_id'], unique=False)

    op.create_table('mockup_comments',
    sa.Column('mockup_id', sa.String(length=32), nullable=False),
    sa.Column('version_number', sa.Integer(), nullable=False),
    sa.Column('x', sa.Float(), nullable=False),
    sa.Column('y', sa.Float(), nullable=False),
    sa.Column('width', sa.Float(), nullable=False),
    sa.Column('height', sa.Float(), nullable=False),
    sa.Column('image_index', sa.Integer(), nullable=False),
    sa.Column('body', sa.Text(), nullable=False),
    sa.Column('author_name', sa.String(), nullable=False),
    sa.Column('author_token', sa.String(), nullable=False),
    sa.Column('resolved', sa.Boolean(), nullable=False),
    sa.Column('id', sa.String(length=32), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['mockup_id'], ['mockups.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_mockup_comments_mockup_version', 'mockup_comments', ['mockup_id', 'version_number'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_mockup_comments_mockup_version', table_name='mockup_comments')
    op.drop_table('mockup_comments')
    op.drop_index(op.f('ix_mockup_versions_mockup_id'), table_name='mockup_versions')
    op.drop_table('mockup_versions')
    op.drop_table('mockups')
