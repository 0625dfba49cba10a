"""create administrators, suggestion boxes and suggestions

Revision ID: 0001_create_suggestion_box_tables
Revises:
Create Date: 2026-03-01 00:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_suggestion_box_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'administrators',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_administrators_email', 'administrators', ['email'], unique=True)

    op.create_table(
        'suggestion_boxes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('owner_id', sa.String(36), sa.ForeignKey('administrators.id'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('color', sa.String(7), nullable=False, server_default='#3B82F6'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_suggestion_boxes_owner_id', 'suggestion_boxes', ['owner_id'])
    op.create_index('idx_box_owner_created', 'suggestion_boxes', ['owner_id', 'created_at'])

    op.create_table(
        'suggestions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column(
            'box_id',
            sa.String(36),
            sa.ForeignKey('suggestion_boxes.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('admin_rating', sa.Integer(), nullable=True),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_suggestion_rating'),
        sa.CheckConstraint(
            'admin_rating IS NULL OR (admin_rating >= 1 AND admin_rating <= 5)',
            name='ck_suggestion_admin_rating',
        ),
    )
    op.create_index('ix_suggestions_box_id', 'suggestions', ['box_id'])
    op.create_index('idx_suggestion_box_created', 'suggestions', ['box_id', 'created_at'])


def downgrade():
    op.drop_index('idx_suggestion_box_created', table_name='suggestions')
    op.drop_index('ix_suggestions_box_id', table_name='suggestions')
    op.drop_table('suggestions')
    op.drop_index('idx_box_owner_created', table_name='suggestion_boxes')
    op.drop_index('ix_suggestion_boxes_owner_id', table_name='suggestion_boxes')
    op.drop_table('suggestion_boxes')
    op.drop_index('ix_administrators_email', table_name='administrators')
    op.drop_table('administrators')
