"""initial tables

Revision ID: 0001
Revises: 
Create Date: 2026-09-14

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=120), nullable=True),
        sa.Column('last_name', sa.String(length=120), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('assignments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('num_of_attempts', sa.Integer(), nullable=False),
        sa.Column('deadline', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('owner_user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.CheckConstraint('points >= 1 AND points <= 10', name='ck_assignments_points_range'),
        sa.CheckConstraint('num_of_attempts >= 1', name='ck_assignments_attempts_min'),
    )
    op.create_index('ix_assignments_owner_user_id', 'assignments', ['owner_user_id'])

    op.create_table('submissions',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('assignment_id', sa.Integer(), sa.ForeignKey('assignments.id', ondelete='CASCADE'), nullable=False),
        sa.Column('submission_url', sa.String(length=2048), nullable=False),
        sa.Column('submission_date', sa.DateTime(), nullable=False),
        sa.Column('submission_updated', sa.DateTime(), nullable=False),
    )

def downgrade():
    op.drop_table('submissions')
    op.drop_index('ix_assignments_owner_user_id', table_name='assignments')
    op.drop_table('assignments')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
