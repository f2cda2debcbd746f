# alembic/versions/001_initial.py

"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('intake_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('day_key', sa.String(length=10), nullable=False),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.Column('fluid_type', sa.String(length=20), nullable=False),
        sa.Column('amount_ml', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_intake_log_day_key', 'intake_log', ['day_key'])

    op.create_table('output_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('day_key', sa.String(length=10), nullable=False),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.Column('fluid_type', sa.String(length=20), nullable=False),
        sa.Column('amount_ml', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_output_log_day_key', 'output_log', ['day_key'])

    op.create_table('gag_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('day_key', sa.String(length=10), nullable=False),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_gag_log_day_key', 'gag_log', ['day_key'])

    op.create_table('wellness_check',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('day_key', sa.String(length=10), nullable=False),
        sa.Column('slot', sa.String(length=20), nullable=False),
        sa.Column('appetite', sa.Integer(), nullable=True),
        sa.Column('energy', sa.Integer(), nullable=True),
        sa.Column('mood', sa.Integer(), nullable=True),
        sa.Column('cyanosis', sa.Integer(), nullable=True),
        sa.Column('logged_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('day_key', 'slot', name='uq_wellness_day_slot')
    )
    op.create_index('ix_wellness_day', 'wellness_check', ['day_key'])

    op.create_table('setting',
        sa.Column('key', sa.String(length=64), nullable=False),
        sa.Column('value', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('key')
    )


def downgrade():
    op.drop_table('setting')
    op.drop_index('ix_wellness_day', table_name='wellness_check')
    op.drop_table('wellness_check')
    op.drop_index('ix_gag_log_day_key', table_name='gag_log')
    op.drop_table('gag_log')
    op.drop_index('ix_output_log_day_key', table_name='output_log')
    op.drop_table('output_log')
    op.drop_index('ix_intake_log_day_key', table_name='intake_log')
    op.drop_table('intake_log')
