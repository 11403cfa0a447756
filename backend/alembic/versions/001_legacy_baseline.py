"""legacy baseline

Revision ID: 001
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = '001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    # The cr_* tables predate this service; fresh dev databases are built by seed_data.py.
    # This migration just marks the schema as initialized.
    pass

def downgrade() -> None:
    pass
