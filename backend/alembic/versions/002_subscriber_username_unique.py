"""unique subscriber usernames

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""

from alembic import op


# revision identifiers, used by Alembic.
revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_index("ux_cr_user_username", "cr_user", ["us_username"], unique=True)


def downgrade() -> None:
    op.drop_index("ux_cr_user_username", table_name="cr_user")
