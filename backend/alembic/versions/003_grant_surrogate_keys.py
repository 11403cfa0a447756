"""surrogate keys on entitlement grant tables

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "003"
down_revision = "002"
branch_labels = None
depends_on = None

GRANT_KEYS = (
    ("cr_user_mnews", "um_id"),
    ("cr_user_mne", "umne_id"),
    ("cr_user_sea", "usea_id"),
    ("cr_user_sda", "usda_id"),
    ("cr_user_seat", "seat_id"),
)

# Existing rows are numbered by the database while the key is added.
IDENTITY_DDL = {
    "mssql": "ALTER TABLE {table} ADD {column} INT IDENTITY(1,1) NOT NULL PRIMARY KEY",
    "postgresql": "ALTER TABLE {table} ADD COLUMN {column} SERIAL PRIMARY KEY",
    "mysql": "ALTER TABLE {table} ADD COLUMN {column} INT NOT NULL AUTO_INCREMENT PRIMARY KEY FIRST",
    "mariadb": "ALTER TABLE {table} ADD COLUMN {column} INT NOT NULL AUTO_INCREMENT PRIMARY KEY FIRST",
}


def _add_identity_key(bind, table: str, column: str) -> None:
    dialect = bind.dialect.name
    if dialect in IDENTITY_DDL:
        op.execute(IDENTITY_DDL[dialect].format(table=table, column=column))
    elif dialect == "sqlite":
        # SQLite cannot ALTER in a primary key; the copied table numbers rows through rowid.
        with op.batch_alter_table(table, recreate="always") as batch_op:
            batch_op.add_column(sa.Column(column, sa.Integer(), primary_key=True, autoincrement=True))
    else:
        raise NotImplementedError(f"No identity column support for dialect {dialect!r}")


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    for table, column in GRANT_KEYS:
        existing = {col["name"] for col in inspector.get_columns(table)}
        if column in existing:
            continue
        _add_identity_key(bind, table, column)


def downgrade() -> None:
    bind = op.get_bind()
    for table, column in GRANT_KEYS:
        if bind.dialect.name == "sqlite":
            with op.batch_alter_table(table, recreate="always") as batch_op:
                batch_op.drop_column(column)
        else:
            op.drop_column(table, column)
