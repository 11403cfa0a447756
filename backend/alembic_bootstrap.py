#!/usr/bin/env python3
"""Alembic bootstrap for the pre-existing legacy database.

If the legacy tables already exist but alembic_version is missing, stamp
the explicit baseline revision before normal upgrades.
"""

from __future__ import annotations

import os
import subprocess

from sqlalchemy import inspect

from cirec_admin.database import get_engine


BASELINE_REVISION = os.getenv("ALEMBIC_BASELINE_REVISION", "001")
LEGACY_TABLES = ("cr_admin", "cr_user", "cr_news")


def needs_baseline_stamp(engine) -> bool:
    inspector = inspect(engine)
    has_alembic_version = inspector.has_table("alembic_version")
    has_legacy_schema = any(inspector.has_table(table) for table in LEGACY_TABLES)
    return has_legacy_schema and not has_alembic_version


def main() -> int:
    if needs_baseline_stamp(get_engine()):
        print(
            "Legacy schema detected without alembic_version. "
            f"Stamping baseline: {BASELINE_REVISION}"
        )
        subprocess.run(["alembic", "stamp", BASELINE_REVISION], check=True)
    else:
        print("Alembic bootstrap check: no baseline stamp required")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
