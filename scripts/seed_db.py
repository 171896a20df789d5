"""Seed the caregiver roster.

Usage: ``python scripts/seed_db.py [NAME ...]``. Without names, applies
``database/seed.sql``; with names, inserts those that are missing.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.caregiver_clock.caregiver_clock.database.bootstrap import apply_seed_sql, ensure_caregivers


def main(argv: list[str]) -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    if argv:
        added = ensure_caregivers(db_config, argv)
        print(f"OK: Added {added} caregiver(s) -> {target}")
        return

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    print(f"OK: Seeded database -> {target}")


if __name__ == "__main__":
    main(sys.argv[1:])
