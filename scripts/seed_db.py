from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from dayflow.database.bootstrap import DEMO_ACCOUNTS, apply_seed_sql, ensure_demo_users
from dayflow.settings import get_settings_module

logger = logging.getLogger("dayflow.scripts.seed_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    # Payroll rows in seed.sql reference the demo employee.
    ensure_demo_users(db_config)
    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)

    for employee_id, _first, _last, email, password, role, *_ in DEMO_ACCOUNTS:
        logger.info("Demo %s account: %s / %s (%s)", role, email, password, employee_id)


if __name__ == "__main__":
    main()
