from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_admin.hr_admin.core.constants import DEFAULT_PASSWORD
from src.hr_admin.hr_admin.core.env import validate_settings
from src.hr_admin.hr_admin.database.bootstrap import ADMIN_USERNAME, seed_demo_data
from src.hr_admin.hr_admin.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    validate_settings(settings)
    db_config = dict(settings.DB_CONFIG)
    password = getattr(settings, "DEFAULT_PASSWORD", DEFAULT_PASSWORD)

    seed_demo_data(db_config, default_password=password)
    print(f"OK: Seeded database -> {DBConfig.from_mapping(db_config).describe()} (login: {ADMIN_USERNAME})")


if __name__ == "__main__":
    main()
