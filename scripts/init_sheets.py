from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timeclock_system.timeclock_system.container import build_store
from src.timeclock_system.timeclock_system.settings import build_settings
from src.timeclock_system.timeclock_system.store.bootstrap import ensure_sheets


def main() -> None:
    load_dotenv(override=False)
    settings = build_settings(importlib.import_module(get_settings_module()))
    store = build_store(settings)

    created = ensure_sheets(store)
    print(
        f"OK: Sheets ready -> {settings.store_backend}:{settings.spreadsheet_id or '-'} "
        f"(created={', '.join(created) or 'none'})"
    )


if __name__ == "__main__":
    main()
