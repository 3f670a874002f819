from __future__ import annotations

import argparse
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
from src.timeclock_system.timeclock_system.store.bootstrap import ensure_default_site, ensure_demo_employees, ensure_sheets


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the default job site and demo employees.")
    parser.add_argument("--no-demo-employees", action="store_true", help="only register the default job site")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = build_settings(importlib.import_module(get_settings_module()))
    store = build_store(settings)
    ensure_sheets(store)

    site = settings.default_site
    if site is None:
        print("SKIP: DEFAULT_SITE_NAME is not set; no job site seeded")
    else:
        site_id = ensure_default_site(
            store,
            name=site.name,
            latitude=site.latitude,
            longitude=site.longitude,
            radius=site.radius,
            address=site.address,
        )
        print(f"OK: Default job site -> {site_id} ({site.latitude}, {site.longitude}, r={site.radius:g}m)")

    if not args.no_demo_employees:
        added = ensure_demo_employees(store)
        print(f"OK: Demo employees added: {', '.join(added) or 'none (already present)'}")


if __name__ == "__main__":
    main()
