# Rev 0.2.0

"""Paths and XDG helpers (Rev 0.2.0)
- Uses XDG Base Directory spec (logs resolve in logging_setup at call time)
- DB lives under XDG data dir unless CLIENTDESK_DB points elsewhere
- Migrations ship inside the package (clientdesk/data/migrations)
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "clientdesk"


XDG_DATA_HOME = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


DATA_DIR = XDG_DATA_HOME / APP_NAME
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME


# Package-relative locations
PACKAGE_ROOT = Path(__file__).resolve().parents[1]
MIGRATIONS_DIR = (PACKAGE_ROOT / "data" / "migrations").resolve()


DB_PATH = Path(os.environ.get("CLIENTDESK_DB", DATA_DIR / "clientdesk.db"))
