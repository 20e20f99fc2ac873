"""Root conftest — shared test configuration."""

import os

# club_api.main reads settings at import time; keep tests off any real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
