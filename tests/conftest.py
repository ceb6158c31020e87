"""Root conftest — shared test configuration."""

import os

# Ensure tests never open the real incident database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")
