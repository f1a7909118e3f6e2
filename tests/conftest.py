import os
from pathlib import Path

import pytest

from litarchive.adapters.sqlite.migrator import SQLiteMigrator
from litarchive.adapters.sqlite.store import SQLitePublicationStore
from litarchive.rules.loader import load_rules
from litarchive.rules.models import Rules

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def rules_path() -> Path:
    # Load REAL rules from project root
    path = PROJECT_ROOT / "rules.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Rules not found at {path}")
    return path


@pytest.fixture
def rules(rules_path: Path) -> Rules:
    return load_rules(rules_path)


@pytest.fixture
def db_path(tmp_path) -> str:
    """A migrated SQLite database in a temporary directory."""
    path = os.path.join(tmp_path, "archive.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def sqlite_store(db_path: str) -> SQLitePublicationStore:
    return SQLitePublicationStore(db_path)
