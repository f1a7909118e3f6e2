import logging
import sqlite3
from contextlib import closing
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
DOWN_MARKER = "-- Down"


def up_section(script: str) -> str:
    """Everything before the first "-- Down" marker."""
    return script.split(DOWN_MARKER, 1)[0]


class SQLiteMigrator:
    """Applies numbered .sql files to the archive database, once each, in name order."""

    def __init__(self, db_path: str, migrations_dir: str | Path = MIGRATIONS_DIR):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=30.0)
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
            """
        )
        return conn

    def available(self) -> list[str]:
        return sorted(p.name for p in self.migrations_dir.glob("*.sql"))

    def pending(self) -> list[str]:
        with closing(self._connect()) as conn:
            done = {row[0] for row in conn.execute("SELECT filename FROM _migrations")}
        return [name for name in self.available() if name not in done]

    def run_migrations(self) -> list[str]:
        """Apply pending migrations. Returns the filenames applied by this call."""
        todo = self.pending()
        if not todo:
            logger.debug("Schema at %s is up to date", self.db_path)
            return []

        with closing(self._connect()) as conn:
            for filename in todo:
                logger.info("Applying migration %s to %s", filename, self.db_path)
                self._apply(conn, filename)
        return todo

    def _apply(self, conn: sqlite3.Connection, filename: str) -> None:
        script = up_section((self.migrations_dir / filename).read_text(encoding="utf-8"))
        try:
            conn.executescript(script)
            conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (filename,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise RuntimeError(f"Migration {filename} failed: {e}") from e
