import os
import sqlite3

import structlog

from services.errors import PersistenceError
from utils.constants import DB_FILE

logger = structlog.get_logger()


class DatabaseManager:
    """sqlite-backed key-value store plus the app_settings table."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            try:
                self._conn = sqlite3.connect(self.db_path)
            except sqlite3.Error as e:
                raise PersistenceError(f"Cannot open {self.db_path}: {e}") from e
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        try:
            self._create_schema(conn)
            self._seed_defaults(conn)
            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot initialize {self.db_path}: {e}") from e

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key        TEXT PRIMARY KEY,
                value      TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        defaults = [
            ("appearance_mode", "system"),
            ("currency_symbol", "$"),
            ("date_format", "MM/DD/YYYY"),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    # ── Key-value store ──────────────────────────────────────────────────────

    def load(self, key: str) -> str | None:
        """Return the text saved under key, or None if absent."""
        try:
            row = self.get_connection().execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to read '{key}': {e}") from e
        return row["value"] if row else None

    def save(self, key: str, text: str):
        conn = self.get_connection()
        try:
            conn.execute(
                """INSERT INTO kv_store(key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE
                   SET value = excluded.value, updated_at = datetime('now')""",
                (key, text),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PersistenceError(f"Failed to save '{key}': {e}") from e

    # ── Settings ─────────────────────────────────────────────────────────────

    def get_setting(self, key: str, default: str = "") -> str:
        try:
            row = self.get_connection().execute(
                "SELECT value FROM app_settings WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.warning("setting_read_failed", key=key, error=str(e))
            return default
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to save setting '{key}': {e}") from e

    @staticmethod
    def open_default(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens expenseiq.db in db_folder (or the CWD)."""
        path = os.path.join(db_folder, DB_FILE) if db_folder else DB_FILE
        db = DatabaseManager(path)
        db.initialize()
        logger.info("data_store_opened", path=path)
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
