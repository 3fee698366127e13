import sqlite3
from contextlib import contextmanager

from config import DB_PATH


def init_db(path: str = ""):
    with sqlite3.connect(path or DB_PATH) as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key        TEXT PRIMARY KEY,
                value      TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT ''
            )
        """)
        # Migrate: add updated_at if an older table is present
        cols = [row[1] for row in conn.execute("PRAGMA table_info(kv_store)")]
        if "updated_at" not in cols:
            conn.execute("ALTER TABLE kv_store ADD COLUMN updated_at TEXT NOT NULL DEFAULT ''")
        conn.commit()


@contextmanager
def get_db(path: str = ""):
    conn = sqlite3.connect(path or DB_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()
