# utils/db_helper.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import logging
import sqlite3

from app.errors import DatabaseError
from app.validation import TEXT_FIELDS, slugify

log = logging.getLogger(__name__)

Ident = Union[int, str]


def _ensure_schema(conn: sqlite3.Connection):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS texts(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        slug TEXT UNIQUE NOT NULL,
        title TEXT NOT NULL,
        text TEXT NOT NULL,
        category TEXT NOT NULL,
        difficulty TEXT NOT NULL DEFAULT 'easy',
        language TEXT NOT NULL DEFAULT 'en',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)


class TextStore:
    """
    Practice texts in sqlite. Records are addressed either by the integer
    primary key (or its string form) or by the slug.
    """

    def __init__(self, path: Union[str, Path] = "data/texts.db"):
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._memory_conn: Optional[sqlite3.Connection] = None

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.path)
            conn.row_factory = sqlite3.Row
            _ensure_schema(conn)
        except sqlite3.Error as e:
            log.error("Cannot open %s: %s", self.path, e)
            raise DatabaseError(str(e)) from e
        return conn

    def _conn(self) -> sqlite3.Connection:
        if self.path == ":memory:":
            # one shared connection, otherwise every call sees an empty db
            if self._memory_conn is None:
                self._memory_conn = self._connect()
            return self._memory_conn
        return self._connect()

    def _close(self, conn: sqlite3.Connection):
        if conn is not self._memory_conn:
            conn.close()

    def _find(self, ident: Ident) -> Optional[Dict[str, Any]]:
        """
        Resolve an identifier to at most one row. Integers and digit strings
        are primary keys first; anything else (or a digit string with no
        matching key) is looked up as a slug.
        """
        if isinstance(ident, int) and not isinstance(ident, bool):
            rows = self._select("SELECT * FROM texts WHERE id=?", (ident,))
            return rows[0] if rows else None
        s = str(ident).strip()
        if s.isdigit():
            rows = self._select("SELECT * FROM texts WHERE id=?", (int(s),))
            if rows:
                return rows[0]
        rows = self._select("SELECT * FROM texts WHERE slug=?", (s,))
        return rows[0] if rows else None

    def _run(self, sql: str, params=()):
        conn = self._conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
            return cur.rowcount, cur.lastrowid
        except sqlite3.Error as e:
            log.error("Query failed: %s", e)
            raise DatabaseError(str(e)) from e
        finally:
            self._close(conn)

    def _select(self, sql: str, params=()) -> List[Dict[str, Any]]:
        conn = self._conn()
        try:
            return [dict(r) for r in conn.execute(sql, params).fetchall()]
        except sqlite3.Error as e:
            log.error("Query failed: %s", e)
            raise DatabaseError(str(e)) from e
        finally:
            self._close(conn)

    def list_texts(self) -> List[Dict[str, Any]]:
        return self._select("SELECT * FROM texts ORDER BY id")

    def get_text(self, ident: Ident) -> Optional[Dict[str, Any]]:
        return self._find(ident)

    def _unique_slug(self, base: str) -> str:
        # all-digit slugs would collide with primary keys
        if base.isdigit():
            base = f"text-{base}"
        slug, n = base, 2
        while self._select("SELECT id FROM texts WHERE slug=?", (slug,)):
            slug = f"{base}-{n}"
            n += 1
        return slug

    def create_text(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        data = {k: fields[k] for k in TEXT_FIELDS if k in fields}
        slug = str(fields.get("slug") or "").strip() or slugify(str(data.get("title", "")))
        data["slug"] = self._unique_slug(slug)
        cols = ", ".join(data)
        marks = ", ".join("?" for _ in data)
        _, row_id = self._run(f"INSERT INTO texts({cols}) VALUES ({marks})", tuple(data.values()))
        log.info("Created text %s (%s)", row_id, data["slug"])
        return self.get_text(row_id)

    def update_text(self, ident: Ident, fields: Mapping[str, Any]) -> bool:
        data = {k: fields[k] for k in TEXT_FIELDS if k in fields}
        row = self._find(ident)
        if row is None:
            return False
        if not data:
            return True
        sets = ", ".join(f"{k}=?" for k in data)
        self._run(f"UPDATE texts SET {sets} WHERE id=?", tuple(data.values()) + (row["id"],))
        log.info("Updated text %s", row["id"])
        return True

    def delete_text(self, ident: Ident) -> bool:
        row = self._find(ident)
        if row is None:
            return False
        deleted, _ = self._run("DELETE FROM texts WHERE id=?", (row["id"],))
        if deleted:
            log.info("Deleted text %s (%s)", row["id"], row["slug"])
        return deleted > 0

    def seed(self, records: Iterable[Mapping[str, Any]]) -> int:
        """Fill an empty store; returns how many records were inserted."""
        if self.list_texts():
            return 0
        n = 0
        for rec in records:
            self.create_text(rec)
            n += 1
        log.info("Seeded %d practice texts", n)
        return n
