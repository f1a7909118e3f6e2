"""
SQLite publication store.

Every counter and status write runs inside a ``BEGIN IMMEDIATE`` transaction
and changes values with SQL expressions (``views = views + 1``, guarded
``UPDATE ... WHERE status = ?``), never by writing back a value read earlier.
"""

import builtins
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from typing import Any
from uuid import UUID

from litarchive.domain.entities import (
    ContentItem,
    ContentKind,
    ContentStatus,
    LikeState,
    TransitionRecord,
)
from litarchive.domain.errors import ConflictError, NotFound


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _dt(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_dt(s: str | None) -> datetime | None:
    return datetime.fromisoformat(s) if s else None


def _row_to_item(row: dict[str, Any]) -> ContentItem:
    return ContentItem(
        id=UUID(row["id"]),
        kind=ContentKind(row["kind"]),
        title=row["title"],
        slug=row["slug"],
        slug_pinned=bool(row["slug_pinned"]),
        body=row["body"],
        excerpt=row["excerpt"],
        status=ContentStatus(row["status"]),
        author_id=row["author_id"],
        category_id=row["category_id"],
        book_id=row["book_id"],
        views=row["views"],
        featured=bool(row["featured"]),
        created_at=_parse_dt(row["created_at"]) or datetime.min,
        updated_at=_parse_dt(row["updated_at"]) or datetime.min,
        published_at=_parse_dt(row["published_at"]),
    )


def _row_to_record(row: dict[str, Any]) -> TransitionRecord:
    return TransitionRecord(
        id=UUID(row["id"]),
        content_id=UUID(row["content_id"]),
        from_status=ContentStatus(row["from_status"]),
        to_status=ContentStatus(row["to_status"]),
        actor_id=row["actor_id"],
        reason=row["reason"],
        created_at=_parse_dt(row["created_at"]) or datetime.min,
    )


def _is_unique_violation(err: sqlite3.IntegrityError) -> bool:
    return "UNIQUE" in str(err).upper()


class SQLitePublicationStore:
    def __init__(self, db_path: str, timeout: float = 30.0):
        self.db_path = db_path
        self.timeout = timeout

    def _get_conn(self) -> sqlite3.Connection:
        # Autocommit mode; write paths open their own IMMEDIATE transaction
        conn = sqlite3.connect(self.db_path, timeout=self.timeout, isolation_level=None)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    @contextmanager
    def _write(self) -> Iterator[sqlite3.Connection]:
        """Connection holding the database write lock until commit."""
        conn = self._get_conn()
        try:
            conn.execute("BEGIN IMMEDIATE")
            yield conn
            conn.execute("COMMIT")
        except Exception:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            conn.close()

    def _fetch_item(self, conn: sqlite3.Connection, item_id: UUID) -> ContentItem | None:
        row = conn.execute("SELECT * FROM content_items WHERE id = ?", (str(item_id),)).fetchone()
        return _row_to_item(row) if row else None

    # --- content ---

    def get(self, item_id: UUID) -> ContentItem | None:
        conn = self._get_conn()
        try:
            return self._fetch_item(conn, item_id)
        finally:
            conn.close()

    def find_by_slug(self, namespace: str, slug: str) -> ContentItem | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM content_items WHERE namespace = ? AND slug = ?",
                (namespace, slug),
            ).fetchone()
            return _row_to_item(row) if row else None
        finally:
            conn.close()

    def slug_taken(self, namespace: str, slug: str, exclude_id: UUID | None = None) -> bool:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT 1 FROM content_items WHERE namespace = ? AND slug = ? AND id != ?",
                (namespace, slug, str(exclude_id) if exclude_id else ""),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def create(self, item: ContentItem, namespace: str) -> ContentItem:
        try:
            with self._write() as conn:
                conn.execute(
                    """
                    INSERT INTO content_items (
                        id, kind, namespace, slug, slug_pinned, title, body, excerpt,
                        status, author_id, category_id, book_id, views, featured,
                        created_at, updated_at, published_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        str(item.id),
                        item.kind.value,
                        namespace,
                        item.slug,
                        int(item.slug_pinned),
                        item.title,
                        item.body,
                        item.excerpt,
                        item.status.value,
                        item.author_id,
                        item.category_id,
                        item.book_id,
                        item.views,
                        int(item.featured),
                        _dt(item.created_at),
                        _dt(item.updated_at),
                        _dt(item.published_at),
                    ),
                )
                created = self._fetch_item(conn, item.id)
        except sqlite3.IntegrityError as e:
            if _is_unique_violation(e):
                raise ConflictError(f"Slug '{item.slug}' already exists in '{namespace}'") from e
            raise
        assert created is not None
        return created

    def update(self, item: ContentItem) -> ContentItem:
        try:
            with self._write() as conn:
                cur = conn.execute(
                    """
                    UPDATE content_items SET
                        title = ?, slug = ?, slug_pinned = ?, body = ?, excerpt = ?,
                        category_id = ?, book_id = ?, featured = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        item.title,
                        item.slug,
                        int(item.slug_pinned),
                        item.body,
                        item.excerpt,
                        item.category_id,
                        item.book_id,
                        int(item.featured),
                        _dt(item.updated_at),
                        str(item.id),
                    ),
                )
                if cur.rowcount == 0:
                    raise NotFound(f"Content {item.id} not found")
                updated = self._fetch_item(conn, item.id)
        except sqlite3.IntegrityError as e:
            if _is_unique_violation(e):
                raise ConflictError(f"Slug '{item.slug}' already exists") from e
            raise
        assert updated is not None
        return updated

    def delete(self, item_id: UUID) -> bool:
        item_id_str = str(item_id)
        with self._write() as conn:
            # Delete related records first (handles DBs without ON DELETE CASCADE)
            conn.execute("DELETE FROM likes WHERE content_id = ?", (item_id_str,))
            conn.execute("DELETE FROM like_requests WHERE content_id = ?", (item_id_str,))
            conn.execute("DELETE FROM status_transitions WHERE content_id = ?", (item_id_str,))
            cur = conn.execute("DELETE FROM content_items WHERE id = ?", (item_id_str,))
            return cur.rowcount > 0

    def list_items(
        self,
        *,
        kinds: Sequence[ContentKind] | None = None,
        status: ContentStatus | None = None,
        category_id: str | None = None,
        featured: bool | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[builtins.list[ContentItem], int]:
        query = "FROM content_items WHERE 1=1"
        params: builtins.list[Any] = []

        if kinds:
            query += f" AND kind IN ({', '.join('?' for _ in kinds)})"
            params.extend(k.value for k in kinds)
        if status:
            query += " AND status = ?"
            params.append(status.value)
        if category_id is not None:
            query += " AND category_id = ?"
            params.append(category_id)
        if featured is not None:
            query += " AND featured = ?"
            params.append(int(featured))

        conn = self._get_conn()
        try:
            row = conn.execute(f"SELECT COUNT(*) AS cnt {query}", params).fetchone()
            total = row["cnt"] if row else 0

            rows = conn.execute(
                f"SELECT * {query} ORDER BY COALESCE(published_at, created_at) DESC, id "
                "LIMIT ? OFFSET ?",
                [*params, limit, offset],
            ).fetchall()
            return [_row_to_item(r) for r in rows], total
        finally:
            conn.close()

    # --- workflow ---

    def compare_and_set_status(
        self,
        item_id: UUID,
        expected: ContentStatus,
        new_status: ContentStatus,
        now: datetime,
        record: TransitionRecord,
    ) -> ContentItem | None:
        with self._write() as conn:
            cur = conn.execute(
                """
                UPDATE content_items SET
                    status = ?,
                    updated_at = ?,
                    published_at = CASE
                        WHEN ? = 'PUBLISHED' THEN COALESCE(published_at, ?)
                        ELSE published_at
                    END
                WHERE id = ? AND status = ?
                """,
                (
                    new_status.value,
                    _dt(now),
                    new_status.value,
                    _dt(now),
                    str(item_id),
                    expected.value,
                ),
            )
            if cur.rowcount == 0:
                return None

            self._insert_transition(conn, record)
            return self._fetch_item(conn, item_id)

    @staticmethod
    def _insert_transition(conn: sqlite3.Connection, record: TransitionRecord) -> None:
        conn.execute(
            """
            INSERT INTO status_transitions
            (id, content_id, from_status, to_status, actor_id, reason, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                str(record.id),
                str(record.content_id),
                record.from_status.value,
                record.to_status.value,
                record.actor_id,
                record.reason,
                _dt(record.created_at),
            ),
        )

    def add_transition(self, record: TransitionRecord) -> None:
        with self._write() as conn:
            self._insert_transition(conn, record)

    def list_transitions(self, item_id: UUID) -> builtins.list[TransitionRecord]:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM status_transitions WHERE content_id = ? "
                "ORDER BY created_at ASC, rowid ASC",
                (str(item_id),),
            ).fetchall()
            return [_row_to_record(r) for r in rows]
        finally:
            conn.close()

    # --- counters ---

    def increment_views(self, item_id: UUID) -> int | None:
        with self._write() as conn:
            cur = conn.execute(
                "UPDATE content_items SET views = views + 1 WHERE id = ?", (str(item_id),)
            )
            if cur.rowcount == 0:
                return None
            row = conn.execute(
                "SELECT views FROM content_items WHERE id = ?", (str(item_id),)
            ).fetchone()
            return int(row["views"])

    @staticmethod
    def _like_count(conn: sqlite3.Connection, item_id: str) -> int:
        row = conn.execute(
            "SELECT COUNT(*) AS cnt FROM likes WHERE content_id = ?", (item_id,)
        ).fetchone()
        return int(row["cnt"])

    def toggle_like(
        self,
        user_id: str,
        item_id: UUID,
        now: datetime,
        request_key: str | None = None,
    ) -> LikeState | None:
        item_id_str = str(item_id)
        with self._write() as conn:
            exists = conn.execute(
                "SELECT 1 FROM content_items WHERE id = ?", (item_id_str,)
            ).fetchone()
            if not exists:
                return None

            if request_key is not None:
                seen = conn.execute(
                    "SELECT liked FROM like_requests WHERE request_key = ?", (request_key,)
                ).fetchone()
                if seen:
                    return LikeState(
                        liked=bool(seen["liked"]), like_count=self._like_count(conn, item_id_str)
                    )

            cur = conn.execute(
                "DELETE FROM likes WHERE user_id = ? AND content_id = ?", (user_id, item_id_str)
            )
            liked = cur.rowcount == 0
            if liked:
                conn.execute(
                    "INSERT INTO likes (user_id, content_id, created_at) VALUES (?, ?, ?)",
                    (user_id, item_id_str, _dt(now)),
                )

            if request_key is not None:
                # Only the latest key per (user, item) is kept
                conn.execute(
                    "DELETE FROM like_requests WHERE user_id = ? AND content_id = ?",
                    (user_id, item_id_str),
                )
                conn.execute(
                    "INSERT INTO like_requests (request_key, user_id, content_id, liked, created_at) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (request_key, user_id, item_id_str, int(liked), _dt(now)),
                )

            return LikeState(liked=liked, like_count=self._like_count(conn, item_id_str))

    def like_state(self, user_id: str | None, item_id: UUID) -> LikeState | None:
        item_id_str = str(item_id)
        conn = self._get_conn()
        try:
            exists = conn.execute(
                "SELECT 1 FROM content_items WHERE id = ?", (item_id_str,)
            ).fetchone()
            if not exists:
                return None
            liked = False
            if user_id is not None:
                liked = (
                    conn.execute(
                        "SELECT 1 FROM likes WHERE user_id = ? AND content_id = ?",
                        (user_id, item_id_str),
                    ).fetchone()
                    is not None
                )
            return LikeState(liked=liked, like_count=self._like_count(conn, item_id_str))
        finally:
            conn.close()

    def record_visitor(self, window_key: str, session_token: str, now: datetime) -> tuple[bool, int]:
        with self._write() as conn:
            cur = conn.execute(
                "INSERT OR IGNORE INTO visitor_sessions (window_key, session_token, created_at) "
                "VALUES (?, ?, ?)",
                (window_key, session_token, _dt(now)),
            )
            counted = cur.rowcount == 1
            if counted:
                conn.execute(
                    """
                    INSERT INTO visitor_counters (window_key, total) VALUES (?, 1)
                    ON CONFLICT(window_key) DO UPDATE SET total = total + 1
                    """,
                    (window_key,),
                )
            row = conn.execute(
                "SELECT total FROM visitor_counters WHERE window_key = ?", (window_key,)
            ).fetchone()
            return counted, int(row["total"]) if row else 0

    def visitor_total(self, window_key: str) -> int:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT total FROM visitor_counters WHERE window_key = ?", (window_key,)
            ).fetchone()
            return int(row["total"]) if row else 0
        finally:
            conn.close()
