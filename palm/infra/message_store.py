import logging
import os
import sqlite3
import threading
from typing import Protocol

from palm.constants import (
    ACCOUNT_TYPE_MICROSOFT,
    ACCOUNT_TYPES,
    IMPORTANCE_NORMAL,
    IMPORTANCE_VALUES,
    MAX_PAGE_SIZE,
    RECIPIENT_KINDS,
    RECIPIENT_TO,
)
from palm.domain.models import Attachment, FullMessage, ListPage, Recipient, Summary
from palm.errors import ExternalServiceError, NotFoundError, ValidationError
from palm.paths import DATABASE_FILE

logger = logging.getLogger(__name__)


class MessageStore(Protocol):
    """The two calls the synchronization engine makes against a backend."""

    def list_messages(self, account_id, page, page_size, search=None) -> ListPage: ...

    def get_message(self, message_id) -> FullMessage: ...


def _fold_case(value):
    return (value or "").lower()


def _like_pattern(text):
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqliteMessageStore:
    """SQLite-backed message store with thread-local connections."""

    SCHEMA_VERSION = 1

    _SUMMARY_SELECT = (
        "m.id, m.subject, m.sender_name, m.sender_email, m.body_preview, m.body, "
        "m.received_at, m.is_read, "
        "(SELECT COUNT(*) FROM attachments a WHERE a.message_id = m.id) AS attachment_count"
    )

    def __init__(self, db_path=None):
        self.db_path = db_path or DATABASE_FILE
        self._local = threading.local()
        db_dir = os.path.dirname(self.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        self._init_schema()

    @property
    def conn(self):
        """Thread-local database connection."""
        if getattr(self._local, "conn", None) is None:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA foreign_keys=ON")
            # SQLite's LOWER() only folds ASCII.
            conn.create_function("PY_LOWER", 1, _fold_case, deterministic=True)
            self._local.conn = conn
        return self._local.conn

    def close(self):
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            conn.close()
            self._local.conn = None

    def _init_schema(self):
        conn = self.conn
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            );

            CREATE TABLE IF NOT EXISTS accounts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT NOT NULL UNIQUE,
                account_type TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS messages (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                account_id INTEGER NOT NULL REFERENCES accounts(id),
                subject TEXT,
                body TEXT,
                body_preview TEXT,
                sender_email TEXT NOT NULL,
                sender_name TEXT,
                received_at TEXT,
                sent_at TEXT,
                is_draft INTEGER NOT NULL DEFAULT 0,
                is_read INTEGER NOT NULL DEFAULT 0,
                importance TEXT NOT NULL DEFAULT 'Normal',
                conversation_id TEXT
            );

            CREATE TABLE IF NOT EXISTS recipients (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                message_id INTEGER NOT NULL REFERENCES messages(id),
                email TEXT NOT NULL,
                name TEXT,
                recipient_type TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS attachments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                message_id INTEGER NOT NULL REFERENCES messages(id),
                filename TEXT NOT NULL,
                mime_type TEXT NOT NULL,
                size INTEGER NOT NULL,
                local_path TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_messages_account ON messages(account_id, received_at DESC);
            CREATE INDEX IF NOT EXISTS idx_recipients_message ON recipients(message_id);
            CREATE INDEX IF NOT EXISTS idx_attachments_message ON attachments(message_id);
            """
        )
        conn.execute("DELETE FROM schema_version")
        conn.execute("INSERT INTO schema_version (version) VALUES (?)", (self.SCHEMA_VERSION,))
        conn.commit()

    def table_names(self):
        rows = self.conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        return {row["name"] for row in rows}

    # -- accounts -----------------------------------------------------------

    def add_account(self, email, account_type=ACCOUNT_TYPE_MICROSOFT, account_id=None):
        address = (email or "").strip()
        if not address:
            raise ValidationError("Account email is required.")
        account_type = account_type or ACCOUNT_TYPE_MICROSOFT
        if account_type not in ACCOUNT_TYPES:
            raise ValidationError(f"Invalid account type: {account_type}")
        try:
            with self.conn:
                cur = self.conn.execute(
                    "INSERT INTO accounts (id, email, account_type) VALUES (?, ?, ?)",
                    (account_id, address, account_type),
                )
        except sqlite3.IntegrityError as exc:
            raise ValidationError(f"Account already exists: {address}") from exc
        except sqlite3.Error as exc:
            raise ExternalServiceError(f"Unable to create account: {exc}") from exc
        return cur.lastrowid

    def get_account_id(self, email):
        row = self.conn.execute("SELECT id FROM accounts WHERE email = ?", ((email or "").strip(),)).fetchone()
        return int(row["id"]) if row else None

    # -- messages -----------------------------------------------------------

    @staticmethod
    def _validate_message(sender_email, recipients, importance):
        if not (sender_email or "").strip():
            raise ValidationError("Sender email is required.")
        if not recipients:
            raise ValidationError("At least one recipient is required.")
        if importance not in IMPORTANCE_VALUES:
            raise ValidationError(f"Invalid importance value: {importance}")
        for recipient in recipients:
            if not (recipient.get("email") or "").strip():
                raise ValidationError("Recipient email is required.")
            kind = recipient.get("recipient_type") or RECIPIENT_TO
            if kind not in RECIPIENT_KINDS:
                raise ValidationError(f"Invalid recipient type: {kind}")

    def add_message(
        self,
        account_id,
        *,
        sender_email,
        recipients,
        subject="",
        body="",
        body_preview=None,
        sender_name=None,
        received_at=None,
        sent_at=None,
        is_draft=False,
        is_read=False,
        importance=None,
        conversation_id=None,
        attachments=None,
    ):
        """Insert a message with its recipients and attachments in one transaction."""
        importance = importance or IMPORTANCE_NORMAL
        recipients = list(recipients or [])
        self._validate_message(sender_email, recipients, importance)
        conn = self.conn
        try:
            with conn:
                cur = conn.execute(
                    """
                    INSERT INTO messages (
                        account_id, subject, body, body_preview, sender_email, sender_name,
                        received_at, sent_at, is_draft, is_read, importance, conversation_id
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        int(account_id),
                        subject,
                        body,
                        body_preview,
                        sender_email.strip(),
                        sender_name,
                        received_at,
                        sent_at,
                        int(bool(is_draft)),
                        int(bool(is_read)),
                        importance,
                        conversation_id,
                    ),
                )
                message_id = cur.lastrowid
                conn.executemany(
                    "INSERT INTO recipients (message_id, email, name, recipient_type) VALUES (?, ?, ?, ?)",
                    [
                        (
                            message_id,
                            recipient["email"].strip(),
                            recipient.get("name"),
                            recipient.get("recipient_type") or RECIPIENT_TO,
                        )
                        for recipient in recipients
                    ],
                )
                conn.executemany(
                    "INSERT INTO attachments (message_id, filename, mime_type, size, local_path) VALUES (?, ?, ?, ?, ?)",
                    [
                        (
                            message_id,
                            attachment.get("filename") or "attachment",
                            attachment.get("mime_type") or "application/octet-stream",
                            int(attachment.get("size") or 0),
                            attachment.get("local_path"),
                        )
                        for attachment in attachments or []
                    ],
                )
        except sqlite3.IntegrityError as exc:
            raise ValidationError(f"Unable to create message: {exc}") from exc
        except sqlite3.Error as exc:
            raise ExternalServiceError(f"Unable to create message: {exc}") from exc
        logger.debug("Created message %s for account %s", message_id, account_id)
        return message_id

    def delete_message(self, message_id):
        conn = self.conn
        try:
            with conn:
                conn.execute("DELETE FROM attachments WHERE message_id = ?", (int(message_id),))
                conn.execute("DELETE FROM recipients WHERE message_id = ?", (int(message_id),))
                cur = conn.execute("DELETE FROM messages WHERE id = ?", (int(message_id),))
        except sqlite3.Error as exc:
            raise ExternalServiceError(f"Unable to delete message {message_id}: {exc}") from exc
        if cur.rowcount == 0:
            raise NotFoundError(f"Message {message_id} not found.")

    @staticmethod
    def _search_clause(search):
        text = (search or "").strip().lower()
        if not text:
            return "", ()
        pattern = _like_pattern(text)
        clause = (
            " AND (PY_LOWER(COALESCE(m.subject, '')) LIKE ? ESCAPE '\\'"
            " OR PY_LOWER(COALESCE(m.sender_name, '')) LIKE ? ESCAPE '\\'"
            " OR PY_LOWER(m.sender_email) LIKE ? ESCAPE '\\'"
            " OR PY_LOWER(COALESCE(m.body_preview, m.body, '')) LIKE ? ESCAPE '\\')"
        )
        return clause, (pattern, pattern, pattern, pattern)

    def count_messages(self, account_id, search=None):
        clause, params = self._search_clause(search)
        try:
            row = self.conn.execute(
                f"SELECT COUNT(*) AS total FROM messages m WHERE m.account_id = ?{clause}",
                (int(account_id), *params),
            ).fetchone()
        except sqlite3.Error as exc:
            raise ExternalServiceError(f"Unable to count messages: {exc}") from exc
        return int(row["total"])

    @staticmethod
    def _row_to_summary(row):
        return Summary(
            id=int(row["id"]),
            sender_name=row["sender_name"] or "",
            sender_email=row["sender_email"] or "",
            subject=row["subject"] or "",
            body_preview_source=row["body_preview"] or row["body"] or "",
            received_at=row["received_at"] or "",
            is_read=bool(row["is_read"]),
            attachment_count=int(row["attachment_count"] or 0),
        )

    def list_messages(self, account_id, page, page_size, search=None):
        if not isinstance(page_size, int) or page_size < 1 or page_size > MAX_PAGE_SIZE:
            raise ValidationError(f"page size must be between 1 and {MAX_PAGE_SIZE}")
        page = page if isinstance(page, int) and page >= 1 else 1

        total_count = self.count_messages(account_id, search=search)
        total_pages = max(1, (total_count + page_size - 1) // page_size)
        clause, params = self._search_clause(search)
        try:
            rows = self.conn.execute(
                f"""
                SELECT {self._SUMMARY_SELECT}
                FROM messages m
                WHERE m.account_id = ?{clause}
                ORDER BY m.received_at DESC, m.id DESC
                LIMIT ? OFFSET ?
                """,
                (int(account_id), *params, page_size, (page - 1) * page_size),
            ).fetchall()
        except sqlite3.Error as exc:
            raise ExternalServiceError(f"Unable to list messages: {exc}") from exc

        items = tuple(self._row_to_summary(row) for row in rows)
        logger.debug(
            "Listed %s message(s) for account %s page %s/%s", len(items), account_id, page, total_pages
        )
        return ListPage(
            items=items,
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
        )

    def get_message(self, message_id):
        conn = self.conn
        try:
            row = conn.execute(
                f"SELECT {self._SUMMARY_SELECT}, m.importance FROM messages m WHERE m.id = ?",
                (int(message_id),),
            ).fetchone()
            if row is None:
                raise NotFoundError(f"Message {message_id} not found.")
            recipient_rows = conn.execute(
                "SELECT id, email, name, recipient_type FROM recipients WHERE message_id = ? ORDER BY id",
                (int(message_id),),
            ).fetchall()
            attachment_rows = conn.execute(
                "SELECT id, filename, size, mime_type FROM attachments WHERE message_id = ? ORDER BY id",
                (int(message_id),),
            ).fetchall()
        except sqlite3.Error as exc:
            raise ExternalServiceError(f"Unable to load message {message_id}: {exc}") from exc

        summary = self._row_to_summary(row)
        return FullMessage(
            id=summary.id,
            sender_name=summary.sender_name,
            sender_email=summary.sender_email,
            subject=summary.subject,
            body_preview_source=summary.body_preview_source,
            received_at=summary.received_at,
            is_read=summary.is_read,
            attachment_count=summary.attachment_count,
            body=row["body"] or "",
            importance=row["importance"] or IMPORTANCE_NORMAL,
            recipients=tuple(
                Recipient(id=int(r["id"]), email=r["email"], name=r["name"] or "", kind=r["recipient_type"])
                for r in recipient_rows
            ),
            attachments=tuple(
                Attachment(id=int(a["id"]), filename=a["filename"], size=int(a["size"] or 0), mime_type=a["mime_type"])
                for a in attachment_rows
            ),
        )


__all__ = ["MessageStore", "SqliteMessageStore"]
