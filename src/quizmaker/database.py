"""
quizmaker/database.py — SQLite persistence gateway
==================================================
Stores confirmed quizzes and feedback reports so that shareable quiz links
keep working across sessions and the Admin Dashboard can list every quiz.

Design decisions
----------------
- **One table per collection** — ``quizzes`` and ``feedback``.  Quiz items
  are stored as a JSON TEXT column on the quiz row rather than a child
  table; a quiz is always read and written as a whole.
- **Store-assigned identity** — ids are random 20-character alphanumeric
  strings generated here, never by the caller.  Feedback timestamps come
  from SQLite itself (``strftime`` column default).
- **WAL journal mode** — concurrent Streamlit sessions read while another
  writes.  Updates are last-write-wins; there is no optimistic check.
- **Failures surface, never retry** — every ``sqlite3.Error`` is logged and
  re-raised as ``PersistenceError`` for the UI to show.

Database file location
----------------------
``quizmaker_data.db`` in the workspace root unless ``QUIZMAKER_DB_PATH`` is
set.  It is excluded from git via .gitignore.

Public API
----------
  QuizStore(db_path)
    init_db()                         create tables if they don't exist
    create_quiz(draft)                → quiz id
    list_quizzes()                    → list[Quiz]
    get_quiz(quiz_id)                 → Quiz | None
    delete_quiz(quiz_id)
    increment_response_count(quiz_id)
    create_feedback(report)           → feedback id
    list_feedback()                   → list[FeedbackReport]  (newest first)

Consumers
---------
  streamlit_app.py        — every view
  authoring.QuizAuthoring — confirm() receives create_quiz as a callable
  session.QuizSession     — submit() receives increment_response_count
"""

from __future__ import annotations

import json
import logging
import secrets
import sqlite3
import string
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from quizmaker.errors import PersistenceError
from quizmaker.models import (
    FEEDBACK_STATUS_NEW,
    FeedbackReport,
    Quiz,
    QuizDraft,
    QuizItem,
)

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH   = 20


def new_id() -> str:
    """Random document id in the 20-character alphanumeric format."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T09:30:00.000Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


_SCHEMA = """
CREATE TABLE IF NOT EXISTS quizzes (
    id              TEXT    PRIMARY KEY,
    title           TEXT    NOT NULL,
    description     TEXT    NOT NULL DEFAULT '',
    creator         TEXT    NOT NULL DEFAULT '',
    items_json      TEXT    NOT NULL,
    created_at      TEXT    NOT NULL,
    response_count  INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS feedback (
    id              TEXT    PRIMARY KEY,
    reporter_name   TEXT    NOT NULL DEFAULT '',
    reporter_email  TEXT    NOT NULL DEFAULT '',
    type            TEXT    NOT NULL,
    content         TEXT    NOT NULL,
    created_at      TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    status          TEXT    NOT NULL DEFAULT 'new'
);
"""


class QuizStore:
    """Create / read / delete gateway over one SQLite file."""

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)

    def _get_conn(self) -> sqlite3.Connection:
        """Return a connection with row_factory set."""
        conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _fail(self, action: str, exc: Exception) -> PersistenceError:
        logger.exception("Database error while trying to %s", action)
        return PersistenceError(f"Could not {action}. Please try again later. ({exc})")

    def init_db(self) -> None:
        """Create tables if they don't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._get_conn()
            try:
                conn.executescript(_SCHEMA)
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise self._fail("initialise the database", exc) from exc

    # ─── Quizzes ─────────────────────────────────────────────────────────────

    def create_quiz(self, draft: QuizDraft) -> str:
        """Persist *draft* and return the assigned quiz id."""
        quiz_id = new_id()
        items_json = json.dumps([i.model_dump() for i in draft.items], ensure_ascii=False)
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO quizzes (id, title, description, creator, items_json, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (quiz_id, draft.title, draft.description, draft.creator,
                     items_json, utc_now_iso()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise self._fail("save the quiz", exc) from exc
        logger.info("Created quiz %s (%d items) by %r", quiz_id, len(draft.items), draft.creator)
        return quiz_id

    def list_quizzes(self) -> list[Quiz]:
        """Fetch every quiz currently in the store."""
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute("SELECT * FROM quizzes").fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise self._fail("load quizzes", exc) from exc

        quizzes: list[Quiz] = []
        for row in rows:
            quiz = _quiz_from_row(row)
            if quiz is not None:
                quizzes.append(quiz)
        return quizzes

    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        """Fetch a single quiz by id. Returns None when absent."""
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT * FROM quizzes WHERE id = ?", (quiz_id,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise self._fail("load the quiz", exc) from exc
        return _quiz_from_row(row) if row is not None else None

    def delete_quiz(self, quiz_id: str) -> None:
        """Delete a quiz. Deleting an id that no longer exists is a no-op."""
        try:
            conn = self._get_conn()
            try:
                conn.execute("DELETE FROM quizzes WHERE id = ?", (quiz_id,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise self._fail("delete the quiz", exc) from exc
        logger.info("Deleted quiz %s", quiz_id)

    def increment_response_count(self, quiz_id: str) -> None:
        """Atomically add one to the quiz's response counter."""
        try:
            conn = self._get_conn()
            try:
                cur = conn.execute(
                    "UPDATE quizzes SET response_count = response_count + 1 WHERE id = ?",
                    (quiz_id,),
                )
                conn.commit()
                updated = cur.rowcount
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise self._fail("record your response", exc) from exc
        if updated == 0:
            logger.warning("Response count increment for unknown quiz %s", quiz_id)
            raise PersistenceError("Could not record your response: the quiz no longer exists.")

    # ─── Feedback ────────────────────────────────────────────────────────────

    def create_feedback(self, report: FeedbackReport) -> str:
        """Append a feedback report. ``created_at`` and ``status`` are set here."""
        feedback_id = new_id()
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO feedback (id, reporter_name, reporter_email, type, content, status)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (feedback_id, report.reporter_name, report.reporter_email,
                     report.type.value, report.content, FEEDBACK_STATUS_NEW),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise self._fail("send your report", exc) from exc
        logger.info("Feedback %s (%s) from %s", feedback_id, report.type.value, report.reporter_email)
        return feedback_id

    def list_feedback(self) -> list[FeedbackReport]:
        """Fetch every feedback report, newest first."""
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute(
                    "SELECT * FROM feedback ORDER BY created_at DESC, rowid DESC"
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise self._fail("load feedback", exc) from exc
        reports: list[FeedbackReport] = []
        for row in rows:
            report = _feedback_from_row(row)
            if report is not None:
                reports.append(report)
        return reports


def _quiz_from_row(row: sqlite3.Row) -> Optional[Quiz]:
    """Build a Quiz from a row; rows that no longer validate are skipped."""
    try:
        return Quiz(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            creator=row["creator"],
            created_at=row["created_at"],
            items=[QuizItem.model_validate(i) for i in json.loads(row["items_json"])],
            response_count=row["response_count"],
        )
    except (ValueError, ValidationError) as exc:
        logger.warning("Skipping unreadable quiz row %s: %s", row["id"], exc)
        return None


def _feedback_from_row(row: sqlite3.Row) -> Optional[FeedbackReport]:
    """Build a FeedbackReport from a row; rows that no longer validate are skipped."""
    try:
        return FeedbackReport.model_validate(dict(row))
    except ValidationError as exc:
        logger.warning("Skipping unreadable feedback row %s: %s", row["id"], exc)
        return None
