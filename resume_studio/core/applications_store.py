from __future__ import annotations

import os
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from resume_studio.core.config import settings

APPLICATION_STATUSES = ("Saved", "Applied", "Interviewing", "Offered", "Rejected")

_conn: sqlite3.Connection | None = None
_conn_lock = threading.Lock()

_COLUMNS = "id, company, role, status, date_applied, notes, job_url, match_score"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _get_connection() -> sqlite3.Connection:
    global _conn
    with _conn_lock:
        if _conn is not None:
            return _conn

        db_path = settings.applications_db_path
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        _conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        _conn.execute("PRAGMA journal_mode=WAL;")
        _conn.execute("PRAGMA synchronous=NORMAL;")
        _conn.execute("PRAGMA busy_timeout=5000;")
        _conn.execute(
            """
            CREATE TABLE IF NOT EXISTS job_applications (
                id TEXT PRIMARY KEY,
                company TEXT NOT NULL,
                role TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'Saved',
                date_applied TEXT NOT NULL,
                notes TEXT,
                job_url TEXT,
                match_score REAL
            );
            """
        )
        _conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_job_applications_date
            ON job_applications (date_applied);
            """
        )
        return _conn


def init_db() -> None:
    _get_connection()


def _row_to_dict(row: tuple) -> dict[str, Any]:
    return {
        "id": row[0],
        "company": row[1],
        "role": row[2],
        "status": row[3],
        "date_applied": datetime.fromisoformat(row[4]),
        "notes": row[5],
        "job_url": row[6],
        "match_score": row[7],
    }


def _validate_status(status: str) -> None:
    if status not in APPLICATION_STATUSES:
        raise ValueError(f"status must be one of: {', '.join(APPLICATION_STATUSES)}")


def create_application(
    *,
    company: str,
    role: str,
    status: str = "Saved",
    date_applied: datetime | None = None,
    notes: str | None = None,
    job_url: str | None = None,
    match_score: float | None = None,
) -> dict[str, Any]:
    _validate_status(status)
    conn = _get_connection()
    application_id = uuid.uuid4().hex
    applied_at = date_applied or _utc_now()
    if applied_at.tzinfo is None:
        applied_at = applied_at.replace(tzinfo=timezone.utc)
    applied_at = applied_at.astimezone(timezone.utc)

    with _conn_lock:
        conn.execute(
            f"""
            INSERT INTO job_applications ({_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (application_id, company, role, status, applied_at.isoformat(), notes, job_url, match_score),
        )
        conn.commit()
    return get_application(application_id) or {}


def get_application(application_id: str) -> dict[str, Any] | None:
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute(f"SELECT {_COLUMNS} FROM job_applications WHERE id = ?", (application_id,))
        row = cur.fetchone()
    return _row_to_dict(row) if row else None


def list_applications() -> list[dict[str, Any]]:
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute(f"SELECT {_COLUMNS} FROM job_applications ORDER BY date_applied DESC")
        rows = cur.fetchall()
    return [_row_to_dict(row) for row in rows]


def update_application_status(application_id: str, status: str) -> dict[str, Any] | None:
    _validate_status(status)
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute(
            "UPDATE job_applications SET status = ? WHERE id = ?",
            (status, application_id),
        )
        conn.commit()
        updated = cur.rowcount > 0
    return get_application(application_id) if updated else None


def delete_application(application_id: str) -> bool:
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute("DELETE FROM job_applications WHERE id = ?", (application_id,))
        conn.commit()
        return cur.rowcount > 0


def clear_applications() -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute("DELETE FROM job_applications")
        conn.commit()
