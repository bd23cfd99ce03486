from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def date_window(column: str, start: date, end: date, *, branch: Optional[str] = None) -> tuple[str, list[object]]:
    """WHERE fragment for an inclusive date window and optional maktab."""

    clauses = [f"{column} BETWEEN %s AND %s"]
    params: list[object] = [start, end]
    if branch is not None:
        clauses.append("maktab=%s")
        params.append(branch)
    return " AND ".join(clauses), params
