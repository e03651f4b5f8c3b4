from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..common.datetime_utils import DateRange
from ..core.exceptions import DataAccessError, ValidationError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, rollback on error.

    Driver errors are translated: unique/check violations become
    ``ValidationError``, everything else ``DataAccessError``.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.exception("Could not connect to the data store")
        raise DataAccessError("Data store is unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise ValidationError("Record already exists") from e
        raise ValidationError("Record violates a data constraint") from e
    except mysql.connector.Error as e:
        conn.rollback()
        if e.errno == errorcode.ER_CHECK_CONSTRAINT_VIOLATED:
            raise ValidationError("Record violates a data constraint") from e
        logger.exception("Data store operation failed")
        raise DataAccessError("Data store operation failed") from e
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


def range_clause(column: str, date_range: Optional[DateRange], clauses: list[str], params: list[object]) -> None:
    """Append an inclusive BETWEEN filter when a range is given."""
    if date_range is None:
        return
    clauses.append(f"{column} BETWEEN %s AND %s")
    params.extend([date_range.start, date_range.end])


def where_sql(clauses: list[str]) -> str:
    return ("WHERE " + " AND ".join(clauses)) if clauses else ""
