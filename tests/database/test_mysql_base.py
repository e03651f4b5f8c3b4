from __future__ import annotations

import mysql.connector
import pytest
from mysql.connector import errorcode

from dayflow.common.datetime_utils import DateRange
from dayflow.core.exceptions import DataAccessError, ValidationError
from dayflow.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from dayflow.database.mysql_base import db_cursor, range_clause, where_sql


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, fail_connect=False):
        self.conn = FakeConn()
        self.fail_connect = fail_connect

    def connect(self):
        if self.fail_connect:
            raise mysql.connector.InterfaceError(msg="no route to host", errno=2003)
        return self.conn


def test_commit_and_close_on_success():
    factory = FakeConnFactory()
    with db_cursor(factory) as (_, cur):
        assert cur is factory.conn.cursor_obj

    assert factory.conn.committed
    assert factory.conn.closed
    assert factory.conn.cursor_obj.closed


def test_duplicate_key_becomes_validation_error():
    factory = FakeConnFactory()
    with pytest.raises(ValidationError):
        with db_cursor(factory):
            raise mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)

    assert factory.conn.rolled_back
    assert not factory.conn.committed


def test_other_driver_errors_become_data_access_error():
    factory = FakeConnFactory()
    with pytest.raises(DataAccessError):
        with db_cursor(factory):
            raise mysql.connector.OperationalError(msg="Lost connection", errno=2013)
    assert factory.conn.closed


def test_connect_failure_becomes_data_access_error():
    with pytest.raises(DataAccessError):
        with db_cursor(FakeConnFactory(fail_connect=True)):
            pass


def test_range_clause_is_inclusive_between():
    clauses, params = ["a.user_id=%s"], [7]
    range_clause("a.work_date", DateRange("2025-03-01", "2025-03-31"), clauses, params)
    range_clause("a.created_at", None, clauses, params)

    assert where_sql(clauses) == "WHERE a.user_id=%s AND a.work_date BETWEEN %s AND %s"
    assert params == [7, "2025-03-01", "2025-03-31"]
    assert where_sql([]) == ""


def test_sql_splitter_keeps_quoted_semicolons():
    sql = _strip_create_db_and_use(
        "CREATE DATABASE IF NOT EXISTS dayflow;\nUSE dayflow;\n"
        "INSERT INTO t VALUES ('a;b');\nSELECT 1"
    )

    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]
