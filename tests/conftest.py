"""
Shared fixtures: an in-memory stand-in for the IBM i and an app wired to it.
"""

import re
import threading

import pytest
from fastapi.testclient import TestClient

from app import create_app
from context import AppContext
from errors import QueryError

ADMIN_PASS = "testpass"
ADMIN_HEADERS = {"x-admin-password": ADMIN_PASS}
LIBRARY = "TESTLIB1"

_FROM_RE = re.compile(r"FROM\s+(\w+)\.(\w+)")
_INSERT_RE = re.compile(r"INSERT INTO \w+\.(\w+) \(([^)]*)\)")
_UPDATE_RE = re.compile(r"UPDATE \w+\.(\w+) SET (.*)")
_DELETE_RE = re.compile(r"DELETE FROM \w+\.(\w+)")


class FakeDatabase:
    """Answers the statements the gateways generate, keyed by primary key."""

    def __init__(self):
        self.statements: list[tuple[str, tuple]] = []
        self.tables: dict[str, dict] = {"EMPPF1": {}, "QCUSTCDT": {}}
        self.generic_rows = [{"COL1": "A"}, {"COL1": "B"}]
        self.user_rows: list[dict] = []
        self.spool_rows: list[dict] = []
        self.fail = False
        self.bigint_as_str: dict[str, bool] = {}
        self._lock = threading.Lock()

    def fetch_all(self, sql, params=(), *, bigint_as_str=False):
        with self._lock:
            self.statements.append((sql, tuple(params)))
            self.bigint_as_str[sql] = bigint_as_str
            if self.fail:
                raise QueryError()
            if "SYSDUMMY1" in sql:
                return [{"00001": 1}]
            if "USER_INFO" in sql:
                return list(self.user_rows)
            if "OUTPUT_QUEUE_ENTRIES" in sql:
                return list(self.spool_rows)
            table = _FROM_RE.search(sql).group(2)
            if table not in self.tables:
                return list(self.generic_rows)
            rows = self.tables[table]
            if "WHERE" in sql:
                row = rows.get(params[0])
                return [dict(row)] if row else []
            return [dict(rows[k]) for k in sorted(rows)][:100]

    def execute(self, sql, params=()):
        with self._lock:
            self.statements.append((sql, tuple(params)))
            if self.fail:
                raise QueryError()
            if sql.startswith("INSERT"):
                table, cols = _INSERT_RE.search(sql).groups()
                names = [c.strip() for c in cols.split(",")]
                rows = self.tables[table]
                if params[0] in rows:
                    raise QueryError()
                rows[params[0]] = dict(zip(names, params))
                return 1
            if sql.startswith("UPDATE"):
                table, rest = _UPDATE_RE.search(sql).groups()
                names = re.findall(r"(\w+) = \?", rest)
                rows = self.tables[table]
                key = params[-1]
                if key not in rows:
                    return 0
                rows[key].update(zip(names[:-1], params[:-1]))
                return 1
            if sql.startswith("DELETE"):
                table = _DELETE_RE.search(sql).group(1)
                return 0 if self.tables[table].pop(params[0], None) is None else 1
            raise AssertionError(f"Unexpected statement: {sql}")

    def writes(self) -> list[str]:
        return [
            sql
            for sql, _ in self.statements
            if sql.startswith(("INSERT", "UPDATE", "DELETE"))
        ]


@pytest.fixture()
def fake_db():
    return FakeDatabase()


@pytest.fixture()
def context(fake_db):
    return AppContext(
        db=fake_db,
        library=LIBRARY,
        db_user="tester",
        admin_password=ADMIN_PASS,
    )


@pytest.fixture()
def app(context):
    return create_app(context)


@pytest.fixture()
def client(app):
    return TestClient(app, raise_server_exceptions=False)
