"""
Pytest configuration and fixtures for DataForge DB2 tests.
"""
import dataclasses

import pytest

from dataforge_db2.database.connection import DB2Connection
from dataforge_db2.database.models import DB2ConnectionConfig
from dataforge_db2.database.schema import DB2Grammar


class FakeCursor:
    """DB-API cursor answering queries from the fake connection's canned results."""

    def __init__(self, connection):
        self.connection = connection
        self.description = None
        self._rows = []
        self.closed = False

    def execute(self, query, params=()):
        self.connection.executed.append((query, tuple(params)))
        for fragment, columns, rows in self.connection.results:
            if fragment in query:
                self.description = [(name, None, None, None, None, None, None) for name in columns]
                self._rows = list(rows)
                break
        return self

    def fetchall(self):
        return self._rows

    def close(self):
        self.closed = True


class FakeDBAPIConnection:
    """Records executed statements; select results are registered per query fragment."""

    def __init__(self):
        self.executed = []
        self.results = []
        self.closed = False

    def add_result(self, fragment, columns, rows):
        self.results.append((fragment, columns, rows))

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True

    @property
    def queries(self):
        return [query for query, _ in self.executed]


@pytest.fixture
def dbapi():
    """Fake DB-API connection."""
    return FakeDBAPIConnection()


@pytest.fixture
def ibmi_config():
    """IBM i ODBC configuration with a default schema."""
    return DB2ConnectionConfig.from_dict({
        "driver": "db2_ibmi_odbc",
        "driver_name": "IBM i Access ODBC Driver",
        "host": "pub400.com",
        "database": "*LOCAL",
        "username": "BOB",
        "password": "secret",
        "schema": "app",
    })


@pytest.fixture
def connection(dbapi, ibmi_config):
    """DB2Connection over the fake DB-API connection."""
    return DB2Connection(dbapi, ibmi_config)


@pytest.fixture
def connection_factory(ibmi_config):
    """Build a (DB2Connection, FakeDBAPIConnection) pair for another driver."""
    def factory(driver, **overrides):
        config = dataclasses.replace(ibmi_config, driver=driver, **overrides)
        dbapi = FakeDBAPIConnection()
        return DB2Connection(dbapi, config), dbapi
    return factory


@pytest.fixture
def grammar():
    return DB2Grammar()
