"""
Pytest configuration and fixtures for HSQLDB adapter tests.
"""
import pytest

from hsqldb_adapter.config import AdapterConfig
from hsqldb_adapter.database.dialects import HSQLDBDialect


class FakeConnection:
    """
    Recording stand-in for the connection bridge.

    Every statement goes to ``executed``; canned results are looked up by
    exact SQL text in ``results`` (row count 0 otherwise).
    """

    def __init__(self):
        self.executed = []
        self.results = {}
        self.identity = None
        self.table_names = []

    def execute(self, sql, name=None):
        self.executed.append(sql)
        return self.results.get(sql, 0)

    def select_value(self, sql, name=None):
        self.executed.append(sql)
        return self.identity

    def tables(self):
        return list(self.table_names)


@pytest.fixture
def fake_conn():
    """A fresh recording connection."""
    return FakeConnection()


@pytest.fixture
def dialect(fake_conn):
    """HSQLDB dialect with default settings."""
    return HSQLDBDialect(fake_conn)


@pytest.fixture
def make_dialect(fake_conn):
    """Build an HSQLDB dialect with custom settings."""
    def _make(**settings):
        return HSQLDBDialect(fake_conn, AdapterConfig(**settings))
    return _make
