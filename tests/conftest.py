"""
Test configuration and fixtures
"""

from unittest.mock import MagicMock, patch

import pytest


class FakeDatabase:
    """Stands in for a pooled psycopg2 connection and records what was executed."""

    def __init__(self):
        self.conn = MagicMock()
        self.cursor = self.conn.cursor.return_value.__enter__.return_value
        self.cursor.fetchall.return_value = []
        self.cursor.fetchone.return_value = None
        self.release = None

    def returns_rows(self, rows):
        self.cursor.fetchall.return_value = rows

    def returns_row(self, row):
        self.cursor.fetchone.return_value = row

    def returns_scalar(self, value):
        self.cursor.fetchone.return_value = (value,)

    @property
    def sql(self) -> str:
        """The last executed statement with whitespace collapsed."""
        return " ".join(self.cursor.execute.call_args[0][0].split())

    @property
    def params(self) -> tuple:
        return self.cursor.execute.call_args[0][1]


@pytest.fixture
def db():
    """Patch the connection helpers used by every repository."""
    fake = FakeDatabase()
    with patch("repositories.base.get_connection", return_value=fake.conn), \
            patch("repositories.base.release_connection") as release:
        fake.release = release
        yield fake


def make_row(repo, **values):
    """Build a row tuple in the repository's column order; unset columns are None."""
    return tuple(values.get(column) for column in repo.columns)
