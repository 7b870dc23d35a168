"""
repositories/base.py
--------------------
Shared plumbing for every entity repository: connection handling,
row mapping, parameter validation and the generic primary-key lookups.

Every query is built from fixed SQL text; values are always passed to
psycopg2 as bound parameters.

Each call holds one pooled connection for the length of its query. The
pool does not queue: once DB_POOL_MAX connections are borrowed, the next
call fails with psycopg2.pool.PoolError instead of waiting, so size
DB_POOL_MAX to the number of threads that query at once.
"""

from enum import Enum
from typing import Any, Optional, Sequence

import psycopg2

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)


class InvalidQueryError(ValueError):
    """Raised when a repository call is made with a missing or invalid parameter."""

    def __init__(self, param: str, reason: str = "is required"):
        self.param = param
        self.reason = reason
        super().__init__(f"Invalid query parameter '{param}': {reason}")


# ── VALIDATION ────────────────────────────────────────────

def require(value: Any, name: str) -> Any:
    """Fail fast when a required parameter is missing."""
    if value is None:
        raise InvalidQueryError(name)
    return value


def require_text(value: Optional[str], name: str) -> str:
    """A required string parameter; blank strings are rejected too."""
    if value is None or not str(value).strip():
        raise InvalidQueryError(name, "must be a non-empty string")
    return value


def require_enum(value: Any, enum_cls: type[Enum], name: str) -> str:
    """
    Validate an enum parameter and return the value stored in the database.

    Accepts either an enum member or its name. A member of some other enum
    is rejected even when its name matches.
    """
    if value is None:
        raise InvalidQueryError(name)
    if isinstance(value, enum_cls):
        return value.value
    if isinstance(value, Enum):
        raise InvalidQueryError(name, f"must be a {enum_cls.__name__}")
    try:
        return enum_cls(value).value
    except ValueError:
        raise InvalidQueryError(
            name, f"must be one of {[m.value for m in enum_cls]}"
        ) from None


def require_positive(value: Optional[int], name: str) -> int:
    if value is None:
        raise InvalidQueryError(name)
    if value <= 0:
        raise InvalidQueryError(name, "must be greater than zero")
    return value


def require_non_negative(value: Optional[int], name: str) -> int:
    if value is None:
        raise InvalidQueryError(name)
    if value < 0:
        raise InvalidQueryError(name, "must not be negative")
    return value


def require_range(start: Any, end: Any, start_name: str = "start", end_name: str = "end") -> tuple:
    """Both bounds present and start <= end."""
    require(start, start_name)
    require(end, end_name)
    if start > end:
        raise InvalidQueryError(end_name, f"must not be before {start_name}")
    return start, end


def contains_pattern(text: Optional[str], name: str) -> str:
    """
    Build an unanchored ILIKE pattern for a substring match.

    LIKE wildcards in the user's text are escaped so they match literally.
    """
    require(text, name)
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


# ── BASE REPOSITORY ───────────────────────────────────────

class BaseRepository:
    """
    Base class for read-only entity repositories.

    Subclasses declare ``table``, ``model`` and ``columns``; every column
    name must match a field of the model dataclass.
    """

    table: str = ""
    model: type = object
    columns: tuple[str, ...] = ()

    def _row_to_model(self, row: tuple):
        """Convert a database row tuple to the repository's domain object."""
        return self.model(**dict(zip(self.columns, row)))

    def _cols(self, alias: Optional[str] = None) -> str:
        """Column list for SELECT, optionally qualified with a table alias."""
        if alias:
            return ", ".join(f"{alias}.{c}" for c in self.columns)
        return ", ".join(self.columns)

    def _select(self, where: str = "", order_by: str = "id ASC", limit: bool = False) -> str:
        """Build ``SELECT <columns> FROM <table> [WHERE ...] ORDER BY ...``."""
        sql = f"SELECT {self._cols()} FROM {self.table}"
        if where:
            sql += f" WHERE {where}"
        if order_by:
            sql += f" ORDER BY {order_by}"
        if limit:
            sql += " LIMIT %s"
        return sql + ";"

    # ── QUERY EXECUTION ───────────────────────────────────

    def _execute(self, operation: str, sql: str, params: Sequence, fetch: str):
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, tuple(params))
                if fetch == "all":
                    result = cur.fetchall()
                    logger.debug(f"{self.__class__.__name__}.{operation} -> {len(result)} rows")
                else:
                    result = cur.fetchone()
                    logger.debug(f"{self.__class__.__name__}.{operation} -> {'1' if result else '0'} row")
                return result
        except psycopg2.Error as e:
            logger.error(f"{self.__class__.__name__}.{operation} failed: {e}")
            raise
        finally:
            release_connection(conn)

    def _fetch_all(self, operation: str, sql: str, params: Sequence = ()) -> list:
        """Run a SELECT and map every row to the repository's model."""
        rows = self._execute(operation, sql, params, "all")
        return [self._row_to_model(r) for r in rows]

    def _fetch_one(self, operation: str, sql: str, params: Sequence = ()):
        """Run a SELECT expected to match at most one row."""
        row = self._execute(operation, sql, params, "one")
        return self._row_to_model(row) if row else None

    def _fetch_scalar(self, operation: str, sql: str, params: Sequence = ()) -> Any:
        """Run an aggregate query and return its single value."""
        row = self._execute(operation, sql, params, "one")
        return row[0] if row else None

    def _fetch_rows(self, operation: str, sql: str, params: Sequence = ()) -> list[tuple]:
        """Run a query and return the raw row tuples (for summaries)."""
        return self._execute(operation, sql, params, "all")

    def _count(self, operation: str, where: str = "", params: Sequence = ()) -> int:
        sql = f"SELECT COUNT(*) FROM {self.table}"
        if where:
            sql += f" WHERE {where}"
        return int(self._fetch_scalar(operation, sql + ";", params) or 0)

    def _exists(self, operation: str, where: str, params: Sequence = ()) -> bool:
        sql = f"SELECT EXISTS (SELECT 1 FROM {self.table} WHERE {where});"
        return bool(self._fetch_scalar(operation, sql, params))

    # ── PRIMARY KEY ───────────────────────────────────────

    def find_by_id(self, entity_id: int):
        """Fetch a single record by primary key, or None."""
        require(entity_id, "entity_id")
        return self._fetch_one("find_by_id", self._select("id = %s", order_by=""), (entity_id,))

    def find_all(self) -> list:
        """All records in storage (id) order."""
        return self._fetch_all("find_all", self._select())

    def count(self) -> int:
        return self._count("count")

    def exists_by_id(self, entity_id: int) -> bool:
        require(entity_id, "entity_id")
        return self._exists("exists_by_id", "id = %s", (entity_id,))
