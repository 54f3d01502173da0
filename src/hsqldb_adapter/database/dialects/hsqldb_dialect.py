"""
HSQLDB Dialect - HyperSQL-specific SQL operations

Covers the places where HSQLDB departs from the generic adapter:
- Type names, and limits the JDBC driver reports incorrectly
- Quoted column defaults, hex binary literals, microsecond timestamps
- ALTER TABLE ... ALTER COLUMN syntax
- IDENTITY() retrieval after inserts
- SCRIPT based structure dumps, SHUTDOWN, schema recreation
"""

import re
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, List, Optional, Sequence, Tuple, Union

from ...config import AdapterConfig
from ...constants import STATEMENT_SEPARATOR, TIMEZONE_UTC
from ...utils.sql_statements import is_insert, is_select, split_dump, strip_statement_end
from .base import (
    NO_DEFAULT,
    ColumnMetadata,
    DatabaseDialect,
    NativeType,
    build_column,
    generic_extract_limit,
)
from .values import ValueKind, classify_value

import logging
logger = logging.getLogger(__name__)


NATIVE_DATABASE_TYPES = MappingProxyType({
    "primary_key": NativeType("integer GENERATED BY DEFAULT AS IDENTITY(START WITH 0) PRIMARY KEY"),
    "string": NativeType("varchar", 255),
    "text": NativeType("clob"),
    "binary": NativeType("blob"),
    "boolean": NativeType("boolean"),
    "bit": NativeType("bit"),  # stored as 0/1, translates true/false
    "integer": NativeType("integer", 4),
    "decimal": NativeType("decimal"),
    "numeric": NativeType("numeric"),
    "tinyint": NativeType("tinyint", 1),
    "smallint": NativeType("smallint", 2),
    "bigint": NativeType("bigint", 8),
    "float": NativeType("float"),
    "double": NativeType("double", 8),
    "real": NativeType("real", 8),
    "date": NativeType("date"),
    "time": NativeType("time"),
    "timestamp": NativeType("timestamp"),
    "datetime": NativeType("timestamp"),
    "other": NativeType("other"),
    "character": NativeType("character"),
    "varchar_ignorecase": NativeType("varchar_ignorecase"),
})

# Driver-reported type prefix -> corrected limit, first match wins.
# None clears the limit, _KEEP leaves the generic limit alone.
_KEEP = object()
_LIMIT_FIXES: Tuple[Tuple[str, Any], ...] = (
    ("tinyint", 1),
    ("smallint", 2),
    ("bigint", 8),
    ("double", 8),
    ("real", 8),
    ("integer", 4),
    ("float", 8),
    ("decimal", _KEEP),
    ("datetime", None),
    ("timestamp", None),
    ("time", None),
    ("date", None),
)

# HSQLDB reports LONGVARCHAR(0) for unbounded text
_ZERO_LENGTH = re.compile(r"\(0\)$")

_QUOTED_DEFAULT = re.compile(r"^'(.*)'$", re.DOTALL)

# Catalog tables HSQLDB exposes next to user tables
SYSTEM_TABLE_PATTERN = re.compile(r"^system_", re.IGNORECASE)

# SCRIPT output that only recreates the bootstrap user and schema
DUMP_NOISE_PATTERNS = (
    re.compile(r"CREATE USER SA PASSWORD DIGEST .*?", re.IGNORECASE),
    re.compile(r"CREATE SCHEMA PUBLIC AUTHORIZATION DBA", re.IGNORECASE),
    re.compile(r"GRANT DBA TO SA", re.IGNORECASE),
)

_SELECT_PREFIX = re.compile(r"^select", re.IGNORECASE)


class HSQLDBDialect(DatabaseDialect):
    """Dialect for HSQLDB (HyperSQL) databases."""

    NATIVE_DATABASE_TYPES = NATIVE_DATABASE_TYPES

    COLUMNS_SQL = """
        SELECT c.COLUMN_NAME, c.TYPE_NAME, c.COLUMN_SIZE, c.DECIMAL_DIGITS,
               c.COLUMN_DEF, c.IS_NULLABLE,
               CASE WHEN pk.COLUMN_NAME IS NULL THEN 0 ELSE 1 END AS IS_PRIMARY
        FROM INFORMATION_SCHEMA.SYSTEM_COLUMNS c
        LEFT JOIN INFORMATION_SCHEMA.SYSTEM_PRIMARYKEYS pk
          ON pk.TABLE_SCHEM = c.TABLE_SCHEM
         AND pk.TABLE_NAME = c.TABLE_NAME
         AND pk.COLUMN_NAME = c.COLUMN_NAME
        WHERE c.TABLE_NAME = {table}
        ORDER BY c.ORDINAL_POSITION
    """

    def __init__(self, connection: Any, config: Optional[AdapterConfig] = None):
        super().__init__(connection, config)
        # Feature selection happens once, here
        self._limit_offset = (
            self._legacy_limit_offset if self.config.legacy_limit_offset
            else self._standard_limit_offset
        )
        self._bare_integer = not self.config.alternate_engine

    @property
    def adapter_name(self) -> str:
        return "HSQLDB"

    # ==================== Column Normalization ====================

    def extract_limit(self, sql_type: str) -> Tuple[str, Optional[int]]:
        """
        Normalize a driver-reported type and correct its limit.

        The HSQLDB JDBC driver reports wrong sizes for several numeric and
        temporal types; the fixed table below takes precedence.
        """
        normalized, limit = generic_extract_limit(sql_type)
        for prefix, fixed in _LIMIT_FIXES:
            if normalized.startswith(prefix):
                if fixed is not _KEEP:
                    limit = fixed
                return prefix, limit

        if _ZERO_LENGTH.search(sql_type):
            limit = None
        return normalized, limit

    def default_value(self, value: Optional[str]) -> Optional[str]:
        """Strip the single quotes JDBC leaves around column defaults."""
        if value is None:
            return None
        match = _QUOTED_DEFAULT.match(value)
        return match.group(1) if match else value

    def _load_columns(self, table_name: str) -> List[ColumnMetadata]:
        """Read column metadata from INFORMATION_SCHEMA.SYSTEM_COLUMNS."""
        table = f"'{self.quote_string(str(table_name).upper())}'"
        rows = self.execute(self.COLUMNS_SQL.format(table=table), "SCHEMA")

        columns = []
        for row in rows:
            sql_type = row["TYPE_NAME"]
            if row.get("COLUMN_SIZE") is not None:
                digits = row.get("DECIMAL_DIGITS")
                size = f"{row['COLUMN_SIZE']}"
                if digits is not None and sql_type.upper() in ("DECIMAL", "NUMERIC"):
                    size = f"{size},{digits}"
                sql_type = f"{sql_type}({size})"

            columns.append(build_column(
                name=row["COLUMN_NAME"],
                sql_type=sql_type,
                default=row.get("COLUMN_DEF"),
                null=(row.get("IS_NULLABLE") == "YES"),
                primary=bool(row.get("IS_PRIMARY")),
                extract_limit=self.extract_limit,
                default_value=self.default_value,
            ))
        return columns

    # ==================== Value Quoting ====================

    def quote(self, value: Any, column: Optional[ColumnMetadata] = None) -> str:
        """Render a value as an HSQLDB literal, using the column for context."""
        kind = classify_value(value)
        column_type = column.type if column is not None else None

        if kind is ValueKind.PRE_QUOTED:
            return value.quoted_id
        if kind is ValueKind.RAW_LITERAL:
            return value

        if kind is ValueKind.TEXT:
            if column_type == "binary":
                return self._hex_literal(value.encode(self.config.binary_encoding))
            if column_type == "integer" or (
                column is not None and column.primary and column.python_type is not str
            ):
                return str(int(value))
            return f"'{self.quote_string(value)}'"

        if kind is ValueKind.BINARY:
            return self._hex_literal(bytes(value))
        if kind is ValueKind.TIME:
            return f"'{value.strftime('%H:%M:%S')}'"
        if kind is ValueKind.TIMESTAMP:
            if column_type == "time":
                return f"'{value.strftime('%H:%M:%S')}'"
            return f"'{self.quoted_date(value)}'"

        return super().quote(value, column)

    def quoted_date(self, value) -> str:
        """Timestamps carry six-digit microseconds in the configured zone."""
        if isinstance(value, datetime):
            value = self._in_default_timezone(value)
            return f"{value.strftime('%Y-%m-%d %H:%M:%S')}.{value.microsecond:06d}"
        return super().quoted_date(value)

    def _in_default_timezone(self, value: datetime) -> datetime:
        # Naive values are taken to be in the configured zone already
        if value.tzinfo is None:
            return value
        if self.config.default_timezone == TIMEZONE_UTC:
            return value.astimezone(timezone.utc)
        return value.astimezone()

    @staticmethod
    def _hex_literal(data: bytes) -> str:
        return f"X'{data.hex().upper()}'"

    def quote_column_name(self, name: Any) -> str:
        """Hyphenated names must be quoted; HSQLDB folds them to upper case."""
        name = str(name)
        if "-" in name:
            return f'"{name.upper()}"'
        return name

    # ==================== Type Rendering ====================

    def type_to_sql(
        self,
        type: str,
        limit: Optional[int] = None,
        precision: Optional[int] = None,
        scale: Optional[int] = None
    ) -> str:
        """HSQLDB's INTEGER has a fixed width, so an explicit limit is dropped."""
        if self._bare_integer and str(type) == "integer" and limit is not None:
            return "integer"
        return super().type_to_sql(type, limit, precision, scale)

    def add_limit_offset(self, sql: str, limit: Optional[int] = None,
                         offset: Optional[int] = None) -> str:
        """Apply LIMIT/OFFSET to a SELECT statement; other statements pass through."""
        return self._limit_offset(sql, limit, offset)

    @staticmethod
    def _legacy_limit_offset(sql: str, limit: Optional[int], offset: Optional[int]) -> str:
        # HSQLDB 1.8: SELECT LIMIT <offset> <limit> ... (0 = no limit)
        if not _SELECT_PREFIX.match(sql):
            return sql
        offset = offset or 0
        if limit is not None:
            return f"SELECT LIMIT {offset} {limit} {sql[7:]}"
        if offset > 0:
            return f"SELECT LIMIT {offset} 0 {sql[7:]}"
        return sql

    @staticmethod
    def _standard_limit_offset(sql: str, limit: Optional[int], offset: Optional[int]) -> str:
        if not is_select(sql):
            return sql
        if limit is None and not offset:
            return sql
        sql = strip_statement_end(sql)
        if limit is not None:
            sql = f"{sql} LIMIT {limit}"
        if offset:
            sql = f"{sql} OFFSET {offset}" if limit is not None else f"{sql} OFFSET {offset} ROWS"
        return sql

    # ==================== Execution ====================

    def _execute(self, sql: str, name: Optional[str] = None) -> Any:
        result = super()._execute(sql, name)
        return self.last_insert_id() if is_insert(sql) else result

    def last_insert_id(self) -> int:
        """Last identity value generated in this session (0 when none)."""
        identity = self.select_value("CALL IDENTITY()")
        return int(0 if identity is None else identity)

    # ==================== Schema Statements ====================

    def add_column(
        self,
        table_name: str,
        column_name: str,
        type: str,
        limit: Optional[int] = None,
        precision: Optional[int] = None,
        scale: Optional[int] = None,
        default: Any = NO_DEFAULT,
        null: Optional[bool] = None
    ) -> Any:
        sql = (
            f"ALTER TABLE {self.quote_table_name(table_name)} "
            f"ADD {self.quote_column_name(column_name)} "
            f"{self.type_to_sql(type, limit, precision, scale)}"
        )
        sql = self.add_column_options(sql, default=default, null=null)
        self.invalidate_columns(table_name)
        return self.execute(sql)

    def change_column(self, table_name: str, column_name: str, type: str,
                      limit: Optional[int] = None) -> Any:
        self.invalidate_columns(table_name)
        return self.execute(
            f"ALTER TABLE {table_name} ALTER COLUMN {column_name} {self.type_to_sql(type, limit)}"
        )

    def change_column_default(self, table_name: str, column_name: str, default: Any) -> Any:
        self.invalidate_columns(table_name)
        return self.execute(
            f"ALTER TABLE {table_name} ALTER COLUMN {column_name} SET DEFAULT {self.quote(default)}"
        )

    def rename_column(self, table_name: str, column_name: str, new_column_name: str) -> Any:
        self.invalidate_columns(table_name)
        return self.execute(
            f"ALTER TABLE {table_name} ALTER COLUMN {column_name} RENAME TO {new_column_name}"
        )

    def rename_table(self, name: str, new_name: str) -> Any:
        self.invalidate_columns(name, new_name)
        return self.execute(f"ALTER TABLE {name} RENAME TO {new_name}")

    def remove_index(
        self,
        table_name: str,
        column: Optional[Union[str, Sequence[str]]] = None,
        name: Optional[str] = None
    ) -> Any:
        index = self.index_name(table_name, column=column, name=name)
        return self.execute(f"DROP INDEX {self.quote_column_name(index)}")

    def truncate(self, table_name: str, name: Optional[str] = None) -> Any:
        return self.execute(f"TRUNCATE TABLE {self.quote_table_name(table_name)}", name)

    # ==================== Schema Operations ====================

    def tables(self) -> List[str]:
        """User tables; HSQLDB's SYSTEM_* catalog tables are left out."""
        return [t for t in super().tables() if not SYSTEM_TABLE_PATTERN.match(str(t))]

    def structure_dump(self) -> str:
        """DDL (and data of memory tables) as blank-line separated statements."""
        statements = []
        for sql in self._first_values(self.execute("SCRIPT")):
            if any(p.search(sql) for p in DUMP_NOISE_PATTERNS):
                logger.debug(f"Dropped bootstrap statement from dump: {sql}")
                continue
            statements.append(sql)
        return STATEMENT_SEPARATOR.join(statements)

    def structure_load(self, dump: str) -> None:
        """Replay a dump one statement at a time, without a transaction."""
        for ddl in split_dump(dump):
            self.execute(ddl)
        self.invalidate_columns()

    def explain(self, sql: str) -> str:
        """Query plan text for a statement."""
        rows = self.execute(f"EXPLAIN PLAN FOR {sql}", "EXPLAIN")
        return "\n".join(str(line) for line in self._first_values(rows))

    def shutdown(self) -> Any:
        return self.execute("SHUTDOWN")

    def recreate_database(self, name: Optional[str] = None) -> None:
        self.drop_database(name)
        self.create_database(name)

    def create_database(self, name: Optional[str] = None) -> None:
        # HSQLDB recreates the PUBLIC schema on its own
        pass

    def drop_database(self, name: Optional[str] = None) -> Any:
        self.invalidate_columns()
        return self.execute("DROP SCHEMA PUBLIC CASCADE")

    # ==================== Capability Checks ====================

    def supports_views(self) -> bool:
        return True

    def supports_foreign_keys(self) -> bool:
        return True

    def supports_explain(self) -> bool:
        return True
