"""
Base Database Dialect - Generic adapter behaviour shared by every dialect

Dialects handle database-specific differences such as:
- Native type names and default limits (varchar(255) vs text)
- Value and identifier quoting
- DDL statement shapes (ADD vs ADD COLUMN, RENAME syntax)
- Administrative commands (dump, shutdown, identity retrieval)

The generic behaviour lives here; a dialect overrides the pieces its engine
renders differently and calls back into this class for the rest.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type, Union
import logging
import re

from cachetools import TTLCache

from ...config import AdapterConfig
from ...constants import COLUMN_CACHE_MAXSIZE

logger = logging.getLogger(__name__)

# Marker for "no DEFAULT clause" (None means DEFAULT NULL)
NO_DEFAULT = object()

_SIZE_SUFFIX = re.compile(r"\((\d+)(?:\s*,\s*(\d+))?\)")
_EXACT_NUMERIC = re.compile(r"^(numeric|decimal|number)\b", re.IGNORECASE)


@dataclass(frozen=True)
class NativeType:
    """Native column type name with its default limit."""
    name: str
    limit: Optional[int] = None


# Abstract type -> Python class of the values a column holds
_PYTHON_TYPES = {
    "primary_key": int,
    "integer": int,
    "tinyint": int,
    "smallint": int,
    "bigint": int,
    "float": float,
    "double": float,
    "real": float,
    "decimal": Decimal,
    "numeric": Decimal,
    "boolean": bool,
    "bit": bool,
    "date": date,
    "time": time,
    "timestamp": datetime,
    "datetime": datetime,
    "binary": bytes,
}


@dataclass(frozen=True)
class ColumnMetadata:
    """Column metadata built once from the driver's reported type."""
    name: str
    sql_type: str
    type: Optional[str] = None
    limit: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    default: Optional[str] = None
    null: bool = True
    primary: bool = False

    @property
    def python_type(self) -> Type[Any]:
        """Python class of this column's values (str when unknown)."""
        return _PYTHON_TYPES.get(self.type, str)


# ==================== Column Building ====================

def generic_extract_limit(sql_type: str) -> Tuple[str, Optional[int]]:
    """Lower-case the type and take the first number of its size suffix."""
    match = _SIZE_SUFFIX.search(sql_type)
    return sql_type.lower(), int(match.group(1)) if match else None


def extract_precision_scale(sql_type: str) -> Tuple[Optional[int], Optional[int]]:
    """Precision and scale of an exact numeric type, e.g. DECIMAL(10,2)."""
    if not _EXACT_NUMERIC.match(sql_type):
        return None, None
    match = _SIZE_SUFFIX.search(sql_type)
    if not match:
        return None, None
    scale = match.group(2)
    return int(match.group(1)), int(scale) if scale is not None else None


def simplified_type(sql_type: str, scale: Optional[int] = None) -> Optional[str]:
    """Map a (normalized) native type to its abstract type symbol."""
    t = sql_type.lower()
    if re.match(r"^(tiny|small|medium|big)?int(eger)?\b", t):
        return "integer"
    if re.search(r"float|double|real", t):
        return "float"
    if re.search(r"decimal|numeric|number", t):
        return "integer" if scale == 0 else "decimal"
    if "datetime" in t:
        return "datetime"
    if "timestamp" in t:
        return "timestamp"
    if "time" in t:
        return "time"
    if "date" in t:
        return "date"
    if re.search(r"clob|text", t):
        return "text"
    if re.search(r"blob|binary", t):
        return "binary"
    if "char" in t:
        return "string"
    if re.search(r"bool|bit", t):
        return "boolean"
    return None


def build_column(
    name: str,
    sql_type: str,
    default: Optional[str] = None,
    null: bool = True,
    primary: bool = False,
    extract_limit: Callable[[str], Tuple[str, Optional[int]]] = generic_extract_limit,
    default_value: Optional[Callable[[Optional[str]], Optional[str]]] = None,
) -> ColumnMetadata:
    """
    Build column metadata from a driver-reported type string.

    Args:
        name: Column name
        sql_type: Raw type string, e.g. "VARCHAR(255)"
        default: Raw default literal as reported by the driver
        null: Whether the column accepts NULL
        primary: Whether the column is (part of) the primary key
        extract_limit: Type/limit normalization (dialect hook)
        default_value: Default literal post-processing (dialect hook)

    Returns:
        Frozen ColumnMetadata
    """
    normalized, limit = extract_limit(sql_type)
    precision, scale = extract_precision_scale(sql_type)
    if default_value is not None:
        default = default_value(default)

    return ColumnMetadata(
        name=name,
        sql_type=normalized,
        type=simplified_type(normalized, scale),
        limit=limit,
        precision=precision,
        scale=scale,
        default=default,
        null=null,
        primary=primary,
    )


# ==================== Generic Adapter ====================

class DatabaseDialect(ABC):
    """
    Abstract base class for database dialects.

    Each dialect knows how to:
    1. Map abstract column types to native SQL types
    2. Quote values and identifiers for its engine
    3. Render and execute DDL and administrative statements
    4. Introspect table columns

    Usage:
        dialect = create_dialect("hsqldb", connection, config)
        sql = dialect.type_to_sql("string", limit=40)
        dialect.add_column("users", "nick", "string", limit=40)
    """

    NATIVE_DATABASE_TYPES: Mapping[str, NativeType] = MappingProxyType({})

    def __init__(self, connection: Any, config: Optional[AdapterConfig] = None):
        """
        Initialize the dialect.

        Args:
            connection: Connection bridge exposing execute/select_value/tables
            config: Adapter settings (defaults apply when omitted)
        """
        self.connection = connection
        self.config = config or AdapterConfig()
        self._columns_cache = TTLCache(
            maxsize=COLUMN_CACHE_MAXSIZE, ttl=self.config.column_cache_ttl
        )

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Display name of the database engine."""
        pass

    def native_database_types(self) -> Mapping[str, NativeType]:
        """Abstract type -> native type table."""
        return self.NATIVE_DATABASE_TYPES

    # ==================== Value Quoting ====================

    def quote(self, value: Any, column: Optional[ColumnMetadata] = None) -> str:
        """Render a Python value as an SQL literal."""
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return f"X'{bytes(value).hex().upper()}'"
        if isinstance(value, (datetime, date)):
            return f"'{self.quoted_date(value)}'"
        if isinstance(value, time):
            return f"'{value.strftime('%H:%M:%S')}'"
        return f"'{self.quote_string(str(value))}'"

    def quote_string(self, s: str) -> str:
        """Escape a string for use inside single quotes."""
        return s.replace("'", "''")

    def quoted_date(self, value: Union[date, datetime]) -> str:
        """Date/time text for use inside single quotes."""
        if isinstance(value, datetime):
            return value.strftime("%Y-%m-%d %H:%M:%S")
        return value.isoformat()

    # ==================== Identifier Quoting ====================

    def quote_column_name(self, name: Any) -> str:
        return str(name)

    def quote_table_name(self, name: Any) -> str:
        """Quote a table reference, each dotted part on its own."""
        return ".".join(self.quote_column_name(part) for part in str(name).split("."))

    # ==================== Type Rendering ====================

    def type_to_sql(
        self,
        type: str,
        limit: Optional[int] = None,
        precision: Optional[int] = None,
        scale: Optional[int] = None
    ) -> str:
        """
        Render an abstract type as native SQL.

        Raises:
            KeyError: if the type is not in the native type table
            ValueError: for a decimal scale given without a precision
        """
        native = self.native_database_types()[str(type)]
        sql = native.name

        if type in ("decimal", "numeric"):
            if precision is not None:
                if scale is not None:
                    return f"{sql}({precision},{scale})"
                return f"{sql}({precision})"
            if scale is not None:
                raise ValueError(
                    f"Error adding {type} column: precision cannot be empty if scale is specified"
                )

        if type != "primary_key":
            if limit is None:
                limit = native.limit
            if limit is not None:
                sql = f"{sql}({limit})"
        return sql

    def add_column_options(
        self,
        sql: str,
        default: Any = NO_DEFAULT,
        null: Optional[bool] = None,
        column: Optional[ColumnMetadata] = None
    ) -> str:
        """Append DEFAULT and NOT NULL clauses to a column definition."""
        if default is not NO_DEFAULT:
            sql += f" DEFAULT {self.quote(default, column)}"
        if null is False:
            sql += " NOT NULL"
        return sql

    def index_name(
        self,
        table_name: str,
        column: Optional[Union[str, Sequence[str]]] = None,
        name: Optional[str] = None
    ) -> str:
        """Conventional index name, or the explicit name when no column is given."""
        if column:
            columns = [column] if isinstance(column, str) else list(column)
            return f"index_{table_name}_on_{'_and_'.join(columns)}"
        if name:
            return name
        raise ValueError("You must specify the index name")

    # ==================== Execution ====================

    def execute(self, sql: str, name: Optional[str] = None) -> Any:
        """Execute a statement through the connection."""
        return self._execute(sql, name)

    def _execute(self, sql: str, name: Optional[str] = None) -> Any:
        return self.connection.execute(sql, name)

    def select_value(self, sql: str, name: Optional[str] = None) -> Any:
        """Execute a query and return a single scalar value."""
        return self.connection.select_value(sql, name)

    def empty_insert_statement_value(self) -> str:
        return "DEFAULT VALUES"

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
        """ALTER TABLE ... ADD COLUMN."""
        sql = (
            f"ALTER TABLE {self.quote_table_name(table_name)} "
            f"ADD COLUMN {self.quote_column_name(column_name)} "
            f"{self.type_to_sql(type, limit, precision, scale)}"
        )
        sql = self.add_column_options(sql, default=default, null=null)
        self.invalidate_columns(table_name)
        return self.execute(sql)

    def remove_index(
        self,
        table_name: str,
        column: Optional[Union[str, Sequence[str]]] = None,
        name: Optional[str] = None
    ) -> Any:
        index = self.index_name(table_name, column=column, name=name)
        return self.execute(
            f"DROP INDEX {self.quote_column_name(index)} ON {self.quote_table_name(table_name)}"
        )

    def change_column(self, table_name: str, column_name: str, type: str,
                      limit: Optional[int] = None) -> Any:
        raise NotImplementedError(f"{self.adapter_name} does not support change_column")

    def change_column_default(self, table_name: str, column_name: str, default: Any) -> Any:
        raise NotImplementedError(f"{self.adapter_name} does not support change_column_default")

    def rename_column(self, table_name: str, column_name: str, new_column_name: str) -> Any:
        raise NotImplementedError(f"{self.adapter_name} does not support rename_column")

    def rename_table(self, name: str, new_name: str) -> Any:
        raise NotImplementedError(f"{self.adapter_name} does not support rename_table")

    def truncate(self, table_name: str, name: Optional[str] = None) -> Any:
        return self.execute(f"DELETE FROM {self.quote_table_name(table_name)}", name)

    # ==================== Introspection ====================

    def tables(self) -> List[str]:
        """Table names visible on the connection."""
        return list(self.connection.tables())

    def columns(self, table_name: str) -> List[ColumnMetadata]:
        """Column metadata for a table (cached per table)."""
        key = str(table_name).upper()
        if key in self._columns_cache:
            return self._columns_cache[key]
        result = self._load_columns(table_name)
        self._columns_cache[key] = result
        return result

    @abstractmethod
    def _load_columns(self, table_name: str) -> List[ColumnMetadata]:
        """Query the catalog for a table's columns."""
        pass

    def invalidate_columns(self, *table_names: str) -> None:
        """
        Drop cached column metadata.

        Args:
            table_names: Tables to forget. If empty, clears all.
        """
        if not table_names:
            self._columns_cache.clear()
            return
        for table_name in table_names:
            self._columns_cache.pop(str(table_name).upper(), None)
        logger.debug(f"Invalidated column cache for: {', '.join(map(str, table_names))}")

    # ==================== Capability Checks ====================

    def supports_views(self) -> bool:
        """Whether this database supports views."""
        return False

    def supports_foreign_keys(self) -> bool:
        """Whether this database enforces foreign keys."""
        return False

    def supports_explain(self) -> bool:
        """Whether explain() is implemented."""
        return False

    # ==================== Utility Methods ====================

    @staticmethod
    def _first_values(rows: Iterable[Dict[str, Any]]) -> List[Any]:
        """First column value of each result row."""
        return [next(iter(row.values())) for row in rows]
