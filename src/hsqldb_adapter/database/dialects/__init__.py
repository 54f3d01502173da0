"""
Database Dialects - Database-specific SQL rendering

Dialects are looked up by database name with create_dialect().

Usage:
    from hsqldb_adapter.database.dialects import create_dialect

    # Create a dialect for a connection
    dialect = create_dialect("hsqldb", connection, config)

    # Render fragments
    dialect.type_to_sql("string", limit=40)
    dialect.quote("O'Brien")

    # Administrative commands
    dump = dialect.structure_dump()
    dialect.structure_load(dump)
"""

from .base import (
    NO_DEFAULT,
    ColumnMetadata,
    DatabaseDialect,
    NativeType,
    build_column,
)
from .values import PreQuoted, RawLiteral, ValueKind, classify_value

from .hsqldb_dialect import HSQLDBDialect, NATIVE_DATABASE_TYPES
from .factory import DIALECTS, create_dialect

__all__ = [
    # Base classes
    "DatabaseDialect",
    "ColumnMetadata",
    "NativeType",
    "NO_DEFAULT",
    "build_column",

    # Quotable values
    "RawLiteral",
    "PreQuoted",
    "ValueKind",
    "classify_value",

    # Lookup
    "DIALECTS",
    "create_dialect",

    # Implementations
    "HSQLDBDialect",
    "NATIVE_DATABASE_TYPES",
]
