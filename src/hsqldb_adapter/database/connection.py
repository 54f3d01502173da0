"""
HSQLDB Connection Bridge - JayDeBeApi (JDBC) with pyodbc alternative.

Provides a unified connect_hsqldb() entry point that opens the HSQLDB JDBC
driver through JayDeBeApi when available, and uses pyodbc against a
HyperSQL ODBC data source otherwise. Both are wrapped in JdbcConnection,
which exposes the small execute/select_value/tables surface the dialects
consume.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from ..config import AdapterConfig
from ..constants import BACKEND_AUTO, BACKEND_JDBC, BACKEND_ODBC, CONNECTION_TIMEOUT_S
from ..utils.error_messages import describe_error

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Backend detection (cached)
# ---------------------------------------------------------------------------

_backend_cache: Optional[str] = None


def _detect_backend() -> str:
    """Detect best available HSQLDB backend. Result is cached."""
    # 1. Try JayDeBeApi (JDBC through JPype)
    try:
        import jaydebeapi  # noqa: F401

        return BACKEND_JDBC
    except ImportError:
        logger.info("jaydebeapi not available")

    # 2. Try pyodbc (HyperSQL ODBC server)
    try:
        import pyodbc  # noqa: F401

        logger.info("Using pyodbc as HSQLDB backend")
        return BACKEND_ODBC
    except ImportError:
        logger.warning("Neither jaydebeapi nor pyodbc available for HSQLDB")

    return ""


def get_backend() -> str:
    """Return ``"jdbc"``, ``"odbc"`` or ``""``."""
    global _backend_cache
    if _backend_cache is None:
        _backend_cache = _detect_backend()
    return _backend_cache


# ---------------------------------------------------------------------------
# Connection factory
# ---------------------------------------------------------------------------

def _odbc_connection_string(config: AdapterConfig) -> str:
    """Append credentials to an ODBC connection string unless already set."""
    conn_str = config.url.rstrip(";")
    lowered = conn_str.lower()
    if config.user and "uid=" not in lowered:
        conn_str += f";UID={config.user}"
    if config.password and "pwd=" not in lowered:
        conn_str += f";PWD={config.password}"
    return conn_str


def connect_hsqldb(config: Optional[AdapterConfig] = None) -> "JdbcConnection":
    """
    Open an HSQLDB connection.

    Args:
        config: Adapter settings (defaults to an in-memory database)

    Returns:
        JdbcConnection wrapping the driver connection

    Raises:
        ImportError: if no backend library is installed
    """
    config = config or AdapterConfig()
    backend = get_backend() if config.backend == BACKEND_AUTO else config.backend

    if backend == BACKEND_JDBC:
        import jaydebeapi

        raw = jaydebeapi.connect(
            config.driver_class,
            config.url,
            [config.user, config.password],
            config.jars or None,
        )
    elif backend == BACKEND_ODBC:
        import pyodbc

        raw = pyodbc.connect(_odbc_connection_string(config), timeout=CONNECTION_TIMEOUT_S)
    else:
        raise ImportError(
            "HSQLDB support requires: pip install 'JayDeBeApi' (JDBC, default) "
            "OR pip install 'pyodbc' (HyperSQL ODBC)"
        )

    logger.info(f"Connected to {config.url} via {backend}")
    return JdbcConnection(raw, backend)


# ---------------------------------------------------------------------------
# Connection wrapper
# ---------------------------------------------------------------------------

class JdbcConnection:
    """
    Thin wrapper over a DB-API 2 connection.

    Result-set rows come back as dicts keyed by upper-case column label;
    statements without a result set return the driver's row count.

    Usage:
        with connect_hsqldb(config) as conn:
            conn.execute("CREATE TABLE t (id INTEGER)")
            rows = conn.execute("SELECT * FROM t")
    """

    # Catalog query listing every table the session can see, system ones included
    TABLES_SQL = (
        "SELECT TABLE_NAME FROM INFORMATION_SCHEMA.SYSTEM_TABLES "
        "WHERE TABLE_TYPE IN ('TABLE', 'SYSTEM TABLE') ORDER BY TABLE_NAME"
    )

    def __init__(self, raw: Any, backend: str = ""):
        """
        Args:
            raw: DB-API 2 connection (jaydebeapi or pyodbc)
            backend: Backend identifier, for logging
        """
        self.raw = raw
        self.backend = backend

    def execute(self, sql: str, name: Optional[str] = None) -> Union[List[Dict[str, Any]], int]:
        """Execute a statement and return its rows or its row count."""
        logger.debug(f"{name or 'SQL'}: {sql}")
        cursor = self.raw.cursor()
        try:
            cursor.execute(sql)
            if cursor.description:
                labels = [str(d[0]).upper() for d in cursor.description]
                return [dict(zip(labels, row)) for row in cursor.fetchall()]
            return cursor.rowcount
        except Exception as e:
            logger.error(f"{name or 'SQL'} failed: {describe_error(e)}")
            raise
        finally:
            cursor.close()

    def select_value(self, sql: str, name: Optional[str] = None) -> Any:
        """Execute a query and return the first column of its first row."""
        logger.debug(f"{name or 'SQL'}: {sql}")
        cursor = self.raw.cursor()
        try:
            cursor.execute(sql)
            row = cursor.fetchone()
            return row[0] if row else None
        except Exception as e:
            logger.error(f"{name or 'SQL'} failed: {describe_error(e)}")
            raise
        finally:
            cursor.close()

    def tables(self) -> List[str]:
        """List table names, including the engine's system tables."""
        rows = self.execute(self.TABLES_SQL, "SCHEMA")
        return [row["TABLE_NAME"] for row in rows]

    def commit(self) -> None:
        self.raw.commit()

    def rollback(self) -> None:
        self.raw.rollback()

    def close(self) -> None:
        """Close the driver connection."""
        self.raw.close()
        logger.info(f"Closed {self.backend or 'database'} connection")

    def __enter__(self) -> "JdbcConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
