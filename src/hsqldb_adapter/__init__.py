"""
HSQLDB Adapter - HSQLDB dialect support for a generic adapter layer
JDBC (JayDeBeApi) and ODBC (pyodbc) edition
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("hsqldb-adapter")
except PackageNotFoundError:
    # Package not installed
    __version__ = "0.3.0"

from .config import AdapterConfig
from .database.connection import JdbcConnection, connect_hsqldb
from .database.dialects import HSQLDBDialect, create_dialect

__all__ = [
    "AdapterConfig",
    "JdbcConnection",
    "connect_hsqldb",
    "create_dialect",
    "HSQLDBDialect",
    "__version__",
]
