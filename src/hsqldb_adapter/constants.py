"""
Centralized constants for the HSQLDB adapter.

Import from here instead of hardcoding values.
"""

# ===========================================================================
# Timeouts (seconds)
# ===========================================================================
CONNECTION_TIMEOUT_S = 5        # Driver login timeout (ODBC backend)

# ===========================================================================
# Connection defaults
# ===========================================================================
DEFAULT_URL = "jdbc:hsqldb:mem:."
DEFAULT_DRIVER_CLASS = "org.hsqldb.jdbc.JDBCDriver"
DEFAULT_USER = "SA"
DEFAULT_PASSWORD = ""

# Backend identifiers
BACKEND_AUTO = "auto"
BACKEND_JDBC = "jdbc"
BACKEND_ODBC = "odbc"
BACKENDS = (BACKEND_AUTO, BACKEND_JDBC, BACKEND_ODBC)

# ===========================================================================
# Quoting
# ===========================================================================
TIMEZONE_UTC = "utc"
TIMEZONE_LOCAL = "local"
TIMEZONES = (TIMEZONE_UTC, TIMEZONE_LOCAL)

DEFAULT_BINARY_ENCODING = "latin-1"  # one byte per code point up to U+00FF

# ===========================================================================
# Column metadata cache
# ===========================================================================
COLUMN_CACHE_TTL_S = 300
COLUMN_CACHE_MAXSIZE = 256

# ===========================================================================
# Structure dump
# ===========================================================================
STATEMENT_SEPARATOR = "\n\n"    # Blank line between dumped statements
