"""
Error Messages - Short summaries of HSQLDB and driver errors for the log.

Translates driver error text (JDBC exceptions surfaced by JayDeBeApi, ODBC
errors from pyodbc) into a one-line summary. The original exception is
always re-raised by the caller; this module only describes it.
"""

import re
from dataclasses import dataclass

import logging
logger = logging.getLogger(__name__)


@dataclass
class ErrorInfo:
    """Structured error information."""
    title: str  # Short error title
    message: str  # Readable message
    original_error: str  # Original error for debugging

    def format_short(self) -> str:
        """Format a one-line summary."""
        return f"{self.title}: {self.message}"


# Format: (regex_pattern, title, message_template)
# Use {match} in message_template to include regex group(1)

HSQLDB_PATTERNS = [
    # Missing table/column, or no grant on it
    (
        r"user lacks privilege or object not found: ([\w.$\"-]+)",
        "Object not found",
        "'{match}' does not exist or is not accessible.",
    ),
    # Parser error
    (
        r"unexpected token: ([^\s]+)",
        "Syntax error",
        "Unexpected token '{match}'.",
    ),
    (
        r"unexpected end of statement",
        "Syntax error",
        "The statement ended early.",
    ),
    # Constraint violations
    (
        r"unique constraint or index violation[;:]?\s*([\w.$]+)?",
        "Duplicate value",
        "Unique constraint '{match}' was violated.",
    ),
    (
        r"foreign key no (?:parent|action)[;:]?\s*([\w.$]+)?",
        "Foreign key violation",
        "Foreign key '{match}' was violated.",
    ),
    (
        r"NOT NULL check constraint[;:]?\s*([\w.$]+)?",
        "Missing value",
        "NOT NULL constraint '{match}' was violated.",
    ),
    # Data errors
    (
        r"string data, right truncation",
        "Value too long",
        "A string value exceeds the column size.",
    ),
    (
        r"incompatible data type in (?:conversion|operation)",
        "Type mismatch",
        "A value does not match the column type.",
    ),
    # File database held by another process
    (
        r"lockfile|Database lock acquisition failure",
        "Database locked",
        "The database files are in use by another process.",
    ),
    (
        r"Database is shutdown|connection is closed",
        "Connection closed",
        "The database has been shut down or the connection is closed.",
    ),
]

DRIVER_PATTERNS = [
    # JDBC driver missing from the classpath
    (
        r"ClassNotFoundException:?\s*([\w.]+)?",
        "JDBC driver missing",
        "Driver class '{match}' is not on the classpath.",
    ),
    (
        r"Class ([\w.]+) not found",
        "JDBC driver missing",
        "Driver class '{match}' is not on the classpath.",
    ),
    # JVM failed to start
    (
        r"(?:JVM|libjvm|JAVA_HOME)",
        "JVM unavailable",
        "The Java runtime could not be started.",
    ),
    # ODBC DSN or driver missing
    (
        r"(?:Data source name not found|no default driver specified)",
        "ODBC driver missing",
        "No ODBC data source or driver matches the connection string.",
    ),
]


def parse_error(error: Exception) -> ErrorInfo:
    """
    Match an exception against the known patterns.

    Args:
        error: The exception raised by the driver

    Returns:
        ErrorInfo with a readable title and message
    """
    original_error = str(error)

    for pattern, title, message_template in HSQLDB_PATTERNS + DRIVER_PATTERNS:
        match = re.search(pattern, original_error, re.IGNORECASE)
        if match:
            message = message_template
            if "{match}" in message:
                captured = match.group(1) if match.groups() else None
                if captured:
                    message = message.replace("{match}", captured)
                else:
                    message = message.replace(" '{match}'", "")

            return ErrorInfo(
                title=title,
                message=message,
                original_error=original_error
            )

    # No pattern matched - keep the first line of the original text
    first_line = original_error.strip().splitlines()[0] if original_error.strip() else ""
    return ErrorInfo(
        title=type(error).__name__,
        message=first_line or "No details available.",
        original_error=original_error
    )


def describe_error(error: Exception) -> str:
    """Return a one-line summary of a driver error."""
    return parse_error(error).format_short()
