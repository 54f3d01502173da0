"""
Dialect lookup by database name.
"""

from types import MappingProxyType
from typing import Any, Optional

from ...config import AdapterConfig
from .hsqldb_dialect import HSQLDBDialect

import logging
logger = logging.getLogger(__name__)

# Accepted names, lower case
DIALECTS = MappingProxyType({
    "hsqldb": HSQLDBDialect,
    "hsql": HSQLDBDialect,
})


def create_dialect(
    db_type: str,
    connection: Any,
    config: Optional[AdapterConfig] = None
) -> Optional[HSQLDBDialect]:
    """
    Create the dialect registered under ``db_type`` (case-insensitive).

    Returns None, with a warning, for an unknown name.
    """
    dialect_class = DIALECTS.get(db_type.lower())
    if dialect_class is None:
        logger.warning(f"No dialect for database type: {db_type}")
        return None
    return dialect_class(connection, config)
