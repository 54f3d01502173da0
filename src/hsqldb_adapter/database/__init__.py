"""
Database layer - connection bridge and SQL dialects.
"""

from .connection import JdbcConnection, connect_hsqldb, get_backend

__all__ = ["JdbcConnection", "connect_hsqldb", "get_backend"]
