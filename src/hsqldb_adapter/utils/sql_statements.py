"""
SQL Statements - Classify statements and split structure dumps.

Handles:
- Statement kind detection (INSERT, SELECT) ignoring leading comments
- Trimming trailing comments and semicolons before appending clauses
- Splitting a SCRIPT dump on blank-line boundaries
"""

import re
from typing import List

import sqlparse
from sqlparse import tokens as T

import logging
logger = logging.getLogger(__name__)

# Blank line (possibly holding whitespace) between dumped statements
_BLANK_LINE = re.compile(r"\r?\n[ \t]*\r?\n")


def first_keyword(stmt_text: str) -> str:
    """
    Return the upper-cased first word of a statement.

    Comments and surrounding whitespace are stripped first, so a statement
    such as ``/* audit */ insert into t ...`` yields ``INSERT``.
    """
    if not stmt_text:
        return ""

    cleaned = sqlparse.format(stmt_text, strip_comments=True).strip().upper()
    words = cleaned.split()
    return words[0] if words else ""


def is_insert(stmt_text: str) -> bool:
    """Whether the statement is an INSERT."""
    return first_keyword(stmt_text) == "INSERT"


def is_select(stmt_text: str) -> bool:
    """
    Determine if a statement is a query that returns rows.

    Returns True for SELECT and WITH ... SELECT (CTEs), plus HSQLDB's
    VALUES table constructor.
    """
    return first_keyword(stmt_text) in {"SELECT", "WITH", "VALUES"}


def strip_statement_end(stmt_text: str) -> str:
    """
    Remove trailing comments, whitespace and semicolons from a statement.

    The result can have a clause appended to it, e.g.
    ``SELECT * FROM t; -- newest first`` becomes ``SELECT * FROM t``.
    """
    parsed = sqlparse.parse(stmt_text)
    if not parsed:
        return stmt_text.strip()

    tokens = list(parsed[0].flatten())
    while tokens and (
        tokens[-1].is_whitespace
        or tokens[-1].ttype in T.Comment
        or tokens[-1].match(T.Punctuation, ";")
    ):
        tokens.pop()
    return "".join(token.value for token in tokens)


def split_dump(dump: str) -> List[str]:
    """
    Split a structure dump into statements.

    Statements are separated by blank lines. Each piece is stripped, and
    empty pieces are dropped.
    """
    if not dump or not dump.strip():
        return []

    statements = []
    for chunk in _BLANK_LINE.split(dump):
        chunk = chunk.strip()
        if chunk:
            statements.append(chunk)

    logger.debug(f"Split dump into {len(statements)} statements")
    return statements
