"""
Statement Module - Turns one line of user input into an insert/select intent
and runs it against a table.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from .constants import USERNAME_SIZE, EMAIL_SIZE, MAX_ID
from .exceptions import (PrepareSyntaxError, NegativeIdError, StringTooLongError,
                         UnrecognizedStatementError)
from .storage.record import Record
from .storage.table import Table


class StatementType(Enum):
    """Statements understood by the REPL"""
    INSERT = 1
    SELECT = 2


@dataclass
class Statement:
    type: StatementType
    record: Optional[Record] = None


def _prepare_insert(line: str) -> Statement:
    args = line.split()
    if len(args) != 4:
        raise PrepareSyntaxError("insert takes exactly 3 arguments: id username email")

    _, raw_id, username, email = args
    try:
        record_id = int(raw_id)
    except ValueError:
        raise PrepareSyntaxError(f"id must be an integer, got {raw_id!r}")

    if record_id < 0:
        raise NegativeIdError(f"id must be positive, got {record_id}")
    if record_id > MAX_ID:
        raise PrepareSyntaxError(f"id {record_id} does not fit in 32 bits")

    if "\x00" in username or "\x00" in email:
        raise PrepareSyntaxError("username and email must not contain NUL characters")
    if len(username.encode('utf-8')) > USERNAME_SIZE:
        raise StringTooLongError(f"username exceeds {USERNAME_SIZE} bytes")
    if len(email.encode('utf-8')) > EMAIL_SIZE:
        raise StringTooLongError(f"email exceeds {EMAIL_SIZE} bytes")

    return Statement(StatementType.INSERT, Record(record_id, username, email))


def prepare_statement(line: str) -> Statement:
    """
    Parse a line of user input

    Args:
        line: Raw input, e.g. "insert 1 bob bob@x.com" or "select"

    Returns:
        Prepared Statement

    Raises:
        PrepareError: If the line is not a valid statement
    """
    line = line.strip()
    if line.startswith('insert'):
        return _prepare_insert(line)
    if line.startswith('select'):
        return Statement(StatementType.SELECT)
    raise UnrecognizedStatementError(f"Unrecognized keyword at start of '{line}'")


def execute_statement(statement: Statement, table: Table) -> Optional[List[Record]]:
    """
    Run a prepared statement

    Returns:
        Selected records for SELECT, None for INSERT

    Raises:
        TableFullError: If an insert hits the table capacity
    """
    if statement.type == StatementType.INSERT:
        table.append(statement.record)
        return None
    return table.select_all()
