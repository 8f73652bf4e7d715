"""
FlatDB Exceptions - Error hierarchy for storage and statement handling
"""


class FlatDBError(Exception):
    """Base class for all FlatDB errors"""
    pass


class TableFullError(FlatDBError):
    """Table already holds its maximum number of records"""
    pass


class TableClosedError(FlatDBError):
    """Operation attempted on a table (or pager) that was closed"""
    pass


class StorageIOError(FlatDBError, IOError):
    """Backing file could not be read or written, or is corrupt"""
    pass


class PrepareError(FlatDBError):
    """Base class for statement preparation errors"""
    pass


class PrepareSyntaxError(PrepareError):
    """Statement could not be parsed"""
    pass


class NegativeIdError(PrepareError):
    """Insert statement with a negative id"""
    pass


class StringTooLongError(PrepareError):
    """Username or email longer than its column"""
    pass


class UnrecognizedStatementError(PrepareError):
    """Line does not start with a known statement keyword"""
    pass
