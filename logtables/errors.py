from __future__ import annotations


class LogTablesError(Exception):
    """Base class for every failure raised while converting a log document."""


class InputReadError(LogTablesError):
    pass


class MalformedInput(LogTablesError):
    pass


class SchemaDriftError(LogTablesError):
    pass


class OutputDirectoryError(LogTablesError):
    pass


class OutputWriteError(LogTablesError):
    pass


class TableConsistencyError(LogTablesError):
    """A row was produced for a category that never received a header."""
