"""Exceptions raised while generating reports."""


class T3RepError(Exception):
    """Base class for all report generation errors."""


class ConfigurationError(T3RepError):
    """Configuration file missing, unreadable or malformed. Fatal."""


class DatabaseConnectionError(T3RepError):
    """A system's database connection could not be opened."""


class QueryError(T3RepError):
    """The report query could not be executed."""


class ScanError(T3RepError):
    """A result row could not be converted to the configured number of text fields."""


class ReportFileError(T3RepError):
    """Creating, writing, closing or removing a report file failed."""
