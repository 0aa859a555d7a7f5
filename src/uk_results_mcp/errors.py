"""Exceptions raised while loading, aggregating and reporting results."""


class ResultsError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(ResultsError):
    """A value or line does not satisfy the expected input template."""


class MalformedLineError(ValidationError):
    """A data line has too few fields, a bad number or unresolvable quoting."""

    def __init__(self, reason: str, line: str = ""):
        super().__init__(reason)
        self.reason = reason
        self.line = line


class FileAccessError(ResultsError):
    """An input file is missing or unreadable."""


class DataConsistencyError(ResultsError):
    """Records are individually valid but contradict each other."""

    def __init__(self, message: str, subject: str = ""):
        super().__init__(message)
        self.subject = subject


class WriteError(ResultsError):
    """An output file could not be written."""
