from typing import Optional


class AudienceError(Exception):
    """Base class for every error raised while sizing an audience."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(AudienceError):
    """Malformed rule sequence, missing rule properties or unusable values."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


class UnsupportedOperatorError(AudienceError):
    def __init__(self, message: str, operator=None):
        super().__init__(message)
        self.operator = operator


class QueryExecutionFailedError(AudienceError):
    """The customer store could not execute the count query."""
    pass
