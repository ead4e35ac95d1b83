"""Errors raised across engine boundaries."""


class DataAccessError(Exception):
    """The backing store is unreachable or returned rows we cannot use."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.operation = operation

    def __str__(self):
        base = super().__str__()
        if self.operation:
            return f"{self.operation}: {base}"
        return base
