class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class MalformedRowError(DomainError):
    """Raised when a fetched evidence row cannot be turned into a record.

    The reconciler catches it per row, logs it and skips the row.
    """

    def __init__(self, message: str, row: object = None):
        super().__init__(message)
        self.row = row
