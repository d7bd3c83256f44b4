class NotFoundError(Exception):
    pass


class UnauthorizedError(Exception):
    pass


class StorageDegradedError(Exception):
    """The persisted document exists but could not be parsed."""
