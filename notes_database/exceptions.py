"""Storage-level errors raised by the repositories."""


class DuplicateRecordError(Exception):
    """A write hit a UNIQUE constraint (e.g. username or email already taken)."""

    def __init__(self, message="Resource already exists"):
        super().__init__(message)
        self.message = message
