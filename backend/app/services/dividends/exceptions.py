"""Validation errors raised by the dividend calculators."""


class InvalidDividendDataError(ValueError):
    """Input record violates the data model (unparseable date, negative amount, ...)."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
