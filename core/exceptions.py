"""
Custom exception hierarchy for the transactions service.

Exception Hierarchy:
    OperationFailure (base)
    ├── SeedSourceError  - Network/timeout/HTTP errors fetching seed data
    ├── SeedDataError    - Seed payload has an unexpected structure
    ├── StoreError       - Record store unavailable or query failed
    └── ValidationError  - Request input could not be coerced
"""


class OperationFailure(Exception):
    """Base exception for every failure surfaced by an API operation."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class SeedSourceError(OperationFailure):
    """
    Seed source could not be reached or answered with an error status.

    status_code is set when the source responded at all.
    """

    def __init__(self, message: str, details: str = None, status_code: int = None):
        super().__init__(message, details)
        self.status_code = status_code


class SeedDataError(OperationFailure):
    """
    Seed payload has unexpected structure.

    The source returned something that is not an array of sale records.
    """

    def __init__(self, message: str, details: str = None, expected: str = None, got: str = None):
        super().__init__(message, details)
        self.expected = expected
        self.got = got


class StoreError(OperationFailure):
    """Record store is not connected or a statement failed."""


class ValidationError(OperationFailure):
    """
    Input validation failed.

    Raised while coercing request parameters (e.g. a malformed month).
    """

    def __init__(self, field: str, message: str, value: any = None):
        self.field = field
        self.value = value
        super().__init__(message)

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.field}: {self.message} (got: {self.value!r})"
        return f"{self.field}: {self.message}"
