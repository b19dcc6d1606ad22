from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class ValidationError(UserError):
    """Raised when user input fails validation."""


class AllocationError(Exception):
    """Base class for server-side failures while allocating a sequence number.

    Nothing is persisted when one of these is raised.
    """


class ConflictExhaustedError(AllocationError):
    """Raised when every attempt to commit a counter update hit a write conflict.

    Transient: the caller may retry the whole allocation.
    """

    def __init__(self, namespace: str, attempts: int) -> None:
        super().__init__(f"Counter '{namespace}' is under contention, gave up after {attempts} attempts")
        self.namespace = namespace
        self.attempts = attempts


class StoreUnavailableError(AllocationError):
    """Raised when the counter store cannot be reached or fails unexpectedly."""

    def __init__(self, message: str = "Counter store is unavailable") -> None:
        super().__init__(message)
