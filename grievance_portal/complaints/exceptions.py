"""
Domain exceptions raised by the complaint stores and access checks.

They carry no HTTP knowledge; ``complaints.exception_handler`` maps them
to responses:

    InvalidInput         400
    PermissionDenied     403
    NotFound             404
    AllocationConflict   409 (retried inside the store, normally never seen)
    AllocationExhausted  500
    StoreUnavailable     503
"""

from __future__ import annotations


class DomainError(Exception):
    default_message = "A business rule was violated."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(DomainError):
    """A value outside its closed set reached the store layer."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class PermissionDenied(DomainError):
    default_message = "You do not have permission to perform this action."


class NotFound(DomainError):
    default_message = "Complaint not found"


class AllocationConflict(DomainError):
    """Another complaint already holds the minted human id."""

    def __init__(self, human_id: str) -> None:
        super().__init__(f"Complaint id {human_id} is already taken.")
        self.human_id = human_id


class AllocationExhausted(DomainError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f"Could not allocate a complaint id after {attempts} attempts.")
        self.attempts = attempts


class StoreUnavailable(DomainError):
    default_message = "Complaint store is unavailable."
