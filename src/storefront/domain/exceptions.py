"""Domain-level exceptions.

All business rule violations and workflow failures are expressed as
subclasses of DomainException so the CLI layer can catch them uniformly
and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Structural input violation, reported for the first failing field."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AuthorizationError(DomainException):
    """The caller lacks the role required for this operation."""


class EmptyCartError(DomainException):
    """Checkout was attempted with no cart lines."""


class TotalMismatchError(DomainException):
    """The total shown to the caller no longer matches the cart."""

    def __init__(self, expected, actual) -> None:
        super().__init__(
            f"Cart total changed from {expected} to {actual}, please review your order"
        )
        self.expected = expected
        self.actual = actual


class LoadError(DomainException):
    """Reading from the store failed. Safe to retry."""


class PersistError(DomainException):
    """Writing to the store failed. Nothing was left half-written."""


class PartialCommitError(DomainException):
    """An order exists but its lines or the cart clear are incomplete.

    Raised only after retries and rollback have both failed, so the
    order needs reconciliation.
    """

    def __init__(self, order_id: str, step: str) -> None:
        super().__init__(
            f"Order {order_id} was created but '{step}' did not complete; "
            f"it needs reconciliation"
        )
        self.order_id = order_id
        self.step = step
