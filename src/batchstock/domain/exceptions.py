"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI
and the endpoint layer can catch them uniformly and map each kind to a
user-facing message and status.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidRequestError(DomainException):
    """Malformed or missing input. Never mutates state."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """No batches exist for the product."""

    def __init__(self, product_id: object) -> None:
        super().__init__(f"Product not found with ID: {product_id}")
        self.product_id = product_id


class InsufficientInventoryError(DomainException):
    """Available stock is lower than the requested quantity."""

    def __init__(self, available: int, requested: int, message: str | None = None) -> None:
        super().__init__(
            message
            or f"Insufficient inventory. Available: {available}, Requested: {requested}"
        )
        self.available = available
        self.requested = requested

    @property
    def shortfall(self) -> int:
        return self.requested - self.available


class ReservationConflictError(InsufficientInventoryError):
    """Stock ran out between the advisory check and the reservation."""


class UpstreamUnavailableError(DomainException):
    """The inventory service could not be reached or answered unexpectedly."""
