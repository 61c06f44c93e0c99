from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StoreError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class ValidationError(StoreError):
    pass


@dataclass(frozen=True)
class InvalidConstraint(ValidationError):
    """A category, size or role outside the closed vocabulary."""

    value: str = ""

    def __str__(self) -> str:  # pragma: no cover
        return f"invalid_constraint: {self.value!r} ({self.message})"


@dataclass(frozen=True)
class AlreadyProcessed(StoreError):
    order_id: str = ""
    status: str = ""

    def __str__(self) -> str:  # pragma: no cover
        return f"already_processed: {self.order_id} is {self.status} ({self.message})"


@dataclass(frozen=True)
class PersistenceError(StoreError):
    pass


@dataclass(frozen=True)
class DesignNotFound(PersistenceError):
    design_id: str = ""

    def __str__(self) -> str:  # pragma: no cover
        return f"design_not_found: {self.design_id} ({self.message})"


@dataclass(frozen=True)
class OrderNotFound(PersistenceError):
    order_id: str = ""

    def __str__(self) -> str:  # pragma: no cover
        return f"order_not_found: {self.order_id} ({self.message})"


@dataclass(frozen=True)
class PublishError(StoreError):
    pass
