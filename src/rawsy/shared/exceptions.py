"""Error taxonomy shared by every bounded context.

Each error carries a ``messages`` dict (field -> list of messages) so the API
layer can render caller-correctable failures without string parsing.

Field and rule violations use protean's ``ValidationError``, the same class the
aggregates raise from their fields and invariants. Everything else derives from
``MarketplaceError``.
"""

from contextlib import contextmanager

import pydantic
from protean.exceptions import (
    DatabaseError,
    ExpectedVersionError,
    ObjectNotFoundError,
    TransactionError,
    ValidationError,
)
from sqlalchemy.exc import SQLAlchemyError

__all__ = [
    "ConflictError",
    "DependencyError",
    "ForbiddenError",
    "InvalidTransition",
    "MarketplaceError",
    "NotFoundError",
    "ValidationError",
    "persistence_errors",
    "validation_errors",
]


class MarketplaceError(Exception):
    """Base class for the non-validation errors raised by the marketplace core."""

    code = "error"

    def __init__(self, messages: dict | str | None = None) -> None:
        if messages is None:
            messages = {}
        elif isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)


class NotFoundError(MarketplaceError):
    """A referenced entity does not exist."""

    code = "not_found"


class ForbiddenError(MarketplaceError):
    """The actor has no rights over this entity."""

    code = "forbidden"


class InvalidTransition(MarketplaceError):
    """The quote state machine rejects the requested action."""

    code = "invalid_transition"

    def __init__(self, current_status: str, action: str, reason: str | None = None) -> None:
        self.current_status = current_status
        self.action = action
        message = reason or f"Cannot apply '{action}' to a quote in status '{current_status}'"
        super().__init__({"status": [message]})


class ConflictError(MarketplaceError):
    """A conditional write lost a race; the caller must reload and retry."""

    code = "conflict"


class DependencyError(MarketplaceError):
    """The store or the push transport failed."""

    code = "dependency_error"


@contextmanager
def validation_errors():
    """Translate pydantic validation failures into ``ValidationError``."""
    try:
        yield
    except pydantic.ValidationError as exc:
        messages: dict[str, list[str]] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "_entity"
            messages.setdefault(field, []).append(error["msg"])
        raise ValidationError(messages) from None


@contextmanager
def persistence_errors(aggregate_cls=None, identifier=None):
    """Translate repository failures into the marketplace taxonomy.

    A missing aggregate becomes ``NotFoundError``, a stale write ``ConflictError``
    and any store failure ``DependencyError``. Validation errors pass through.
    """
    try:
        yield
    except ObjectNotFoundError:
        name = aggregate_cls.__name__ if aggregate_cls is not None else "Object"
        raise NotFoundError({"id": [f"{name} {identifier} not found"]}) from None
    except ExpectedVersionError as exc:
        raise ConflictError({"_entity": ["The record was changed concurrently; reload and retry"]}) from exc
    except (TransactionError, DatabaseError, SQLAlchemyError) as exc:
        raise DependencyError({"store": [str(exc)]}) from exc
