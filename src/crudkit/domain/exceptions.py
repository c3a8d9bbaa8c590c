"""Domain-level exceptions.

These are independent of HTTP and of the persistence provider.  Provider
failures (e.g. sqlalchemy.orm.exc.StaleDataError) are never wrapped; they
propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class CrudError(Exception):
    """Base exception for all crudkit errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class UnpersistedEntityError(CrudError):
    """Raised when an operation needs an identity the entity does not have yet."""

    def __init__(self, entity: object) -> None:
        super().__init__(
            f"{type(entity).__name__} has no identity (not yet persisted)",
            details={"type": type(entity).__name__},
        )


class EntityCopyError(CrudError):
    """Raised when an entity cannot be structurally cloned."""

    def __init__(self, entity: object, reason: str) -> None:
        super().__init__(
            f"Cannot copy {type(entity).__name__}: {reason}",
            details={"type": type(entity).__name__, "reason": reason},
        )


class EntityNotFoundError(CrudError):
    """Raised when no entity exists with the requested identity."""

    def __init__(self, entity_name: str, entity_id: int) -> None:
        super().__init__(
            f"{entity_name} {entity_id} not found",
            details={"entity": entity_name, "id": entity_id},
        )


class NamedQueryError(CrudError):
    """Raised for an unknown named query or a missing query parameter."""

    def __init__(self, query_name: str, reason: str) -> None:
        super().__init__(
            f"Named query '{query_name}': {reason}",
            details={"query": query_name, "reason": reason},
        )
