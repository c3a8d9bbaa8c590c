"""Generic CRUD repository interface.

CrudRepository[T] is the data-access contract every entity type supports.
The concrete implementation lives in crudkit/infrastructure/persistence/ and
is wired at the application boundary via dependency injection.

Design notes:
  - All methods are async to accommodate async database drivers (asyncpg / SQLAlchemy async).
  - T is the domain model type (never an ORM row or DTO); keys are integers.
  - Each method maps 1:1 to one query.  No retry, batching or consistency logic
    beyond the transaction the session wraps around the call.
  - Provider failures (e.g. StaleDataError on a version conflict) propagate
    unchanged.
  - Ordering is ascending identity everywhere.

Range conventions for the timestamp predicates:
  before(a, t)          a <  t
  since(a, t)           a >= t
  during(a, t1, t2)     t1 <= a <= t2
  not_during(a, t1, t2) a < t1 or a > t2
so before/since and during/not_during each partition the stored rows.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Generic, TypeVar

from crudkit.domain.models.entity import Entity
from crudkit.domain.models.enums import TextField, TimeStamp

T = TypeVar("T", bound=Entity)


class CrudRepository(ABC, Generic[T]):
    """Abstract CRUD interface for an entity type."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored entities."""

    @abstractmethod
    async def get(self, id: int) -> T | None:
        """Return the entity with the given primary key, or None if not found."""

    @abstractmethod
    async def list(self, limit: int | None = None, offset: int = 0) -> list[T]:
        """Return entities ordered by ascending id; all of them when limit is None."""

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Persist a new entity and return it with its id and version populated."""

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Persist changes to an existing entity and return the updated version.

        Raises EntityNotFoundError for an unknown id and StaleDataError when
        entity.version is behind the stored version.
        """

    @abstractmethod
    async def delete(self, id: int) -> None:
        """Remove the entity with the given primary key (EntityNotFoundError if absent)."""

    @abstractmethod
    async def find_by_named_query(
        self,
        query_name: str,
        parameters: Mapping[str, Any],
        limit: int | None = None,
        offset: int = 0,
    ) -> list[T]:
        """Run a predefined parameterized query (NamedQueryError if unknown)."""

    @abstractmethod
    async def before(self, attribute: TimeStamp, when: datetime) -> list[T]:
        ...

    @abstractmethod
    async def since(self, attribute: TimeStamp, when: datetime) -> list[T]:
        ...

    @abstractmethod
    async def during(self, attribute: TimeStamp, start: datetime, end: datetime) -> list[T]:
        ...

    @abstractmethod
    async def not_during(
        self, attribute: TimeStamp, start: datetime, end: datetime
    ) -> list[T]:
        ...

    @abstractmethod
    async def search(self, attribute: TextField | str, text: str) -> list[T]:
        """Case-sensitive substring match on a text attribute."""

    @abstractmethod
    async def search_insensitive(self, attribute: TextField | str, text: str) -> list[T]:
        """Case-insensitive substring match on a text attribute."""
