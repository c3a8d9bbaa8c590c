"""Entity base model.

Entity is the abstract root of every persistent, identity-bearing record.
Only subclasses can be constructed.  It is a pure domain object, with no
ORM or persistence concerns.

Identity:
  - id is None until the persistence layer assigns it on first create, and is
    never reassigned afterwards.
  - equality, hashing and ordering are defined by identity alone, never by
    content.  A new entity is equal only to itself and cannot be ordered;
    comparing it raises UnpersistedEntityError.

Timestamps are not maintained automatically.  Calling code keeps modified /
accessed current with touch_modified() / touch_accessed().
"""

from __future__ import annotations

import copy
import functools
from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from crudkit.domain.exceptions import EntityCopyError, UnpersistedEntityError

from .timestamps import normalise, utc_now

E = TypeVar("E", bound="Entity")

_TIMESTAMP_FIELDS = ("created", "modified", "accessed")


@functools.total_ordering
class Entity(BaseModel):
    """Abstract persistent entity with auditing fields and an optimistic version."""

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = None
    version: int = Field(default=0, ge=0)
    name: str | None = None
    created: datetime = Field(default_factory=utc_now)
    modified: datetime = Field(default_factory=utc_now)
    accessed: datetime = Field(default_factory=utc_now)

    @model_validator(mode="before")
    @classmethod
    def _share_construction_instant(cls, data: Any) -> Any:
        # All three timestamps start at the same instant unless given.
        if isinstance(data, dict) and any(f not in data for f in _TIMESTAMP_FIELDS):
            now = utc_now()
            data = {**{f: now for f in _TIMESTAMP_FIELDS}, **data}
        return data

    @field_validator(*_TIMESTAMP_FIELDS)
    @classmethod
    def _to_millisecond_utc(cls, value: datetime) -> datetime:
        return normalise(value)

    def model_post_init(self, __context: Any) -> None:
        if type(self) is Entity:
            raise TypeError("Entity is abstract; construct a concrete subclass")

    # --- identity ---

    @property
    def is_new(self) -> bool:
        return self.id is None

    def require_id(self) -> int:
        """Return the identity, or raise UnpersistedEntityError if there is none."""
        if self.id is None:
            raise UnpersistedEntityError(self)
        return self.id

    # --- timestamps ---

    def touch_modified(self, when: datetime | None = None) -> None:
        self.modified = when or utc_now()

    def touch_accessed(self, when: datetime | None = None) -> None:
        self.accessed = when or utc_now()

    # --- copying ---

    def _cloned_fields(self, include_id: bool) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        for field_name in type(self).model_fields:
            if field_name == "id" and not include_id:
                continue
            try:
                fields[field_name] = copy.deepcopy(getattr(self, field_name))
            except (TypeError, copy.Error, RecursionError) as exc:
                raise EntityCopyError(self, f"field '{field_name}': {exc}") from exc
        return fields

    def deep_copy(self: E) -> E:
        """Return a structural clone: a distinct instance equal to this one by identity."""
        return type(self).model_validate(self._cloned_fields(include_id=True))

    @classmethod
    def copy_of(cls: type[E], source: E) -> E:
        """Copy constructor.

        Every field is duplicated.  The identity is carried over only when the
        source is already persisted; a copy of a new entity is itself new.
        """
        assert source is not None
        return cls.model_validate(source._cloned_fields(include_id=not source.is_new))

    # --- identity semantics ---

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return False
        assert isinstance(other, Entity)
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash((type(self), self.id))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        if self is other:
            return False
        return self.require_id() < other.require_id()

    def __str__(self) -> str:
        return f"[{type(self).__name__}: {self.id} v{self.version} - {self.name}]"
