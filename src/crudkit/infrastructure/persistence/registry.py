"""Per-entity configuration for the generic CRUD engine and REST resource.

One EntityConfig binds a domain model to its ORM model together with the
pieces that vary by entity type: the URL path, the overlay used by REST
updates, the named queries, and which text columns are searchable.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import InstrumentedAttribute

from crudkit.domain.models.entity import Entity
from crudkit.domain.models.enums import TextField, TimeStamp
from crudkit.domain.models.people import Person as DomainPerson
from crudkit.domain.models.projects import Project as DomainProject
from crudkit.domain.services.overlay import Overlay, overlay_name, overlay_person
from crudkit.infrastructure.persistence.models.entity import AuditedEntity, NamedQuery
from crudkit.infrastructure.persistence.models.people import PERSON_NAMED_QUERIES
from crudkit.infrastructure.persistence.models.people import Person as OrmPerson
from crudkit.infrastructure.persistence.models.projects import PROJECT_NAMED_QUERIES
from crudkit.infrastructure.persistence.models.projects import Project as OrmProject

E = TypeVar("E", bound=Entity)


@dataclass(frozen=True)
class EntityConfig(Generic[E]):
    """Everything the generic engine needs to know about one entity type.

    name is the singular element name used in XML; path is the plural URL
    segment (and XML collection element).  text_fields maps a search
    selector to an ORM column name.  extra_fields lists the columns beyond
    the common entity fields that are copied between domain and ORM.
    """

    name: str
    path: str
    domain_model: type[E]
    orm_model: type[AuditedEntity]
    overlay: Overlay = overlay_name
    named_queries: Mapping[str, NamedQuery] = field(default_factory=dict)
    text_fields: Mapping[str, str] = field(
        default_factory=lambda: {TextField.NAME.value: "name"}
    )
    extra_fields: tuple[str, ...] = ()

    def timestamp_column(self, attribute: TimeStamp) -> InstrumentedAttribute[Any]:
        return getattr(self.orm_model, TimeStamp(attribute).value)

    def text_column(self, attribute: TextField | str) -> InstrumentedAttribute[Any]:
        """Resolve a search selector to its column; ValueError when not searchable."""
        key = attribute.value if isinstance(attribute, TextField) else attribute.strip().lower()
        try:
            column_name = self.text_fields[key]
        except KeyError:
            choices = ", ".join(sorted(self.text_fields))
            raise ValueError(
                f"'{attribute}' is not a searchable {self.name} attribute "
                f"(expected one of: {choices})"
            ) from None
        return getattr(self.orm_model, column_name)


class EntityRegistry:
    """Entity configurations keyed by URL path."""

    def __init__(self, configs: list[EntityConfig[Any]] | None = None) -> None:
        self._configs: dict[str, EntityConfig[Any]] = {}
        for config in configs or []:
            self.register(config)

    def register(self, config: EntityConfig[Any]) -> EntityConfig[Any]:
        if config.path in self._configs:
            raise ValueError(f"An entity is already registered at '{config.path}'")
        self._configs[config.path] = config
        return config

    def get(self, path: str) -> EntityConfig[Any]:
        try:
            return self._configs[path]
        except KeyError:
            raise KeyError(f"No entity registered at '{path}'") from None

    def __contains__(self, path: object) -> bool:
        return path in self._configs

    def __iter__(self) -> Iterator[EntityConfig[Any]]:
        return iter(self._configs.values())

    def __len__(self) -> int:
        return len(self._configs)


PEOPLE = EntityConfig(
    name="person",
    path="people",
    domain_model=DomainPerson,
    orm_model=OrmPerson,
    overlay=overlay_person,
    named_queries=PERSON_NAMED_QUERIES,
    text_fields={"name": "name", "email": "email"},
    extra_fields=("email",),
)

PROJECTS = EntityConfig(
    name="project",
    path="projects",
    domain_model=DomainProject,
    orm_model=OrmProject,
    named_queries=PROJECT_NAMED_QUERIES,
    text_fields={"name": "name", "description": "description"},
    extra_fields=("description",),
)


def default_registry() -> EntityRegistry:
    """Registry holding the entity types shipped with crudkit."""
    return EntityRegistry([PEOPLE, PROJECTS])
