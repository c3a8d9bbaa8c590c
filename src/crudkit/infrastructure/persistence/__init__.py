"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and SQLAlchemy mapper configuration)
and exports the repository implementation, the registry and the DI factories.
"""

from crudkit.infrastructure.persistence.models import *  # noqa: F401, F403
from crudkit.infrastructure.persistence.models import __all__ as _orm_all
from crudkit.infrastructure.persistence.registry import (
    PEOPLE,
    PROJECTS,
    EntityConfig,
    EntityRegistry,
    default_registry,
)
from crudkit.infrastructure.persistence.repositories import (
    SqlCrudRepository,
    get_repositories,
    get_repository,
)

__all__ = _orm_all + [
    "EntityConfig",
    "EntityRegistry",
    "PEOPLE",
    "PROJECTS",
    "default_registry",
    "SqlCrudRepository",
    "get_repository",
    "get_repositories",
]
