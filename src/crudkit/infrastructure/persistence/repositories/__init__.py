"""Concrete SQLAlchemy repository implementation.

Exports SqlCrudRepository and the get_repository() / get_repositories()
factories for wiring at the application boundary (FastAPI dependency
injection).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from crudkit.infrastructure.persistence.registry import EntityConfig, EntityRegistry

from .crud import SqlCrudRepository


def get_repository(config: EntityConfig[Any], session: AsyncSession) -> SqlCrudRepository[Any]:
    """Construct the repository for one entity type bound to the given session."""
    return SqlCrudRepository(config, session)


def get_repositories(
    registry: EntityRegistry, session: AsyncSession
) -> dict[str, SqlCrudRepository[Any]]:
    """Construct a repository per registered entity, keyed by path.

        repos = get_repositories(default_registry(), session)
        person = await repos["people"].get(person_id)
    """
    return {config.path: SqlCrudRepository(config, session) for config in registry}


__all__ = [
    "SqlCrudRepository",
    "get_repository",
    "get_repositories",
]
