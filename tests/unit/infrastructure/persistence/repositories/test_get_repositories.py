"""Tests for the get_repository() / get_repositories() DI factories."""

from unittest.mock import AsyncMock

from crudkit.infrastructure.persistence.registry import PEOPLE, default_registry
from crudkit.infrastructure.persistence.repositories import (
    SqlCrudRepository,
    get_repositories,
    get_repository,
)


def test_get_repository_returns_crud_repository():
    assert isinstance(get_repository(PEOPLE, AsyncMock()), SqlCrudRepository)


def test_get_repository_binds_config():
    assert get_repository(PEOPLE, AsyncMock()).config is PEOPLE


def test_get_repositories_keyed_by_path():
    repos = get_repositories(default_registry(), AsyncMock())
    assert set(repos) == {"people", "projects"}


def test_get_repositories_share_session():
    session = AsyncMock()
    repos = get_repositories(default_registry(), session)
    assert all(repo._session is session for repo in repos.values())
