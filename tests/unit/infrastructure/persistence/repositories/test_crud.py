"""Tests for SqlCrudRepository: mapping, guards and session interaction.

No database is used here; see tests/integration for queries against SQLite.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.orm.exc import StaleDataError

from crudkit.domain.exceptions import (
    EntityNotFoundError,
    NamedQueryError,
    UnpersistedEntityError,
)
from crudkit.domain.models.people import Person
from crudkit.domain.models.projects import Project
from crudkit.infrastructure.persistence.registry import PEOPLE, PROJECTS
from crudkit.infrastructure.persistence.repositories.crud import SqlCrudRepository

T0_MS = 1_704_067_200_000  # 2024-01-01T00:00:00Z


def _orm_person(**overrides):
    defaults = {
        "id": 1,
        "version": 2,
        "name": "Ada",
        "email": "ada@example.com",
        "created": T0_MS,
        "modified": T0_MS + 1000,
        "accessed": T0_MS + 2000,
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _mock_session(scalar_result=None):
    session = AsyncMock()
    session.add = MagicMock()
    session.execute.return_value = MagicMock(
        scalar_one_or_none=MagicMock(return_value=scalar_result)
    )
    return session


def _people_repo(session=None):
    return SqlCrudRepository(PEOPLE, session or _mock_session())


# --- _to_domain mapping ---

def test_to_domain_returns_configured_domain_type():
    assert isinstance(_people_repo()._to_domain(_orm_person()), Person)


def test_to_domain_maps_identity_and_version():
    result = _people_repo()._to_domain(_orm_person(id=5, version=3))
    assert (result.id, result.version) == (5, 3)


def test_to_domain_converts_epoch_millis():
    result = _people_repo()._to_domain(_orm_person())
    assert result.created == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert result.accessed == datetime(2024, 1, 1, 0, 0, 2, tzinfo=timezone.utc)


def test_to_domain_maps_extra_fields():
    assert _people_repo()._to_domain(_orm_person()).email == "ada@example.com"


def test_to_domain_preserves_none_name():
    assert _people_repo()._to_domain(_orm_person(name=None)).name is None


# --- _copy_to_row mapping ---

def test_copy_to_row_writes_epoch_millis():
    row = SimpleNamespace()
    entity = Project(
        name="Apollo",
        description="moon",
        created=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    SqlCrudRepository(PROJECTS, _mock_session())._copy_to_row(entity, row)
    assert (row.name, row.description, row.created) == ("Apollo", "moon", T0_MS)


def test_copy_to_row_never_writes_id_or_version():
    row = SimpleNamespace()
    _people_repo()._copy_to_row(Person(id=9, version=4, name="Ada"), row)
    assert not hasattr(row, "id")
    assert not hasattr(row, "version")


# --- get ---

async def test_get_returns_none_when_not_found():
    assert await _people_repo(_mock_session(scalar_result=None)).get(1) is None


async def test_get_returns_domain_object_when_found():
    repo = _people_repo(_mock_session(scalar_result=_orm_person(name="Grace")))
    assert (await repo.get(1)).name == "Grace"


# --- update ---

async def test_update_raises_when_entity_not_found():
    repo = _people_repo(_mock_session(scalar_result=None))
    with pytest.raises(EntityNotFoundError):
        await repo.update(Person(id=1, version=2, name="Ada"))


async def test_update_raises_for_new_entity():
    with pytest.raises(UnpersistedEntityError):
        await _people_repo().update(Person(name="Ada"))


async def test_update_raises_stale_data_on_version_mismatch():
    repo = _people_repo(_mock_session(scalar_result=_orm_person(version=3)))
    with pytest.raises(StaleDataError):
        await repo.update(Person(id=1, version=2, name="Grace"))


async def test_update_copies_fields_and_flushes():
    row = _orm_person(version=2)
    session = _mock_session(scalar_result=row)
    result = await _people_repo(session).update(Person(id=1, version=2, name="Grace"))
    assert row.name == "Grace"
    assert result.name == "Grace"
    session.flush.assert_awaited_once()


# --- delete ---

async def test_delete_raises_when_entity_not_found():
    with pytest.raises(EntityNotFoundError):
        await _people_repo(_mock_session(scalar_result=None)).delete(1)


async def test_delete_removes_row():
    row = _orm_person()
    session = _mock_session(scalar_result=row)
    await _people_repo(session).delete(1)
    session.delete.assert_awaited_once_with(row)


# --- create guard ---

async def test_create_rejects_persisted_entity():
    with pytest.raises(AssertionError):
        await _people_repo().create(Person(id=1, name="Ada"))


# --- named queries ---

async def test_unknown_named_query_raises():
    with pytest.raises(NamedQueryError):
        await _people_repo().find_by_named_query("Person.nope", {})


async def test_named_query_from_other_entity_raises():
    with pytest.raises(NamedQueryError):
        await _people_repo().find_by_named_query("Project.findByName", {"name": "x"})


async def test_named_query_missing_parameter_raises():
    with pytest.raises(NamedQueryError):
        await _people_repo().find_by_named_query("Person.findByEmail", {})


async def test_named_query_requires_parameter_map():
    with pytest.raises(AssertionError):
        await _people_repo().find_by_named_query("Person.findByEmail", None)  # type: ignore[arg-type]


# --- pagination guards ---

async def test_list_rejects_negative_offset():
    with pytest.raises(AssertionError):
        await _people_repo().list(limit=5, offset=-1)


async def test_list_rejects_negative_limit():
    with pytest.raises(AssertionError):
        await _people_repo().list(limit=-1)


# --- text search guards ---

async def test_search_unknown_attribute_raises():
    with pytest.raises(ValueError):
        await SqlCrudRepository(PROJECTS, _mock_session()).search("email", "x")
