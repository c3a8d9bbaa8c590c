"""Tests for crudkit/domain/repositories/base.py."""

import pytest

from crudkit.domain.repositories.base import CrudRepository

_OPERATIONS = (
    "count", "get", "list", "create", "update", "delete", "find_by_named_query",
    "before", "since", "during", "not_during", "search", "search_insensitive",
)


def _async_stub():
    async def stub(*a, **kw):
        return None

    return stub


def test_repository_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        CrudRepository()  # type: ignore[abstract]


def test_repository_declares_every_operation_abstract():
    assert CrudRepository.__abstractmethods__ == frozenset(_OPERATIONS)


def test_repository_concrete_subclass_must_implement_all_methods():
    class _Partial(CrudRepository):
        async def get(self, id): return None
        async def list(self, limit=None, offset=0): return []
        # missing the rest

    with pytest.raises(TypeError):
        _Partial()  # type: ignore[abstract]


def test_repository_full_concrete_subclass_instantiates():
    _Full = type("_Full", (CrudRepository,), {name: _async_stub() for name in _OPERATIONS})
    assert _Full() is not None
