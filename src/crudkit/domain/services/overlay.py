"""Overlay hooks for REST updates.

An overlay copies the client-editable subset of an incoming entity onto the
persisted one.  Anything an overlay does not copy cannot be changed through
an update request.  Each entity configuration picks its overlay; there is no
general rule for which fields beyond name are editable.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from crudkit.domain.models.entity import Entity
from crudkit.domain.models.people import Person

E = TypeVar("E", bound=Entity)

Overlay = Callable[[E, E], E]


def overlay_name(incoming: E, existing: E) -> E:
    """Copy name (when given) from incoming onto existing and return existing."""
    assert incoming is not None
    assert existing is not None
    if incoming.name is not None:
        existing.name = incoming.name
    return existing


def overlay_person(incoming: Person, existing: Person) -> Person:
    overlay_name(incoming, existing)
    if incoming.email is not None:
        existing.email = incoming.email
    return existing
