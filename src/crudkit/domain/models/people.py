"""Person domain model."""

from __future__ import annotations

from .entity import Entity


class Person(Entity):
    """A named person; email is optional and unique when present."""

    email: str | None = None
