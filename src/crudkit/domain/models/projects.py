"""Project domain model."""

from __future__ import annotations

from .entity import Entity


class Project(Entity):
    description: str | None = None
