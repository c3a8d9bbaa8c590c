"""Projects ORM model and its named queries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from sqlalchemy import Select, Text, select
from sqlalchemy.orm import Mapped, mapped_column

from .entity import AuditedEntity, NamedQuery


class Project(AuditedEntity):
    __tablename__ = "projects"

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


def _find_by_name(parameters: Mapping[str, Any]) -> Select:
    return select(Project).where(Project.name == parameters["name"]).order_by(Project.id)


PROJECT_NAMED_QUERIES: dict[str, NamedQuery] = {
    "Project.findByName": _find_by_name,
}
