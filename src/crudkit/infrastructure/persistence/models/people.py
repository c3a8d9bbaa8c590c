"""People ORM model and its named queries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from sqlalchemy import Select, Text, UniqueConstraint, select
from sqlalchemy.orm import Mapped, mapped_column

from .entity import AuditedEntity, NamedQuery


class Person(AuditedEntity):
    __tablename__ = "people"
    __table_args__ = (UniqueConstraint("email", name="uq_people_email"),)

    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


def _find_by_email(parameters: Mapping[str, Any]) -> Select:
    return select(Person).where(Person.email == parameters["email"]).order_by(Person.id)


def _find_by_name_prefix(parameters: Mapping[str, Any]) -> Select:
    return (
        select(Person)
        .where(Person.name.startswith(parameters["prefix"], autoescape=True))
        .order_by(Person.id)
    )


PERSON_NAMED_QUERIES: dict[str, NamedQuery] = {
    "Person.findByEmail": _find_by_email,
    "Person.findByNamePrefix": _find_by_name_prefix,
}
