"""Abstract ORM base for audited entities.

Timestamps are stored as BIGINT epoch milliseconds.  version is SQLAlchemy's
version_id_col: the ORM bumps it on every UPDATE and raises StaleDataError
when the row's version changed underneath the session.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Optional

from sqlalchemy import BigInteger, Integer, Select, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from crudkit.infrastructure.database import Base

# Named query: parameter map -> SELECT over the owning ORM class.
NamedQuery = Callable[[Mapping[str, Any]], Select]


class AuditedEntity(Base):
    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created: Mapped[int] = mapped_column(BigInteger, nullable=False)  # epoch ms
    modified: Mapped[int] = mapped_column(BigInteger, nullable=False)  # epoch ms
    accessed: Mapped[int] = mapped_column(BigInteger, nullable=False)  # epoch ms

    @declared_attr.directive
    def __mapper_args__(cls) -> dict[str, Any]:
        return {"version_id_col": cls.__table__.c.version}
