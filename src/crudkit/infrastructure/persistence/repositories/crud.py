"""SQLAlchemy implementation of CrudRepository, driven by an EntityConfig.

One engine serves every entity type; the config supplies the ORM class, the
extra columns to copy, the named queries and the searchable text columns.

Writes flush immediately so that generated ids, bumped versions and version
conflicts surface inside the call.  Commit / rollback belongs to the session
dependency.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, Select, func, not_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from crudkit.domain.exceptions import EntityNotFoundError, NamedQueryError
from crudkit.domain.models.entity import Entity
from crudkit.domain.models.enums import TextField, TimeStamp
from crudkit.domain.models.timestamps import from_epoch_millis, to_epoch_millis
from crudkit.domain.repositories.base import CrudRepository
from crudkit.infrastructure.persistence.models.entity import AuditedEntity
from crudkit.infrastructure.persistence.registry import EntityConfig

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class SqlCrudRepository(CrudRepository[E]):
    def __init__(self, config: EntityConfig[E], session: AsyncSession) -> None:
        self._config = config
        self._session = session

    @property
    def config(self) -> EntityConfig[E]:
        return self._config

    # --- mapping ---

    def _to_domain(self, row: AuditedEntity) -> E:
        fields: dict[str, Any] = {
            "id": row.id,
            "version": row.version,
            "name": row.name,
            "created": from_epoch_millis(row.created),
            "modified": from_epoch_millis(row.modified),
            "accessed": from_epoch_millis(row.accessed),
        }
        for extra in self._config.extra_fields:
            fields[extra] = getattr(row, extra)
        return self._config.domain_model.model_validate(fields)

    def _copy_to_row(self, entity: E, row: AuditedEntity) -> None:
        row.name = entity.name
        row.created = to_epoch_millis(entity.created)
        row.modified = to_epoch_millis(entity.modified)
        row.accessed = to_epoch_millis(entity.accessed)
        for extra in self._config.extra_fields:
            setattr(row, extra, getattr(entity, extra))

    # --- helpers ---

    @property
    def _orm(self) -> type[AuditedEntity]:
        return self._config.orm_model

    async def _fetch(self, stmt: Select, limit: int | None = None, offset: int = 0) -> list[E]:
        assert offset >= 0
        assert limit is None or limit >= 0
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars()]

    async def _where(self, criterion: ColumnElement[bool]) -> list[E]:
        return await self._fetch(select(self._orm).where(criterion).order_by(self._orm.id))

    async def _get_row(self, id: int) -> AuditedEntity | None:
        stmt = select(self._orm).where(self._orm.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    # --- CRUD ---

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(self._orm))
        return result.scalar_one()

    async def get(self, id: int) -> E | None:
        row = await self._get_row(id)
        return self._to_domain(row) if row else None

    async def list(self, limit: int | None = None, offset: int = 0) -> list[E]:
        return await self._fetch(select(self._orm).order_by(self._orm.id), limit, offset)

    async def create(self, entity: E) -> E:
        assert entity is not None
        assert entity.is_new
        row = self._orm()
        self._copy_to_row(entity, row)
        self._session.add(row)
        await self._session.flush()
        # The caller's instance stops being new once the row exists.
        entity.id = row.id
        entity.version = row.version
        logger.debug("Created %s %s", self._config.name, row.id)
        return entity

    async def update(self, entity: E) -> E:
        assert entity is not None
        entity_id = entity.require_id()
        row = await self._get_row(entity_id)
        if row is None:
            raise EntityNotFoundError(self._config.name, entity_id)
        if row.version != entity.version:
            raise StaleDataError(
                f"{self._config.name} {entity_id} is at version {row.version}, "
                f"update was based on version {entity.version}"
            )
        self._copy_to_row(entity, row)
        await self._session.flush()
        logger.debug("Updated %s %s to version %s", self._config.name, row.id, row.version)
        return self._to_domain(row)

    async def delete(self, id: int) -> None:
        row = await self._get_row(id)
        if row is None:
            raise EntityNotFoundError(self._config.name, id)
        await self._session.delete(row)
        await self._session.flush()
        logger.debug("Deleted %s %s", self._config.name, id)

    async def find_by_named_query(
        self,
        query_name: str,
        parameters: Mapping[str, Any],
        limit: int | None = None,
        offset: int = 0,
    ) -> list[E]:
        assert parameters is not None
        try:
            build = self._config.named_queries[query_name]
        except KeyError:
            raise NamedQueryError(query_name, f"not defined for {self._config.name}") from None
        try:
            stmt = build(parameters)
        except KeyError as exc:
            raise NamedQueryError(query_name, f"missing parameter {exc}") from exc
        return await self._fetch(stmt, limit, offset)

    # --- timestamp predicates ---

    async def before(self, attribute: TimeStamp, when: datetime) -> list[E]:
        column = self._config.timestamp_column(attribute)
        return await self._where(column < to_epoch_millis(when))

    async def since(self, attribute: TimeStamp, when: datetime) -> list[E]:
        column = self._config.timestamp_column(attribute)
        return await self._where(column >= to_epoch_millis(when))

    async def during(self, attribute: TimeStamp, start: datetime, end: datetime) -> list[E]:
        column = self._config.timestamp_column(attribute)
        return await self._where(column.between(to_epoch_millis(start), to_epoch_millis(end)))

    async def not_during(
        self, attribute: TimeStamp, start: datetime, end: datetime
    ) -> list[E]:
        column = self._config.timestamp_column(attribute)
        return await self._where(
            not_(column.between(to_epoch_millis(start), to_epoch_millis(end)))
        )

    # --- text search ---

    async def search(self, attribute: TextField | str, text: str) -> list[E]:
        assert text is not None
        column = self._config.text_column(attribute)
        return await self._where(column.contains(text, autoescape=True))

    async def search_insensitive(self, attribute: TextField | str, text: str) -> list[E]:
        assert text is not None
        column = self._config.text_column(attribute)
        return await self._where(column.icontains(text, autoescape=True))
