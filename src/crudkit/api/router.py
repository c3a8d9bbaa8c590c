"""Generic REST resource for one entity type.

build_crud_router(config) maps HTTP verbs and path / query parameters onto
the CrudRepository operations for the configured entity:

    GET    /count                      count (text/plain)
    GET    /before|/since              ?attribute=&date=         (epoch ms)
    GET    /during|/notduring          ?attribute=&date1=&date2= (epoch ms)
    GET    /search                     ?attribute=&querystring=[&insensitive=]
    PUT    /named                      named query, all results
    PUT    /named/{first}/{max}        named query, one page
    GET    /                           all entities
    POST   /                           create
    GET    /{id}                       one entity
    GET    /{first}/{max}              one page
    PUT    /{id}                       overlay the body onto the stored entity, save
    DELETE /{id}                       delete

Preconditions are asserted: violating them is a programming error in the
client, not a recoverable request error.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from crudkit.api.errors import InvalidRequestError
from crudkit.api.representation import (
    parse_entity,
    parse_named_query,
    render_entities,
    render_entity,
)
from crudkit.domain.exceptions import EntityNotFoundError
from crudkit.domain.models.enums import TimeStamp
from crudkit.domain.models.timestamps import from_epoch_millis
from crudkit.infrastructure.database import get_session
from crudkit.infrastructure.persistence.registry import EntityConfig
from crudkit.infrastructure.persistence.repositories import SqlCrudRepository, get_repository

logger = logging.getLogger(__name__)

COUNT = "count"
NAMED = "named"
BEFORE = "before"
SINCE = "since"
DURING = "during"
NOT_DURING = "notduring"
SEARCH = "search"


def _timestamp(attribute: str | None) -> TimeStamp:
    assert attribute is not None
    try:
        return TimeStamp.parse(attribute)
    except ValueError as exc:
        raise InvalidRequestError(str(exc)) from exc


def build_crud_router(config: EntityConfig[Any]) -> APIRouter:
    """Create the REST resource for one entity type, mounted at /<config.path>."""
    router = APIRouter(prefix=f"/{config.path}", tags=[config.path])

    def get_repo(session: AsyncSession = Depends(get_session)) -> SqlCrudRepository[Any]:
        return get_repository(config, session)

    # Fixed segments are declared before /{id} so they are matched first.

    @router.get(f"/{COUNT}", response_class=PlainTextResponse)
    async def count(repo: SqlCrudRepository[Any] = Depends(get_repo)) -> str:
        return str(await repo.count())

    @router.get(f"/{BEFORE}")
    async def before(
        request: Request,
        attribute: str | None = None,
        date: int = 0,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        selector = _timestamp(attribute)
        assert date > 0
        entities = await repo.before(selector, from_epoch_millis(date))
        return render_entities(request, config, entities)

    @router.get(f"/{SINCE}")
    async def since(
        request: Request,
        attribute: str | None = None,
        date: int = 0,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        selector = _timestamp(attribute)
        assert date > 0
        entities = await repo.since(selector, from_epoch_millis(date))
        return render_entities(request, config, entities)

    @router.get(f"/{DURING}")
    async def during(
        request: Request,
        attribute: str | None = None,
        date1: int = 0,
        date2: int = 0,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        selector = _timestamp(attribute)
        assert date1 > 0
        assert date2 > 0
        entities = await repo.during(
            selector, from_epoch_millis(date1), from_epoch_millis(date2)
        )
        return render_entities(request, config, entities)

    @router.get(f"/{NOT_DURING}")
    async def not_during(
        request: Request,
        attribute: str | None = None,
        date1: int = 0,
        date2: int = 0,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        selector = _timestamp(attribute)
        assert date1 > 0
        assert date2 > 0
        entities = await repo.not_during(
            selector, from_epoch_millis(date1), from_epoch_millis(date2)
        )
        return render_entities(request, config, entities)

    @router.get(f"/{SEARCH}")
    async def search(
        request: Request,
        attribute: str | None = None,
        querystring: str | None = None,
        insensitive: bool = False,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        assert attribute is not None
        assert querystring is not None
        try:
            config.text_column(attribute)
        except ValueError as exc:
            raise InvalidRequestError(str(exc)) from exc
        if insensitive:
            entities = await repo.search_insensitive(attribute, querystring)
        else:
            entities = await repo.search(attribute, querystring)
        return render_entities(request, config, entities)

    @router.put(f"/{NAMED}")
    async def get_by_named_query(
        request: Request,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        named = await parse_named_query(request)
        entities = await repo.find_by_named_query(named.query_name, named.parameters)
        return render_entities(request, config, entities)

    @router.put(f"/{NAMED}/{{first}}/{{max_results}}")
    async def get_by_named_query_range(
        request: Request,
        first: int,
        max_results: int,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        assert first >= 0
        assert max_results >= 0
        named = await parse_named_query(request)
        entities = await repo.find_by_named_query(
            named.query_name, named.parameters, limit=max_results, offset=first
        )
        return render_entities(request, config, entities)

    @router.get("/")
    async def get_all(
        request: Request,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        return render_entities(request, config, await repo.list())

    @router.post("/")
    async def create(
        request: Request,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        incoming = await parse_entity(request, config)
        # Identity and version belong to the persistence layer.
        entity = incoming.model_copy(update={"id": None, "version": 0})
        created = await repo.create(entity)
        logger.info("Created %s", created)
        return render_entity(request, config, created)

    @router.get("/{id}")
    async def get_by_id(
        request: Request,
        id: int,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        assert id >= 0
        entity = await repo.get(id)
        if entity is None:
            raise EntityNotFoundError(config.name, id)
        return render_entity(request, config, entity)

    @router.get("/{first}/{max_results}")
    async def get_range(
        request: Request,
        first: int,
        max_results: int,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        assert first >= 0
        assert max_results >= 0
        return render_entities(request, config, await repo.list(limit=max_results, offset=first))

    @router.put("/{id}")
    async def update(
        request: Request,
        id: int,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        assert id >= 0
        incoming = await parse_entity(request, config)
        existing = await repo.get(id)
        if existing is None:
            raise EntityNotFoundError(config.name, id)
        updated = await repo.update(config.overlay(incoming, existing))
        logger.info("Updated %s", updated)
        return render_entity(request, config, updated)

    @router.delete("/{id}")
    async def delete(
        id: int,
        repo: SqlCrudRepository[Any] = Depends(get_repo),
    ) -> Response:
        assert id >= 0
        await repo.delete(id)
        logger.info("Deleted %s %s", config.name, id)
        return Response(status_code=200)

    return router
