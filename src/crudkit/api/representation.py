"""JSON / XML representations of entities.

The two formats are interchangeable.  Responses follow the Accept header and
request bodies follow Content-Type: application/xml or text/xml selects XML,
anything else selects JSON.

XML layout:
    <person><id>1</id><version>1</version><name>Ada</name>...</person>
    <people><person>...</person><person>...</person></people>
    <namedQuery name="Person.findByEmail">
        <parameter name="email">ada@example.com</parameter>
    </namedQuery>
Fields whose value is None are omitted.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from datetime import datetime
from typing import Any, TypeVar

from fastapi import Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from crudkit.api.errors import InvalidRequestError
from crudkit.domain.models.entity import Entity
from crudkit.infrastructure.persistence.registry import EntityConfig

E = TypeVar("E", bound=Entity)

XML_MEDIA_TYPES = ("application/xml", "text/xml")


class XMLResponse(Response):
    media_type = "application/xml"


class NamedQueryRequest(BaseModel):
    """Body of PUT /named: the query name and its parameter map."""

    model_config = ConfigDict(populate_by_name=True)

    query_name: str = Field(alias="queryName", min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)


def is_xml(media_type: str | None) -> bool:
    if not media_type:
        return False
    return any(xml_type in media_type.lower() for xml_type in XML_MEDIA_TYPES)


def wants_xml(request: Request) -> bool:
    return is_xml(request.headers.get("accept"))


# --- XML encoding ---

def _xml_text(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def entity_to_element(config: EntityConfig[Any], entity: Entity) -> ET.Element:
    element = ET.Element(config.name)
    for field_name in type(entity).model_fields:
        value = getattr(entity, field_name)
        if value is None:
            continue
        ET.SubElement(element, field_name).text = _xml_text(value)
    return element


def _xml_bytes(element: ET.Element) -> bytes:
    return ET.tostring(element, encoding="utf-8", xml_declaration=True)


# --- rendering ---

def render_entity(request: Request, config: EntityConfig[Any], entity: Entity) -> Response:
    if wants_xml(request):
        return XMLResponse(content=_xml_bytes(entity_to_element(config, entity)))
    return JSONResponse(content=entity.model_dump(mode="json"))


def render_entities(
    request: Request, config: EntityConfig[Any], entities: Sequence[Entity]
) -> Response:
    if wants_xml(request):
        root = ET.Element(config.path)
        root.extend([entity_to_element(config, entity) for entity in entities])
        return XMLResponse(content=_xml_bytes(root))
    return JSONResponse(content=[entity.model_dump(mode="json") for entity in entities])


# --- parsing ---

def _parse_xml(body: bytes) -> ET.Element:
    try:
        return ET.fromstring(body)
    except ET.ParseError as exc:
        raise InvalidRequestError(f"Malformed XML body: {exc}") from exc


async def parse_entity(request: Request, config: EntityConfig[E]) -> E:
    """Build a domain entity from the request body in either format."""
    body = await request.body()
    try:
        if is_xml(request.headers.get("content-type")):
            root = _parse_xml(body)
            fields = {child.tag: child.text for child in root if child.text is not None}
            return config.domain_model.model_validate(fields)
        return config.domain_model.model_validate_json(body)
    except ValidationError as exc:
        raise InvalidRequestError(f"Invalid {config.name}: {exc}") from exc


async def parse_named_query(request: Request) -> NamedQueryRequest:
    body = await request.body()
    try:
        if is_xml(request.headers.get("content-type")):
            root = _parse_xml(body)
            parameters = {
                child.get("name"): child.text
                for child in root.iter("parameter")
                if child.get("name")
            }
            return NamedQueryRequest(query_name=root.get("name", ""), parameters=parameters)
        return NamedQueryRequest.model_validate_json(body)
    except ValidationError as exc:
        raise InvalidRequestError(f"Invalid named query request: {exc}") from exc
