"""Type definitions derived from the flattened schema index."""

import logging
from typing import Any

from pydantic import BaseModel

from ..config import Configuration
from ..errors import UnknownPayloadError
from ..tree.flatten import PathTreeNodesByPath
from ..tree.payload import (
    HeaderPayload,
    ParameterPayload,
    RequestBodyPayload,
    ResponsePayload,
    SchemaPayload,
    SecuritySchemePayload,
)
from ..typemapping import TargetType, TypeMapping, resolve_type

logger = logging.getLogger(__name__)


class TypeDefinition(BaseModel):
    """A type to emit for one location in the document."""

    # Path of our traversal down the document to reach the schema. It is like
    # a $ref path, but goes deeper into composite types.
    schema_path: str
    name: str = ""
    target_type: TargetType | None = None
    raw_schema: dict[str, Any] = {}


def generate_type_definitions(nodes: PathTreeNodesByPath, cfg: Configuration) -> list[TypeDefinition]:
    """Create type definitions for every indexed node, in sorted path order."""
    type_definitions = []
    for node_path in sorted(nodes):
        node = nodes[node_path]

        # A reference gets its type from the referenced definition, not from
        # its use.
        if node.ref:
            continue

        payload = node.payload
        if isinstance(payload, SchemaPayload):
            type_definitions.extend(
                schema_to_type_definitions(node_path, node.friendly_name or "", payload, cfg.type_mapping)
            )
        elif isinstance(
            payload,
            (ParameterPayload, HeaderPayload, RequestBodyPayload, ResponsePayload, SecuritySchemePayload),
        ):
            logger.debug("Skipping %s at %s", payload.kind, node_path)
        else:
            raise UnknownPayloadError(node_path, payload)

    return type_definitions


def schema_to_type_definitions(
    schema_path: str,
    name: str,
    schema: SchemaPayload,
    type_mapping: TypeMapping,
) -> list[TypeDefinition]:
    """Create the type definitions for one schema.

    The mapping is 1:N rather than 1:1 since some schemas need helper types,
    such as an additionalProperties container which can not be inlined.
    Currently only the schema's own definition is produced.
    """
    target_type = None
    if schema.type:
        target_type = resolve_type(type_mapping, schema.type, schema.format, schema.nullable)
    return [
        TypeDefinition(
            schema_path=schema_path,
            name=name,
            target_type=target_type,
            raw_schema=schema.raw,
        )
    ]
