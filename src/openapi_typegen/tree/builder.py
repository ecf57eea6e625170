"""Builds a PathTreeNode tree mirroring every schema-bearing location in an
OpenAPI 3 document.

The document is the plain mapping produced by the loader. ``$ref`` objects are
not followed: a node for a reference records the reference and stops, the
referenced definition has its own node under components.
"""

import logging
from typing import Any

from ..errors import DuplicateOperationIdError
from .node import PathTreeNode
from .payload import (
    BasePayload,
    HeaderPayload,
    ParameterPayload,
    RequestBodyPayload,
    ResponsePayload,
    SchemaPayload,
    SecuritySchemePayload,
)

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

COMPOSITION_KEYWORDS = ("allOf", "oneOf", "anyOf")


def _ref(obj: Any) -> str:
    if isinstance(obj, dict):
        return obj.get("$ref", "")
    return ""


def _schema_node(path_element: str, schema: dict) -> PathTreeNode:
    """Create a node for a schema and descend into it unless it is a reference."""
    if not isinstance(schema, dict):
        # Boolean schemas (true/false) have no structure to describe.
        schema = {}
    node = PathTreeNode(
        path_element=path_element,
        payload=SchemaPayload(raw=schema),
        ref=_ref(schema),
    )
    if not node.ref:
        gather_nested_schemas(node, schema)
    return node


def gather_nested_schemas(parent: PathTreeNode, schema: dict) -> None:
    """Add children to ``parent`` for the nested structure of ``schema``.

    Exactly one of properties, allOf, oneOf or anyOf is expanded, in that
    order of priority. Composition branches are keyed by their index, so a
    path looks like .../allOf/0/... An additionalProperties child follows.
    """
    if not isinstance(schema, dict) or _ref(schema):
        return

    properties = schema.get("properties") or {}
    if properties:
        for prop_name, prop_schema in properties.items():
            parent.add_child(_schema_node(prop_name, prop_schema))
    else:
        for keyword in COMPOSITION_KEYWORDS:
            branches = schema.get(keyword) or []
            if branches:
                composition_node = parent.add_child(PathTreeNode(path_element=keyword))
                for i, branch in enumerate(branches):
                    composition_node.add_child(_schema_node(str(i), branch))
                break

    gather_additional_properties(parent, schema)


def gather_additional_properties(parent: PathTreeNode, schema: dict) -> None:
    additional = schema.get("additionalProperties")
    if additional is True:
        parent.add_child(PathTreeNode(path_element="additionalProperties"))
    elif isinstance(additional, dict):
        parent.add_child(_schema_node("additionalProperties", additional))


def gather_content(parent: PathTreeNode, content: dict | None) -> None:
    """Add one child per media type, eg "application/json", holding its schema.

    The same request body or response may carry a different schema per
    content type, so the content type is part of the path.
    """
    for content_type in sorted(content or {}):
        media_type = content[content_type] or {}
        schema = media_type.get("schema")
        if schema is None:
            parent.add_child(PathTreeNode(path_element=content_type))
        else:
            parent.add_child(_schema_node(content_type, schema))


def gather_parameters(parameters: list[dict], parent: PathTreeNode) -> None:
    """Create nodes for inline parameters under ``parent``.

    Referenced parameters are skipped, their definitions are reached through
    components/parameters.
    """
    for parameter in parameters:
        if _ref(parameter):
            continue
        node = PathTreeNode(
            path_element=parameter["name"],
            element_name=parameter["name"],
            payload=ParameterPayload(raw=parameter),
        )
        _gather_parameter_schema(node, parameter)
        parent.add_child(node)


def _gather_parameter_schema(node: PathTreeNode, parameter: dict) -> None:
    # Parameters and headers describe their value with either a schema or a
    # content map.
    if "schema" in parameter:
        gather_nested_schemas(node, parameter["schema"])
    elif "content" in parameter:
        gather_content(node, parameter["content"])


def _component_node(name: str, entry: dict, payload: BasePayload) -> PathTreeNode:
    return PathTreeNode(path_element=name, payload=payload, ref=_ref(entry))


def gather_schemas_from_components(components: dict) -> list[PathTreeNode]:
    """Gather all the explicitly named definitions in components."""
    result = []

    # components/schemas
    schemas = components.get("schemas") or {}
    if schemas:
        schemas_node = PathTreeNode(path_element="schemas", element_name="Schema")
        for name, schema in schemas.items():
            schemas_node.add_child(_schema_node(name, schema))
        result.append(schemas_node)

    # components/parameters and components/headers share a layout.
    for section, element_name, payload_type in (
        ("parameters", "Parameter", ParameterPayload),
        ("headers", "Header", HeaderPayload),
    ):
        entries = components.get(section) or {}
        if not entries:
            continue
        section_node = PathTreeNode(path_element=section, element_name=element_name)
        for name, entry in entries.items():
            node = _component_node(name, entry, payload_type(raw=entry))
            if not node.ref:
                _gather_parameter_schema(node, entry)
            section_node.add_child(node)
        result.append(section_node)

    # components/requestBodies and components/responses fan out by content type.
    for section, element_name, payload_type in (
        ("requestBodies", "RequestBody", RequestBodyPayload),
        ("responses", "Response", ResponsePayload),
    ):
        entries = components.get(section) or {}
        if not entries:
            continue
        section_node = PathTreeNode(path_element=section, element_name=element_name)
        for name, entry in entries.items():
            node = _component_node(name, entry, payload_type(raw=entry))
            if not node.ref:
                gather_content(node, entry.get("content"))
            section_node.add_child(node)
        result.append(section_node)

    # components/securitySchemes
    security_schemes = components.get("securitySchemes") or {}
    if security_schemes:
        section_node = PathTreeNode(path_element="securitySchemes", element_name="SecurityScheme")
        for name, entry in security_schemes.items():
            section_node.add_child(_component_node(name, entry, SecuritySchemePayload(raw=entry)))
        result.append(section_node)

    return result


def _gather_operation(operation_node: PathTreeNode, operation: dict) -> None:
    parameters = operation.get("parameters") or []
    if parameters:
        parameters_node = PathTreeNode(path_element="parameters", element_name="Parameter")
        gather_parameters(parameters, parameters_node)
        operation_node.add_child(parameters_node)

    request_body = operation.get("requestBody")
    if request_body:
        body_node = operation_node.add_child(
            PathTreeNode(
                path_element="requestBody",
                payload=RequestBodyPayload(raw=request_body),
                ref=_ref(request_body),
            )
        )
        if not body_node.ref:
            gather_content(body_node, request_body.get("content"))

    responses = operation.get("responses") or {}
    if responses:
        responses_node = operation_node.add_child(PathTreeNode(path_element="responses"))
        for status_code in sorted(responses, key=str):
            response = responses[status_code]
            response_node = responses_node.add_child(
                PathTreeNode(
                    path_element=str(status_code),
                    payload=ResponsePayload(raw=response),
                    ref=_ref(response),
                )
            )
            if not response_node.ref:
                gather_content(response_node, response.get("content"))


def build_schema_tree(spec: dict) -> PathTreeNode:
    """Walk all the schemas in the spec, and build a tree, based on path in the
    spec, that maps the path to the specific schema description.
    """
    root = PathTreeNode()

    components = spec.get("components")
    if components:
        components_node = root.add_child(PathTreeNode(path_element="components"))
        for section_node in gather_schemas_from_components(components):
            components_node.add_child(section_node)

    paths = spec.get("paths") or {}
    if paths:
        all_paths_node = root.add_child(PathTreeNode(path_element="paths"))
        operation_locations: dict[str, str] = {}

        for path in sorted(paths):
            path_item = paths[path] or {}
            path_node = all_paths_node.add_child(PathTreeNode(path_element=path))

            # Parameters shared by all operations of a path live under
            # /paths/<path>/parameters/<name>.
            path_parameters = path_item.get("parameters") or []
            if path_parameters:
                parameters_node = path_node.add_child(
                    PathTreeNode(path_element="parameters", element_name="Parameter")
                )
                gather_parameters(path_parameters, parameters_node)

            # Operation keys share the path node with "parameters", and a
            # method-name fallback can clash with a declared operationId.
            keys_in_path = {"parameters": f"parameters of {path}"} if path_parameters else {}

            for method in sorted(m for m in path_item if m in HTTP_METHODS):
                operation = path_item[method] or {}
                operation_id = operation.get("operationId") or method
                location = f"{method.upper()} {path}"

                if "operationId" in operation:
                    if operation_id in operation_locations:
                        raise DuplicateOperationIdError(
                            operation_id, operation_locations[operation_id], location
                        )
                    operation_locations[operation_id] = location
                else:
                    logger.debug("Operation %s has no operationId, using %r", location, method)

                if operation_id in keys_in_path:
                    raise DuplicateOperationIdError(operation_id, keys_in_path[operation_id], location)
                keys_in_path[operation_id] = location

                operation_node = path_node.add_child(
                    PathTreeNode(path_element=operation_id, element_name=method)
                )
                _gather_operation(operation_node, operation)

    return root
