"""End to end pipeline: document -> tree -> index -> type definitions."""

import logging

import yaml

from ..config import Configuration
from ..tree.builder import build_schema_tree
from ..tree.flatten import assign_friendly_names, flatten_tree
from .typedef import TypeDefinition, generate_type_definitions

logger = logging.getLogger(__name__)


def generate(spec: dict, cfg: Configuration | None = None) -> str:
    """Run the pipeline over a loaded document and render the result."""
    if cfg is None:
        cfg = Configuration()

    tree = build_schema_tree(spec)
    schemas_by_path = flatten_tree(tree)

    logger.debug("Found paths:")
    for path in sorted(schemas_by_path):
        logger.debug("   %s", path)

    assign_friendly_names(schemas_by_path)
    type_definitions = generate_type_definitions(schemas_by_path, cfg)
    logger.info("Generated %d type definitions", len(type_definitions))

    return render_type_definitions(type_definitions)


def render_type_definitions(type_definitions: list[TypeDefinition]) -> str:
    """Render type definitions as a YAML list, one entry per definition."""
    entries = []
    for td in type_definitions:
        entry = {"schema_path": td.schema_path, "name": td.name}
        if td.target_type is not None:
            entry["type"] = td.target_type.type
            if td.target_type.nullable:
                entry["nullable"] = True
            if td.target_type.import_:
                entry["import"] = td.target_type.import_
        entries.append(entry)
    return yaml.safe_dump(entries, sort_keys=False, allow_unicode=True)
