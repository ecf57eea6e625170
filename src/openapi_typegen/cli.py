"""CLI entry points for openapi-typegen."""

import logging
from pathlib import Path

import click

from openapi_typegen.config import Configuration, load_configuration
from openapi_typegen.errors import TypegenError
from openapi_typegen.generator.codegen import generate
from openapi_typegen.logging_config import setup_logging
from openapi_typegen.parser.loader import load_document
from openapi_typegen.tree.builder import build_schema_tree
from openapi_typegen.tree.node import PathTreeNode

logger = logging.getLogger(__name__)


def _load_config(config_path: Path | None) -> Configuration:
    if config_path is None:
        return Configuration()
    try:
        buf = config_path.read_bytes()
    except OSError as e:
        raise click.ClickException(f"error reading config file '{config_path}': {e}") from e
    return load_configuration(buf)


@click.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="A YAML config file that controls code generation.")
@click.option("--log-file", default="", help="A path where log messages will be written. Empty discards them.")
def main(spec_path: Path, config_path: Path | None, log_file: str):
    """Generate type definitions from an OpenAPI 3 spec file."""
    try:
        # An empty path means log messages are discarded.
        setup_logging(Path(log_file) if log_file else None)
    except OSError as e:
        raise click.ClickException(f"error opening log file '{log_file}': {e}") from e

    try:
        # The configuration is loaded first so a bad config aborts before any
        # work is done on the spec.
        cfg = _load_config(config_path)
        spec = load_document(spec_path)
        output = generate(spec, cfg)
    except TypegenError as e:
        logger.error("%s", e)
        raise click.ClickException(str(e)) from e

    click.echo(output, nl=False)


def _format_tree(node: PathTreeNode, indent_level: int = 0) -> list[str]:
    padding = "  " * indent_level
    if node.ref:
        lines = [f'{padding}{node.path_element} (Ref="{node.ref}")']
    else:
        lines = [f"{padding}{node.path_element}"]
    for name in sorted(node.children):
        lines.extend(_format_tree(node.children[name], indent_level + 1))
    return lines


@click.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def print_tree(spec_path: Path):
    """Print the schema tree of an OpenAPI 3 spec file."""
    try:
        spec = load_document(spec_path)
        root = build_schema_tree(spec)
    except TypegenError as e:
        raise click.ClickException(str(e)) from e

    click.echo("\n".join(_format_tree(root)))
