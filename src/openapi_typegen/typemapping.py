"""OpenAPI type/format to target type mapping.

The bundled default table lives in ``defaults/typemapping.yaml``. A user may
supply an override table of the same shape in the ``type-mapping`` section of
the configuration file; the two are merged with :func:`override_type_mapping`.
"""

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

DEFAULTS_DIR = Path(__file__).parent / "defaults"


class TargetType(BaseModel):
    """A target type name, eg ``datetime.datetime``, with the import it needs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str
    nullable: bool = False
    import_: str = Field(default="", alias="import")


class TypesForFormats(BaseModel):
    """Target types for one OpenAPI primitive type, keyed by format."""

    model_config = ConfigDict(frozen=True)

    default: str = ""
    formats: dict[str, TargetType] = {}


TypeMapping = dict[str, TypesForFormats]

_type_mapping_adapter = TypeAdapter(TypeMapping)


def parse_type_mapping(data: object) -> TypeMapping:
    """Validate a decoded YAML/JSON value as a type mapping table."""
    return _type_mapping_adapter.validate_python(data or {})


@lru_cache(maxsize=1)
def _load_default_type_mapping() -> TypeMapping:
    # The asset ships with the package and is covered by tests, so any
    # failure here is a packaging bug and is allowed to propagate.
    text = (DEFAULTS_DIR / "typemapping.yaml").read_text(encoding="utf-8")
    return parse_type_mapping(yaml.safe_load(text))


def get_default_type_mapping() -> TypeMapping:
    """Return a copy of the bundled default type mapping."""
    return {name: types.model_copy(deep=True) for name, types in _load_default_type_mapping().items()}


def override_type_mapping(base: TypeMapping | None, override: TypeMapping | None) -> TypeMapping:
    """Return a new mapping where values in ``base`` are replaced or
    supplemented by values from ``override``.

    Defaults are replaced per type when the override supplies a non-empty one;
    formats are merged per format name, so overriding ``integer/int32`` keeps
    every other integer format from ``base``.
    """
    result: TypeMapping = {}
    for mapping in (base or {}, override or {}):
        for type_name, types in mapping.items():
            current = result.get(type_name, TypesForFormats())
            result[type_name] = TypesForFormats(
                default=types.default or current.default,
                formats={**current.formats, **types.formats},
            )
    return result


def resolve_type(
    mapping: TypeMapping,
    type_name: str,
    fmt: str = "",
    nullable: bool = False,
) -> TargetType | None:
    """Look up the target type for an OpenAPI type and format.

    A format listed under the type wins; otherwise the type's default is used.
    Returns None when the type is unknown or has no default.
    """
    types = mapping.get(type_name)
    if types is None:
        return None

    target = types.formats.get(fmt) if fmt else None
    if target is None:
        if not types.default:
            return None
        target = TargetType(type=types.default)

    if nullable and not target.nullable:
        target = target.model_copy(update={"nullable": True})
    return target
