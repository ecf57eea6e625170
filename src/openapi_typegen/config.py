"""User configuration for openapi-typegen.

The configuration file is YAML with two optional sections::

    import-mapping:
      money:
        package: mycompany.money
        alias: m
    type-mapping:
      number:
        formats:
          decimal:
            type: m.Money
            import: money
"""

import logging

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from .errors import ConfigurationError
from .typemapping import TypeMapping, get_default_type_mapping, override_type_mapping

logger = logging.getLogger(__name__)


class ImportSpec(BaseModel):
    """A package referenced by an overridden type, with an optional alias."""

    package: str
    alias: str = ""


class Configuration(BaseModel):
    """Parsed configuration plus the effective (default + override) type mapping."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    import_mapping: dict[str, ImportSpec] = Field(default={}, alias="import-mapping")
    type_overrides: TypeMapping = Field(default={}, alias="type-mapping")

    _type_mapping: TypeMapping = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        self._type_mapping = override_type_mapping(get_default_type_mapping(), self.type_overrides)

    @property
    def type_mapping(self) -> TypeMapping:
        """The default type mapping with ``type-mapping`` overrides applied."""
        return self._type_mapping


def load_configuration(buf: str | bytes | None) -> Configuration:
    """Parse a YAML configuration document.

    Empty input produces the default configuration. Any YAML or shape error is
    raised as ConfigurationError; nothing is partially applied.
    """
    try:
        data = yaml.safe_load(buf) if buf else None
    except yaml.YAMLError as e:
        raise ConfigurationError(f"loading configuration: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"loading configuration: expected a mapping at the top level, got {type(data).__name__}"
        )

    known = {"import-mapping", "type-mapping", "import_mapping", "type_overrides"}
    for section in sorted(set(data) - known, key=str):
        logger.debug("Ignoring unknown configuration section %r", section)

    try:
        cfg = Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"loading configuration: {e}") from e

    logger.debug(
        "Loaded configuration with %d import mappings and %d type overrides",
        len(cfg.import_mapping),
        len(cfg.type_overrides),
    )
    return cfg
