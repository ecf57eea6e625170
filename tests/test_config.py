import pytest

from openapi_typegen.config import Configuration, load_configuration
from openapi_typegen.errors import ConfigurationError
from openapi_typegen.typemapping import get_default_type_mapping

CONFIG = """
import-mapping:
  money:
    package: mycompany.money
    alias: m
type-mapping:
  integer:
    formats:
      int32:
        type: numpy.int32
        import: numpy
"""


class TestLoadConfiguration:
    def test_nothing_loads_defaults(self):
        cfg = load_configuration(None)
        assert cfg.import_mapping == {}
        assert cfg.type_overrides == {}
        assert cfg.type_mapping == get_default_type_mapping()

    def test_empty_document_loads_defaults(self):
        assert load_configuration("").type_mapping == get_default_type_mapping()

    def test_default_constructor_matches(self):
        assert Configuration().type_mapping == load_configuration(b"").type_mapping

    def test_sections_parsed(self):
        cfg = load_configuration(CONFIG)
        assert cfg.import_mapping["money"].package == "mycompany.money"
        assert cfg.import_mapping["money"].alias == "m"
        assert cfg.type_overrides["integer"].formats["int32"].type == "numpy.int32"

    def test_overrides_merged_onto_defaults(self):
        cfg = load_configuration(CONFIG)
        assert cfg.type_mapping["integer"].formats["int32"].type == "numpy.int32"
        assert cfg.type_mapping["integer"].formats["int32"].import_ == "numpy"
        assert cfg.type_mapping["integer"].formats["int64"].type == "int"
        assert cfg.type_mapping["string"] == get_default_type_mapping()["string"]

    def test_bytes_input(self):
        cfg = load_configuration(CONFIG.encode("utf-8"))
        assert "money" in cfg.import_mapping

    def test_invalid_yaml(self):
        with pytest.raises(ConfigurationError, match="loading configuration"):
            load_configuration("type-mapping: [unclosed\n")

    def test_wrong_shape(self):
        with pytest.raises(ConfigurationError):
            load_configuration("type-mapping:\n  integer: 12\n")

    def test_unknown_section_ignored(self):
        cfg = load_configuration("output-options:\n  skip: true\n" + CONFIG)
        assert cfg.import_mapping["money"].package == "mycompany.money"
        assert cfg.type_mapping["integer"].formats["int32"].type == "numpy.int32"

    def test_top_level_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match="mapping"):
            load_configuration("- a\n- b\n")
