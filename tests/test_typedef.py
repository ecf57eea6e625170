from pathlib import Path

import pytest
import yaml

from openapi_typegen.config import Configuration, load_configuration
from openapi_typegen.errors import UnknownPayloadError
from openapi_typegen.generator.typedef import generate_type_definitions
from openapi_typegen.tree.builder import build_schema_tree
from openapi_typegen.tree.flatten import assign_friendly_names, flatten_tree
from openapi_typegen.tree.node import PathTreeNode
from openapi_typegen.tree.payload import SchemaPayload

FIXTURES = Path(__file__).parent / "fixtures"


def _index():
    spec = yaml.safe_load((FIXTURES / "all_components.yaml").read_text(encoding="utf-8"))
    index = flatten_tree(build_schema_tree(spec))
    assign_friendly_names(index)
    return index


@pytest.fixture
def type_defs():
    return {td.schema_path: td for td in generate_type_definitions(_index(), Configuration())}


class TestGenerateTypeDefinitions:
    def test_sorted_by_path(self):
        paths = [td.schema_path for td in generate_type_definitions(_index(), Configuration())]
        assert paths == sorted(paths)

    def test_only_schemas_produce_definitions(self, type_defs):
        assert "components/schemas/SimpleObject" in type_defs
        assert "components/parameters/Filter/Field" in type_defs
        assert "components/parameters/PageToken" not in type_defs
        assert "components/headers/RateLimit" not in type_defs
        assert "components/requestBodies/MultiContent" not in type_defs
        assert "components/securitySchemes/ApiKey" not in type_defs
        assert "paths//pets/listPets/responses/200" not in type_defs
        assert "paths//pets/listPets/responses/200/application/json" in type_defs

    def test_primitive_types_resolved(self, type_defs):
        prop1 = type_defs["components/schemas/ObjectWithAnonymousType/CustomProperty/Field2/Prop1"]
        assert prop1.target_type.type == "datetime.datetime"
        assert prop1.target_type.import_ == "datetime"
        assert type_defs["components/schemas/SimpleObject"].target_type.type == "dict"
        assert type_defs["components/schemas/Choice/oneOf/1"].target_type.type == "int"

    def test_nullable(self, type_defs):
        target = type_defs["components/schemas/NullableDate"].target_type
        assert target.type == "datetime.date"
        assert target.nullable is True

    def test_untyped_schema(self, type_defs):
        assert type_defs["components/schemas/ComposedObject"].target_type is None

    def test_names_and_raw_schema(self, type_defs):
        td = type_defs["components/schemas/SimpleObject"]
        assert td.name == "SimpleObject"
        assert td.raw_schema["type"] == "object"

    def test_type_overrides(self):
        cfg = load_configuration("type-mapping:\n  integer:\n    formats:\n      int64:\n        type: numpy.int64\n        import: numpy\n")
        type_defs = {td.schema_path: td for td in generate_type_definitions(_index(), cfg)}
        target = type_defs["components/schemas/Choice/oneOf/1"].target_type
        assert target.type == "numpy.int64"
        assert target.import_ == "numpy"
        assert type_defs["components/schemas/SimpleObject/Name"].target_type.type == "str"

    def test_references_skipped(self):
        node = PathTreeNode(path_element="x", payload=SchemaPayload(raw={"$ref": "#/components/schemas/X"}), ref="#/components/schemas/X")
        assert generate_type_definitions({"x": node}, Configuration()) == []

    def test_unknown_payload(self):
        node = PathTreeNode(path_element="x", payload=object())
        with pytest.raises(UnknownPayloadError) as exc_info:
            generate_type_definitions({"components/x": node}, Configuration())
        assert exc_info.value.path == "components/x"
        assert "components/x" in str(exc_info.value)

    def test_type_list_with_null(self):
        node = PathTreeNode(path_element="x", payload=SchemaPayload(raw={"type": ["null", "integer"]}))
        (td,) = generate_type_definitions({"x": node}, Configuration())
        assert td.target_type.type == "int"
        assert td.target_type.nullable is True
