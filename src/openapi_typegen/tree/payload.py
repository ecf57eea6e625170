"""Payloads carried by schema tree nodes.

Each payload wraps the raw mapping from the API description at the node's
location. The set of kinds is closed; structural nodes carry no payload.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class BasePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: dict[str, Any] = {}

    @property
    def ref(self) -> str:
        return self.raw.get("$ref", "")


class SchemaPayload(BasePayload):
    """A schema object (component schema, property, composition branch...)."""

    kind: Literal["schema"] = "schema"

    @property
    def type(self) -> str:
        """The declared type, ignoring ``null`` when a list of types is given."""
        declared = self.raw.get("type", "")
        if isinstance(declared, list):
            non_null = [t for t in declared if t != "null"]
            return non_null[0] if non_null else ""
        return declared or ""

    @property
    def format(self) -> str:
        return self.raw.get("format", "") or ""

    @property
    def nullable(self) -> bool:
        declared = self.raw.get("type")
        if isinstance(declared, list) and "null" in declared:
            return True
        return bool(self.raw.get("nullable", False))


class ParameterPayload(BasePayload):
    kind: Literal["parameter"] = "parameter"

    @property
    def name(self) -> str:
        return self.raw.get("name", "")

    @property
    def location(self) -> str:
        return self.raw.get("in", "")


class HeaderPayload(BasePayload):
    kind: Literal["header"] = "header"


class RequestBodyPayload(BasePayload):
    kind: Literal["request_body"] = "request_body"


class ResponsePayload(BasePayload):
    kind: Literal["response"] = "response"


class SecuritySchemePayload(BasePayload):
    kind: Literal["security_scheme"] = "security_scheme"


Payload = Annotated[
    Union[
        SchemaPayload,
        ParameterPayload,
        HeaderPayload,
        RequestBodyPayload,
        ResponsePayload,
        SecuritySchemePayload,
    ],
    Field(discriminator="kind"),
]
