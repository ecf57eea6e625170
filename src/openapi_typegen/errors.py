"""Exception types raised by openapi-typegen."""


class TypegenError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(TypegenError):
    """The override configuration could not be parsed or has the wrong shape."""


class DocumentLoadError(TypegenError):
    """The API description file could not be read as a mapping."""


class UnknownPayloadError(TypegenError):
    """A path index entry carries a payload kind the generator does not know."""

    def __init__(self, path: str, payload: object):
        self.path = path
        self.payload = payload
        super().__init__(f"unhandled schema type {type(payload).__name__} at path ({path})")


class DuplicateOperationIdError(TypegenError):
    """Two operations in the document declare the same operationId."""

    def __init__(self, operation_id: str, first: str, second: str):
        self.operation_id = operation_id
        self.first = first
        self.second = second
        super().__init__(
            f"operationId '{operation_id}' is used by both {first} and {second}"
        )
