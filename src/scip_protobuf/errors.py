"""Error kinds raised by the conversion pipeline.

The core never recovers from these: any of them aborts the run before an
index is written. Front ends decide how to report them.
"""


class ScipProtobufError(Exception):
    """Base exception for scip-protobuf errors."""

    pass


class IndexIOError(ScipProtobufError):
    """Raised when an input cannot be opened or an output cannot be created."""

    pass


class MalformedInputError(ScipProtobufError):
    """Raised when the descriptor input violates the schema compiler's guarantees.

    Covers unparseable serialized messages, declarations missing their
    name, and source-location paths that index past a collection.
    """

    pass


class UnresolvedReferenceError(ScipProtobufError):
    """Raised when a referenced type name is absent from the type tree."""

    def __init__(self, type_name: str, missing: str):
        super().__init__(f"Cannot resolve type {type_name}: '{missing}' not found")
        self.type_name = type_name
        self.missing = missing


class InvalidParametersError(ScipProtobufError):
    """Raised when the plugin parameter string is not '<root> <output>'."""

    pass
