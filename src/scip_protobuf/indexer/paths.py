"""Decode source-location paths into the declarations they point at.

protoc attaches a path to every source location: a flat list of integers
read against descriptor.proto itself, alternating "field number of a
repeated field" and "index into it". ``[4, 0, 2, 1, 1]`` is
``message_type[0].field[1].name`` of the file.

Only the shapes that name a message, enum, field or enum value, or a
field's declared type, are decoded. Everything else (services, options,
oneofs, the whole-file span, ...) yields ``None`` and is skipped.
"""

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    EnumDescriptorProto,
    EnumValueDescriptorProto,
    FieldDescriptorProto,
    FileDescriptorProto,
)

from ..errors import MalformedInputError
from .declarations import require_name
from .symbol import DescriptorSegment

TYPE_NAME_SEPARATOR = "."


@dataclass(frozen=True)
class LocalSegments:
    """The path names a declaration in this file, outermost segment first."""

    segments: tuple[DescriptorSegment, ...]


@dataclass(frozen=True)
class ExternalReference:
    """The path ends on a field's declared type, which needs global resolution.

    ``enclosing`` holds the segments of the declarations walked through to
    reach the field; it does not take part in resolution.
    """

    type_name: str
    enclosing: tuple[DescriptorSegment, ...] = ()

    @property
    def components(self) -> list[str]:
        # Fully-qualified type names start with the separator: ".pkg.Msg"
        components = self.type_name.split(TYPE_NAME_SEPARATOR)
        if components and components[0] == "":
            components = components[1:]
        return components


DecodeResult = LocalSegments | ExternalReference


class _Position(enum.Enum):
    FILE = enum.auto()
    MESSAGES = enum.auto()
    MESSAGE = enum.auto()
    ENUMS = enum.auto()
    ENUM = enum.auto()
    FIELDS = enum.auto()
    FIELD = enum.auto()
    VALUES = enum.auto()
    VALUE = enum.auto()


# Collection position -> position of one of its elements
_ELEMENT_OF = {
    _Position.MESSAGES: _Position.MESSAGE,
    _Position.ENUMS: _Position.ENUM,
    _Position.FIELDS: _Position.FIELD,
    _Position.VALUES: _Position.VALUE,
}


def decode_path(file: FileDescriptorProto, path: Sequence[int]) -> DecodeResult | None:
    """Walk ``path`` from ``file`` and report what it names.

    Returns None for paths that do not end on a recognized name or type
    reference. Raises MalformedInputError when a step indexes past the end
    of its collection or a walked declaration has no name.
    """
    position = _Position.FILE
    node = file
    segments: list[DescriptorSegment] = []
    last = len(path) - 1

    for i, step in enumerate(path):
        if position is _Position.FILE:
            if step == FileDescriptorProto.MESSAGE_TYPE_FIELD_NUMBER:
                position, node = _Position.MESSAGES, node.message_type
            elif step == FileDescriptorProto.ENUM_TYPE_FIELD_NUMBER:
                position, node = _Position.ENUMS, node.enum_type
            else:
                return None

        elif position in _ELEMENT_OF:
            element = _element(node, step, path)
            if i == last:
                # The whole declaration's span, not its name
                return None
            position, node = _ELEMENT_OF[position], element

        elif position is _Position.MESSAGE:
            segments.append(DescriptorSegment.type(require_name(node, "message")))
            if step == DescriptorProto.NAME_FIELD_NUMBER:
                return _terminal(LocalSegments(tuple(segments)), i, last)
            elif step == DescriptorProto.FIELD_FIELD_NUMBER:
                position, node = _Position.FIELDS, node.field
            elif step == DescriptorProto.NESTED_TYPE_FIELD_NUMBER:
                position, node = _Position.MESSAGES, node.nested_type
            elif step == DescriptorProto.ENUM_TYPE_FIELD_NUMBER:
                position, node = _Position.ENUMS, node.enum_type
            else:
                return None

        elif position is _Position.ENUM:
            segments.append(DescriptorSegment.type(require_name(node, "enum")))
            if step == EnumDescriptorProto.NAME_FIELD_NUMBER:
                return _terminal(LocalSegments(tuple(segments)), i, last)
            elif step == EnumDescriptorProto.VALUE_FIELD_NUMBER:
                position, node = _Position.VALUES, node.value
            else:
                return None

        elif position is _Position.FIELD:
            if step == FieldDescriptorProto.NAME_FIELD_NUMBER:
                segments.append(DescriptorSegment.term(require_name(node, "field")))
                return _terminal(LocalSegments(tuple(segments)), i, last)
            elif step == FieldDescriptorProto.TYPE_NAME_FIELD_NUMBER:
                if not node.type_name:
                    raise MalformedInputError(
                        f"Path {list(path)} points at the type of field "
                        f"{node.name!r}, which has no type name"
                    )
                return _terminal(ExternalReference(node.type_name, tuple(segments)), i, last)
            else:
                return None

        elif position is _Position.VALUE:
            if step == EnumValueDescriptorProto.NAME_FIELD_NUMBER:
                segments.append(DescriptorSegment.term(require_name(node, "enum value")))
                return _terminal(LocalSegments(tuple(segments)), i, last)
            else:
                return None

    # Ran out of path before reaching a name or type reference
    return None


def _element(collection, index: int, path: Sequence[int]):
    if index < 0 or index >= len(collection):
        raise MalformedInputError(
            f"Path {list(path)} indexes element {index} of a collection of {len(collection)}"
        )
    return collection[index]


def _terminal(result: DecodeResult, i: int, last: int) -> DecodeResult | None:
    # Names and type references are leaves; anything after them is unknown
    if i != last:
        return None
    return result
