"""SCIP message classes built from an in-code schema.

Declares the subset of sourcegraph's ``scip.proto`` this tool writes and
reads (field numbers match upstream, so the output is a valid SCIP index)
and materializes message classes with the protobuf runtime, the same way a
generated ``scip_pb2`` module would.

See: https://github.com/sourcegraph/scip/blob/main/scip.proto
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.internal import enum_type_wrapper

_Field = descriptor_pb2.FieldDescriptorProto

_OPTIONAL = _Field.LABEL_OPTIONAL
_REPEATED = _Field.LABEL_REPEATED

# name -> [(field name, number, type, label, type name)]
_MESSAGES: dict[str, list[tuple[str, int, int, int, str]]] = {
    "Index": [
        ("metadata", 1, _Field.TYPE_MESSAGE, _OPTIONAL, ".scip.Metadata"),
        ("documents", 2, _Field.TYPE_MESSAGE, _REPEATED, ".scip.Document"),
        ("external_symbols", 3, _Field.TYPE_MESSAGE, _REPEATED, ".scip.SymbolInformation"),
    ],
    "Metadata": [
        ("version", 1, _Field.TYPE_ENUM, _OPTIONAL, ".scip.ProtocolVersion"),
        ("tool_info", 2, _Field.TYPE_MESSAGE, _OPTIONAL, ".scip.ToolInfo"),
        ("project_root", 3, _Field.TYPE_STRING, _OPTIONAL, ""),
        ("text_document_encoding", 4, _Field.TYPE_ENUM, _OPTIONAL, ".scip.TextEncoding"),
    ],
    "ToolInfo": [
        ("name", 1, _Field.TYPE_STRING, _OPTIONAL, ""),
        ("version", 2, _Field.TYPE_STRING, _OPTIONAL, ""),
        ("arguments", 3, _Field.TYPE_STRING, _REPEATED, ""),
    ],
    "Document": [
        ("relative_path", 1, _Field.TYPE_STRING, _OPTIONAL, ""),
        ("occurrences", 2, _Field.TYPE_MESSAGE, _REPEATED, ".scip.Occurrence"),
        ("symbols", 3, _Field.TYPE_MESSAGE, _REPEATED, ".scip.SymbolInformation"),
        ("language", 4, _Field.TYPE_STRING, _OPTIONAL, ""),
        ("text", 5, _Field.TYPE_STRING, _OPTIONAL, ""),
    ],
    "SymbolInformation": [
        ("symbol", 1, _Field.TYPE_STRING, _OPTIONAL, ""),
        ("documentation", 3, _Field.TYPE_STRING, _REPEATED, ""),
        ("display_name", 6, _Field.TYPE_STRING, _OPTIONAL, ""),
        ("enclosing_symbol", 8, _Field.TYPE_STRING, _OPTIONAL, ""),
    ],
    "Occurrence": [
        ("range", 1, _Field.TYPE_INT32, _REPEATED, ""),
        ("symbol", 2, _Field.TYPE_STRING, _OPTIONAL, ""),
        ("symbol_roles", 3, _Field.TYPE_INT32, _OPTIONAL, ""),
        ("override_documentation", 4, _Field.TYPE_STRING, _REPEATED, ""),
        ("enclosing_range", 7, _Field.TYPE_INT32, _REPEATED, ""),
    ],
}

_ENUMS: dict[str, list[tuple[str, int]]] = {
    "ProtocolVersion": [("UnspecifiedProtocolVersion", 0)],
    "TextEncoding": [
        ("UnspecifiedTextEncoding", 0),
        ("UTF8", 1),
        ("UTF16", 2),
    ],
    "SymbolRole": [
        ("UnspecifiedSymbolRole", 0),
        ("Definition", 0x1),
        ("Import", 0x2),
        ("WriteAccess", 0x4),
        ("ReadAccess", 0x8),
        ("Generated", 0x10),
        ("Test", 0x20),
        ("ForwardDefinition", 0x40),
    ],
}


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="scip.proto",
        package="scip",
        syntax="proto3",
    )

    for message_name, fields in _MESSAGES.items():
        message = file_proto.message_type.add(name=message_name)
        for field_name, number, field_type, label, type_name in fields:
            field = message.field.add(
                name=field_name,
                number=number,
                type=field_type,
                label=label,
                json_name=_json_name(field_name),
            )
            if type_name:
                field.type_name = type_name

    for enum_name, values in _ENUMS.items():
        enum = file_proto.enum_type.add(name=enum_name)
        for value_name, number in values:
            enum.value.add(name=value_name, number=number)

    return file_proto


def _json_name(field_name: str) -> str:
    head, *rest = field_name.split("_")
    return head + "".join(part.capitalize() for part in rest)


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())

Index = message_factory.GetMessageClass(_pool.FindMessageTypeByName("scip.Index"))
Metadata = message_factory.GetMessageClass(_pool.FindMessageTypeByName("scip.Metadata"))
ToolInfo = message_factory.GetMessageClass(_pool.FindMessageTypeByName("scip.ToolInfo"))
Document = message_factory.GetMessageClass(_pool.FindMessageTypeByName("scip.Document"))
SymbolInformation = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName("scip.SymbolInformation")
)
Occurrence = message_factory.GetMessageClass(_pool.FindMessageTypeByName("scip.Occurrence"))

ProtocolVersion = enum_type_wrapper.EnumTypeWrapper(_pool.FindEnumTypeByName("scip.ProtocolVersion"))
TextEncoding = enum_type_wrapper.EnumTypeWrapper(_pool.FindEnumTypeByName("scip.TextEncoding"))
SymbolRole = enum_type_wrapper.EnumTypeWrapper(_pool.FindEnumTypeByName("scip.SymbolRole"))

__all__ = [
    "Document",
    "Index",
    "Metadata",
    "Occurrence",
    "ProtocolVersion",
    "SymbolInformation",
    "SymbolRole",
    "TextEncoding",
    "ToolInfo",
]
