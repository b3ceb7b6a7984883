"""Accessors over descriptor.proto declarations shared by the indexer passes."""

from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    EnumDescriptorProto,
    EnumValueDescriptorProto,
    FieldDescriptorProto,
    FileDescriptorProto,
)

from ..errors import MalformedInputError

NamedDeclaration = (
    FileDescriptorProto
    | DescriptorProto
    | EnumDescriptorProto
    | FieldDescriptorProto
    | EnumValueDescriptorProto
)


def require_name(declaration: NamedDeclaration, kind: str) -> str:
    """Return a declaration's name, failing if the compiler left it unset."""
    if not declaration.HasField("name") or not declaration.name:
        raise MalformedInputError(f"{kind} declaration is missing its name")
    return declaration.name


def file_package(file: FileDescriptorProto) -> str:
    """Package of a file, '' when it declares none."""
    return file.package if file.HasField("package") else ""
