"""Pytest configuration and fixtures for scip-protobuf tests.

Fixtures build FileDescriptorProto values the way protoc would emit them
with --include_source_info, including locations the indexer must skip.
"""

import logging
from pathlib import Path

import pytest
from google.protobuf.descriptor_pb2 import FieldDescriptorProto, FileDescriptorProto

TYPE_MESSAGE = FieldDescriptorProto.TYPE_MESSAGE
TYPE_ENUM = FieldDescriptorProto.TYPE_ENUM
TYPE_INT32 = FieldDescriptorProto.TYPE_INT32
LABEL_OPTIONAL = FieldDescriptorProto.LABEL_OPTIONAL


def add_location(file: FileDescriptorProto, path, span, leading_comments=None):
    location = file.source_code_info.location.add(path=path, span=span)
    if leading_comments is not None:
        location.leading_comments = leading_comments
    return location


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to streams a CliRunner has already closed."""
    yield
    logger = logging.getLogger("scip_protobuf")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "proto"
    root.mkdir()
    return root


@pytest.fixture
def demo_file() -> FileDescriptorProto:
    """demo.proto:

    syntax = "proto3";
    package demo;

    // A user.
    message User {
      Role id = 1;
    }

    enum Role {
      ADMIN = 0;
    }
    """
    file = FileDescriptorProto(name="demo.proto", package="demo", syntax="proto3")

    user = file.message_type.add(name="User")
    user.field.add(
        name="id", number=1, label=LABEL_OPTIONAL, type=TYPE_ENUM, type_name=".demo.Role"
    )

    role = file.enum_type.add(name="Role")
    role.value.add(name="ADMIN", number=0)

    add_location(file, [], [0, 0, 11, 1])
    add_location(file, [12], [0, 0, 18])  # syntax
    add_location(file, [2], [1, 0, 13])  # package
    add_location(file, [4, 0], [4, 0, 6, 1], leading_comments=" A user.\n")
    add_location(file, [4, 0, 1], [4, 8, 12])
    add_location(file, [4, 0, 2, 0], [5, 2, 14])
    add_location(file, [4, 0, 2, 0, 6], [5, 2, 6])
    add_location(file, [4, 0, 2, 0, 1], [5, 7, 9])
    add_location(file, [4, 0, 2, 0, 3], [5, 12, 13])
    add_location(file, [5, 0], [8, 0, 10, 1])
    add_location(file, [5, 0, 1], [8, 5, 9])
    add_location(file, [5, 0, 2, 0], [9, 2, 12])
    add_location(file, [5, 0, 2, 0, 1], [9, 2, 7])
    add_location(file, [5, 0, 2, 0, 2], [9, 10, 11])
    return file


@pytest.fixture
def nested_file() -> FileDescriptorProto:
    """P.proto: message A { message B { B f = 1; } enum E { V = 0; } int32 n = 1; }"""
    file = FileDescriptorProto(name="p.proto", package="P")

    outer = file.message_type.add(name="A")
    inner = outer.nested_type.add(name="B")
    inner.field.add(
        name="f", number=1, label=LABEL_OPTIONAL, type=TYPE_MESSAGE, type_name=".P.A.B"
    )
    nested_enum = outer.enum_type.add(name="E")
    nested_enum.value.add(name="V", number=0)
    outer.field.add(name="n", number=1, label=LABEL_OPTIONAL, type=TYPE_INT32)

    add_location(file, [4, 0, 3, 0, 2, 0, 6], [2, 4, 5])
    add_location(file, [4, 0, 3, 0, 2, 0, 1], [2, 6, 7])
    return file


@pytest.fixture
def foo_file() -> FileDescriptorProto:
    """a/foo.proto: package pkg.a; message Foo {}"""
    file = FileDescriptorProto(name="a/foo.proto", package="pkg.a")
    file.message_type.add(name="Foo")
    add_location(file, [4, 0, 1], [2, 8, 11])
    return file


@pytest.fixture
def bar_file() -> FileDescriptorProto:
    """b/bar.proto: package pkg.b; import "a/foo.proto"; message Bar { pkg.a.Foo foo = 1; }"""
    file = FileDescriptorProto(
        name="b/bar.proto", package="pkg.b", dependency=["a/foo.proto"]
    )
    bar = file.message_type.add(name="Bar")
    bar.field.add(
        name="foo", number=1, label=LABEL_OPTIONAL, type=TYPE_MESSAGE, type_name=".pkg.a.Foo"
    )
    add_location(file, [3, 0], [2, 0, 21])  # import
    add_location(file, [4, 0, 1], [4, 8, 11])
    add_location(file, [4, 0, 2, 0, 6], [5, 2, 11])
    add_location(file, [4, 0, 2, 0, 1], [5, 12, 15])
    return file

