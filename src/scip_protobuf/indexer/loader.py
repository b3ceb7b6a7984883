"""Read descriptor inputs and write SCIP indexes.

Parse failures surface as MalformedInputError and filesystem failures as
IndexIOError, so front ends only deal with this package's error kinds.
"""

import os
from pathlib import Path

from google.protobuf.compiler import plugin_pb2
from google.protobuf.descriptor_pb2 import FileDescriptorSet
from google.protobuf.message import DecodeError

from ..errors import IndexIOError, MalformedInputError
from ..logging import get_logger
from .scip_schema import Index

logger = get_logger("loader")


def load_descriptor_set(path: Path) -> FileDescriptorSet:
    """Load a descriptor set written by ``protoc --descriptor_set_out``.

    Source locations are only present if protoc ran with
    ``--include_source_info``.
    """
    descriptor_set = parse_descriptor_set(_read_bytes(path, "descriptor set"))
    logger.debug("Loaded %d files from %s", len(descriptor_set.file), path)
    return descriptor_set


def parse_descriptor_set(data: bytes) -> FileDescriptorSet:
    try:
        return FileDescriptorSet.FromString(data)
    except DecodeError as e:
        raise MalformedInputError(f"Cannot parse descriptor set: {e}") from e


def parse_plugin_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    try:
        return plugin_pb2.CodeGeneratorRequest.FromString(data)
    except DecodeError as e:
        raise MalformedInputError(f"Cannot parse plugin request: {e}") from e


def build_plugin_response() -> plugin_pb2.CodeGeneratorResponse:
    """Acknowledgement for protoc.

    The index is binary, so it is written directly instead of being
    returned as a generated file.
    """
    return plugin_pb2.CodeGeneratorResponse(
        supported_features=plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL,
    )


def write_index(index: Index, path: Path) -> None:
    """
    Write an index to disk atomically.

    Uses write-to-temp-then-rename so an interrupted run never leaves a
    truncated index behind.
    """
    temp_path = path.with_name(path.name + ".tmp")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_path, "wb") as f:
            f.write(index.SerializeToString())
            f.flush()
            os.fsync(f.fileno())

        temp_path.replace(path)
    except OSError as e:
        if temp_path.exists():
            temp_path.unlink()
        raise IndexIOError(f"Failed to write index to {path}: {e}") from e

    logger.info("Wrote index to %s", path)


def load_index(path: Path) -> Index:
    data = _read_bytes(path, "index")
    try:
        return Index.FromString(data)
    except DecodeError as e:
        raise MalformedInputError(f"Cannot parse index {path}: {e}") from e


def _read_bytes(path: Path, what: str) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise IndexIOError(f"Failed to open {what} {path}: {e}") from e
