"""Indexer components for scip-protobuf."""

from collections.abc import Collection, Iterable, Sequence
from pathlib import Path

from google.protobuf.descriptor_pb2 import FileDescriptorProto

from ..config import Config
from .assembler import assemble_index
from .loader import load_descriptor_set, write_index
from .scip_schema import Index
from .type_tree import build_type_tree


def index_files(
    files: Iterable[FileDescriptorProto],
    project_root: Path,
    config: Config | None = None,
    arguments: Sequence[str] = (),
    only: Collection[str] | None = None,
) -> Index:
    """Convert descriptors into a SCIP index.

    The type tree is built over all ``files`` before any document is
    assembled. ``only`` restricts which files get a document (by file
    name); the rest still take part in type resolution.
    """
    files = list(files)
    registry = build_type_tree(files)

    documented = files if only is None else [file for file in files if file.name in only]
    return assemble_index(documented, registry, project_root, config, arguments)


__all__ = ["index_files", "build_type_tree", "assemble_index", "load_descriptor_set", "write_index"]
