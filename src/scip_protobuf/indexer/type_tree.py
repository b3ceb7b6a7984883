"""Global registry of every message and enum declared across the input files.

The tree is built once over the whole descriptor set before any document
is assembled: a field may reference a type declared in a file that comes
later in iteration order. Nodes keep references into the descriptor protos
rather than copying them.
"""

import enum
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from google.protobuf.descriptor_pb2 import DescriptorProto, EnumDescriptorProto, FileDescriptorProto

from ..logging import get_logger
from .declarations import file_package, require_name

logger = get_logger("type_tree")


class NodeKind(enum.Enum):
    PACKAGE = "package"
    MESSAGE = "message"
    ENUM = "enum"


@dataclass
class TypeTreeNode:
    """A package, message or enum, with its children keyed by exact name."""

    name: str
    kind: NodeKind
    declaration: DescriptorProto | EnumDescriptorProto | None = None
    children: Mapping[str, "TypeTreeNode"] = field(default_factory=dict)

    def child(self, name: str) -> "TypeTreeNode | None":
        return self.children.get(name)


class TypeRegistry:
    """Read-only view over the built tree, keyed by full package name."""

    def __init__(self, packages: Mapping[str, TypeTreeNode]):
        self._packages = MappingProxyType(dict(packages))

    def package(self, name: str) -> TypeTreeNode | None:
        return self._packages.get(name)

    def package_candidates(self, components: list[str]) -> Iterator[tuple[TypeTreeNode, int]]:
        """Yield (package node, components consumed), longest package name first.

        A dotted type name does not mark where the package ends, so every
        registered prefix of ``components`` is a candidate. The unnamed
        package, if registered, is tried last.
        """
        for length in range(len(components), -1, -1):
            node = self._packages.get(".".join(components[:length]))
            if node is not None:
                yield node, length

    def __len__(self) -> int:
        return len(self._packages)


def build_type_tree(files: Iterable[FileDescriptorProto]) -> TypeRegistry:
    """Register every top-level and nested message/enum under its package."""
    packages: dict[str, TypeTreeNode] = {}
    declarations = 0

    for file in files:
        package_name = file_package(file)
        package = packages.get(package_name)
        if package is None:
            package = TypeTreeNode(name=package_name, kind=NodeKind.PACKAGE)
            packages[package_name] = package

        for message in file.message_type:
            declarations += _insert_message(package, message)
        for enum_type in file.enum_type:
            declarations += _insert_enum(package, enum_type)

    for package in packages.values():
        _freeze(package)

    registry = TypeRegistry(packages)
    logger.debug("Type tree: %d packages, %d declarations", len(registry), declarations)
    return registry


def _insert_message(parent: TypeTreeNode, message: DescriptorProto) -> int:
    node = _insert(parent, require_name(message, "message"), NodeKind.MESSAGE, message)
    count = 1
    for nested in message.nested_type:
        count += _insert_message(node, nested)
    for enum_type in message.enum_type:
        count += _insert_enum(node, enum_type)
    return count


def _insert_enum(parent: TypeTreeNode, enum_type: EnumDescriptorProto) -> int:
    _insert(parent, require_name(enum_type, "enum"), NodeKind.ENUM, enum_type)
    return 1


def _insert(
    parent: TypeTreeNode,
    name: str,
    kind: NodeKind,
    declaration: DescriptorProto | EnumDescriptorProto,
) -> TypeTreeNode:
    if name in parent.children:
        # protoc rejects duplicate names, so this only happens with hand-built input
        logger.debug("Duplicate declaration %s in %s, keeping the later one", name, parent.name)
    node = TypeTreeNode(name=name, kind=kind, declaration=declaration)
    parent.children[name] = node
    return node


def _freeze(node: TypeTreeNode) -> None:
    for child in node.children.values():
        _freeze(child)
    node.children = MappingProxyType(dict(node.children))
