"""Turn decoded paths into package-qualified symbol descriptors."""

from dataclasses import dataclass

from ..errors import UnresolvedReferenceError
from .paths import DecodeResult, ExternalReference, LocalSegments
from .symbol import NO_PACKAGE, DescriptorSegment
from .type_tree import NodeKind, TypeRegistry, TypeTreeNode


@dataclass(frozen=True)
class ResolvedSymbol:
    """A package plus descriptors, ready to be formatted as a symbol."""

    package: str
    descriptors: tuple[DescriptorSegment, ...]
    is_definition: bool


def resolve(result: DecodeResult, file_package: str, registry: TypeRegistry) -> ResolvedSymbol:
    """Resolve a decode result found in a file declaring ``file_package``.

    Local declarations belong to the current file's package. Type
    references are looked up in the registry and carry the package of the
    declaration they point at, which may live in another file.
    """
    if isinstance(result, LocalSegments):
        return ResolvedSymbol(
            package=file_package or NO_PACKAGE,
            descriptors=result.segments,
            is_definition=True,
        )
    return resolve_reference(result, registry)


def resolve_reference(reference: ExternalReference, registry: TypeRegistry) -> ResolvedSymbol:
    """Look up a fully-qualified type name such as ``.pkg.a.Outer.Inner``.

    Raises UnresolvedReferenceError if no registered package followed by
    an exact chain of declaration names spells out the type.
    """
    components = reference.components
    if not components or not all(components):
        raise UnresolvedReferenceError(reference.type_name, reference.type_name)

    first_missing: str | None = None
    for package, consumed in registry.package_candidates(components):
        descriptors, missing = _walk(package, components[consumed:])
        if missing is None:
            return ResolvedSymbol(
                package=package.name or NO_PACKAGE,
                descriptors=descriptors,
                is_definition=False,
            )
        if first_missing is None:
            first_missing = missing

    raise UnresolvedReferenceError(reference.type_name, first_missing or components[0])


def _walk(
    package: TypeTreeNode, names: list[str]
) -> tuple[tuple[DescriptorSegment, ...], str | None]:
    """Follow ``names`` down from a package node.

    Returns the visited declarations as type segments, and the first name
    that could not be found (None on success).
    """
    if not names:
        # The name stops at a package, not a type
        return (), package.name

    node = package
    descriptors: list[DescriptorSegment] = []
    for name in names:
        child = node.child(name)
        if child is None:
            return (), name
        node = child
        descriptors.append(_to_segment(node))
    return tuple(descriptors), None


def _to_segment(node: TypeTreeNode) -> DescriptorSegment:
    if node.kind is NodeKind.PACKAGE:
        raise ValueError(f"Package {node.name!r} has no descriptor segment")
    return DescriptorSegment.type(node.name)
