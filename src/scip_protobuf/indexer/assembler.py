"""Assemble SCIP documents from decoded source locations.

Every source location of every file is decoded and resolved. Declarations
become definitions (recorded in the document's symbol list and as a
definition occurrence); type references become plain occurrences pointing
at the declaration they resolve to.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path

from google.protobuf.descriptor_pb2 import FileDescriptorProto, SourceCodeInfo

from .. import __version__
from ..config import Config
from ..errors import IndexIOError
from ..logging import get_logger
from .declarations import file_package, require_name
from .paths import decode_path
from .resolver import ResolvedSymbol, resolve
from .scip_schema import (
    Document,
    Index,
    Metadata,
    Occurrence,
    ProtocolVersion,
    SymbolInformation,
    SymbolRole,
    TextEncoding,
    ToolInfo,
)
from .symbol import Symbol, format_symbol
from .type_tree import TypeRegistry

logger = get_logger("assembler")

TOOL_NAME = "scip-protobuf"


def assemble_index(
    files: Iterable[FileDescriptorProto],
    registry: TypeRegistry,
    project_root: Path,
    config: Config | None = None,
    arguments: Sequence[str] = (),
) -> Index:
    """Build the full index, one document per file, in input order.

    ``registry`` must already cover every file references can point into.
    """
    config = config or Config()

    metadata = build_metadata(project_root, arguments)
    documents = [build_document(file, registry, config) for file in files]

    logger.info(
        "Assembled %d documents (%d occurrences)",
        len(documents),
        sum(len(document.occurrences) for document in documents),
    )
    return Index(metadata=metadata, documents=documents)


def build_metadata(project_root: Path, arguments: Sequence[str] = ()) -> Metadata:
    return Metadata(
        version=ProtocolVersion.Value("UnspecifiedProtocolVersion"),
        tool_info=ToolInfo(name=TOOL_NAME, version=__version__, arguments=list(arguments)),
        project_root=project_root_uri(project_root),
        text_document_encoding=TextEncoding.Value("UTF8"),
    )


def project_root_uri(project_root: Path) -> str:
    """Canonical ``file://`` URI of the project root, which must exist."""
    try:
        resolved = project_root.resolve(strict=True)
    except OSError as e:
        raise IndexIOError(f"Cannot resolve project root {project_root}: {e}") from e
    return "file://" + str(resolved)


def build_document(
    file: FileDescriptorProto,
    registry: TypeRegistry,
    config: Config | None = None,
) -> Document:
    """Decode and resolve every source location of one file."""
    config = config or Config()
    relative_path = require_name(file, "file")
    package = file_package(file)
    locations = file.source_code_info.location

    comments = _comments_by_path(locations) if config.output.include_documentation else {}

    symbols: list[SymbolInformation] = []
    defined: set[str] = set()
    occurrences: list[Occurrence] = []
    skipped = 0

    for location in locations:
        result = decode_path(file, location.path)
        if result is None:
            skipped += 1
            continue

        resolved = resolve(result, package, registry)
        identity = _symbol(resolved, config)
        symbol = format_symbol(identity)

        if resolved.is_definition and symbol not in defined:
            defined.add(symbol)
            symbols.append(
                SymbolInformation(
                    symbol=symbol,
                    display_name=identity.display_name,
                    # Comments sit on the declaration, one step above its name
                    documentation=comments.get(tuple(location.path[:-1]), []),
                )
            )

        occurrences.append(
            Occurrence(
                range=list(location.span),
                symbol=symbol,
                symbol_roles=SymbolRole.Value("Definition") if resolved.is_definition else 0,
            )
        )

    logger.debug(
        "%s: %d symbols, %d occurrences, %d locations skipped",
        relative_path,
        len(symbols),
        len(occurrences),
        skipped,
        extra={
            "document": relative_path,
            "symbols": len(symbols),
            "occurrences": len(occurrences),
            "skipped": skipped,
        },
    )

    return Document(
        relative_path=relative_path,
        language=config.output.language,
        symbols=symbols,
        occurrences=occurrences,
    )


def _symbol(resolved: ResolvedSymbol, config: Config) -> Symbol:
    return Symbol(
        package=resolved.package,
        descriptors=resolved.descriptors,
        scheme=config.symbols.scheme,
        manager=config.symbols.manager,
        version=config.symbols.version,
    )


def _comments_by_path(
    locations: Iterable[SourceCodeInfo.Location],
) -> dict[tuple[int, ...], list[str]]:
    comments = {}
    for location in locations:
        text = [
            comment.strip()
            for comment in (location.leading_comments, location.trailing_comments)
            if comment.strip()
        ]
        if text:
            comments[tuple(location.path)] = text
    return comments
