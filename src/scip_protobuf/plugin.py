"""protoc plugin front end.

Invoked as::

    protoc --plugin=protoc-gen-scip --scip_out="<project root> <output file>:." foo.proto

protoc sends a CodeGeneratorRequest on stdin and expects a
CodeGeneratorResponse on stdout. The index itself goes to the output file
named in the parameter.

See https://protobuf.dev/reference/other/.
"""

from collections.abc import Callable, Sequence
from typing import BinaryIO

from .config import Config, load_config
from .indexer import index_files
from .indexer.loader import build_plugin_response, parse_plugin_request, write_index
from .logging import get_logger
from .models import PluginParameters

logger = get_logger("plugin")


def run_plugin(
    stdin: BinaryIO,
    stdout: BinaryIO,
    arguments: Sequence[str] = (),
    config: Config | None = None,
    on_config: Callable[[Config], None] | None = None,
) -> PluginParameters:
    """Handle one plugin request end to end.

    ``on_config`` is called with the effective config once it is known,
    before any indexing starts.

    Nothing is written until the index has been fully built.
    """
    request = parse_plugin_request(stdin.read())
    params = PluginParameters.from_parameter(request.parameter)

    if config is None:
        config = load_config(project_root=params.project_root)
    if on_config is not None:
        on_config(config)

    logger.debug(
        "Plugin request: %d files, %d to index",
        len(request.proto_file),
        len(request.file_to_generate),
    )

    # Only requested files get documents; their imports still resolve types
    index = index_files(
        request.proto_file,
        params.project_root,
        config=config,
        arguments=arguments,
        only=set(request.file_to_generate),
    )

    stdout.write(build_plugin_response().SerializeToString())
    stdout.flush()

    write_index(index, params.output)
    return params
