"""CLI for scip-protobuf.

Commands:
- index: Convert a descriptor set file into a SCIP index
- plugin: Run as a protoc plugin (request on stdin, response on stdout)
- stats: Summarize a written index
- show-config: Print the effective configuration

``protoc-gen-scip`` is the same plugin mode as a standalone executable,
which is what protoc looks for on PATH.
"""

import logging
import sys
from collections import Counter
from pathlib import Path
from typing import NoReturn

import click

from .config import Config, ConfigError, dump_config, load_config, save_config
from .errors import ScipProtobufError
from .indexer import index_files
from .indexer.loader import load_descriptor_set, load_index, write_index
from .indexer.scip_schema import SymbolRole
from .logging import get_logger, setup_logging
from .plugin import run_plugin

logger = get_logger("cli")


@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path, dir_okay=False),
              help="Config file (default: <root>/.scip-protobuf.yaml)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
@click.pass_context
def main(ctx, config_path: Path | None, verbose: bool, json_logs: bool):
    """scip-protobuf - SCIP code-intelligence indexes for Protocol Buffers."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    ctx.obj["json_logs"] = json_logs


@main.command("index")
@click.option("--in", "-i", "input_path", required=True, type=click.Path(path_type=Path),
              help="Descriptor set (protoc --include_source_info --descriptor_set_out)")
@click.option("--out", "-o", "output_path", required=True, type=click.Path(path_type=Path),
              help="Where to write the SCIP index")
@click.option("--root", "-r", "root", required=True, type=click.Path(path_type=Path),
              help="Project root the .proto paths are relative to")
@click.pass_context
def index_cmd(ctx, input_path: Path, output_path: Path, root: Path):
    """Convert a descriptor set into a SCIP index."""
    config = _configure(ctx, root)

    try:
        descriptor_set = load_descriptor_set(input_path)
        index = index_files(descriptor_set.file, root, config=config, arguments=sys.argv)
        write_index(index, output_path)
    except ScipProtobufError as e:
        _fail(e)

    occurrences = sum(len(document.occurrences) for document in index.documents)
    click.echo(f"Indexed {len(index.documents)} files ({occurrences} occurrences) -> {output_path}")


@main.command("plugin")
@click.pass_context
def plugin_cmd(ctx):
    """Run as a protoc plugin."""
    if ctx.obj["config_path"]:
        config = _configure(ctx, None)
        on_config = None
    else:
        # Config comes from the project root named in the request
        config = None
        _setup_logging(ctx, Config())

        def on_config(loaded: Config) -> None:
            _setup_logging(ctx, loaded)

    try:
        run_plugin(
            sys.stdin.buffer,
            sys.stdout.buffer,
            arguments=sys.argv,
            config=config,
            on_config=on_config,
        )
    except (ScipProtobufError, ConfigError) as e:
        _fail(e)


@main.command()
@click.argument("index_path", type=click.Path(path_type=Path))
def stats(index_path: Path):
    """Summarize a SCIP index."""
    try:
        index = load_index(index_path)
    except ScipProtobufError as e:
        _fail(e)

    tool = index.metadata.tool_info
    click.echo(f"Project root: {index.metadata.project_root}")
    click.echo(f"Tool: {tool.name} {tool.version}")
    click.echo(f"Documents: {len(index.documents)}")

    definition = SymbolRole.Value("Definition")
    for document in index.documents:
        roles = Counter(
            "definition" if occurrence.symbol_roles & definition else "reference"
            for occurrence in document.occurrences
        )
        click.echo(
            f"  {click.style(document.relative_path, bold=True)}: "
            f"{len(document.symbols)} symbols, "
            f"{roles['definition']} definitions, {roles['reference']} references"
        )


@main.command("show-config")
@click.option("--root", "-r", "root", type=click.Path(path_type=Path),
              help="Project root to look for .scip-protobuf.yaml")
@click.option("--write", "-w", "write_path", type=click.Path(path_type=Path, dir_okay=False),
              help="Also save the configuration to this file")
@click.pass_context
def show_config(ctx, root: Path | None, write_path: Path | None):
    """Print the effective configuration."""
    config = _configure(ctx, root)
    click.echo(dump_config(config), nl=False)

    if write_path:
        try:
            save_config(config, write_path)
        except OSError as e:
            _fail(e)
        click.echo(f"Wrote config to {write_path}", err=True)


def plugin_main():
    """Entry point for the protoc-gen-scip executable."""
    setup_logging()
    try:
        run_plugin(
            sys.stdin.buffer,
            sys.stdout.buffer,
            arguments=sys.argv,
            on_config=lambda config: setup_logging(
                level=config.logging.level_number, json_format=config.logging.json
            ),
        )
    except (ScipProtobufError, ConfigError) as e:
        _fail(e)


def _configure(ctx, root: Path | None) -> Config:
    """Load config and set up logging for a command."""
    try:
        config = load_config(config_path=ctx.obj["config_path"], project_root=root)
    except ConfigError as e:
        _fail(e)

    _setup_logging(ctx, config)
    return config


def _setup_logging(ctx, config: Config) -> None:
    level = logging.DEBUG if ctx.obj["verbose"] else config.logging.level_number
    setup_logging(level=level, json_format=ctx.obj["json_logs"] or config.logging.json)


def _fail(error: Exception) -> NoReturn:
    logger.debug("Aborting", exc_info=error)
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


if __name__ == "__main__":
    main()
