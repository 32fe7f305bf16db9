"""hostfs CLI entrypoint.

Command-line interface over the hostfs file, streaming and directory
operations. Path arguments are passed to the host as raw bytes, so names
that are not valid UTF-8 work.
"""

from __future__ import annotations

import functools
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from hostfs.adapters.factory import Filesystem
    from hostfs.domain.config import HostfsConfig

from hostfs.core.errors import HostfsCliError, fs_error_to_cli, invalid_extension_error
from hostfs.domain.errors import DirErrorKind, HostfsDomainError, HostfsError
from hostfs.domain.path import PathValue, from_bytes, with_extension
from hostfs.shared.config_io import LOCAL_CONFIG_DIR, config_to_data, save_config
from hostfs.version import __version__

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    HostfsCliError propagates unchanged; domain and filesystem errors are
    converted to HostfsCliError; anything else is reported as unexpected,
    with a traceback in verbose mode.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HostfsCliError:
                raise
            except HostfsDomainError as e:
                raise HostfsCliError(e.message, hint=e.hint) from e
            except HostfsError as e:
                raise fs_error_to_cli(e) from e
            except Exception as e:
                ctx = click.get_current_context()
                if ctx.obj.get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise HostfsCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def _load_config(config_dir: Path) -> HostfsConfig:
    """Load configuration for the given .hostfs directory."""
    from hostfs.adapters.factory import ConfigFactory

    config_factory = ConfigFactory()
    return config_factory.create_config_provider().load(config_dir)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def _to_path(arg: str) -> PathValue:
    """Convert a command-line argument to a byte-backed path."""
    return from_bytes(os.fsencode(arg))


def _fs(ctx: click.Context) -> Filesystem:
    return ctx.obj["fs"]


def _echo_path(path: PathValue, suffix: str = "") -> None:
    click.echo(path.display() + suffix)


@click.group()
@click.version_option(version=__version__, prog_name="hostfs")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output.",
)
@click.option(
    "--backend",
    type=click.Choice(["local", "memory"]),
    default=None,
    help="Host backend (overrides config).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, backend: str | None) -> None:
    """hostfs - Byte-safe file and directory operations.

    Reads, writes and lists paths without assuming they are valid text.
    """
    from dataclasses import replace

    from hostfs.adapters.factory import HostFactory

    ctx.ensure_object(dict)
    config_dir = Path.cwd() / LOCAL_CONFIG_DIR
    config = _load_config(config_dir)
    if backend is not None:
        config = replace(config, host=replace(config.host, backend=backend))

    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = config.logging.level
    _configure_logging(level)
    logger.debug("Using %s host", config.host.backend)

    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config"] = config
    ctx.obj["config_dir"] = config_dir
    ctx.obj["fs"] = HostFactory(config).create_filesystem()


@cli.command()
@click.argument("path", type=str)
@click.option("--bytes", "raw", is_flag=True, help="Print raw bytes without decoding.")
@click.pass_context
@handle_cli_errors("cat")
def cat(ctx: click.Context, path: str, raw: bool) -> None:
    """Print the contents of PATH."""
    fs = _fs(ctx)
    if raw:
        data = fs.files.read_bytes(_to_path(path)).unwrap()
        click.get_binary_stream("stdout").write(data)
        return
    click.echo(fs.files.read_text(_to_path(path)).unwrap(), nl=False)


@cli.command()
@click.argument("path", type=str)
@click.option(
    "--lines",
    "-n",
    "count",
    type=click.IntRange(min=0),
    default=10,
    show_default=True,
    help="Number of lines to print (0 for all).",
)
@click.pass_context
@handle_cli_errors("head")
def head(ctx: click.Context, path: str, count: int) -> None:
    """Print the first lines of PATH without reading the whole file."""
    out = click.get_binary_stream("stdout")
    with _fs(ctx).streams.opened(_to_path(path)) as stream:
        for number, line in enumerate(stream, start=1):
            out.write(line + b"\n")
            if count and number >= count:
                break


@cli.command()
@click.argument("path", type=str)
@click.argument("text", type=str, required=False, default=None)
@click.pass_context
@handle_cli_errors("write")
def write(ctx: click.Context, path: str, text: str | None) -> None:
    """Write TEXT (or standard input) to PATH, replacing its contents."""
    files = _fs(ctx).files
    if text is None:
        data = click.get_binary_stream("stdin").read()
        files.write_bytes(data, _to_path(path)).unwrap()
    else:
        files.write_text(text, _to_path(path)).unwrap()


@cli.command()
@click.argument("path", type=str)
@click.pass_context
@handle_cli_errors("rm")
def rm(ctx: click.Context, path: str) -> None:
    """Delete the file at PATH."""
    _fs(ctx).files.delete(_to_path(path)).unwrap()


@cli.command()
@click.argument("src", type=str)
@click.argument("dst", type=str)
@click.pass_context
@handle_cli_errors("mv")
def mv(ctx: click.Context, src: str, dst: str) -> None:
    """Move SRC to DST."""
    _fs(ctx).files.rename(_to_path(src), _to_path(dst)).unwrap()


@cli.command()
@click.argument("path", type=str)
@click.pass_context
@handle_cli_errors("stat")
def stat(ctx: click.Context, path: str) -> None:
    """Show the type, size and modification time of PATH (links not followed)."""
    target = _to_path(path)
    meta = _fs(ctx).files.metadata(target).unwrap()
    click.echo(f"path:     {target.display()}")
    click.echo(f"type:     {meta.kind.value}")
    click.echo(f"size:     {meta.size}")
    click.echo(f"modified: {meta.modified.isoformat()}")
    click.echo(f"readonly: {'yes' if meta.readonly else 'no'}")


_KIND_SUFFIX = {"directory": "/", "symlink": "@", "file": ""}


@cli.command()
@click.argument("path", type=str, required=False, default=".")
@click.option("--long", "-l", "long_format", is_flag=True, help="Show type, size and time.")
@click.pass_context
@handle_cli_errors("ls")
def ls(ctx: click.Context, path: str, long_format: bool) -> None:
    """List the entries of directory PATH."""
    fs = _fs(ctx)
    listing_config = ctx.obj["config"].listing
    show_kind = listing_config.show_kind

    if long_format or show_kind:
        entries = fs.dirs.list_entries(_to_path(path)).unwrap()
        if listing_config.sort:
            entries.sort(key=lambda entry: entry.path)
        for entry in entries:
            name = entry.path.display()
            if long_format:
                meta = entry.metadata
                click.echo(
                    f"{meta.kind.value:<9} {meta.size:>10} "
                    f"{meta.modified:%Y-%m-%d %H:%M} {name}"
                )
            else:
                click.echo(name + _KIND_SUFFIX[entry.kind.value])
        return

    paths = fs.dirs.list(_to_path(path)).unwrap()
    if listing_config.sort:
        paths.sort()
    for entry_path in paths:
        _echo_path(entry_path)


@cli.command()
@click.argument("path", type=str)
@click.option("--parents", "-p", is_flag=True, help="Create missing parent directories.")
@click.pass_context
@handle_cli_errors("mkdir")
def mkdir(ctx: click.Context, path: str, parents: bool) -> None:
    """Create directory PATH."""
    dirs = _fs(ctx).dirs
    if parents:
        dirs.create_all(_to_path(path)).unwrap()
    else:
        dirs.create(_to_path(path)).unwrap()


@cli.command()
@click.argument("path", type=str)
@click.option("--recursive", "-r", is_flag=True, help="Remove the directory and its content.")
@click.pass_context
@handle_cli_errors("rmdir")
def rmdir(ctx: click.Context, path: str, recursive: bool) -> None:
    """Remove directory PATH (must be empty unless --recursive)."""
    dirs = _fs(ctx).dirs
    if recursive:
        dirs.delete_all(_to_path(path)).unwrap()
        return
    result = dirs.delete_empty(_to_path(path))
    if not result.success and result.error.kind is DirErrorKind.OTHER:
        raise HostfsCliError(
            result.error.describe(),
            hint="Use 'hostfs rmdir -r' to remove a directory with content",
        )
    result.unwrap()


@cli.command()
@click.argument("path", type=str)
@click.argument("extension", type=str)
@click.pass_context
@handle_cli_errors("ext")
def ext(ctx: click.Context, path: str, extension: str) -> None:
    """Print PATH with its extension replaced by EXTENSION."""
    if "/" in extension or (os.sep in extension):
        invalid_extension_error(extension)
    _echo_path(with_extension(_to_path(path), extension))


@cli.group()
def config() -> None:
    """Show or initialize configuration."""


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration."""
    for section, values in config_to_data(ctx.obj["config"]).items():
        click.echo(f"[{section}]")
        for key, value in values.items():
            click.echo(f"{key} = {value!r}")


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_context
@handle_cli_errors("config init")
def config_init(ctx: click.Context, force: bool) -> None:
    """Write the effective configuration to .hostfs/config.toml."""
    config_path = ctx.obj["config_dir"] / "config.toml"
    if config_path.exists() and not force:
        raise HostfsDomainError(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite it",
        )
    save_config(ctx.obj["config"], config_path)
    if not ctx.obj["quiet"]:
        click.echo(f"Wrote {config_path}")


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli(obj={})
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
