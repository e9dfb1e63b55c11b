"""Typer application and CLI entry point for clapi.

The ``clapi`` command reads an API route spec (or the built-in BlogAPI
sample), generates the client program and writes it, together with a
``pyproject.toml`` manifest and a README, into the output directory::

    clapi --example
    clapi --input api-spec.json --output-dir ./blog-cli
    clapi --input api-spec.json --dry-run > blog-cli

Without ``--example`` or ``--input`` it prints a usage banner and a preview
of the spec format, and exits successfully.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from clapi import __version__
from clapi.exceptions import ClapiError, InvalidUsageError, WriteError
from clapi.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="clapi",
    help="Generate standalone command-line clients from API route specs.",
    add_completion=False,
    rich_markup_mode="rich",
)


_USAGE = """\
clapi -- API client CLI generator

Usage:
  clapi --example                  # Generate the example BlogAPI client
  clapi --input <api-spec.json>    # Generate a client from a JSON spec
  clapi --help                     # Show all options

API Specification Format:
"""


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"clapi {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route library log records to stderr through Rich when --verbose is set."""
    if not verbose:
        return
    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[handler])


@app.command()
def generate(
    example: bool = typer.Option(
        False, "--example", help="Generate the built-in BlogAPI example client."
    ),
    input_file: Optional[str] = typer.Option(
        None,
        "--input",
        "-i",
        is_flag=False,
        flag_value="",
        help="Spec file to generate from (JSON or YAML, '-' for stdin).",
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Directory for the generated files. [default: .]"
    ),
    cli_version: Optional[str] = typer.Option(
        None, "--cli-version", help="Version written into the generated manifest. [default: 1.0.0]"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the generated program to stdout and write nothing."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Generate a command-line client from an API route spec."""
    from clapi.output import OutputManager, error, set_output

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)

    try:
        _run(example, input_file, output_dir, cli_version, dry_run)
    except ClapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)


def _run(
    example: bool,
    input_file: Optional[str],
    output_dir: Optional[str],
    cli_version: Optional[str],
    dry_run: bool,
) -> None:
    from clapi.config import resolve_config
    from clapi.examples import example_schema_preview, example_spec
    from clapi.generator import derive_commands, emit_program, find_collisions, project_name
    from clapi.generator.packager import write_project
    from clapi.output import debug, info, print_data, success, suggest, warning
    from clapi.parser import load_spec

    if input_file == "":
        raise ClapiError("--input requires a filename")

    if example and input_file is not None:
        raise InvalidUsageError("Use either --example or --input, not both.")

    if not example and input_file is None:
        print_data(_USAGE + example_schema_preview())
        return

    if example:
        info("Generating example CLI from BlogAPI specification...")
        spec = example_spec()
    else:
        info(f"Reading API specification from: {input_file}")
        spec = load_spec(input_file)

    config = resolve_config(cli_output_dir=output_dir, cli_version=cli_version)
    debug(f"Output directory: {config.output_dir}, version: {config.cli_version}")

    commands = derive_commands(spec)
    for collision in find_collisions(commands):
        if collision.kind == "command":
            warning(
                f"Several routes map to command '{collision.name}'; only the last one is reachable."
            )
        elif collision.kind == "flag":
            warning(f"Command '{collision.command}' declares flag {collision.name} more than once.")
        else:
            warning(
                f"Command '{collision.command}' declares {collision.name}; its value is sent "
                "to the API and also selects the output format."
            )

    name = project_name(spec.name)
    if dry_run:
        print_data(emit_program(spec, name))
        return

    directory = Path(config.output_dir)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(f"Cannot create output directory {directory}: {exc}") from exc

    info(f"Generating CLI project: {name}")
    project = write_project(spec, directory, config.cli_version)
    for path in project.files:
        success(f"✓ Generated {path}")

    success(f"Project generated successfully ({len(commands)} commands).")
    suggest(f"Try it: {project.program} help")
    suggest(f"Then: {project.program} <command> [options]")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``clapi`` console script.

    :class:`~clapi.exceptions.ClapiError` instances that escape the command
    cause a clean exit with the error's ``exit_code``.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except ClapiError as exc:
        from clapi.output import error

        error(str(exc))
        sys.exit(exc.exit_code or EXIT_GENERIC_FAILURE)
