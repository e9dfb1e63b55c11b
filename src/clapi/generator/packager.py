"""Write a generated client program as an installable project.

Three artifacts are written, one after another, into the output directory:

* ``<name>-cli`` -- the emitted program, marked executable.
* ``pyproject.toml`` -- a Hatch manifest that maps the program file to an
  importable module and exposes it as a console script, so
  ``pip install .`` puts ``<name>-cli`` on ``PATH``.
* ``README.md`` -- usage notes with every command, authentication setup and
  the output formats.

If a write fails, artifacts written before it are left in place.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from clapi.exceptions import WriteError
from clapi.generator.commands import derive_commands, project_name
from clapi.generator.emitter import arg_usage, emit_program
from clapi.models import APISpec, AuthKind, CLICommand

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "pyproject.toml"
README_FILENAME = "README.md"
PYTHON_REQUIRES = ">=3.10"
HTTPX_REQUIREMENT = "httpx>=0.24.0"


@dataclass
class GeneratedProject:
    """Result of :func:`write_project`."""

    name: str
    directory: Path
    files: list[Path] = field(default_factory=list)

    @property
    def program(self) -> Path:
        return self.directory / self.name


_NON_IDENT_RE = re.compile(r"\W", re.ASCII)


def module_name(name: str) -> str:
    """Return the importable module name for a program name (``blog-(v2)-cli`` -> ``blog__v2__cli``)."""
    module = _NON_IDENT_RE.sub("_", name)
    return "_" + module if module[:1].isdigit() else module


def _toml_str(value: str) -> str:
    # JSON string escapes are a subset of TOML basic-string escapes.
    return json.dumps(value, ensure_ascii=False)


def render_manifest(spec: APISpec, name: str, version: str = "1.0.0") -> str:
    """Render the ``pyproject.toml`` of a generated project."""
    module = module_name(name)
    description = f"Auto-generated CLI client for {spec.name} API"
    return f"""\
[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = {_toml_str(name)}
version = {_toml_str(version)}
description = {_toml_str(description)}
requires-python = "{PYTHON_REQUIRES}"
dependencies = [
    "{HTTPX_REQUIREMENT}",
]

[project.scripts]
{_toml_str(name)} = "{module}:main"

[tool.hatch.build.targets.wheel]
bypass-selection = true

[tool.hatch.build.targets.wheel.force-include]
{_toml_str(name)} = "{module}.py"
"""


def _auth_section(kind: AuthKind) -> str:
    if kind is AuthKind.BEARER:
        return (
            "This API uses bearer token authentication. Set `API_TOKEN` before running a command:\n\n"
            "```bash\nexport API_TOKEN=your-token\n```\n"
        )
    if kind is AuthKind.API_KEY:
        return (
            "This API uses API key authentication. Set `API_KEY` before running a command:\n\n"
            "```bash\nexport API_KEY=your-key\n```\n"
        )
    return "This API does not require authentication.\n"


def _example_line(name: str, cmd: CLICommand) -> str:
    parts = [f"./{name}", cmd.name]
    for arg in cmd.args:
        if arg.required:
            parts.append(f"{arg.flag} <{arg.name}>")
    return " ".join(parts)


def render_readme(spec: APISpec, name: str) -> str:
    """Render the ``README.md`` of a generated project."""
    commands = derive_commands(spec)
    kind = AuthKind.from_config(spec.auth)

    command_lines = []
    for cmd in commands:
        command_lines.append(f"- `{cmd.name}` - {cmd.description}")
        for arg in cmd.args:
            detail = f" - {arg.description}" if arg.description else ""
            command_lines.append(f"  - `{arg_usage(arg)}`{detail}")
    command_list = "\n".join(command_lines) or "_No commands defined._"

    examples = [_example_line(name, cmd) for cmd in commands[:3]]
    if commands:
        examples.append(f"./{name} {commands[0].name} --format table")
    example_block = "\n".join(examples) or f"./{name} help"

    format_lines = "\n".join(
        [
            "- `json` (default) - Pretty-printed JSON",
            "- `table` - Tab-separated table",
            "- `csv` - Comma-separated values",
        ]
    )

    return f"""\
# {spec.name} CLI

Auto-generated CLI client for {spec.name} API.

## Installation

Make the CLI executable:

```bash
chmod +x {name}
```

Or install it with pip (puts `{name}` on your `PATH`):

```bash
pip install .
```

## Usage

```bash
./{name} <command> [options]
./{name} help
```

## Available Commands

{command_list}

## Authentication

{_auth_section(kind)}
Environment variables read by the client:
- `API_TOKEN` - For Bearer token authentication
- `API_KEY` - For API key authentication

## Examples

```bash
{example_block}
```

## Output Formats

Select with `--format`:

{format_lines}
"""


def _write(path: Path, content: str, mode: int | None = None) -> None:
    try:
        path.write_text(content, encoding="utf-8")
        if mode is not None:
            path.chmod(mode)
    except OSError as exc:
        raise WriteError(f"Failed to write {path}: {exc}") from exc
    logger.debug("Wrote %s (%d bytes)", path, len(content))


def write_project(
    spec: APISpec,
    output_dir: Path | str = ".",
    cli_version: str = "1.0.0",
) -> GeneratedProject:
    """Emit the client program for *spec* and write it with its manifest and README.

    Args:
        spec: The parsed API spec.
        output_dir: Directory to write into; must already exist.
        cli_version: Version recorded in the manifest.

    Returns:
        The written project, with paths in write order.

    Raises:
        WriteError: If any artifact cannot be written.
    """
    name = project_name(spec.name)
    directory = Path(output_dir)
    project = GeneratedProject(name=name, directory=directory)

    artifacts = [
        (name, emit_program(spec, name), 0o755),
        (MANIFEST_FILENAME, render_manifest(spec, name, cli_version), None),
        (README_FILENAME, render_readme(spec, name), None),
    ]
    for filename, content, mode in artifacts:
        path = directory / filename
        _write(path, content, mode)
        project.files.append(path)

    return project
