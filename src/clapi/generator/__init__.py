"""Generation engine -- turn an :class:`~clapi.models.APISpec` into a client program.

Typical usage::

    from clapi.generator import emit_program, write_project

    source = emit_program(spec, "blogapi-cli")   # text only
    project = write_project(spec, output_dir=".")  # program + manifest + README

Sub-modules:

* :mod:`~clapi.generator.commands` -- Derive command names and ``--flag``
  options from routes, and report naming collisions.
* :mod:`~clapi.generator.emitter` -- Assemble the generated program from
  fixed source fragments.
* :mod:`~clapi.generator.packager` -- Write the program, its
  ``pyproject.toml`` manifest and README to disk.
"""

from clapi.generator.commands import (
    derive_commands,
    find_collisions,
    project_name,
    route_to_command,
)
from clapi.generator.emitter import emit_program
from clapi.generator.packager import write_project

__all__ = [
    "derive_commands",
    "emit_program",
    "find_collisions",
    "project_name",
    "route_to_command",
    "write_project",
]
