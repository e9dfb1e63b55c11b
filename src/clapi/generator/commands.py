"""Derive CLI command names and ``--flag`` options from spec routes.

Every :class:`~clapi.models.Route` becomes exactly one
:class:`~clapi.models.CLICommand`. The command name is built from the path
segments followed by a verb for the HTTP method, joined with ``:``::

    /users          GET    -> users:get
    /users          POST   -> users:create
    /users/{id}     GET    -> users:id:get
    /users/{id}     DELETE -> users:id:delete

Path placeholders keep their bare name as a name segment. Parameters become
``--kebab-case`` flags in declared order, which is also the column order the
generated usage text shows them in.

Both mappings are pure functions of their input, so two routes with the same
path and method always collide, and so do ``author_id`` and ``author-id``.
:func:`find_collisions` reports such cases without rejecting the spec.
"""

from __future__ import annotations

from collections import Counter
from typing import NamedTuple

from clapi.models import APISpec, CLIArg, CLICommand, Parameter, Route

DEFAULT_DESCRIPTION = "API endpoint"
FORMAT_FLAG = "--format"

_METHOD_VERBS: dict[str, str] = {
    "GET": "get",
    "POST": "create",
    "PUT": "update",
    "DELETE": "delete",
    "PATCH": "patch",
}


class Collision(NamedTuple):
    """A name that more than one route or parameter maps to."""

    kind: str  # "command", "flag" or "option"
    name: str
    command: str


def method_verb(method: str) -> str:
    """Return the command-name verb for an HTTP method.

    Unknown methods fall through as their lower-cased name::

        >>> method_verb("post")
        'create'
        >>> method_verb("OPTIONS")
        'options'
    """
    upper = method.upper()
    return _METHOD_VERBS.get(upper, upper.lower())


def command_name(path: str, method: str) -> str:
    """Build the colon-joined command name for *path* and *method*."""
    parts = [segment.replace("{", "").replace("}", "") for segment in path.split("/") if segment]
    parts.append(method_verb(method))
    return ":".join(parts)


def param_to_arg(param: Parameter) -> CLIArg:
    """Map a spec parameter to its ``--flag`` option."""
    return CLIArg(
        name=param.name,
        type=param.type,
        required=param.required,
        flag="--" + param.name.replace("_", "-").lower(),
        description=param.description,
    )


def route_to_command(route: Route) -> CLICommand:
    """Derive the CLI command for a single route."""
    return CLICommand(
        name=command_name(route.path, route.method),
        description=route.description or DEFAULT_DESCRIPTION,
        route=route,
        args=tuple(param_to_arg(param) for param in route.parameters),
    )


def project_name(spec_name: str) -> str:
    """Return the generated program's name: ``"Blog API"`` -> ``"blog-api-cli"``."""
    return spec_name.lower().replace(" ", "-") + "-cli"


def derive_commands(spec: APISpec) -> list[CLICommand]:
    """Derive one command per route, in route order."""
    return [route_to_command(route) for route in spec.routes]


def find_collisions(commands: list[CLICommand]) -> list[Collision]:
    """Return duplicate command names and, per command, duplicate flags.

    A duplicated command name is reported once, with ``command`` set to the
    name itself. Duplicate flags are reported against their owning command,
    and so is a declared ``--format``, which the generated program also
    reads as its output format.
    """
    collisions: list[Collision] = []

    name_counts = Counter(cmd.name for cmd in commands)
    for name, count in name_counts.items():
        if count > 1:
            collisions.append(Collision("command", name, name))

    for cmd in commands:
        flag_counts = Counter(arg.flag for arg in cmd.args)
        for flag, count in flag_counts.items():
            if count > 1:
                collisions.append(Collision("flag", flag, cmd.name))
        if FORMAT_FLAG in flag_counts:
            collisions.append(Collision("option", FORMAT_FLAG, cmd.name))

    return collisions
