"""Render a complete, standalone Python client program from an API spec.

The generated program is assembled from fixed source fragments in five
ordered blocks:

1. **Header/runtime** -- shebang, imports, constants, error classes and the
   ``HttpClient`` shim around :func:`httpx.request`.
2. **Auth injection** -- ``add_auth(client, env)`` for the spec's
   :class:`~clapi.models.AuthKind`, plus ``create_client(env)``.
3. **Output formatters** -- ``format_output(data, fmt)`` for json, table and
   csv.
4. **Commands** -- the shared ``run_route`` helper and one ``cmd_*``
   function per :class:`~clapi.models.CLICommand`.
5. **Dispatch and usage** -- ``parse_args``, the ``COMMANDS`` table,
   ``print_usage``, ``lookup_command`` and ``main``.

Only a handful of fragments take parameters, and every value that comes from
the spec (name, base URL, paths, descriptions, parameter names) is inserted
with :func:`repr`, so a description containing quotes or newlines cannot
break the generated source. Output is byte-for-byte deterministic for a given
spec: no timestamps, ids, or environment-dependent content.

The fragments use only the standard library and ``httpx``, so the generated
program runs without clapi installed.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from clapi.generator.commands import derive_commands, project_name
from clapi.models import APISpec, AuthKind, CLIArg, CLICommand

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------ #
# 1. Header / runtime
# ------------------------------------------------------------------ #

_HEADER_TEMPLATE = r'''#!/usr/bin/env python3
"""Command-line API client generated by clapi.

Run with ``help`` to list the available commands. Do not edit by hand:
regenerate from the API spec instead.
"""

from __future__ import annotations

import csv
import io
import json
import os
import sys
from urllib.parse import urlencode

import httpx

API_NAME = {api_name}
BASE_URL = {base_url}
PROGRAM_NAME = {program_name}
OUTPUT_FORMATS = ("json", "table", "csv")
'''

_HTTP_CLIENT = r'''

class CliError(Exception):
    """Base class for errors reported by this client."""


class MissingCredentialError(CliError):
    """A credential environment variable required by the API is not set."""


class RequestError(CliError):
    """The request could not be delivered to the server."""


class UnknownCommandError(CliError):
    """The first argument does not name a known command."""


class HttpClient:
    """Minimal JSON-over-HTTP client bound to one base URL.

    The HTTP status of a response is not inspected: error bodies are
    returned exactly like successful ones.
    """

    def __init__(self, base_url):
        self.base_url = base_url.rstrip("/")
        self.headers = {}

    def set_header(self, name, value):
        self.headers[name] = value

    def request(self, method, path, params=None):
        params = dict(params or {})
        url = self.base_url + path
        headers = dict(self.headers)
        if not any(name.lower() == "content-type" for name in headers):
            headers["Content-Type"] = "application/json"

        body = None
        if method == "GET":
            if params:
                url += "?" + urlencode(params)
        elif params:
            body = json.dumps(params)

        try:
            response = httpx.request(method, url, headers=headers, content=body)
        except httpx.TransportError as exc:
            raise RequestError(f"Failed to make request to {url}: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None
        if data is None:
            return {"raw": response.text}
        return data
'''


# ------------------------------------------------------------------ #
# 2. Auth injection
# ------------------------------------------------------------------ #

_AUTH_BEARER = r'''

def add_auth(client, env):
    token = env.get("API_TOKEN")
    if not token:
        raise MissingCredentialError("API_TOKEN environment variable required")
    client.set_header("Authorization", "Bearer " + token)
'''

_AUTH_API_KEY = r'''

def add_auth(client, env):
    key = env.get("API_KEY")
    if not key:
        raise MissingCredentialError("API_KEY environment variable required")
    client.set_header("X-API-Key", key)
'''

_AUTH_NONE = r'''

def add_auth(client, env):
    """No authentication configured."""
'''

_AUTH_FRAGMENTS: dict[AuthKind, str] = {
    AuthKind.BEARER: _AUTH_BEARER,
    AuthKind.API_KEY: _AUTH_API_KEY,
    AuthKind.NONE: _AUTH_NONE,
}

_CREATE_CLIENT = r'''

def create_client(env):
    client = HttpClient(BASE_URL)
    add_auth(client, env)
    return client
'''


# ------------------------------------------------------------------ #
# 3. Output formatters
# ------------------------------------------------------------------ #

_FORMATTERS = r'''

def _is_records(data):
    return isinstance(data, list) and bool(data) and all(isinstance(row, dict) for row in data)


def _cell(value):
    if value is None:
        return ""
    if isinstance(value, (bool, dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def format_as_json(data):
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def format_as_table(data):
    if not data:
        return "No data\n"
    if not _is_records(data):
        return format_as_json(data)
    headers = [str(key) for key in data[0]]
    header_line = "\t".join(headers)
    lines = [header_line, "-" * len(header_line)]
    for row in data:
        lines.append("\t".join(_cell(row.get(key)) for key in data[0]))
    return "\n".join(lines) + "\n"


def format_as_csv(data):
    if not data:
        return ""
    buffer = io.StringIO()
    if _is_records(data):
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(list(data[0]))
        # Values are written in each row's own key order, not looked up by header.
        for row in data:
            writer.writerow([_cell(value) for value in row.values()])
    return buffer.getvalue()


FORMATTERS = {
    "json": format_as_json,
    "table": format_as_table,
    "csv": format_as_csv,
}


def format_output(data, fmt="json"):
    try:
        formatter = FORMATTERS[fmt]
    except KeyError:
        expected = ", ".join(OUTPUT_FORMATS)
        raise CliError(f"Unknown output format: {fmt} (expected one of: {expected})") from None
    return formatter(data)
'''


# ------------------------------------------------------------------ #
# 4. Commands
# ------------------------------------------------------------------ #

_ROUTE_RUNNER = r'''

def substitute_path(template, params):
    path = template
    for key, value in params.items():
        path = path.replace("{" + key + "}", str(value))
    return path


def run_route(method, template, flags, argv, env):
    """Call one route with the options in *argv* and print the response.

    *flags* maps each declared option name to its API parameter name.
    ``--format`` selects the output format; it is also sent to the API only
    when the route declares a ``format`` parameter. Returns the process exit
    status.
    """
    params = {flags.get(key, key): value for key, value in parse_args(argv).items()}
    fmt = params.get("format", "json")
    if "format" not in flags.values():
        params.pop("format", None)
    try:
        client = create_client(env)
        path = substitute_path(template, params)
        query = {key: value for key, value in params.items() if "{" + key + "}" not in template}
        response = client.request(method, path, query)
        sys.stdout.write(format_output(response, fmt))
    except Exception as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1
    return 0
'''

_COMMAND_TEMPLATE = r'''

def {function}(argv, env):
    return run_route({method}, {path}, {flags}, argv, env)
'''


# ------------------------------------------------------------------ #
# 5. Dispatch and usage
# ------------------------------------------------------------------ #

_ARG_PARSER = r'''

def parse_args(argv):
    """Collect ``--key value`` pairs; bare tokens are ignored."""
    params = {}
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg.startswith("--"):
            params[arg[2:]] = argv[i + 1] if i + 1 < len(argv) else ""
            i += 2
        else:
            i += 1
    return params
'''

_COMMAND_TABLE_HEADER = r'''

# name: (function, description, options)
COMMANDS = {
'''

_USAGE_AND_MAIN = r'''}


def print_usage(stream=None):
    write = (stream or sys.stdout).write
    write(f"{API_NAME} API client\n\n")
    write(f"Usage: {PROGRAM_NAME} <command> [options]\n")
    write("\nAvailable commands:\n")
    for name, (_, description, options) in COMMANDS.items():
        write(f"  {name} - {description}\n")
        if options:
            write(f"      {' '.join(options)}\n")
    write("\nGlobal options:\n")
    write("  --format <json|table|csv>  Output format (default: json)\n")
    write("\nEnvironment variables:\n")
    write("  API_TOKEN  Bearer token for authentication\n")
    write("  API_KEY    API key for authentication\n")


def lookup_command(name):
    try:
        return COMMANDS[name][0]
    except KeyError:
        raise UnknownCommandError(f"Unknown command: {name}") from None


def main(argv=None, env=None):
    argv = sys.argv[1:] if argv is None else list(argv)
    env = os.environ if env is None else env

    if not argv:
        print_usage(sys.stderr)
        return 1

    command = argv[0]
    if command in ("help", "--help", "-h"):
        print_usage()
        return 0

    try:
        handler = lookup_command(command)
    except UnknownCommandError as exc:
        sys.stderr.write(f"{exc}\n\n")
        print_usage(sys.stderr)
        return 1
    return handler(argv[1:], env)


if __name__ == "__main__":
    sys.exit(main())
'''


# ------------------------------------------------------------------ #
# Assembly
# ------------------------------------------------------------------ #

_NON_IDENT_RE = re.compile(r"\W", re.ASCII)


def function_name(command: str) -> str:
    """Return the Python function name for a command (``users:id:get`` -> ``cmd_users_id_get``)."""
    return "cmd_" + _NON_IDENT_RE.sub("_", command)


def assign_function_names(commands: list[CLICommand]) -> list[str]:
    """Return one distinct function name per command, in order.

    Distinct command names that sanitise to the same identifier get a
    numeric suffix. Commands with identical names keep separate functions,
    but only the last one stays reachable through ``COMMANDS``.
    """
    used: set[str] = set()
    names: list[str] = []
    for cmd in commands:
        base = function_name(cmd.name)
        candidate = base
        counter = 2
        while candidate in used:
            candidate = f"{base}_{counter}"
            counter += 1
        used.add(candidate)
        names.append(candidate)
    return names


def arg_usage(arg: CLIArg) -> str:
    """Render one option for the usage text: ``--id <int>`` or ``[--limit <int>]``."""
    text = f"{arg.flag} <{arg.type}>"
    return text if arg.required else f"[{text}]"


def emit_header(spec: APISpec, program_name: str) -> str:
    return _HEADER_TEMPLATE.format(
        api_name=repr(spec.name),
        base_url=repr(spec.base_url),
        program_name=repr(program_name),
    ) + _HTTP_CLIENT


def emit_auth(kind: AuthKind) -> str:
    return _AUTH_FRAGMENTS[kind] + _CREATE_CLIENT


def emit_formatters() -> str:
    return _FORMATTERS


def emit_commands(commands: list[CLICommand], functions: list[str]) -> str:
    parts = [_ROUTE_RUNNER]
    for cmd, func in zip(commands, functions):
        flags = {arg.flag[2:]: arg.name for arg in cmd.args}
        parts.append(
            _COMMAND_TEMPLATE.format(
                function=func,
                method=repr(cmd.route.method),
                path=repr(cmd.route.path),
                flags=repr(flags),
            )
        )
    return "".join(parts)


def emit_dispatch(commands: list[CLICommand], functions: list[str]) -> str:
    rows = []
    for cmd, func in zip(commands, functions):
        options = tuple(arg_usage(arg) for arg in cmd.args)
        rows.append(f"    {cmd.name!r}: ({func}, {cmd.description!r}, {options!r}),\n")
    return _ARG_PARSER + _COMMAND_TABLE_HEADER + "".join(rows) + _USAGE_AND_MAIN


def emit_program(spec: APISpec, program_name: Optional[str] = None) -> str:
    """Return the full source text of the generated client program.

    Args:
        spec: The parsed API spec.
        program_name: Name shown in the usage text. Defaults to
            :func:`~clapi.generator.commands.project_name` of the spec name,
            which is also the file name the packager writes.
    """
    if program_name is None:
        program_name = project_name(spec.name)
    commands = derive_commands(spec)
    functions = assign_function_names(commands)
    kind = AuthKind.from_config(spec.auth)
    logger.debug("Emitting %d commands for %s (auth: %s)", len(commands), spec.name, kind.value)

    return "".join(
        [
            emit_header(spec, program_name),
            emit_auth(kind),
            emit_formatters(),
            emit_commands(commands, functions),
            emit_dispatch(commands, functions),
        ]
    )
