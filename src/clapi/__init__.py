"""clapi -- Generate standalone command-line clients from API route specs.

This package converts a small declarative spec (API name, base URL, routes,
parameters, auth mode) into a single executable Python program whose
sub-commands call the API's routes and print the responses as JSON, a
table, or CSV.

Typical workflow::

    clapi --example                 # generate the BlogAPI sample client
    clapi --input api-spec.json     # generate from your own spec
    ./blogapi-cli users:get --limit 10 --format table

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic spec and derived command models.
    generator: Command deriver, code emitter and project packager.
    parser: Spec loading from files and stdin.
    config: Output directory and version resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr output system with Rich support.
"""

__version__ = "0.1.0"
