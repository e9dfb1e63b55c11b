"""Load API route specs from a local file or stdin.

Specs are normally JSON. Files with a ``.yaml`` or ``.yml`` extension are
decoded with PyYAML first and then validated exactly like a JSON document,
so both formats produce the same :class:`~clapi.models.APISpec`.

The two public functions are:

* :func:`load_spec_text` -- Read the raw document text from a path or ``-``.
* :func:`load_spec` -- Read and parse it into an :class:`~clapi.models.APISpec`.
"""

from __future__ import annotations

import sys
from pathlib import Path

import yaml

from clapi.exceptions import MalformedSpecError, SpecNotFoundError
from clapi.models import APISpec

_YAML_SUFFIXES = (".yaml", ".yml")


def load_spec(source: str) -> APISpec:
    """Load and parse a spec from a file path, or from stdin when *source* is ``-``.

    Raises:
        SpecNotFoundError: If the file does not exist.
        MalformedSpecError: If the document cannot be read or parsed.
        MissingFieldError: If a required field is absent.
    """
    text = load_spec_text(source)
    if Path(source).suffix.lower() in _YAML_SUFFIXES:
        return _parse_yaml(text)
    return APISpec.from_json(text)


def load_spec_text(source: str) -> str:
    """Return the raw spec document from *source* (a path or ``-`` for stdin)."""
    if source == "-":
        try:
            content = sys.stdin.read()
        except OSError as exc:
            raise MalformedSpecError(f"Failed to read from stdin: {exc}") from exc
        if not content.strip():
            raise MalformedSpecError("No input received from stdin")
        return content

    file_path = Path(source)
    if not file_path.is_file():
        raise SpecNotFoundError(f"File not found: {source}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedSpecError(f"Failed to read spec file {source}: {exc}") from exc

    if not content.strip():
        raise MalformedSpecError(f"Spec file is empty: {source}")
    return content


def _parse_yaml(text: str) -> APISpec:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MalformedSpecError(f"Invalid YAML: {exc}") from exc
    return APISpec.from_dict(data)
