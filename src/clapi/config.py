"""Generator configuration with precedence resolution.

clapi has very little persistent state: where to write the generated
project and which version string to stamp into its manifest. Both can be
set at four levels, merged by :func:`resolve_config`:

1. CLI flags (``--output-dir``, ``--cli-version``)
2. Environment variables (``CLAPI_OUTPUT_DIR``, ``CLAPI_CLI_VERSION``)
3. Project config (``./clapi.json``)
4. Defaults (current directory, version ``1.0.0``)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from clapi.exceptions import ConfigError

_PROJECT_CONFIG_FILENAME = "clapi.json"

_ENV_OUTPUT_DIR = "CLAPI_OUTPUT_DIR"
_ENV_CLI_VERSION = "CLAPI_CLI_VERSION"


class GeneratorConfig(BaseModel):
    """Effective settings for one generation run."""

    output_dir: str = Field(default=".", description="Directory the artifacts are written to")
    cli_version: str = Field(default="1.0.0", description="Version written into the manifest")


# --- Project-local config ---


def load_project_config(cwd: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./clapi.json``.

    Args:
        cwd: Directory to look in. Defaults to the current working directory.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (cwd or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_output_dir: Optional[str] = None,
    cli_version: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> GeneratorConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_output_dir``, ``cli_version``)
        2. Environment variables (``CLAPI_OUTPUT_DIR``, ``CLAPI_CLI_VERSION``)
        3. Project config (``./clapi.json``)
        4. Defaults

    Raises:
        ConfigError: If the project config is invalid.
    """
    # 4 + 3. Defaults overlaid with the project file
    project = load_project_config(cwd) or {}
    try:
        config = GeneratorConfig(**project)
    except ValidationError as exc:
        raise ConfigError(f"Invalid project config: {exc}") from exc

    # 2. Environment variables
    env_output_dir = os.environ.get(_ENV_OUTPUT_DIR)
    if env_output_dir:
        config.output_dir = env_output_dir
    env_version = os.environ.get(_ENV_CLI_VERSION)
    if env_version:
        config.cli_version = env_version

    # 1. CLI flags (highest precedence)
    if cli_output_dir is not None:
        config.output_dir = cli_output_dir
    if cli_version is not None:
        config.cli_version = cli_version

    return config
