"""Canonical Pydantic models shared across all clapi modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Spec models** -- parsed from the user's JSON (or YAML) route spec and never
mutated afterwards:
    :class:`Parameter`, :class:`Route`, :class:`AuthConfig`, and
    :class:`APISpec`.

**Derived models** -- produced by the command deriver and consumed by the
code emitter and project packager:
    :class:`AuthKind`, :class:`CLIArg`, and :class:`CLICommand`.

All models are frozen Pydantic v2 models. ``APISpec`` accepts both the
camelCase keys of the input document (``baseUrl``) and the snake_case field
names, so tests and callers can build specs directly in Python. An explicit
``null`` for ``routes``, ``parameters`` or ``required`` takes the default,
the same as an absent key.
"""

from __future__ import annotations

import enum
import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from clapi.exceptions import MalformedSpecError, MissingFieldError


_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


# --- Spec models ---


class Parameter(BaseModel):
    """One named input of a route.

    ``type`` is advisory only: it shows up in the generated usage text but is
    never enforced when the client sends the request.
    """

    model_config = _FROZEN

    name: str = Field(min_length=1, description="Parameter name as sent to the API")
    type: str = Field(default="string", description="Free-form type tag (string, int, ...)")
    required: bool = False
    description: Optional[str] = None

    @field_validator("required", mode="before")
    @classmethod
    def _null_required(cls, value: Any) -> Any:
        return False if value is None else value


class Route(BaseModel):
    """One API endpoint: a path template, an HTTP method and its parameters.

    ``method`` is upper-cased on construction so that ``"get"`` and ``"GET"``
    derive the same command name.
    """

    model_config = _FROZEN

    path: str = Field(description="URL template, may contain {name} placeholders")
    method: str = Field(description="HTTP method, normalised to upper case")
    parameters: tuple[Parameter, ...] = ()
    description: Optional[str] = None
    auth: Optional[str] = Field(
        default=None, description="Per-route auth hint (advisory, not used in generation)"
    )

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()

    @field_validator("parameters", mode="before")
    @classmethod
    def _null_parameters(cls, value: Any) -> Any:
        return () if value is None else value


class AuthConfig(BaseModel):
    """Global authentication mode of the generated client.

    ``header`` is informational: the emitted program always uses
    ``Authorization`` for bearer tokens and ``X-API-Key`` for API keys.
    """

    model_config = _FROZEN

    type: str = Field(description="Auth type: bearer, api-key, or anything else for none")
    header: Optional[str] = None


class APISpec(BaseModel):
    """A complete route spec -- the input of one generation run.

    Example::

        spec = APISpec.from_json(Path("blog.json").read_text())
        spec.base_url   # "https://api.blog.com/v1"
    """

    model_config = _FROZEN

    name: str
    base_url: str = Field(alias="baseUrl")
    routes: tuple[Route, ...] = ()
    auth: Optional[AuthConfig] = None

    @field_validator("routes", mode="before")
    @classmethod
    def _null_routes(cls, value: Any) -> Any:
        return () if value is None else value

    @classmethod
    def from_json(cls, text: str) -> APISpec:
        """Parse a JSON document into an :class:`APISpec`.

        Raises:
            MalformedSpecError: If *text* is not valid JSON or has the wrong shape.
            MissingFieldError: If ``name``, ``baseUrl``, or a route's ``path``
                or ``method`` is absent.
        """
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as exc:
            raise MalformedSpecError(f"Invalid JSON: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Any) -> APISpec:
        """Validate an already-decoded document (from JSON or YAML)."""
        if not isinstance(data, dict):
            raise MalformedSpecError(
                f"Spec must be an object (got {type(data).__name__})"
            )
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise _translate_validation_error(exc) from exc

    def to_document(self) -> dict[str, Any]:
        """Return the spec as a JSON-ready dict using the input document's keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _translate_validation_error(exc: ValidationError) -> MalformedSpecError | MissingFieldError:
    """Map the first Pydantic error onto the clapi spec error taxonomy."""
    errors = exc.errors()
    for err in errors:
        if err["type"] == "missing":
            return MissingFieldError(_format_loc(err["loc"]))
    first = errors[0]
    return MalformedSpecError(f"Invalid spec at {_format_loc(first['loc'])}: {first['msg']}")


def _format_loc(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


# --- Derived models ---


class AuthKind(str, enum.Enum):
    """Closed set of auth strategies the emitter knows how to generate."""

    BEARER = "bearer"
    API_KEY = "api-key"
    NONE = "none"

    @classmethod
    def from_config(cls, auth: Optional[AuthConfig]) -> AuthKind:
        """Resolve a spec's auth block; unknown or absent types mean no auth."""
        if auth is None:
            return cls.NONE
        if auth.type == cls.BEARER.value:
            return cls.BEARER
        if auth.type == cls.API_KEY.value:
            return cls.API_KEY
        return cls.NONE


class CLIArg(BaseModel):
    """A ``--flag value`` option of a generated command, derived from a :class:`Parameter`."""

    model_config = _FROZEN

    name: str
    type: str
    required: bool
    flag: str
    description: Optional[str] = None


class CLICommand(BaseModel):
    """A generated sub-command, derived 1:1 from a :class:`Route`."""

    model_config = _FROZEN

    name: str = Field(description="Colon-joined command name, e.g. users:id:get")
    description: str
    route: Route
    args: tuple[CLIArg, ...] = ()
