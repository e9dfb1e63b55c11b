"""Exception hierarchy for clapi.

All exceptions inherit from :class:`ClapiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`clapi.exit_codes`.
The top-level error handler in :func:`clapi.app.main` catches
``ClapiError`` and exits with the appropriate code.

Subclass hierarchy::

    ClapiError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- SpecNotFoundError      (exit 1)
    +-- SpecParseError         (exit 7)
    |   +-- MalformedSpecError
    |   +-- MissingFieldError
    +-- WriteError             (exit 8)
    +-- ConfigError            (exit 1)

Errors raised *inside* a generated client program are defined by the
emitted source itself (see :mod:`clapi.generator.emitter`), since that
program must run without clapi installed.
"""

from clapi.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_WRITE_ERROR,
)


class ClapiError(Exception):
    """Base exception for all clapi errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`clapi.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ClapiError):
    """Raised for invalid or conflicting generator arguments."""

    exit_code = EXIT_INVALID_USAGE


class SpecNotFoundError(ClapiError):
    """Raised when the spec file given to ``--input`` does not exist."""

    exit_code = EXIT_GENERIC_FAILURE


class SpecParseError(ClapiError):
    """Base class for spec documents that cannot be turned into an APISpec."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class MalformedSpecError(SpecParseError):
    """Raised when the spec is not valid JSON or has the wrong shape."""


class MissingFieldError(SpecParseError):
    """Raised when a required spec field is absent.

    Args:
        field: Dotted location of the missing field (e.g. ``routes.2.method``).
    """

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class WriteError(ClapiError):
    """Raised when a generated artifact cannot be written to disk."""

    exit_code = EXIT_WRITE_ERROR


class ConfigError(ClapiError):
    """Raised for configuration problems (invalid project config JSON or values)."""

    exit_code = EXIT_GENERIC_FAILURE
