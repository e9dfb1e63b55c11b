"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~clapi.exceptions.ClapiError` subclass.
Shell wrappers and CI jobs can inspect the exit code to tell a bad spec
from an unwritable output directory without parsing stderr.

Example::

    $ clapi --input broken.json
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- the spec document was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid or conflicting arguments."""

EXIT_SPEC_PARSE_ERROR = 7
"""The API spec document could not be parsed or is missing required fields."""

EXIT_WRITE_ERROR = 8
"""A generated artifact could not be written to disk."""
