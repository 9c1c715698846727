"""Numeric process exit codes used by the ``azert-http`` CLI.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~azert_http.exceptions.AzertHttpError` subclass.
Shell wrappers can inspect the exit code to tell a rejected request from
a network failure without parsing stderr.

Example::

    $ azert-http post https://api.example.com /widgets --body '{}' -H a:b
    $ echo $?
    3   # EXIT_MISSING_HEADER -- x-resource-identifier was not supplied
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (including an unknown HTTP verb)."""

EXIT_MISSING_HEADER = 3
"""A cacheable call supplied headers without a usable ``x-resource-identifier``."""

EXIT_REQUEST_FAILED = 5
"""The remote API answered with an unsuccessful status other than 404."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
