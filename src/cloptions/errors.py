"""
Error kinds raised or returned by the CLOptions parsing pipeline.

Most of these are never raised across the public API. Internal operations
hand them back inside ``result.Err`` and the ``CLOptions`` facade turns them
into ``[ERROR]`` diagnostics on stderr plus a zero value or an aborted
parse status.
"""

import logging
import sys
from typing import Any, Optional

logger = logging.getLogger(__name__)


class CLOptionsError(Exception):
    """Base class for every error produced by this package."""


class UnknownParameterError(CLOptionsError):
    """No registered parameter has the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown command line parameter: {name}")


class TypeMismatchError(CLOptionsError):
    """A typed accessor was used against a parameter of another category."""

    def __init__(self, name: str, expected: Any, actual: Any) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Parameter "{name}" is {actual.type_name}, not {expected.type_name}'
        )


class MalformedValueError(CLOptionsError):
    """Raw text could not be converted to the parameter's type."""

    def __init__(self, name: str, value: str, category: Any) -> None:
        self.name = name
        self.value = value
        self.category = category
        super().__init__(
            f"Invalid {category.type_name} value for parameter \"{name}\": '{value}'"
        )


class ConfigFileError(CLOptionsError):
    """A configuration file is missing, unreadable or badly formed."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason
        message = f'Could not load configuration file "{path}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnrecognizedOptionError(CLOptionsError):
    """The argument scanner met an option it cannot match."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def report_error(error: Any) -> None:
    """Emit an ``[ERROR]`` diagnostic on stderr."""
    logger.debug("Reported: %s", error)
    print(f"[ERROR] {error}", file=sys.stderr)
