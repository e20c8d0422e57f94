"""
Conversion of raw command-line and config-file text into typed values.
"""

import enum
from typing import Any

from result import Err, Ok, Result

from .errors import MalformedValueError

_TRUE_WORDS = ("True", "true")
_FALSE_WORDS = ("False", "false")


class Category(enum.Enum):
    """The parameter kinds, declared in the order they are listed in help."""

    BOOL = ("bool", bool, False)
    DOUBLE = ("double", float, 0.0)
    INT = ("int", int, 0)
    STRING = ("string", str, "")

    def __init__(self, type_name: str, python_type: type, zero: Any) -> None:
        self.type_name = type_name
        self.python_type = python_type
        self.zero = zero

    @property
    def banner(self) -> str:
        """Heading used by the detailed parameter dump."""
        return {
            Category.BOOL: "BOOLEANS",
            Category.DOUBLE: "DOUBLES",
            Category.INT: "INTEGERS",
            Category.STRING: "STRINGS",
        }[self]


def _parse_bool(text: str) -> bool:
    """
    Parse a boolean strictly.

    Accepts 'True', 'true', 'False', 'false' and any integer literal, where
    zero is false and every other integer is true ('1' and '0' being the
    usual spellings).
    """
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return int(text) != 0


_PARSERS = {
    Category.BOOL: _parse_bool,
    Category.DOUBLE: float,
    Category.INT: int,
    Category.STRING: str,
}


def coerce(
    category: Category, raw: str, name: str = ""
) -> Result[Any, MalformedValueError]:
    """
    Convert ``raw`` into the Python type backing ``category``.

    Args:
        category: Target parameter category.
        raw: The text taken from argv or a config file.
        name: Parameter name, used only in the error.

    Returns:
        Ok with the converted value, or Err(MalformedValueError).
    """
    try:
        return Ok(_PARSERS[category](raw))
    except (TypeError, ValueError):
        return Err(MalformedValueError(name, raw, category))


def check_default(category: Category, name: str, default: Any) -> Any:
    """
    Validate a registration default against its category.

    Ints are accepted for double parameters and widened to float.

    Raises:
        TypeError: If the default does not match the category.
    """
    if category is Category.BOOL:
        ok = isinstance(default, bool)
    elif category is Category.INT:
        ok = isinstance(default, int) and not isinstance(default, bool)
    elif category is Category.DOUBLE:
        ok = isinstance(default, (int, float)) and not isinstance(default, bool)
        if ok:
            default = float(default)
    else:
        ok = isinstance(default, str)
    if not ok:
        raise TypeError(
            f"Parameter '{name}' expects {category.type_name} default, "
            f"got {type(default).__name__}: {default!r}"
        )
    return default


def format_value(category: Category, value: Any) -> str:
    """Render a stored value as text; booleans become '1' or '0'."""
    if category is Category.BOOL:
        return "1" if value else "0"
    if category is Category.DOUBLE:
        return repr(float(value))
    return str(value)
