"""
Typed parameters and the registry that owns them.

Every parameter lives in a single name-keyed mapping and carries its
category as a tag, so a name resolves to exactly one parameter no matter
which category it was registered in.
"""

import dataclasses
import logging
from typing import Any, Iterator, Optional

from result import Err, Ok, Result

from .coercion import Category, check_default, coerce, format_value
from .errors import CLOptionsError, TypeMismatchError, UnknownParameterError

logger = logging.getLogger(__name__)

# Spellings owned by the built-in help option.
RESERVED_NAMES = ("h", "help")


def split_name(spelled: str) -> tuple[str, Optional[str]]:
    """
    Split a registration name of the form ``"n,Name"`` into its parts.

    Returns:
        Tuple of (primary name, short alias or None).

    Raises:
        ValueError: If the name or alias is empty, the alias is longer
            than one character, or either is reserved for help.
    """
    alias: Optional[str] = None
    name = spelled.strip()
    if "," in name:
        alias, name = (part.strip() for part in name.split(",", 1))
        if len(alias) != 1:
            raise ValueError(
                f"Short alias must be a single character, got '{alias}' in '{spelled}'"
            )
    if not name:
        raise ValueError(f"Parameter name must not be empty: '{spelled}'")
    for part in (name, alias):
        if part in RESERVED_NAMES:
            raise ValueError(f"'{part}' is reserved for the help option: '{spelled}'")
    return name, alias


@dataclasses.dataclass
class Parameter:
    """A named, typed value with a default and a description."""

    name: str
    category: Category
    default: Any
    description: str = ""
    alias: Optional[str] = None
    value: Any = dataclasses.field(init=False)

    def __post_init__(self) -> None:
        self.default = check_default(self.category, self.name, self.default)
        if not self.description:
            self.description = f"No description for {self.name}."
        self.value = self.default

    @property
    def spellings(self) -> tuple[str, ...]:
        """Names this parameter answers to, alias first."""
        return (self.alias, self.name) if self.alias else (self.name,)

    def assign(self, raw: str) -> Result[Any, CLOptionsError]:
        """Coerce ``raw`` and store it; the old value is kept on failure."""
        converted = coerce(self.category, raw, self.name)
        if isinstance(converted, Ok):
            self.value = converted.ok_value
        return converted

    def __str__(self) -> str:
        return format_value(self.category, self.value)


class ParameterRegistry:
    """
    Owner of all registered parameters.

    Registering a name that already exists replaces the earlier parameter
    (last registration wins), whatever category either was declared in.
    The registry also remembers which String parameter names the
    configuration file and which prefix marks comment lines in it.
    """

    def __init__(self) -> None:
        self._params: dict[str, Parameter] = {}
        self._aliases: dict[str, str] = {}
        self.config_file_option: Optional[str] = None
        self.comment_prefix: str = "#"

    def register(
        self, category: Category, spelled: str, description: str, default: Any
    ) -> Parameter:
        """
        Create a parameter and take ownership of it.

        Args:
            category: Kind of value the parameter holds.
            spelled: Name, optionally prefixed by a short alias as ``"n,Name"``.
            description: Help text; a placeholder is used when empty.
            default: Initial and default value.

        Returns:
            The new Parameter. An earlier parameter of the same name, or an
            earlier holder of the same alias, loses that name or alias.
        """
        name, alias = split_name(spelled)
        param = Parameter(name, category, default, description, alias)

        previous = self._params.pop(name, None)
        if previous is not None:
            logger.debug("Replacing parameter %s (%s)", name, previous.category.name)
            if previous.alias and self._aliases.get(previous.alias) == name:
                del self._aliases[previous.alias]
        if alias:
            displaced = self._aliases.get(alias)
            if displaced is not None and displaced in self._params:
                self._params[displaced].alias = None
            self._aliases[alias] = name

        self._params[name] = param
        return param

    def resolve(self, name: str) -> Optional[str]:
        """Map a primary name or short alias to the primary name."""
        if name in self._params:
            return name
        return self._aliases.get(name)

    def lookup(self, name: str) -> Result[Parameter, UnknownParameterError]:
        """Find a parameter by primary name or alias."""
        primary = self.resolve(name)
        if primary is None:
            return Err(UnknownParameterError(name))
        return Ok(self._params[primary])

    def get(self, category: Category, name: str) -> Result[Any, CLOptionsError]:
        """Current value of ``name``, which must belong to ``category``."""
        found = self.lookup(name)
        if isinstance(found, Err):
            return found
        param = found.ok_value
        if param.category is not category:
            return Err(TypeMismatchError(name, category, param.category))
        return Ok(param.value)

    def set(self, name: str, raw: str) -> Result[Parameter, CLOptionsError]:
        """Coerce ``raw`` into the parameter called ``name`` and store it."""
        found = self.lookup(name)
        if isinstance(found, Err):
            return found
        param = found.ok_value
        assigned = param.assign(raw)
        if isinstance(assigned, Err):
            return assigned
        logger.debug("Set %s = %r", param.name, param.value)
        return Ok(param)

    def by_category(self, category: Category) -> list[Parameter]:
        """Parameters of one category sorted by name."""
        return sorted(
            (p for p in self._params.values() if p.category is category),
            key=lambda p: p.name,
        )

    def ordered(self) -> list[Parameter]:
        """All parameters, category by category, each sorted by name."""
        return [p for category in Category for p in self.by_category(category)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[str]:
        return (p.name for p in self.ordered())
