"""
Derivation of the option table consumed by the argument scanner.

The table is rebuilt from the registry on every parse; nothing here keeps
state between calls.
"""

import dataclasses
import logging
from typing import Optional

from .coercion import Category
from .parameters import ParameterRegistry

logger = logging.getLogger(__name__)

HELP_TAG = ord("h")
VERSION_TAG = ord("v")
CATEGORY_TAGS = {
    Category.BOOL: ord("b"),
    Category.DOUBLE: ord("d"),
    Category.INT: ord("i"),
    Category.STRING: ord("s"),
}

HELP_NAME = "help"
HELP_DESCRIPTION = "Prints out this help information."


@dataclasses.dataclass(frozen=True)
class OptionSpec:
    """One recognized long option."""

    name: str
    takes_value: bool
    tag: int
    alias: Optional[str] = None
    description: str = ""

    @property
    def is_help(self) -> bool:
        return self.tag == HELP_TAG

    @property
    def is_version(self) -> bool:
        return self.tag == VERSION_TAG

    @property
    def option_strings(self) -> tuple[str, ...]:
        """
        Every spelling accepted on the command line.

        Long names are accepted with one or two dashes; help additionally
        answers to ``-h``.
        """
        if self.is_help:
            return ("-h", f"-{self.name}", f"--{self.name}")
        names = [f"-{self.name}", f"--{self.name}"]
        if self.alias:
            names[:0] = [f"-{self.alias}", f"--{self.alias}"]
        return tuple(names)


def build_option_table(
    registry: ParameterRegistry,
    version_name: Optional[str] = None,
    version_description: str = "",
) -> list[OptionSpec]:
    """
    Build the option table for ``registry``.

    Order is fixed: help, then the version option when one is configured,
    then bool, double, int and string parameters, each sorted by name.
    Every parameter option requires a value.
    """
    table = [OptionSpec(HELP_NAME, False, HELP_TAG, description=HELP_DESCRIPTION)]
    if version_name:
        table.append(
            OptionSpec(version_name, False, VERSION_TAG, description=version_description)
        )
    for param in registry.ordered():
        table.append(
            OptionSpec(
                param.name,
                True,
                CATEGORY_TAGS[param.category],
                alias=param.alias,
                description=param.description,
            )
        )
    logger.debug("Built option table with %d entries", len(table))
    return table
