"""
Help text rendering with word-wrapped, padded descriptions.
"""

from typing import Any, Sequence

from .coercion import Category
from .options import OptionSpec
from .parameters import ParameterRegistry

_DEFAULT_FORMATS = {
    Category.BOOL: lambda v: "%d" % v,
    Category.DOUBLE: lambda v: "%f" % v,
    Category.INT: lambda v: "%d" % v,
    Category.STRING: lambda v: "%s" % v,
}


def format_default(category: Category, value: Any) -> str:
    """Render a default the way the help block shows it."""
    return _DEFAULT_FORMATS[category](value)


class HelpRenderer:
    """
    Formats the usage block for a parsed option table.

    Descriptions are word-wrapped: each line starts with ``pad_width``
    spaces and a word moves to the next line once the running column
    count would exceed ``max_width``. Words are never broken.
    """

    def __init__(self, pad_width: int = 15, max_width: int = 80) -> None:
        self.pad_width = pad_width
        self.max_width = max_width

    @property
    def effective_width(self) -> int:
        if self.max_width > self.pad_width:
            return self.max_width
        return self.pad_width + 1

    def wrap(self, description: str) -> list[str]:
        """
        Break ``description`` into padded lines.

        Returns:
            The lines without trailing newlines; a single empty line when
            the description has no words.
        """
        lines: list[list[str]] = []
        current: list[str] = []
        length = 0
        for word in description.split():
            if not current:
                current = [word]
                length = self.pad_width + len(word) + 1
            elif length + len(word) > self.effective_width:
                lines.append(current)
                current = [word]
                length = self.pad_width + len(word) + 1
            else:
                current.append(word)
                length += len(word) + 1
        if current:
            lines.append(current)

        pad = " " * self.pad_width
        return [pad + " ".join(words) for words in lines] or [""]

    def heading(self, spec: OptionSpec, registry: ParameterRegistry) -> str:
        """Option line, e.g. ``  -n, -Name [string, default=]``."""
        if spec.is_help:
            return f"  -h, -{spec.name} [no argument]"
        if not spec.takes_value:
            return f"  -{spec.name} [no argument]"

        param = registry.lookup(spec.name).unwrap()
        flags = f"-{spec.alias}, -{spec.name}" if spec.alias else f"-{spec.name}"
        default = format_default(param.category, param.default)
        return f"  {flags} [{param.category.type_name}, default={default}]"

    def render(
        self, prog: str, table: Sequence[OptionSpec], registry: ParameterRegistry
    ) -> str:
        """
        Full help text for ``prog``: the usage line, then every option in
        table order with its wrapped description.
        """
        lines = ["", f"USAGE: {prog} [options]", "", "AVAILABLE OPTIONS:"]
        for spec in table:
            lines.append(self.heading(spec, registry))
            lines.extend(self.wrap(spec.description))
        lines.append("")
        return "\n".join(lines) + "\n"
