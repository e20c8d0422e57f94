"""
CLOptions - declare typed command-line parameters and fill them from argv.

This module ties the pieces together: parameters are registered on a
``CLOptions`` instance, and ``parse`` rebuilds the option table, scans the
arguments, optionally loads a configuration file, and stores the converted
values. ``-h``/``-help``/``--help`` prints the generated usage block.
"""

import dataclasses
import enum
import logging
import os
import sys
from typing import Any, Iterator, Optional, Sequence, TextIO

from result import Err, Ok, Result

from .coercion import Category, format_value
from .config import ConfigFileLoader
from .errors import CLOptionsError, report_error
from .help import HelpRenderer
from .options import OptionSpec, build_option_table
from .parameters import Parameter, ParameterRegistry
from .scanner import OptionScanner, ScanResult, first_token

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE_OPTION = "ConfigFile"
DEFAULT_CONFIG_FILE_DESCRIPTION = (
    "Configuration file containing options "
    "(will be overridden by values passed on the command line)."
)


class Outcome(enum.Enum):
    PROCEED = "proceed"
    HELP_SHOWN = "help shown"
    VERSION_SHOWN = "version shown"
    ABORTED = "aborted"


@dataclasses.dataclass(frozen=True)
class ParseStatus:
    """What ``CLOptions.parse`` decided, plus a reason when it stopped."""

    outcome: Outcome
    reason: Optional[str] = None

    @property
    def should_stop(self) -> bool:
        return self.outcome is not Outcome.PROCEED


class CLOptions:
    """
    A registry of typed command-line parameters with a parser attached.

    Example:
        options = CLOptions()
        options.add_string_param("n,Name", "The person's name.", "")
        options.add_int_param("Age", "Age in years", 0)
        options.add_config_file_param()

        if options.parse().should_stop:
            return 0
        age = options.as_int("Age")

    Parameters are accepted as ``-Name value``, ``--Name value``,
    ``-Name=value`` and, for a declared alias, ``-n value``. Values from the
    configuration file are applied first, so anything given on the command
    line wins.
    """

    def __init__(self, pad_width: int = 15, max_width: int = 80) -> None:
        self.registry = ParameterRegistry()
        self.help_renderer = HelpRenderer(pad_width, max_width)
        self.version_option: Optional[str] = None
        self.version_description = ""
        self.version_text = ""

    # Registration

    def add_bool_param(self, name: str, description: str, default: bool) -> Parameter:
        return self.registry.register(Category.BOOL, name, description, default)

    def add_double_param(self, name: str, description: str, default: float) -> Parameter:
        return self.registry.register(Category.DOUBLE, name, description, default)

    def add_int_param(self, name: str, description: str, default: int) -> Parameter:
        return self.registry.register(Category.INT, name, description, default)

    def add_string_param(self, name: str, description: str, default: str) -> Parameter:
        return self.registry.register(Category.STRING, name, description, default)

    def add_config_file_param(
        self,
        name: str = DEFAULT_CONFIG_FILE_OPTION,
        description: str = DEFAULT_CONFIG_FILE_DESCRIPTION,
        default: str = "",
        comment: str = "#",
    ) -> Parameter:
        """
        Register the String parameter that names a configuration file.

        Args:
            name: Option name, "ConfigFile" when empty.
            description: Help text, a standard sentence when empty.
            default: File loaded when the option is not passed; empty
                means no file is loaded by default.
            comment: Lines starting with this prefix are ignored.
        """
        param = self.add_string_param(
            name or DEFAULT_CONFIG_FILE_OPTION,
            description or DEFAULT_CONFIG_FILE_DESCRIPTION,
            default,
        )
        self.registry.config_file_option = param.name
        self.registry.comment_prefix = comment
        return param

    def set_config_file_option(self, name: str) -> None:
        """
        Use an already registered String parameter as the config-file option.

        ``name`` may be the primary name or the short alias.

        Raises:
            ValueError: If no parameter has that name, or it is not a string.
        """
        param = self.registry.lookup(name).unwrap_or(None)
        if param is None:
            raise ValueError(f"Unknown config file parameter: {name}")
        if param.category is not Category.STRING:
            raise ValueError(
                f"Config file parameter '{param.name}' must be a string, "
                f"got {param.category.type_name}"
            )
        self.registry.config_file_option = param.name

    def add_version_param(
        self,
        name: str = "version",
        description: str = "Print version information and exit.",
        text: str = "version text not set",
    ) -> None:
        """Add a no-argument option that prints ``text`` and stops parsing."""
        self.version_option = name or "version"
        self.version_description = description
        self.version_text = text

    # Parsing

    def option_table(self) -> list[OptionSpec]:
        """Option table derived from the parameters registered so far."""
        return build_option_table(
            self.registry, self.version_option, self.version_description
        )

    def parse(
        self, args: Optional[Sequence[str]] = None, prog: Optional[str] = None
    ) -> ParseStatus:
        """
        Parse command-line arguments into the registered parameters.

        Args:
            args: Arguments to parse. If None, uses sys.argv[1:].
            prog: Program name shown in help. If None, uses sys.argv[0].

        Returns:
            ParseStatus. Callers should stop unless the outcome is PROCEED.
        """
        argv = sys.argv[1:] if args is None else list(args)
        prog = prog or os.path.basename(sys.argv[0])

        table = self.option_table()
        scanned = OptionScanner(table, prog=prog).scan(argv)
        if isinstance(scanned, Err):
            return self._abort(scanned.err_value)
        scan = scanned.ok_value

        # Help and version stop before anything is assigned.
        if scan.help_requested:
            self._write(self.help_renderer.render(prog, table, self.registry))
            return ParseStatus(Outcome.HELP_SHOWN, "help requested")
        if scan.version_requested:
            print(self.version_text)
            return ParseStatus(Outcome.VERSION_SHOWN, "version requested")

        loaded = self._load_config_file(scan)
        if isinstance(loaded, Err):
            return self._abort(loaded.err_value)

        for name, raw in scan.assignments:
            assigned = self.registry.set(name, first_token(raw))
            if isinstance(assigned, Err):
                return self._abort(assigned.err_value)

        return ParseStatus(Outcome.PROCEED)

    def safe_parse(
        self, args: Optional[Sequence[str]] = None, prog: Optional[str] = None
    ) -> Result["CLOptions", str]:
        """
        Parse and return Ok(self) when the program should go on.

        Returns:
            Result["CLOptions", str]:
                - Ok(self) if the outcome is PROCEED,
                - Err with the stop reason otherwise (help, version or error).
        """
        status = self.parse(args, prog)
        if status.should_stop:
            return Err(status.reason or status.outcome.value)
        return Ok(self)

    def _prescan_config_file(self, scan: ScanResult) -> Optional[str]:
        """Path passed explicitly for the config-file option, if any."""
        raw = scan.first_value(self.registry.config_file_option)
        return None if raw is None else first_token(raw)

    def _load_config_file(self, scan: ScanResult) -> Result[int, CLOptionsError]:
        option = self.registry.config_file_option
        if not option or option not in self.registry:
            return Ok(0)

        path = self._prescan_config_file(scan)
        if path is None:
            path = self.registry.get(Category.STRING, option).unwrap_or("")
            if not path:
                return Ok(0)
        return ConfigFileLoader(self.registry).load(path)

    def _abort(self, error: CLOptionsError) -> ParseStatus:
        logger.debug("Parse aborted: %s", error)
        report_error(error)
        return ParseStatus(Outcome.ABORTED, str(error))

    # Access

    def get(self, category: Category, name: str) -> Result[Any, CLOptionsError]:
        return self.registry.get(category, name)

    def set(self, name: str, raw: str) -> Result[Parameter, CLOptionsError]:
        return self.registry.set(name, raw)

    def _typed(self, category: Category, name: str, accessor: str) -> Any:
        found = self.registry.get(category, name)
        if isinstance(found, Err):
            report_error(f"CLOptions.{accessor}() :: {found.err_value}")
            return category.zero
        return found.ok_value

    def as_bool(self, name: str) -> bool:
        """Value of a bool parameter; False with a diagnostic otherwise."""
        return self._typed(Category.BOOL, name, "as_bool")

    def as_double(self, name: str) -> float:
        """Value of a double parameter; 0.0 with a diagnostic otherwise."""
        return self._typed(Category.DOUBLE, name, "as_double")

    def as_int(self, name: str) -> int:
        """Value of an int parameter; 0 with a diagnostic otherwise."""
        return self._typed(Category.INT, name, "as_int")

    def as_string(self, name: str) -> str:
        """Textual value of any parameter; bools read as '1' or '0'."""
        found = self.registry.lookup(name)
        if isinstance(found, Err):
            report_error(found.err_value)
            return ""
        return str(found.ok_value)

    def __getitem__(self, name: str) -> str:
        return self.as_string(name)

    def __contains__(self, name: object) -> bool:
        return name in self.registry

    def __len__(self) -> int:
        return len(self.registry)

    def __iter__(self) -> Iterator[str]:
        return iter(self.registry)

    # Printing

    def format_help(self, prog: str) -> str:
        return self.help_renderer.render(prog, self.option_table(), self.registry)

    def print_help(self, prog: str, file: Optional[TextIO] = None) -> None:
        self._write(self.format_help(prog), file)

    def print_category(
        self, category: Category, detailed: bool = False, file: Optional[TextIO] = None
    ) -> None:
        """Print one category's parameters; nothing when it is empty."""
        params = self.registry.by_category(category)
        if not params:
            return

        lines = []
        if detailed:
            lines += ["*****************", f"  {category.banner}", "*****************"]
        for param in params:
            if detailed:
                lines.append(f"# {param.description}")
                lines.append(
                    f"# [Default = {format_value(category, param.default)}]"
                )
            lines.append(f"{param.name} {param}")
        self._write("\n".join(lines) + "\n", file)

    def print_simple(self, file: Optional[TextIO] = None) -> None:
        for category in Category:
            self.print_category(category, False, file)

    def print_detailed(self, file: Optional[TextIO] = None) -> None:
        for category in Category:
            self.print_category(category, True, file)

    @staticmethod
    def _write(text: str, file: Optional[TextIO] = None) -> None:
        (file or sys.stdout).write(text)
