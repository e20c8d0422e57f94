"""
Argument scanning on top of argparse.

The scanner only matches option spellings and collects raw text. It does
not convert values or touch the registry; the caller decides what to do
with the collected assignments.
"""

import argparse
import dataclasses
import logging
from typing import Optional, Sequence

from result import Err, Ok, Result

from .errors import UnrecognizedOptionError
from .options import OptionSpec

logger = logging.getLogger(__name__)


def split_tokens(text: str) -> list[str]:
    """Split raw option text on single spaces, keeping empty tokens."""
    return text.split(" ")


def first_token(text: str) -> str:
    """The token actually consumed from a (possibly multi-value) option."""
    return split_tokens(text)[0]


@dataclasses.dataclass
class ScanResult:
    """What one pass over argv found."""

    assignments: list[tuple[str, str]] = dataclasses.field(default_factory=list)
    help_requested: bool = False
    version_requested: bool = False
    positionals: list[str] = dataclasses.field(default_factory=list)

    def first_value(self, name: str) -> Optional[str]:
        """Raw text of the first occurrence of option ``name``, if any."""
        for option, raw in self.assignments:
            if option == name:
                return raw
        return None


class _AssignAction(argparse.Action):
    """Record (primary name, raw text) in the order options appear."""

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.assignments.append((self.dest, values))


class _FlagAction(argparse.Action):
    """No-argument option that only raises a flag on the namespace."""

    def __init__(self, option_strings, dest, **kwargs):
        kwargs["nargs"] = 0
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, True)


class OptionScanner(argparse.ArgumentParser):
    """
    An argparse parser built from an option table.

    Single-dash long options (``-Name``), double-dash long options
    (``--Name``), short aliases (``-n``) and ``=value`` forms are all
    accepted. Errors raise UnrecognizedOptionError instead of exiting.
    """

    def __init__(self, table: Sequence[OptionSpec], prog: Optional[str] = None) -> None:
        super().__init__(prog=prog, add_help=False, allow_abbrev=False)
        self.table = list(table)
        for spec in self.table:
            self._add_spec(spec)

    def _add_spec(self, spec: OptionSpec) -> None:
        # First claimer of a spelling keeps it; help is always first.
        names = [n for n in spec.option_strings if n not in self._option_string_actions]
        skipped = set(spec.option_strings) - set(names)
        if skipped:
            logger.debug("Option %s loses spellings %s", spec.name, sorted(skipped))
        if not names:
            return

        if spec.is_help:
            self.add_argument(*names, dest="help_requested", action=_FlagAction,
                              default=argparse.SUPPRESS)
        elif spec.is_version:
            self.add_argument(*names, dest="version_requested", action=_FlagAction,
                              default=argparse.SUPPRESS)
        else:
            self.add_argument(
                *names,
                dest=spec.name,
                action=_AssignAction,
                metavar=spec.name.upper(),
                default=argparse.SUPPRESS,
            )

    def error(self, message):
        raise UnrecognizedOptionError(message)

    def scan(self, args: Sequence[str]) -> Result[ScanResult, UnrecognizedOptionError]:
        """
        Walk ``args`` once and collect every recognized option.

        Non-option arguments are kept aside as positionals; the first
        unknown option ends the scan with an error.
        """
        result = ScanResult()
        namespace = argparse.Namespace(
            assignments=result.assignments,
            help_requested=False,
            version_requested=False,
        )
        try:
            namespace, extras = self.parse_known_args(self._attach_values(args), namespace)
        except UnrecognizedOptionError as e:
            return Err(e)

        for arg in extras:
            if arg.startswith("-") and arg != "-" and not self._is_number(arg):
                return Err(UnrecognizedOptionError(f"unrecognized option '{arg}'"))
            result.positionals.append(arg)

        result.help_requested = namespace.help_requested
        result.version_requested = namespace.version_requested
        return Ok(result)

    def _attach_values(self, args: Sequence[str]) -> list[str]:
        """
        Join each value-taking option with the token that follows it.

        ``-Label -foo`` becomes ``-Label=-foo`` so the next token is always
        the value, even when it starts with a dash.
        """
        takes_value = {
            name
            for name, action in self._option_string_actions.items()
            if isinstance(action, _AssignAction)
        }
        attached: list[str] = []
        tokens = iter(args)
        for token in tokens:
            if token == "--":
                attached.append(token)
                attached.extend(tokens)
                break
            if token in takes_value:
                value = next(tokens, None)
                if value is not None:
                    token = f"{token}={value}"
            attached.append(token)
        return attached

    @staticmethod
    def _is_number(arg: str) -> bool:
        try:
            float(arg)
        except ValueError:
            return False
        return True
