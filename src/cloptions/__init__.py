"""
CLOptions - typed command-line parameters with config-file defaults.

This package lets a program declare boolean, integer, floating-point and
string parameters with defaults and descriptions, then fill them from the
command line and an optional configuration file, with ``-help`` output
generated from the declarations.
"""

from .coercion import Category
from .errors import (
    CLOptionsError,
    ConfigFileError,
    MalformedValueError,
    TypeMismatchError,
    UnknownParameterError,
    UnrecognizedOptionError,
)
from .help import HelpRenderer
from .options import OptionSpec, build_option_table
from .parameters import Parameter, ParameterRegistry
from .parser import CLOptions, Outcome, ParseStatus

__version__ = "1.0.0"
__all__ = [
    "CLOptions",
    "Category",
    "Parameter",
    "ParameterRegistry",
    "Outcome",
    "ParseStatus",
    "OptionSpec",
    "build_option_table",
    "HelpRenderer",
    "CLOptionsError",
    "UnknownParameterError",
    "TypeMismatchError",
    "MalformedValueError",
    "ConfigFileError",
    "UnrecognizedOptionError",
]
