"""
Loading parameter values from a configuration file.

The native format is line oriented::

    # comment
    Pi 3.14159
    Label hello

Files ending in .yaml/.yml or .json may instead hold a flat mapping of
parameter names to scalar values.
"""

import json
import logging
import os
from typing import Any, Iterator

import yaml
from result import Err, Ok, Result

from .errors import (
    CLOptionsError,
    ConfigFileError,
    UnknownParameterError,
    report_error,
)
from .parameters import ParameterRegistry
from .scanner import split_tokens

logger = logging.getLogger(__name__)

_YAML_EXTENSIONS = (".yaml", ".yml")
_JSON_EXTENSIONS = (".json",)


class ConfigFileLoader:
    """Apply the assignments found in a configuration file to a registry."""

    def __init__(self, registry: ParameterRegistry) -> None:
        self.registry = registry

    @property
    def comment_prefix(self) -> str:
        return self.registry.comment_prefix

    def load(self, path: str) -> Result[int, CLOptionsError]:
        """
        Load ``path`` and route every assignment through the registry.

        Reading stops at the first assignment that fails. An unknown
        parameter name is reported on stderr and ends the file without
        failing the load; malformed values and unreadable files fail it.

        Returns:
            Ok with the number of parameters set, or Err describing the
            failure.
        """
        logger.info("Filling from %s", path)
        if not os.path.isfile(path):
            return Err(ConfigFileError(path, "file does not exist"))

        file_ext = os.path.splitext(path)[1].lower()
        try:
            with open(path, "r") as f:
                if file_ext in _YAML_EXTENSIONS or file_ext in _JSON_EXTENSIONS:
                    pairs = list(self._mapping_pairs(path, f, file_ext))
                else:
                    pairs = list(self._line_pairs(f))
        except OSError as e:
            return Err(ConfigFileError(path, e.strerror or str(e)))
        except ConfigFileError as e:
            return Err(e)

        applied = 0
        for name, raw in pairs:
            assigned = self.registry.set(name, raw)
            if isinstance(assigned, Err):
                if isinstance(assigned.err_value, UnknownParameterError):
                    # Unknown names end the file but not the parse.
                    report_error(assigned.err_value)
                    break
                return assigned
            applied += 1
        return Ok(applied)

    def _line_pairs(self, lines: Iterator[str]) -> Iterator[tuple[str, str]]:
        prefix = self.comment_prefix
        for line in lines:
            line = line.rstrip("\r\n").lstrip()
            if not line.strip():
                continue
            if prefix and line.startswith(prefix):
                continue

            tokens = split_tokens(line)
            values = tokens[1:]
            if not values:
                continue
            yield tokens[0], values[0]

    def _mapping_pairs(
        self, path: str, f: Any, file_ext: str
    ) -> Iterator[tuple[str, str]]:
        try:
            if file_ext in _YAML_EXTENSIONS:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        except yaml.YAMLError as e:
            raise ConfigFileError(path, f"Invalid YAML file: {e}")
        except json.JSONDecodeError as e:
            raise ConfigFileError(path, f"Invalid JSON file: {e}")

        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigFileError(
                path, f"expected a mapping of parameters, got {type(data).__name__}"
            )
        for name, value in data.items():
            yield str(name), _scalar_text(path, name, value)


def _scalar_text(path: str, name: Any, value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise ConfigFileError(path, f"value of '{name}' must be a scalar")
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
