#!/usr/bin/env python3
"""
Tests for parameter registration and default values.
"""

import pytest

from result import Err, Ok

from cloptions import (
    Category,
    CLOptions,
    MalformedValueError,
    Parameter,
    ParameterRegistry,
    TypeMismatchError,
    UnknownParameterError,
)
from cloptions.parameters import split_name


class TestRegistration:
    """Test suite for registering parameters."""

    def test_defaults_are_current_values(self):
        """Test that a freshly registered parameter reads back its default."""
        registry = ParameterRegistry()
        registry.register(Category.BOOL, "Flag", "A flag", True)
        registry.register(Category.DOUBLE, "Pi", "Pi", 3.14)
        registry.register(Category.INT, "N", "A count", 5)
        registry.register(Category.STRING, "Label", "A label", "x")

        assert registry.get(Category.BOOL, "Flag") == Ok(True)
        assert registry.get(Category.DOUBLE, "Pi") == Ok(3.14)
        assert registry.get(Category.INT, "N") == Ok(5)
        assert registry.get(Category.STRING, "Label") == Ok("x")

    def test_empty_description_gets_placeholder(self):
        """Test the generated description for parameters without one."""
        options = CLOptions()
        param = options.add_int_param("N", "", 1)
        assert param.description == "No description for N."

    def test_int_default_widened_for_double(self):
        """Test that an int default for a double parameter becomes a float."""
        param = Parameter("Ratio", Category.DOUBLE, 2)
        assert param.default == 2.0
        assert isinstance(param.value, float)

    @pytest.mark.parametrize(
        "category, default",
        [
            (Category.BOOL, 1),
            (Category.INT, True),
            (Category.INT, 1.5),
            (Category.DOUBLE, "3.0"),
            (Category.STRING, 3),
        ],
    )
    def test_wrong_default_type_raises(self, category, default):
        """Test that a default of the wrong type is refused at registration."""
        with pytest.raises(TypeError) as exc:
            Parameter("P", category, default)
        assert category.type_name in str(exc.value)

    def test_last_registration_wins(self):
        """Test that re-registering a name replaces it, even across categories."""
        options = CLOptions()
        options.add_int_param("X", "int version", 1)
        options.add_string_param("X", "string version", "one")

        assert len(options) == 1
        assert options.get(Category.STRING, "X") == Ok("one")
        assert isinstance(options.get(Category.INT, "X").err_value, TypeMismatchError)

    @pytest.mark.parametrize("spelled", ["", "  ", "n,", ",Name", "ab,Name", "help", "h,Height"])
    def test_invalid_names_raise(self, spelled):
        with pytest.raises(ValueError):
            split_name(spelled)

    def test_split_name(self):
        assert split_name("Name") == ("Name", None)
        assert split_name("n,Name") == ("Name", "n")
        assert split_name(" n , Name ") == ("Name", "n")

    def test_ordered_by_category_then_name(self):
        registry = ParameterRegistry()
        registry.register(Category.STRING, "b", "", "")
        registry.register(Category.INT, "z", "", 0)
        registry.register(Category.BOOL, "y", "", False)
        registry.register(Category.STRING, "a", "", "")
        registry.register(Category.DOUBLE, "x", "", 0.0)

        assert [p.name for p in registry.ordered()] == ["y", "x", "z", "a", "b"]


class TestSetAndGet:
    """Test suite for the registry set/get path."""

    def test_set_converts_and_stores(self):
        registry = ParameterRegistry()
        registry.register(Category.INT, "N", "A count", 5)

        result = registry.set("N", "42")

        assert isinstance(result, Ok)
        assert result.ok_value.value == 42

    def test_set_unknown_name(self):
        registry = ParameterRegistry()
        result = registry.set("Missing", "1")

        assert isinstance(result, Err)
        assert isinstance(result.err_value, UnknownParameterError)
        assert result.err_value.name == "Missing"

    def test_set_malformed_keeps_old_value(self):
        registry = ParameterRegistry()
        registry.register(Category.DOUBLE, "Pi", "Pi", 3.14)

        result = registry.set("Pi", "pie")

        assert isinstance(result.err_value, MalformedValueError)
        assert result.err_value.value == "pie"
        assert registry.get(Category.DOUBLE, "Pi") == Ok(3.14)

    def test_get_unknown_name(self):
        registry = ParameterRegistry()
        assert isinstance(
            registry.get(Category.INT, "Missing").err_value, UnknownParameterError
        )


class TestAccessors:
    """Test suite for the as_* accessors."""

    def test_type_mismatch_reports_and_returns_zero(self, capsys):
        """Test that a wrong-category accessor warns and returns the zero value."""
        options = CLOptions()
        options.add_double_param("DblParam", "Generic double parameter", 123.456)

        assert options.as_double("DblParam") == 123.456
        assert options.as_bool("DblParam") is False
        assert options.as_int("DblParam") == 0

        err = capsys.readouterr().err
        assert '[ERROR] CLOptions.as_bool() :: Parameter "DblParam" is double, not bool' in err
        assert '[ERROR] CLOptions.as_int() :: Parameter "DblParam" is double, not int' in err

    def test_unknown_accessor_reports(self, capsys):
        options = CLOptions()

        assert options.as_double("Nope") == 0.0
        assert options.as_string("Nope") == ""
        assert options["Nope"] == ""

        err = capsys.readouterr().err
        assert "[ERROR] Unknown command line parameter: Nope" in err

    def test_as_string_formats_every_category(self):
        """Test the textual representation of each category."""
        options = CLOptions()
        options.add_bool_param("On", "", True)
        options.add_bool_param("Off", "", False)
        options.add_double_param("Pi", "", 3.14)
        options.add_int_param("N", "", -3)
        options.add_string_param("S", "", "text")

        assert options.as_string("On") == "1"
        assert options.as_string("Off") == "0"
        assert options.as_string("Pi") == "3.14"
        assert options.as_string("N") == "-3"
        assert options.as_string("S") == "text"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
