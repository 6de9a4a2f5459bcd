import pytest

from optionparser import (
    MalformedOption,
    MissingRequiredOptions,
    OptionParser,
    UnknownOption,
    ValidationFailed,
)


@pytest.fixture
def example_parser():
    parser = OptionParser(description="An example parser.")
    parser.add_required("f", "foo-bar", description="The foo-bar option")
    parser.add_optional(
        "b",
        "bar-baz",
        default="xyz",
        description='The optional bar-baz option with a default of "xyz"',
    )
    parser.add_flag("c")
    parser.add_flag("d", "debug", default=True)
    parser.add_required(
        "i", "count", description="A required, validated option", validate=int
    )
    return parser


class TestParse:
    """Test suite for OptionParser.parse."""

    def test_full_example(self, example_parser):
        """Test the combination of every option kind and a remainder."""
        params = example_parser.parse(
            "-f foo_value --debug --count 123 -- some other stuff".split()
        )

        assert params["foo-bar"] == "foo_value"
        assert params["f"] == "foo_value"
        assert params["b"] == "xyz"
        assert params["c"] is False
        assert params["debug"] is True
        assert params["i"] == 123
        assert isinstance(params["count"], int)
        assert example_parser.remainder == ["some", "other", "stuff"]

    def test_required_option_value(self):
        parser = OptionParser()
        parser.add_required("f")

        assert parser.parse(["-f", "value"]) == {"f": "value"}

    def test_long_flag(self):
        parser = OptionParser()
        parser.add_flag("d", "debug")

        assert parser.parse(["--debug"]) == {"d": True, "debug": True}

    def test_short_flag(self):
        parser = OptionParser()
        parser.add_flag("d", "debug")

        assert parser.parse(["-d"]) == {"d": True, "debug": True}

    def test_optional_value_and_remainder(self):
        parser = OptionParser()
        parser.add_optional("x")

        params = parser.parse(["-x", "foo_value", "--", "a", "b"])
        assert params == {"x": "foo_value"}
        assert parser.remainder == ["a", "b"]

    def test_value_overrides_default(self):
        parser = OptionParser()
        parser.add_optional("b", "bar", default="xyz")

        assert parser.parse(["--bar", "abc"]) == {"b": "abc", "bar": "abc"}

    def test_last_value_wins(self):
        parser = OptionParser()
        parser.add_optional("x")

        assert parser.parse(["-x", "1", "-x", "2"]) == {"x": "2"}

    def test_parse_uses_sys_argv_when_args_is_none(self, monkeypatch):
        parser = OptionParser()
        parser.add_optional("x")
        monkeypatch.setattr("sys.argv", ["prog", "-x", "from_argv"])

        assert parser.parse() == {"x": "from_argv"}

    def test_parse_accepts_tuple(self):
        parser = OptionParser()
        parser.add_flag("v")

        assert parser.parse(("-v",)) == {"v": True}


class TestTokenClassification:
    """Test suite for the token scanning rules."""

    def test_bare_tokens_before_terminator_go_to_remainder(self):
        parser = OptionParser()
        parser.add_optional("x")

        parser.parse(["a", "b"])
        assert parser.remainder == ["a", "b"]

    def test_tokens_after_bare_token_are_not_options(self):
        parser = OptionParser()
        parser.add_optional("x")

        params = parser.parse(["a", "-x", "value"])
        assert params == {}
        assert parser.remainder == ["a", "-x", "value"]

    def test_options_after_terminator_go_to_remainder(self):
        parser = OptionParser()
        parser.add_optional("f")

        params = parser.parse(["--", "-f", "x"])
        assert params == {}
        assert parser.remainder == ["-f", "x"]

    def test_terminator_not_added_to_remainder(self):
        parser = OptionParser()
        parser.parse(["--"])
        assert parser.remainder == []

    def test_second_terminator_is_kept_in_remainder(self):
        parser = OptionParser()
        parser.parse(["--", "a", "--", "b"])
        assert parser.remainder == ["a", "--", "b"]

    def test_terminator_as_pending_value(self):
        parser = OptionParser()
        parser.add_optional("f")

        params = parser.parse(["-f", "--", "a"])
        assert params == {"f": "--"}
        assert parser.remainder == ["a"]

    def test_option_like_token_as_pending_value(self):
        parser = OptionParser()
        parser.add_optional("f")
        parser.add_flag("d")

        params = parser.parse(["-f", "-d"])
        assert params == {"f": "-d", "d": False}

    def test_negative_number_as_value(self):
        parser = OptionParser()
        parser.add_required("n", validate=int)

        assert parser.parse(["-n", "-5"]) == {"n": -5}

    def test_single_dash_is_remainder(self):
        parser = OptionParser()
        parser.parse(["-"])
        assert parser.remainder == ["-"]

    def test_token_with_trailing_newline_is_not_an_option(self):
        parser = OptionParser()
        parser.add_optional("f")

        assert parser.parse(["-f\n"]) == {}
        assert parser.remainder == ["-f\n"]

    def test_long_token_with_trailing_newline_is_remainder(self):
        parser = OptionParser()
        parser.add_flag("d", "debug")

        assert parser.parse(["--debug\n"]) == {"d": False, "debug": False}
        assert parser.remainder == ["--debug\n"]

    def test_malformed_short_option(self):
        parser = OptionParser()
        parser.add_optional("f", "foo")

        with pytest.raises(MalformedOption) as exc_info:
            parser.parse(["-foo"])
        assert exc_info.value.token == "-foo"

    def test_malformed_short_option_with_empty_registry(self):
        parser = OptionParser()
        with pytest.raises(MalformedOption):
            parser.parse(["-foo"])

    def test_unknown_short_option(self):
        parser = OptionParser()
        parser.add_optional("x")

        with pytest.raises(UnknownOption) as exc_info:
            parser.parse(["-z"])
        assert exc_info.value.name == "z"

    def test_unknown_long_option(self):
        parser = OptionParser()
        with pytest.raises(UnknownOption):
            parser.parse(["--nope"])

    def test_short_name_with_double_dash(self):
        """A long-form token looks up the same name table as a short one."""
        parser = OptionParser()
        parser.add_flag("d")

        assert parser.parse(["--d"]) == {"d": True}


class TestParseErrors:
    """Test suite for aggregated parse failures."""

    def test_missing_required_option(self):
        parser = OptionParser()
        parser.add_required("f")

        with pytest.raises(MissingRequiredOptions) as exc_info:
            parser.parse([])
        assert [spec.short_name for spec in exc_info.value.options] == ["f"]

    def test_missing_value_for_required_option(self):
        parser = OptionParser()
        parser.add_required("f")

        with pytest.raises(MissingRequiredOptions) as exc_info:
            parser.parse(["-f"])
        assert exc_info.value.options[0] is parser.options.lookup("f")

    def test_missing_required_options_are_aggregated(self):
        parser = OptionParser()
        parser.add_required("a")
        parser.add_optional("b")
        parser.add_required("c", "cee")

        with pytest.raises(MissingRequiredOptions) as exc_info:
            parser.parse(["-b", "x"])
        assert [spec.short_name for spec in exc_info.value.options] == ["a", "c"]
        assert "-a" in str(exc_info.value)
        assert "-c" in str(exc_info.value)

    def test_validation_failure_keeps_scanning(self):
        def reject(value):
            raise ValueError("error message")

        parser = OptionParser()
        parser.add_optional("f", validate=reject)
        parser.add_optional("g")

        with pytest.raises(ValidationFailed) as exc_info:
            parser.parse(["-f", "foo", "-g", "bar", "rest"])

        assert [spec.short_name for spec in exc_info.value.options] == ["f"]
        assert isinstance(exc_info.value.errors["f"], ValueError)
        assert parser.parameters["f"] is None
        assert parser.parameters["g"] == "bar"
        assert parser.remainder == ["rest"]

    def test_validation_failures_are_aggregated(self):
        parser = OptionParser()
        parser.add_required("i", validate=int)
        parser.add_required("j", validate=float)

        with pytest.raises(ValidationFailed) as exc_info:
            parser.parse(["-i", "one", "-j", "two"])
        assert set(exc_info.value.errors) == {"i", "j"}

    def test_missing_reported_before_validation_errors(self):
        parser = OptionParser()
        parser.add_required("a")
        parser.add_optional("i", validate=int)

        with pytest.raises(MissingRequiredOptions):
            parser.parse(["-i", "nope"])
        assert parser.result.validation_errors == [parser.options.lookup("i")]

    def test_failed_default_reported_at_parse(self):
        parser = OptionParser()
        parser.add_optional("n", default="not a number", validate=int)

        assert parser.parameters["n"] is None
        with pytest.raises(ValidationFailed):
            parser.parse([])

    def test_supplied_value_clears_failed_default(self):
        parser = OptionParser()
        parser.add_optional("n", default="not a number", validate=int)

        assert parser.parse(["-n", "3"]) == {"n": 3}


class TestRepeatedParse:
    """Test suite for parsing more than once with the same parser."""

    def test_repeated_parse_is_idempotent(self, example_parser):
        args = "-f foo_value --count 123 -c -- rest".split()

        first = dict(example_parser.parse(args))
        first_remainder = list(example_parser.remainder)
        second = example_parser.parse(args)

        assert first == second
        assert first_remainder == example_parser.remainder == ["rest"]

    def test_parse_resets_previous_values(self):
        parser = OptionParser()
        parser.add_optional("x", default="d")
        parser.add_flag("v")

        parser.parse(["-x", "given", "-v", "--", "a"])
        params = parser.parse([])

        assert params == {"x": "d", "v": False}
        assert parser.remainder == []

    def test_parse_clears_previous_validation_errors(self):
        parser = OptionParser()
        parser.add_optional("i", validate=int)

        with pytest.raises(ValidationFailed):
            parser.parse(["-i", "bad"])
        assert parser.parse(["-i", "7"]) == {"i": 7}
        assert parser.options.lookup("i").last_error is None
