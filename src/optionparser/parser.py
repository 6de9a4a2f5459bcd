"""
OptionParser - a small command-line option parser.

This module provides the public facade: declare required, optional and flag
options, parse a list of argument tokens into a mapping of parameters plus a
remainder, and render a usage statement describing the options and any
problems found by the last parse.
"""

import dataclasses
import logging
import sys
from typing import Any, Optional

from result import Err, Ok, Result

from . import config
from .errors import OptionParserError
from .options import OptionRegistry, OptionSpec, Validator
from .scanner import ArgumentScanner, ParseResult
from .usage import UsagePresenter

logger = logging.getLogger(__name__)


class OptionParser:
    """
    A command-line option parser with required, optional and flag options.

    Every option has a single-character short name (``-f``) and may have a
    long name (``--foo-bar``). Parsed values are available under both names.

    Example:
        parser = OptionParser(description="An example parser.")
        parser.add_required("f", "foo-bar", description="The foo-bar option")
        parser.add_optional("b", "bar-baz", default="xyz")
        parser.add_flag("d", "debug", default=True)
        parser.add_required("i", "count", validate=int)

        params = parser.parse("-f foo_value --count 123 -- some other stuff".split())
        assert params["foo-bar"] == "foo_value"
        assert params["b"] == "xyz"
        assert params["count"] == 123
        assert parser.remainder == ["some", "other", "stuff"]
    """

    def __init__(
        self, description: Optional[str] = None, default_value_width: int = 30
    ) -> None:
        """
        Initialize an empty OptionParser.

        Args:
            description: Text shown at the top of the usage statement.
            default_value_width: Maximum number of characters of a default
                value shown in the usage statement before it is truncated.
        """
        self.description = description
        self.default_value_width = default_value_width
        self.options = OptionRegistry()
        self._scanner = ArgumentScanner(self.options)

    @classmethod
    def from_config_file(cls, config_path: str) -> "OptionParser":
        """
        Build a parser from a YAML or JSON declaration file.

        See ``optionparser.config`` for the file format.
        """
        return config.build_parser(config.load_config_file(config_path))

    def add_required(
        self,
        short_name: str,
        long_name: Optional[str] = None,
        *,
        description: Optional[str] = None,
        validate: Optional[Validator] = None,
        default: Any = dataclasses.MISSING,
    ) -> OptionSpec:
        """
        Add a required option. A value must be supplied for it at parse time.

        Args:
            short_name: A single character name for this option.
            long_name: An optional long name for this option.
            description: Text describing this option in the usage statement.
            validate: A callable passed the supplied value; its return value
                is the final value of the parameter.

        Raises:
            InvalidOption: If a default is supplied (required options cannot
                have one) or the option is otherwise invalid.
            DuplicateOption: If a name is already in use.
        """
        return self.options.add_required(
            short_name,
            long_name,
            description=description,
            validate=validate,
            default=default,
        )

    def add_optional(
        self,
        short_name: str,
        long_name: Optional[str] = None,
        *,
        default: Any = dataclasses.MISSING,
        description: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> OptionSpec:
        """
        Add an optional option, which may have a default value.

        The default is processed by ``validate`` if one is given, immediately
        and again at the start of every parse.
        """
        spec = self.options.add_optional(
            short_name,
            long_name,
            default=default,
            description=description,
            validate=validate,
        )
        self._scanner.apply_default(spec)
        return spec

    def add_flag(
        self,
        short_name: str,
        long_name: Optional[str] = None,
        *,
        default: Any = False,
        description: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> OptionSpec:
        """
        Add a flag. Flags take no value and are ``False`` unless given.

        A truthy ``default`` makes the flag ``True`` by default. The result of
        ``validate`` is evaluated as true or false.
        """
        spec = self.options.add_flag(
            short_name,
            long_name,
            default=default,
            description=description,
            validate=validate,
        )
        self._scanner.apply_default(spec)
        return spec

    def set_remainder_validator(self, validator: Validator) -> None:
        """
        Define a validator for the remainder.

        It is passed the remainder once all options are parsed; its return
        value becomes the final remainder.
        """
        self.options.set_remainder_validator(validator)

    @property
    def parameters(self) -> dict[str, Any]:
        return self._scanner.result.parameters

    @property
    def remainder(self) -> list[Any]:
        return self._scanner.result.remainder

    @property
    def remainder_error(self) -> Any:
        return self._scanner.result.remainder_error

    @property
    def result(self) -> Optional[ParseResult]:
        """The state of the last parse, or None if ``parse`` was never called."""
        return self._scanner.result if self._scanner.scanned else None

    def parse(self, args: Optional[list[str]] = None) -> dict[str, Any]:
        """
        Parse argument tokens into a mapping of parameters.

        Each option with a value is available under its short name and, if it
        has one, its long name. Unconsumed tokens are available as
        ``remainder``.

        Args:
            args (Optional[list[str]]): Tokens to parse. If None, uses sys.argv[1:].

        Returns:
            dict[str, Any]: The parsed parameters.

        Raises:
            ParseError: If the tokens are malformed, name unknown options,
                omit required options, or fail validation. The usage
                statement describes every problem found.
        """
        args = sys.argv[1:] if args is None else list(args)
        logger.debug("Parsing %d argument(s)", len(args))
        return self._scanner.scan(args)

    def safe_parse(
        self, args: Optional[list[str]] = None
    ) -> Result[dict[str, Any], str]:
        """
        Safely parse argument tokens.

        Args:
            args (Optional[list[str]]): Tokens to parse. If None, uses sys.argv[1:].
        Returns:
            Result[dict[str, Any], str]:
                - Ok with the parsed parameters,
                - Err with the error message if parsing fails.
        """
        try:
            return Ok(self.parse(args))
        except OptionParserError as e:
            return Err(str(e))

    @property
    def usage(self) -> str:
        """
        The usage statement: options grouped by kind, with defaults and
        descriptions aligned, preceded by any problems from the last parse.
        """
        presenter = UsagePresenter(
            self.options,
            description=self.description,
            default_value_width=self.default_value_width,
        )
        return presenter.render(self.result)

    def print_usage(self, file: Any = None) -> None:
        """Write the usage statement to ``file`` (default: sys.stderr)."""
        if file is None:
            file = sys.stderr
        file.write(self.usage)
