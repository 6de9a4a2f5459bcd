"""
Exception types raised by optionparser.

Declaration errors are raised immediately from the ``add_*`` calls. Parse
errors are raised from ``OptionParser.parse``; the missing-option and
validation errors are aggregated over the whole token stream so the usage
text can report every problem at once.
"""

from typing import Any, Optional, Sequence


class OptionParserError(Exception):
    """Base class for every error raised by this package."""


class DeclarationError(OptionParserError, ValueError):
    """An option could not be declared."""


class InvalidOption(DeclarationError):
    """Bad option name, non-callable validator, or a default on a required option."""


class DuplicateOption(DeclarationError):
    """A short or long name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate option specified: {name}")
        self.name = name


class ParseError(OptionParserError):
    """The argument tokens could not be parsed against the declared options."""


class MalformedOption(ParseError):
    def __init__(self, token: str) -> None:
        super().__init__(
            f"Illegal parameter [{token}], short options must be a single character"
        )
        self.token = token


class UnknownOption(ParseError):
    def __init__(self, token: str, name: str) -> None:
        super().__init__(f"Unknown parameter {token}")
        self.token = token
        self.name = name


class MissingRequiredOptions(ParseError):
    """
    One or more required options were not supplied.

    Attributes:
        options: The missing ``OptionSpec`` objects, in declaration order.
    """

    def __init__(self, options: Sequence[Any]) -> None:
        names = ", ".join(f"-{spec.short_name}" for spec in options)
        super().__init__(f"Missing required options: {names}")
        self.options = list(options)


class ValidationFailed(ParseError):
    """
    One or more option validators failed.

    Attributes:
        options: The failing ``OptionSpec`` objects, in declaration order.
        errors: Mapping of short name to the recorded validator failure.
    """

    def __init__(self, options: Sequence[Any]) -> None:
        names = ", ".join(f"-{spec.short_name}" for spec in options)
        super().__init__(f"Validation errors: {names}")
        self.options = list(options)
        self.errors = {spec.short_name: spec.last_error for spec in options}


class RemainderValidationFailed(ParseError):
    def __init__(self, error: Any, message: Optional[str] = None) -> None:
        super().__init__(message or f"Remainder validation error: {error}")
        self.error = error
