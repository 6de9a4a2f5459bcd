"""
optionparser - a small command-line option parser.

This package lets you declare required options, optional options with
defaults, and boolean flags, then parse argument tokens into a mapping of
parameter values plus a remainder of unconsumed tokens. Values can be
converted or validated by per-option validators, and a usage statement
reports every missing or invalid option at once. Options can also be
declared from YAML or JSON files.
"""

from .errors import (
    DeclarationError,
    DuplicateOption,
    InvalidOption,
    MalformedOption,
    MissingRequiredOptions,
    OptionParserError,
    ParseError,
    RemainderValidationFailed,
    UnknownOption,
    ValidationFailed,
)
from .options import OptionKind, OptionRegistry, OptionSpec
from .parser import OptionParser
from .scanner import ArgumentScanner, ParseResult
from .usage import UsagePresenter

__version__ = "1.0.0"
__all__ = [
    "OptionParser",
    "OptionKind",
    "OptionSpec",
    "OptionRegistry",
    "ArgumentScanner",
    "ParseResult",
    "UsagePresenter",
    "OptionParserError",
    "DeclarationError",
    "InvalidOption",
    "DuplicateOption",
    "ParseError",
    "MalformedOption",
    "UnknownOption",
    "MissingRequiredOptions",
    "ValidationFailed",
    "RemainderValidationFailed",
]
