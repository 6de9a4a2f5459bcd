"""
Token scanning: turns a sequence of raw argument tokens into parameters.

The scanner walks the tokens once. A token following a value option is that
option's value; ``-x`` and ``--name`` tokens select options; ``--`` ends
option parsing and every token after it (or after the first bare token) is
collected verbatim into the remainder.
"""

import dataclasses
import logging
import re
from typing import Any, Iterable, Optional

from result import Err

from .errors import (
    MalformedOption,
    MissingRequiredOptions,
    RemainderValidationFailed,
    UnknownOption,
    ValidationFailed,
)
from .options import OptionKind, OptionRegistry, OptionSpec, apply_validator

logger = logging.getLogger(__name__)

OPTION_TOKEN = re.compile(r"-[^-]|--.+")
MALFORMED_SHORT_TOKEN = re.compile(r"^-[^-].+")
TERMINATOR = "--"


@dataclasses.dataclass
class ParseResult:
    """
    Transient state of a single parse.

    ``missing`` and ``validation_errors`` are computed on access from the
    parameters and from each spec's ``last_error``.
    """

    registry: OptionRegistry = dataclasses.field(repr=False)
    parameters: dict[str, Any] = dataclasses.field(default_factory=dict)
    remainder: list[Any] = dataclasses.field(default_factory=list)
    remainder_error: Any = None

    @property
    def missing(self) -> list[OptionSpec]:
        return [
            spec
            for spec in self.registry.of_kind(OptionKind.REQUIRED)
            if spec.short_name not in self.parameters
        ]

    @property
    def validation_errors(self) -> list[OptionSpec]:
        return [spec for spec in self.registry if spec.last_error is not None]

    @property
    def has_problems(self) -> bool:
        return bool(
            self.missing or self.validation_errors or self.remainder_error is not None
        )


class ArgumentScanner:
    """
    Consumes argument tokens against an ``OptionRegistry``.

    The scanner owns the current ``ParseResult``. Declared defaults are
    materialized into it as soon as they are declared, and again at the start
    of every ``scan`` so repeated scans never accumulate state.
    """

    def __init__(self, registry: OptionRegistry) -> None:
        self.registry = registry
        self.result = ParseResult(registry)
        self.scanned = False

    def reset(self) -> ParseResult:
        """Discard the previous parse state and re-apply every declared default."""
        self.result = ParseResult(self.registry)
        for spec in self.registry:
            spec.last_error = None
        for spec in self.registry:
            self.apply_default(spec)
        return self.result

    def apply_default(self, spec: OptionSpec) -> None:
        if spec.has_default:
            self.add_parameter(spec, spec.default)

    def add_parameter(self, spec: OptionSpec, raw: Any) -> Any:
        """
        Resolve a raw value for ``spec`` and store it under all of its names.

        A failing validator does not raise here: the failure is recorded on the
        spec and the stored value is ``None``. Failures are reported together
        once the scan is complete.
        """
        outcome = spec.resolve(raw)
        if isinstance(outcome, Err):
            spec.last_error = outcome.err_value
            value = None
            logger.debug(
                "Validation of -%s failed for %r: %s",
                spec.short_name,
                raw,
                outcome.err_value,
            )
        else:
            spec.last_error = None
            value = outcome.ok_value

        for name in spec.names:
            self.result.parameters[name] = value
        return value

    def scan(self, tokens: Iterable[str]) -> dict[str, Any]:
        """
        Scan ``tokens`` and return the resolved parameters.

        Args:
            tokens: The raw argument tokens, typically ``sys.argv[1:]``.

        Returns:
            dict[str, Any]: Parameters keyed by short name and, where declared,
            long name.

        Raises:
            MalformedOption: A token looks like a multi-character short option.
            UnknownOption: A token names an undeclared option.
            MissingRequiredOptions: Required options were not supplied.
            ValidationFailed: One or more validators failed.
            RemainderValidationFailed: The remainder validator failed.
        """
        self.scanned = True
        result = self.reset()

        pending: Optional[OptionSpec] = None
        latched = False

        for token in tokens:
            if latched:
                result.remainder.append(token)
            elif pending is not None:
                self.add_parameter(pending, token)
                pending = None
            elif MALFORMED_SHORT_TOKEN.match(token):
                raise MalformedOption(token)
            elif OPTION_TOKEN.fullmatch(token):
                name = token[2:] if token.startswith(TERMINATOR) else token[1:]
                spec = self.registry.get(name)
                if spec is None:
                    raise UnknownOption(token, name)

                if spec.is_flag:
                    self.add_parameter(spec, True)
                else:
                    pending = spec
            elif token == TERMINATOR:
                logger.debug("Terminator reached, collecting remainder")
                latched = True
            else:
                result.remainder.append(token)
                latched = True

        if pending is not None:
            logger.warning("No value supplied for option -%s", pending.short_name)

        self._check(result)
        return result.parameters

    def _check(self, result: ParseResult) -> None:
        missing = result.missing
        if missing:
            raise MissingRequiredOptions(missing)

        errors = result.validation_errors
        if errors:
            raise ValidationFailed(errors)

        validator = self.registry.remainder_validator
        if validator is None:
            return

        outcome = apply_validator(validator, result.remainder)
        if isinstance(outcome, Err):
            result.remainder_error = outcome.err_value
            logger.debug("Remainder validation failed: %s", outcome.err_value)
            cause = outcome.err_value
            if isinstance(cause, BaseException):
                raise RemainderValidationFailed(cause) from cause
            raise RemainderValidationFailed(cause)
        result.remainder = outcome.ok_value
