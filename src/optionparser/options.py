"""
Option declarations and the registry that owns them.

Each declared option is an ``OptionSpec``. The ``OptionRegistry`` keeps the
specs in declaration order and indexes every spec under its short name and,
when one was given, its long name, so both names resolve to the same object.
"""

import dataclasses
import enum
import logging
from typing import Any, Callable, Iterator, Optional

from result import Err, Ok, Result

from .errors import DuplicateOption, InvalidOption

logger = logging.getLogger(__name__)

Validator = Callable[[Any], Any]


def apply_validator(validator: Validator, raw: Any) -> Result[Any, Any]:
    """
    Call a validator, turning its outcome into a ``Result``.

    The validator may return a plain value, an ``Ok``/``Err``, or raise. A
    raised exception becomes ``Err(exception)``; an ``Err`` without a payload
    becomes ``Err(ValueError)`` so a failure is never recorded as ``None``.
    """
    try:
        outcome = validator(raw)
    except Exception as e:
        return Err(e)

    if isinstance(outcome, Err):
        if outcome.err_value is None:
            return Err(ValueError(f"Invalid value: {raw!r}"))
        return outcome
    if isinstance(outcome, Ok):
        return outcome
    return Ok(outcome)


class OptionKind(enum.Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    FLAG = "flag"


@dataclasses.dataclass(eq=False)
class OptionSpec:
    """
    A single declared option.

    ``default`` is ``dataclasses.MISSING`` when the option was declared without
    one. ``last_error`` holds the failure of the most recent validator call
    and is reset at the start of every parse.
    """

    short_name: str
    kind: OptionKind
    long_name: Optional[str] = None
    default: Any = dataclasses.field(default_factory=lambda: dataclasses.MISSING)
    description: Optional[str] = None
    validator: Optional[Validator] = None
    last_error: Any = dataclasses.field(default=None, repr=False)

    @property
    def names(self) -> tuple[str, ...]:
        if self.long_name:
            return (self.short_name, self.long_name)
        return (self.short_name,)

    @property
    def has_default(self) -> bool:
        return self.default is not dataclasses.MISSING

    @property
    def is_flag(self) -> bool:
        return self.kind is OptionKind.FLAG

    def resolve(self, raw: Any) -> Result[Any, Any]:
        """
        Run the validator (if any) over a raw value.

        Flag values are coerced to a strict boolean on success.

        Returns:
            Result[Any, Any]: ``Ok`` with the resolved value, or ``Err`` with
            the raised exception or returned error.
        """
        if self.validator is None:
            return Ok(raw)

        outcome = apply_validator(self.validator, raw)
        if self.is_flag and isinstance(outcome, Ok):
            return Ok(bool(outcome.ok_value))
        return outcome


class OptionRegistry:
    """
    Ordered collection of ``OptionSpec`` objects with lookup by name.

    Specs live in a single list in declaration order; ``_index`` maps each
    short and long name to the spec's position in that list.

    The registry only records declarations. Defaults are materialized into
    parameter values by ``ArgumentScanner.apply_default``, which
    ``OptionParser`` calls as each option is declared and the scanner calls
    again at the start of every scan.
    """

    def __init__(self) -> None:
        self._specs: list[OptionSpec] = []
        self._index: dict[str, int] = {}
        self._remainder_validator: Optional[Validator] = None

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
        Declare an option that must be supplied at parse time.

        Raises:
            InvalidOption: If a default is supplied, or the names or validator are invalid.
            DuplicateOption: If a name is already registered.
        """
        if default is not dataclasses.MISSING:
            raise InvalidOption(
                f"Default values don't make sense for required options: -{short_name}"
            )
        return self.add_option(
            short_name,
            OptionKind.REQUIRED,
            long_name,
            description=description,
            validate=validate,
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
        Declare an option that may be omitted, optionally with a default.

        The default is stored on the spec only; see ``ArgumentScanner.apply_default``.
        """
        return self.add_option(
            short_name,
            OptionKind.OPTIONAL,
            long_name,
            default=default,
            description=description,
            validate=validate,
        )

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
        Declare a boolean option that takes no value; its default is coerced to bool.

        The default is stored on the spec only; see ``ArgumentScanner.apply_default``.
        """
        return self.add_option(
            short_name,
            OptionKind.FLAG,
            long_name,
            default=bool(default) if default is not dataclasses.MISSING else False,
            description=description,
            validate=validate,
        )

    def add_option(
        self,
        short_name: str,
        kind: OptionKind,
        long_name: Optional[str] = None,
        *,
        default: Any = dataclasses.MISSING,
        description: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> OptionSpec:
        """
        Register a new option.

        Args:
            short_name: A single character, invoked as ``-x``.
            kind: The option kind.
            long_name: An optional long name, invoked as ``--name``.
            default: The default value, or ``dataclasses.MISSING``.
            description: Text shown in the usage statement.
            validate: A callable converting/validating the raw value.

        Returns:
            OptionSpec: The newly registered spec.

        Raises:
            InvalidOption: If a name is malformed or ``validate`` is not callable.
            DuplicateOption: If the short or long name is already registered.
        """
        if not isinstance(short_name, str) or not short_name:
            raise InvalidOption("Option name cannot be empty")
        if len(short_name) != 1:
            raise InvalidOption(
                f"Invalid option name: {short_name}. Option names must be a single "
                "character. To set a long name for this option pass long_name"
            )
        if long_name is not None and (not isinstance(long_name, str) or not long_name):
            raise InvalidOption(f"Invalid long name for -{short_name}: {long_name!r}")

        for name in (short_name, long_name):
            if name is not None and name in self._index:
                raise DuplicateOption(name)
        if short_name == long_name:
            raise DuplicateOption(long_name)

        if validate is not None and not callable(validate):
            raise InvalidOption(
                f"Invalid validate option for -{short_name}, must be callable"
            )

        spec = OptionSpec(
            short_name=short_name,
            kind=kind,
            long_name=long_name,
            default=default,
            description=description,
            validator=validate,
        )
        self._specs.append(spec)
        for name in spec.names:
            self._index[name] = len(self._specs) - 1

        logger.debug("Declared %s option %s", kind.value, ", ".join(spec.names))
        return spec

    def set_remainder_validator(self, validator: Validator) -> None:
        """Store the hook run over the remainder once all tokens are scanned."""
        if not callable(validator):
            raise InvalidOption("Invalid remainder validator, must be callable")
        self._remainder_validator = validator

    @property
    def remainder_validator(self) -> Optional[Validator]:
        return self._remainder_validator

    def lookup(self, name: str) -> OptionSpec:
        """Return the spec registered under a short or long name; KeyError if absent."""
        return self._specs[self._index[name]]

    def get(self, name: str, default: Optional[OptionSpec] = None) -> Optional[OptionSpec]:
        try:
            return self.lookup(name)
        except KeyError:
            return default

    def of_kind(self, kind: OptionKind) -> list[OptionSpec]:
        return [spec for spec in self._specs if spec.kind is kind]

    def names(self) -> list[str]:
        return list(self._index)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[OptionSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)
