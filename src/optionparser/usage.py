"""
Plain-text usage statement for a set of declared options.
"""

from typing import Any, Optional

from .options import OptionKind, OptionRegistry, OptionSpec
from .scanner import ParseResult

GROUPS = (
    ("Required", OptionKind.REQUIRED),
    ("Optional", OptionKind.OPTIONAL),
    ("Flags", OptionKind.FLAG),
)


def _format_error(error: Any) -> str:
    if isinstance(error, BaseException):
        return f"{type(error).__name__}: {error}"
    return str(error)


class UsagePresenter:
    """
    Renders the registry, and the problems found by the last parse, as text.

    Options are listed under ``Required``, ``Optional`` and ``Flags`` headers
    in declaration order. Long names and defaults are padded into columns;
    defaults longer than ``default_value_width`` characters are truncated
    with ``...``.
    """

    def __init__(
        self,
        registry: OptionRegistry,
        description: Optional[str] = None,
        default_value_width: int = 30,
    ) -> None:
        self.registry = registry
        self.description = description
        self.default_value_width = default_value_width

    def render(self, result: Optional[ParseResult] = None) -> str:
        """
        Build the usage statement.

        Args:
            result: The state of the last parse, or None if ``parse`` was never
                called. Problem sections are only rendered for a parse result.

        Returns:
            str: The formatted usage text.
        """
        lines: list[str] = []
        if result is not None and result.has_problems:
            lines.extend(self._problem_lines(result))
            lines.extend(["", ""])

        if self.description:
            lines.append(self.description)

        name_width = 5 + max(
            (len(spec.long_name) for spec in self.registry if spec.long_name),
            default=0,
        )
        default_width = 5 + max(
            (
                min(len(spec.default), self.default_value_width)
                for spec in self.registry
                if isinstance(spec.default, str)
            ),
            default=0,
        )

        for header, kind in GROUPS:
            specs = self.registry.of_kind(kind)
            if not specs:
                continue
            lines.append(header)
            for spec in specs:
                long_name = f", --{spec.long_name}" if spec.long_name else ""
                line = "  -{}{:<{}} {:<{}} {}".format(
                    spec.short_name,
                    long_name,
                    name_width,
                    self._default_cell(spec),
                    default_width,
                    spec.description or "",
                )
                lines.append(line.rstrip())
            lines.append("")

        return "\n".join(lines) + "\n"

    def _problem_lines(self, result: ParseResult) -> list[str]:
        lines: list[str] = []

        missing = result.missing
        if missing:
            lines.append("Missing required parameters")
            for spec in missing:
                if spec.description:
                    lines.append(f"  -{spec.short_name} {spec.description}")
                else:
                    lines.append(f"  -{spec.short_name}")

        errors = result.validation_errors
        if errors:
            lines.extend(["", "Validation errors"])
            for spec in errors:
                lines.append(f"  -{spec.short_name} : {_format_error(spec.last_error)}")

        if result.remainder_error is not None:
            lines.extend(["", "Remainder validation error"])
            lines.append(f"  {_format_error(result.remainder_error)}")

        return lines

    def _default_cell(self, spec: OptionSpec) -> str:
        if not spec.is_flag and (not spec.has_default or spec.default is None):
            return ""
        text = str(spec.default)
        if len(text) > self.default_value_width:
            text = text[: self.default_value_width] + "..."
        return f"[{text}]"
