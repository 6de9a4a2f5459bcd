"""
Declaring options from a YAML or JSON document.

A declaration file describes the same options the ``add_*`` calls do:

    description: An example parser.
    default_value_width: 30
    options:
      - short: f
        long: foo-bar
        kind: required
        description: The foo-bar option
        type: int
      - short: b
        default: xyz
    remainder: required

``type`` names one of the builtin validators in ``TYPE_VALIDATORS``.
"""

import json
import logging
import os
from typing import TYPE_CHECKING, Any, Callable

import yaml

if TYPE_CHECKING:
    from .parser import OptionParser

logger = logging.getLogger(__name__)

OPTION_KEYS = {"short", "long", "kind", "default", "description", "type"}
PARSER_KEYS = {"description", "default_value_width", "options", "remainder"}


def _strict_bool(value: Any) -> bool:
    """
    Parse a value to a boolean strictly.

    Accepts booleans as-is, and only 'True', 'true', 'False', 'false', '1', '0'
    as strings. Raises ValueError for anything else.
    """
    if isinstance(value, bool):
        return value
    if value in ("True", "true", "1"):
        return True
    elif value in ("False", "false", "0"):
        return False
    else:
        raise ValueError(
            f"Invalid boolean value: '{value}'. Must be one of: True, true, False, false, 1, 0"
        )


TYPE_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": _strict_bool,
}


def _non_empty_remainder(remainder: list[str]) -> list[str]:
    if not remainder:
        raise ValueError("Expected at least one remaining argument")
    return remainder


def load_config_file(config_path: str) -> dict[str, Any]:
    """
    Load a declaration document from a YAML or JSON file.

    Args:
        config_path (str): Path to the declaration file.

    Returns:
        dict[str, Any]: The parsed document.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file format is not supported or invalid.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    file_ext = os.path.splitext(config_path)[1].lower()

    with open(config_path, "r") as f:
        if file_ext in [".yaml", ".yml"]:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML file: {e}")
        elif file_ext == ".json":
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON file: {e}")
        else:
            raise ValueError(
                f"Unsupported file format: {file_ext}. "
                "Supported formats are: .yaml, .yml, .json"
            )

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Configuration file must contain a mapping, got {type(data).__name__}"
        )
    return data


def build_parser(data: dict[str, Any]) -> "OptionParser":
    """
    Build an ``OptionParser`` from a declaration document.

    Raises:
        ValueError: On unknown keys, kinds or types.
        InvalidOption, DuplicateOption: If a declaration is rejected.
    """
    from .parser import OptionParser

    unknown = set(data) - PARSER_KEYS
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    width = data.get("default_value_width", 30)
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise ValueError(
            f"Invalid default_value_width: {width!r}. Must be a positive integer"
        )

    parser = OptionParser(
        description=data.get("description"),
        default_value_width=width,
    )

    for entry in data.get("options") or []:
        _declare(parser, entry)

    remainder = data.get("remainder")
    if remainder == "required":
        parser.set_remainder_validator(_non_empty_remainder)
    elif remainder not in (None, "optional"):
        raise ValueError(
            f"Invalid remainder setting: {remainder!r}. Must be 'required' or 'optional'"
        )

    logger.debug("Built parser with %d options from configuration", len(parser.options))
    return parser


def _declare(parser: "OptionParser", entry: dict[str, Any]) -> None:
    if not isinstance(entry, dict):
        raise ValueError(f"Option declarations must be mappings, got {entry!r}")

    unknown = set(entry) - OPTION_KEYS
    if unknown:
        raise ValueError(f"Unknown option keys: {', '.join(sorted(unknown))}")
    if "short" not in entry:
        raise ValueError(f"Option declaration is missing 'short': {entry!r}")

    short = str(entry["short"])
    kwargs: dict[str, Any] = {"description": entry.get("description")}

    type_name = entry.get("type")
    if type_name is not None:
        if type_name not in TYPE_VALIDATORS:
            raise ValueError(
                f"Unknown type {type_name!r} for -{short}. "
                f"Supported types are: {', '.join(TYPE_VALIDATORS)}"
            )
        kwargs["validate"] = TYPE_VALIDATORS[type_name]

    if "default" in entry:
        kwargs["default"] = entry["default"]

    kind = entry.get("kind", "optional")
    if kind == "required":
        parser.add_required(short, entry.get("long"), **kwargs)
    elif kind == "optional":
        parser.add_optional(short, entry.get("long"), **kwargs)
    elif kind == "flag":
        parser.add_flag(short, entry.get("long"), **kwargs)
    else:
        raise ValueError(
            f"Invalid kind {kind!r} for -{short}. Must be one of: required, optional, flag"
        )
