#!/usr/bin/env python3
"""
Example script demonstrating the usage of OptionParser.

This script declares required, optional and flag options, parses sys.argv,
and prints the usage statement with every problem found when parsing fails.

    python examples/basic_example.py -f foo_value --count 123 -- some other stuff
"""

import logging
import sys

from optionparser import OptionParser, ParseError


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError(f"expected a positive number, got {number}")
    return number


def main() -> int:
    """Main function demonstrating the parser."""
    parser = OptionParser(description="An example parser.")
    parser.add_required("f", "foo-bar", description="The foo-bar option")
    parser.add_optional(
        "b",
        "bar-baz",
        default="xyz",
        description='The optional bar-baz option with a default of "xyz"',
    )
    parser.add_flag("c", description="A flag that is false unless given")
    parser.add_flag("d", "debug", default=True, description="Debug logging")
    parser.add_required(
        "i", "count", description="A required, validated option", validate=positive_int
    )
    parser.set_remainder_validator(lambda remainder: [arg.upper() for arg in remainder])

    try:
        params = parser.parse()
    except ParseError as e:
        print(f"error: {e}", file=sys.stderr)
        parser.print_usage()
        return 2

    logging.basicConfig(level=logging.DEBUG if params["debug"] else logging.INFO)

    print("Parsed Parameters:")
    print("-" * 30)
    print(f"Foo-bar: {params['foo-bar']}")
    print(f"Bar-baz: {params['bar-baz']}")
    print(f"C: {params['c']}")
    print(f"Debug: {params['debug']}")
    print(f"Count: {params['count']}")
    print(f"Remainder: {' '.join(parser.remainder)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
