"""Public parsing, reading and writing functions."""

from .parser import (
    parse,
    parse_file,
    parse_string,
    read,
    save,
    to_pretty_string,
    to_string,
)

__all__ = [
    "parse",
    "parse_file",
    "parse_string",
    "read",
    "save",
    "to_pretty_string",
    "to_string",
]
