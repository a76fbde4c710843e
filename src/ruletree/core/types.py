"""
Core type definitions for the ruletree script format.

This module contains the command enumeration and the format constants shared
by the line classifier, the lookahead merger and the syntax validator.
"""

import re
from enum import Enum

SUPPORTED_VERSION = 2.0

DEFAULT_TOPIC = "random"
BEGIN_TOPIC = "__begin__"

# Joins continuation lines of a definition so array values can recover
# the original line boundaries.
CRLF_MARKER = "<crlf>"

# Escaped space inside array definitions.
SPACE_ESCAPE = "\\s"

OBJECT_LABEL = "object"
DEFAULT_OBJECT_LANGUAGE = "python"

OBJECT_END_PATTERN = re.compile(r"^\s*<\s*object")


class CommandType(Enum):
    """Command prefix of a content line."""

    DEFINE = "!"
    LABEL_OPEN = ">"
    LABEL_CLOSE = "<"
    TRIGGER = "+"
    RESPONSE = "-"
    CONDITION = "*"
    PREVIOUS = "%"
    CONTINUATION = "^"
    REDIRECT = "@"

    @classmethod
    def from_char(cls, char: str) -> "CommandType | None":
        """Return the command for a prefix character, or None if unknown."""
        try:
            return cls(char)
        except ValueError:
            return None


class ConcatMode(Enum):
    """Separator used when folding `^` continuation lines."""

    NONE = "none"
    NEWLINE = "newline"
    SPACE = "space"

    @property
    def separator(self) -> str:
        return _CONCAT_SEPARATORS[self]

    @classmethod
    def separator_for(cls, mode: str) -> str | None:
        """
        Look up the separator for a `local concat` value.

        Returns None for unrecognized modes so the caller can fall back to
        direct appending.
        """
        try:
            return cls(mode).separator
        except ValueError:
            return None


_CONCAT_SEPARATORS = {
    ConcatMode.NONE: "",
    ConcatMode.NEWLINE: "\n",
    ConcatMode.SPACE: " ",
}
