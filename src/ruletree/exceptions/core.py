"""
Exception classes for ruletree script parsing.

This module defines the error context used to locate problems in a script
and the exception types raised or reported while parsing.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for script authors vs developers."""

    USER = "user"  # Source and line only
    DEVELOPER = "developer"  # Adds the offending command text


@dataclass
class ErrorContext:
    """
    Location of a problem inside a script.

    Params:
        source_name: Name the caller gave the document (usually a file name)
        lineno: 1-based physical line number
        command: Command prefix character of the offending line
        command_text: Payload of the offending line after merging
    """

    source_name: str | None = None
    lineno: int | None = None
    command: str | None = None
    command_text: str | None = None

    def format_location(self, error_level: ErrorLevel = ErrorLevel.USER) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string
        """
        parts = []
        if self.source_name:
            parts.append(self.source_name)
        if self.lineno is not None:
            parts.append(f"line {self.lineno}")
        location = " ".join(parts)

        if error_level == ErrorLevel.DEVELOPER and self.command is not None:
            near = f"near: {self.command} {self.command_text or ''}".rstrip()
            return f"{location} ({near})" if location else f"({near})"

        return location

    def near(self) -> str:
        """Return the `cmd payload` text quoted in syntax error messages."""
        return f"{self.command or ''} {self.command_text or ''}".strip()


class RuleTreeError(Exception):
    """Base exception for all ruletree errors."""

    pass


class UnsupportedVersionError(RuleTreeError):
    """Raised when a document declares a newer format version than supported."""

    def __init__(
        self, version: float, supported: float, context: ErrorContext | None = None
    ):
        """
        Initialize the exception.

        Params:
            version: Version declared by the document
            supported: Highest version this parser accepts
            context: Where the declaration was found
        """
        self.version = version
        self.supported = supported
        self.context = context or ErrorContext()
        super().__init__(
            f"Unsupported script version {version}. We only support {supported}"
        )


class ScriptSyntaxError(RuleTreeError):
    """
    A grammar violation on one logical line.

    Syntax errors never abort a parse; the parser formats them with this
    class and hands the message to its warning or error callback.
    """

    def __init__(self, reason: str, context: ErrorContext):
        """
        Initialize the exception.

        Params:
            reason: Description of the violation from the syntax validator
            context: Source, line and command text of the offending line
        """
        self.reason = reason
        self.context = context
        super().__init__(self.format_message(ErrorLevel.DEVELOPER))

    def format_message(self, error_level: ErrorLevel = ErrorLevel.DEVELOPER) -> str:
        """
        Format the error for a diagnostic sink.

        USER messages carry only the reason, for sinks that receive the
        source and line separately. DEVELOPER messages are self-contained.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted message
        """
        if error_level == ErrorLevel.DEVELOPER:
            location = self.context.format_location(ErrorLevel.DEVELOPER)
            return f"Syntax error in {location}: {self.reason}"
        return f"Syntax error: {self.reason}"
