"""
ruletree exception classes.

This package provides the exception types and error context used throughout
ruletree for consistent error reporting.
"""

from ruletree.exceptions.core import (
    ErrorContext,
    ErrorLevel,
    RuleTreeError,
    ScriptSyntaxError,
    UnsupportedVersionError,
)

__all__ = [
    "ErrorContext",
    "ErrorLevel",
    "RuleTreeError",
    "ScriptSyntaxError",
    "UnsupportedVersionError",
]
