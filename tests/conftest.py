"""
Shared test fixtures and utilities for the ruletree test suite.
"""

from dataclasses import dataclass, field

import pytest

from ruletree.config import ParserConfig
from ruletree.parsing.parser import ScriptParser


@dataclass
class DiagnosticRecorder:
    """Collects messages sent to the parser's say/warn/on_error sinks."""

    said: list[str] = field(default_factory=list)
    warnings: list[tuple[str, str | None, int | None]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def say(self, message):
        self.said.append(message)

    def warn(self, message, source_name=None, lineno=None):
        self.warnings.append((message, source_name, lineno))

    def on_error(self, message):
        self.errors.append(message)

    def warning_messages(self) -> list[str]:
        return [message for message, _, _ in self.warnings]


@pytest.fixture
def recorder():
    """Fresh diagnostic recorder."""
    return DiagnosticRecorder()


@pytest.fixture
def parser(recorder):
    """Strict ASCII parser wired to the recorder.

    Usage:
        def test_something(parser, recorder):
            document = parser.parse("test.rt", "+ hello\\n- hi")
            assert not recorder.warnings
    """
    return ScriptParser(ParserConfig(), say=recorder.say, warn=recorder.warn)


@pytest.fixture
def utf8_parser(recorder):
    """Parser with relaxed UTF-8 trigger checks."""
    return ScriptParser(ParserConfig(utf8=True), say=recorder.say, warn=recorder.warn)
