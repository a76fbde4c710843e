"""
Parser for ruletree dialogue scripts.

This module walks a script line by line, folds continuation lines with the
lookahead merger, checks each logical line with the syntax validator and
builds the document tree consumed by the reply-selection layer.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ruletree.config import LocalOptions, ParserConfig
from ruletree.core.document import (
    Document,
    ObjectMacro,
    Trigger,
    init_topic,
    new_document,
)
from ruletree.core.types import (
    BEGIN_TOPIC,
    CRLF_MARKER,
    DEFAULT_OBJECT_LANGUAGE,
    DEFAULT_TOPIC,
    OBJECT_END_PATTERN,
    OBJECT_LABEL,
    SPACE_ESCAPE,
    CommandType,
)
from ruletree.exceptions import (
    ErrorContext,
    ErrorLevel,
    ScriptSyntaxError,
    UnsupportedVersionError,
)
from ruletree.parsing.lines import (
    BLOCK_COMMENT_END,
    BLOCK_COMMENT_START,
    DEPRECATED_COMMENT,
    LINE_COMMENT,
    split_line,
    split_text,
)
from ruletree.parsing.lookahead import merge_lookahead
from ruletree.parsing.validation import check_syntax

logger = logging.getLogger(__name__)

SayCallback = Callable[[str], None]
WarnCallback = Callable[[str, str | None, int | None], None]
ErrorCallback = Callable[[str], Any]

TOPIC_RELATIONS = ("includes", "inherits")
TABLE_DEFINITIONS = ("global", "var", "sub", "person")

# Leading numeric prefix, so "2.0.1" reads as 2.0
VERSION_PATTERN = re.compile(r"\d+(?:\.\d+)?")


def log_say(message: str) -> None:
    """Default trace sink."""
    logger.debug(message)


def log_warn(
    message: str, source_name: str | None = None, lineno: int | None = None
) -> None:
    """Default warning sink."""
    if source_name is not None and lineno is not None:
        logger.warning("%s at %s line %d", message, source_name, lineno)
    else:
        logger.warning(message)


@dataclass
class _ParseState:
    """Mutable state of a single parse call."""

    topic: str = DEFAULT_TOPIC
    trigger: Trigger | None = None
    previous: str | None = None
    in_comment: bool = False
    in_object: bool = False
    object_name: str = ""
    object_language: str = ""
    object_buffer: list[str] = field(default_factory=list)
    local: LocalOptions = field(default_factory=LocalOptions)

    def start_object(self, name: str, language: str) -> None:
        self.in_object = True
        self.object_name = name
        self.object_language = language
        self.object_buffer = []

    def reset_object(self) -> None:
        self.in_object = False
        self.object_name = ""
        self.object_language = ""
        self.object_buffer = []


@dataclass
class _Line:
    """A logical line ready for dispatch."""

    command: CommandType | None
    prefix: str
    text: str
    source_name: str
    lineno: int


class ScriptParser:
    """
    Single-pass parser for dialogue scripts.

    A parser holds only its configuration and diagnostic sinks, so one
    instance can parse any number of documents; every call starts from a
    fresh state and fresh local options.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        *,
        say: SayCallback | None = None,
        warn: WarnCallback | None = None,
    ):
        self.config = config or ParserConfig()
        self._say = say or log_say
        self._warn = warn or log_warn

        self._handlers: dict[CommandType, Callable[[Document, _ParseState, _Line], None]] = {
            CommandType.DEFINE: self._handle_define,
            CommandType.LABEL_OPEN: self._handle_label_open,
            CommandType.LABEL_CLOSE: self._handle_label_close,
            CommandType.TRIGGER: self._handle_trigger,
            CommandType.RESPONSE: self._handle_response,
            CommandType.CONDITION: self._handle_condition,
            CommandType.PREVIOUS: self._handle_folded,
            CommandType.CONTINUATION: self._handle_folded,
            CommandType.REDIRECT: self._handle_redirect,
        }

    def parse(
        self,
        source_name: str,
        text: str | Sequence[str],
        on_error: ErrorCallback | None = None,
    ) -> Document | None:
        """
        Parse a script into a document tree.

        Params:
            source_name: Name used in diagnostics (usually the file name)
            text: Script text, or its physical lines
            on_error: Called with the formatted message of each syntax error
                when the parser is strict

        Returns:
            The parsed Document, or None if the script declares an
            unsupported version
        """
        lines = split_text(text) if isinstance(text, str) else list(text)
        document = new_document()
        state = _ParseState()

        try:
            for index, raw in enumerate(lines):
                self._parse_physical_line(
                    document, state, lines, index, raw, source_name, on_error
                )
        except UnsupportedVersionError as e:
            self._warn(str(e), e.context.source_name, e.context.lineno)
            return None

        if state.in_object:
            self._warn(
                f"Object '{state.object_name}' was never closed and has been discarded",
                source_name,
                len(lines),
            )

        return document

    def _parse_physical_line(
        self,
        document: Document,
        state: _ParseState,
        lines: list[str],
        index: int,
        raw: str,
        source_name: str,
        on_error: ErrorCallback | None,
    ) -> None:
        lineno = index + 1
        line = raw.strip()
        if not line:
            return

        self._say(f"Line: {line} (topic: {state.topic}) inobj: {state.in_object}")

        # Object bodies are opaque source
        if state.in_object:
            if OBJECT_END_PATTERN.match(raw):
                self._close_object(document, state)
            else:
                state.object_buffer.append(raw)
            return

        if line.startswith(LINE_COMMENT):
            return
        if line.startswith(DEPRECATED_COMMENT):
            self._warn("Using the # symbol for comments is deprecated", source_name, lineno)
            return
        if line.startswith(BLOCK_COMMENT_START):
            if BLOCK_COMMENT_END not in line:
                state.in_comment = True
            return
        if BLOCK_COMMENT_END in line:
            state.in_comment = False
            return
        if state.in_comment:
            return

        split = split_line(line, strip_inline_comment=True)
        if split is None or not split.payload:
            self._warn(f"Weird single-character line '{line}' found.", source_name, lineno)
            return

        command = split.command
        if command is CommandType.TRIGGER:
            state.previous = None

        merged = merge_lookahead(lines, index, command, split.payload, state.local.concat)
        if command is CommandType.TRIGGER:
            state.previous = merged.previous

        reason = check_syntax(command, merged.line, utf8=self.config.utf8)
        if reason:
            self._report_syntax_error(
                ScriptSyntaxError(
                    reason,
                    ErrorContext(
                        source_name=source_name,
                        lineno=lineno,
                        command=split.prefix,
                        command_text=merged.line,
                    ),
                ),
                on_error,
            )

        self._say(f"Command: {split.prefix}; line: {merged.line}")

        logical = _Line(
            command=command,
            prefix=split.prefix,
            text=merged.line,
            source_name=source_name,
            lineno=lineno,
        )
        handler = self._handlers.get(command) if command is not None else None
        if handler is None:
            self._warn(f"Unknown command '{split.prefix}'", source_name, lineno)
            return
        handler(document, state, logical)

    def _report_syntax_error(
        self, error: ScriptSyntaxError, on_error: ErrorCallback | None
    ) -> None:
        self._warn(
            error.format_message(ErrorLevel.USER),
            error.context.source_name,
            error.context.lineno,
        )
        if self.config.strict and on_error is not None:
            on_error(error.format_message(ErrorLevel.DEVELOPER))

    def _close_object(self, document: Document, state: _ParseState) -> None:
        if state.object_name:
            document.objects.append(
                ObjectMacro(
                    name=state.object_name,
                    language=state.object_language,
                    code=state.object_buffer,
                )
            )
        state.reset_object()

    # Command handlers

    def _handle_define(self, document: Document, state: _ParseState, line: _Line) -> None:
        """Handle `! type name = value`."""
        left, _, value = line.text.partition("=")
        value = value.strip()
        words = left.split(None, 1)
        kind = words[0] if words else ""
        name = words[1].strip() if len(words) > 1 else ""

        if kind != "array":
            value = value.replace(CRLF_MARKER, "")

        if kind == "version":
            self._check_version(value, line)
            return

        if not name:
            self._warn("Undefined variable name", line.source_name, line.lineno)
            return
        if not value:
            self._warn("Undefined variable value", line.source_name, line.lineno)
            return

        if kind == "local":
            self._say(f"\tSet parser option {name} = {value}")
            state.local.set(name, value)
        elif kind in TABLE_DEFINITIONS:
            self._say(f"\tSet {kind} {name} = {value}")
            document.begin.table(kind)[name] = value
        elif kind == "array":
            self._say(f"\tArray {name} = {value}")
            document.begin.array[name] = split_array(value)
        else:
            self._warn(f"Unknown definition type '{kind}'", line.source_name, line.lineno)

    def _check_version(self, value: str, line: _Line) -> None:
        match = VERSION_PATTERN.match(value)
        if match is None:
            self._warn(
                "Error parsing script version number: not a number",
                line.source_name,
                line.lineno,
            )
            return

        version = float(match.group(0))
        if version > self.config.supported_version:
            raise UnsupportedVersionError(
                version,
                self.config.supported_version,
                ErrorContext(
                    source_name=line.source_name,
                    lineno=line.lineno,
                    command=line.prefix,
                    command_text=line.text,
                ),
            )

    def _handle_label_open(self, document: Document, state: _ParseState, line: _Line) -> None:
        """Handle `> begin`, `> topic name [includes|inherits ...]` and `> object name lang`."""
        tokens = line.text.split()
        label = tokens[0]
        name = tokens[1] if len(tokens) > 1 else ""
        fields = tokens[2:]

        if label == "begin":
            self._say("Found the BEGIN block.")
            label = "topic"
            name = BEGIN_TOPIC

        if label == "topic":
            if not name:
                self._warn("Topic label without a name", line.source_name, line.lineno)
                return
            self._say(f"Set topic to {name}")
            state.trigger = None
            state.topic = name
            topic = init_topic(document.topics, name)

            mode = None
            for token in fields:
                if token in TOPIC_RELATIONS:
                    mode = token
                elif mode is not None:
                    init_topic(document.topics, token)
                    getattr(topic, mode).add(token)

        elif label == OBJECT_LABEL:
            if fields:
                language = fields[0].lower()
            else:
                self._warn(
                    "Trying to parse unknown programming language",
                    line.source_name,
                    line.lineno,
                )
                language = DEFAULT_OBJECT_LANGUAGE
            state.trigger = None
            state.start_object(name, language)

        else:
            self._warn(f"Unknown label type '{label}'", line.source_name, line.lineno)

    def _handle_label_close(self, document: Document, state: _ParseState, line: _Line) -> None:
        """Handle `< begin`, `< topic` and `< object`."""
        if line.text in ("begin", "topic"):
            self._say("End topic label.")
            state.topic = DEFAULT_TOPIC
            state.trigger = None
        elif line.text == OBJECT_LABEL:
            # Objects are flushed by the in-block close marker; this only
            # clears the capture flag.
            state.in_object = False
        else:
            self._warn(f"Unknown label type '{line.text}'", line.source_name, line.lineno)

    def _handle_trigger(self, document: Document, state: _ParseState, line: _Line) -> None:
        """Handle `+ pattern`."""
        topic = init_topic(document.topics, state.topic)
        self._say(f"\tTrigger pattern: {line.text}")
        trigger = Trigger(trigger=line.text, previous=state.previous)
        topic.triggers.append(trigger)
        state.trigger = trigger

    def _handle_response(self, document: Document, state: _ParseState, line: _Line) -> None:
        if state.trigger is None:
            self._warn("Response found before trigger", line.source_name, line.lineno)
            return
        self._say(f"\tResponse: {line.text}")
        state.trigger.reply.append(line.text)

    def _handle_condition(self, document: Document, state: _ParseState, line: _Line) -> None:
        if state.trigger is None:
            self._warn("Condition found before trigger", line.source_name, line.lineno)
            return
        self._say(f"\tAdding condition: {line.text}")
        state.trigger.condition.append(line.text)

    def _handle_redirect(self, document: Document, state: _ParseState, line: _Line) -> None:
        if state.trigger is None:
            self._warn("Redirect found before trigger", line.source_name, line.lineno)
            return
        self._say(f"\tRedirect response to: {line.text}")
        state.trigger.redirect = line.text

    def _handle_folded(self, document: Document, state: _ParseState, line: _Line) -> None:
        # `%` and `^` lines were already folded by the lookahead merger
        pass


def split_array(value: str) -> list[str]:
    """
    Split an array definition value into its elements.

    Each original line of the value is split on `|` when it contains one,
    otherwise on whitespace. `\\s` becomes a literal space.

    Params:
        value: Definition value, with continuation lines joined by the
            line-break marker

    Returns:
        Array elements in document order
    """
    elements = []
    for part in value.split(CRLF_MARKER):
        if "|" in part:
            elements.extend(part.split("|"))
        else:
            elements.extend(part.split())
    return [element.replace(SPACE_ESCAPE, " ") for element in elements if element]


def parse_script(
    source_name: str,
    text: str | Sequence[str],
    on_error: ErrorCallback | None = None,
    *,
    strict: bool = True,
    utf8: bool = False,
) -> Document | None:
    """
    Convenience function to parse a script.

    Params:
        source_name: Name used in diagnostics
        text: Script text, or its physical lines
        on_error: Strict-mode syntax error callback
        strict: Report syntax errors through `on_error`
        utf8: Relax trigger syntax checks for non-ASCII scripts

    Returns:
        The parsed Document, or None for an unsupported script version
    """
    parser = ScriptParser(ParserConfig(strict=strict, utf8=utf8))
    return parser.parse(source_name, text, on_error)
