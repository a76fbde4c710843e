"""
Lexical syntax checks for merged script lines.

`check_syntax` never raises; it returns an empty string for a valid line or a
description of the first violation found, and the parser decides how to
report it.
"""

import re

from ruletree.core.types import CommandType

DEFINITION_PATTERN = re.compile(r"^.+(?:\s+.+|)\s*=\s*.+?$")
CONDITION_PATTERN = re.compile(
    r"^.+?\s*(?:==|eq|!=|ne|<>|<|<=|>|>=)\s*.+?=>.+?$"
)

# Characters outside these classes are violations
TOPIC_NAME_VIOLATION = re.compile(r"[^a-z0-9_\-\s]")
OBJECT_NAME_VIOLATION = re.compile(r"[^A-Za-z0-9_\-\s]")
TRIGGER_VIOLATION = re.compile(r"[^a-z0-9(|)\[\]*_#@{}<>=\s]")
UTF8_TRIGGER_VIOLATION = re.compile(r"[A-Z\\.]")

BRACKET_PAIRS = (
    ("(", ")", "Unmatched parenthesis brackets"),
    ("[", "]", "Unmatched square brackets"),
    ("{", "}", "Unmatched curly brackets"),
    ("<", ">", "Unmatched angle brackets"),
)

PATTERN_COMMANDS = {CommandType.TRIGGER, CommandType.PREVIOUS, CommandType.REDIRECT}


def check_syntax(command: CommandType | str | None, line: str, utf8: bool = False) -> str:
    """
    Check a merged line against the grammar of its command.

    Params:
        command: Command of the line (enum member or prefix character)
        line: Payload after lookahead merging
        utf8: Use the relaxed trigger rules that allow non-ASCII text

    Returns:
        Empty string when valid, otherwise a description of the violation
    """
    if isinstance(command, str):
        command = CommandType.from_char(command)

    if command is CommandType.DEFINE:
        if not DEFINITION_PATTERN.match(line):
            return (
                "Invalid format for !Definition line: must be "
                "'! type name = value' OR '! type = value'"
            )

    elif command is CommandType.LABEL_OPEN:
        return _check_label(line)

    elif command in PATTERN_COMMANDS:
        return _check_pattern(line, utf8)

    elif command is CommandType.CONDITION:
        if not CONDITION_PATTERN.match(line):
            return (
                "Invalid format for !Condition: should be like "
                "'* value symbol value => response'"
            )

    return ""


def _check_label(line: str) -> str:
    parts = line.split(None, 1)
    if not parts:
        return ""
    label, rest = parts[0], parts[1] if len(parts) > 1 else ""

    if label == "begin" and rest:
        return "The 'begin' label takes no additional arguments, should be verbatim '> begin'"
    if label == "topic" and TOPIC_NAME_VIOLATION.search(rest):
        return "Topics should be lowercased and contain only numbers and letters"
    if label == "object" and OBJECT_NAME_VIOLATION.search(rest):
        return "Objects can only contain numbers and letters"
    return ""


def _check_pattern(line: str, utf8: bool) -> str:
    if utf8:
        if UTF8_TRIGGER_VIOLATION.search(line):
            return "Triggers can't contain uppercase letters, backslashes or dots in UTF-8 mode."
    elif TRIGGER_VIOLATION.search(line):
        return (
            "Triggers may only contain lowercase letters, numbers, "
            "and these symbols: ( | ) [ ] * _ # @ { } < > ="
        )

    for opening, closing, message in BRACKET_PAIRS:
        if line.count(opening) != line.count(closing):
            return message
    return ""
