"""
Core ruletree components.

This package provides the document tree models and the command and format
constants shared by the parsing modules.
"""

from ruletree.core.document import (
    BeginBlock,
    Document,
    ObjectMacro,
    Topic,
    Trigger,
    init_topic,
    new_document,
)
from ruletree.core.types import (
    BEGIN_TOPIC,
    CRLF_MARKER,
    DEFAULT_TOPIC,
    SUPPORTED_VERSION,
    CommandType,
    ConcatMode,
)

__all__ = [
    "BeginBlock",
    "Document",
    "ObjectMacro",
    "Topic",
    "Trigger",
    "init_topic",
    "new_document",
    "BEGIN_TOPIC",
    "CRLF_MARKER",
    "DEFAULT_TOPIC",
    "SUPPORTED_VERSION",
    "CommandType",
    "ConcatMode",
]
