"""
ruletree - A parser for line-oriented dialogue scripts

ruletree turns a script of topics, triggers, responses and embedded object
macros into a document tree for reply-selection engines.
"""

from importlib.metadata import version

from ruletree.config import ParserConfig
from ruletree.core.document import Document, ObjectMacro, Topic, Trigger
from ruletree.parsing.parser import ScriptParser, parse_script

__version__ = version("ruletree")

__all__ = [
    "__version__",
    "Document",
    "ObjectMacro",
    "ParserConfig",
    "ScriptParser",
    "Topic",
    "Trigger",
    "parse_script",
]
