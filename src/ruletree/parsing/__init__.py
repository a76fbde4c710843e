"""
ruletree parsing components.

This package provides the script parser, the lookahead merger for
continuation lines and the lexical syntax validator.
"""

from ruletree.parsing.lines import SplitLine, split_line, split_text
from ruletree.parsing.lookahead import LookaheadResult, merge_lookahead
from ruletree.parsing.parser import (
    ScriptParser,
    log_say,
    log_warn,
    parse_script,
    split_array,
)
from ruletree.parsing.validation import check_syntax

__all__ = [
    "LookaheadResult",
    "ScriptParser",
    "SplitLine",
    "check_syntax",
    "log_say",
    "log_warn",
    "merge_lookahead",
    "parse_script",
    "split_array",
    "split_line",
    "split_text",
]
