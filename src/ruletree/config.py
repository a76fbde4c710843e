"""
Parser configuration.

`ParserConfig` is fixed for the lifetime of a parser; `LocalOptions` holds
the `! local` settings of a single document and is created fresh for every
parse call.
"""

from attrs import define, field, frozen

from ruletree.core.types import SUPPORTED_VERSION, ConcatMode


@frozen
class ParserConfig:
    """
    Options that apply to every document a parser reads.

    Params:
        strict: Report syntax errors through the caller's error callback
        utf8: Relax trigger syntax to allow non-ASCII text
        supported_version: Highest `! version` a document may declare
    """

    strict: bool = True
    utf8: bool = False
    supported_version: float = SUPPORTED_VERSION


@define
class LocalOptions:
    """File-scoped options set with `! local name = value`."""

    concat: str = ConcatMode.NONE.value
    extra: dict[str, str] = field(factory=dict)

    def set(self, name: str, value: str) -> None:
        if name == "concat":
            self.concat = value
        else:
            self.extra[name] = value
