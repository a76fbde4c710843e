"""
Physical line helpers shared by the classifier and the lookahead merger.
"""

from dataclasses import dataclass

from ruletree.core.types import CommandType

LINE_COMMENT = "//"
INLINE_COMMENT = " // "
DEPRECATED_COMMENT = "#"
BLOCK_COMMENT_START = "/*"
BLOCK_COMMENT_END = "*/"


@dataclass(frozen=True)
class SplitLine:
    """A content line split into its command prefix and payload."""

    prefix: str
    payload: str

    @property
    def command(self) -> CommandType | None:
        return CommandType.from_char(self.prefix)


def split_line(line: str, *, strip_inline_comment: bool = False) -> SplitLine | None:
    """
    Split a line into command prefix and stripped payload.

    Params:
        line: Raw or stripped physical line
        strip_inline_comment: Truncate the payload at a space-delimited `//`

    Returns:
        SplitLine, or None when the stripped line is shorter than two characters
    """
    stripped = line.strip()
    if len(stripped) < 2:
        return None

    payload = stripped[1:].strip()
    if strip_inline_comment and INLINE_COMMENT in payload:
        payload = payload.split(INLINE_COMMENT)[0].strip()

    return SplitLine(prefix=stripped[0], payload=payload)


def split_text(text: str) -> list[str]:
    """Split document text into physical lines, accepting any line ending."""
    return text.splitlines()
