"""
Lookahead merging of continuation (`^`) and previous-context (`%`) lines.

For each content line the parser folds the lines that follow it into one
logical line before validating and dispatching it. The merge is a pure
function of the line array so it can be exercised on its own.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from ruletree.core.types import CRLF_MARKER, OBJECT_LABEL, CommandType, ConcatMode
from ruletree.parsing.lines import split_line


@dataclass(frozen=True)
class LookaheadResult:
    """
    Outcome of merging the lines after a content line.

    Params:
        consumed: Number of physical lines scanned past the current one
        line: The merged payload
        previous: Previous-context pattern found for a trigger, if any
    """

    consumed: int
    line: str
    previous: str | None = None


def merge_lookahead(
    lines: Sequence[str],
    index: int,
    command: CommandType | None,
    payload: str,
    concat: str = ConcatMode.NONE.value,
) -> LookaheadResult:
    """
    Fold the continuation lines that follow `lines[index]` into its payload.

    Params:
        lines: All physical lines of the document
        index: Index of the current line
        command: Command of the current line
        payload: Payload of the current line
        concat: File-scoped `local concat` mode

    Returns:
        LookaheadResult with the merged payload and any captured previous-context
    """
    line = payload
    previous = None
    consumed = 0
    separator = ConcatMode.separator_for(concat)

    # Lines after an object label belong to the object body
    if command is CommandType.LABEL_OPEN and payload.split(None, 1)[:1] == [OBJECT_LABEL]:
        return LookaheadResult(consumed=0, line=line)

    for i in range(index + 1, len(lines)):
        candidate = split_line(lines[i])
        if candidate is None:
            consumed += 1
            continue
        if not candidate.payload:
            break

        look = candidate.command

        if command is CommandType.TRIGGER:
            if look is CommandType.PREVIOUS:
                previous = candidate.payload
                consumed += 1
                break
            previous = None

        if command is CommandType.DEFINE:
            if look is not CommandType.CONTINUATION:
                break
            line += CRLF_MARKER + candidate.payload
            consumed += 1
            continue

        if look is not CommandType.CONTINUATION and look is not CommandType.PREVIOUS:
            break

        if look is CommandType.CONTINUATION:
            if separator is None:
                line += candidate.payload
            else:
                line += separator + candidate.payload
        consumed += 1

    return LookaheadResult(consumed=consumed, line=line, previous=previous)
