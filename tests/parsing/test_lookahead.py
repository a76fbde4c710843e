"""
Tests for line splitting and lookahead merging.

The merger is a pure function over the line array, so these tests drive it
directly without going through the parser.
"""

from ruletree.core.types import CRLF_MARKER, CommandType
from ruletree.parsing.lines import split_line, split_text
from ruletree.parsing.lookahead import LookaheadResult, merge_lookahead


def merge(lines, index=0, concat="none"):
    """Merge the line at `index` the way the parser does."""
    split = split_line(lines[index])
    return merge_lookahead(lines, index, split.command, split.payload, concat)


class TestSplitLine:
    """Tests for splitting a line into command prefix and payload."""

    def test_basic_split(self):
        """Test that the first character is the prefix and the rest is stripped."""
        split = split_line("  +   hello bot  ")
        assert split.prefix == "+"
        assert split.payload == "hello bot"
        assert split.command is CommandType.TRIGGER

    def test_short_line(self):
        """Test that lines under two characters are rejected."""
        assert split_line("+") is None
        assert split_line("   -  ") is None

    def test_unknown_prefix(self):
        """Test that unknown prefixes keep their character but have no command."""
        split = split_line("? what")
        assert split.prefix == "?"
        assert split.command is None

    def test_inline_comment(self):
        """Test that a space-delimited // truncates the payload when requested."""
        line = "- hello there // greeting"
        assert split_line(line).payload == "hello there // greeting"
        assert split_line(line, strip_inline_comment=True).payload == "hello there"

    def test_url_is_not_a_comment(self):
        """Test that // without surrounding spaces is kept."""
        split = split_line("- see http://example.com", strip_inline_comment=True)
        assert split.payload == "see http://example.com"

    def test_split_text_line_endings(self):
        """Test that any line ending style is accepted."""
        assert split_text("+ a\r\n- b\n- c") == ["+ a", "- b", "- c"]


class TestTriggerLookahead:
    """Tests for previous-context capture on trigger lines."""

    def test_previous_captured(self):
        """Test that a % line right after a trigger is captured."""
        result = merge(["+ yes", "% do you like cheese", "- Great!"])
        assert result == LookaheadResult(consumed=1, line="yes", previous="do you like cheese")

    def test_no_previous(self):
        """Test that a trigger without % has no previous-context."""
        result = merge(["+ hello", "- hi"])
        assert result.previous is None
        assert result.line == "hello"
        assert result.consumed == 0

    def test_continuation_then_previous(self):
        """Test that a continued trigger still finds its % line."""
        result = merge(["+ hello", "^ there", "% who is it", "- me"])
        assert result.line == "hellothere"
        assert result.previous == "who is it"
        assert result.consumed == 2

    def test_previous_after_other_command_ignored(self):
        """Test that a % line separated by another command is not captured."""
        result = merge(["+ hello", "- hi", "% who is it"])
        assert result.previous is None


class TestDefinitionLookahead:
    """Tests for continuation of ! definitions."""

    def test_continuation_uses_line_break_marker(self):
        """Test that definition continuations are joined with the marker."""
        lines = ["! array colors = red blue", "^ green yellow", "^ light\\sgreen"]
        result = merge(lines)
        assert result.line == (
            "array colors = red blue" + CRLF_MARKER + "green yellow" + CRLF_MARKER + "light\\sgreen"
        )
        assert result.consumed == 2

    def test_non_continuation_stops(self):
        """Test that a later ^ line after another command is not folded."""
        lines = ["! var a = 1", "! var b = 2", "^ more"]
        result = merge(lines)
        assert result.line == "var a = 1"
        assert result.consumed == 0

    def test_concat_mode_ignored(self):
        """Test that definitions always use the marker regardless of concat mode."""
        result = merge(["! global x = a", "^ b"], concat="space")
        assert result.line == "global x = a" + CRLF_MARKER + "b"


class TestConcatModes:
    """Tests for the file-scoped concatenation separator."""

    LINES = ["- Hello", "^ world", "^ again"]

    def test_none(self):
        """Test that the default mode joins directly."""
        assert merge(self.LINES, concat="none").line == "Helloworldagain"

    def test_space(self):
        """Test joining with a single space."""
        assert merge(self.LINES, concat="space").line == "Hello world again"

    def test_newline(self):
        """Test joining with a newline."""
        assert merge(self.LINES, concat="newline").line == "Hello\nworld\nagain"

    def test_unknown_mode_appends(self):
        """Test that unrecognized modes fall back to direct appending."""
        assert merge(self.LINES, concat="tabs").line == "Helloworldagain"

    def test_stops_at_next_command(self):
        """Test that the scan stops at the first non-continuation line."""
        result = merge(["- one", "^ two", "- three", "^ four"], concat="space")
        assert result.line == "one two"
        assert result.consumed == 1

    def test_skips_blank_lines(self):
        """Test that blank lines between continuations are passed over."""
        result = merge(["- one", "", "^ two"], concat="space")
        assert result.line == "one two"

    def test_bare_marker_skipped(self):
        """Test that a continuation marker with no text is passed over."""
        result = merge(["- one", "^  ", "^ two"], concat="space")
        assert result.line == "one two"

    def test_condition_continuation(self):
        """Test that conditions are continued like responses."""
        result = merge(["* <get a> == 1 =>", "^ yes"], concat="space")
        assert result.line == "<get a> == 1 => yes"


class TestLabelLookahead:
    """Tests for lookahead after `>` label lines."""

    def test_object_label_not_continued(self):
        """Test that the line after an object label is left to the body."""
        result = merge(["> object foo python", "^weird = 1", "< object"])
        assert result == LookaheadResult(consumed=0, line="object foo python")

    def test_topic_label_continued(self):
        """Test that topic labels still fold continuation lines."""
        result = merge(["> topic alpha includes beta", "^ gamma"], concat="space")
        assert result.line == "topic alpha includes beta gamma"
