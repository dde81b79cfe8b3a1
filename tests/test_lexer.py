"""Tests for the statement reader and the argument splitter."""

import io

import pytest

from molspec.exceptions import (
    BracketError,
    ErrorKind,
    LexError,
    StatementSyntaxError,
)
from molspec.lexer import Statement, StatementReader, split_arguments


def read_all(text: str) -> list[Statement]:
    return list(StatementReader(text))


class TestStatementReader:
    """Test splitting a document into statements."""

    def test_semicolon_terminates(self):
        """Semicolons end a statement and are dropped."""
        assert [s.text for s in read_all("a;b;")] == ["a", "b"]

    def test_braces_terminate_and_are_kept(self):
        """Braces end a statement and are included in it."""
        assert [s.text for s in read_all("ELEMENTS{x;}")] == ["ELEMENTS{", "x", "}"]

    def test_whitespace_removed(self):
        """All whitespace inside a statement is discarded."""
        assert read_all("  0 , H ,\t0, 0,\n0 ;")[0].text == "0,H,0,0,0"

    def test_empty_statement(self):
        assert [s.text for s in read_all(";")] == [""]

    def test_line_numbers(self):
        """Each statement records the line of its terminator."""
        statements = read_all("a;\nb;\n\nc\n;")
        assert [(s.text, s.line) for s in statements] == [
            ("a", 1), ("b", 2), ("c", 5),
        ]

    def test_reader_from_stream(self):
        reader = StatementReader(io.StringIO("x;y;"))
        assert [s.text for s in reader] == ["x", "y"]

    def test_end_after_whitespace(self):
        """Trailing whitespace after the last terminator ends cleanly."""
        reader = StatementReader("a;\n\n")
        assert next(reader).text == "a"
        assert next(reader, None) is None
        assert reader.line == 3

    def test_exhausted_reader_stays_exhausted(self):
        reader = StatementReader("a;")
        assert list(reader) == [Statement("a", 1)]
        assert list(reader) == []

    def test_long_input_spans_read_chunks(self):
        """Statements are not lost across internal read boundaries."""
        text = "".join(f"{i},H,0,0,0;\n" for i in range(2000))
        statements = read_all(text)
        assert len(statements) == 2000
        assert statements[-1] == Statement("1999,H,0,0,0", 2000)


class TestComments:
    """Test comment removal."""

    def test_line_comment(self):
        statements = read_all("// comment; with {braces}\na;")
        assert statements == [Statement("a", 2)]

    def test_block_comment(self):
        statements = read_all("/* a; b; */c;")
        assert statements == [Statement("c", 1)]

    def test_block_comment_counts_newlines(self):
        """Newlines inside block comments advance the line counter."""
        statements = read_all("/*\n\n*/a;")
        assert statements == [Statement("a", 3)]

    def test_comment_inside_statement(self):
        statements = read_all("0,H,/* the x */0,0,0;")
        assert statements[0].text == "0,H,0,0,0"

    def test_block_comment_with_stars(self):
        statements = read_all("/** starred **/a;/* x*y */b;")
        assert [s.text for s in statements] == ["a", "b"]

    def test_block_comment_star_then_newline(self):
        statements = read_all("/* *\n*/a;")
        assert statements == [Statement("a", 2)]

    def test_line_comment_at_end(self):
        """A final line comment without newline ends the input cleanly."""
        assert read_all("a; // done") == [Statement("a", 1)]

    def test_comment_only_document(self):
        assert read_all("// nothing\n/* here */") == []


class TestReaderErrors:
    """Test lexical and syntax errors from the reader."""

    def test_orphan_slash(self):
        """A slash not starting a comment is a LexError."""
        with pytest.raises(LexError) as exc_info:
            read_all("a;\nb/c;")
        assert exc_info.value.kind is ErrorKind.LEX
        assert exc_info.value.line == 2
        assert exc_info.value.char == "c"

    def test_orphan_slash_before_newline(self):
        """A slash followed by a newline is reported on the slash's line."""
        with pytest.raises(LexError) as exc_info:
            read_all("a;\nb /\nc;")
        assert exc_info.value.line == 2
        assert exc_info.value.char == "\n"

    def test_orphan_slash_at_end(self):
        with pytest.raises(LexError) as exc_info:
            read_all("a;/")
        assert exc_info.value.char is None

    def test_missing_terminator(self):
        """Input ending mid-statement is a syntax error."""
        with pytest.raises(StatementSyntaxError) as exc_info:
            read_all("a;\nb")
        assert exc_info.value.kind is ErrorKind.SYNTAX
        assert exc_info.value.reason == StatementSyntaxError.MISSING_TERMINATOR
        assert exc_info.value.line == 2

    def test_unterminated_block_comment(self):
        with pytest.raises(StatementSyntaxError) as exc_info:
            read_all("a;/* never\nclosed")
        assert exc_info.value.reason == StatementSyntaxError.UNTERMINATED_COMMENT
        assert exc_info.value.line == 2


class TestSplitArguments:
    """Test bracket-aware argument splitting."""

    def test_plain(self):
        assert split_arguments("0,H,0,0,0") == ["0", "H", "0", "0", "0"]

    def test_bracket_group_preserved(self):
        """Commas inside the aes group do not split."""
        assert split_arguments("0,O,0,0,0,aes(radius=10,colour=red)") == [
            "0", "O", "0", "0", "0", "aes(radius=10,colour=red)",
        ]

    def test_arguments_trimmed(self):
        assert split_arguments(" 0 , H , aes( a = 1 , b = 2 ) ") == [
            "0", "H", "aes( a = 1 , b = 2 )",
        ]

    def test_comma_after_group(self):
        """A comma after the group does not create an empty argument."""
        assert split_arguments("aes(a=1),0") == ["aes(a=1)", "0"]

    def test_text_after_group_starts_new_argument(self):
        assert split_arguments("aes(a=1)x") == ["aes(a=1)", "x"]

    def test_empty_middle_argument_kept(self):
        assert split_arguments("0,,1") == ["0", "", "1"]

    def test_trailing_comma_dropped(self):
        assert split_arguments("0,1,") == ["0", "1"]

    def test_empty_statement(self):
        assert split_arguments("") == []

    def test_single_argument(self):
        assert split_arguments("0-1") == ["0-1"]

    @pytest.mark.parametrize("statement", [
        "aes((a=1))",
        "aes(a=1),aes(b=2)",
        "0,1)",
        "aes(a=1",
    ])
    def test_bracket_errors(self, statement):
        """Nested, repeated, unopened or unclosed groups are rejected."""
        with pytest.raises(BracketError) as exc_info:
            split_arguments(statement)
        assert exc_info.value.kind is ErrorKind.BRACKET
        assert exc_info.value.statement == statement
