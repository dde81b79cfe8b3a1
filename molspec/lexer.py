"""
Statement reader and argument splitter.

The reader turns a character stream into statements: runs of non-whitespace
characters ended by ``;`` (dropped) or by ``{`` / ``}`` (kept). Comments in
``//`` and ``/* */`` form are removed, and every newline, including those
inside comments, advances the line counter.

    >>> [s.text for s in StatementReader("ELEMENTS{ 0, H, 0, 0, 0; }")]
    ['ELEMENTS{', '0,H,0,0,0', '}']

The splitter breaks one statement into its comma-separated arguments,
keeping a single parenthesized group intact:

    >>> split_arguments("0,O,0,0,0,aes(radius=10,colour=red)")
    ['0', 'O', '0', '0', '0', 'aes(radius=10,colour=red)']
"""

from __future__ import annotations

import io
from enum import Enum, auto
from typing import Iterator, NamedTuple, TextIO

from molspec.exceptions import BracketError, LexError, StatementSyntaxError


class Statement(NamedTuple):
    """One statement and the line its terminator was read on."""

    text: str
    line: int


class _State(Enum):
    """Comment-scanner states."""

    NORMAL = auto()
    SAW_SLASH = auto()
    IN_LINE_COMMENT = auto()
    IN_BLOCK_COMMENT = auto()
    IN_BLOCK_COMMENT_STAR = auto()


_READ_CHUNK = 4096


class StatementReader:
    """Single-pass iterator over the statements of a document.

    Args:
        source: Document text, or a text stream to read from.

    Raises (while iterating):
        LexError: On a ``/`` that does not start a comment.
        StatementSyntaxError: If the input ends in the middle of a
            statement or inside a block comment.

    Example:
        >>> reader = StatementReader("a;\\n// note\\nb;")
        >>> [(s.text, s.line) for s in reader]
        [('a', 1), ('b', 3)]
    """

    __slots__ = ("_stream", "_chars", "_line", "_state", "_buffer", "_exhausted")

    def __init__(self, source: str | TextIO) -> None:
        self._stream: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._chars = self._read_chars()
        self._line = 1
        self._state = _State.NORMAL
        self._buffer: list[str] = []
        self._exhausted = False

    @property
    def line(self) -> int:
        """Current 1-based line number."""
        return self._line

    def __iter__(self) -> Iterator[Statement]:
        return self

    def __next__(self) -> Statement:
        if self._exhausted:
            raise StopIteration
        statement = self._read_statement()
        if statement is None:
            self._exhausted = True
            raise StopIteration
        return statement

    def _read_chars(self) -> Iterator[str]:
        while True:
            chunk = self._stream.read(_READ_CHUNK)
            if not chunk:
                return
            yield from chunk

    def _read_statement(self) -> Statement | None:
        # Resumes where the previous statement stopped
        for char in self._chars:
            state = self._state

            if state is _State.NORMAL:
                if char == "/":
                    self._state = _State.SAW_SLASH
                elif char == ";":
                    return self._emit()
                elif char in "{}":
                    self._buffer.append(char)
                    return self._emit()
                elif not char.isspace():
                    self._buffer.append(char)

            elif state is _State.SAW_SLASH:
                if char == "/":
                    self._state = _State.IN_LINE_COMMENT
                elif char == "*":
                    self._state = _State.IN_BLOCK_COMMENT
                else:
                    raise LexError(char, self._line)

            elif state is _State.IN_LINE_COMMENT:
                if char == "\n":
                    self._state = _State.NORMAL

            elif state is _State.IN_BLOCK_COMMENT:
                if char == "*":
                    self._state = _State.IN_BLOCK_COMMENT_STAR

            elif state is _State.IN_BLOCK_COMMENT_STAR:
                if char == "/":
                    self._state = _State.NORMAL
                elif char != "*":
                    self._state = _State.IN_BLOCK_COMMENT

            # A LexError on this newline reports the slash's line
            if char == "\n":
                self._line += 1

        return self._finish()

    def _emit(self) -> Statement:
        text = "".join(self._buffer)
        self._buffer.clear()
        return Statement(text, self._line)

    def _finish(self) -> Statement | None:
        state = self._state
        if state is _State.SAW_SLASH:
            raise LexError(None, self._line)
        if state in (_State.IN_BLOCK_COMMENT, _State.IN_BLOCK_COMMENT_STAR):
            raise StatementSyntaxError(
                StatementSyntaxError.UNTERMINATED_COMMENT, line=self._line
            )
        if self._buffer:
            raise StatementSyntaxError(
                StatementSyntaxError.MISSING_TERMINATOR,
                "".join(self._buffer),
                line=self._line,
            )
        return None


def split_arguments(statement: str) -> list[str]:
    """Split a statement on commas, keeping one bracketed group whole.

    Everything up to and including the closing ``)`` becomes one argument,
    whatever commas it contains. A comma directly after the ``)`` only
    separates it from the next argument. A trailing empty argument is
    dropped.

    Args:
        statement: Statement text (without its terminator).

    Returns:
        List of trimmed argument strings.

    Raises:
        BracketError: On a nested or second ``(``, a ``)`` with no open
            group, or a group that is never closed.
    """
    arguments: list[str] = []
    current: list[str] = []
    in_group = False
    seen_group = False
    just_closed = False

    for char in statement:
        if char == "(":
            if in_group or seen_group:
                raise BracketError(statement)
            in_group = True
            seen_group = True
            current.append(char)
        elif char == ")":
            if not in_group:
                raise BracketError(statement)
            in_group = False
            current.append(char)
            arguments.append("".join(current).strip())
            current = []
            just_closed = True
            continue
        elif in_group:
            current.append(char)
        elif char == ",":
            if not just_closed:
                arguments.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        just_closed = False

    if in_group:
        raise BracketError(statement)

    last = "".join(current).strip()
    if last:
        arguments.append(last)

    return arguments
