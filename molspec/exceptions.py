"""
Custom exceptions for molspec.

This module defines a closed hierarchy of exceptions for the errors a
molecule specification document can contain. Each exception class is tagged
with an :class:`ErrorKind` and carries the 1-based line number where the
problem was detected, plus structured detail about what went wrong. The
human-readable message is derived from those attributes alone.

    >>> err = SelfBondError(index=3, line=7)
    >>> err.as_tuple()
    ('SelfBondError', 7, 'the indices are the same (3).')
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(Enum):
    """Kinds of document errors, valued by their public name."""

    LEX = "LexError"
    SYNTAX = "SyntaxError"
    BRACKET = "BracketError"
    ARGUMENT_COUNT = "ArgumentCountError"
    ARGUMENT_ORDER = "ArgumentOrderError"
    DUPLICATE_ATTRIBUTE = "DuplicateAttributeError"
    NUMERIC_FORMAT = "NumericFormatError"
    UNKNOWN_SYMBOL = "UnknownSymbolError"
    DUPLICATE_INDEX = "DuplicateIndexError"
    UNKNOWN_ELEMENT = "UnknownElementError"
    SELF_BOND = "SelfBondError"
    DUPLICATE_BOND = "DuplicateBondError"
    AESTHETIC_SYNTAX = "AestheticSyntaxError"
    UNKNOWN_ATTRIBUTE = "UnknownAttributeError"
    INVALID_COLOUR = "InvalidColourError"
    BLOCK_NOT_CLOSED = "BlockNotClosedError"
    BLOCK_HEADER = "BlockHeaderError"

    def __str__(self) -> str:
        return self.value


class MolSpecError(Exception):
    """Base exception for all molecule specification errors.

    Attributes:
        kind: The error kind (class-level tag).
        line: 1-based line number where the error was detected, or None
            if the error was raised outside of a document.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, line: int | None = None) -> None:
        self.line = line
        # Subclasses set their detail attributes before calling this
        super().__init__(self._describe())

    @property
    def message(self) -> str:
        """Description of the error, without location."""
        return self._describe()

    def _describe(self) -> str:
        raise NotImplementedError

    def at_line(self, line: int) -> "MolSpecError":
        """Attach a line number (if none is set yet) and return self."""
        if self.line is None:
            self.line = line
        return self

    def as_tuple(self) -> tuple[str, int | None, str]:
        """Return the ``(kind, line, message)`` triple for this error."""
        return (self.kind.value, self.line, self.message)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"ERROR on line {self.line}: {self.message}"


# ============================================================================
# Lexical and structural errors
# ============================================================================

class LexError(MolSpecError):
    """A lone '/' that does not open a comment."""

    kind = ErrorKind.LEX

    def __init__(self, char: str | None = None, line: int | None = None) -> None:
        self.char = char
        super().__init__(line)

    def _describe(self) -> str:
        found = "end of input" if self.char is None else repr(self.char)
        return (
            f"a single '/' is an unrecognised symbol "
            f"(expected '//' or '/*', found {found})."
        )


class StatementSyntaxError(MolSpecError):
    """Malformed statement.

    Raised for a missing terminator, an unterminated block comment, or a
    bond specification that does not match ``<int><sep><int>``.

    Attributes:
        reason: Short description of the malformed construct.
        text: The offending text, if any.
    """

    kind = ErrorKind.SYNTAX

    MISSING_TERMINATOR: ClassVar[str] = "missing terminator"
    UNTERMINATED_COMMENT: ClassVar[str] = "unterminated comment"
    BOND_SPEC: ClassVar[str] = "bond specification"

    def __init__(
        self,
        reason: str,
        text: str | None = None,
        line: int | None = None,
    ) -> None:
        self.reason = reason
        self.text = text
        super().__init__(line)

    def _describe(self) -> str:
        if self.reason == self.MISSING_TERMINATOR:
            return (
                "syntax error. This error may be a result of a missing "
                "semicolon or brace."
            )
        if self.reason == self.UNTERMINATED_COMMENT:
            return "syntax error. A '/*' comment is never closed with '*/'."
        if self.reason == self.BOND_SPEC:
            return (
                f"bonding syntax incorrect in {self.text!r}. Must have an "
                "integer, separated by one of {'-', '=', '#', 'single', "
                "'double', 'triple'}, followed by another integer."
            )
        return f"syntax error: {self.reason}."


class BracketError(MolSpecError):
    """Mismatched, nested or repeated parentheses within a statement."""

    kind = ErrorKind.BRACKET

    def __init__(self, statement: str, line: int | None = None) -> None:
        self.statement = statement
        super().__init__(line)

    def _describe(self) -> str:
        return (
            f"mis-matched brackets, or too many brackets provided in "
            f"{self.statement!r}."
        )


class ArgumentCountError(MolSpecError):
    """Wrong number of arguments in a statement.

    Attributes:
        block: Name of the block the statement belongs to.
        expected: Number of required arguments.
        optional: Number of optional trailing arguments.
        actual: Number of arguments found.
    """

    kind = ErrorKind.ARGUMENT_COUNT

    def __init__(
        self,
        block: str,
        expected: int,
        optional: int,
        actual: int,
        line: int | None = None,
    ) -> None:
        self.block = block
        self.expected = expected
        self.optional = optional
        self.actual = actual
        super().__init__(line)

    def _describe(self) -> str:
        noun = "argument" if self.expected == 1 else "arguments"
        return (
            f"{self.expected} {noun} (+{self.optional} optional argument) "
            f"were expected in the {self.block} block, got {self.actual}."
        )


class ArgumentOrderError(MolSpecError):
    """A positional argument follows a named (``key=value``) one."""

    kind = ErrorKind.ARGUMENT_ORDER

    def __init__(self, position: int, line: int | None = None) -> None:
        self.position = position
        super().__init__(line)

    def _describe(self) -> str:
        return (
            f"implicit and explicit syntax inappropriately overlap: argument "
            f"{self.position + 1} is named but a positional argument follows it."
        )


class DuplicateAttributeError(MolSpecError):
    """The same attribute is given more than once in a statement."""

    kind = ErrorKind.DUPLICATE_ATTRIBUTE

    def __init__(self, name: str, line: int | None = None) -> None:
        self.name = name
        super().__init__(line)

    def _describe(self) -> str:
        return f"2 of the same attribute are provided ({self.name!r})."


class NumericFormatError(MolSpecError):
    """A value could not be read as the number it should be.

    Attributes:
        field: Which value was malformed (``index``, ``x``, ``radius``...).
        value: The raw text.
        expected: ``"integer"`` or ``"decimal"``.
    """

    kind = ErrorKind.NUMERIC_FORMAT

    def __init__(
        self,
        field: str,
        value: str,
        expected: str,
        line: int | None = None,
    ) -> None:
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(line)

    def _describe(self) -> str:
        article = "an" if self.expected[0] in "aeiou" else "a"
        return (
            f"{self.field} value {self.value!r} invalid. {self.field} should "
            f"be {article} {self.expected}."
        )


# ============================================================================
# Semantic errors
# ============================================================================

class UnknownSymbolError(MolSpecError):
    """A chemical symbol is not in the reference table."""

    kind = ErrorKind.UNKNOWN_SYMBOL

    def __init__(self, symbol: str, line: int | None = None) -> None:
        self.symbol = symbol
        super().__init__(line)

    def _describe(self) -> str:
        return f"your chemical symbol {self.symbol!r} is not recognised."


class DuplicateIndexError(MolSpecError):
    """An element index is already in use."""

    kind = ErrorKind.DUPLICATE_INDEX

    def __init__(self, index: int, line: int | None = None) -> None:
        self.index = index
        super().__init__(line)

    def _describe(self) -> str:
        return f"the index {self.index} for this element has been used earlier."


class UnknownElementError(MolSpecError):
    """A bond refers to an element index that was never declared."""

    kind = ErrorKind.UNKNOWN_ELEMENT

    def __init__(self, indices: tuple[int, ...], line: int | None = None) -> None:
        self.indices = indices
        super().__init__(line)

    def _describe(self) -> str:
        missing = ", ".join(str(i) for i in self.indices)
        return f"no element exists with index {missing}."


class SelfBondError(MolSpecError):
    """A bond connects an element to itself."""

    kind = ErrorKind.SELF_BOND

    def __init__(self, index: int, line: int | None = None) -> None:
        self.index = index
        super().__init__(line)

    def _describe(self) -> str:
        return f"the indices are the same ({self.index})."


class DuplicateBondError(MolSpecError):
    """A bond already exists between two elements."""

    kind = ErrorKind.DUPLICATE_BOND

    def __init__(self, index1: int, index2: int, line: int | None = None) -> None:
        self.index1 = index1
        self.index2 = index2
        super().__init__(line)

    def _describe(self) -> str:
        return (
            f"a bond already exists between indices {self.index1} and "
            f"{self.index2}."
        )


class AestheticSyntaxError(MolSpecError):
    """The optional aesthetics argument is not of the form ``aes(...)``."""

    kind = ErrorKind.AESTHETIC_SYNTAX

    def __init__(self, argument: str, line: int | None = None) -> None:
        self.argument = argument
        super().__init__(line)

    def _describe(self) -> str:
        return (
            f"optional argument {self.argument!r} is invalid. It can only "
            "contain the optional \"aes( content here )\" attribute."
        )


class UnknownAttributeError(MolSpecError):
    """An attribute name is not recognised.

    Attributes:
        name: The unrecognised attribute.
        allowed: Attribute names accepted in this position.
    """

    kind = ErrorKind.UNKNOWN_ATTRIBUTE

    def __init__(
        self,
        name: str,
        allowed: tuple[str, ...],
        line: int | None = None,
    ) -> None:
        self.name = name
        self.allowed = allowed
        super().__init__(line)

    def _describe(self) -> str:
        allowed = ", ".join(f'"{a}"' for a in self.allowed)
        return (
            f"attribute {self.name!r} is not recognised. Ensure the only "
            f"attributes are {allowed}."
        )


class InvalidColourError(MolSpecError):
    """A colour is neither a known name nor a ``#rrggbb`` hex value."""

    kind = ErrorKind.INVALID_COLOUR

    def __init__(self, value: str, line: int | None = None) -> None:
        self.value = value
        super().__init__(line)

    def _describe(self) -> str:
        return (
            f"invalid colour {self.value!r}. Ensure it is a standard CPK "
            "colour (e.g. white, black, blue, red) or a hex value "
            "(e.g. #ffffff, #222222, #1b43f5, #eb3c25)."
        )


# ============================================================================
# Block errors
# ============================================================================

class BlockNotClosedError(MolSpecError):
    """End of input reached before a block's closing brace."""

    kind = ErrorKind.BLOCK_NOT_CLOSED

    def __init__(self, block: str, line: int | None = None) -> None:
        self.block = block
        super().__init__(line)

    def _describe(self) -> str:
        return (
            f"{self.block} block not specified correctly. Ensure that an "
            "ending brace is used."
        )


class BlockHeaderError(MolSpecError):
    """A block does not start with its expected header."""

    kind = ErrorKind.BLOCK_HEADER

    def __init__(
        self,
        block: str,
        found: str | None,
        line: int | None = None,
    ) -> None:
        self.block = block
        self.found = found
        super().__init__(line)

    def _describe(self) -> str:
        found = "end of input" if self.found is None else repr(self.found)
        return (
            f"the {self.block} block was not correctly specified "
            f"(expected '{self.block.lower()}{{', found {found})."
        )


# ============================================================================
# Data errors
# ============================================================================

class ReferenceTableError(ValueError):
    """Malformed row in a reference table source.

    Attributes:
        row_number: 1-based row number in the source, header included.
    """

    def __init__(self, message: str, row_number: int | None = None) -> None:
        self.message = message
        self.row_number = row_number
        if row_number is not None:
            super().__init__(f"{message} (row {row_number})")
        else:
            super().__init__(message)
