"""
Molspec - molecule specification file parser.

Reads documents made of an ELEMENTS block and a BONDS block and turns them
into a validated, immutable Molecule for a scene builder to draw.

    >>> from molspec import parse
    >>> mol = parse('''
    ... ELEMENTS {
    ...     0, O, 0, 0, 0, aes(colour=red);
    ...     1, H, 0.76, 0.59, 0;
    ...     2, H, -0.76, 0.59, 0;
    ... }
    ... BONDS { 0-1; 0-2; }
    ... ''')
    >>> [e.label for e in mol.elements]
    ['O0', 'H1', 'H2']
"""

__version__ = "0.1.0"

# Core types
from molspec.types import Bond, BondDegree, Element, Molecule

# Parsing
from molspec.parser import MoleculeParser, parse, parse_file, parse_stream
from molspec.lexer import Statement, StatementReader, split_arguments
from molspec.grammar import BondStatementParser, ElementStatementParser

# Reference data
from molspec.colours import NAMED_COLOURS, is_colour, resolve_colour
from molspec.elements import ElementDefaults, ReferenceTable, default_reference_table

# Exceptions
from molspec.exceptions import (
    ErrorKind,
    MolSpecError,
    LexError,
    StatementSyntaxError,
    BracketError,
    ArgumentCountError,
    ArgumentOrderError,
    DuplicateAttributeError,
    NumericFormatError,
    UnknownSymbolError,
    DuplicateIndexError,
    UnknownElementError,
    SelfBondError,
    DuplicateBondError,
    AestheticSyntaxError,
    UnknownAttributeError,
    InvalidColourError,
    BlockNotClosedError,
    BlockHeaderError,
    ReferenceTableError,
)

__all__ = [
    # Types
    "Bond", "BondDegree", "Element", "Molecule",
    # Parsing
    "MoleculeParser", "parse", "parse_file", "parse_stream",
    "Statement", "StatementReader", "split_arguments",
    "BondStatementParser", "ElementStatementParser",
    # Reference data
    "NAMED_COLOURS", "is_colour", "resolve_colour",
    "ElementDefaults", "ReferenceTable", "default_reference_table",
    # Exceptions
    "ErrorKind", "MolSpecError", "LexError", "StatementSyntaxError",
    "BracketError", "ArgumentCountError", "ArgumentOrderError",
    "DuplicateAttributeError", "NumericFormatError", "UnknownSymbolError",
    "DuplicateIndexError", "UnknownElementError", "SelfBondError",
    "DuplicateBondError", "AestheticSyntaxError", "UnknownAttributeError",
    "InvalidColourError", "BlockNotClosedError", "BlockHeaderError",
    "ReferenceTableError",
]
