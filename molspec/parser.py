"""
Molecule specification document parser.

This module drives the statement reader and the statement parsers over a
whole document and returns a Molecule. A document holds exactly two blocks,
in order::

    ELEMENTS {
        0, O, 0, 0, 0, aes(colour=red);
        1, H, 0.76, 0.59, 0;
        2, H, -0.76, 0.59, 0;
    }
    BONDS {
        0-1;
        0-2;
    }

Parsing stops at the first error; nothing from a failed document is
returned.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from pathlib import Path
from typing import Iterator, TextIO

from molspec.config import BONDS_BLOCK, ELEMENTS_BLOCK
from molspec.elements import ReferenceTable, default_reference_table
from molspec.exceptions import BlockHeaderError, BlockNotClosedError
from molspec.grammar import BondStatementParser, ElementStatementParser
from molspec.lexer import Statement, StatementReader
from molspec.types import Bond, Element, Molecule

logger = logging.getLogger(__name__)

_BLOCK_END = "}"


class ParserState(Enum):
    """Position of the driver within a document."""

    START = auto()
    EXPECT_ELEMENTS_HEADER = auto()
    IN_ELEMENTS = auto()
    EXPECT_BONDS_HEADER = auto()
    IN_BONDS = auto()
    DONE = auto()


class MoleculeParser:
    """Parser for molecule specification documents.

    A parser instance reads one document once. The elements and bonds it
    accumulates are private to it and only leave as a finished Molecule.

    Args:
        source: Document text or a readable text stream.
        table: Reference table for element symbols. Defaults to the bundled
            table.

    Example:
        >>> parser = MoleculeParser("ELEMENTS{0,H,0,0,0;} BONDS{}")
        >>> mol = parser.parse()
        >>> mol.elements[0].symbol
        'H'

    For convenience, use the module-level `parse()` function:
        >>> from molspec import parse
        >>> mol = parse("ELEMENTS{0,H,0,0,0;} BONDS{}")
    """

    def __init__(
        self,
        source: str | TextIO,
        table: ReferenceTable | None = None,
    ) -> None:
        self._table = table if table is not None else default_reference_table()
        self._reader = StatementReader(source)
        self._element_parser = ElementStatementParser(self._table)
        self._bond_parser = BondStatementParser()
        self._elements: list[Element] = []
        self._indices: set[int] = set()
        self._bonds: list[Bond] = []
        self._bonded: set[frozenset[int]] = set()
        self._state = ParserState.START

    @property
    def state(self) -> ParserState:
        """Current driver state."""
        return self._state

    def parse(self) -> Molecule:
        """Parse the document into a Molecule.

        Returns:
            Parsed Molecule.

        Raises:
            MolSpecError: On the first error in the document.
            RuntimeError: If this parser has already been used.
        """
        if self._state is not ParserState.START:
            raise RuntimeError("MoleculeParser instances can only parse once")

        self._state = ParserState.EXPECT_ELEMENTS_HEADER
        self._expect_header(ELEMENTS_BLOCK)

        self._state = ParserState.IN_ELEMENTS
        for statement in self._block_body(ELEMENTS_BLOCK):
            self._add_element(statement)
        logger.debug("ELEMENTS block closed with %d elements", len(self._elements))

        self._state = ParserState.EXPECT_BONDS_HEADER
        self._expect_header(BONDS_BLOCK)

        self._state = ParserState.IN_BONDS
        for statement in self._block_body(BONDS_BLOCK):
            self._add_bond(statement)
        logger.debug("BONDS block closed with %d bonds", len(self._bonds))

        # Anything after the BONDS block is never read.
        self._state = ParserState.DONE

        return Molecule(elements=tuple(self._elements), bonds=tuple(self._bonds))

    def _expect_header(self, block: str) -> None:
        statement = next(self._reader, None)
        if statement is None:
            raise BlockHeaderError(block, None, self._reader.line)
        if statement.text.strip().lower() != f"{block.lower()}{{":
            raise BlockHeaderError(block, statement.text, statement.line)

    def _block_body(self, block: str) -> Iterator[Statement]:
        """Yield the statements of a block up to its closing brace."""
        for statement in self._reader:
            if statement.text == _BLOCK_END:
                return
            yield statement
        raise BlockNotClosedError(block, self._reader.line)

    def _add_element(self, statement: Statement) -> None:
        element = self._element_parser.parse(
            statement.text, statement.line, self._indices
        )
        self._elements.append(element)
        self._indices.add(element.index)
        logger.debug("line %d: element %s", statement.line, element.label)

    def _add_bond(self, statement: Statement) -> None:
        bond = self._bond_parser.parse(
            statement.text, statement.line, self._indices, self._bonded
        )
        self._bonds.append(bond)
        self._bonded.add(bond.key)
        logger.debug(
            "line %d: %s bond %d-%d",
            statement.line, bond.degree, bond.index1, bond.index2,
        )


def parse(text: str, table: ReferenceTable | None = None) -> Molecule:
    """Parse a molecule specification string into a Molecule.

    This is a convenience function that creates a MoleculeParser and
    calls parse().

    Args:
        text: Document text.
        table: Reference table; defaults to the bundled table.

    Returns:
        Parsed Molecule.

    Raises:
        MolSpecError: If the document is invalid.

    Example:
        >>> mol = parse("ELEMENTS{0,H,0,0,0;1,H,0.74,0,0;} BONDS{0-1;}")
        >>> len(mol.bonds)
        1
    """
    return MoleculeParser(text, table).parse()


def parse_stream(stream: TextIO, table: ReferenceTable | None = None) -> Molecule:
    """Parse a molecule specification from a readable text stream."""
    return MoleculeParser(stream, table).parse()


def parse_file(
    path: str | Path,
    table: ReferenceTable | None = None,
    encoding: str = "utf-8",
) -> Molecule:
    """Parse a molecule specification file.

    Args:
        path: Path to the document.
        table: Reference table; defaults to the bundled table.
        encoding: File encoding.

    Returns:
        Parsed Molecule.

    Raises:
        FileNotFoundError: If the file does not exist.
        MolSpecError: If the document is invalid.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"The file path specified does not exist: {path}")

    with path.open("r", encoding=encoding) as handle:
        molecule = parse_stream(handle, table)

    logger.info(
        "Parsed %s: %d elements, %d bonds",
        path.name, molecule.num_elements, molecule.num_bonds,
    )
    return molecule
