"""
Element reference data.

This module provides the reference table that maps chemical symbols to
atomic numbers and to the default radius and colour an element is drawn
with. The table is immutable once loaded and is passed explicitly to the
parsers that need it.

The bundled table is read from ``molspec/data/element_defaults.csv``:

    >>> table = default_reference_table()
    >>> table.lookup("cl").atomic_number
    17
"""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Final, Iterable, Iterator, Mapping

from molspec.colours import resolve_colour
from molspec.config import DEFAULT_REFERENCE_TABLE_PATH
from molspec.exceptions import InvalidColourError, ReferenceTableError

logger = logging.getLogger(__name__)

# Column positions in the reference table source
_COL_ATOMIC_NUMBER: Final[int] = 0
_COL_SYMBOL: Final[int] = 1
_COL_NAME: Final[int] = 2
_COL_RADIUS: Final[int] = 3
_COL_COLOUR: Final[int] = 4


@dataclass(frozen=True, slots=True)
class ElementDefaults:
    """Immutable reference entry for one chemical element.

    Attributes:
        atomic_number: Atomic number (proton count).
        symbol: Element symbol in canonical case (e.g., "C", "Cl").
        name: Full element name.
        radius: Default drawing radius.
        colour: Default colour as ``#rrggbb``.
    """

    atomic_number: int
    symbol: str
    name: str
    radius: float
    colour: str


class ReferenceTable:
    """Read-only symbol lookup for element defaults.

    Lookups are case-insensitive. Instances never change after
    construction, so a single table can be shared by any number of parses.

    Example:
        >>> table = ReferenceTable([ElementDefaults(1, "H", "Hydrogen", 25.0, "#ffffff")])
        >>> "h" in table
        True
    """

    __slots__ = ("_by_symbol", "_by_number")

    def __init__(self, entries: Iterable[ElementDefaults]) -> None:
        by_symbol: dict[str, ElementDefaults] = {}
        by_number: dict[int, ElementDefaults] = {}
        for entry in entries:
            key = entry.symbol.lower()
            if key in by_symbol:
                raise ReferenceTableError(f"Duplicate symbol {entry.symbol!r}")
            by_symbol[key] = entry
            by_number[entry.atomic_number] = entry
        self._by_symbol: Mapping[str, ElementDefaults] = MappingProxyType(by_symbol)
        self._by_number: Mapping[int, ElementDefaults] = MappingProxyType(by_number)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "ReferenceTable":
        """Build a table from CSV text lines.

        The first row is a header and is ignored. Columns are taken by
        position: atomic number, symbol, name, default radius, default
        colour. Blank rows are skipped.

        Args:
            rows: Lines of comma-separated text.

        Returns:
            New ReferenceTable.

        Raises:
            ReferenceTableError: If a row is malformed.
        """
        entries: list[ElementDefaults] = []
        reader = csv.reader(rows)
        for row_number, row in enumerate(reader, start=1):
            if row_number == 1 or not any(cell.strip() for cell in row):
                continue
            entries.append(_parse_row(row, row_number))
        return cls(entries)

    @classmethod
    def from_csv(cls, path: str | Path, encoding: str = "utf-8") -> "ReferenceTable":
        """Load a table from a CSV file.

        Args:
            path: Path to the CSV file.
            encoding: File encoding.

        Returns:
            New ReferenceTable.
        """
        path = Path(path)
        with path.open("r", encoding=encoding, newline="") as handle:
            table = cls.from_rows(handle)
        logger.debug("Loaded %d reference elements from %s", len(table), path)
        return table

    def lookup(self, symbol: str) -> ElementDefaults | None:
        """Look up an element by symbol (case-insensitive)."""
        return self._by_symbol.get(symbol.lower())

    def by_atomic_number(self, atomic_number: int) -> ElementDefaults | None:
        """Look up an element by atomic number."""
        return self._by_number.get(atomic_number)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.lower() in self._by_symbol

    def __len__(self) -> int:
        return len(self._by_symbol)

    def __iter__(self) -> Iterator[ElementDefaults]:
        """Iterate over entries in ascending atomic number."""
        for number in sorted(self._by_number):
            yield self._by_number[number]

    def __repr__(self) -> str:
        return f"ReferenceTable({len(self)} elements)"


def _parse_row(row: list[str], row_number: int) -> ElementDefaults:
    if len(row) <= _COL_COLOUR:
        raise ReferenceTableError(
            f"Expected at least {_COL_COLOUR + 1} columns, got {len(row)}",
            row_number,
        )

    cells = [cell.strip().strip('"') for cell in row]

    try:
        atomic_number = int(cells[_COL_ATOMIC_NUMBER])
    except ValueError:
        raise ReferenceTableError(
            f"Invalid atomic number {cells[_COL_ATOMIC_NUMBER]!r}", row_number
        ) from None

    symbol = cells[_COL_SYMBOL]
    if not symbol.isalpha():
        raise ReferenceTableError(f"Invalid symbol {symbol!r}", row_number)

    try:
        radius = float(cells[_COL_RADIUS])
    except ValueError:
        raise ReferenceTableError(
            f"Invalid radius {cells[_COL_RADIUS]!r}", row_number
        ) from None
    if not math.isfinite(radius) or radius < 0:
        raise ReferenceTableError(
            f"Radius must be a non-negative number, got {cells[_COL_RADIUS]!r}",
            row_number,
        )

    try:
        colour = resolve_colour(cells[_COL_COLOUR])
    except InvalidColourError as e:
        raise ReferenceTableError(f"Invalid colour {e.value!r}", row_number) from None

    return ElementDefaults(
        atomic_number=atomic_number,
        symbol=symbol,
        name=cells[_COL_NAME],
        radius=radius,
        colour=colour,
    )


@lru_cache(maxsize=1)
def default_reference_table() -> ReferenceTable:
    """Return the bundled reference table, loaded once per process."""
    return ReferenceTable.from_csv(DEFAULT_REFERENCE_TABLE_PATH)


def normalize_symbol(symbol: str) -> str:
    """Strip leading/trailing digits and dashes from a symbol.

    Documents may label atoms as ``H1`` or ``2-O`` to tell them apart; only
    the chemical symbol is kept.

    Example:
        >>> normalize_symbol("H1")
        'H'
    """
    return symbol.strip().strip("0123456789-")
