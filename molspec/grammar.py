"""
Statement grammar for the ELEMENTS and BONDS blocks.

An element statement has five slots, ``index, symbol, x, y, z``, followed by
an optional aesthetics argument::

    0, H, 0, 0, 0;
    0, H, y=1.5, z=0, x=0;
    index=1, symbol=O, x=0, y=0, z=0, aes(colour=red, radius=60);

Slots may be given positionally or as ``name=value``. Once a slot is named,
every slot after it must be named too.

A bond statement names two element indices joined by a separator, followed
by an optional aesthetics argument::

    0-1;
    0 double 1, aes(alpha=0.5);

The parsers in this module validate one statement at a time and return the
resulting record. They never modify the accumulated elements or bonds;
committing a record is up to the caller.
"""

from __future__ import annotations

import re
from typing import Callable, Collection, Final, Mapping, Sequence

from molspec.colours import resolve_colour
from molspec.config import (
    BONDS_BLOCK,
    DEFAULT_BOND_ALPHA,
    DEFAULT_BOND_COLOUR,
    ELEMENTS_BLOCK,
)
from molspec.elements import ReferenceTable, default_reference_table, normalize_symbol
from molspec.exceptions import (
    AestheticSyntaxError,
    ArgumentCountError,
    ArgumentOrderError,
    DuplicateAttributeError,
    DuplicateBondError,
    DuplicateIndexError,
    MolSpecError,
    NumericFormatError,
    SelfBondError,
    StatementSyntaxError,
    UnknownAttributeError,
    UnknownElementError,
    UnknownSymbolError,
)
from molspec.lexer import split_arguments
from molspec.types import Bond, BondDegree, Element


_AESTHETICS: Final[re.Pattern[str]] = re.compile(r"aes\(((?:[a-z0-9]|\s|,|=|#|\.)*)\)")
_INTEGER: Final[re.Pattern[str]] = re.compile(r"[0-9]+")
_UNSIGNED_DECIMAL: Final[re.Pattern[str]] = re.compile(r"[0-9]+(?:\.[0-9]+)?")
_FLOAT: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)
_BOND_SPEC: Final[re.Pattern[str]] = re.compile(
    r"([0-9]+)\s*(-|=|#|single|double|triple)\s*([0-9]+)"
)

_SEPARATOR_DEGREES: Final[dict[str, BondDegree]] = {
    "-": BondDegree.SINGLE,
    "single": BondDegree.SINGLE,
    "=": BondDegree.DOUBLE,
    "double": BondDegree.DOUBLE,
    "#": BondDegree.TRIPLE,
    "triple": BondDegree.TRIPLE,
}

# Slot order of an element statement, and the names each slot answers to
SLOT_NAMES: Final[tuple[str, ...]] = ("index", "symbol", "x", "y", "z")
_SLOT_BY_NAME: Final[dict[str, int]] = {
    "index": 0,
    "symbol": 1,
    "name": 1,
    "x": 2,
    "y": 3,
    "z": 4,
}


# ============================================================================
# Value readers
# ============================================================================

def read_index(value: str) -> int:
    """Read a non-negative decimal element index."""
    if not _INTEGER.fullmatch(value):
        raise NumericFormatError("index", value, "integer")
    return int(value)


def read_coordinate(axis: str, value: str) -> float:
    """Read one coordinate as a float."""
    if not _FLOAT.fullmatch(value):
        raise NumericFormatError(axis, value, "decimal")
    return float(value)


def read_unsigned_decimal(field: str, value: str) -> float:
    """Read a radius or alpha value: digits with an optional fraction."""
    if not _UNSIGNED_DECIMAL.fullmatch(value):
        raise NumericFormatError(field, value, "decimal")
    return float(value)


# ============================================================================
# Aesthetics
# ============================================================================

def aesthetics_body(argument: str) -> str:
    """Check the outer ``aes(...)`` syntax and return what is inside.

    Raises:
        AestheticSyntaxError: If the argument is not ``aes(`` followed by
            letters, digits, whitespace, ``,``, ``=``, ``#`` or ``.`` and a
            closing ``)``.
    """
    match = _AESTHETICS.fullmatch(argument.strip().lower())
    if match is None:
        raise AestheticSyntaxError(argument)
    return match.group(1)


def read_aesthetics(
    argument: str,
    body: str,
    readers: Mapping[str, Callable[[str], object]],
) -> dict[str, object]:
    """Read the ``key=value`` pairs of an aesthetics body.

    Args:
        argument: The full aesthetics argument, for error reporting.
        body: Text between ``aes(`` and ``)``, lower-cased.
        readers: Allowed keys mapped to a function converting the raw value.

    Returns:
        Mapping of the keys present to their converted values.

    Raises:
        AestheticSyntaxError: On an empty component (e.g. ``aes(radius=1,)``).
        UnknownAttributeError: On a key not in ``readers``.
        DuplicateAttributeError: On a key given twice.
    """
    overrides: dict[str, object] = {}
    if not body.strip():
        return overrides

    for component in body.split(","):
        component = component.strip()
        if not component:
            raise AestheticSyntaxError(argument)

        key, sep, value = component.partition("=")
        key = key.strip()
        if not sep or key not in readers:
            raise UnknownAttributeError(key, tuple(readers))
        if key in overrides:
            raise DuplicateAttributeError(key)

        overrides[key] = readers[key](value.strip())

    return overrides


# ============================================================================
# Element statements
# ============================================================================

def bind_slots(arguments: Sequence[str]) -> list[str]:
    """Assign the five slot arguments of an element statement to slots.

    The named arguments must form a suffix of the argument list: find the
    longest run of ``name=value`` arguments at the end, and reject any named
    argument before it. Positional arguments fill their own slot; named ones
    fill the slot their name maps to.

    Args:
        arguments: Exactly five raw slot arguments.

    Returns:
        Raw values in slot order (index, symbol, x, y, z).

    Raises:
        ArgumentOrderError: If a named argument is followed by a positional one.
        UnknownAttributeError: If a slot name is not recognised.
        DuplicateAttributeError: If a slot is given more than once.
    """
    named = ["=" in argument for argument in arguments]

    suffix_start = len(arguments)
    while suffix_start > 0 and named[suffix_start - 1]:
        suffix_start -= 1

    for position in range(suffix_start):
        if named[position]:
            raise ArgumentOrderError(position)

    values: list[str | None] = [None] * len(SLOT_NAMES)
    for position, argument in enumerate(arguments):
        if position < suffix_start:
            values[position] = argument.strip()
            continue

        name, _, value = argument.partition("=")
        name = name.strip().lower()
        slot = _SLOT_BY_NAME.get(name)
        if slot is None:
            raise UnknownAttributeError(name, tuple(_SLOT_BY_NAME))
        if values[slot] is not None:
            raise DuplicateAttributeError(SLOT_NAMES[slot])
        values[slot] = value.strip()

    # Five distinct slots were bound, so none is left empty.
    return [value for value in values if value is not None]


class ElementStatementParser:
    """Parser for statements of the ELEMENTS block.

    Args:
        table: Reference table for symbol lookup and defaults. Defaults to
            the bundled table.

    Example:
        >>> parser = ElementStatementParser()
        >>> parser.parse("0,H,0,0,0", line=2, known_indices=set())
        Element(index=0, symbol='H', atomic_number=1, position=(0.0, 0.0, 0.0), radius=25.0, colour='#ffffff')
    """

    REQUIRED_ARGUMENTS: Final[int] = len(SLOT_NAMES)

    def __init__(self, table: ReferenceTable | None = None) -> None:
        self._table = table if table is not None else default_reference_table()

    @property
    def table(self) -> ReferenceTable:
        return self._table

    def parse(self, text: str, line: int, known_indices: Collection[int]) -> Element:
        """Validate one element statement.

        Args:
            text: Statement text without its terminator.
            line: Line number reported on errors.
            known_indices: Indices of the elements accepted so far.

        Returns:
            The new Element.

        Raises:
            MolSpecError: The first problem found in the statement.
        """
        try:
            return self._parse(text, known_indices)
        except MolSpecError as e:
            e.at_line(line)
            raise

    def _parse(self, text: str, known_indices: Collection[int]) -> Element:
        arguments = split_arguments(text)

        count = len(arguments)
        if count not in (self.REQUIRED_ARGUMENTS, self.REQUIRED_ARGUMENTS + 1):
            raise ArgumentCountError(ELEMENTS_BLOCK, self.REQUIRED_ARGUMENTS, 1, count)

        aesthetics = arguments[self.REQUIRED_ARGUMENTS:]
        body = aesthetics_body(aesthetics[0]) if aesthetics else ""

        raw_index, raw_symbol, raw_x, raw_y, raw_z = bind_slots(
            arguments[:self.REQUIRED_ARGUMENTS]
        )

        index = read_index(raw_index)

        symbol = normalize_symbol(raw_symbol)
        defaults = self._table.lookup(symbol) if symbol else None
        if defaults is None:
            raise UnknownSymbolError(raw_symbol)

        position = (
            read_coordinate("x", raw_x),
            read_coordinate("y", raw_y),
            read_coordinate("z", raw_z),
        )

        if index in known_indices:
            raise DuplicateIndexError(index)

        radius = defaults.radius
        colour = defaults.colour
        if aesthetics:
            overrides = read_aesthetics(aesthetics[0], body, {
                "colour": resolve_colour,
                "radius": lambda value: read_unsigned_decimal("radius", value),
            })
            radius = overrides.get("radius", radius)
            colour = overrides.get("colour", colour)

        return Element(
            index=index,
            symbol=defaults.symbol,
            atomic_number=defaults.atomic_number,
            position=position,
            radius=radius,
            colour=colour,
        )


# ============================================================================
# Bond statements
# ============================================================================

class BondStatementParser:
    """Parser for statements of the BONDS block.

    Example:
        >>> parser = BondStatementParser()
        >>> parser.parse("0=1", line=5, known_indices={0, 1}, bonded=set())
        Bond(index1=0, index2=1, degree=<BondDegree.DOUBLE: 2>, alpha=1.0, colour='#222222')
    """

    REQUIRED_ARGUMENTS: Final[int] = 1

    def parse(
        self,
        text: str,
        line: int,
        known_indices: Collection[int],
        bonded: Collection[frozenset[int]],
    ) -> Bond:
        """Validate one bond statement.

        Args:
            text: Statement text without its terminator.
            line: Line number reported on errors.
            known_indices: Indices of all elements in the document.
            bonded: Unordered index pairs already bonded.

        Returns:
            The new Bond.

        Raises:
            MolSpecError: The first problem found in the statement.
        """
        try:
            return self._parse(text, known_indices, bonded)
        except MolSpecError as e:
            e.at_line(line)
            raise

    def _parse(
        self,
        text: str,
        known_indices: Collection[int],
        bonded: Collection[frozenset[int]],
    ) -> Bond:
        arguments = split_arguments(text)

        count = len(arguments)
        if count not in (self.REQUIRED_ARGUMENTS, self.REQUIRED_ARGUMENTS + 1):
            raise ArgumentCountError(BONDS_BLOCK, self.REQUIRED_ARGUMENTS, 1, count)

        match = _BOND_SPEC.fullmatch(arguments[0].strip().lower())
        if match is None:
            raise StatementSyntaxError(StatementSyntaxError.BOND_SPEC, arguments[0])

        index1 = int(match.group(1))
        degree = _SEPARATOR_DEGREES[match.group(2)]
        index2 = int(match.group(3))

        if index1 == index2:
            raise SelfBondError(index1)

        missing = tuple(i for i in (index1, index2) if i not in known_indices)
        if missing:
            raise UnknownElementError(missing)

        if frozenset((index1, index2)) in bonded:
            raise DuplicateBondError(index1, index2)

        alpha = DEFAULT_BOND_ALPHA
        colour = DEFAULT_BOND_COLOUR
        if count > self.REQUIRED_ARGUMENTS:
            argument = arguments[self.REQUIRED_ARGUMENTS]
            overrides = read_aesthetics(argument, aesthetics_body(argument), {
                "colour": resolve_colour,
                "alpha": lambda value: read_unsigned_decimal("alpha", value),
            })
            alpha = overrides.get("alpha", alpha)
            colour = overrides.get("colour", colour)

        return Bond(
            index1=index1,
            index2=index2,
            degree=degree,
            alpha=alpha,
            colour=colour,
        )
