"""
Core molecular data types.

This module defines the records produced by a successful parse: Element,
Bond and Molecule. All three are immutable; a Molecule is only ever built
once both blocks of a document have been validated.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator

from molspec.config import DEFAULT_BOND_ALPHA, DEFAULT_BOND_COLOUR


class BondDegree(IntEnum):
    """Bond degree enumeration."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class Element:
    """An atom placed in space.

    Attributes:
        index: Document-scoped unique index.
        symbol: Chemical symbol as spelled in the reference table.
        atomic_number: Atomic number from the reference table.
        position: (x, y, z) coordinates.
        radius: Drawing radius.
        colour: Drawing colour as ``#rrggbb``.
    """

    index: int
    symbol: str
    atomic_number: int
    position: tuple[float, float, float]
    radius: float
    colour: str

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def z(self) -> float:
        return self.position[2]

    @property
    def label(self) -> str:
        """Symbol followed by index, e.g. ``"H0"``."""
        return f"{self.symbol}{self.index}"


@dataclass(frozen=True, slots=True)
class Bond:
    """A bond between two elements, referenced by index.

    Attributes:
        index1: Index of the first element.
        index2: Index of the second element.
        degree: Single, double or triple.
        alpha: Opacity.
        colour: Drawing colour as ``#rrggbb``.
    """

    index1: int
    index2: int
    degree: BondDegree = BondDegree.SINGLE
    alpha: float = DEFAULT_BOND_ALPHA
    colour: str = DEFAULT_BOND_COLOUR

    @property
    def key(self) -> frozenset[int]:
        """Unordered pair of element indices."""
        return frozenset((self.index1, self.index2))

    def other(self, index: int) -> int:
        """Get the index of the element on the other end of this bond.

        Raises:
            ValueError: If index is not part of this bond.
        """
        if index == self.index1:
            return self.index2
        if index == self.index2:
            return self.index1
        raise ValueError(f"Element {index} not in bond {self.index1}-{self.index2}")

    def __contains__(self, index: object) -> bool:
        return index in (self.index1, self.index2)


@dataclass(frozen=True)
class Molecule:
    """A validated molecule: elements and the bonds between them.

    Example:
        >>> from molspec import parse
        >>> mol = parse("ELEMENTS{0,H,0,0,0;1,H,0.74,0,0;} BONDS{0-1;}")
        >>> mol.num_elements, mol.num_bonds
        (2, 1)
    """

    elements: tuple[Element, ...] = ()
    bonds: tuple[Bond, ...] = ()
    _by_index: dict[int, Element] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))
        object.__setattr__(self, "bonds", tuple(self.bonds))
        object.__setattr__(self, "_by_index", {e.index: e for e in self.elements})

    def __len__(self) -> int:
        """Return number of elements."""
        return len(self.elements)

    def __iter__(self) -> Iterator[Element]:
        """Iterate over elements in document order."""
        return iter(self.elements)

    @property
    def num_elements(self) -> int:
        return len(self.elements)

    @property
    def num_bonds(self) -> int:
        return len(self.bonds)

    def has_element(self, index: int) -> bool:
        return index in self._by_index

    def get_element(self, index: int) -> Element:
        """Get an element by its document index.

        Raises:
            KeyError: If no element has this index.
        """
        try:
            return self._by_index[index]
        except KeyError:
            raise KeyError(f"No element with index {index}") from None

    def get_bond_between(self, index1: int, index2: int) -> Bond | None:
        """Find the bond between two elements, in either direction."""
        for bond in self.bonds:
            if index1 in bond and index2 in bond and index1 != index2:
                return bond
        return None

    def bonds_of(self, index: int) -> list[Bond]:
        """Bonds that have the given element as an endpoint."""
        return [bond for bond in self.bonds if index in bond]

    def neighbors(self, index: int) -> list[int]:
        """Indices of elements bonded to the given element."""
        return [bond.other(index) for bond in self.bonds_of(index)]

    def bond_length(self, bond: Bond) -> float:
        """Euclidean distance between the two endpoints of a bond."""
        start = self.get_element(bond.index1).position
        end = self.get_element(bond.index2).position
        return math.dist(start, end)
