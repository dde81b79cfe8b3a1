"""
Package paths and default constants.

Exports:
    DATA_PATH: Directory holding the bundled datasets.
    DEFAULT_REFERENCE_TABLE_PATH: CSV with per-element default radius/colour.
    DEFAULT_BOND_COLOUR: Colour of a bond without an aesthetics override.
    DEFAULT_BOND_ALPHA: Opacity of a bond without an aesthetics override.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final

DATA_PATH: Final[Path] = Path(__file__).resolve().parent / "data"
DEFAULT_REFERENCE_TABLE_PATH: Final[Path] = DATA_PATH / "element_defaults.csv"

DEFAULT_BOND_COLOUR: Final[str] = "#222222"
DEFAULT_BOND_ALPHA: Final[float] = 1.0

# Block names as they appear in error messages
ELEMENTS_BLOCK: Final[str] = "ELEMENTS"
BONDS_BLOCK: Final[str] = "BONDS"
