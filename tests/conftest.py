"""Test configuration and fixtures for molspec tests."""

import pytest

# RDKit is used as reference for periodic table data
from rdkit import Chem

from molspec.elements import ElementDefaults, ReferenceTable, default_reference_table


def rdkit_atomic_number(symbol: str) -> int:
    """Get RDKit's atomic number for an element symbol.

    Args:
        symbol: Element symbol in canonical case.

    Returns:
        Atomic number according to RDKit's periodic table.
    """
    return Chem.GetPeriodicTable().GetAtomicNumber(symbol)


@pytest.fixture
def table() -> ReferenceTable:
    """The bundled reference table."""
    return default_reference_table()


@pytest.fixture
def small_table() -> ReferenceTable:
    """A three-element table with easy-to-check defaults."""
    return ReferenceTable([
        ElementDefaults(1, "H", "Hydrogen", 10.0, "#ffffff"),
        ElementDefaults(6, "C", "Carbon", 20.0, "#909090"),
        ElementDefaults(17, "Cl", "Chlorine", 30.0, "#1ff01f"),
    ])


@pytest.fixture
def water_text() -> str:
    """A valid water document using comments, named slots and aesthetics."""
    return (
        "// Water\n"
        "ELEMENTS {\n"
        "    0, O, 0, 0, 0, aes(colour = red, radius = 60);\n"
        "    1, H1, x=0.76, y=0.59, z=0;\n"
        "    /* second hydrogen,\n"
        "       mirrored */\n"
        "    index=2, symbol=H2, x=-0.76, y=0.59, z=0;\n"
        "}\n"
        "BONDS {\n"
        "    0-1;\n"
        "    0 single 2, aes(alpha=0.5);\n"
        "}\n"
    )


@pytest.fixture
def valid_documents() -> list[str]:
    """Assorted valid documents."""
    return [
        "ELEMENTS{} BONDS{}",
        "ELEMENTS{0,H,0,0,0;} BONDS{}",
        "elements{0,H,0,0,0;1,H,0.74,0,0;} bonds{0-1;}",
        "Elements { 0,C,0,0,0; 1,O,1.2,0,0; } Bonds { 0 double 1; }",
        "ELEMENTS{0,N,0,0,0;1,N,1.1,0,0;}BONDS{0#1,aes(colour=blue,alpha=0.8);}",
        (
            "ELEMENTS{\n"
            "  0,C,0,0,0;\n"
            "  1,H,1,0,0;\n"
            "  2,H,-1,0,0;\n"
            "  3,H,0,1,0;\n"
            "  4,H,0,-1,0;\n"
            "}\n"
            "BONDS{ 0-1; 0-2; 0-3; 0-4; }"
        ),
    ]
