"""
Command-line interface.

Usage:
    python -m molspec FILE [--table CSV] [-v] [--log-file PATH]

Parses a molecule specification file and prints its elements and bonds.
Exit status is 0 on success, 1 if the document is invalid and 2 if a file
cannot be read or decoded, or the reference table is malformed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from molspec.elements import ReferenceTable
from molspec.exceptions import MolSpecError, ReferenceTableError
from molspec.logging_config import setup_logging
from molspec.parser import parse_file
from molspec.types import Molecule

logger = logging.getLogger("molspec.cli")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="molspec",
        description="Validate a molecule specification (ELEMENTS/BONDS) file.",
    )
    parser.add_argument("file", type=Path, help="Path to the specification file.")
    parser.add_argument(
        "--table",
        type=Path,
        default=None,
        help="CSV reference table to use instead of the bundled one.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every statement as it is accepted.",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write log output to this file.",
    )
    return parser


def format_molecule(mol: Molecule) -> str:
    """Render a one-line-per-record summary of a molecule."""
    lines = []
    for element in mol.elements:
        x, y, z = element.position
        lines.append(
            f"{element.label:<6} Z={element.atomic_number:<3} "
            f"pos=({x:g}, {y:g}, {z:g}) radius={element.radius:g} "
            f"colour={element.colour}"
        )
    for bond in mol.bonds:
        lines.append(
            f"{bond.index1}-{bond.index2:<4} {str(bond.degree):<6} "
            f"alpha={bond.alpha:g} colour={bond.colour}"
        )
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        table = ReferenceTable.from_csv(args.table) if args.table else None
        molecule = parse_file(args.file, table)
    except (OSError, UnicodeDecodeError, ReferenceTableError) as e:
        logger.error("%s", e)
        return 2
    except MolSpecError as e:
        logger.error("%s", e)
        return 1

    print(format_molecule(molecule))
    logger.info("Molecule generation successful!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
