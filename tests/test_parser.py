"""Tests for the document parser."""

import io
import logging

import pytest

from molspec import parse, parse_file, parse_stream
from molspec.exceptions import (
    ArgumentCountError,
    BlockHeaderError,
    BlockNotClosedError,
    DuplicateIndexError,
    ErrorKind,
    LexError,
    MolSpecError,
    NumericFormatError,
    StatementSyntaxError,
    UnknownElementError,
    UnknownSymbolError,
)
from molspec.parser import MoleculeParser, ParserState
from molspec.types import BondDegree


class TestParseWater:
    """Test a complete, commented document."""

    def test_elements(self, water_text):
        mol = parse(water_text)
        assert [e.label for e in mol.elements] == ["O0", "H1", "H2"]
        assert mol.elements[1].position == (0.76, 0.59, 0.0)
        assert mol.elements[2].position == (-0.76, 0.59, 0.0)

    def test_element_aesthetics(self, water_text, table):
        mol = parse(water_text)
        oxygen, hydrogen = mol.elements[0], mol.elements[1]
        assert oxygen.colour == "#eb3c25"
        assert oxygen.radius == 60.0
        assert hydrogen.colour == table.lookup("H").colour
        assert hydrogen.radius == table.lookup("H").radius

    def test_bonds(self, water_text):
        mol = parse(water_text)
        assert [(b.index1, b.index2) for b in mol.bonds] == [(0, 1), (0, 2)]
        assert all(b.degree == BondDegree.SINGLE for b in mol.bonds)
        assert mol.bonds[0].alpha == 1.0
        assert mol.bonds[1].alpha == 0.5

    def test_symbols_canonical(self, water_text):
        """Numbered symbols such as H1 resolve to the plain symbol."""
        mol = parse(water_text)
        assert {e.symbol for e in mol.elements} == {"O", "H"}


class TestValidDocuments:
    """Test invariants over assorted valid documents."""

    def test_all_parse(self, valid_documents):
        for text in valid_documents:
            parse(text)

    def test_indices_unique(self, valid_documents):
        for text in valid_documents:
            indices = [e.index for e in parse(text).elements]
            assert len(indices) == len(set(indices))

    def test_bonds_reference_elements(self, valid_documents):
        for text in valid_documents:
            mol = parse(text)
            for bond in mol.bonds:
                assert bond.index1 != bond.index2
                assert mol.has_element(bond.index1)
                assert mol.has_element(bond.index2)

    def test_no_duplicate_bonds(self, valid_documents):
        for text in valid_documents:
            keys = [bond.key for bond in parse(text).bonds]
            assert len(keys) == len(set(keys))

    def test_deterministic(self, valid_documents):
        for text in valid_documents:
            assert parse(text) == parse(text)

    def test_empty_blocks(self):
        mol = parse("ELEMENTS{} BONDS{}")
        assert mol.num_elements == 0
        assert mol.num_bonds == 0

    def test_headers_case_insensitive(self):
        mol = parse("eLeMeNtS { 0,H,0,0,0; } bonds { }")
        assert mol.num_elements == 1

    def test_indices_need_not_be_contiguous(self):
        mol = parse("ELEMENTS{5,H,0,0,0;2,H,1,0,0;} BONDS{5-2;}")
        assert [e.index for e in mol.elements] == [5, 2]
        assert mol.bonds[0].key == frozenset((2, 5))

    def test_degrees(self):
        mol = parse(
            "ELEMENTS{0,C,0,0,0;1,C,1,0,0;2,N,2,0,0;3,O,3,0,0;}"
            "BONDS{0-1;1 triple 2;2=3;}"
        )
        assert [b.degree for b in mol.bonds] == [
            BondDegree.SINGLE, BondDegree.TRIPLE, BondDegree.DOUBLE,
        ]

    def test_content_after_bonds_ignored(self):
        """Nothing after the BONDS block is read."""
        mol = parse("ELEMENTS{0,H,0,0,0;} BONDS{} / not a comment")
        assert mol.num_elements == 1


class TestBlockErrors:
    """Test errors in the block structure."""

    def test_empty_document(self):
        with pytest.raises(BlockHeaderError) as exc_info:
            parse("")
        assert exc_info.value.block == "ELEMENTS"
        assert exc_info.value.found is None
        assert exc_info.value.line == 1

    def test_comment_only_document(self):
        with pytest.raises(BlockHeaderError) as exc_info:
            parse("// nothing\n// here")
        assert exc_info.value.line == 2

    def test_bonds_first(self):
        with pytest.raises(BlockHeaderError) as exc_info:
            parse("BONDS{} ELEMENTS{}")
        assert exc_info.value.block == "ELEMENTS"
        assert exc_info.value.found == "BONDS{"

    def test_header_without_brace(self):
        with pytest.raises(BlockHeaderError) as exc_info:
            parse("ELEMENTS;\n0,H,0,0,0;")
        assert exc_info.value.found == "ELEMENTS"
        assert exc_info.value.line == 1

    def test_missing_bonds_block(self):
        with pytest.raises(BlockHeaderError) as exc_info:
            parse("ELEMENTS{\n0,H,0,0,0;\n}")
        assert exc_info.value.block == "BONDS"
        assert exc_info.value.found is None
        assert exc_info.value.line == 3

    def test_wrong_second_header(self):
        with pytest.raises(BlockHeaderError) as exc_info:
            parse("ELEMENTS{}\nATOMS{}")
        assert exc_info.value.block == "BONDS"
        assert exc_info.value.line == 2

    def test_elements_not_closed(self):
        """End of input inside a block reports the last line."""
        with pytest.raises(BlockNotClosedError) as exc_info:
            parse("ELEMENTS{\n0,H,0,0,0;")
        assert exc_info.value.block == "ELEMENTS"
        assert exc_info.value.line == 2

    def test_bonds_not_closed(self):
        with pytest.raises(BlockNotClosedError) as exc_info:
            parse("ELEMENTS{0,H,0,0,0;1,H,1,0,0;}\nBONDS{\n0-1;\n")
        assert exc_info.value.block == "BONDS"
        assert exc_info.value.line == 4

    def test_missing_closing_brace_before_next_header(self):
        """A header inside an open block is parsed as a statement."""
        with pytest.raises(ArgumentCountError):
            parse("ELEMENTS{0,H,0,0,0;\nBONDS{}")

    def test_missing_terminator(self):
        with pytest.raises(StatementSyntaxError) as exc_info:
            parse("ELEMENTS{}\nBONDS{0-1")
        assert exc_info.value.kind is ErrorKind.SYNTAX
        assert exc_info.value.line == 2


class TestStatementErrors:
    """Test that statement errors surface with their line."""

    def test_unknown_symbol_line(self):
        text = "ELEMENTS {\n0,H,0,0,0;\n1,Qq,0,0,0;\n}\nBONDS{}"
        with pytest.raises(UnknownSymbolError) as exc_info:
            parse(text)
        assert exc_info.value.line == 3
        assert str(exc_info.value).startswith("ERROR on line 3: ")

    def test_duplicate_index_across_statements(self):
        with pytest.raises(DuplicateIndexError) as exc_info:
            parse("ELEMENTS{0,H,0,0,0;\n0,H,1,0,0;}BONDS{}")
        assert exc_info.value.index == 0
        assert exc_info.value.line == 2

    def test_bond_to_unknown_element(self):
        with pytest.raises(UnknownElementError) as exc_info:
            parse("ELEMENTS{0,H,0,0,0;}\nBONDS{\n0-1;}")
        assert exc_info.value.indices == (1,)
        assert exc_info.value.line == 3

    def test_lex_error(self):
        with pytest.raises(LexError) as exc_info:
            parse("ELEMENTS{\n0,H,0,0,0; / bad\n}BONDS{}")
        assert exc_info.value.line == 2

    def test_lex_error_before_newline(self):
        with pytest.raises(LexError) as exc_info:
            parse("ELEMENTS{ /\n0,H,0,0,0;}BONDS{}")
        assert exc_info.value.line == 1

    def test_first_error_wins(self):
        """Parsing stops at the first error in document order."""
        text = (
            "ELEMENTS{\n"
            "0,H,x,0,0;\n"
            "1,Qq,0,0,0;\n"
            "}\n"
            "BONDS{ 5-5; }"
        )
        with pytest.raises(NumericFormatError) as exc_info:
            parse(text)
        assert exc_info.value.line == 2

    def test_errors_are_molspec_errors(self):
        with pytest.raises(MolSpecError):
            parse("ELEMENTS{0,H,0,0,0;0,H,0,0,0;}BONDS{}")


class TestMoleculeParser:
    """Test the parser object and its entry points."""

    def test_state_after_parse(self):
        parser = MoleculeParser("ELEMENTS{} BONDS{}")
        assert parser.state is ParserState.START
        parser.parse()
        assert parser.state is ParserState.DONE

    def test_state_on_error(self):
        parser = MoleculeParser("ELEMENTS{} BONDS{0-1;}")
        with pytest.raises(UnknownElementError):
            parser.parse()
        assert parser.state is ParserState.IN_BONDS

    def test_single_use(self):
        parser = MoleculeParser("ELEMENTS{} BONDS{}")
        parser.parse()
        with pytest.raises(RuntimeError):
            parser.parse()

    def test_custom_table(self, small_table):
        mol = parse("ELEMENTS{0,Cl,0,0,0;} BONDS{}", table=small_table)
        assert mol.elements[0].radius == 30.0
        assert mol.elements[0].atomic_number == 17

    def test_custom_table_limits_symbols(self, small_table):
        with pytest.raises(UnknownSymbolError):
            parse("ELEMENTS{0,O,0,0,0;} BONDS{}", table=small_table)

    def test_parse_stream(self, water_text):
        mol = parse_stream(io.StringIO(water_text))
        assert mol == parse(water_text)

    def test_parse_file(self, tmp_path, water_text):
        path = tmp_path / "water.mol"
        path.write_text(water_text, encoding="utf-8")
        assert parse_file(path) == parse(water_text)
        assert parse_file(str(path)).num_bonds == 2

    def test_parse_file_logs_summary(self, tmp_path, water_text, caplog):
        path = tmp_path / "water.mol"
        path.write_text(water_text, encoding="utf-8")
        with caplog.at_level(logging.INFO, logger="molspec"):
            parse_file(path)
        assert "water.mol: 3 elements, 2 bonds" in caplog.text

    def test_parse_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "missing.mol")

    def test_parse_file_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path)
