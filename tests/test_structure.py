import numpy as np
import pytest

from genepop_structure.genepop import decode_alleles, read_genepop
from genepop_structure.structure import header_line, structure_lines, write_structure


def test_header_line_is_indented_by_two_spaces():
    assert header_line(["Loc1", "Loc2"]) == "  Loc1 Loc2"


def test_structure_lines_example_scenario():
    data = read_genepop(["Loc1", "Loc2", "Pop", "BON_01 ,  001002 003004"])

    lines = structure_lines(data, ["1"], decode_alleles(data))

    assert [line.split(" ") for line in lines] == [
        ["BON_01", "1", "1", "3"],
        ["BON_01", "1", "2", "4"],
    ]


def test_structure_lines_with_locus_header():
    data = read_genepop(["Loc1", "Loc2", "Pop", "BON_01 ,  001002 003004"])

    lines = structure_lines(data, ["North"], decode_alleles(data), locusnames=True)

    assert lines == ["  Loc1 Loc2", "BON_01 North 1 3", "BON_01 North 2 4"]


def test_structure_lines_checks_allele_rows():
    data = read_genepop(["Loc1", "Loc2", "Pop", "BON_01 ,  001002 003004"])

    with pytest.raises(ValueError):
        structure_lines(data, ["1"], np.zeros((1, 2), dtype=int))


def test_write_structure_creates_parents(tmp_path):
    output = write_structure(["a 1 1", "a 1 2"], tmp_path / "nested" / "out.str")

    assert output.read_text(encoding="utf-8") == "a 1 1\na 1 2\n"
    assert not (tmp_path / "nested" / "out.str.tmp").exists()
