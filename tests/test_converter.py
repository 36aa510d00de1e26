import pandas as pd
import pytest

from conftest import EXPECTED_DEFAULT_LINES, GENEPOP_ROWS, write_rows
from genepop_structure import (
    AlleleWidthError,
    DelimiterFormatError,
    GroupingMismatchWarning,
    genepop_structure,
)


def test_convert_file_with_default_groups(genepop_file, tmp_path):
    output = tmp_path / "out.str"

    result = genepop_structure(genepop_file, path=output)

    assert result.output_path == output
    assert output.read_text(encoding="utf-8").splitlines() == EXPECTED_DEFAULT_LINES
    assert list(result.lines) == EXPECTED_DEFAULT_LINES
    assert result.stacks_version == GENEPOP_ROWS[0]
    assert result.used_default_groups


def test_two_rows_per_individual(genepop_file):
    result = genepop_structure(genepop_file)

    assert len(result.lines) == 2 * result.n_individuals
    assert [line.split(" ")[0] for line in result.lines[::2]] == [
        record.sample_id for record in result.records
    ]


def test_convert_with_locus_names(genepop_file, tmp_path):
    output = tmp_path / "out.str"

    genepop_structure(genepop_file, locusnames=True, path=output)

    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "  Loc1 Loc2 Loc3"
    assert lines[1:] == EXPECTED_DEFAULT_LINES


def test_convert_with_popgroup_file(genepop_file, popgroup_file):
    result = genepop_structure(genepop_file, popgroup=popgroup_file)

    assert not result.used_default_groups
    assert [line.split(" ")[1] for line in result.lines] == ["North"] * 4 + ["South"] * 4


def test_convert_with_incomplete_popgroup_falls_back(genepop_file):
    table = pd.DataFrame({"pop": ["BON"], "group": ["North"]})

    with pytest.warns(GroupingMismatchWarning):
        result = genepop_structure(genepop_file, popgroup=table)

    assert list(result.lines) == EXPECTED_DEFAULT_LINES


def test_convert_from_dataframe():
    frame = pd.DataFrame({"data": ["Loc1", "Loc2", "Pop", "BON_01 ,  001002 003004"]})

    result = genepop_structure(frame)

    assert list(result.lines) == ["BON_01 1 1 3", "BON_01 1 2 4"]


def test_bad_delimiter_writes_nothing(tmp_path):
    rows = GENEPOP_ROWS[:5] + ["BON_01, 001001 002003 000000"]
    source = write_rows(tmp_path / "bad.gen", rows)
    output = tmp_path / "out.str"

    with pytest.raises(DelimiterFormatError):
        genepop_structure(source, path=output)

    assert not output.exists()


def test_odd_width_writes_nothing(tmp_path):
    rows = ["title", "Loc1", "Pop", "BON_01 ,  0010010"]
    output = tmp_path / "out.str"

    with pytest.raises(AlleleWidthError, match="7"):
        genepop_structure(rows, path=output)

    assert not output.exists()


def test_failed_conversion_keeps_previous_output(tmp_path):
    output = tmp_path / "out.str"
    output.write_text("previous\n", encoding="utf-8")

    with pytest.raises(AlleleWidthError):
        genepop_structure(["title", "Loc1", "Pop", "BON_01 ,  001"], path=output)

    assert output.read_text(encoding="utf-8") == "previous\n"
