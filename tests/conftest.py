"""Shared fixtures for the Genepop -> STRUCTURE tests."""

from pathlib import Path
from typing import List

import pytest


GENEPOP_ROWS: List[str] = [
    "Stacks version 1.44; Genepop version 4.1.3; March 2017",
    "Loc1",
    "Loc2",
    "Loc3",
    "Pop",
    "BON_01 ,  001001 002003 000000",
    "BON_02 ,  001002 003003 004004",
    "Pop",
    "GRO_01 ,  002002 000000 001004",
    "GRO_02 ,  001001 002002 003004",
]

EXPECTED_DEFAULT_LINES: List[str] = [
    "BON_01 1 1 2 -9",
    "BON_01 1 1 3 -9",
    "BON_02 1 1 3 4",
    "BON_02 1 2 3 4",
    "GRO_01 2 2 -9 1",
    "GRO_01 2 2 -9 4",
    "GRO_02 2 1 2 3",
    "GRO_02 2 1 2 4",
]


def write_rows(path: Path, rows: List[str], newline: str = "\n") -> Path:
    path.write_text(newline.join(rows) + newline, encoding="utf-8")
    return path


@pytest.fixture
def genepop_rows() -> List[str]:
    return list(GENEPOP_ROWS)


@pytest.fixture
def genepop_file(tmp_path: Path) -> Path:
    return write_rows(tmp_path / "example_genepop.txt", GENEPOP_ROWS)


@pytest.fixture
def popgroup_file(tmp_path: Path) -> Path:
    path = tmp_path / "popgroups.csv"
    path.write_text("population,group\nBON,North\nGRO,South\n", encoding="utf-8")
    return path
