from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

import numpy as np

from .genepop import GenepopData
from .utils import write_lines


def header_line(loci: Sequence[str]) -> str:
    # two blank columns for the sample ID and group
    return " ".join(["", "", *loci])


def structure_lines(
    data: GenepopData,
    groups: Sequence[str],
    alleles: np.ndarray,
    locusnames: bool = False,
) -> List[str]:
    """Lay out two STRUCTURE rows per individual, optionally under a locus header."""
    if alleles.shape[0] != 2 * len(data.records):
        raise ValueError(
            f"Expected {2 * len(data.records)} allele rows, got {alleles.shape[0]}"
        )

    lines: List[str] = [header_line(data.loci)] if locusnames else []
    for idx, record in enumerate(data.records):
        for row in alleles[2 * idx : 2 * idx + 2]:
            lines.append(" ".join([record.sample_id, groups[idx], *(str(value) for value in row)]))
    return lines


def write_structure(lines: Sequence[str], path: Path | str) -> Path:
    output = Path(path).expanduser()
    write_lines(output, lines)
    return output
