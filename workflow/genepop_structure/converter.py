from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .genepop import (
    GenepopRecord,
    GenepopSource,
    decode_alleles,
    load_rows,
    parse_records,
    tokenise_rows,
)
from .grouping import PopgroupSource, resolve_groups
from .structure import structure_lines, write_structure
from .utils import get_logger, step_logger


logger = get_logger()


@dataclass(frozen=True)
class ConversionResult:
    lines: Tuple[str, ...]
    stacks_version: str
    loci: Tuple[str, ...]
    records: Tuple[GenepopRecord, ...]
    group_labels: Tuple[str, ...]
    used_default_groups: bool
    output_path: Optional[Path] = None

    @property
    def n_individuals(self) -> int:
        return len(self.records)


def genepop_structure(
    genepop: GenepopSource,
    popgroup: Optional[PopgroupSource] = None,
    locusnames: bool = False,
    path: Optional[Path | str] = None,
) -> ConversionResult:
    """Convert Genepop data to STRUCTURE format.

    ``genepop`` is a path to Genepop text or a pre-loaded single-column table.
    ``popgroup`` optionally maps population names (the sample ID prefix before
    ``_``) to STRUCTURE groups; without it populations are numbered 1..k.
    ``locusnames`` keeps the locus-name header row. The file at ``path`` is
    only written once every row has been converted.
    """
    with step_logger("Read Genepop input"):
        rows = load_rows(genepop)

    with step_logger("Parse Genepop rows"):
        layout = tokenise_rows(rows)
        data = parse_records(layout)
        logger.info(
            "Parsed %d individuals in %d population blocks across %d loci (allele length %d)",
            len(data.records),
            layout.population_count,
            len(data.loci),
            data.allele_width // 2,
        )

    with step_logger("Decode alleles"):
        alleles = decode_alleles(data)

    with step_logger("Resolve STRUCTURE groups"):
        assignment = resolve_groups(data.populations, popgroup)

    lines = structure_lines(data, assignment.labels, alleles, locusnames=locusnames)

    output_path = None
    if path is not None:
        with step_logger("Write STRUCTURE file"):
            output_path = write_structure(lines, path)
        logger.info("STRUCTURE file saved to %s", output_path)

    return ConversionResult(
        lines=tuple(lines),
        stacks_version=data.stacks_version,
        loci=data.loci,
        records=data.records,
        group_labels=assignment.labels,
        used_default_groups=assignment.used_default,
        output_path=output_path,
    )
