"""Genepop parsing.

Parsing runs in two phases. :func:`tokenise_rows` sorts the raw rows into the
stacks version tag, the locus-name block and the genotype rows.
:func:`parse_records` then turns every genotype row into a
:class:`GenepopRecord` and works out the allele width shared by the dataset.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .utils import get_logger


logger = get_logger()

POP_DELIMITERS = frozenset({"Pop", "pop", "POP"})
SAMPLE_DELIMITER = " ,  "
NO_STACKS_VERSION = "No STACKS version specified"
MISSING_ALLELE = -9

GenepopSource = Union[str, Path, pd.DataFrame, pd.Series, Sequence[str]]


class GenepopFormatError(ValueError):
    """Raised when Genepop input does not follow the expected layout."""


class DelimiterFormatError(GenepopFormatError):
    """Raised when a sample ID is not separated from its genotypes by ' ,  '."""


class AlleleWidthError(GenepopFormatError):
    """Raised when genotype codes cannot be split into two equal alleles."""


@dataclass(frozen=True)
class GenepopLayout:
    stacks_version: str
    loci: Tuple[str, ...]
    data_rows: Tuple[str, ...]
    population_count: int


@dataclass(frozen=True)
class GenepopRecord:
    sample_id: str
    population: str
    genotypes: Tuple[str, ...]


@dataclass(frozen=True)
class GenepopData:
    stacks_version: str
    loci: Tuple[str, ...]
    records: Tuple[GenepopRecord, ...]
    allele_width: int

    @property
    def populations(self) -> List[str]:
        return [record.population for record in self.records]


def _clean_row(value: object) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).replace("\r", "").strip()


def load_rows(genepop: GenepopSource) -> List[str]:
    """Return the non-blank rows of a Genepop file path or pre-loaded table."""
    if isinstance(genepop, (str, Path)):
        path = Path(genepop).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Genepop file not found: {path}")
        try:
            frame = pd.read_csv(
                path,
                sep="\t",
                header=None,
                dtype=str,
                quoting=csv.QUOTE_NONE,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError as exc:
            raise GenepopFormatError(f"{path} has no rows to convert") from exc
        except pd.errors.ParserError as exc:
            raise GenepopFormatError(f"{path} is not single-column Genepop text: {exc}") from exc
        if frame.shape[1] != 1:
            raise GenepopFormatError(f"{path} contains tab characters; Genepop rows must be tab-free")
        values = frame.iloc[:, 0]
    elif isinstance(genepop, pd.DataFrame):
        if genepop.shape[1] == 0:
            raise GenepopFormatError("Genepop table has no columns")
        values = genepop.iloc[:, 0]
    elif isinstance(genepop, pd.Series):
        values = genepop
    else:
        values = list(genepop)

    rows = [_clean_row(value) for value in values]
    return [row for row in rows if row]


def expand_locus_header(rows: Sequence[str]) -> List[str]:
    """Splice a comma-delimited locus header into one row per locus name."""
    if not rows:
        raise GenepopFormatError("Genepop input is empty")
    first = rows[0]
    if first.count(",") <= 1:
        return list(rows)
    loci = [token.strip() for token in first.split(",")]
    loci = [token for token in loci if token]
    logger.info("Read %d locus names from a comma-delimited header row", len(loci))
    return loci + list(rows[1:])


def tokenise_rows(rows: Sequence[str]) -> GenepopLayout:
    rows = expand_locus_header(rows)
    stacks_version, body = rows[0], rows[1:]

    delimiters = [idx for idx, row in enumerate(body) if row in POP_DELIMITERS]
    if not delimiters:
        raise GenepopFormatError(
            "No population delimiter row ('Pop', 'pop' or 'POP') found in Genepop input"
        )

    first = delimiters[0]
    loci = tuple(row.replace("\r", "") for row in body[:first])
    data_rows = tuple(row for row in body[first:] if row not in POP_DELIMITERS)
    if not data_rows:
        raise GenepopFormatError("Genepop input has population delimiters but no individuals")

    return GenepopLayout(
        stacks_version=stacks_version,
        loci=loci,
        data_rows=data_rows,
        population_count=len(delimiters),
    )


def split_sample_row(row: str) -> Tuple[str, Tuple[str, ...]]:
    tokens = row.split(" ")
    if len(tokens) < 3 or tokens[1] != "," or tokens[2] != "":
        raise DelimiterFormatError(
            f"Genepop sampleID delimiter not in proper format in row {row!r}. "
            f"Ensure sampleIDs are separated from loci by {SAMPLE_DELIMITER!r} "
            "(space comma space space)."
        )
    return tokens[0], tuple(tokens[3:])


def population_label(sample_id: str) -> str:
    """Population prefix of a sample ID, e.g. ``BON_01`` -> ``BON``."""
    prefix, sep, _ = sample_id.partition("_")
    if not sep:
        raise GenepopFormatError(
            f"Sample ID {sample_id!r} has no '_' separating the population name from the sample number"
        )
    return prefix


def align_locus_header(
    stacks_version: str, loci: Tuple[str, ...], n_codes: int
) -> Tuple[str, Tuple[str, ...]]:
    """Match locus names to the number of genotype columns.

    When there is exactly one genotype column more than locus names, the row
    taken as the stacks version tag was really the first locus name.
    """
    if n_codes == len(loci):
        return stacks_version, loci
    if n_codes == len(loci) + 1:
        logger.info(
            "Header misalignment recovery: using %r as the first locus name (%s)",
            stacks_version,
            NO_STACKS_VERSION,
        )
        return NO_STACKS_VERSION, (stacks_version,) + loci
    raise GenepopFormatError(
        f"Individuals carry {n_codes} genotype codes but {len(loci)} locus names were found "
        f"({NO_STACKS_VERSION})"
    )


def detect_allele_width(records: Sequence[GenepopRecord]) -> int:
    width = max(len(record.genotypes[0]) for record in records)
    if width == 0 or width % 2:
        raise AlleleWidthError(
            "The length of each allele is assumed to be equal (e.g. locus 001001 with 001 for "
            f"each allele), but a max locus length of {width} was detected. Please check data."
        )
    return width


def parse_records(layout: GenepopLayout) -> GenepopData:
    records: List[GenepopRecord] = []
    for row in layout.data_rows:
        sample_id, genotypes = split_sample_row(row)
        if records and len(genotypes) != len(records[0].genotypes):
            raise GenepopFormatError(
                f"Sample {sample_id!r} has {len(genotypes)} genotype codes, "
                f"expected {len(records[0].genotypes)}"
            )
        records.append(GenepopRecord(sample_id, population_label(sample_id), genotypes))

    stacks_version, loci = align_locus_header(
        layout.stacks_version, layout.loci, len(records[0].genotypes)
    )
    return GenepopData(
        stacks_version=stacks_version,
        loci=loci,
        records=tuple(records),
        allele_width=detect_allele_width(records),
    )


def read_genepop(genepop: GenepopSource) -> GenepopData:
    return parse_records(tokenise_rows(load_rows(genepop)))


def _allele_value(text: str, code: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise GenepopFormatError(f"Genotype code {code!r} does not hold two numeric alleles")
    value = int(text)
    return MISSING_ALLELE if value == 0 else value


def decode_genotype(code: str, allele_width: int) -> Tuple[int, int]:
    """Split a genotype code into its two alleles; zero alleles become -9.

    >>> decode_genotype("001002", 6)
    (1, 2)
    """
    half = allele_width // 2
    if len(code) > allele_width:
        raise AlleleWidthError(
            f"Genotype code {code!r} is longer than the detected locus length of {allele_width}"
        )
    if len(code) < allele_width:
        if code and code.strip("0") == "":
            return MISSING_ALLELE, MISSING_ALLELE
        raise AlleleWidthError(
            f"Genotype code {code!r} is shorter than the detected locus length of {allele_width}"
        )
    return _allele_value(code[:half], code), _allele_value(code[half:], code)


def decode_alleles(data: GenepopData) -> np.ndarray:
    """Allele matrix with two rows per individual (first then second allele)."""
    n_loci = len(data.loci)
    first = np.empty((len(data.records), n_loci), dtype=int)
    second = np.empty_like(first)
    for idx, record in enumerate(data.records):
        for locus, code in enumerate(record.genotypes):
            first[idx, locus], second[idx, locus] = decode_genotype(code, data.allele_width)

    alleles = np.empty((2 * len(data.records), n_loci), dtype=int)
    alleles[0::2] = first
    alleles[1::2] = second
    return alleles
