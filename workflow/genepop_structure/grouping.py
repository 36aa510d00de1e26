from __future__ import annotations

import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union

import pandas as pd

from .utils import get_logger


logger = get_logger()

PopgroupSource = Union[str, Path, pd.DataFrame]


class GroupingMismatchWarning(UserWarning):
    """Issued when a grouping table does not cover every population in the data."""


@dataclass(frozen=True)
class GroupAssignment:
    labels: Tuple[str, ...]
    used_default: bool
    missing_populations: Tuple[str, ...] = ()


def _format_group(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def load_popgroup(popgroup: PopgroupSource) -> Dict[str, str]:
    """Read a two-column population -> group table into a mapping.

    Paths are read as CSV with a header row. Later rows win when a population
    is listed twice.
    """
    if isinstance(popgroup, (str, Path)):
        path = Path(popgroup).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Population grouping file not found: {path}")
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    elif isinstance(popgroup, pd.DataFrame):
        frame = popgroup
    else:
        raise TypeError(
            f"popgroup must be a path or a pandas DataFrame, not {type(popgroup).__name__}"
        )

    if frame.shape[1] < 2:
        raise ValueError(
            "Population grouping table needs two columns: population name and group"
        )

    mapping: Dict[str, str] = {}
    for population, group in zip(frame.iloc[:, 0], frame.iloc[:, 1]):
        mapping[str(population).strip()] = _format_group(group)
    return mapping


def default_group_codes(populations: Sequence[str]) -> Dict[str, str]:
    """Number the distinct population names 1..k in sorted order."""
    return {
        population: str(code)
        for code, population in enumerate(sorted(set(populations)), start=1)
    }


def fallback_to_default_groups(
    populations: Sequence[str], missing: Sequence[str]
) -> GroupAssignment:
    """Grouping-mismatch rule: every individual falls back to default codes."""
    message = (
        "Population levels missing from popgroup input (%s). "
        "STRUCTURE groups now set to default population levels" % ", ".join(missing)
    )
    logger.warning(message)
    warnings.warn(message, GroupingMismatchWarning, stacklevel=3)
    codes = default_group_codes(populations)
    return GroupAssignment(
        labels=tuple(codes[population] for population in populations),
        used_default=True,
        missing_populations=tuple(missing),
    )


def resolve_groups(
    populations: Sequence[str], popgroup: Optional[PopgroupSource] = None
) -> GroupAssignment:
    if popgroup is None:
        codes = default_group_codes(populations)
        return GroupAssignment(
            labels=tuple(codes[population] for population in populations),
            used_default=True,
        )

    table = load_popgroup(popgroup)
    missing = sorted(set(populations) - set(table))
    if missing:
        return fallback_to_default_groups(populations, missing)

    logger.info("Assigned %d populations to groups from popgroup table", len(set(populations)))
    return GroupAssignment(
        labels=tuple(table[population] for population in populations),
        used_default=False,
    )
