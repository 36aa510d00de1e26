#!/usr/bin/env python
"""Quick health check for the inputs named in a converter config."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, Optional

import yaml


OK_MARK = "[OK]"
MISS_MARK = "[MISSING]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate expected inputs for the Genepop converter")
    parser.add_argument(
        "--config",
        default="config/genepop_structure.yaml",
        type=Path,
        help="Path to the converter configuration file",
    )
    return parser


def load_config(path: Path) -> dict:
    if not path.exists():
        raise SystemExit(f"Config file not found: {path}")
    return yaml.safe_load(path.read_text()) or {}


def check_files(paths: Iterable[tuple[str, Optional[Path]]]) -> bool:
    ok = True
    for label, path in paths:
        if path and path.exists():
            print(f"{OK_MARK} {label}: {path}")
        else:
            print(f"{MISS_MARK} {label}: {path if path else 'not set'}")
            ok = False
    return ok


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    convert = config.get("convert", {}) or {}
    root = (args.config.parent / config.get("project_root", ".")).resolve()

    def resolve(key: str) -> Optional[Path]:
        value = convert.get(key)
        return root / value if value else None

    print("Checking required input files...")
    inputs_ok = check_files([("Genepop input", resolve("genepop"))])

    if convert.get("popgroup"):
        print("\nChecking optional population grouping table...")
        inputs_ok = check_files([("Population groups", resolve("popgroup"))]) and inputs_ok

    return 0 if inputs_ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
