from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .config import ConfigError, ConversionSettings, load_config
from .pipeline import ConversionRun
from .utils import get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert Genepop files to STRUCTURE format")
    parser.add_argument(
        "--config",
        help="Path to a YAML configuration file with a 'convert' section",
    )
    parser.add_argument("--genepop", help="Genepop input file")
    parser.add_argument(
        "--popgroup",
        help="CSV mapping population names (sample ID prefix before '_') to STRUCTURE groups",
    )
    parser.add_argument("--output", help="STRUCTURE output file")
    parser.add_argument(
        "--locusnames",
        action="store_true",
        default=None,
        help="Write the locus names as the first output row",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and validate the input without writing output",
    )
    return parser


def resolve_settings(args: argparse.Namespace):
    log_dir = None
    if args.config:
        config = load_config(args.config)
        settings = ConversionSettings.from_config(config)
        log_dir = config.path("log_dir")
    elif args.genepop:
        settings = ConversionSettings(genepop=Path(args.genepop))
    else:
        raise ConfigError("Either --config or --genepop must be given")

    overrides = {}
    if args.genepop:
        overrides["genepop"] = Path(args.genepop)
    if args.popgroup:
        overrides["popgroup"] = Path(args.popgroup)
    if args.output:
        overrides["output"] = Path(args.output)
    if args.locusnames is not None:
        overrides["locusnames"] = args.locusnames
    return dataclasses.replace(settings, **overrides), log_dir


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = get_logger()

    try:
        settings, log_dir = resolve_settings(args)
        ConversionRun(settings, log_dir=log_dir).run(dry_run=args.dry_run)
    except (ConfigError, ValueError, FileNotFoundError) as exc:
        logger.error(str(exc))
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
