from __future__ import annotations

from datetime import datetime
import logging
from pathlib import Path
from typing import Optional

from .config import ConfigError, ConversionSettings
from .converter import ConversionResult, genepop_structure
from .utils import get_logger


class ConversionRun:
    """Run one configured conversion, optionally logging to a per-run file."""

    def __init__(self, settings: ConversionSettings, log_dir: Optional[Path] = None):
        self.settings = settings
        self.log_dir = log_dir
        self.logger = get_logger()

    def _attach_log_file(self, dry_run: bool) -> Optional[logging.Handler]:
        if self.log_dir is None:
            return None
        self.log_dir.mkdir(parents=True, exist_ok=True)
        suffix = "_dryrun" if dry_run else ""
        session_name = f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}{suffix}"
        handler = logging.FileHandler(self.log_dir / f"{session_name}.log", encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s - %(message)s", "%H:%M:%S")
        )
        self.logger.addHandler(handler)
        return handler

    def run(self, dry_run: bool = False) -> ConversionResult:
        settings = self.settings
        if not dry_run and settings.output is None:
            raise ConfigError("An output path must be set unless running with --dry-run")

        log_handler = self._attach_log_file(dry_run)
        try:
            self.logger.info(
                "Run started (dry_run=%s): %s -> %s",
                dry_run,
                settings.genepop,
                settings.output,
            )
            result = genepop_structure(
                settings.genepop,
                popgroup=settings.popgroup,
                locusnames=settings.locusnames,
                path=None if dry_run else settings.output,
            )
            if dry_run:
                self.logger.info(
                    "[dry-run] %d individuals, %d loci; nothing written",
                    result.n_individuals,
                    len(result.loci),
                )
            self.logger.info("Run complete")
            return result
        finally:
            if log_handler is not None:
                self.logger.removeHandler(log_handler)
                log_handler.close()
