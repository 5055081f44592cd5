"""
Solver Engine
=============
Main orchestrator that combines file reading, schematic parsing and
report building into a complete solve pipeline.

Usage:
    engine = SolverEngine(config)
    result = engine.solve("path/to/schematic.txt")
    # result is a SolveResult with the schematic and both answers

Architecture:
    File → bytes → text → SchematicParser → Schematic →
    ReportEngine → SolveResult
"""

from __future__ import annotations

import hashlib
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import __version__
from .models import ParseVersion, SolveResult, SourceMetadata
from .report import ReportEngine
from .scanner import split_lines
from .schematic_parser import MAX_PART_NUMBER, SchematicParser

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class EngineConfig:
    """Configuration for the solver engine."""

    # Input
    encoding: str = "utf-8"

    # Parsing
    max_part_number: int = MAX_PART_NUMBER

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


class SolverEngine:
    """
    Main schematic solving engine.

    Orchestrates the full pipeline:
        1. File reading and metadata
        2. Schematic parsing (part numbers, gears)
        3. Report building (both answers)
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        # Configure root logger for the schematic package
        package_logger = logging.getLogger("schematic")
        package_logger.setLevel(log_level)

        # Console handler
        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(console)
        else:
            for handler in package_logger.handlers:
                handler.setLevel(log_level)

        # File handler, at most one per log file
        if self.config.log_file and not self._has_file_handler(
            package_logger, self.config.log_file
        ):
            log_dir = Path(self.config.log_file).parent
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                self.config.log_file, encoding="utf-8"
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(file_handler)

    @staticmethod
    def _has_file_handler(package_logger: logging.Logger, log_file: str) -> bool:
        path = os.path.realpath(log_file)
        return any(
            isinstance(handler, logging.FileHandler)
            and os.path.realpath(handler.baseFilename) == path
            for handler in package_logger.handlers
        )

    def solve(self, input_path: str) -> SolveResult:
        """
        Solve the schematic stored in a file.

        Args:
            input_path: Path to the schematic text file.

        Returns:
            SolveResult containing the schematic, report and metadata.

        Raises:
            FileNotFoundError: If the input file doesn't exist.
            RuntimeError: If the input cannot be decoded.
            MalformedNumberError: If a digit run is not a supported number.
        """
        input_path = os.path.abspath(input_path)

        if not os.path.isfile(input_path):
            raise FileNotFoundError(f"Input file not found: {input_path}")

        start_time = time.time()
        logger.info(f"Starting solve of: {input_path}")

        # ── Step 1: Read input ────────────────────────────────────────
        raw = Path(input_path).read_bytes()
        try:
            document = raw.decode(self.config.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise RuntimeError(
                f"Could not decode {input_path} as {self.config.encoding}: {e}"
            ) from e

        source = SourceMetadata(
            name=Path(input_path).stem,
            source_path=input_path,
            file_hash=hashlib.sha256(raw).hexdigest(),
            file_size_bytes=len(raw),
            line_count=len(split_lines(document)),
        )

        # ── Step 2: Parse schematic ───────────────────────────────────
        logger.info("Phase 1: Schematic parsing")
        parser = SchematicParser(max_part_number=self.config.max_part_number)
        schematic = parser.parse(document)

        # ── Step 3: Report ────────────────────────────────────────────
        logger.info("Phase 2: Report")
        report = ReportEngine().build(schematic)

        elapsed = time.time() - start_time
        logger.info(f"Solve complete in {elapsed:.2f}s")

        return SolveResult(
            source=source,
            parse_version=ParseVersion(parser_version=__version__),
            schematic=schematic,
            report=report,
        )
