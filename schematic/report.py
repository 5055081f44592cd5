"""
Report Engine
=============
Derives the puzzle answers from a parsed schematic:
    - Part 1: sum of all part numbers
    - Part 2: sum of all gear ratios
"""

from __future__ import annotations

import logging

from .models import Schematic, SchematicReport

logger = logging.getLogger(__name__)


class ReportEngine:
    """
    Summarizes a parsed schematic into a SchematicReport.
    """

    def build(self, schematic: Schematic) -> SchematicReport:
        """
        Compute counts and sums for a schematic.

        Args:
            schematic: The parsed schematic.

        Returns:
            SchematicReport with both answers.
        """
        report = SchematicReport(
            part_number_count=len(schematic.part_numbers),
            part_number_sum=sum(part.value for part in schematic.part_numbers),
            gear_count=len(schematic.gears),
            gear_ratio_sum=sum(gear.gear_ratio for gear in schematic.gears),
        )

        logger.info(f"(Part 1) Sum of all part numbers: {report.part_number_sum}")
        logger.info(f"(Part 2) Sum of all gear ratios: {report.gear_ratio_sum}")
        logger.debug(
            f"{report.part_number_count} part numbers, {report.gear_count} gears"
        )

        return report
