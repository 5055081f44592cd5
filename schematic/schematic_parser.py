"""
Schematic Parser
================
Finds part numbers and gears in an engine schematic.

A part number is a run of digits with a symbol (anything other than a digit
or `.`) in one of the surrounding positions, diagonals included. A gear is a
`*` that touches exactly two part numbers.

Usage:
    schematic = SchematicParser().parse(document)
    total = sum(part.value for part in schematic.part_numbers)
"""

from __future__ import annotations

import bisect
import logging
from collections import defaultdict

from .errors import MalformedNumberError
from .models import Gear, PartNumber, Schematic, Span
from .scanner import (
    GEAR_PATTERN,
    NUMBER_PATTERN,
    char_offsets,
    char_span_from_byte_span,
    encode_line,
    has_adjacent_symbol,
    split_lines,
)

logger = logging.getLogger(__name__)

# Unsigned 64 bit
MAX_PART_NUMBER = 2**64 - 1


class PartNumberIndex:
    """
    Part numbers grouped by line, each group ordered by character start.

    Spans on one line never overlap, so both starts and ends are ascending
    within a group and the parts near a column can be found by bisection.
    """

    def __init__(self, part_numbers: list[PartNumber]):
        self._parts: dict[int, list[PartNumber]] = defaultdict(list)
        for part in part_numbers:
            self._parts[part.line_index].append(part)
        self._starts = {
            line_index: [part.char_span.start for part in parts]
            for line_index, parts in self._parts.items()
        }

    def candidates(self, line_index: int, char_index: int) -> list[PartNumber]:
        """
        Part numbers on the line above, the same line and the line below
        whose span, widened by one, covers `char_index`. Returned in
        discovery order.
        """
        found: list[PartNumber] = []
        for target in (line_index - 1, line_index, line_index + 1):
            parts = self._parts.get(target)
            if not parts:
                continue
            # parts[:upper] start at or before char_index + 1
            upper = bisect.bisect_right(self._starts[target], char_index + 1)
            lower = upper
            while lower > 0 and parts[lower - 1].char_span.end >= char_index:
                lower -= 1
            found.extend(parts[lower:upper])
        return found

    def neighbors_of(self, line_index: int, char_index: int) -> list[PartNumber]:
        return [
            part for part in self.candidates(line_index, char_index)
            if part.is_neighboring_char(line_index, char_index)
        ]


class SchematicParser:
    """
    Two-pass parser over a schematic grid.

    Pass 1 collects part numbers, pass 2 matches every `*` against them.
    The parser holds no state between calls to `parse`.
    """

    def __init__(self, max_part_number: int = MAX_PART_NUMBER):
        self.max_part_number = max_part_number

    def parse(self, document: str) -> Schematic:
        """
        Parse a schematic document.

        Args:
            document: The full schematic text.

        Returns:
            Schematic with all part numbers and gears in discovery order.

        Raises:
            MalformedNumberError: If a digit run is not a supported number.
        """
        lines = split_lines(document)

        part_numbers = self._find_part_numbers(lines)
        logger.info(f"Found {len(part_numbers)} part numbers in {len(lines)} lines")

        gears = self._find_gears(lines, part_numbers)
        logger.info(f"Found {len(gears)} gears")

        return Schematic(part_numbers=part_numbers, gears=gears)

    def _find_part_numbers(self, lines: list[str]) -> list[PartNumber]:
        part_numbers: list[PartNumber] = []

        for line_index, line in enumerate(lines):
            offsets = char_offsets(line)
            for match in NUMBER_PATTERN.finditer(encode_line(line)):
                text = match.group().decode("ascii")
                value = self._parse_value(line, text)

                # The matcher gives byte offsets; adjacency needs characters.
                byte_span = Span(start=match.start(), end=match.end())
                char_span = char_span_from_byte_span(line, byte_span, offsets)

                if not has_adjacent_symbol(lines, line_index, char_span):
                    continue

                part = PartNumber(
                    value=value,
                    line_index=line_index,
                    byte_span=byte_span,
                    char_span=char_span,
                )
                logger.debug(
                    f"Part number {value} at line {line_index}, "
                    f"chars {char_span.start}..{char_span.end}"
                )
                part_numbers.append(part)

        return part_numbers

    def _find_gears(
        self, lines: list[str], part_numbers: list[PartNumber]
    ) -> list[Gear]:
        gears: list[Gear] = []
        index = PartNumberIndex(part_numbers)

        for line_index, line in enumerate(lines):
            offsets = None
            for match in GEAR_PATTERN.finditer(encode_line(line)):
                if offsets is None:
                    offsets = char_offsets(line)
                byte_index = match.start()
                char_index = offsets[byte_index]

                neighbors = index.neighbors_of(line_index, char_index)
                if len(neighbors) != 2:
                    continue

                gear = Gear(
                    line_index=line_index,
                    char_index=char_index,
                    byte_index=byte_index,
                    neighbors=(neighbors[0], neighbors[1]),
                )
                logger.debug(
                    f"Gear at line {line_index}, char {char_index}: "
                    f"{neighbors[0].value} * {neighbors[1].value}"
                )
                gears.append(gear)

        return gears

    def _parse_value(self, line: str, text: str) -> int:
        try:
            value = int(text)
        except ValueError as e:
            # Digit runs past the interpreter's int conversion limit
            raise MalformedNumberError(line, text, str(e)) from e

        if value > self.max_part_number:
            raise MalformedNumberError(
                line, text, f"exceeds maximum of {self.max_part_number}"
            )
        return value


def parse_schematic(document: str) -> Schematic:
    """Parse a document with the default parser settings."""
    return SchematicParser().parse(document)
