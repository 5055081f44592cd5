"""
Data Models
===========
Pydantic models for structured schematic analysis output.
All result models are immutable and serializable to JSON.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


# ─── Span Model ───────────────────────────────────────────────────────────────


class Span(BaseModel):
    """
    Half-open interval [start, end) of offsets within a single line.
    Used for both byte offsets and character (code point) offsets.
    """
    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def check_order(self) -> Span:
        if self.end < self.start:
            raise ValueError(
                f"Span end ({self.end}) is before start ({self.start})"
            )
        return self

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, index: int) -> bool:
        return self.start <= index < self.end

    def grown_by_one(self) -> Span:
        """Widen by one on each side, saturating at zero on the left."""
        return Span(start=max(self.start - 1, 0), end=self.end + 1)


# ─── Schematic Models ─────────────────────────────────────────────────────────


class PartNumber(BaseModel):
    """
    A run of digits that touches at least one symbol, including diagonally.
    `char_span` is the canonical span for adjacency; `byte_span` refers to
    the UTF-8 encoding of the line and is kept for traceability.
    """
    model_config = ConfigDict(frozen=True)

    value: int = Field(ge=0)
    line_index: int = Field(ge=0)
    byte_span: Span
    char_span: Span

    def is_neighboring_char(self, line_index: int, char_index: int) -> bool:
        """
        Whether a character at the given line and character index touches
        this part number. Diagonal neighbours are included.
        """
        if line_index == self.line_index:
            return (
                char_index == self.char_span.start - 1
                or char_index == self.char_span.end
            )
        if abs(line_index - self.line_index) == 1:
            return char_index in self.char_span.grown_by_one()
        return False


class Gear(BaseModel):
    """A `*` symbol with exactly two neighbouring part numbers."""
    model_config = ConfigDict(frozen=True)

    line_index: int = Field(ge=0)
    char_index: int = Field(ge=0)
    byte_index: int = Field(ge=0)
    neighbors: tuple[PartNumber, PartNumber]

    @computed_field
    @property
    def gear_ratio(self) -> int:
        return self.neighbors[0].value * self.neighbors[1].value


class Schematic(BaseModel):
    """
    Complete output of a schematic parse.
    Both collections are in discovery order (line-major, then left-to-right).
    """
    model_config = ConfigDict(frozen=True)

    part_numbers: list[PartNumber] = Field(default_factory=list)
    gears: list[Gear] = Field(default_factory=list)


# ─── Grid Information ─────────────────────────────────────────────────────────


class GridInfo(BaseModel):
    """Shape and content statistics of a schematic document."""
    line_count: int = 0
    empty_line_count: int = 0
    max_width_chars: int = 0
    max_width_bytes: int = 0
    multibyte_line_count: int = 0
    digit_run_count: int = 0
    symbol_count: int = 0
    gear_candidate_count: int = Field(
        default=0,
        description="Number of `*` characters, whether or not they are gears"
    )


# ─── Report / Solve Result Models ─────────────────────────────────────────────


class SchematicReport(BaseModel):
    """The two puzzle answers plus the counts they were derived from."""
    part_number_count: int = 0
    part_number_sum: int = 0
    gear_count: int = 0
    gear_ratio_sum: int = 0


class SourceMetadata(BaseModel):
    """Metadata about the input file."""
    name: str = ""
    source_path: str = ""
    file_hash: str = ""
    file_size_bytes: int = 0
    line_count: int = 0


class ParseVersion(BaseModel):
    """Version tracking for a solve run."""
    parser_version: str = "1.0.0"
    parse_timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class SolveResult(BaseModel):
    """
    Complete output of a solve run.
    This is the top-level JSON structure printed by `solve --json-output`.
    """
    source: SourceMetadata
    parse_version: ParseVersion
    schematic: Schematic
    report: SchematicReport
