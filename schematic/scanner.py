"""
Grid Scanner
============
Low-level helpers for scanning a schematic grid: line splitting, byte to
character offset conversion, and symbol adjacency predicates.

All adjacency math works in characters (code points). Byte offsets only
appear at the boundary, where the matchers run over each line's UTF-8 bytes.
"""

from __future__ import annotations

import re
import string
from typing import Sequence

from .models import GridInfo, Span

# ─── Matchers ─────────────────────────────────────────────────────────────────

# Maximal runs of ASCII digits
NUMBER_PATTERN = re.compile(rb"[0-9]+")

# Candidate gear positions
GEAR_PATTERN = re.compile(rb"\*")

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogatepass"

_DIGITS = frozenset(string.digits)


# ─── Lines and Offsets ────────────────────────────────────────────────────────


def split_lines(document: str) -> list[str]:
    """
    Split a document into lines on `\\n`, stripping a trailing `\\r`.

    A final line terminator does not produce an extra empty line, but empty
    lines elsewhere are kept so that line indices stay aligned.
    """
    lines = document.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def encode_line(line: str) -> bytes:
    return line.encode(ENCODING, ENCODING_ERRORS)


def char_offsets(line: str) -> list[int]:
    """
    Build a lookup table from byte offset to character offset for `line`,
    in a single walk over its characters.

    The table has one entry per byte of the encoded line plus one for the
    end of the line. Entries inside a multi-byte character point at that
    character.
    """
    raw_length = len(encode_line(line))
    if raw_length == len(line):
        return list(range(raw_length + 1))

    offsets: list[int] = []
    for char_index, char in enumerate(line):
        offsets.extend([char_index] * len(encode_line(char)))
    offsets.append(len(line))
    return offsets


def byte_to_char_index(line: str, byte_index: int) -> int:
    """
    Convert a byte offset into the UTF-8 encoding of `line` to the offset
    of the same position in characters.

    `byte_index` must fall on a character boundary.
    """
    return char_offsets(line)[byte_index]


def char_span_from_byte_span(
    line: str, byte_span: Span, offsets: list[int] | None = None
) -> Span:
    """
    Convert a span of byte offsets into the matching span of characters.
    Pass `offsets` from `char_offsets` to reuse one table for a whole line.
    """
    if offsets is None:
        offsets = char_offsets(line)
    return Span(start=offsets[byte_span.start], end=offsets[byte_span.end])


# ─── Symbol Predicates ────────────────────────────────────────────────────────


def is_symbol(char: str) -> bool:
    """Any character that is neither an ASCII digit nor a dot is a symbol."""
    return char not in _DIGITS and char != "."


def is_symbol_left(line: str, char_span: Span) -> bool:
    """Whether the character just left of the span is a symbol."""
    if char_span.start == 0:
        return False
    return is_symbol(line[char_span.start - 1])


def is_symbol_right(line: str, char_span: Span) -> bool:
    """Whether the character just right of the span is a symbol."""
    if char_span.end >= len(line):
        return False
    return is_symbol(line[char_span.end])


def is_symbol_in_window(line: str, char_span: Span) -> bool:
    """
    Whether `line` has a symbol within the span widened by one on each side.
    Columns past the end of `line` count as empty.
    """
    window = char_span.grown_by_one()
    return any(is_symbol(char) for char in line[window.start:window.end])


def _is_symbol_on_line(
    lines: Sequence[str], target_index: int, char_span: Span
) -> bool:
    # Missing lines have no symbols; negative indices must not wrap around.
    if not 0 <= target_index < len(lines):
        return False
    return is_symbol_in_window(lines[target_index], char_span)


def is_symbol_above(
    lines: Sequence[str], line_index: int, char_span: Span
) -> bool:
    """Symbol check against the previous line. Includes diagonals."""
    return _is_symbol_on_line(lines, line_index - 1, char_span)


def is_symbol_below(
    lines: Sequence[str], line_index: int, char_span: Span
) -> bool:
    """Symbol check against the next line. Includes diagonals."""
    return _is_symbol_on_line(lines, line_index + 1, char_span)


def has_adjacent_symbol(
    lines: Sequence[str], line_index: int, char_span: Span
) -> bool:
    line = lines[line_index]
    return (
        is_symbol_left(line, char_span)
        or is_symbol_right(line, char_span)
        or is_symbol_above(lines, line_index, char_span)
        or is_symbol_below(lines, line_index, char_span)
    )


# ─── Grid Description ─────────────────────────────────────────────────────────


def describe_grid(document: str) -> GridInfo:
    """Collect shape and content statistics for a document."""
    info = GridInfo()
    lines = split_lines(document)
    info.line_count = len(lines)

    for line in lines:
        raw = encode_line(line)
        if not line:
            info.empty_line_count += 1
        if len(raw) != len(line):
            info.multibyte_line_count += 1
        info.max_width_chars = max(info.max_width_chars, len(line))
        info.max_width_bytes = max(info.max_width_bytes, len(raw))
        info.digit_run_count += sum(1 for _ in NUMBER_PATTERN.finditer(raw))
        info.symbol_count += sum(1 for char in line if is_symbol(char))
        info.gear_candidate_count += line.count("*")

    return info
