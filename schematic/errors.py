"""Exceptions raised while parsing a schematic."""

from __future__ import annotations


class SchematicError(Exception):
    """Base class for schematic parsing errors."""


class MalformedNumberError(SchematicError, ValueError):
    """A run of digits could not be converted to a supported part number."""

    def __init__(self, line: str, text: str, reason: str = ""):
        self.line = line
        self.text = text
        message = f"While parsing line `{line}`: `{text}` is not a valid part number"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
