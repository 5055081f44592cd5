"""Shared fixtures for the schematic test suite."""

from __future__ import annotations

import logging

import pytest

EXAMPLE_SCHEMATIC = """\
467..114..
...*......
..35..633.
......#...
617*......
.....+.58.
..592.....
......755.
...$.*....
.664.598.."""


@pytest.fixture
def example_schematic() -> str:
    return EXAMPLE_SCHEMATIC


@pytest.fixture
def example_file(tmp_path):
    path = tmp_path / "schematic.txt"
    path.write_text(EXAMPLE_SCHEMATIC + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the engine attaches so streams don't leak between tests."""
    yield
    package_logger = logging.getLogger("schematic")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
