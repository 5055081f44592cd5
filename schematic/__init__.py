"""
Engine Schematic Analyzer
=========================
Finds part numbers and gears in a text grid ("engine schematic").

Architecture:
    - Scanner: Splits lines, converts byte offsets to character offsets,
      and tests cells for neighbouring symbols
    - Schematic Parser: Collects part numbers, then gears
    - Report Engine: Sums part numbers and gear ratios
    - Solver Engine: Reads an input file and runs the pipeline

Version: 1.0.0
"""

__version__ = "1.0.0"
