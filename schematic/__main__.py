"""
Module entry point for: python -m schematic

Allows running the analyzer directly as a module:
    python -m schematic solve <input_path> [options]
    python -m schematic info <input_path>
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
