#!/usr/bin/env python3
"""
Generate randomized monochrome map symbol icons and pack them into a zip archive.
Each category gets its own folder; run with --help for the subcommands.
"""
import sys

from map_symbols.cli import main


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
