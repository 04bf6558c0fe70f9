#!/usr/bin/env python3
"""
Generate a world and print a summary of it.

Usage:
    python generate_sample_world.py [seed] [size]

If no seed is provided, defaults to 42; size defaults to
TERRAGEN_DEFAULT_WORLD_SIZE.
"""

import sys

from py_terragen import generate_world
from py_terragen.config import settings
from py_terragen.utils.logging import configure_logging


def main(argv):
    seed = int(argv[1]) if len(argv) > 1 else 42
    size = int(argv[2]) if len(argv) > 2 else settings.default_world_size

    configure_logging(fmt="console")
    world = generate_world(size, seed)
    summary = world.summary()

    print(f"\nWorld seed={summary['seed']} size={summary['size']}")
    print(f"  Tiles:      {summary['tiles']} in {summary['chunks']} chunks")
    print(f"  Elevation:  {summary['elevation_range']}")
    print(f"  Continents: {summary['continents']} {summary['continent_sizes']}")
    print("  Biomes:")
    for name, count in summary["biomes"].items():
        print(f"    {name:<8} {count:>6}")


if __name__ == "__main__":
    main(sys.argv)
