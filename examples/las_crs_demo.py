#!/usr/bin/env python3
"""
Example: EPSG codes from LAS/LAZ headers

This script demonstrates how to:
1. Read a LAS header with laspy
2. Extract the horizontal and vertical EPSG codes of its CRS
3. Report files without a CRS or with an unusable one

Run:
    python examples/las_crs_demo.py path/to/file.las [more.laz ...]
"""

import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import laspy

from lidarcrs.core.errors import LidarCrsException
from lidarcrs.core.logging_config import setup_logging
from lidarcrs.integrations.las import parse_las_crs


def describe(path: Path) -> str:
    """Return a one-line CRS description for a LAS/LAZ file."""
    with laspy.open(path) as reader:
        header = reader.header

    try:
        crs = parse_las_crs(header)
    except LidarCrsException as e:
        return f"{path.name}: {e}"

    if crs is None:
        return f"{path.name}: no CRS records"

    kind = "compound" if crs.is_compound else "horizontal only"
    return f"{path.name}: {crs} ({kind}, LAS {header.version})"


def main():
    """Run the example."""
    setup_logging()

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    print("=" * 60)
    print("LAS CRS Extraction")
    print("=" * 60)

    for arg in sys.argv[1:]:
        print(describe(Path(arg)))


if __name__ == "__main__":
    main()
