"""
laspy integration.

Provides a CRS source over ``laspy.LasHeader`` and a one-call helper.
"""

from lidarcrs.integrations.las.source import LasHeaderCrsSource, parse_las_crs

__all__ = [
    "LasHeaderCrsSource",
    "parse_las_crs",
]
