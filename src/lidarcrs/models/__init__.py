"""
Data models.
"""

from .crs import (
    EPSG_RANGE,
    EpsgCrs,
    GeoTiffAscii,
    GeoTiffCrs,
    GeoTiffData,
    GeoTiffDoubles,
    GeoTiffKeyEntry,
    GeoTiffShort,
    is_epsg_code,
)

__all__ = [
    "EPSG_RANGE",
    "EpsgCrs",
    "GeoTiffAscii",
    "GeoTiffCrs",
    "GeoTiffData",
    "GeoTiffDoubles",
    "GeoTiffKeyEntry",
    "GeoTiffShort",
    "is_epsg_code",
]
