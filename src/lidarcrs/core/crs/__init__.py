"""
CRS extraction from point-cloud header metadata.

This module provides:
- EPSG code extraction from WKT CRS records
- GeoTIFF key directory decoding and EPSG code extraction
- Detection with WKT-before-GeoTIFF precedence
"""

from lidarcrs.core.crs.detector import CrsSource, extract_epsg
from lidarcrs.core.crs.geotiff import (
    decode_geotiff_directory,
    parse_geotiff_epsg,
    parse_geotiff_records,
)
from lidarcrs.core.crs.wkt import parse_wkt_epsg, split_wkt, trailing_code

__all__ = [
    # Detector
    "CrsSource",
    "extract_epsg",
    # GeoTIFF
    "decode_geotiff_directory",
    "parse_geotiff_epsg",
    "parse_geotiff_records",
    # WKT
    "parse_wkt_epsg",
    "split_wkt",
    "trailing_code",
]
