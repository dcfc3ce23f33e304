"""
lidarcrs - EPSG code extraction from LIDAR point-cloud headers.

This package reads the CRS records of LAS/LAZ/COPC headers, stored either as
WKT or as GeoTIFF keys, and reports the horizontal and vertical EPSG codes.
"""

__version__ = "0.1.0"
