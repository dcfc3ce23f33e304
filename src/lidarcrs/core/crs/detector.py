"""
CRS detection from point-cloud header metadata.

A header can carry its CRS as WKT or as GeoTIFF keys. WKT takes precedence:
when a WKT record exists any GeoTIFF records are ignored.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

from lidarcrs.core.config import settings
from lidarcrs.core.crs.geotiff import parse_geotiff_epsg
from lidarcrs.core.crs.wkt import parse_wkt_epsg
from lidarcrs.models.crs import EpsgCrs, GeoTiffCrs

logger = logging.getLogger(__name__)


@runtime_checkable
class CrsSource(Protocol):
    """
    Header-like object exposing its CRS records.

    ``decoded_geotiff_crs`` may raise CrsReadError when the records cannot
    be read.
    """

    def has_declared_wkt_crs(self) -> bool:
        ...

    def raw_wkt_crs_bytes(self) -> Optional[bytes]:
        ...

    def decoded_geotiff_crs(self) -> Optional[GeoTiffCrs]:
        ...


def _warn_mismatch(message: str, encoding: str) -> None:
    if settings.header_mismatch_warnings:
        logger.warning(message, extra={"crs_encoding": encoding})


def extract_epsg(source: CrsSource) -> Optional[EpsgCrs]:
    """
    Extract the EPSG codes of the CRS declared by a header.

    Args:
        source: Header exposing its CRS records

    Returns:
        EpsgCrs, or None if the header has no CRS records at all

    Raises:
        LidarCrsException: Any error raised while reading or parsing the
            selected CRS records
    """
    declared_wkt = source.has_declared_wkt_crs()

    wkt = source.raw_wkt_crs_bytes()
    if wkt is not None:
        if not declared_wkt:
            _warn_mismatch("WKT CRS record found, but header says it does not exist", "wkt")
        return parse_wkt_epsg(wkt)

    geotiff = source.decoded_geotiff_crs()
    if geotiff is not None:
        if declared_wkt:
            _warn_mismatch(
                "No WKT CRS record found, but header says it exists; using GeoTIFF keys",
                "geotiff",
            )
        return parse_geotiff_epsg(geotiff)

    if declared_wkt:
        _warn_mismatch("No CRS records found, but header says a WKT CRS exists", "none")
    return None
