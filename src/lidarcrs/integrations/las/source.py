"""
laspy header adapter.

Finds the CRS records of a LAS/LAZ/COPC header among its VLRs and EVLRs and
exposes them to the CRS detector.
"""

import logging
from typing import Dict, Iterable, Optional

from laspy import LasHeader

from lidarcrs.core.crs.detector import extract_epsg
from lidarcrs.core.crs.geotiff import (
    ASCII_PARAMS_TAG,
    DOUBLE_PARAMS_TAG,
    KEY_DIRECTORY_TAG,
    decode_geotiff_directory,
)
from lidarcrs.core.errors import CrsReadError
from lidarcrs.models.crs import EpsgCrs, GeoTiffCrs

logger = logging.getLogger(__name__)

PROJECTION_USER_ID = "lasf_projection"
WKT_CRS_RECORD_ID = 2112

CRS_RECORD_IDS = (
    WKT_CRS_RECORD_ID,
    KEY_DIRECTORY_TAG,
    DOUBLE_PARAMS_TAG,
    ASCII_PARAMS_TAG,
)


def _record_bytes(vlr) -> bytes:
    try:
        return bytes(vlr.record_data_bytes())
    except (TypeError, ValueError) as e:
        raise CrsReadError(
            f"Unable to read data of CRS record {vlr.record_id}",
            record_id=vlr.record_id,
        ) from e


class LasHeaderCrsSource:
    """
    CRS records of a laspy header.

    Records are matched on the ``LASF_Projection`` user id (case-insensitive)
    and the WKT (2112) and GeoTIFF (34735, 34736, 34737) record ids. If a
    record id occurs more than once, the last record wins.

    Attributes:
        header: The wrapped laspy header
        records: Record data by record id
    """

    def __init__(self, header: LasHeader):
        """
        Initialize the source and collect the CRS records.

        Args:
            header: laspy header, e.g. ``laspy.open(path).header``

        Raises:
            CrsReadError: If the data of a CRS record cannot be read
        """
        self.header = header
        self.records: Dict[int, bytes] = {}

        for vlr in self._all_vlrs():
            if vlr.user_id.lower() != PROJECTION_USER_ID:
                continue
            if vlr.record_id not in CRS_RECORD_IDS:
                continue
            if vlr.record_id in self.records:
                logger.debug(f"Duplicate CRS record {vlr.record_id}, using the last one")
            self.records[vlr.record_id] = _record_bytes(vlr)

    def _all_vlrs(self) -> Iterable:
        yield from self.header.vlrs
        if self.header.evlrs is not None:
            yield from self.header.evlrs

    def has_declared_wkt_crs(self) -> bool:
        return bool(self.header.global_encoding.wkt)

    def raw_wkt_crs_bytes(self) -> Optional[bytes]:
        wkt = self.records.get(WKT_CRS_RECORD_ID)
        if wkt is not None and KEY_DIRECTORY_TAG in self.records:
            logger.warning(
                "Both WKT and GeoTIFF CRS records found, WKT is parsed",
                extra={"crs_encoding": "wkt"},
            )
        return wkt

    def decoded_geotiff_crs(self) -> Optional[GeoTiffCrs]:
        directory = self.records.get(KEY_DIRECTORY_TAG)
        if directory is None:
            return None
        return decode_geotiff_directory(
            directory,
            doubles=self.records.get(DOUBLE_PARAMS_TAG),
            ascii=self.records.get(ASCII_PARAMS_TAG),
        )

    def __repr__(self) -> str:
        return f"LasHeaderCrsSource(records={sorted(self.records)})"


def parse_las_crs(header: LasHeader) -> Optional[EpsgCrs]:
    """
    Extract the EPSG codes of the CRS stored in a laspy header.

    Args:
        header: laspy header

    Returns:
        EpsgCrs, or None if the header has no CRS records

    Raises:
        LidarCrsException: If the CRS records cannot be read or parsed
    """
    return extract_epsg(LasHeaderCrsSource(header))
