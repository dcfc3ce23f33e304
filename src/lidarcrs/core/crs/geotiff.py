"""
EPSG code extraction from GeoTIFF key directories.

LAS files store GeoTIFF CRS keys in up to three records: the key directory
(GeoKeyDirectoryTag, record 34735) and the GeoDoubleParamsTag (34736) and
GeoAsciiParamsTag (34737) records that hold payloads too large to be
inlined in a directory entry.
"""

import logging
import struct
from typing import Dict, Optional

from lidarcrs.core.errors import (
    BadHorizontalCodeParsedError,
    CrsReadError,
    UndefinedDataForKeyError,
    UnimplementedForGeoTiffDataError,
    UnreadableGeoTiffCrsError,
    UserDefinedCrsError,
)
from lidarcrs.models.crs import (
    EpsgCrs,
    GeoTiffAscii,
    GeoTiffCrs,
    GeoTiffData,
    GeoTiffDoubles,
    GeoTiffKeyEntry,
    GeoTiffShort,
    is_epsg_code,
)

logger = logging.getLogger(__name__)

# TIFF tag locations of key payloads
INLINE_LOCATION = 0
KEY_DIRECTORY_TAG = 34735
DOUBLE_PARAMS_TAG = 34736
ASCII_PARAMS_TAG = 34737

# GeoKey ids
MODEL_TYPE_KEY = 1024
GEOGRAPHIC_TYPE_KEY = 2048
PROJECTED_CS_TYPE_KEY = 3072
VERTICAL_CS_TYPE_KEY = 4096

USER_DEFINED = 32767

MODEL_TYPES: Dict[int, str] = {
    1: "projected",
    2: "geographic",
    3: "geocentric",
}

_SHORTS = struct.Struct("<4H")
_DOUBLE_SIZE = 8


def _unpack_shorts(buffer: bytes, offset: int, record_id: int):
    try:
        return _SHORTS.unpack_from(buffer, offset)
    except struct.error as e:
        raise CrsReadError(
            f"GeoTIFF key directory is truncated at byte {offset}",
            record_id=record_id,
            details={"length": len(buffer)},
        ) from e


def _read_doubles(buffer: bytes, index: int, count: int) -> GeoTiffDoubles:
    # offset is an element index, not a byte offset
    start = index * _DOUBLE_SIZE
    try:
        values = struct.unpack_from(f"<{count}d", buffer, start)
    except struct.error as e:
        raise CrsReadError(
            f"GeoDoubleParams record too short for {count} doubles at index {index}",
            record_id=DOUBLE_PARAMS_TAG,
            details={"length": len(buffer)},
        ) from e
    return GeoTiffDoubles(values=tuple(values))


def _read_ascii(buffer: bytes, offset: int, count: int) -> GeoTiffAscii:
    if offset + count > len(buffer):
        raise CrsReadError(
            f"GeoAsciiParams record too short for {count} bytes at offset {offset}",
            record_id=ASCII_PARAMS_TAG,
            details={"length": len(buffer)},
        )
    return GeoTiffAscii(text=bytes(buffer[offset : offset + count]).decode("latin-1"))


def decode_geotiff_directory(
    directory: bytes,
    doubles: Optional[bytes] = None,
    ascii: Optional[bytes] = None,
) -> GeoTiffCrs:
    """
    Decode a GeoKeyDirectoryTag record and resolve every key payload.

    Args:
        directory: Key directory record data
        doubles: GeoDoubleParamsTag record data, if the file has one
        ascii: GeoAsciiParamsTag record data, if the file has one

    Returns:
        GeoTiffCrs with the entries in directory order

    Raises:
        CrsReadError: If a record is truncated
        UnreadableGeoTiffCrsError: If a key refers to a missing params record
        UndefinedDataForKeyError: If a key uses an unknown payload location
    """
    version, revision, minor_revision, count = _unpack_shorts(directory, 0, KEY_DIRECTORY_TAG)

    entries = []
    for i in range(count):
        key_id, location, value_count, value_offset = _unpack_shorts(
            directory, _SHORTS.size * (i + 1), KEY_DIRECTORY_TAG
        )

        data: GeoTiffData
        if location == INLINE_LOCATION:
            data = GeoTiffShort(value=value_offset)
        elif location == DOUBLE_PARAMS_TAG:
            if doubles is None:
                raise UnreadableGeoTiffCrsError(
                    f"key {key_id} refers to a missing GeoDoubleParams record",
                    details={"key_id": key_id},
                )
            data = _read_doubles(doubles, value_offset, value_count)
        elif location == ASCII_PARAMS_TAG:
            if ascii is None:
                raise UnreadableGeoTiffCrsError(
                    f"key {key_id} refers to a missing GeoAsciiParams record",
                    details={"key_id": key_id},
                )
            data = _read_ascii(ascii, value_offset, value_count)
        else:
            raise UndefinedDataForKeyError(key_id, location)

        entries.append(GeoTiffKeyEntry(id=key_id, data=data))

    return GeoTiffCrs(
        entries=entries,
        version=version,
        revision=revision,
        minor_revision=minor_revision,
    )


def _check_model_type(data: GeoTiffData) -> None:
    if isinstance(data, GeoTiffShort):
        if data.value == 0:
            raise UnreadableGeoTiffCrsError("model type is undefined (0)")
        if data.value in MODEL_TYPES:
            return
        if data.value == USER_DEFINED:
            raise UserDefinedCrsError(details={"key_id": MODEL_TYPE_KEY})
    raise UnimplementedForGeoTiffDataError(data)


def parse_geotiff_epsg(directory: GeoTiffCrs) -> EpsgCrs:
    """
    Reduce a decoded key directory to EPSG codes.

    GeographicTypeGeoKey (2048) and ProjectedCSTypeGeoKey (3072) both give
    the horizontal code; if both are present the later one is used.
    VerticalCSTypeGeoKey (4096) gives the vertical code. Units, citations
    and other keys are ignored.

    Args:
        directory: Decoded key directory

    Returns:
        EpsgCrs with the horizontal code and, if plausible, the vertical code

    Raises:
        UnreadableGeoTiffCrsError: If no usable horizontal code is found
        UserDefinedCrsError: If the model type is user-defined
        UnimplementedForGeoTiffDataError: If the model type is not a known short
        BadHorizontalCodeParsedError: If the horizontal code is not in EPSG_RANGE
    """
    horizontal: Optional[int] = None
    vertical: Optional[int] = None

    for entry in directory.entries:
        if entry.id == MODEL_TYPE_KEY:
            _check_model_type(entry.data)
        elif entry.id in (GEOGRAPHIC_TYPE_KEY, PROJECTED_CS_TYPE_KEY):
            if isinstance(entry.data, GeoTiffShort):
                if horizontal is not None:
                    logger.debug(
                        f"GeoTIFF key {entry.id} overrides horizontal code {horizontal}"
                    )
                horizontal = entry.data.value
        elif entry.id == VERTICAL_CS_TYPE_KEY:
            if isinstance(entry.data, GeoTiffShort):
                vertical = entry.data.value

    if not horizontal:
        raise UnreadableGeoTiffCrsError("no horizontal CRS key")

    crs = EpsgCrs.new_unchecked(horizontal, vertical)
    if not is_epsg_code(crs.horizontal):
        raise BadHorizontalCodeParsedError(crs)
    if crs.vertical is not None and not is_epsg_code(crs.vertical):
        logger.debug(f"Dropping implausible vertical code {crs.vertical} from GeoTIFF")
        crs.clear_vertical()
    return crs


def parse_geotiff_records(
    directory: bytes,
    doubles: Optional[bytes] = None,
    ascii: Optional[bytes] = None,
) -> EpsgCrs:
    """Decode GeoTIFF CRS records and extract the EPSG codes."""
    return parse_geotiff_epsg(decode_geotiff_directory(directory, doubles, ascii))
