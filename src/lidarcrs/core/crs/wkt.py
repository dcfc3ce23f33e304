"""
EPSG code extraction from WKT CRS records.

This is not a WKT parser. EPSG codes reliably appear as the last number
of an identifier clause, so the scanner only reads the trailing integer of
the horizontal part and, for compound definitions, of the vertical part.
Both WKT 1 (VERT_CS) and WKT 2 (VERTCRS / VERTICALCRS) are recognised.
"""

import logging
import string
from typing import Optional, Tuple

from lidarcrs.core.errors import BadHorizontalCodeParsedError, UnreadableWktCrsError
from lidarcrs.models.crs import EpsgCrs, is_epsg_code

logger = logging.getLogger(__name__)

# Tried in this order, the first one found wins regardless of position
VERTICAL_MARKERS = ("VERTCRS", "VERTICALCRS", "VERT_CS")

MAX_SCAN_BYTES = 10
MAX_CODE = 0xFFFF

# laspy null-terminates WKT records
_TRAILING = string.whitespace + "\x00"


def split_wkt(wkt: str) -> Tuple[str, Optional[str]]:
    """
    Split WKT text into its horizontal and vertical parts.

    Args:
        wkt: WKT text

    Returns:
        Tuple of (horizontal text, vertical text or None)
    """
    for marker in VERTICAL_MARKERS:
        index = wkt.find(marker)
        if index != -1:
            return wkt[:index], wkt[index:]
    return wkt, None


def trailing_code(text: str) -> int:
    """
    Read the integer at the end of text.

    At most MAX_SCAN_BYTES bytes are examined, counting back from the last
    non-blank byte. Scanning stops at the first non-digit that follows a
    digit. Values above MAX_CODE saturate.

    Args:
        text: Text to scan

    Returns:
        The trailing integer, 0 if no digit was found
    """
    data = text.rstrip(_TRAILING).encode("utf-8")
    code = 0
    power = 1
    started = False
    for byte in reversed(data[-MAX_SCAN_BYTES:]):
        if 0x30 <= byte <= 0x39:
            started = True
            code += (byte - 0x30) * power
            power *= 10
        elif started:
            break
    return min(code, MAX_CODE)


def parse_wkt_epsg(data: bytes) -> EpsgCrs:
    """
    Find the EPSG codes in a WKT CRS record.

    Args:
        data: Raw record bytes

    Returns:
        EpsgCrs with the horizontal code and, if plausible, the vertical code

    Raises:
        UnreadableWktCrsError: If the record holds no text
        BadHorizontalCodeParsedError: If the horizontal code is not in EPSG_RANGE
    """
    wkt = bytes(data).decode("utf-8", errors="replace")
    if not wkt.strip(_TRAILING):
        raise UnreadableWktCrsError(details={"length": len(data)})

    horizontal_text, vertical_text = split_wkt(wkt)
    horizontal = trailing_code(horizontal_text)
    vertical = trailing_code(vertical_text) if vertical_text is not None else 0

    crs = EpsgCrs.new_unchecked(horizontal, vertical)
    if not is_epsg_code(crs.horizontal):
        raise BadHorizontalCodeParsedError(crs)
    if not is_epsg_code(crs.vertical):
        if vertical_text is not None:
            logger.debug(f"Dropping implausible vertical code {vertical} from WKT")
        crs.clear_vertical()
    return crs
