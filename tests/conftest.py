"""
Shared fixtures and record builders for lidarcrs tests.
"""

import struct
from typing import Iterable, Tuple

import pytest

from lidarcrs.core.config import settings


def build_key_directory(
    keys: Iterable[Tuple[int, int, int, int]],
    version: Tuple[int, int, int] = (1, 1, 0),
) -> bytes:
    """Build GeoKeyDirectoryTag record data from (id, location, count, value) tuples."""
    keys = list(keys)
    data = struct.pack("<4H", *version, len(keys))
    for key in keys:
        data += struct.pack("<4H", *key)
    return data


def build_doubles(*values: float) -> bytes:
    """Build GeoDoubleParamsTag record data."""
    return struct.pack(f"<{len(values)}d", *values)


WKT1_OREGON = (
    'PROJCS["NAD83(HARN) / Oregon GIC Lambert (ft)",'
    'GEOGCS["NAD83(HARN)",DATUM["NAD83_High_Accuracy_Reference_Network",'
    'SPHEROID["GRS 1980",6378137,298.257222101,AUTHORITY["EPSG","7019"]],'
    'AUTHORITY["EPSG","6152"]],PRIMEM["Greenwich",0,AUTHORITY["EPSG","8901"]],'
    'UNIT["degree",0.0174532925199433,AUTHORITY["EPSG","9122"]],'
    'AUTHORITY["EPSG","4152"]],PROJECTION["Lambert_Conformal_Conic_2SP"],'
    'UNIT["foot",0.3048,AUTHORITY["EPSG","9002"]],AUTHORITY["EPSG","2992"]]'
)

WKT1_OREGON_COMPOUND = (
    'COMPD_CS["NAD83(HARN) / Oregon GIC Lambert (ft) + NAVD88 height (ft)",'
    + WKT1_OREGON
    + ',VERT_CS["NAVD88 height (ft)",VERT_DATUM["North American Vertical Datum 1988",'
    '2005,AUTHORITY["EPSG","5103"]],UNIT["foot",0.3048,AUTHORITY["EPSG","9002"]],'
    'AUTHORITY["EPSG","6360"]]]'
)

WKT2_ETRS89_COMPOUND = (
    'COMPOUNDCRS["ETRS89 / UTM zone 32N + DVR90 height",\n'
    '  PROJCRS["ETRS89 / UTM zone 32N",\n'
    '    BASEGEOGCRS["ETRS89",ID["EPSG",4258]],\n'
    '    CONVERSION["UTM zone 32N",ID["EPSG",16032]],\n'
    '    ID["EPSG",25832]],\n'
    '  VERTCRS["DVR90 height",\n'
    '    VDATUM["Dansk Vertikal Reference 1990"],\n'
    '    ID["EPSG",5799]]]\n'
)


@pytest.fixture
def mismatch_warnings(monkeypatch):
    """Make sure header mismatch warnings are enabled."""
    monkeypatch.setattr(settings, "header_mismatch_warnings", True)
    return settings


@pytest.fixture
def key_directory():
    """Builder for GeoKeyDirectoryTag record data."""
    return build_key_directory


@pytest.fixture
def doubles_record():
    """Builder for GeoDoubleParamsTag record data."""
    return build_doubles


@pytest.fixture
def wkt1_oregon() -> bytes:
    """WKT 1 projected CRS ending in EPSG 2992."""
    return WKT1_OREGON.encode("utf-8")


@pytest.fixture
def wkt1_oregon_compound() -> bytes:
    """WKT 1 compound CRS, EPSG 2992 + 6360."""
    return WKT1_OREGON_COMPOUND.encode("utf-8")


@pytest.fixture
def wkt2_compound() -> bytes:
    """WKT 2 compound CRS, EPSG 25832 + 5799."""
    return WKT2_ETRS89_COMPOUND.encode("utf-8")
