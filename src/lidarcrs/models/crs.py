"""
Data models for CRS metadata extracted from point-cloud headers.

This module defines the EPSG code carrier returned by the extractors and
the decoded form of a GeoTIFF key directory.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from pyproj import CRS

from lidarcrs.core.errors import BadEpsgCrsError, SetBadCodeError

# Plausible EPSG codes, [1024, 32767]
EPSG_RANGE = range(1024, 32768)


def is_epsg_code(code: Optional[int]) -> bool:
    """Return True if code lies in EPSG_RANGE."""
    return code is not None and code in EPSG_RANGE


class EpsgCrs:
    """
    Horizontal and optional vertical CRS given by EPSG code.

    The normal constructor validates both codes. Use ``new_unchecked`` when
    an implausible value should be kept around for inspection.

    Instances hash by value. Do not mutate an instance that is used as a
    dict key or set member; mutate a ``copy()`` instead.

    Attributes:
        horizontal: EPSG code of the horizontal (2D) CRS
        vertical: EPSG code of the vertical CRS, if any
    """

    __slots__ = ("_horizontal", "_vertical")

    def __init__(self, horizontal: int, vertical: Optional[int] = None):
        """
        Initialize a validated EpsgCrs.

        Args:
            horizontal: Horizontal EPSG code
            vertical: Optional vertical EPSG code

        Raises:
            BadEpsgCrsError: If a present code is outside EPSG_RANGE
        """
        if not is_epsg_code(horizontal) or (
            vertical is not None and not is_epsg_code(vertical)
        ):
            raise BadEpsgCrsError(horizontal, vertical)
        self._horizontal = horizontal
        self._vertical = vertical

    @classmethod
    def new_unchecked(cls, horizontal: int, vertical: Optional[int] = None) -> "EpsgCrs":
        """Create an EpsgCrs without range validation."""
        crs = cls.__new__(cls)
        crs._horizontal = horizontal
        crs._vertical = vertical
        return crs

    @property
    def horizontal(self) -> int:
        return self._horizontal

    @property
    def vertical(self) -> Optional[int]:
        return self._vertical

    @property
    def is_compound(self) -> bool:
        """True when a vertical code is present."""
        return self._vertical is not None

    def set_horizontal(self, code: int) -> None:
        """
        Set the horizontal code after validating it.

        Raises:
            SetBadCodeError: If code is outside EPSG_RANGE
        """
        if not is_epsg_code(code):
            raise SetBadCodeError(code, component="horizontal")
        self._horizontal = code

    def set_vertical(self, code: int) -> None:
        """
        Set the vertical code after validating it.

        Raises:
            SetBadCodeError: If code is outside EPSG_RANGE
        """
        if not is_epsg_code(code):
            raise SetBadCodeError(code, component="vertical")
        self._vertical = code

    def set_horizontal_unchecked(self, code: int) -> None:
        self._horizontal = code

    def set_vertical_unchecked(self, code: int) -> None:
        self._vertical = code

    def clear_vertical(self) -> None:
        self._vertical = None

    def copy(self) -> "EpsgCrs":
        return EpsgCrs.new_unchecked(self._horizontal, self._vertical)

    def to_dict(self) -> Dict[str, Optional[int]]:
        """Convert to dictionary representation."""
        return {"horizontal": self._horizontal, "vertical": self._vertical}

    def to_pyproj(self) -> CRS:
        """
        Build a pyproj CRS from the EPSG codes.

        A vertical code yields a compound CRS ("EPSG:h+v").

        Returns:
            pyproj CRS instance

        Raises:
            pyproj.exceptions.CRSError: If pyproj does not know a code
        """
        return CRS.from_user_input(str(self))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, EpsgCrs):
            return NotImplemented
        return (self._horizontal, self._vertical) == (other._horizontal, other._vertical)

    def __hash__(self) -> int:
        return hash((self._horizontal, self._vertical))

    def __repr__(self) -> str:
        return f"EpsgCrs(horizontal={self._horizontal}, vertical={self._vertical})"

    def __str__(self) -> str:
        """String representation."""
        if self._vertical is not None:
            return f"EPSG:{self._horizontal}+{self._vertical}"
        return f"EPSG:{self._horizontal}"


@dataclass(frozen=True)
class GeoTiffShort:
    """Key value stored inline in the directory entry."""

    value: int


@dataclass(frozen=True)
class GeoTiffAscii:
    """Key value read from the GeoAsciiParams record."""

    text: str


@dataclass(frozen=True)
class GeoTiffDoubles:
    """Key values read from the GeoDoubleParams record."""

    values: Tuple[float, ...]


GeoTiffData = Union[GeoTiffShort, GeoTiffAscii, GeoTiffDoubles]


@dataclass(frozen=True)
class GeoTiffKeyEntry:
    """
    One GeoKey after its payload location has been resolved.

    Attributes:
        id: GeoKey identifier (e.g. 1024 for GTModelTypeGeoKey)
        data: Decoded payload
    """

    id: int
    data: GeoTiffData


@dataclass
class GeoTiffCrs:
    """
    Decoded GeoTIFF key directory.

    Attributes:
        entries: Key entries in directory order
        version: KeyDirectoryVersion header field
        revision: KeyRevision header field
        minor_revision: MinorRevision header field
    """

    entries: List[GeoTiffKeyEntry] = field(default_factory=list)
    version: int = 1
    revision: int = 1
    minor_revision: int = 0

    def find(self, key_id: int) -> Optional[GeoTiffKeyEntry]:
        """Return the last entry with the given key id, if any."""
        found = None
        for entry in self.entries:
            if entry.id == key_id:
                found = entry
        return found

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return f"GeoTiffCrs(v{self.version}.{self.revision}.{self.minor_revision}, {len(self.entries)} keys)"
