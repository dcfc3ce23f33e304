"""
Custom exception hierarchy for lidarcrs.

Every way CRS extraction can fail has its own exception class so callers
can tell the cases apart without inspecting messages.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from lidarcrs.models.crs import EpsgCrs, GeoTiffData


class LidarCrsException(Exception):
    """
    Base exception for all lidarcrs errors.

    Attributes:
        error_code: Stable identifier of the failure kind
        message: Human-readable description
        details: Offending codes, record ids and lengths
        suggestions: Hints for fixing the header
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a JSON-serialisable dictionary."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        # Codes and record ids in details are what identify a bad header
        return (
            f"{self.__class__.__name__}("
            f"error_code={self.error_code!r}, "
            f"message={self.message!r}, "
            f"details={self.details!r})"
        )


class UserDefinedCrsError(LidarCrsException):
    """
    Raised when the GeoTIFF model type marks the CRS as user-defined.

    User-defined CRS's have no EPSG code to extract.
    """

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Parsing of user-defined CRS is not supported",
            error_code="USER_DEFINED_CRS",
            details=details,
            suggestions=["Reproject the file to a CRS with an EPSG code"],
        )


class UnreadableWktCrsError(LidarCrsException):
    """Raised when a WKT CRS record holds no text to scan."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Unable to parse the WKT CRS record",
            error_code="UNREADABLE_WKT_CRS",
            details=details,
            suggestions=[
                "The record may have been written by software that adds "
                "placeholder CRS records to CRS-less files",
            ],
        )


class UnreadableGeoTiffCrsError(LidarCrsException):
    """
    Raised when the GeoTIFF records cannot yield any EPSG code.

    The ``reason`` detail says which part was missing or invalid.
    """

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        error_details["reason"] = reason

        super().__init__(
            message=f"Unable to parse the GeoTIFF CRS records: {reason}",
            error_code="UNREADABLE_GEOTIFF_CRS",
            details=error_details,
        )
        self.reason = reason


class BadHorizontalCodeParsedError(LidarCrsException):
    """
    Raised when the extracted horizontal code is outside the EPSG range.

    The offending value is kept in ``crs`` for diagnostics.
    """

    def __init__(self, crs: "EpsgCrs"):
        self.crs = crs.copy()
        super().__init__(
            message=f"Parsed horizontal code {crs.horizontal} is not a plausible EPSG code",
            error_code="BAD_HORIZONTAL_CODE",
            details={"horizontal": crs.horizontal, "vertical": crs.vertical},
            suggestions=[
                "Files converted without a CRS often carry the placeholder code 0",
            ],
        )


class UnimplementedForGeoTiffDataError(LidarCrsException):
    """
    Raised when the CRS is defined by GeoTIFF ASCII or double data.

    The untouched payload is kept in ``payload`` so callers can interpret
    it themselves.
    """

    def __init__(self, payload: "GeoTiffData"):
        self.payload = payload
        super().__init__(
            message="CRS definitions stored as GeoTIFF string or double data are not handled",
            error_code="UNIMPLEMENTED_GEOTIFF_DATA",
            details={"payload": repr(payload)},
        )


class UndefinedDataForKeyError(LidarCrsException):
    """Raised when a GeoKey points to an unknown TIFF tag location."""

    def __init__(self, key_id: int, location: Optional[int] = None):
        self.key_id = key_id
        self.location = location
        details: Dict[str, Any] = {"key_id": key_id}
        if location is not None:
            details["location"] = location

        super().__init__(
            message=f"Undefined data location for GeoTIFF key {key_id}",
            error_code="UNDEFINED_GEOTIFF_KEY_DATA",
            details=details,
        )


class CrsCodeError(LidarCrsException, ValueError):
    """Base class for rejected EPSG codes on the checked EpsgCrs paths."""


class SetBadCodeError(CrsCodeError):
    """Raised when a checked setter receives an out-of-range code."""

    def __init__(self, code: int, component: Optional[str] = None):
        self.code = code
        details: Dict[str, Any] = {"code": code}
        if component:
            details["component"] = component

        super().__init__(
            message=f"{code} is not a valid EPSG code",
            error_code="SET_BAD_CODE",
            details=details,
            suggestions=["EPSG codes lie between 1024 and 32767"],
        )


class BadEpsgCrsError(CrsCodeError):
    """Raised when EpsgCrs is constructed with an out-of-range code."""

    def __init__(self, horizontal: int, vertical: Optional[int] = None):
        self.horizontal = horizontal
        self.vertical = vertical

        super().__init__(
            message=f"Invalid EPSG codes: horizontal={horizontal}, vertical={vertical}",
            error_code="BAD_EPSG_CRS",
            details={"horizontal": horizontal, "vertical": vertical},
            suggestions=["EPSG codes lie between 1024 and 32767"],
        )


class CrsReadError(LidarCrsException):
    """
    Raised when CRS records cannot be read.

    Wraps failures of the underlying record access, such as truncated
    record data. The original exception is available as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        record_id: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if record_id is not None:
            error_details["record_id"] = record_id

        super().__init__(
            message=message,
            error_code="CRS_READ_ERROR",
            details=error_details,
            suggestions=["Check that the file is not truncated or corrupt"],
        )
