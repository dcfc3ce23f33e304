"""
Tests for CRS data models.
"""

import pytest

from lidarcrs.core.errors import BadEpsgCrsError, CrsCodeError, SetBadCodeError
from lidarcrs.models.crs import (
    EPSG_RANGE,
    EpsgCrs,
    GeoTiffAscii,
    GeoTiffCrs,
    GeoTiffDoubles,
    GeoTiffKeyEntry,
    GeoTiffShort,
    is_epsg_code,
)


class TestEpsgRange:
    """Tests for the EPSG plausibility range."""

    def test_bounds(self) -> None:
        """Test range bounds are inclusive of 1024 and 32767."""
        assert EPSG_RANGE[0] == 1024
        assert EPSG_RANGE[-1] == 32767

    @pytest.mark.parametrize("code", [1024, 2992, 25832, 32767])
    def test_is_epsg_code(self, code: int) -> None:
        """Test codes inside the range are accepted."""
        assert is_epsg_code(code)

    @pytest.mark.parametrize("code", [None, 0, 1023, 32768, 65535])
    def test_is_not_epsg_code(self, code) -> None:
        """Test codes outside the range are rejected."""
        assert not is_epsg_code(code)


class TestEpsgCrsConstruction:
    """Tests for checked and unchecked construction."""

    @pytest.mark.parametrize(
        "horizontal,vertical",
        [(1024, None), (2992, 6360), (25832, 5941), (32767, 32767), (4326, 1024)],
    )
    def test_valid_codes(self, horizontal: int, vertical) -> None:
        """Test valid codes round-trip through the accessors."""
        crs = EpsgCrs(horizontal, vertical)
        assert crs.horizontal == horizontal
        assert crs.vertical == vertical

    @pytest.mark.parametrize("horizontal", [0, 1023, 32768, 65535])
    @pytest.mark.parametrize("vertical", [None, 5941, 0])
    def test_invalid_horizontal(self, horizontal: int, vertical) -> None:
        """Test an out-of-range horizontal code fails regardless of vertical."""
        with pytest.raises(BadEpsgCrsError) as exc_info:
            EpsgCrs(horizontal, vertical)

        assert exc_info.value.horizontal == horizontal
        assert exc_info.value.vertical == vertical

    def test_invalid_vertical(self) -> None:
        """Test an out-of-range vertical code fails."""
        with pytest.raises(BadEpsgCrsError):
            EpsgCrs(25832, 99)

    def test_bad_epsg_crs_is_value_error(self) -> None:
        """Test construction errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            EpsgCrs(0)

    def test_new_unchecked(self) -> None:
        """Test unchecked construction keeps implausible values."""
        crs = EpsgCrs.new_unchecked(0, 65535)
        assert crs.horizontal == 0
        assert crs.vertical == 65535

    def test_default_vertical(self) -> None:
        """Test vertical defaults to absent."""
        crs = EpsgCrs(4326)
        assert crs.vertical is None
        assert crs.is_compound is False


class TestEpsgCrsMutation:
    """Tests for checked and unchecked setters."""

    def test_set_horizontal(self) -> None:
        """Test setting a valid horizontal code."""
        crs = EpsgCrs(4326)
        crs.set_horizontal(25832)
        assert crs.horizontal == 25832

    def test_set_horizontal_invalid_leaves_value(self) -> None:
        """Test a rejected horizontal code does not mutate the CRS."""
        crs = EpsgCrs(4326)
        with pytest.raises(SetBadCodeError) as exc_info:
            crs.set_horizontal(0)

        assert exc_info.value.code == 0
        assert exc_info.value.details["component"] == "horizontal"
        assert crs.horizontal == 4326

    def test_set_vertical(self) -> None:
        """Test setting a valid vertical code."""
        crs = EpsgCrs(25832)
        crs.set_vertical(5941)
        assert crs.vertical == 5941
        assert crs.is_compound is True

    def test_set_vertical_invalid_leaves_value(self) -> None:
        """Test a rejected vertical code does not mutate the CRS."""
        crs = EpsgCrs(25832, 5941)
        with pytest.raises(SetBadCodeError) as exc_info:
            crs.set_vertical(40000)

        assert exc_info.value.code == 40000
        assert isinstance(exc_info.value, CrsCodeError)
        assert crs.vertical == 5941

    def test_unchecked_setters(self) -> None:
        """Test unchecked setters always write."""
        crs = EpsgCrs(25832)
        crs.set_horizontal_unchecked(0)
        crs.set_vertical_unchecked(0)
        assert crs.horizontal == 0
        assert crs.vertical == 0

    def test_clear_vertical(self) -> None:
        """Test clearing the vertical code."""
        crs = EpsgCrs(25832, 5941)
        crs.clear_vertical()
        assert crs.vertical is None


class TestEpsgCrsValueSemantics:
    """Tests for equality, copying and representations."""

    def test_equality(self) -> None:
        """Test CRS compare by value."""
        assert EpsgCrs(25832, 5941) == EpsgCrs(25832, 5941)
        assert EpsgCrs(25832, 5941) != EpsgCrs(25832)
        assert EpsgCrs(25832) != "EPSG:25832"

    def test_hash_by_value(self) -> None:
        """Test equal CRS hash alike and collapse in sets and dicts."""
        assert hash(EpsgCrs(2992)) == hash(EpsgCrs(2992))
        assert hash(EpsgCrs.new_unchecked(25832, 5941)) == hash(EpsgCrs(25832, 5941))
        assert len({EpsgCrs(2992), EpsgCrs(2992), EpsgCrs(2992, 6360)}) == 2

        names = {EpsgCrs(25832, 5941): "ETRS89 / UTM 32N + DHHN2016"}
        assert names[EpsgCrs(25832, 5941)] == "ETRS89 / UTM 32N + DHHN2016"

    def test_copy_is_independent(self) -> None:
        """Test mutating a copy leaves the original untouched."""
        original = EpsgCrs(25832, 5941)
        copied = original.copy()
        copied.set_horizontal(4326)

        assert original.horizontal == 25832
        assert copied == EpsgCrs(4326, 5941)

    def test_str(self) -> None:
        """Test string representation."""
        assert str(EpsgCrs(2992)) == "EPSG:2992"
        assert str(EpsgCrs(25832, 5941)) == "EPSG:25832+5941"

    def test_to_dict(self) -> None:
        """Test conversion to dictionary."""
        assert EpsgCrs(25832, 5941).to_dict() == {"horizontal": 25832, "vertical": 5941}

    def test_repr(self) -> None:
        """Test debugging representation."""
        assert repr(EpsgCrs(2992)) == "EpsgCrs(horizontal=2992, vertical=None)"

    def test_to_pyproj(self) -> None:
        """Test conversion to a pyproj CRS."""
        crs = EpsgCrs(32631).to_pyproj()
        assert crs.to_epsg() == 32631
        assert crs.is_projected is True

    def test_to_pyproj_compound(self) -> None:
        """Test a vertical code yields a compound pyproj CRS."""
        crs = EpsgCrs(25832, 5799).to_pyproj()
        assert crs.is_compound is True
        assert len(crs.sub_crs_list) == 2
        assert crs.sub_crs_list[0].to_epsg() == 25832
        assert crs.sub_crs_list[1].to_epsg() == 5799


class TestGeoTiffModels:
    """Tests for decoded GeoTIFF directory models."""

    def test_payload_variants_compare_by_value(self) -> None:
        """Test payload variants are plain values."""
        assert GeoTiffShort(1) == GeoTiffShort(1)
        assert GeoTiffAscii("WGS 84|") != GeoTiffAscii("WGS 84")
        assert GeoTiffDoubles((1.0, 2.0)).values == (1.0, 2.0)

    def test_find_returns_last_entry(self) -> None:
        """Test find picks the last entry for a repeated key."""
        directory = GeoTiffCrs(
            entries=[
                GeoTiffKeyEntry(3072, GeoTiffShort(25832)),
                GeoTiffKeyEntry(1024, GeoTiffShort(1)),
                GeoTiffKeyEntry(3072, GeoTiffShort(25833)),
            ]
        )

        assert directory.find(3072) == GeoTiffKeyEntry(3072, GeoTiffShort(25833))
        assert directory.find(4096) is None
        assert len(directory) == 3

    def test_directory_defaults(self) -> None:
        """Test header defaults and string form."""
        directory = GeoTiffCrs()
        assert (directory.version, directory.revision, directory.minor_revision) == (1, 1, 0)
        assert str(directory) == "GeoTiffCrs(v1.1.0, 0 keys)"
