"""Tests for grid indexing."""

import pytest

from hotspot_engine.services.grid import (
    METERS_PER_DEGREE_LAT,
    GridCell,
    _round_half_up,
    format_grid_id,
    haversine_km,
    index_of,
    parse_grid_id,
)


class TestIndexOf:
    """Tests for index_of cell assignment."""

    def test_identical_coordinates_share_grid_id(self):
        """The same coordinate always maps to the same key."""
        first = index_of(37.78825, -122.4324)
        second = index_of(37.78825, -122.4324)
        assert first == second

    def test_floating_noise_does_not_change_grid_id(self):
        """Differences far below the cell size must not move a point."""
        base = index_of(37.78825, -122.4324)
        noisy = index_of(37.78825 + 1e-12, -122.4324 - 1e-12)
        assert noisy.grid_id == base.grid_id

    def test_nearby_reports_share_a_cell(self):
        """Two sightings ~10 m apart fall into the same 1 km cell."""
        a = index_of(37.78825, -122.4324)
        b = index_of(37.78830, -122.4325)
        assert a.grid_id == b.grid_id

    def test_grid_id_stable_across_cell(self):
        """Points with the same lat and lng steps share one key and center."""
        base = index_of(37.78825, -122.4324)
        for lat, lng in [(37.78826, -122.4324), (37.78830, -122.4325), (37.78900, -122.4324)]:
            cell = index_of(lat, lng)
            assert cell.grid_id == base.grid_id
            assert (cell.cell_lat, cell.cell_lng) == (base.cell_lat, base.cell_lng)

    def test_sighting_pair_key(self):
        """The 10 m sighting pair maps to the known 1 km cell key."""
        assert index_of(37.78825, -122.4324).grid_id.startswith("37.791951_")
        assert index_of(37.78830, -122.4325).grid_id == index_of(37.78825, -122.4324).grid_id

    def test_distant_reports_use_different_cells(self):
        """Points several kilometers apart never share a cell."""
        a = index_of(37.78825, -122.4324)
        b = index_of(37.80825, -122.4324)
        assert a.grid_id != b.grid_id

    def test_returns_grid_cell(self):
        """index_of returns the center and the key together."""
        cell = index_of(51.5007, -0.1246)
        assert isinstance(cell, GridCell)
        assert cell.grid_id == format_grid_id(cell.cell_lat, cell.cell_lng)

    def test_center_is_within_half_a_cell(self):
        """The cell center is never more than half a cell from the point."""
        lat, lng = 37.78825, -122.4324
        cell = index_of(lat, lng)
        half_cell_km = 0.5 * 2**0.5 + 0.01
        assert haversine_km(lat, lng, cell.cell_lat, cell.cell_lng) <= half_cell_km

    def test_latitude_step_matches_cell_size(self):
        """Latitude is snapped to multiples of cell_size / 111320 degrees."""
        step = 1000 / METERS_PER_DEGREE_LAT
        cell = index_of(10.0, 20.0)
        assert cell.cell_lat / step == pytest.approx(round(cell.cell_lat / step))

    def test_halves_round_up(self):
        """A coordinate exactly between two steps goes to the upper one."""
        # One degree cells make the halfway point exact
        assert index_of(0.5, 0.0, cell_size_meters=METERS_PER_DEGREE_LAT).cell_lat == 1.0
        assert index_of(-0.5, 0.0, cell_size_meters=METERS_PER_DEGREE_LAT).cell_lat == 0.0

    def test_longitude_steps_widen_with_latitude(self):
        """Longitude cells span more degrees away from the equator."""
        size = METERS_PER_DEGREE_LAT  # one degree of latitude per cell
        equator = index_of(0.0, 0.6, cell_size_meters=size)
        north = index_of(60.0, 0.6, cell_size_meters=size)
        assert equator.cell_lng == pytest.approx(1.0)
        # cos(60) = 0.5, so a cell spans two degrees of longitude there
        assert north.cell_lng == pytest.approx(0.0)

    def test_custom_cell_size(self):
        """Smaller cells separate points ~80 m apart that share a 1 km cell."""
        a = (37.78825, -122.4324)
        b = (37.78900, -122.4324)
        assert index_of(*a).grid_id == index_of(*b).grid_id
        assert index_of(*a, cell_size_meters=100).grid_id != index_of(*b, cell_size_meters=100).grid_id


class TestGridId:
    """Tests for grid id formatting."""

    def test_fixed_six_decimal_format(self):
        """Keys always carry six decimals and an underscore separator."""
        assert format_grid_id(1.0, -2.5) == "1.000000_-2.500000"

    def test_grid_id_shape(self):
        """Keys built by index_of follow the same format."""
        lat_text, lng_text = index_of(37.78825, -122.4324).grid_id.split("_")
        assert len(lat_text.split(".")[1]) == 6
        assert len(lng_text.split(".")[1]) == 6

    def test_parse_grid_id_recovers_center(self):
        """The center can be read back from the key."""
        cell = index_of(37.78825, -122.4324)
        lat, lng = parse_grid_id(cell.grid_id)
        assert lat == pytest.approx(cell.cell_lat, abs=1e-6)
        assert lng == pytest.approx(cell.cell_lng, abs=1e-6)


class TestHaversine:
    """Tests for great-circle distance."""

    def test_zero_distance(self):
        assert haversine_km(37.7, -122.4, 37.7, -122.4) == 0.0

    def test_one_degree_of_longitude_at_equator(self):
        assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(111.195, abs=0.01)

    def test_symmetric(self):
        assert haversine_km(10, 20, 30, 40) == pytest.approx(haversine_km(30, 40, 10, 20))


class TestRoundHalfUp:
    """Tests for half-up rounding."""

    def test_halves_go_up(self):
        assert _round_half_up(2.5) == 3
        assert _round_half_up(-2.5) == -2

    def test_just_below_half_goes_down(self):
        assert _round_half_up(0.49999999999999994) == 0
        assert _round_half_up(-0.5000000000000001) == -1
