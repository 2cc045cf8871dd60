
import math

import pytest
from pytest import approx

from geodesics import Geodesic, GeodesicLine, GeodesicMask, WGS84

from tests.functions import assert_angles_equal, assert_results_equal


def test_geodesicline_init():
    line = GeodesicLine(WGS84, 40.6, -73.8, 51.)
    assert line.lat1 == 40.6
    assert line.lon1 == -73.8
    assert line.azi1 == 51.
    assert line.a == WGS84.a
    assert line.f == WGS84.f
    assert math.isnan(line.s13)
    assert math.isnan(line.a13)
    assert repr(line) == '<GeodesicLine(40.6, -73.8, 51.0)>'

    # Azimuths are normalized
    line = GeodesicLine(WGS84, 40.6, -73.8, 411.)
    assert line.azi1 == approx(51., abs=1e-12)


def test_geodesicline_capabilities():
    line = WGS84.line(0., 0., 45., GeodesicMask.LATITUDE | GeodesicMask.LONGITUDE)
    assert line.capabilities(GeodesicMask.LATITUDE)
    assert line.capabilities(GeodesicMask.LONGITUDE)
    # Always available
    assert line.capabilities(GeodesicMask.AZIMUTH)
    assert line.capabilities(GeodesicMask.LONG_UNROLL)
    assert not line.capabilities(GeodesicMask.DISTANCE)
    assert not line.capabilities(GeodesicMask.GEODESICSCALE)
    assert not line.capabilities()

    # Only the series needed for the requested quantities are built
    assert line._c1a is None
    assert line._c1pa is None
    assert line._c2a is None
    assert line._c4a is None
    assert line._c3a is not None

    res = line.arc_position(10., GeodesicMask.ALL)
    assert math.isnan(res.M12)
    assert math.isnan(res.m12)
    assert math.isnan(res.s12)
    assert math.isnan(res.S12)
    assert not math.isnan(res.lat2)
    assert not math.isnan(res.lon2)

    full = WGS84.line(0., 0., 45., GeodesicMask.ALL)
    assert full.capabilities()
    expected = full.arc_position(10., GeodesicMask.ALL)
    assert res.lat2 == approx(expected.lat2, abs=1e-14)
    assert res.lon2 == approx(expected.lon2, abs=1e-14)
    assert res.azi2 == approx(expected.azi2, abs=1e-14)


def test_geodesicline_position_requires_distance_in():
    line = WGS84.line(0., 0., 45., GeodesicMask.STANDARD)
    assert not line.capabilities(GeodesicMask.DISTANCE_IN)

    res = line.position(1e6)
    assert math.isnan(res.lat2)
    assert math.isnan(res.lon2)
    assert math.isnan(res.azi2)
    assert math.isnan(res.a12)

    # Arc mode still works
    res = line.arc_position(10.)
    assert not math.isnan(res.lat2)
    assert not math.isnan(res.s12)


def test_geodesicline_position():
    line = WGS84.line(-32.06, 115.74, 225.)
    res = line.position(20000e3)
    assert res.lat1 == -32.06
    assert res.lon1 == 115.74
    assert res.azi1 == -135.
    assert res.lat2 == approx(32.11195529, abs=1e-8)
    assert res.lon2 == approx(-63.95925278, abs=1e-8)
    assert res.s12 == 20000e3

    # Negative distances travel backwards
    back = line.position(-1e6)
    fwd = WGS84.direct(back.lat2, back.lon2, back.azi2, 1e6)
    assert fwd.lat2 == approx(-32.06, abs=1e-12)
    assert fwd.lon2 == approx(115.74, abs=1e-12)


def test_geodesicline_round_trip():
    line = WGS84.line(40.6, -73.8, 51., GeodesicMask.ALL)
    for distance in (1e3, 1e6, 1.5e7):
        end = line.position(distance, GeodesicMask.ALL)
        reverse = WGS84.line(end.lat2, end.lon2, end.azi2 + 180).position(distance)
        assert reverse.lat2 == approx(40.6, abs=1e-12)
        assert_angles_equal(reverse.lon2, -73.8, abs_tol=1e-12)
        assert_angles_equal(reverse.azi2, 51. + 180, abs_tol=1e-11)

        # The reduced length is symmetric
        back = WGS84.line(end.lat2, end.lon2, end.azi2 + 180, GeodesicMask.ALL)
        assert back.position(distance, GeodesicMask.ALL).m12 == approx(end.m12, abs=1e-7)


def test_geodesicline_arc_position():
    line = WGS84.line(40.6, -73.8, 51., GeodesicMask.ALL)
    dist = line.position(5e6, GeodesicMask.ALL)
    arc = line.arc_position(dist.a12, GeodesicMask.ALL)
    assert_results_equal(dist, arc)

    # Quarter meridians are exact in arc mode
    line = WGS84.line(0., 0., 0.)
    res = line.arc_position(90.)
    assert res.lat2 == approx(90., abs=1e-12)
    assert res.s12 == approx(10001965.729, abs=1e-3)


def test_geodesicline_long_unroll():
    line = WGS84.line(40., -75., -10.)
    res = line.position(2e7, GeodesicMask.STANDARD | GeodesicMask.LONG_UNROLL)
    assert res.lon2 == approx(-254., abs=1)

    res = line.position(2e7)
    assert res.lon2 == approx(105., abs=1)

    line = WGS84.line(0., 539., 90.)
    res = line.position(1e5, GeodesicMask.STANDARD | GeodesicMask.LONG_UNROLL)
    assert res.lon1 == 539.
    res = line.position(1e5)
    assert res.lon1 == approx(179., abs=1e-12)


def test_geodesicline_area():
    line = WGS84.line(0., 0., 45., GeodesicMask.ALL)
    res = line.position(1e6, GeodesicMask.AREA)
    inv = WGS84.inverse(0., 0., res.lat2, res.lon2, GeodesicMask.AREA)
    assert res.S12 == approx(inv.S12, abs=1.)

    # Meridional and equatorial lines enclose no area with the equator
    for azi1 in (0., 90.):
        line = WGS84.line(0., 0., azi1, GeodesicMask.ALL)
        assert line.position(1e6, GeodesicMask.AREA).S12 == approx(0., abs=1e-3)


def test_geodesicline_area_due_south():
    quarter = WGS84.ellipsoid_area / 4

    # Over the pole the azimuth flips from 180 to 0, a change of -180
    line = WGS84.line(-80., 10., 180., GeodesicMask.ALL)
    assert line.azi1 == 180.
    assert line.position(3e6, GeodesicMask.AREA).S12 == approx(-quarter, rel=1e-12)

    # -180 is kept, so the change is +180
    line = WGS84.line(-80., 10., -180., GeodesicMask.ALL)
    assert line.azi1 == -180.
    assert line.position(3e6, GeodesicMask.AREA).S12 == approx(quarter, rel=1e-12)

    # Lines from the inverse solution carry the sign of the zero sine of azi1
    line = WGS84.inverse_line(-80., 10., -70., -170., GeodesicMask.ALL)
    assert line.azi1 == -180.
    assert line.position(line.s13, GeodesicMask.AREA).S12 == approx(quarter, rel=1e-12)


def test_geodesicline_equatorial():
    line = WGS84.line(0., 10., 30.)
    assert line.equatorial_azimuth == approx(30., abs=1e-12)
    assert line.equatorial_arc == approx(0., abs=1e-12)

    line = WGS84.line(-20., 10., 30.)
    assert 0. < line.equatorial_azimuth < 30.
    assert line.equatorial_arc < 0.

    # Meridians cross the equator heading due north
    line = WGS84.line(45., 10., 0.)
    assert line.equatorial_azimuth == approx(0., abs=1e-12)
    # The arc from the equator is the reduced latitude
    assert line.equatorial_arc == approx(44.90379, abs=1e-4)


def test_geodesicline_large_flattening():
    geod = Geodesic(6.4e6, 0.1)
    line = geod.line(1., 2., 10.)
    dist = line.position(5e6)
    assert dist.a12 == approx(48.55570690, abs=0.5e-8)

    arc = line.arc_position(dist.a12, GeodesicMask.STANDARD)
    assert arc.s12 == approx(5e6, abs=1e-3)


def test_waypoints():
    line = WGS84.inverse_line(40.6, -73.8, 51.6, -0.5)
    points = list(line.waypoints(5))
    assert len(points) == 5
    assert points[0].lat2 == approx(40.6, abs=1e-12)
    assert points[0].lon2 == approx(-73.8, abs=1e-12)
    assert points[-1].lat2 == approx(51.6, abs=1e-12)
    assert points[-1].lon2 == approx(-0.5, abs=1e-12)
    for i, point in enumerate(points):
        assert point.s12 == approx(i * line.s13 / 4, abs=1e-8)

    # Lines without distance capabilities are spaced by arc length
    line = WGS84.arc_direct_line(
        40.6, -73.8, 51., 40., GeodesicMask.LATITUDE | GeodesicMask.LONGITUDE
    )
    points = list(line.waypoints(3))
    assert [x.a12 for x in points] == [0., 20., 40.]


def test_waypoints_errors():
    line = WGS84.line(40.6, -73.8, 51.)
    with pytest.raises(ValueError):
        list(line.waypoints(5))

    line = WGS84.direct_line(40.6, -73.8, 51., 1e6)
    with pytest.raises(ValueError):
        list(line.waypoints(1))
