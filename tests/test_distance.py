
import math

from pytest import approx

from geodesics import Geodesic
from geodesics.distance import *


def test_distance_meters():
    expected = 156.903471
    actual = distance_meters(0.0, 0.0, 0.001, 0.001)
    assert expected == approx(actual, abs=1e-6)

    expected = 156_899.568291
    actual = distance_meters(0.0, 0.0, 1.0, 1.0)
    assert expected == approx(actual, abs=1e-6)

    # Antimeridian test
    expected = 222_638.981586
    actual = distance_meters(0., 179., 0., -179.)
    assert expected == approx(actual, abs=1e-6)

    assert distance_meters(10., 10., 10., 10.) == 0.

    # Nearly antipodal points
    expected = 19_959_679.267
    actual = distance_meters(-41.32, 174.81, 40.96, -5.50)
    assert expected == approx(actual, abs=1e-3)


def test_distance_meters_other_ellipsoid():
    sphere = Geodesic(6_371_000., 0.)
    expected = 6_371_000. * math.radians(1.)
    actual = distance_meters(0., 0., 0., 1., geodesic=sphere)
    assert expected == approx(actual, abs=1e-6)


def test_bearing_degrees():
    expected = 45.192423
    actual = bearing_degrees(0.0, 0.0, 0.001, 0.001)
    assert actual == approx(expected, abs=1e-6)

    # Follow equator exactly
    assert bearing_degrees(0., 0., 0., 1.) == 90.
    assert bearing_degrees(0., 0., 0., -1.) == 270.
    assert bearing_degrees(0., 0., -1., 0.) == 180.

    # Range is [0, 360)
    actual = bearing_degrees(0.0, 0.0, 0.001, -0.001)
    assert actual == approx(360 - expected, abs=1e-6)


def test_destination_point():
    lat, lon = destination_point(0.0, 0.0, 45., 111_000)
    assert lat == approx(0.709811, abs=1e-6)
    assert lon == approx(0.705113, abs=1e-6)

    lat, lon = destination_point(0.0, 0.0, 90., 0.)
    assert (lat, lon) == (0., 0.)

    sphere = Geodesic(6_371_000., 0.)
    lat, lon = destination_point(0., 0., 0., 6_371_000. * math.pi / 2, geodesic=sphere)
    assert lat == approx(90., abs=1e-9)
