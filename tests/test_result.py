
import math

import pytest

from geodesics import GeodesicMask, GeodesicResult, WGS84


def test_result_defaults():
    res = GeodesicResult()
    for field in GeodesicResult._FIELDS:
        assert math.isnan(res[field])
    assert res.converged
    assert res.to_dict() == {}
    assert repr(res) == '<GeodesicResult()>'


def test_result_getitem():
    res = GeodesicResult(lat1=1., s12=100.)
    assert res['lat1'] == 1.
    assert res['s12'] == 100.
    assert math.isnan(res['M12'])

    with pytest.raises(KeyError):
        _ = res['converged']

    with pytest.raises(KeyError):
        _ = res['distance']


def test_result_repr():
    res = GeodesicResult(lat1=1., lon1=2., s12=100.)
    assert repr(res) == '<GeodesicResult(lat1=1.0, lon1=2.0, s12=100.0)>'

    res = GeodesicResult(s12=-100., converged=False)
    assert repr(res) == '<GeodesicResult(s12=-100.0, converged=False)>'


def test_result_to_dict():
    res = WGS84.inverse(40.6, -73.8, 51.6, -0.5)
    assert set(res.to_dict()) == {'lat1', 'lon1', 'azi1', 'lat2', 'lon2', 'azi2', 's12', 'a12'}

    res = WGS84.inverse(40.6, -73.8, 51.6, -0.5, GeodesicMask.ALL)
    assert set(res.to_dict()) == set(GeodesicResult._FIELDS)
    assert res.to_dict()['s12'] == res.s12
