import math

from pytest import approx

from geodesics import GeodesicResult


def assert_results_equal(r1: GeodesicResult, r2: GeodesicResult, abs_tol=1e-9):
    """
    Asserts that two geodesic results hold the same quantities within a tolerance.

    Args:
        r1: The first GeodesicResult
        r2: The second GeodesicResult
        abs_tol: The absolute tolerance for floating point comparison. Applied to angles
                 (degrees) as is and to lengths in meters scaled up by 1e5.
    """
    try:
        for field in GeodesicResult._FIELDS:
            v1, v2 = r1[field], r2[field]
            if math.isnan(v1) or math.isnan(v2):
                assert math.isnan(v1) and math.isnan(v2)
                continue

            tol = abs_tol * 1e5 if field in ('s12', 'm12') else abs_tol
            if field == 'S12':
                tol = abs_tol * 1e10
            assert v1 == approx(v2, abs=tol)
    except AssertionError as e:
        print(r1)
        print(r2)
        raise e


def assert_angles_equal(a1: float, a2: float, abs_tol=1e-9):
    """Asserts two angles (degrees) are equal modulo 360"""
    diff = math.remainder(a1 - a2, 360)
    assert abs(diff) <= abs_tol, f'{a1} != {a2}'
