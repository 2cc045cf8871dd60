
import math

import numpy as np
import pytest
from pytest import approx

from geodesics.series import *


def test_resolve_order():
    assert resolve_order('low') == 3
    assert resolve_order('medium') == 5
    assert resolve_order('standard') == 6
    assert resolve_order(4) == 4

    with pytest.raises(ValueError):
        resolve_order('extended')

    with pytest.raises(ValueError):
        resolve_order(2)

    with pytest.raises(ValueError):
        resolve_order(7)

    with pytest.raises(ValueError):
        resolve_order(True)

    with pytest.raises(ValueError):
        resolve_order(6.)


def test_scale_factors():
    assert a1m1f(0.) == 0.
    assert a2m1f(0.) == 0.

    # A1 = (1 + eps^2/4 + eps^4/64 + ...) / (1 - eps), A2 = (1 - 3 eps^2/4 - ...) / (1 + eps)
    eps = 1e-3
    assert 1 + a1m1f(eps) == approx((1 + eps ** 2 / 4 + eps ** 4 / 64) / (1 - eps), rel=1e-14)
    assert 1 + a2m1f(eps) == approx((1 - 3 * eps ** 2 / 4 - 7 * eps ** 4 / 64) / (1 + eps), rel=1e-14)

    # Lower orders agree to within their truncation error
    eps = 0.01
    assert a1m1f(eps, 3) == approx(a1m1f(eps, 6), abs=eps ** 4)
    assert a2m1f(eps, 3) == approx(a2m1f(eps, 6), abs=eps ** 4)


def test_fourier_coefficients():
    eps = 0.01
    for fn in (c1f, c1pf, c2f):
        coeffs = fn(eps)
        assert len(coeffs) == 7
        assert coeffs[0] == 0.
        # Each coefficient is O(eps^l)
        for l in range(1, 7):
            assert abs(coeffs[l]) < eps ** l

        low = fn(eps, 3)
        assert len(low) == 4
        for l in range(1, 4):
            assert low[l] == approx(coeffs[l], abs=eps ** 4)

    # C1[1] = -eps/2 + 3 eps^3/16 - eps^5/32
    assert c1f(eps)[1] == approx(-eps / 2 + 3 * eps ** 3 / 16 - eps ** 5 / 32, rel=1e-12)
    # C1'[1] = eps/2 - 9 eps^3/32 + ...
    assert c1pf(eps)[1] == approx(eps / 2 - 9 * eps ** 3 / 32, rel=1e-8)
    # C2[1] = eps/2 + eps^3/16 + ...
    assert c2f(eps)[1] == approx(eps / 2 + eps ** 3 / 16, rel=1e-8)


def test_sphere_tables():
    # n = 0: A3 = 1 - eps/2 - eps^2/4 - ..., C3 and C4 only depend on eps
    a3x = a3_coefficients(0.)
    assert len(a3x) == 6
    assert a3f(0., a3x) == 1.
    assert a3f(0.01, a3x) == approx(1 - 0.01 / 2 - 0.01 ** 2 / 4, rel=1e-6)

    c4x = c4_coefficients(0.)
    c4 = c4f(0., c4x)
    assert len(c4) == 6
    # C4[0] at n = eps = 0 is 2/3
    assert c4[0] == approx(2 / 3)
    assert c4[1:] == [0.] * 5


def test_table_sizes():
    n = 0.0016792203863837047
    for order in (3, 4, 5, 6):
        assert len(a3_coefficients(n, order)) == order
        assert len(c3_coefficients(n, order)) == order * (order - 1) // 2
        assert len(c4_coefficients(n, order)) == order * (order + 1) // 2

        c3x = c3_coefficients(n, order)
        assert len(c3f(0.001, c3x, order)) == order
        c4x = c4_coefficients(n, order)
        assert len(c4f(0.001, c4x, order)) == order


def test_tables_read_only():
    for table in (a3_coefficients(0.01), c3_coefficients(0.01), c4_coefficients(0.01)):
        assert isinstance(table, np.ndarray)
        assert not table.flags.writeable
        with pytest.raises(ValueError):
            table[0] = 1.


def test_lower_order_tables_truncate():
    n = 0.01
    eps = 0.01
    std = c3f(eps, c3_coefficients(n), 6)
    low = c3f(eps, c3_coefficients(n, 3), 3)
    for l in range(1, 3):
        assert low[l] == approx(std[l], abs=1e-6)

    std = c4f(eps, c4_coefficients(n), 6)
    low = c4f(eps, c4_coefficients(n, 3), 3)
    for l in range(3):
        assert low[l] == approx(std[l], abs=1e-5)


def test_sin_cos_series():
    x = 0.7
    sinx, cosx = math.sin(x), math.cos(x)

    c = [0., 0.1, 0.2, 0.3]
    expected = sum(c[i] * math.sin(2 * i * x) for i in range(1, len(c)))
    assert sin_cos_series(True, sinx, cosx, c) == approx(expected, abs=1e-14)

    c = [0., 0.1, 0.2, 0.3, -0.05]
    expected = sum(c[i] * math.sin(2 * i * x) for i in range(1, len(c)))
    assert sin_cos_series(True, sinx, cosx, c) == approx(expected, abs=1e-14)

    c = [0.1, 0.2, 0.3]
    expected = sum(c[i] * math.cos((2 * i + 1) * x) for i in range(len(c)))
    assert sin_cos_series(False, sinx, cosx, c) == approx(expected, abs=1e-14)

    c = [0.1, 0.2, 0.3, 0.4]
    expected = sum(c[i] * math.cos((2 * i + 1) * x) for i in range(len(c)))
    assert sin_cos_series(False, sinx, cosx, c) == approx(expected, abs=1e-14)

    # Sine series vanish at multiples of 90 degrees
    assert sin_cos_series(True, 1., 0., [0., 0.1, 0.2]) == 0.
