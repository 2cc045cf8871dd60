"""Module for angle and floating point helpers shared by the geodesic solvers"""

__all__ = [
    'ang_diff', 'ang_normalize', 'ang_round', 'atan2d', 'cbrt', 'error_free_sum',
    'lat_fix', 'norm', 'polyval', 'sincosd', 'sincosde', 'sq'
]

import math
from typing import Sequence, Tuple


def sq(x: float) -> float:
    """Square a number"""
    return x * x


def cbrt(x: float) -> float:
    """Real cube root of a number"""
    y = math.pow(abs(x), 1 / 3.0)
    return y if x > 0 else (-y if x < 0 else x)


def norm(x: float, y: float) -> Tuple[float, float]:
    """
    Rescale a sine/cosine pair so that it lies on the unit circle.

    Args:
        x:
            The sine-like component

        y:
            The cosine-like component

    Returns:
        The (x, y) pair divided by hypot(x, y)
    """
    r = math.hypot(x, y)
    return x / r, y / r


def error_free_sum(u: float, v: float) -> Tuple[float, float]:
    """
    Error free transformation of a sum.

    Returns:
        (s, t) such that s = round(u + v) and t = u + v - s exactly
    """
    s = u + v
    up = s - v
    vpp = s - up
    up -= u
    vpp -= v
    t = s if s == 0 else 0.0 - (up + vpp)
    return s, t


def polyval(coeffs: Sequence[float], x: float) -> float:
    """
    Evaluate a polynomial with Horner's method.

    Args:
        coeffs:
            The polynomial coefficients, highest power first

        x:
            The value at which to evaluate the polynomial

    Returns:
        (float) the polynomial's value
    """
    y = 0.0
    for coeff in coeffs:
        y = y * x + coeff
    return y


def ang_round(x: float) -> float:
    """
    Coarsen a value close to zero so that the smallest gap is 1/2^57 (0.7 pm on the
    earth when x is in degrees). This avoids having to deal with near-singular cases
    when x is non-zero but tiny.
    """
    z = 1 / 16.0
    y = abs(x)
    # z - (z - y) must not be simplified to y
    y = z - (z - y) if y < z else y
    return math.copysign(y, x)


def ang_normalize(x: float) -> float:
    """Reduce an angle to [-180, 180]"""
    y = math.remainder(x, 360)
    return math.copysign(180.0, x) if abs(y) == 180 else y


def lat_fix(x: float) -> float:
    """Replace latitudes outside [-90, 90] with NaN"""
    return math.nan if abs(x) > 90 else x


def ang_diff(x: float, y: float) -> Tuple[float, float]:
    """
    Compute y - x reduced to [-180, 180] exactly.

    Returns:
        (d, e) where d is the rounded difference and e the rounding error
    """
    d, t = error_free_sum(math.remainder(-x, 360), math.remainder(y, 360))
    d, t = error_free_sum(math.remainder(d, 360), t)
    if d == 0 or abs(d) == 180:
        d = math.copysign(d, y - x if t == 0 else -t)
    return d, t


def _quadrant_sincos(s: float, c: float, q: int) -> Tuple[float, float]:
    q = q % 4
    if q == 1:
        s, c = c, -s
    elif q == 2:
        s, c = -s, -c
    elif q == 3:
        s, c = -c, s
    return s, c


def sincosd(x: float) -> Tuple[float, float]:
    """
    Sine and cosine of an angle in degrees, exact at multiples of 90 degrees.

    Args:
        x:
            The angle, in degrees

    Returns:
        (sin(x), cos(x))
    """
    r = math.fmod(x, 360) if math.isfinite(x) else math.nan
    q = 0 if math.isnan(r) else int(round(r / 90))
    r = math.radians(r - 90 * q)
    s, c = _quadrant_sincos(math.sin(r), math.cos(r), q)
    # Convert -0 to +0 for the cosine, keep the sign of zero for the sine
    c = c + 0.0
    if s == 0:
        s = math.copysign(s, x)
    return s, c


def sincosde(x: float, t: float) -> Tuple[float, float]:
    """Sine and cosine of x + t (degrees), where t is a small correction to x"""
    q = int(round(x / 90)) if math.isfinite(x) else 0
    r = math.radians(ang_round((x - 90 * q) + t))
    s, c = _quadrant_sincos(math.sin(r), math.cos(r), q)
    c = c + 0.0
    if s == 0:
        s = math.copysign(s, x)
    return s, c


def atan2d(y: float, x: float) -> float:
    """
    Two-argument arctangent in degrees, in [-180, 180], reducing to the first octant
    first so that results at multiples of 45 degrees are exact.
    """
    if abs(y) > abs(x):
        q = 2
        x, y = y, x
    else:
        q = 0
    if x < 0:
        q += 1
        x = -x
    ang = math.degrees(math.atan2(y, x))
    if q == 1:
        ang = math.copysign(180, y) - ang
    elif q == 2:
        ang = 90 - ang
    elif q == 3:
        ang = -90 + ang
    return ang
