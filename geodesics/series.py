"""
Series approximations to the integrals that appear in the ellipsoidal geodesic problem.

The distance integral I1, the reduced length integral I2, the longitude integral I3 and
the area integral I4 are expanded in the small parameter

    eps = k2 / (2 * (1 + sqrt(1 + k2)) + k2),    k2 = ep2 * cos(alpha0)^2

and, for I3 and I4, in the third flattening n = f / (2 - f). The coefficients below are
those of the order 6 expansions. Lower orders are exact truncations of them: the rows
hold polynomial numerators highest power first, followed by a common denominator, so a
lower order keeps only the trailing (lowest power) numerators of each row.
"""

__all__ = [
    'a1m1f', 'a2m1f', 'a3_coefficients', 'a3f', 'c1f', 'c1pf', 'c2f',
    'c3_coefficients', 'c3f', 'c4_coefficients', 'c4f', 'resolve_order',
    'sin_cos_series',
]

from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

from geodesics._const import MAX_ORDER, MIN_ORDER, PRECISION_TIERS
from geodesics.utils.functions import polyval, sq

# A1 - 1 = (eps + t) / (1 - eps), t a polynomial in eps^2
_A1M1_COEFFS = (1, 4, 64, 0, 256)

# A2 - 1 = (t - eps) / (1 + eps), t a polynomial in eps^2
_A2M1_COEFFS = (-11, -28, -192, 0, 256)

# C1[l] / eps^l, polynomials in eps^2
_C1_COEFFS = {
    1: (-1, 6, -16, 32),
    2: (-9, 64, -128, 2048),
    3: (9, -16, 768),
    4: (3, -5, 512),
    5: (-7, 1280),
    6: (-7, 2048),
}

# C1'[l] / eps^l, polynomials in eps^2; these revert the C1 series
_C1P_COEFFS = {
    1: (205, -432, 768, 1536),
    2: (4005, -4736, 3840, 12288),
    3: (-225, 116, 384),
    4: (-7173, 2695, 7680),
    5: (3467, 7680),
    6: (38081, 61440),
}

# C2[l] / eps^l, polynomials in eps^2
_C2_COEFFS = {
    1: (1, 2, 16, 32),
    2: (35, 64, 384, 2048),
    3: (15, 80, 768),
    4: (7, 35, 512),
    5: (63, 1280),
    6: (77, 2048),
}

# A3, keyed by the power j of eps; polynomials in n
_A3_COEFFS = {
    5: (-3, 128),
    4: (-2, -3, 64),
    3: (-1, -3, -1, 16),
    2: (3, -1, -2, 8),
    1: (1, -1, 2),
    0: (1, 1),
}

# C3[l], keyed by (l, power j of eps); polynomials in n
_C3_COEFFS = {
    (1, 5): (3, 128),
    (1, 4): (2, 5, 128),
    (1, 3): (-1, 3, 3, 64),
    (1, 2): (-1, 0, 1, 8),
    (1, 1): (-1, 1, 4),
    (2, 5): (5, 256),
    (2, 4): (1, 3, 128),
    (2, 3): (-3, -2, 3, 64),
    (2, 2): (1, -3, 2, 32),
    (3, 5): (7, 512),
    (3, 4): (-10, 9, 384),
    (3, 3): (5, -9, 5, 192),
    (4, 5): (7, 512),
    (4, 4): (-14, 7, 512),
    (5, 5): (21, 2560),
}

# C4[l], keyed by (l, power j of eps); polynomials in n
_C4_COEFFS = {
    (0, 5): (97, 15015),
    (0, 4): (1088, 156, 45045),
    (0, 3): (-224, -4784, 1573, 45045),
    (0, 2): (-10656, 14144, -4576, -858, 45045),
    (0, 1): (64, 624, -4576, 6864, -3003, 15015),
    (0, 0): (100, 208, 572, 3432, -12012, 30030, 45045),
    (1, 5): (1, 9009),
    (1, 4): (-2944, 468, 135135),
    (1, 3): (5792, 1040, -1287, 135135),
    (1, 2): (5952, -11648, 9152, -2574, 135135),
    (1, 1): (-64, -624, 4576, -6864, 3003, 135135),
    (2, 5): (8, 10725),
    (2, 4): (1856, -936, 225225),
    (2, 3): (-8448, 4992, -1144, 225225),
    (2, 2): (-1440, 4160, -4576, 1716, 225225),
    (3, 5): (-136, 63063),
    (3, 4): (1024, -208, 105105),
    (3, 3): (3584, -3328, 1144, 315315),
    (4, 5): (-128, 135135),
    (4, 4): (-2560, 832, 405405),
    (5, 5): (128, 99099),
}


def resolve_order(order: Union[str, int]) -> int:
    """
    Convert a precision tier name or an explicit series order to a series order.

    Args:
        order:
            One of the tier names in PRECISION_TIERS ('low', 'medium', 'standard'),
            or an integer order between 3 and 6

    Returns:
        (int) the series order
    """
    if isinstance(order, str):
        if order not in PRECISION_TIERS:
            raise ValueError(
                f"Unknown precision tier '{order}'. Options: {list(PRECISION_TIERS.keys())}"
            )
        return PRECISION_TIERS[order]

    if isinstance(order, bool) or not isinstance(order, int):
        raise ValueError(f'Series order must be a tier name or an integer, not {order!r}')

    if not MIN_ORDER <= order <= MAX_ORDER:
        raise ValueError(f'Series order must lie in [{MIN_ORDER}, {MAX_ORDER}], not {order}')

    return order


def _truncate(row: Sequence[int], degree: int) -> Tuple[Sequence[int], int]:
    """Split a coefficient row into its lowest `degree + 1` numerators and denominator"""
    numerators, denominator = row[:-1], row[-1]
    return numerators[len(numerators) - degree - 1:], denominator


def _read_only(values: List[float]) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


def _eps2_series(table: Dict[int, Sequence[int]], eps: float, order: int) -> List[float]:
    """Coefficients c[l] = eps^l * P_l(eps^2), l = 1..order; c[0] is unused"""
    eps2 = sq(eps)
    c = [0.0] * (order + 1)
    d = eps
    for l in range(1, order + 1):
        numerators, denominator = _truncate(table[l], (order - l) // 2)
        c[l] = d * polyval(numerators, eps2) / denominator
        d *= eps
    return c


def a1m1f(eps: float, order: int = MAX_ORDER) -> float:
    """The scale factor A1 - 1 of the distance integral"""
    numerators, denominator = _truncate(_A1M1_COEFFS, order // 2)
    t = polyval(numerators, sq(eps)) / denominator
    return (t + eps) / (1 - eps)


def c1f(eps: float, order: int = MAX_ORDER) -> List[float]:
    """Fourier coefficients C1[l] of the distance integral"""
    return _eps2_series(_C1_COEFFS, eps, order)


def c1pf(eps: float, order: int = MAX_ORDER) -> List[float]:
    """Fourier coefficients C1'[l] mapping distance back to arc length"""
    return _eps2_series(_C1P_COEFFS, eps, order)


def a2m1f(eps: float, order: int = MAX_ORDER) -> float:
    """The scale factor A2 - 1 of the reduced length integral"""
    numerators, denominator = _truncate(_A2M1_COEFFS, order // 2)
    t = polyval(numerators, sq(eps)) / denominator
    return (t - eps) / (1 + eps)


def c2f(eps: float, order: int = MAX_ORDER) -> List[float]:
    """Fourier coefficients C2[l] of the reduced length integral"""
    return _eps2_series(_C2_COEFFS, eps, order)


def a3_coefficients(n: float, order: int = MAX_ORDER) -> np.ndarray:
    """
    The A3 table for an ellipsoid: coefficients of eps^j (highest power first) in the
    longitude integral's scale factor, each evaluated at the third flattening n.
    """
    values = []
    for j in range(order - 1, -1, -1):
        numerators, denominator = _truncate(_A3_COEFFS[j], min(order - j - 1, j))
        values.append(polyval(numerators, n) / denominator)
    return _read_only(values)


def c3_coefficients(n: float, order: int = MAX_ORDER) -> np.ndarray:
    """The C3 table for an ellipsoid, order * (order - 1) / 2 entries"""
    values = []
    for l in range(1, order):
        for j in range(order - 1, l - 1, -1):
            numerators, denominator = _truncate(_C3_COEFFS[l, j], min(order - j - 1, j))
            values.append(polyval(numerators, n) / denominator)
    return _read_only(values)


def c4_coefficients(n: float, order: int = MAX_ORDER) -> np.ndarray:
    """The C4 table for an ellipsoid, order * (order + 1) / 2 entries"""
    values = []
    for l in range(order):
        for j in range(order - 1, l - 1, -1):
            numerators, denominator = _truncate(_C4_COEFFS[l, j], order - j - 1)
            values.append(polyval(numerators, n) / denominator)
    return _read_only(values)


def a3f(eps: float, a3x: np.ndarray) -> float:
    """Evaluate the A3 scale factor at eps"""
    return float(polyval(a3x, eps))


def c3f(eps: float, c3x: np.ndarray, order: int = MAX_ORDER) -> List[float]:
    """Evaluate the C3[l] coefficients, l = 1..order-1, at eps; c[0] is unused"""
    c = [0.0] * order
    mult = 1.0
    o = 0
    for l in range(1, order):
        m = order - l - 1  # order of the polynomial in eps
        mult *= eps
        c[l] = mult * float(polyval(c3x[o:o + m + 1], eps))
        o += m + 1
    return c


def c4f(eps: float, c4x: np.ndarray, order: int = MAX_ORDER) -> List[float]:
    """Evaluate the C4[l] coefficients, l = 0..order-1, at eps"""
    c = [0.0] * order
    mult = 1.0
    o = 0
    for l in range(order):
        m = order - l - 1  # order of the polynomial in eps
        c[l] = mult * float(polyval(c4x[o:o + m + 1], eps))
        o += m + 1
        mult *= eps
    return c


def sin_cos_series(sinp: bool, sinx: float, cosx: float, c: Sequence[float]) -> float:
    """
    Evaluate, with Clenshaw summation,

        sinp:     sum(c[i] * sin(2 * i * x), i = 1 .. len(c) - 1)
        not sinp: sum(c[i] * cos((2 * i + 1) * x), i = 0 .. len(c) - 1)

    c[0] is unused for the sine series.
    """
    k = len(c)  # One beyond the last element
    n = k - (1 if sinp else 0)
    ar = 2 * (cosx - sinx) * (cosx + sinx)  # 2 * cos(2 * x)
    y1 = 0.0
    if n & 1:
        k -= 1
        y0 = c[k]
    else:
        y0 = 0.0

    # Now n is even; unroll by two so the accumulators return to their original role
    n = n // 2
    while n:
        n -= 1
        k -= 1
        y1 = ar * y0 - y1 + c[k]
        k -= 1
        y0 = ar * y1 - y0 + c[k]

    return (
        2 * sinx * cosx * y0 if sinp  # sin(2 * x) * y0
        else cosx * (y0 - y1)         # cos(x) * (y0 - y1)
    )
