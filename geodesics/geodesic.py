"""
Solution of the direct and inverse geodesic problems on an ellipsoid of revolution.

The shortest path between two points on the ellipsoid at (lat1, lon1) and (lat2, lon2) is
the geodesic. Its length is s12 and it has (forward) azimuths azi1 and azi2 at the two end
points. Fixing point 1 and increasing s12 by ds12 moves point 2 by ds12 in the direction
azi2; increasing azi1 by dazi1 (radians) moves point 2 by m12 * dazi1 in the direction
azi2 + 90. m12 is the reduced length; M12 and M21 are the geodesic scales; S12 is the area
between the geodesic and the equator.

Given lat1, lon1, azi1 and s12, finding point 2 is the direct problem; given both points,
finding s12, azi1 and azi2 is the inverse problem. The arc length a12 on the auxiliary
sphere may be used instead of s12 to measure distance along a geodesic.

The calculations are accurate to round-off for |f| < 1/50 (15 nm for the Earth), and
remain usable for |f| up to about 1/5.
"""

__all__ = ['EllipsoidError', 'Geodesic', 'WGS84']

import math
from typing import List, Tuple, Union

from geodesics import series
from geodesics._const import (
    DEFAULT_PRECISION, MAX_ITERATIONS, NEWTON_ITERATIONS, TINY, TOL0, TOL1, TOL2, TOLB,
    VALIDATED_FLATTENING, WGS84_A, WGS84_F, XTHRESH
)
from geodesics.geodesicline import GeodesicLine
from geodesics.masks import GeodesicMask
from geodesics.result import GeodesicResult
from geodesics.utils.functions import (
    ang_diff, ang_normalize, ang_round, atan2d, cbrt, lat_fix, norm, sincosd, sincosde, sq
)
from geodesics.utils.mixins import LoggingMixin


class EllipsoidError(ValueError):
    """Raised when a Geodesic is created with parameters that do not describe an ellipsoid"""


class Geodesic(LoggingMixin):
    """
    Geodesic calculations on an ellipsoid of revolution.

    Args:
        a:
            The equatorial radius of the ellipsoid. Distances are returned in the same unit.

        f:
            The flattening of the ellipsoid. f = 0 gives a sphere, negative f a prolate
            ellipsoid.

        order: (str or int) (Default 'standard')
            The precision tier of the series expansions: 'low' (order 3), 'medium' (order 5)
            or 'standard' (order 6), or an explicit order between 3 and 6.

        max_iterations: (int) (Default 50)
            The cap on iterations of the inverse solution. A solution that exhausts it is
            returned with converged=False.

    Raises:
        EllipsoidError: if a is not positive or the polar semi-axis is not positive
    """

    def __init__(
        self,
        a: float,
        f: float,
        order: Union[str, int] = DEFAULT_PRECISION,
        max_iterations: int = MAX_ITERATIONS,
    ):
        super().__init__()
        self.a = float(a)
        self.f = float(f)
        if not (math.isfinite(self.a) and self.a > 0):
            raise EllipsoidError(f'Equatorial radius must be positive, not {a}')
        if not math.isfinite(self.f):
            raise EllipsoidError(f'Flattening must be finite, not {f}')

        self.f1 = 1 - self.f
        self.e2 = self.f * (2 - self.f)
        self.ep2 = self.e2 / sq(self.f1)  # e2 / (1 - e2)
        self.n = self.f / (2 - self.f)
        self.b = self.a * self.f1
        if not (math.isfinite(self.b) and self.b > 0):
            raise EllipsoidError(f'Polar semi-axis must be positive, not {self.b}')

        # Authalic radius squared
        if self.e2 == 0:
            authalic_factor = 1.0
        elif self.e2 > 0:
            authalic_factor = math.atanh(math.sqrt(self.e2)) / math.sqrt(self.e2)
        else:
            authalic_factor = math.atan(math.sqrt(-self.e2)) / math.sqrt(-self.e2)
        self.c2 = (sq(self.a) + sq(self.b) * authalic_factor) / 2

        # The sig12 threshold for "really short" lines. Solving these on the auxiliary sphere
        # with dnm computed at (bet1 + bet2) / 2 gives a relative azimuth error of
        # sig12^2 * |f| * min(1, 1 - f/2) / 2; setting this to epsilon gives etol2. 0.1 is a
        # safety factor and max(0.001, |f|) bounds etol2 in the nearly spherical case.
        self._etol2 = 0.1 * TOL2 / math.sqrt(
            max(0.001, abs(self.f)) * min(1.0, 1 - self.f / 2) / 2
        )

        self.order = series.resolve_order(order)
        if max_iterations < 1:
            raise ValueError(f'max_iterations must be at least 1, not {max_iterations}')
        self.max_iterations = max_iterations

        if not VALIDATED_FLATTENING[0] <= self.f <= VALIDATED_FLATTENING[1]:
            self.warn_once(
                f'Flattening {self.f} lies outside the validated range '
                f'[{VALIDATED_FLATTENING[0]}, {VALIDATED_FLATTENING[1]}]; '
                'results may be inaccurate.'
            )

        self._a3x = series.a3_coefficients(self.n, self.order)
        self._c3x = series.c3_coefficients(self.n, self.order)
        self._c4x = series.c4_coefficients(self.n, self.order)

    def __repr__(self):
        return f'<Geodesic(a={self.a}, f={self.f}, order={self.order})>'

    @property
    def inverse_flattening(self) -> float:
        """1/f, or infinity for a sphere"""
        return math.inf if self.f == 0 else 1 / self.f

    @property
    def ellipsoid_area(self) -> float:
        """The total area of the ellipsoid"""
        return 4 * math.pi * self.c2

    def _a3f(self, eps: float) -> float:
        return series.a3f(eps, self._a3x)

    def _c3f(self, eps: float) -> List[float]:
        return series.c3f(eps, self._c3x, self.order)

    def _c4f(self, eps: float) -> List[float]:
        return series.c4f(eps, self._c4x, self.order)

    def _lengths(  # pylint: disable=too-many-arguments, too-many-locals
        self, eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2, outmask
    ) -> Tuple[float, float, float, float, float]:
        """
        Returns:
            (s12b, m12b, m0, M12, M21), where s12b and m12b are the distance and reduced
            length divided by b, and m0 is the coefficient of the secular term of the
            reduced length
        """
        outmask &= GeodesicMask.OUT_MASK
        s12b = m12b = m0 = M12 = M21 = math.nan
        need_c2 = outmask & (GeodesicMask.REDUCEDLENGTH | GeodesicMask.GEODESICSCALE)
        if outmask & GeodesicMask.DISTANCE or need_c2:
            A1 = series.a1m1f(eps, self.order)  # pylint: disable=invalid-name
            c1a = series.c1f(eps, self.order)
            if need_c2:
                A2 = series.a2m1f(eps, self.order)  # pylint: disable=invalid-name
                c2a = series.c2f(eps, self.order)
                m0x = A1 - A2
                A2 = 1 + A2  # pylint: disable=invalid-name
            A1 = 1 + A1  # pylint: disable=invalid-name

        if outmask & GeodesicMask.DISTANCE:
            B1 = (  # pylint: disable=invalid-name
                series.sin_cos_series(True, ssig2, csig2, c1a)
                - series.sin_cos_series(True, ssig1, csig1, c1a)
            )
            # Missing a factor of b
            s12b = A1 * (sig12 + B1)
            if need_c2:
                B2 = (  # pylint: disable=invalid-name
                    series.sin_cos_series(True, ssig2, csig2, c2a)
                    - series.sin_cos_series(True, ssig1, csig1, c2a)
                )
                J12 = m0x * sig12 + (A1 * B1 - A2 * B2)  # pylint: disable=invalid-name
        elif need_c2:
            # Combine the C1 and C2 series into one
            for l in range(1, self.order + 1):
                c2a[l] = A1 * c1a[l] - A2 * c2a[l]
            J12 = m0x * sig12 + (  # pylint: disable=invalid-name
                series.sin_cos_series(True, ssig2, csig2, c2a)
                - series.sin_cos_series(True, ssig1, csig1, c2a)
            )

        if outmask & GeodesicMask.REDUCEDLENGTH:
            m0 = m0x
            # Missing a factor of b. The parens around (csig1 * ssig2) and (ssig1 * csig2)
            # ensure accurate cancellation for coincident points.
            m12b = dn2 * (csig1 * ssig2) - dn1 * (ssig1 * csig2) - csig1 * csig2 * J12

        if outmask & GeodesicMask.GEODESICSCALE:
            csig12 = csig1 * csig2 + ssig1 * ssig2
            t = self.ep2 * (cbet1 - cbet2) * (cbet1 + cbet2) / (dn1 + dn2)
            M12 = csig12 + (t * ssig2 - csig2 * J12) * ssig1 / dn1
            M21 = csig12 - (t * ssig1 - csig1 * J12) * ssig2 / dn2

        return s12b, m12b, m0, M12, M21

    @staticmethod
    def _astroid(x: float, y: float) -> float:
        """
        Solve k^4 + 2*k^3 - (x^2 + y^2 - 1)*k^2 - 2*y^2*k - y^2 = 0 for the positive root k.
        """
        p = sq(x)
        q = sq(y)
        r = (p + q - 1) / 6
        if q == 0 and r <= 0:
            # y = 0 with |x| <= 1; for small y the positive root is k = |y| / sqrt(1 - x^2)
            return 0.0

        # Avoid division by zero when r = 0 by multiplying the equations for s and t by
        # r^3 and r respectively.
        S = p * q / 4  # S = r^3 * s  # pylint: disable=invalid-name
        r2 = sq(r)
        r3 = r * r2
        # The discriminant of the quadratic equation for T3. This is zero on the evolute
        # curve p^(1/3) + q^(1/3) = 1
        disc = S * (S + 2 * r3)
        u = r
        if disc >= 0:
            T3 = S + r3  # pylint: disable=invalid-name
            # Pick the sign on the sqrt to maximize |T3|, minimizing cancellation. The
            # result does not depend on it because of the way T is used in u.
            T3 += -math.sqrt(disc) if T3 < 0 else math.sqrt(disc)  # T3 = (r * t)^3
            # cbrt always returns the real root
            T = cbrt(T3)  # T = r * t  # pylint: disable=invalid-name
            # T can be zero, but then r2 / T -> 0
            u += T + (r2 / T if T != 0 else 0)
        else:
            # T is complex, but u is real. Of the three cube roots pick the one which
            # avoids cancellation; disc < 0 implies r < 0.
            ang = math.atan2(math.sqrt(-disc), -(S + r3))
            u += 2 * r * math.cos(ang / 3)

        v = math.sqrt(sq(u) + q)  # positive
        # Avoid loss of accuracy when u < 0
        uv = q / (v - u) if u < 0 else u + v  # u + v, positive
        w = (uv - q) / (2 * v)
        # Rearranged to avoid cancellation; uv > 0 and w >= 0 so no division by zero
        return uv / (math.sqrt(uv + sq(w)) + w)

    def _inverse_start(  # pylint: disable=too-many-arguments, too-many-locals
        self, sbet1, cbet1, dn1, sbet2, cbet2, dn2, lam12, slam12, clam12
    ) -> Tuple[float, float, float, float, float, float]:
        """
        Starting azimuth for Newton's method.

        Returns:
            (sig12, salp1, calp1, salp2, calp2, dnm). sig12 is -1 when Newton's method is
            needed; otherwise the line is short enough to be solved here and sig12, salp2,
            calp2 and dnm are its solution.
        """
        sig12 = -1.0
        salp2 = calp2 = dnm = math.nan

        # bet12 = bet2 - bet1 in [0, pi); bet12a = bet2 + bet1 in (-pi, 0]
        sbet12 = sbet2 * cbet1 - cbet2 * sbet1
        cbet12 = cbet2 * cbet1 + sbet2 * sbet1
        sbet12a = sbet2 * cbet1
        sbet12a += cbet2 * sbet1

        shortline = cbet12 >= 0 and sbet12 < 0.5 and cbet2 * lam12 < 0.5
        if shortline:
            # sin((bet1 + bet2) / 2)^2
            sbetm2 = sq(sbet1 + sbet2)
            sbetm2 /= sbetm2 + sq(cbet1 + cbet2)
            dnm = math.sqrt(1 + self.ep2 * sbetm2)
            omg12 = lam12 / (self.f1 * dnm)
            somg12, comg12 = math.sin(omg12), math.cos(omg12)
        else:
            somg12, comg12 = slam12, clam12

        salp1 = cbet2 * somg12
        if comg12 >= 0:
            calp1 = sbet12 + cbet2 * sbet1 * sq(somg12) / (1 + comg12)
        else:
            calp1 = sbet12a - cbet2 * sbet1 * sq(somg12) / (1 - comg12)

        ssig12 = math.hypot(salp1, calp1)
        csig12 = sbet1 * sbet2 + cbet1 * cbet2 * comg12

        if shortline and ssig12 < self._etol2:
            # Really short lines
            salp2 = cbet1 * somg12
            calp2 = sbet12 - cbet1 * sbet2 * (
                sq(somg12) / (1 + comg12) if comg12 >= 0 else 1 - comg12
            )
            salp2, calp2 = norm(salp2, calp2)
            sig12 = math.atan2(ssig12, csig12)
        elif abs(self.n) >= 0.1 or csig12 >= 0 or ssig12 >= 6 * abs(self.n) * math.pi * sq(cbet1):
            # Zeroth order spherical approximation is OK (or the ellipsoid is too
            # eccentric for the astroid calculation)
            pass
        else:
            # Scale lam12 and bet2 to x, y coordinates where the antipodal point is at the
            # origin and the singular point is at y = 0, x = -1.
            lam12x = math.atan2(-slam12, -clam12)
            if self.f >= 0:
                # x = dlong, y = dlat
                k2 = sq(sbet1) * self.ep2
                eps = k2 / (2 * (1 + math.sqrt(1 + k2)) + k2)
                lamscale = self.f * cbet1 * self._a3f(eps) * math.pi
                betscale = lamscale * cbet1
                x = lam12x / lamscale
                y = sbet12a / betscale
            else:
                # x = dlat, y = dlong
                cbet12a = cbet2 * cbet1 - sbet2 * sbet1
                bet12a = math.atan2(sbet12a, cbet12a)
                _, m12b, m0, _, _ = self._lengths(
                    self.n, math.pi + bet12a, sbet1, -cbet1, dn1, sbet2, cbet2, dn2,
                    cbet1, cbet2, GeodesicMask.REDUCEDLENGTH
                )
                x = -1 + m12b / (cbet1 * cbet2 * m0 * math.pi)
                betscale = sbet12a / x if x < -0.01 else -self.f * sq(cbet1) * math.pi
                lamscale = betscale / cbet1
                y = lam12x / lamscale

            if y > -TOL1 and x > -1 - XTHRESH:
                # Strip near the cut
                if self.f >= 0:
                    salp1 = min(1.0, -x)
                    calp1 = -math.sqrt(1 - sq(salp1))
                else:
                    calp1 = max(0.0 if x > -TOL1 else -1.0, x)
                    salp1 = math.sqrt(1 - sq(calp1))
            else:
                # Estimate omg12 by solving the astroid problem, then use the spherical
                # formula to get alp1. This takes fewer Newton steps than estimating alp1
                # from the astroid directly. omg12 is near pi, so work with pi - omg12.
                k = self._astroid(x, y)
                omg12a = lamscale * (-x * k / (1 + k) if self.f >= 0 else -y * (1 + k) / k)
                somg12, comg12 = math.sin(omg12a), -math.cos(omg12a)
                # Update the spherical estimate of alp1 using omg12 instead of lam12
                salp1 = cbet2 * somg12
                calp1 = sbet12a - cbet2 * sbet1 * sq(somg12) / (1 - comg12)

        # Sanity check on the starting guess; the reversed test lets NaN through
        if not salp1 <= 0:
            salp1, calp1 = norm(salp1, calp1)
        else:
            salp1, calp1 = 1.0, 0.0

        return sig12, salp1, calp1, salp2, calp2, dnm

    def _lambda12(  # pylint: disable=too-many-arguments, too-many-locals
        self, sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1, slam120, clam120, diffp
    ) -> Tuple[float, ...]:
        """
        The longitude difference reached by the geodesic leaving point 1 with azimuth alp1,
        less the target difference lam120, and its derivative with respect to alp1.

        Returns:
            (lam12, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2, eps, domg12, dlam12)
        """
        if sbet1 == 0 and calp1 == 0:
            # Break the degeneracy of the equatorial line; that case is handled elsewhere
            calp1 = -TINY

        # sin(alp1) * cos(bet1) = sin(alp0)
        salp0 = salp1 * cbet1
        calp0 = math.hypot(calp1, salp1 * sbet1)  # calp0 > 0

        # tan(bet1) = tan(sig1) * cos(alp1)
        # tan(omg1) = sin(alp0) * tan(sig1) = tan(alp1) * sin(bet1)
        ssig1 = sbet1
        somg1 = salp0 * sbet1
        csig1 = comg1 = calp1 * cbet1
        ssig1, csig1 = norm(ssig1, csig1)

        # Enforce symmetries when |bet2| = -bet1, which would otherwise yield singularities
        # in the Newton iteration. sin(alp2) * cos(bet2) = sin(alp0)
        salp2 = salp0 / cbet2 if cbet2 != cbet1 else salp1
        # calp2 = sqrt(1 - sq(salp2)) = sqrt(sq(calp0) - sq(sbet2)) / cbet2, rearranged;
        # the positive root gives alp2 in [0, pi/2]
        if cbet2 != cbet1 or abs(sbet2) != -sbet1:
            calp2 = math.sqrt(
                sq(calp1 * cbet1) + (
                    (cbet2 - cbet1) * (cbet1 + cbet2) if cbet1 < -sbet1
                    else (sbet1 - sbet2) * (sbet1 + sbet2)
                )
            ) / cbet2
        else:
            calp2 = abs(calp1)

        # tan(bet2) = tan(sig2) * cos(alp2)
        # tan(omg2) = sin(alp0) * tan(sig2)
        ssig2 = sbet2
        somg2 = salp0 * sbet2
        csig2 = comg2 = calp2 * cbet2
        ssig2, csig2 = norm(ssig2, csig2)

        # sig12 = sig2 - sig1, limited to [0, pi]
        sig12 = math.atan2(
            max(0.0, csig1 * ssig2 - ssig1 * csig2) + 0.0,
            csig1 * csig2 + ssig1 * ssig2,
        )

        # omg12 = omg2 - omg1, limited to [0, pi]
        somg12 = max(0.0, comg1 * somg2 - somg1 * comg2) + 0.0
        comg12 = comg1 * comg2 + somg1 * somg2
        # eta = omg12 - lam120
        eta = math.atan2(
            somg12 * clam120 - comg12 * slam120,
            comg12 * clam120 + somg12 * slam120,
        )

        k2 = sq(calp0) * self.ep2
        eps = k2 / (2 * (1 + math.sqrt(1 + k2)) + k2)
        c3a = self._c3f(eps)
        B312 = (  # pylint: disable=invalid-name
            series.sin_cos_series(True, ssig2, csig2, c3a)
            - series.sin_cos_series(True, ssig1, csig1, c3a)
        )
        domg12 = -self.f * self._a3f(eps) * salp0 * (sig12 + B312)
        lam12 = eta + domg12

        if diffp:
            if calp2 == 0:
                dlam12 = -2 * self.f1 * dn1 / sbet1
            else:
                _, dlam12, _, _, _ = self._lengths(
                    eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2,
                    GeodesicMask.REDUCEDLENGTH
                )
                dlam12 *= self.f1 / (calp2 * cbet2)
        else:
            dlam12 = math.nan

        return lam12, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2, eps, domg12, dlam12

    def _gen_inverse(  # pylint: disable=too-many-locals, too-many-branches, too-many-statements
        self, lat1: float, lon1: float, lat2: float, lon2: float, outmask: int
    ) -> Tuple[float, ...]:
        """
        Returns:
            (a12, s12, salp1, calp1, salp2, calp2, m12, M12, M21, S12, converged)
        """
        a12 = s12 = m12 = M12 = M21 = S12 = math.nan
        converged = True
        outmask &= GeodesicMask.OUT_MASK

        # Longitude difference in [-180, 180], -180 only for west-going geodesics; made
        # positive, keeping the sign in lonsign
        lon12, lon12s = ang_diff(lon1, lon2)
        lonsign = math.copysign(1, lon12)
        lon12 = lonsign * lon12
        lon12s = lonsign * lon12s
        lam12 = math.radians(lon12)
        # sincos of lon12 + its error, with AngRound applied internally
        slam12, clam12 = sincosde(lon12, lon12s)
        # The supplementary longitude difference
        lon12s = (180 - lon12) - lon12s

        # If really close to the equator, treat as on the equator
        lat1 = ang_round(lat_fix(lat1))
        lat2 = ang_round(lat_fix(lat2))
        # Swap points so that the point with the higher |lat| is point 1; a NaN latitude
        # becomes lat1
        swapp = -1 if abs(lat1) < abs(lat2) or math.isnan(lat2) else 1
        if swapp < 0:
            lonsign *= -1
            lat2, lat1 = lat1, lat2
        # Make lat1 <= -0
        latsign = math.copysign(1, -lat1)
        lat1 *= latsign
        lat2 *= latsign
        # Now 0 <= lon12 <= 180, -90 <= lat1 <= -0 and lat1 <= lat2 <= -lat1. lonsign, swapp
        # and latsign record the transformation to this canonical form (1 means unchanged).

        sbet1, cbet1 = sincosd(lat1)
        sbet1 *= self.f1
        # Ensure cbet1 = +epsilon at poles
        sbet1, cbet1 = norm(sbet1, cbet1)
        cbet1 = max(TINY, cbet1)

        sbet2, cbet2 = sincosd(lat2)
        sbet2 *= self.f1
        # Ensure cbet2 = +epsilon at poles
        sbet2, cbet2 = norm(sbet2, cbet2)
        cbet2 = max(TINY, cbet2)

        # If cbet1 < -sbet1, cbet2 - cbet1 is a sensitive measure of |bet1| - |bet2|;
        # otherwise |sbet2| + sbet1 is. When these vanish force bet2 = +/- bet1 exactly.
        if cbet1 < -sbet1:
            if cbet2 == cbet1:
                sbet2 = math.copysign(sbet1, sbet2)
        elif abs(sbet2) == -sbet1:
            cbet2 = cbet1

        dn1 = math.sqrt(1 + self.ep2 * sq(sbet1))
        dn2 = math.sqrt(1 + self.ep2 * sq(sbet2))

        meridian = lat1 == -90 or slam12 == 0
        if meridian:
            # Both points lie on a single full meridian, so the geodesic might too
            calp1, salp1 = clam12, slam12  # Head to the target longitude
            calp2, salp2 = 1.0, 0.0  # At the target we're heading north

            # tan(bet) = tan(sig) * cos(alp)
            ssig1 = sbet1
            csig1 = calp1 * cbet1
            ssig2 = sbet2
            csig2 = calp2 * cbet2

            # sig12 = sig2 - sig1
            sig12 = math.atan2(
                max(0.0, csig1 * ssig2 - ssig1 * csig2) + 0.0,
                csig1 * csig2 + ssig1 * ssig2,
            )
            s12x, m12x, _, M12, M21 = self._lengths(
                self.n, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2,
                outmask | GeodesicMask.DISTANCE | GeodesicMask.REDUCEDLENGTH
            )
            # A meridional geodesic with sig12 > pi/2 is not a shortest path; the check on
            # sig12 is there because zero length geodesics may give m12 < 0.
            if sig12 < 1 or m12x >= 0:
                if sig12 < 3 * TINY or (sig12 < TOL0 and (s12x < 0 or m12x < 0)):
                    # Prevent negative s12 or m12 for short lines
                    sig12 = m12x = s12x = 0.0
                m12x *= self.b
                s12x *= self.b
                a12 = math.degrees(sig12)
            else:
                # m12 < 0, i.e., prolate and too close to anti-podal
                meridian = False

        # somg12 == 2 marks that it still needs to be calculated
        somg12, comg12, omg12 = 2.0, 0.0, 0.0
        if not meridian and sbet1 == 0 and (self.f <= 0 or lon12s >= self.f * 180):
            # Geodesic runs along the equator; mimics Lambda12 with calp1 = 0
            calp1 = calp2 = 0.0
            salp1 = salp2 = 1.0
            s12x = self.a * lam12
            sig12 = omg12 = lam12 / self.f1
            m12x = self.b * math.sin(sig12)
            if outmask & GeodesicMask.GEODESICSCALE:
                M12 = M21 = math.cos(sig12)
            a12 = lon12 / self.f1

        elif not meridian:
            # Both points lie within a hemisphere bounded by a meridian and the geodesic is
            # neither meridional nor equatorial.
            sig12, salp1, calp1, salp2, calp2, dnm = self._inverse_start(
                sbet1, cbet1, dn1, sbet2, cbet2, dn2, lam12, slam12, clam12
            )

            if sig12 >= 0:
                # Short lines, solved by _inverse_start
                s12x = sig12 * self.b * dnm
                m12x = sq(dnm) * self.b * math.sin(sig12 / dnm)
                if outmask & GeodesicMask.GEODESICSCALE:
                    M12 = M21 = math.cos(sig12 / dnm)
                a12 = math.degrees(sig12)
                omg12 = lam12 / (self.f1 * dnm)
            else:
                # Newton's method on f(alp1) = lambda12(alp1) - lam12. f has exactly one
                # root in (0, pi) with positive derivative there, so (alp1a, alp1b) brackets
                # the root and shrinks with every evaluation. When the derivative is not
                # positive, or a step leaves the bracket, bisect instead.
                tripn = tripb = False
                salp1a, calp1a = TINY, 1.0
                salp1b, calp1b = TINY, -1.0
                for numit in range(self.max_iterations):
                    (v, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2,
                     eps, domg12, dv) = self._lambda12(
                        sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1,
                        slam12, clam12, numit < NEWTON_ITERATIONS
                    )
                    # Reversed test to allow escape with NaNs
                    if tripb or not abs(v) >= (8 if tripn else 1) * TOL0:
                        break

                    # Update the bracket
                    if v > 0 and (numit > NEWTON_ITERATIONS or calp1 / salp1 > calp1b / salp1b):
                        salp1b, calp1b = salp1, calp1
                    elif v < 0 and (numit > NEWTON_ITERATIONS or calp1 / salp1 < calp1a / salp1a):
                        salp1a, calp1a = salp1, calp1

                    if numit < NEWTON_ITERATIONS and dv > 0:
                        dalp1 = -v / dv
                        if abs(dalp1) < math.pi:
                            sdalp1, cdalp1 = math.sin(dalp1), math.cos(dalp1)
                            nsalp1 = salp1 * cdalp1 + calp1 * sdalp1
                            if nsalp1 > 0:
                                calp1 = calp1 * cdalp1 - salp1 * sdalp1
                                salp1 = nsalp1
                                salp1, calp1 = norm(salp1, calp1)
                                # Convergence can be less than quadratic where the slope
                                # tends to 0, so test against epsilon, not sqrt(epsilon)
                                tripn = abs(v) <= 16 * TOL0
                                continue

                    # Either dv was not positive or the step left the bracket; use the
                    # midpoint of the bracket.
                    salp1 = (salp1a + salp1b) / 2
                    calp1 = (calp1a + calp1b) / 2
                    salp1, calp1 = norm(salp1, calp1)
                    tripn = False
                    tripb = (
                        abs(salp1a - salp1) + (calp1a - calp1) < TOLB
                        or abs(salp1 - salp1b) + (calp1 - calp1b) < TOLB
                    )
                else:
                    converged = False

                lengthmask = outmask | (
                    GeodesicMask.DISTANCE
                    if outmask & (GeodesicMask.REDUCEDLENGTH | GeodesicMask.GEODESICSCALE)
                    else GeodesicMask.EMPTY
                )
                s12x, m12x, _, M12, M21 = self._lengths(
                    eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2, lengthmask
                )
                m12x *= self.b
                s12x *= self.b
                a12 = math.degrees(sig12)
                if outmask & GeodesicMask.AREA:
                    # omg12 = lam12 - domg12
                    sdomg12, cdomg12 = math.sin(domg12), math.cos(domg12)
                    somg12 = slam12 * cdomg12 - clam12 * sdomg12
                    comg12 = clam12 * cdomg12 + slam12 * sdomg12

        if outmask & GeodesicMask.DISTANCE:
            s12 = 0.0 + s12x  # Convert -0 to 0

        if outmask & GeodesicMask.REDUCEDLENGTH:
            m12 = 0.0 + m12x  # Convert -0 to 0

        if outmask & GeodesicMask.AREA:
            S12 = self._area(
                sbet1, cbet1, sbet2, cbet2, salp1, calp1, salp2, calp2,
                meridian, somg12, comg12, omg12
            ) * swapp * lonsign * latsign
            S12 += 0.0  # Convert -0 to 0

        # Convert calp, salp to azimuths, accounting for lonsign, swapp and latsign
        if swapp < 0:
            salp2, salp1 = salp1, salp2
            calp2, calp1 = calp1, calp2
            if outmask & GeodesicMask.GEODESICSCALE:
                M21, M12 = M12, M21

        salp1 *= swapp * lonsign
        calp1 *= swapp * latsign
        salp2 *= swapp * lonsign
        calp2 *= swapp * latsign

        if not converged:
            # Flag the failure in the values themselves: distances negated, azimuths reversed
            a12, s12, m12 = -a12, -s12, -m12
            salp1, calp1, salp2, calp2 = -salp1, -calp1, -salp2, -calp2

        return a12, s12, salp1, calp1, salp2, calp2, m12, M12, M21, S12, converged

    def _area(  # pylint: disable=too-many-arguments, too-many-locals
        self, sbet1, cbet1, sbet2, cbet2, salp1, calp1, salp2, calp2,
        meridian, somg12, comg12, omg12
    ) -> float:
        """The area between the geodesic and the equator, in the canonical orientation"""
        # From Lambda12: sin(alp1) * cos(bet1) = sin(alp0)
        salp0 = salp1 * cbet1
        calp0 = math.hypot(calp1, salp1 * sbet1)  # calp0 > 0
        if calp0 != 0 and salp0 != 0:
            # From Lambda12: tan(bet) = tan(sig) * cos(alp)
            ssig1, csig1 = norm(sbet1, calp1 * cbet1)
            ssig2, csig2 = norm(sbet2, calp2 * cbet2)
            k2 = sq(calp0) * self.ep2
            eps = k2 / (2 * (1 + math.sqrt(1 + k2)) + k2)
            # Multiplier = a^2 * e^2 * cos(alpha0) * sin(alpha0)
            A4 = sq(self.a) * calp0 * salp0 * self.e2  # pylint: disable=invalid-name
            c4a = self._c4f(eps)
            B41 = series.sin_cos_series(False, ssig1, csig1, c4a)  # pylint: disable=invalid-name
            B42 = series.sin_cos_series(False, ssig2, csig2, c4a)  # pylint: disable=invalid-name
            S12 = A4 * (B42 - B41)  # pylint: disable=invalid-name
        else:
            # Avoid problems with indeterminate sig1, sig2 on the equator
            S12 = 0.0  # pylint: disable=invalid-name

        if not meridian and somg12 == 2:
            somg12, comg12 = math.sin(omg12), math.cos(omg12)

        if not meridian and comg12 > -0.7071 and sbet2 - sbet1 < 1.75:
            # Longitude and latitude differences not too big: use
            # tan(Gamma/2) = tan(omg12/2) * (tan(bet1/2) + tan(bet2/2))
            #                / (1 + tan(bet1/2) * tan(bet2/2))
            # with tan(x/2) = sin(x) / (1 + cos(x))
            domg12 = 1 + comg12
            dbet1 = 1 + cbet1
            dbet2 = 1 + cbet2
            alp12 = 2 * math.atan2(
                somg12 * (sbet1 * dbet2 + sbet2 * dbet1),
                domg12 * (sbet1 * sbet2 + dbet1 * dbet2),
            )
        else:
            # alp12 = alp2 - alp1, used in atan2 so no need to normalize
            salp12 = salp2 * calp1 - calp2 * salp1
            calp12 = calp2 * calp1 + salp2 * salp1
            # alp1 = +/-180 and alp2 = 0 must give alp12 = -180, which relies on the sign
            # attached to the zero; make it explicit.
            if salp12 == 0 and calp12 < 0:
                salp12 = TINY * calp1
                calp12 = -1.0
            alp12 = math.atan2(salp12, calp12)

        return S12 + self.c2 * alp12

    def inverse(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        outmask: int = GeodesicMask.STANDARD,
    ) -> GeodesicResult:
        """
        Solve the inverse geodesic problem.

        Args:
            lat1, lon1:
                Latitude and longitude of point 1 (degrees)

            lat2, lon2:
                Latitude and longitude of point 2 (degrees)

            outmask: (int) (Default STANDARD)
                Bitor'ed GeodesicMask values naming the quantities to compute. With
                LONG_UNROLL, lon2 is reported so that lon2 - lon1 is the longitude
                difference travelled.

        Returns:
            GeodesicResult; a12 is always set. If the iteration failed to converge,
            converged is False, s12, m12 and a12 are negated and the azimuths reversed.
        """
        (a12, s12, salp1, calp1, salp2, calp2,
         m12, M12, M21, S12, converged) = self._gen_inverse(lat1, lon1, lat2, lon2, outmask)
        outmask &= GeodesicMask.OUT_MASK

        if outmask & GeodesicMask.LONG_UNROLL:
            lon12, e = ang_diff(lon1, lon2)
            lon2 = (lon1 + lon12) + e
        else:
            lon1 = ang_normalize(lon1)
            lon2 = ang_normalize(lon2)

        result = GeodesicResult(
            lat1=lat_fix(lat1), lon1=lon1, lat2=lat_fix(lat2), lon2=lon2,
            a12=a12, converged=converged,
        )
        if outmask & GeodesicMask.DISTANCE:
            result.s12 = s12
        if outmask & GeodesicMask.AZIMUTH:
            result.azi1 = atan2d(salp1, calp1)
            result.azi2 = atan2d(salp2, calp2)
        if outmask & GeodesicMask.REDUCEDLENGTH:
            result.m12 = m12
        if outmask & GeodesicMask.GEODESICSCALE:
            result.M12 = M12
            result.M21 = M21
        if outmask & GeodesicMask.AREA:
            result.S12 = S12

        if not converged:
            self.logger.warning(
                'Inverse solution from (%s, %s) to (%s, %s) did not converge within %d '
                'iterations', lat1, lon1, lat2, lon2, self.max_iterations
            )
        return result

    def gen_direct(  # pylint: disable=too-many-arguments
        self,
        lat1: float,
        lon1: float,
        azi1: float,
        arcmode: bool,
        s12_a12: float,
        outmask: int = GeodesicMask.STANDARD,
    ) -> GeodesicResult:
        """
        Solve the direct geodesic problem, with the length given as a distance or an arc.

        Args:
            lat1, lon1, azi1:
                Latitude, longitude and azimuth at point 1 (degrees)

            arcmode:
                If True, s12_a12 is an arc length on the auxiliary sphere (degrees);
                otherwise it is a distance

            s12_a12:
                The distance or arc length from point 1 to point 2 (may be negative)

            outmask: (int) (Default STANDARD)
                Bitor'ed GeodesicMask values naming the quantities to compute

        Returns:
            GeodesicResult
        """
        # Supply DISTANCE_IN when it is needed
        caps = outmask if arcmode else outmask | GeodesicMask.DISTANCE_IN
        line = GeodesicLine(self, lat1, lon1, azi1, caps)
        return line.gen_position(arcmode, s12_a12, outmask)

    def direct(
        self,
        lat1: float,
        lon1: float,
        azi1: float,
        s12: float,
        outmask: int = GeodesicMask.STANDARD,
    ) -> GeodesicResult:
        """
        Solve the direct geodesic problem: the point at distance s12 from (lat1, lon1)
        along azimuth azi1.
        """
        return self.gen_direct(lat1, lon1, azi1, False, s12, outmask)

    def arc_direct(
        self,
        lat1: float,
        lon1: float,
        azi1: float,
        a12: float,
        outmask: int = GeodesicMask.STANDARD,
    ) -> GeodesicResult:
        """
        Solve the direct geodesic problem with the length given as an arc a12 (degrees) on
        the auxiliary sphere.
        """
        return self.gen_direct(lat1, lon1, azi1, True, a12, outmask)

    def line(
        self,
        lat1: float,
        lon1: float,
        azi1: float,
        caps: int = GeodesicMask.STANDARD | GeodesicMask.DISTANCE_IN,
    ) -> GeodesicLine:
        """
        Create a GeodesicLine starting at (lat1, lon1) with azimuth azi1, able to compute the
        quantities named in caps.
        """
        return GeodesicLine(self, lat1, lon1, azi1, caps)

    def _gen_direct_line(  # pylint: disable=too-many-arguments
        self, lat1, lon1, azi1, arcmode, s12_a12, caps
    ) -> GeodesicLine:
        # Supply DISTANCE_IN when it is needed
        if not arcmode:
            caps |= GeodesicMask.DISTANCE_IN
        line = GeodesicLine(self, lat1, lon1, azi1, caps)
        if arcmode:
            line._set_arc(s12_a12)  # pylint: disable=protected-access
        else:
            line._set_distance(s12_a12)  # pylint: disable=protected-access
        return line

    def direct_line(  # pylint: disable=too-many-arguments
        self,
        lat1: float,
        lon1: float,
        azi1: float,
        s12: float,
        caps: int = GeodesicMask.STANDARD | GeodesicMask.DISTANCE_IN,
    ) -> GeodesicLine:
        """
        Create a GeodesicLine from (lat1, lon1) along azimuth azi1 whose reference point 3
        lies a distance s12 along it.
        """
        return self._gen_direct_line(lat1, lon1, azi1, False, s12, caps)

    def arc_direct_line(  # pylint: disable=too-many-arguments
        self,
        lat1: float,
        lon1: float,
        azi1: float,
        a12: float,
        caps: int = GeodesicMask.STANDARD | GeodesicMask.DISTANCE_IN,
    ) -> GeodesicLine:
        """
        Create a GeodesicLine from (lat1, lon1) along azimuth azi1 whose reference point 3
        lies an arc length a12 (degrees) along it.
        """
        return self._gen_direct_line(lat1, lon1, azi1, True, a12, caps)

    def inverse_line(  # pylint: disable=too-many-arguments
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        caps: int = GeodesicMask.STANDARD | GeodesicMask.DISTANCE_IN,
    ) -> GeodesicLine:
        """
        Create the GeodesicLine joining (lat1, lon1) to (lat2, lon2), with point 2 as its
        reference point 3.
        """
        a12, _, salp1, calp1, _, _, _, _, _, _, _ = self._gen_inverse(
            lat1, lon1, lat2, lon2, GeodesicMask.EMPTY
        )
        azi1 = atan2d(salp1, calp1)
        if caps & (GeodesicMask.OUT_MASK & GeodesicMask.DISTANCE_IN):
            caps |= GeodesicMask.DISTANCE
        line = GeodesicLine(self, lat1, lon1, azi1, caps, salp1, calp1)
        line._set_arc(a12)  # pylint: disable=protected-access
        return line


WGS84 = Geodesic(WGS84_A, WGS84_F)
