"""
A geodesic ray: a fixed starting point and azimuth on an ellipsoid, from which positions at
arbitrary distances or arc lengths are evaluated.

Notation: at a general point (no suffix, or 1 or 2 as a suffix)

    phi = latitude, beta = latitude on the auxiliary sphere
    omega = longitude on the auxiliary sphere, lambda = longitude
    alpha = azimuth of the great circle, sigma = arc length along the great circle
    s = distance, tau = scaled distance (equal to sigma at multiples of pi/2)

and at the northward equator crossing beta = phi = omega = lambda = sigma = s = 0 and
alpha = alpha0. A 12 suffix denotes a difference (e.g. s12 = s2 - s1); s and c prefixes
denote sine and cosine.
"""

__all__ = ['GeodesicLine']

import math
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from geodesics import series
from geodesics._const import TINY
from geodesics.masks import GeodesicMask
from geodesics.result import GeodesicResult
from geodesics.utils.functions import (
    ang_normalize, ang_round, atan2d, lat_fix, norm, sincosd, sq
)

if TYPE_CHECKING:
    from geodesics.geodesic import Geodesic  # pragma: no cover


class GeodesicLine:
    """
    Points along one geodesic, parameterized by distance or arc length from point 1.

    Lines are usually built through Geodesic.line, Geodesic.direct_line,
    Geodesic.arc_direct_line or Geodesic.inverse_line. Only the series needed for the
    quantities named in `caps` are computed; asking a line for anything else returns NaN.

    Args:
        geodesic:
            The Geodesic describing the ellipsoid

        lat1:
            Latitude of point 1 (degrees)

        lon1:
            Longitude of point 1 (degrees)

        azi1:
            Azimuth at point 1 (degrees). It is reduced to [-180, 180]; -180 is kept
            distinct from 180 and fixes the sign of the area of a line heading due south.

        caps: (int) (Default STANDARD | DISTANCE_IN)
            Bitor'ed GeodesicMask values naming the quantities that positions will be
            asked for. LATITUDE, AZIMUTH and LONG_UNROLL are always included.

        salp1, calp1:
            Sine and cosine of azi1, when already known exactly (used by inverse_line)
    """

    def __init__(  # pylint: disable=too-many-arguments, too-many-statements
        self,
        geodesic: 'Geodesic',
        lat1: float,
        lon1: float,
        azi1: float,
        caps: int = GeodesicMask.STANDARD | GeodesicMask.DISTANCE_IN,
        salp1: float = math.nan,
        calp1: float = math.nan,
    ):
        self.a = geodesic.a
        self.f = geodesic.f
        self._b = geodesic.b
        self._c2 = geodesic.c2
        self._f1 = geodesic.f1
        self._order = geodesic.order
        self.caps = caps | GeodesicMask.LATITUDE | GeodesicMask.AZIMUTH | GeodesicMask.LONG_UNROLL

        self.lat1 = lat_fix(lat1)
        self.lon1 = lon1
        if math.isnan(salp1) or math.isnan(calp1):
            self.azi1 = ang_normalize(azi1)
            # Guard against underflow in salp0
            self.salp1, self.calp1 = sincosd(ang_round(azi1))
        else:
            self.azi1 = azi1
            self.salp1, self.calp1 = salp1, calp1

        sbet1, cbet1 = sincosd(ang_round(self.lat1))
        sbet1 *= self._f1
        # Ensure cbet1 = +epsilon at poles
        sbet1, cbet1 = norm(sbet1, cbet1)
        cbet1 = max(TINY, cbet1)
        self._dn1 = math.sqrt(1 + geodesic.ep2 * sq(sbet1))

        # Evaluate alp0 from sin(alp1) * cos(bet1) = sin(alp0); alp0 in [0, pi/2 - |bet1|]
        self._salp0 = self.salp1 * cbet1
        # Alt: calp0 = hypot(sbet1, calp1 * cbet1). This is better when salp1 = 0.
        self._calp0 = math.hypot(self.calp1, self.salp1 * sbet1)

        # Evaluate sig1 with tan(bet1) = tan(sig1) * cos(alp1), where sig = 0 is the nearest
        # northward crossing of the equator, and omg1 with tan(omg1) = sin(alp0) * tan(sig1).
        # With alp0 in (0, pi/2] the quadrants of sig and omg coincide. There is no
        # atan2(0, 0) ambiguity at the poles since cbet1 = +epsilon.
        self._ssig1 = sbet1
        self._somg1 = self._salp0 * sbet1
        self._csig1 = self._comg1 = (
            cbet1 * self.calp1 if sbet1 != 0 or self.calp1 != 0 else 1
        )
        # sig1 in (-pi, pi]; omg1 is only ever used inside atan2, no need to normalize
        self._ssig1, self._csig1 = norm(self._ssig1, self._csig1)

        self._k2 = sq(self._calp0) * geodesic.ep2
        eps = self._k2 / (2 * (1 + math.sqrt(1 + self._k2)) + self._k2)

        self._a1m1 = self._b11 = self._stau1 = self._ctau1 = math.nan
        self._c1a: Optional[List[float]] = None
        if self.caps & GeodesicMask.CAP_C1:
            self._a1m1 = series.a1m1f(eps, self._order)
            self._c1a = series.c1f(eps, self._order)
            self._b11 = series.sin_cos_series(True, self._ssig1, self._csig1, self._c1a)
            s, c = math.sin(self._b11), math.cos(self._b11)
            # tau1 = sig1 + B11
            self._stau1 = self._ssig1 * c + self._csig1 * s
            self._ctau1 = self._csig1 * c - self._ssig1 * s

        self._c1pa: Optional[List[float]] = None
        if self.caps & GeodesicMask.CAP_C1p:
            self._c1pa = series.c1pf(eps, self._order)

        self._a2m1 = self._b21 = math.nan
        self._c2a: Optional[List[float]] = None
        if self.caps & GeodesicMask.CAP_C2:
            self._a2m1 = series.a2m1f(eps, self._order)
            self._c2a = series.c2f(eps, self._order)
            self._b21 = series.sin_cos_series(True, self._ssig1, self._csig1, self._c2a)

        self._a3c = self._b31 = math.nan
        self._c3a: Optional[List[float]] = None
        if self.caps & GeodesicMask.CAP_C3:
            self._c3a = geodesic._c3f(eps)  # pylint: disable=protected-access
            self._a3c = -self.f * self._salp0 * geodesic._a3f(eps)  # pylint: disable=protected-access
            self._b31 = series.sin_cos_series(True, self._ssig1, self._csig1, self._c3a)

        self._a4 = self._b41 = math.nan
        self._c4a: Optional[List[float]] = None
        if self.caps & GeodesicMask.CAP_C4:
            self._c4a = geodesic._c4f(eps)  # pylint: disable=protected-access
            # Multiplier = a^2 * e^2 * cos(alpha0) * sin(alpha0)
            self._a4 = sq(self.a) * self._calp0 * self._salp0 * geodesic.e2
            self._b41 = series.sin_cos_series(False, self._ssig1, self._csig1, self._c4a)

        self._s13 = math.nan
        self._a13 = math.nan

    def __repr__(self):
        return f'<GeodesicLine({self.lat1}, {self.lon1}, {self.azi1})>'

    @property
    def s13(self) -> float:
        """Distance to the reference point 3 (NaN if the line has none)"""
        return self._s13

    @property
    def a13(self) -> float:
        """Arc length to the reference point 3 in degrees (NaN if the line has none)"""
        return self._a13

    @property
    def equatorial_azimuth(self) -> float:
        """The azimuth (degrees) of the geodesic where it crosses the equator northward"""
        return atan2d(self._salp0, self._calp0)

    @property
    def equatorial_arc(self) -> float:
        """The arc length (degrees) from the northward equator crossing to point 1"""
        return atan2d(self._ssig1, self._csig1)

    def capabilities(self, testcaps: int = GeodesicMask.ALL) -> bool:
        """
        Tests whether this line was built to serve the given capabilities.

        Args:
            testcaps:
                Bitor'ed GeodesicMask values

        Returns:
            bool
        """
        testcaps &= GeodesicMask.OUT_ALL
        return (self.caps & testcaps) == testcaps

    def _gen_position(  # pylint: disable=too-many-locals, too-many-branches, too-many-statements
        self, arcmode: bool, s12_a12: float, outmask: int
    ) -> Tuple[float, ...]:
        """
        Returns:
            (a12, lat2, lon2, azi2, s12, m12, M12, M21, S12), NaN where not computed
        """
        a12 = lat2 = lon2 = azi2 = s12 = m12 = M12 = M21 = S12 = math.nan
        outmask &= self.caps & GeodesicMask.OUT_MASK
        if not (arcmode or (self.caps & (GeodesicMask.OUT_MASK & GeodesicMask.DISTANCE_IN))):
            # Impossible distance calculation requested
            return a12, lat2, lon2, azi2, s12, m12, M12, M21, S12

        B12 = AB1 = 0.0  # pylint: disable=invalid-name
        if arcmode:
            # Interpret s12_a12 as spherical arc length; exact at multiples of 90 degrees
            sig12 = math.radians(s12_a12)
            ssig12, csig12 = sincosd(s12_a12)
        else:
            # Interpret s12_a12 as distance
            tau12 = s12_a12 / (self._b * (1 + self._a1m1))
            tau12 = tau12 if math.isfinite(tau12) else math.nan
            s, c = math.sin(tau12), math.cos(tau12)
            # tau2 = tau1 + tau12
            B12 = -series.sin_cos_series(  # pylint: disable=invalid-name
                True,
                self._stau1 * c + self._ctau1 * s,
                self._ctau1 * c - self._stau1 * s,
                self._c1pa,
            )
            sig12 = tau12 - (B12 - self._b11)
            ssig12, csig12 = math.sin(sig12), math.cos(sig12)
            if abs(self.f) > 0.01:
                # The reverted distance series is inaccurate for |f| > 1/100, so correct
                # sig12 with one Newton iteration.
                ssig2 = self._ssig1 * csig12 + self._csig1 * ssig12
                csig2 = self._csig1 * csig12 - self._ssig1 * ssig12
                B12 = series.sin_cos_series(True, ssig2, csig2, self._c1a)  # pylint: disable=invalid-name
                serr = (1 + self._a1m1) * (sig12 + (B12 - self._b11)) - s12_a12 / self._b
                sig12 = sig12 - serr / math.sqrt(1 + self._k2 * sq(ssig2))
                ssig12, csig12 = math.sin(sig12), math.cos(sig12)
                # B12 is updated below

        # sig2 = sig1 + sig12
        ssig2 = self._ssig1 * csig12 + self._csig1 * ssig12
        csig2 = self._csig1 * csig12 - self._ssig1 * ssig12
        dn2 = math.sqrt(1 + self._k2 * sq(ssig2))
        if outmask & (
            GeodesicMask.DISTANCE | GeodesicMask.REDUCEDLENGTH | GeodesicMask.GEODESICSCALE
        ):
            if arcmode or abs(self.f) > 0.01:
                B12 = series.sin_cos_series(True, ssig2, csig2, self._c1a)  # pylint: disable=invalid-name
            AB1 = (1 + self._a1m1) * (B12 - self._b11)  # pylint: disable=invalid-name

        # sin(bet2) = cos(alp0) * sin(sig2)
        sbet2 = self._calp0 * ssig2
        # Alt: cbet2 = hypot(csig2, salp0 * ssig2)
        cbet2 = math.hypot(self._salp0, self._calp0 * csig2)
        if cbet2 == 0:
            # I.e., salp0 = 0, csig2 = 0. Break the degeneracy in this case
            cbet2 = csig2 = TINY
        # tan(alp0) = cos(sig2) * tan(alp2); no need to normalize
        salp2 = self._salp0
        calp2 = self._calp0 * csig2

        if outmask & GeodesicMask.DISTANCE:
            s12 = self._b * ((1 + self._a1m1) * sig12 + AB1) if arcmode else s12_a12

        if outmask & GeodesicMask.LONGITUDE:
            # tan(omg2) = sin(alp0) * tan(sig2); no need to normalize
            somg2 = self._salp0 * ssig2
            comg2 = csig2
            E = math.copysign(1, self._salp0)  # pylint: disable=invalid-name
            # omg12 = omg2 - omg1
            if outmask & GeodesicMask.LONG_UNROLL:
                omg12 = E * (
                    sig12
                    - (math.atan2(ssig2, csig2) - math.atan2(self._ssig1, self._csig1))
                    + (math.atan2(E * somg2, comg2) - math.atan2(E * self._somg1, self._comg1))
                )
            else:
                omg12 = math.atan2(
                    somg2 * self._comg1 - comg2 * self._somg1,
                    comg2 * self._comg1 + somg2 * self._somg1,
                )
            lam12 = omg12 + self._a3c * (
                sig12 + (series.sin_cos_series(True, ssig2, csig2, self._c3a) - self._b31)
            )
            lon12 = math.degrees(lam12)
            if outmask & GeodesicMask.LONG_UNROLL:
                lon2 = self.lon1 + lon12
            else:
                lon2 = ang_normalize(ang_normalize(self.lon1) + ang_normalize(lon12))

        if outmask & GeodesicMask.LATITUDE:
            lat2 = atan2d(sbet2, self._f1 * cbet2)

        if outmask & GeodesicMask.AZIMUTH:
            azi2 = atan2d(salp2, calp2)

        if outmask & (GeodesicMask.REDUCEDLENGTH | GeodesicMask.GEODESICSCALE):
            B22 = series.sin_cos_series(True, ssig2, csig2, self._c2a)  # pylint: disable=invalid-name
            AB2 = (1 + self._a2m1) * (B22 - self._b21)  # pylint: disable=invalid-name
            J12 = (self._a1m1 - self._a2m1) * sig12 + (AB1 - AB2)  # pylint: disable=invalid-name
            if outmask & GeodesicMask.REDUCEDLENGTH:
                # The parens around (csig1 * ssig2) and (ssig1 * csig2) ensure accurate
                # cancellation for coincident points.
                m12 = self._b * (
                    (dn2 * (self._csig1 * ssig2) - self._dn1 * (self._ssig1 * csig2))
                    - self._csig1 * csig2 * J12
                )
            if outmask & GeodesicMask.GEODESICSCALE:
                t = (
                    self._k2 * (ssig2 - self._ssig1) * (ssig2 + self._ssig1)
                    / (self._dn1 + dn2)
                )
                M12 = csig12 + (t * ssig2 - csig2 * J12) * self._ssig1 / self._dn1
                M21 = csig12 - (t * self._ssig1 - self._csig1 * J12) * ssig2 / dn2

        if outmask & GeodesicMask.AREA:
            B42 = series.sin_cos_series(False, ssig2, csig2, self._c4a)  # pylint: disable=invalid-name
            if self._calp0 == 0 or self._salp0 == 0:
                # alp12 = alp2 - alp1, used in atan2 so no need to normalize
                salp12 = salp2 * self.calp1 - calp2 * self.salp1
                calp12 = calp2 * self.calp1 + salp2 * self.salp1
                # alp1 = 180 and alp2 = 0 must give alp12 = -180 (and alp1 = -180 gives
                # +180), which relies on the sign attached to the zero; make it explicit.
                if salp12 == 0 and calp12 < 0:
                    salp12 = math.copysign(TINY, self.salp1) * self.calp1
                    calp12 = -1.0
            else:
                # tan(alp) = tan(alp0) * sec(sig), so
                # tan(alp2 - alp1) = calp0 * salp0 * (csig1 - csig2)
                #                    / (salp0^2 + calp0^2 * csig1 * csig2)
                # with csig1 - csig2 rewritten to avoid cancellation; no need to normalize
                salp12 = self._calp0 * self._salp0 * (
                    self._csig1 * (1 - csig12) + ssig12 * self._ssig1 if csig12 <= 0
                    else ssig12 * (self._csig1 * ssig12 / (1 + csig12) + self._ssig1)
                )
                calp12 = sq(self._salp0) + sq(self._calp0) * self._csig1 * csig2
            S12 = self._c2 * math.atan2(salp12, calp12) + self._a4 * (B42 - self._b41)

        a12 = s12_a12 if arcmode else math.degrees(sig12)
        return a12, lat2, lon2, azi2, s12, m12, M12, M21, S12

    def gen_position(
        self, arcmode: bool, s12_a12: float, outmask: int = GeodesicMask.STANDARD
    ) -> GeodesicResult:
        """
        Find the position of point 2 at a given distance or arc length from point 1.

        Args:
            arcmode:
                If True, s12_a12 is an arc length on the auxiliary sphere (degrees);
                otherwise it is a distance

            s12_a12:
                The distance or arc length from point 1 to point 2 (may be negative)

            outmask: (int) (Default STANDARD)
                Bitor'ed GeodesicMask values naming the quantities to compute. Quantities
                outside the line's capabilities are returned as NaN.

        Returns:
            GeodesicResult
        """
        a12, lat2, lon2, azi2, s12, m12, M12, M21, S12 = self._gen_position(
            arcmode, s12_a12, outmask
        )
        outmask &= GeodesicMask.OUT_MASK
        result = GeodesicResult(
            lat1=self.lat1,
            lon1=self.lon1 if outmask & GeodesicMask.LONG_UNROLL else ang_normalize(self.lon1),
            azi1=self.azi1,
            a12=a12,
        )
        if arcmode:
            if outmask & GeodesicMask.DISTANCE:
                result.s12 = s12
        else:
            result.s12 = s12_a12

        if outmask & GeodesicMask.LATITUDE:
            result.lat2 = lat2
        if outmask & GeodesicMask.LONGITUDE:
            result.lon2 = lon2
        if outmask & GeodesicMask.AZIMUTH:
            result.azi2 = azi2
        if outmask & GeodesicMask.REDUCEDLENGTH:
            result.m12 = m12
        if outmask & GeodesicMask.GEODESICSCALE:
            result.M12 = M12
            result.M21 = M21
        if outmask & GeodesicMask.AREA:
            result.S12 = S12
        return result

    def position(self, s12: float, outmask: int = GeodesicMask.STANDARD) -> GeodesicResult:
        """
        Find the position of point 2 a distance s12 along the line from point 1.

        Requires the line to have been built with DISTANCE_IN.
        """
        return self.gen_position(False, s12, outmask)

    def arc_position(self, a12: float, outmask: int = GeodesicMask.STANDARD) -> GeodesicResult:
        """Find the position of point 2 an arc length a12 (degrees) along the line"""
        return self.gen_position(True, a12, outmask)

    def _set_distance(self, s13: float) -> None:
        self._s13 = s13
        self._a13, *_ = self._gen_position(False, s13, GeodesicMask.EMPTY)

    def _set_arc(self, a13: float) -> None:
        self._a13 = a13
        self._s13 = self._gen_position(True, a13, GeodesicMask.DISTANCE)[4]

    def waypoints(
        self, count: int, outmask: int = GeodesicMask.STANDARD
    ) -> Iterator[GeodesicResult]:
        """
        Yields evenly spaced positions from point 1 to the reference point 3, inclusive.

        Points are spaced by distance when the line was built with DISTANCE_IN, and by arc
        length otherwise.

        Args:
            count:
                The number of positions, at least 2

            outmask: (int) (Default STANDARD)
                Bitor'ed GeodesicMask values naming the quantities to compute

        Yields:
            GeodesicResult
        """
        if count < 2:
            raise ValueError(f'At least two waypoints are required, not {count}')

        if math.isnan(self._a13):
            raise ValueError(
                'GeodesicLine has no reference point; build it with direct_line, '
                'arc_direct_line or inverse_line.'
            )

        if self.capabilities(GeodesicMask.DISTANCE_IN) and not math.isnan(self._s13):
            step = self._s13 / (count - 1)
            for i in range(count):
                yield self.position(i * step, outmask)
            return

        step = self._a13 / (count - 1)
        for i in range(count):
            yield self.arc_position(i * step, outmask)
