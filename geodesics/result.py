"""
Representation of the outcome of a direct, inverse or line position calculation
"""

__all__ = ['GeodesicResult']

import math
from typing import Dict


class GeodesicResult:
    """
    The quantities describing a geodesic between point 1 and point 2.

    Every field that was not requested (or could not be computed by the line that produced
    this result) is NaN.

    Attributes:
        lat1, lon1, azi1:
            Latitude, longitude and azimuth at point 1 (degrees)

        lat2, lon2, azi2:
            Latitude, longitude and (forward) azimuth at point 2 (degrees)

        s12:
            Distance from point 1 to point 2 (units of the equatorial radius)

        a12:
            Arc length on the auxiliary sphere (degrees)

        m12:
            Reduced length (units of the equatorial radius)

        M12, M21:
            Geodesic scales of point 2 relative to point 1 and vice versa

        S12:
            Area between the geodesic and the equator (units of the equatorial radius
            squared)

        converged:
            False only when an inverse solution exhausted its iteration cap. In that case
            s12, m12 and a12 are negated and both azimuths reversed.
    """

    _FIELDS = (
        'lat1', 'lon1', 'azi1', 'lat2', 'lon2', 'azi2',
        's12', 'a12', 'm12', 'M12', 'M21', 'S12',
    )

    def __init__(  # pylint: disable=too-many-arguments
        self,
        lat1: float = math.nan,
        lon1: float = math.nan,
        azi1: float = math.nan,
        lat2: float = math.nan,
        lon2: float = math.nan,
        azi2: float = math.nan,
        s12: float = math.nan,
        a12: float = math.nan,
        m12: float = math.nan,
        M12: float = math.nan,  # pylint: disable=invalid-name
        M21: float = math.nan,  # pylint: disable=invalid-name
        S12: float = math.nan,  # pylint: disable=invalid-name
        converged: bool = True,
    ):
        self.lat1 = lat1
        self.lon1 = lon1
        self.azi1 = azi1
        self.lat2 = lat2
        self.lon2 = lon2
        self.azi2 = azi2
        self.s12 = s12
        self.a12 = a12
        self.m12 = m12
        self.M12 = M12  # pylint: disable=invalid-name
        self.M21 = M21  # pylint: disable=invalid-name
        self.S12 = S12  # pylint: disable=invalid-name
        self.converged = converged

    def __getitem__(self, item: str) -> float:
        if item not in self._FIELDS:
            raise KeyError(item)
        return getattr(self, item)

    def __repr__(self):
        parts = [
            f'{field}={getattr(self, field)}'
            for field in self._FIELDS
            if not math.isnan(getattr(self, field))
        ]
        if not self.converged:
            parts.append('converged=False')
        return f'<GeodesicResult({", ".join(parts)})>'

    def to_dict(self) -> Dict[str, float]:
        """
        Converts the result to a dictionary of the quantities that were computed.

        Returns:
            dict mapping field names (e.g. 's12') to values; NaN fields are omitted
        """
        return {
            field: getattr(self, field)
            for field in self._FIELDS
            if not math.isnan(getattr(self, field))
        }
