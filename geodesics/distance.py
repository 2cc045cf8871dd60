"""
Convenience distance, bearing and destination functions.

Each function solves a single direct or inverse problem on an ellipsoid (WGS84 unless
another Geodesic is given) and returns only the commonly wanted quantity.
"""

__all__ = ['bearing_degrees', 'destination_point', 'distance_meters']

from typing import Tuple

from geodesics.geodesic import Geodesic, WGS84
from geodesics.masks import GeodesicMask


def distance_meters(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    geodesic: Geodesic = WGS84,
) -> float:
    """
    Calculate the length of the shortest path between two points.

    Robust against antipodal points; the result is in the unit of the ellipsoid's
    equatorial radius (meters for WGS84).
    """
    return geodesic.inverse(lat1, lon1, lat2, lon2, GeodesicMask.DISTANCE).s12


def bearing_degrees(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    geodesic: Geodesic = WGS84,
) -> float:
    """
    Calculate the initial bearing of the shortest path from point 1 to point 2.

    Returns:
        (float) the bearing in degrees clockwise from north, in [0, 360)
    """
    res = geodesic.inverse(lat1, lon1, lat2, lon2, GeodesicMask.AZIMUTH)

    # Azimuths are reported in [-180, 180]; normalize to [0, 360)
    return (res.azi1 + 360) % 360


def destination_point(  # pylint: disable=too-many-arguments
    lat: float,
    lon: float,
    bearing: float,
    distance: float,
    geodesic: Geodesic = WGS84,
) -> Tuple[float, float]:
    """
    Calculate the point reached by travelling a distance along a bearing.

    Args:
        lat, lon:
            The starting point (degrees)

        bearing:
            The initial bearing (degrees clockwise from north)

        distance:
            The distance to travel, in the unit of the equatorial radius

        geodesic: (Default WGS84)
            The ellipsoid to travel on

    Returns:
        (lat, lon) of the destination, in degrees
    """
    res = geodesic.direct(
        lat, lon, bearing, distance, GeodesicMask.LATITUDE | GeodesicMask.LONGITUDE
    )
    return res.lat2, res.lon2
