
from geodesics._version import __version__  # noqa: F401
from geodesics.utils.logging import LOGGER
from geodesics.masks import GeodesicMask
from geodesics.result import GeodesicResult
from geodesics.geodesicline import GeodesicLine
from geodesics.geodesic import EllipsoidError, Geodesic, WGS84

__all__ = [
    'EllipsoidError',
    'Geodesic',
    'GeodesicLine',
    'GeodesicMask',
    'GeodesicResult',
    'WGS84',
    'LOGGER',
]
