"""
Bit masks selecting which quantities a geodesic calculation returns, and therefore
which coefficient families a GeodesicLine has to build.
"""

__all__ = ['GeodesicMask']


class GeodesicMask:  # pylint: disable=too-few-public-methods
    """
    Capability and output bit masks.

    The low five bits name the coefficient families (C1, C1', C2, C3, C4) that must be
    computed; bits 7 and above name the outputs. Each output mask carries the families
    it depends on, so a line built with a given mask computes only what that mask needs.
    """
    CAP_NONE = 0
    CAP_C1 = 1 << 0
    CAP_C1p = 1 << 1
    CAP_C2 = 1 << 2
    CAP_C3 = 1 << 3
    CAP_C4 = 1 << 4
    CAP_ALL = 0x1F
    CAP_MASK = CAP_ALL
    OUT_ALL = 0x7F80
    OUT_MASK = 0xFF80  # OUT_ALL plus LONG_UNROLL

    EMPTY = 0
    LATITUDE = 1 << 7 | CAP_NONE
    LONGITUDE = 1 << 8 | CAP_C3
    AZIMUTH = 1 << 9 | CAP_NONE
    DISTANCE = 1 << 10 | CAP_C1
    STANDARD = LATITUDE | LONGITUDE | AZIMUTH | DISTANCE
    DISTANCE_IN = 1 << 11 | CAP_C1 | CAP_C1p
    REDUCEDLENGTH = 1 << 12 | CAP_C1 | CAP_C2
    GEODESICSCALE = 1 << 13 | CAP_C1 | CAP_C2
    AREA = 1 << 14 | CAP_C4
    LONG_UNROLL = 1 << 15
    ALL = OUT_ALL | CAP_ALL  # Does not include LONG_UNROLL
