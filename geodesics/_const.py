"""
Constants declarations for geodesics
"""

import math
import sys

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_F = 1 / 298.257223563  # Flattening

# Order of the series expansions, by precision tier
PRECISION_TIERS = {
    'low': 3,
    'medium': 5,
    'standard': 6,
}
DEFAULT_PRECISION = 'standard'
MIN_ORDER = 3
MAX_ORDER = 6

# Inverse solution iteration caps; Newton steps are only taken below NEWTON_ITERATIONS
NEWTON_ITERATIONS = 20
MAX_ITERATIONS = 50

# Flattening range over which the series have been validated
VALIDATED_FLATTENING = (-1 / 4, 1 / 5)

# Machine tolerances
EPSILON = sys.float_info.epsilon
TINY = math.sqrt(sys.float_info.min)
TOL0 = EPSILON
TOL1 = 200 * TOL0
TOL2 = math.sqrt(TOL0)
TOLB = TOL0 * TOL2
XTHRESH = 1000 * TOL2
