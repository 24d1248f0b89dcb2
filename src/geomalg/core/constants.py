"""
===============================================================================
GEOMALG - Numeric Constants and Tolerances
===============================================================================
Central repository for the angle conversion factors and the numerical
thresholds used by the rotation algebra. All angles are in radians unless a
name says otherwise.
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
TWO_PI = 2.0 * np.pi
FOUR_PI = 4.0 * np.pi
HALF_PI = 0.5 * np.pi
DEG2RAD = PI / 180.0
RAD2DEG = 180.0 / PI

# =============================================================================
# ROTATION ALGEBRA THRESHOLDS
# =============================================================================
# Slerp falls back to linear coefficients when cos(omega) > 1 - SLERP_EPSILON.
# At this distance sin(omega) is ~1.4e-3, far from cancellation, while two
# rotations 0.16 degrees apart are still interpolated spherically.
SLERP_EPSILON = 1e-6

# Vector part norm below which a quaternion has no usable rotation axis.
AXIS_EPSILON = 1e-12

# |sin(pitch)| above 1 - GIMBAL_LOCK_EPSILON is treated as gimbal lock.
GIMBAL_LOCK_EPSILON = 1e-12

# Default tolerance for approximate comparisons (matches the 1e-5 used by
# the rotation round-trip audits).
DEFAULT_TOLERANCE = 1e-5

# =============================================================================
# BINARY LAYOUT
# =============================================================================
FLOAT64_SIZE = 8                       # bytes
QUATERNION_SIZE = 4 * FLOAT64_SIZE     # bytes, x/y/z/w with no padding


def to_radians(degrees: float) -> float:
    """Convert an angle in degrees to radians."""
    return degrees * DEG2RAD


def to_degrees(radians: float) -> float:
    """Convert an angle in radians to degrees."""
    return radians * RAD2DEG
