"""
GEOMALG - double-precision rotation algebra.

Quaternions, 2/3/4-component vectors and affine matrices with the
conversions between axis-angle, yaw/pitch/roll, rotation-matrix and
quaternion form.
"""

from .core import (
    Matrix3x2,
    Matrix4x4,
    Quaternion,
    RotationBranch,
    Vector2,
    Vector3,
    Vector4,
    select_rotation_branch,
)

__version__ = "0.1.0"

__all__ = [
    "Quaternion",
    "RotationBranch",
    "select_rotation_branch",
    "Vector2",
    "Vector3",
    "Vector4",
    "Matrix4x4",
    "Matrix3x2",
    "__version__",
]
