"""Core value types: vectors, quaternions, matrices and their binary layout."""

from .constants import DEFAULT_TOLERANCE, SLERP_EPSILON, to_degrees, to_radians
from .layout import (
    MATRIX4X4_DTYPE,
    QUATERNION_DTYPE,
    VECTOR2_DTYPE,
    VECTOR3_DTYPE,
    VECTOR4_DTYPE,
    composite_dtype,
    pack,
    unpack,
)
from .matrix import Matrix3x2, Matrix4x4
from .quaternion import Quaternion, RotationBranch, select_rotation_branch
from .vector import Vector2, Vector3, Vector4

__all__ = [
    "Quaternion",
    "RotationBranch",
    "select_rotation_branch",
    "Vector2",
    "Vector3",
    "Vector4",
    "Matrix4x4",
    "Matrix3x2",
    "QUATERNION_DTYPE",
    "VECTOR2_DTYPE",
    "VECTOR3_DTYPE",
    "VECTOR4_DTYPE",
    "MATRIX4X4_DTYPE",
    "pack",
    "unpack",
    "composite_dtype",
    "SLERP_EPSILON",
    "DEFAULT_TOLERANCE",
    "to_radians",
    "to_degrees",
]
