"""
===============================================================================
GEOMALG - Affine Matrices
===============================================================================

Matrix4x4 (3D affine / homogeneous) and Matrix3x2 (2D affine) in row-major
storage with the ROW-VECTOR convention:

    v' = v * M

so the translation lives in the last row and ``a * b`` applies ``a`` first
and then ``b``. Rotation factories follow the same convention, e.g.

    create_rotation_z(theta) = [ c  s  0  0 ]
                               [-s  c  0  0 ]
                               [ 0  0  1  0 ]
                               [ 0  0  0  1 ]

which maps (1, 0, 0) to (c, s, 0): a counter-clockwise rotation about +Z.

===============================================================================
"""

from numbers import Real
from typing import Iterator

import numpy as np

from .vector import Vector3


def _element(row: int, col: int, doc: str) -> property:
    def getter(self) -> float:
        return float(self._m[row, col])
    return property(getter, doc=doc)


class Matrix4x4:
    """
    4x4 double-precision matrix, immutable.

    Elements are addressed as m11..m44 (row, column, 1-based).
    """

    __slots__ = ("_m",)

    def __init__(self, m11=0.0, m12=0.0, m13=0.0, m14=0.0,
                 m21=0.0, m22=0.0, m23=0.0, m24=0.0,
                 m31=0.0, m32=0.0, m33=0.0, m34=0.0,
                 m41=0.0, m42=0.0, m43=0.0, m44=0.0) -> None:
        self._m = np.array([[m11, m12, m13, m14],
                            [m21, m22, m23, m24],
                            [m31, m32, m33, m34],
                            [m41, m42, m43, m44]], dtype=np.float64)

    @classmethod
    def from_array(cls, array) -> "Matrix4x4":
        m = np.asarray(array, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"Expected shape (4, 4), got {m.shape}")
        obj = cls.__new__(cls)
        obj._m = m.copy()
        return obj

    # =========================================================================
    # ELEMENT ACCESS
    # =========================================================================

    m11 = _element(0, 0, "Row 1, column 1.")
    m12 = _element(0, 1, "Row 1, column 2.")
    m13 = _element(0, 2, "Row 1, column 3.")
    m14 = _element(0, 3, "Row 1, column 4.")
    m21 = _element(1, 0, "Row 2, column 1.")
    m22 = _element(1, 1, "Row 2, column 2.")
    m23 = _element(1, 2, "Row 2, column 3.")
    m24 = _element(1, 3, "Row 2, column 4.")
    m31 = _element(2, 0, "Row 3, column 1.")
    m32 = _element(2, 1, "Row 3, column 2.")
    m33 = _element(2, 2, "Row 3, column 3.")
    m34 = _element(2, 3, "Row 3, column 4.")
    m41 = _element(3, 0, "Row 4, column 1 (x translation).")
    m42 = _element(3, 1, "Row 4, column 2 (y translation).")
    m43 = _element(3, 2, "Row 4, column 3 (z translation).")
    m44 = _element(3, 3, "Row 4, column 4.")

    @property
    def translation(self) -> Vector3:
        return Vector3(self._m[3, 0], self._m[3, 1], self._m[3, 2])

    @property
    def is_identity(self) -> bool:
        """Exact comparison against the identity matrix."""
        return bool(np.all(self._m == np.eye(4)))

    def to_numpy(self) -> np.ndarray:
        """Copy of the elements as a (4, 4) float64 array."""
        return self._m.copy()

    def rotation_block(self) -> np.ndarray:
        """Upper-left 3x3 block (rotation/scale part)."""
        return self._m[:3, :3].copy()

    def with_translation(self, translation: Vector3) -> "Matrix4x4":
        m = self._m.copy()
        m[3, :3] = translation.to_numpy()
        return Matrix4x4.from_array(m)

    def with_elements(self, **elements: float) -> "Matrix4x4":
        """Return a copy with elements replaced by name, e.g. ``m23=0.5``."""
        m = self._m.copy()
        for name, value in elements.items():
            if len(name) != 3 or name[0] != "m" or name[1] not in "1234" or name[2] not in "1234":
                raise TypeError(f"Matrix4x4 has no element {name!r}")
            m[int(name[1]) - 1, int(name[2]) - 1] = value
        return Matrix4x4.from_array(m)

    def __iter__(self) -> Iterator[float]:
        return (float(e) for e in self._m.ravel())

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @staticmethod
    def identity() -> "Matrix4x4":
        return Matrix4x4.from_array(np.eye(4))

    @staticmethod
    def create_translation(x: float, y: float, z: float) -> "Matrix4x4":
        m = np.eye(4)
        m[3, :3] = (x, y, z)
        return Matrix4x4.from_array(m)

    @staticmethod
    def create_scale(x: float, y: float, z: float) -> "Matrix4x4":
        return Matrix4x4.from_array(np.diag([x, y, z, 1.0]))

    @staticmethod
    def create_rotation_x(radians: float) -> "Matrix4x4":
        """Rotation about +X: (0, 1, 0) -> (0, cos, sin)."""
        c = np.cos(radians)
        s = np.sin(radians)
        m = np.eye(4)
        m[1, 1] = c
        m[1, 2] = s
        m[2, 1] = -s
        m[2, 2] = c
        return Matrix4x4.from_array(m)

    @staticmethod
    def create_rotation_y(radians: float) -> "Matrix4x4":
        """Rotation about +Y: (0, 0, 1) -> (sin, 0, cos)."""
        c = np.cos(radians)
        s = np.sin(radians)
        m = np.eye(4)
        m[0, 0] = c
        m[0, 2] = -s
        m[2, 0] = s
        m[2, 2] = c
        return Matrix4x4.from_array(m)

    @staticmethod
    def create_rotation_z(radians: float) -> "Matrix4x4":
        """Rotation about +Z: (1, 0, 0) -> (cos, sin, 0)."""
        c = np.cos(radians)
        s = np.sin(radians)
        m = np.eye(4)
        m[0, 0] = c
        m[0, 1] = s
        m[1, 0] = -s
        m[1, 1] = c
        return Matrix4x4.from_array(m)

    @staticmethod
    def from_quaternion(q) -> "Matrix4x4":
        """
        Rotation matrix of a quaternion.

        Assumes unit length; a non-unit quaternion produces a matrix that
        also scales. The fourth row and column are those of the identity.
        """
        x, y, z, w = q.x, q.y, q.z, q.w

        xx = x * x
        yy = y * y
        zz = z * z

        xy = x * y
        wz = z * w
        xz = z * x
        wy = y * w
        yz = y * z
        wx = x * w

        return Matrix4x4(
            1.0 - 2.0 * (yy + zz), 2.0 * (xy + wz), 2.0 * (xz - wy), 0.0,
            2.0 * (xy - wz), 1.0 - 2.0 * (zz + xx), 2.0 * (yz + wx), 0.0,
            2.0 * (xz + wy), 2.0 * (yz - wx), 1.0 - 2.0 * (yy + xx), 0.0,
            0.0, 0.0, 0.0, 1.0,
        )

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> "Matrix4x4":
        """
        Rotation of ``angle`` radians about ``axis`` (Rodrigues' formula).

        The axis is expected to be unit length.
        """
        x, y, z = axis.x, axis.y, axis.z
        sa = np.sin(angle)
        ca = np.cos(angle)
        xx = x * x
        yy = y * y
        zz = z * z
        xy = x * y
        xz = x * z
        yz = y * z

        return Matrix4x4(
            xx + ca * (1.0 - xx), xy - ca * xy + sa * z, xz - ca * xz - sa * y, 0.0,
            xy - ca * xy - sa * z, yy + ca * (1.0 - yy), yz - ca * yz + sa * x, 0.0,
            xz - ca * xz + sa * y, yz - ca * yz - sa * x, zz + ca * (1.0 - zz), 0.0,
            0.0, 0.0, 0.0, 1.0,
        )

    @staticmethod
    def from_yaw_pitch_roll(yaw: float, pitch: float, roll: float) -> "Matrix4x4":
        from .quaternion import Quaternion
        return Matrix4x4.from_quaternion(Quaternion.from_yaw_pitch_roll(yaw, pitch, roll))

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def multiply(self, other) -> "Matrix4x4":
        """Matrix product, or element-wise scaling for a scalar."""
        if isinstance(other, Matrix4x4):
            return Matrix4x4.from_array(self._m @ other._m)
        return Matrix4x4.from_array(self._m * float(other))

    def __mul__(self, other):
        if isinstance(other, (Matrix4x4, Real)):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self.multiply(other)
        return NotImplemented

    def __add__(self, other):
        if isinstance(other, Matrix4x4):
            return Matrix4x4.from_array(self._m + other._m)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Matrix4x4):
            return Matrix4x4.from_array(self._m - other._m)
        return NotImplemented

    def __neg__(self) -> "Matrix4x4":
        return Matrix4x4.from_array(-self._m)

    def __eq__(self, other):
        if not isinstance(other, Matrix4x4):
            return NotImplemented
        return bool(np.all(self._m == other._m))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        rows = ", ".join("[" + ", ".join(f"{e:g}" for e in row) + "]" for row in self._m)
        return f"Matrix4x4([{rows}])"


class Matrix3x2:
    """
    2D affine transform: 2x2 linear part in rows 1-2, translation in row 3.
    """

    __slots__ = ("_m",)

    def __init__(self, m11=0.0, m12=0.0, m21=0.0, m22=0.0,
                 m31=0.0, m32=0.0) -> None:
        self._m = np.array([[m11, m12],
                            [m21, m22],
                            [m31, m32]], dtype=np.float64)

    @classmethod
    def from_array(cls, array) -> "Matrix3x2":
        m = np.asarray(array, dtype=np.float64)
        if m.shape != (3, 2):
            raise ValueError(f"Expected shape (3, 2), got {m.shape}")
        obj = cls.__new__(cls)
        obj._m = m.copy()
        return obj

    m11 = _element(0, 0, "Row 1, column 1.")
    m12 = _element(0, 1, "Row 1, column 2.")
    m21 = _element(1, 0, "Row 2, column 1.")
    m22 = _element(1, 1, "Row 2, column 2.")
    m31 = _element(2, 0, "X translation.")
    m32 = _element(2, 1, "Y translation.")

    def to_numpy(self) -> np.ndarray:
        return self._m.copy()

    def with_elements(self, **elements: float) -> "Matrix3x2":
        m = self._m.copy()
        for name, value in elements.items():
            if len(name) != 3 or name[0] != "m" or name[1] not in "123" or name[2] not in "12":
                raise TypeError(f"Matrix3x2 has no element {name!r}")
            m[int(name[1]) - 1, int(name[2]) - 1] = value
        return Matrix3x2.from_array(m)

    @staticmethod
    def identity() -> "Matrix3x2":
        return Matrix3x2(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    @staticmethod
    def create_rotation(radians: float) -> "Matrix3x2":
        """Counter-clockwise rotation: (1, 0) -> (cos, sin)."""
        c = np.cos(radians)
        s = np.sin(radians)
        return Matrix3x2(c, s, -s, c, 0.0, 0.0)

    @staticmethod
    def create_translation(x: float, y: float) -> "Matrix3x2":
        return Matrix3x2(1.0, 0.0, 0.0, 1.0, x, y)

    @staticmethod
    def create_scale(x: float, y: float) -> "Matrix3x2":
        return Matrix3x2(x, 0.0, 0.0, y, 0.0, 0.0)

    def _homogeneous(self) -> np.ndarray:
        h = np.eye(3)
        h[:, :2] = self._m
        return h

    def __mul__(self, other):
        if isinstance(other, Matrix3x2):
            return Matrix3x2.from_array((self._homogeneous() @ other._homogeneous())[:, :2])
        if isinstance(other, Real):
            return Matrix3x2.from_array(self._m * float(other))
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Matrix3x2):
            return NotImplemented
        return bool(np.all(self._m == other._m))

    def __hash__(self) -> int:
        return hash(tuple(float(e) for e in self._m.ravel()))

    def __repr__(self) -> str:
        rows = ", ".join("[" + ", ".join(f"{e:g}" for e in row) + "]" for row in self._m)
        return f"Matrix3x2([{rows}])"
