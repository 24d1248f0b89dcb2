"""
===============================================================================
GEOMALG - Vector Types
===============================================================================

Fixed-size double-precision vectors (Vector2, Vector3, Vector4) used as the
axis input and transform payload of the rotation algebra.

Conventions
-----------
Row-vector convention throughout: a vector is transformed by a matrix as
``v' = v * M``, so translation lives in the fourth row of a Matrix4x4 (and
the third row of a Matrix3x2).

Transforming by a quaternion uses the expanded rotation-matrix form of the
sandwich product ``q * v * q^-1`` with doubled products (x2 = x + x, ...).
The quaternion is NOT normalized first; a zero quaternion therefore leaves
the vector unchanged.

All arithmetic follows IEEE-754: division by zero and normalization of a
zero vector produce inf/NaN components rather than raising.
===============================================================================
"""

from numbers import Real
from typing import Iterator, MutableSequence, Tuple

import numpy as np


def _quaternion_rotation_terms(q) -> np.ndarray:
    """
    Rotation matrix (column-vector form) of a quaternion, unnormalized.

    Parameters
    ----------
    q : Quaternion
        Any quaternion; no unit-length requirement.

    Returns
    -------
    np.ndarray
        3x3 array R such that ``R @ v`` is the rotated vector.
    """
    x, y, z, w = q.x, q.y, q.z, q.w

    x2 = x + x
    y2 = y + y
    z2 = z + z

    wx2 = w * x2
    wy2 = w * y2
    wz2 = w * z2
    xx2 = x * x2
    xy2 = x * y2
    xz2 = x * z2
    yy2 = y * y2
    yz2 = y * z2
    zz2 = z * z2

    return np.array([
        [1.0 - yy2 - zz2, xy2 - wz2,       xz2 + wy2],
        [xy2 + wz2,       1.0 - xx2 - zz2, yz2 - wx2],
        [xz2 - wy2,       yz2 + wx2,       1.0 - xx2 - yy2],
    ], dtype=np.float64)


class _VectorBase:
    """
    Shared storage and component-wise algebra for the fixed-size vectors.

    Components live in a private float64 array; instances are immutable and
    every operation returns a new value.
    """

    __slots__ = ("_v",)

    _FIELDS: Tuple[str, ...] = ()

    # -------------------------------------------------------------------------
    # Construction helpers
    # -------------------------------------------------------------------------

    @classmethod
    def _from_array(cls, array) -> "_VectorBase":
        obj = cls.__new__(cls)
        obj._v = np.asarray(array, dtype=np.float64).reshape(len(cls._FIELDS)).copy()
        return obj

    @classmethod
    def splat(cls, value: float) -> "_VectorBase":
        """Vector with every component set to ``value``."""
        return cls._from_array(np.full(len(cls._FIELDS), value, dtype=np.float64))

    @classmethod
    def zero(cls) -> "_VectorBase":
        return cls.splat(0.0)

    @classmethod
    def one(cls) -> "_VectorBase":
        return cls.splat(1.0)

    @classmethod
    def _unit(cls, index: int) -> "_VectorBase":
        v = np.zeros(len(cls._FIELDS), dtype=np.float64)
        v[index] = 1.0
        return cls._from_array(v)

    @classmethod
    def unit_x(cls) -> "_VectorBase":
        return cls._unit(0)

    @classmethod
    def unit_y(cls) -> "_VectorBase":
        return cls._unit(1)

    def with_components(self, **components: float) -> "_VectorBase":
        """
        Return a copy with the named components replaced.

        Raises
        ------
        TypeError
            If a keyword does not name a component of this vector type.
        """
        v = self._v.copy()
        for name, value in components.items():
            if name not in self._FIELDS:
                raise TypeError(
                    f"{type(self).__name__} has no component {name!r}"
                )
            v[self._FIELDS.index(name)] = value
        return self._from_array(v)

    # -------------------------------------------------------------------------
    # Component access
    # -------------------------------------------------------------------------

    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    def to_numpy(self) -> np.ndarray:
        """Copy of the components as a float64 array."""
        return self._v.copy()

    def copy_to(self, array: MutableSequence, index: int = 0) -> None:
        """
        Write the components into ``array`` starting at ``index``.

        Raises
        ------
        TypeError
            If ``array`` is None.
        IndexError
            If ``index`` is outside the destination.
        ValueError
            If the destination has fewer than ``len(self)`` slots after
            ``index``.
        """
        if array is None:
            raise TypeError("destination array must not be None")
        if index < 0 or index >= len(array):
            raise IndexError(f"index {index} out of range for length {len(array)}")
        if len(array) - index < len(self._FIELDS):
            raise ValueError(
                f"destination too short: need {len(self._FIELDS)} slots from "
                f"index {index}, have {len(array) - index}"
            )
        for offset, value in enumerate(self._v):
            array[index + offset] = float(value)

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._v)

    def __len__(self) -> int:
        return len(self._FIELDS)

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def dot(self, other: "_VectorBase") -> float:
        """Dot product. Usable as ``VectorN.dot(a, b)``."""
        return float(np.dot(self._v, other._v))

    def length_squared(self) -> float:
        return float(np.dot(self._v, self._v))

    def length(self) -> float:
        return float(np.sqrt(np.dot(self._v, self._v)))

    def distance_squared(self, other: "_VectorBase") -> float:
        d = self._v - other._v
        return float(np.dot(d, d))

    def distance(self, other: "_VectorBase") -> float:
        return float(np.sqrt(self.distance_squared(other)))

    def normalize(self) -> "_VectorBase":
        """Unit vector in the same direction; a zero vector yields NaNs."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._from_array(self._v / np.sqrt(np.dot(self._v, self._v)))

    def negate(self) -> "_VectorBase":
        return self._from_array(-self._v)

    def lerp(self, other: "_VectorBase", t: float) -> "_VectorBase":
        """``self + (other - self) * t``; t is not clamped."""
        return self._from_array(self._v + (other._v - self._v) * t)

    def minimum(self, other: "_VectorBase") -> "_VectorBase":
        return self._from_array(np.where(self._v < other._v, self._v, other._v))

    def maximum(self, other: "_VectorBase") -> "_VectorBase":
        return self._from_array(np.where(self._v > other._v, self._v, other._v))

    def clamp(self, lo: "_VectorBase", hi: "_VectorBase") -> "_VectorBase":
        """
        Restrict each component to [lo, hi].

        The upper bound is applied first and the lower bound last, so when
        ``lo > hi`` the result is ``lo``.
        """
        v = np.where(self._v > hi._v, hi._v, self._v)
        v = np.where(v < lo._v, lo._v, v)
        return self._from_array(v)

    def absolute(self) -> "_VectorBase":
        return self._from_array(np.abs(self._v))

    def square_root(self) -> "_VectorBase":
        """Per-component square root (negative components give NaN)."""
        with np.errstate(invalid="ignore"):
            return self._from_array(np.sqrt(self._v))

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other):
        if type(other) is type(self):
            return self._from_array(self._v + other._v)
        return NotImplemented

    def __sub__(self, other):
        if type(other) is type(self):
            return self._from_array(self._v - other._v)
        return NotImplemented

    def __neg__(self):
        return self._from_array(-self._v)

    def __mul__(self, other):
        if type(other) is type(self):
            return self._from_array(self._v * other._v)
        if isinstance(other, Real):
            return self._from_array(self._v * float(other))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self._from_array(float(other) * self._v)
        return NotImplemented

    def __truediv__(self, other):
        with np.errstate(divide="ignore", invalid="ignore"):
            if type(other) is type(self):
                return self._from_array(self._v / other._v)
            if isinstance(other, Real):
                return self._from_array(self._v / np.float64(other))
        return NotImplemented

    def __eq__(self, other):
        # IEEE comparison: NaN components never compare equal.
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.all(self._v == other._v))

    def equals(self, other) -> bool:
        """Same as ``==`` but returns False (not NotImplemented) for other types."""
        return type(other) is type(self) and bool(np.all(self._v == other._v))

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + tuple(float(c) for c in self._v))

    def __repr__(self) -> str:
        body = ", ".join(f"{n}={float(c)!r}" for n, c in zip(self._FIELDS, self._v))
        return f"{type(self).__name__}({body})"

    def __str__(self) -> str:
        return "<" + ", ".join(f"{float(c):g}" for c in self._v) + ">"


class Vector2(_VectorBase):
    """Two-component double-precision vector."""

    __slots__ = ()
    _FIELDS = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self._v = np.array([x, y], dtype=np.float64)

    def reflect(self, normal: "Vector2") -> "Vector2":
        """Reflect about a plane with unit ``normal``: v - 2 (v.n) n."""
        return self._from_array(self._v - 2.0 * np.dot(self._v, normal._v) * normal._v)

    @staticmethod
    def transform(value: "Vector2", transformation) -> "Vector2":
        """
        Transform a position by a Matrix3x2, Matrix4x4 or Quaternion.

        Matrix inputs apply their translation row; the quaternion form
        rotates in the XY plane only, dropping the z result.
        """
        from .matrix import Matrix3x2, Matrix4x4
        from .quaternion import Quaternion

        if isinstance(transformation, Quaternion):
            r = _quaternion_rotation_terms(transformation)
            return Vector2._from_array(r[:2, :2] @ value._v)
        if isinstance(transformation, Matrix3x2):
            return Vector2._from_array(
                np.append(value._v, 1.0) @ transformation.to_numpy()
            )
        if isinstance(transformation, Matrix4x4):
            v4 = np.array([value.x, value.y, 0.0, 1.0])
            return Vector2._from_array((v4 @ transformation.to_numpy())[:2])
        raise TypeError(
            f"cannot transform Vector2 by {type(transformation).__name__}"
        )

    @staticmethod
    def transform_normal(value: "Vector2", transformation) -> "Vector2":
        """Transform a direction (translation ignored) by a Matrix3x2 or Matrix4x4."""
        from .matrix import Matrix3x2, Matrix4x4

        if isinstance(transformation, Matrix3x2):
            return Vector2._from_array(value._v @ transformation.to_numpy()[:2, :])
        if isinstance(transformation, Matrix4x4):
            return Vector2._from_array(value._v @ transformation.to_numpy()[:2, :2])
        raise TypeError(
            f"cannot transform Vector2 by {type(transformation).__name__}"
        )


class Vector3(_VectorBase):
    """Three-component double-precision vector."""

    __slots__ = ()
    _FIELDS = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self._v = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_vector2(cls, value: Vector2, z: float) -> "Vector3":
        return cls(value.x, value.y, z)

    @classmethod
    def unit_z(cls) -> "Vector3":
        return cls._unit(2)

    @property
    def z(self) -> float:
        return float(self._v[2])

    def cross(self, other: "Vector3") -> "Vector3":
        """Right-handed cross product ``self x other``."""
        ax, ay, az = self._v
        bx, by, bz = other._v
        return Vector3(ay * bz - az * by,
                       az * bx - ax * bz,
                       ax * by - ay * bx)

    def reflect(self, normal: "Vector3") -> "Vector3":
        """Reflect about a plane with unit ``normal``: v - 2 (v.n) n."""
        return self._from_array(self._v - 2.0 * np.dot(self._v, normal._v) * normal._v)

    @staticmethod
    def transform(value: "Vector3", transformation) -> "Vector3":
        """
        Transform a position by a Matrix4x4 (with translation) or rotate it
        by a Quaternion.
        """
        from .matrix import Matrix4x4
        from .quaternion import Quaternion

        if isinstance(transformation, Quaternion):
            return Vector3._from_array(_quaternion_rotation_terms(transformation) @ value._v)
        if isinstance(transformation, Matrix4x4):
            v4 = np.append(value._v, 1.0)
            return Vector3._from_array((v4 @ transformation.to_numpy())[:3])
        raise TypeError(
            f"cannot transform Vector3 by {type(transformation).__name__}"
        )

    @staticmethod
    def transform_normal(value: "Vector3", transformation) -> "Vector3":
        """Transform a direction by the upper 3x3 of a Matrix4x4."""
        return Vector3._from_array(value._v @ transformation.to_numpy()[:3, :3])


class Vector4(_VectorBase):
    """Four-component double-precision vector."""

    __slots__ = ()
    _FIELDS = ("x", "y", "z", "w")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0,
                 w: float = 0.0) -> None:
        self._v = np.array([x, y, z, w], dtype=np.float64)

    @classmethod
    def from_vector2(cls, value: Vector2, z: float, w: float) -> "Vector4":
        return cls(value.x, value.y, z, w)

    @classmethod
    def from_vector3(cls, value: Vector3, w: float) -> "Vector4":
        return cls(value.x, value.y, value.z, w)

    @classmethod
    def unit_z(cls) -> "Vector4":
        return cls._unit(2)

    @classmethod
    def unit_w(cls) -> "Vector4":
        return cls._unit(3)

    @property
    def z(self) -> float:
        return float(self._v[2])

    @property
    def w(self) -> float:
        return float(self._v[3])

    @staticmethod
    def _homogeneous(value) -> np.ndarray:
        if isinstance(value, Vector4):
            return value._v
        if isinstance(value, Vector3):
            return np.append(value._v, 1.0)
        if isinstance(value, Vector2):
            return np.array([value.x, value.y, 0.0, 1.0])
        raise TypeError(f"cannot promote {type(value).__name__} to Vector4")

    @staticmethod
    def transform(value, transformation) -> "Vector4":
        """
        Transform a Vector2, Vector3 or Vector4 into a Vector4.

        Vector2 inputs are read as (x, y, 0, 1) and Vector3 inputs as
        (x, y, z, 1). A Matrix4x4 multiplies the homogeneous vector; a
        Quaternion rotates the xyz part and passes w through (1 for the
        promoted inputs).
        """
        from .matrix import Matrix4x4
        from .quaternion import Quaternion

        h = Vector4._homogeneous(value)
        if isinstance(transformation, Quaternion):
            xyz = np.zeros(3)
            n = 2 if isinstance(value, Vector2) else 3
            xyz[:n] = h[:n]
            rotated = _quaternion_rotation_terms(transformation) @ xyz
            return Vector4(rotated[0], rotated[1], rotated[2], h[3])
        if isinstance(transformation, Matrix4x4):
            return Vector4._from_array(h @ transformation.to_numpy())
        raise TypeError(
            f"cannot transform Vector4 by {type(transformation).__name__}"
        )
