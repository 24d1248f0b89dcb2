"""
===============================================================================
GEOMALG - Quaternion Rotation Algebra
===============================================================================

Double-precision quaternion type used to represent 3D rotations, compose
them, interpolate between them, and convert to and from axis-angle,
yaw/pitch/roll and rotation-matrix form.

Convention
----------
Components are stored vector-part first, matching the binary layout of
four consecutive doubles:

    q = (x, y, z, w) = x*i + y*j + z*k + w

A rotation by angle theta about unit axis n is encoded as:

    q = (sin(theta/2) * n, cos(theta/2))

Unit length is NOT enforced. Non-unit values (the zero quaternion,
intermediate lerp results) are legitimate and callers normalize explicitly.

Composition order
-----------------
Two composition functions exist and their names carry the order:

    hamilton_product(a, b)   == a * b   -> rotate by b first, then by a
    compose_then_apply(a, b) == b * a   -> rotate by a first, then by b

so ``Vector3.transform(v, a * b)`` equals
``Vector3.transform(Vector3.transform(v, b), a)``.

Double cover
------------
q and -q encode the same rotation. Interpolation picks the member of the
pair on the same hemisphere as the start value (sign of the 4D dot
product), which is why ``slerp(a, b, 1)`` can return ``-b``.

Numerical degeneracies
----------------------
No operation raises for numeric input. Normalizing or inverting the zero
quaternion yields NaN in every component; NaN and infinity propagate
component-wise.

References
----------
    [1] Shoemake, "Animating Rotation with Quaternion Curves",
        SIGGRAPH 1985.
    [2] Shepperd, "Quaternion from Rotation Matrix", JGCD, 1978.
    [3] Shoemake, "Uniform Random Rotations", Graphics Gems III, 1992.

===============================================================================
"""

from enum import Enum
from numbers import Real
from typing import Callable, Dict, Iterator, MutableSequence, Optional, Tuple, Union

import numpy as np

from .constants import (
    AXIS_EPSILON,
    DEFAULT_TOLERANCE,
    GIMBAL_LOCK_EPSILON,
    HALF_PI,
    SLERP_EPSILON,
)
from .matrix import Matrix4x4
from .vector import Vector3


# =============================================================================
# MATRIX -> QUATERNION EXTRACTION TABLE
# =============================================================================

class RotationBranch(Enum):
    """
    Which quaternion component dominates the extraction from a matrix.

    The component with the largest magnitude is recovered from a square root
    and the other three from off-diagonal sums/differences divided by it, so
    the divisor is always at least 0.5 for a proper rotation.
    """
    TRACE = "trace"            # trace > 0: w is largest
    X_DOMINANT = "x"           # m11 is the largest diagonal element
    Y_DOMINANT = "y"           # m22 is the largest diagonal element
    Z_DOMINANT = "z"           # m33 is the largest diagonal element


def _rotation_block(matrix) -> np.ndarray:
    """Upper-left 3x3 of a Matrix4x4 or a 3x3/4x4 array-like."""
    if isinstance(matrix, Matrix4x4):
        return matrix.rotation_block()
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape not in ((3, 3), (4, 4)):
        raise ValueError(f"Expected a 3x3 or 4x4 matrix, got shape {m.shape}")
    return m[:3, :3]


def select_rotation_branch(matrix) -> RotationBranch:
    """
    Choose the extraction branch for a rotation matrix.

    Decision table (m_ij are row-major elements):

        trace > 0                      -> TRACE
        m11 >= m22 and m11 >= m33      -> X_DOMINANT
        m22 > m33                      -> Y_DOMINANT
        otherwise                      -> Z_DOMINANT

    Parameters
    ----------
    matrix : Matrix4x4 or array_like
        Rotation matrix; only the upper-left 3x3 block is read.

    Returns
    -------
    RotationBranch
    """
    r = _rotation_block(matrix)
    trace = r[0, 0] + r[1, 1] + r[2, 2]

    if trace > 0.0:
        return RotationBranch.TRACE
    if r[0, 0] >= r[1, 1] and r[0, 0] >= r[2, 2]:
        return RotationBranch.X_DOMINANT
    if r[1, 1] > r[2, 2]:
        return RotationBranch.Y_DOMINANT
    return RotationBranch.Z_DOMINANT


def _extract_trace(r: np.ndarray) -> Tuple[float, float, float, float]:
    s = np.sqrt(r[0, 0] + r[1, 1] + r[2, 2] + 1.0)
    w = 0.5 * s
    s = 0.5 / s
    return ((r[1, 2] - r[2, 1]) * s,
            (r[2, 0] - r[0, 2]) * s,
            (r[0, 1] - r[1, 0]) * s,
            w)


def _extract_x(r: np.ndarray) -> Tuple[float, float, float, float]:
    s = np.sqrt(1.0 + r[0, 0] - r[1, 1] - r[2, 2])
    inv_s = 0.5 / s
    return (0.5 * s,
            (r[0, 1] + r[1, 0]) * inv_s,
            (r[0, 2] + r[2, 0]) * inv_s,
            (r[1, 2] - r[2, 1]) * inv_s)


def _extract_y(r: np.ndarray) -> Tuple[float, float, float, float]:
    s = np.sqrt(1.0 + r[1, 1] - r[0, 0] - r[2, 2])
    inv_s = 0.5 / s
    return ((r[1, 0] + r[0, 1]) * inv_s,
            0.5 * s,
            (r[2, 1] + r[1, 2]) * inv_s,
            (r[2, 0] - r[0, 2]) * inv_s)


def _extract_z(r: np.ndarray) -> Tuple[float, float, float, float]:
    s = np.sqrt(1.0 + r[2, 2] - r[0, 0] - r[1, 1])
    inv_s = 0.5 / s
    return ((r[2, 0] + r[0, 2]) * inv_s,
            (r[2, 1] + r[1, 2]) * inv_s,
            0.5 * s,
            (r[0, 1] - r[1, 0]) * inv_s)


EXTRACTORS: Dict[RotationBranch, Callable[[np.ndarray], Tuple[float, float, float, float]]] = {
    RotationBranch.TRACE: _extract_trace,
    RotationBranch.X_DOMINANT: _extract_x,
    RotationBranch.Y_DOMINANT: _extract_y,
    RotationBranch.Z_DOMINANT: _extract_z,
}


class Quaternion:
    """
    Double-precision quaternion (x, y, z, w).

    Instances are immutable values. Use :meth:`with_components` to derive
    a copy with some components replaced.

    Attributes
    ----------
    x, y, z : float
        Vector (imaginary) part.
    w : float
        Scalar (real) part.

    Examples
    --------
    >>> q = Quaternion.from_axis_angle(Vector3.unit_z(), np.pi / 2)
    >>> Vector3.transform(Vector3(1.0, 0.0, 0.0), q)   # ~ Vector3(0, 1, 0)
    """

    __slots__ = ("_q",)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0,
                 w: float = 0.0) -> None:
        """
        Assign the four components directly; no validation, no normalization.

        The default value is the zero quaternion, not the identity.
        """
        self._q = np.array([x, y, z, w], dtype=np.float64)

    @classmethod
    def _from_array(cls, array) -> "Quaternion":
        obj = cls.__new__(cls)
        obj._q = np.asarray(array, dtype=np.float64).reshape(4).copy()
        return obj

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def x(self) -> float:
        """First component of the vector (imaginary) part."""
        return float(self._q[0])

    @property
    def y(self) -> float:
        """Second component of the vector (imaginary) part."""
        return float(self._q[1])

    @property
    def z(self) -> float:
        """Third component of the vector (imaginary) part."""
        return float(self._q[2])

    @property
    def w(self) -> float:
        """Scalar (real) part."""
        return float(self._q[3])

    @property
    def vector(self) -> Vector3:
        """Vector (imaginary) part as a Vector3."""
        return Vector3(self._q[0], self._q[1], self._q[2])

    @property
    def is_identity(self) -> bool:
        """True only for exactly (0, 0, 0, 1); no tolerance is applied."""
        x, y, z, w = self._q
        return bool(x == 0.0 and y == 0.0 and z == 0.0 and w == 1.0)

    def to_numpy(self) -> np.ndarray:
        """Copy of the components in layout order [x, y, z, w]."""
        return self._q.copy()

    def copy_to(self, array: MutableSequence, index: int = 0) -> None:
        """
        Write x, y, z, w into ``array`` starting at ``index``.

        Raises
        ------
        TypeError
            If ``array`` is None.
        IndexError
            If ``index`` is outside the destination.
        ValueError
            If fewer than four slots remain after ``index``.
        """
        if array is None:
            raise TypeError("destination array must not be None")
        if index < 0 or index >= len(array):
            raise IndexError(f"index {index} out of range for length {len(array)}")
        if len(array) - index < 4:
            raise ValueError(
                f"destination too short: need 4 slots from index {index}, "
                f"have {len(array) - index}"
            )
        for offset, value in enumerate(self._q):
            array[index + offset] = float(value)

    def with_components(self, x: Optional[float] = None, y: Optional[float] = None,
                        z: Optional[float] = None, w: Optional[float] = None) -> "Quaternion":
        """Return a copy with the given components replaced."""
        q = self._q.copy()
        for i, value in enumerate((x, y, z, w)):
            if value is not None:
                q[i] = value
        return Quaternion._from_array(q)

    def __iter__(self) -> Iterator[float]:
        """Iterate the components in layout order x, y, z, w."""
        return (float(c) for c in self._q)

    # =========================================================================
    # STATIC FACTORY METHODS
    # =========================================================================

    @staticmethod
    def identity() -> "Quaternion":
        """The identity rotation (0, 0, 0, 1)."""
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_vector(vector_part: Vector3, w: float) -> "Quaternion":
        """Build from a Vector3 vector part and a scalar part."""
        return Quaternion(vector_part.x, vector_part.y, vector_part.z, w)

    @staticmethod
    def from_axis_angle(axis: Union[Vector3, np.ndarray], angle: float) -> "Quaternion":
        """
        Create a quaternion from an axis-angle representation.

            q = (sin(angle/2) * axis, cos(angle/2))

        Parameters
        ----------
        axis : Vector3 or array_like
            Rotation axis. Must already be unit length for the result to be
            a unit quaternion; it is NOT normalized here. A zero axis yields
            (0, 0, 0, cos(angle/2)).
        angle : float
            Rotation angle in radians.

        Returns
        -------
        Quaternion

        Notes
        -----
        The half-angle makes the components 4*pi periodic in ``angle``:
        ``angle + 2*pi`` produces the negated quaternion (same rotation,
        other member of the double cover) and ``angle + 4*pi`` produces the
        same components.
        """
        if isinstance(axis, Vector3):
            ax, ay, az = axis.x, axis.y, axis.z
        else:
            ax, ay, az = np.asarray(axis, dtype=np.float64).reshape(3)

        half_angle = angle * 0.5
        s = np.sin(half_angle)
        c = np.cos(half_angle)

        return Quaternion(ax * s, ay * s, az * s, c)

    @staticmethod
    def from_yaw_pitch_roll(yaw: float, pitch: float, roll: float) -> "Quaternion":
        """
        Create a quaternion from yaw (about Y), pitch (about X) and roll
        (about Z), in radians.

        Equivalent to

            from_axis_angle(unit_y, yaw) * from_axis_angle(unit_x, pitch)
                * from_axis_angle(unit_z, roll)

        so a transformed vector is rolled first, then pitched, then yawed.
        The closed form below expands that triple Hamilton product with each
        half-angle sine/cosine evaluated once.
        """
        half_roll = roll * 0.5
        sr = np.sin(half_roll)
        cr = np.cos(half_roll)

        half_pitch = pitch * 0.5
        sp = np.sin(half_pitch)
        cp = np.cos(half_pitch)

        half_yaw = yaw * 0.5
        sy = np.sin(half_yaw)
        cy = np.cos(half_yaw)

        return Quaternion(
            cy * sp * cr + sy * cp * sr,
            sy * cp * cr - cy * sp * sr,
            cy * cp * sr - sy * sp * cr,
            cy * cp * cr + sy * sp * sr,
        )

    @staticmethod
    def from_rotation_matrix(matrix) -> "Quaternion":
        """
        Extract a unit quaternion from the rotation block of a matrix.

        The naive trace formula divides by a value that approaches zero as
        the rotation angle approaches 180 degrees. Instead the extraction is
        dispatched through :func:`select_rotation_branch`, which always
        recovers the largest component from the square root first.

        Parameters
        ----------
        matrix : Matrix4x4 or array_like
            Row-major rotation matrix (row-vector convention). Translation
            and the fourth column are ignored.

        Returns
        -------
        Quaternion
            A quaternion for the same rotation; its sign is whichever member
            of the double cover the selected branch produces.
        """
        r = _rotation_block(matrix)
        branch = select_rotation_branch(r)
        with np.errstate(divide="ignore", invalid="ignore"):
            return Quaternion(*EXTRACTORS[branch](r))

    @staticmethod
    def random(rng: Optional[np.random.Generator] = None) -> "Quaternion":
        """
        Uniformly distributed random unit quaternion.

        Uses Shoemake's subgroup algorithm. Normalizing a random 4-vector
        does NOT give a uniform distribution over rotations.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Source of randomness; a fresh default generator when omitted.
        """
        if rng is None:
            rng = np.random.default_rng()
        u1, u2, u3 = rng.random(3)

        sqrt_u1 = np.sqrt(u1)
        sqrt_1_minus_u1 = np.sqrt(1.0 - u1)

        return Quaternion(
            sqrt_1_minus_u1 * np.cos(2.0 * np.pi * u2),
            sqrt_u1 * np.sin(2.0 * np.pi * u3),
            sqrt_u1 * np.cos(2.0 * np.pi * u3),
            sqrt_1_minus_u1 * np.sin(2.0 * np.pi * u2),
        )

    # =========================================================================
    # BASIC ALGEBRA
    # =========================================================================

    def add(self, other: "Quaternion") -> "Quaternion":
        """Component-wise sum."""
        return Quaternion._from_array(self._q + other._q)

    def subtract(self, other: "Quaternion") -> "Quaternion":
        """Component-wise difference."""
        return Quaternion._from_array(self._q - other._q)

    def negate(self) -> "Quaternion":
        """-q: the same rotation, other member of the double cover."""
        return Quaternion._from_array(-self._q)

    def scale(self, factor: float) -> "Quaternion":
        """Multiply every component by a scalar."""
        return Quaternion._from_array(self._q * factor)

    def dot(self, other: "Quaternion") -> float:
        """
        4D dot product. Usable as ``Quaternion.dot(a, b)``.

        For unit quaternions this is cos(half the angle between the two
        rotations), up to sign.
        """
        return float(np.dot(self._q, other._q))

    def length_squared(self) -> float:
        """Squared 4D Euclidean norm."""
        return float(np.dot(self._q, self._q))

    def length(self) -> float:
        """4D Euclidean norm; 1 for a rotation quaternion."""
        return float(np.sqrt(np.dot(self._q, self._q)))

    def normalize(self) -> "Quaternion":
        """
        Divide every component by the length.

        The zero quaternion yields NaN in every component (0/0).
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            return Quaternion._from_array(self._q / np.sqrt(np.dot(self._q, self._q)))

    def conjugate(self) -> "Quaternion":
        """(-x, -y, -z, w). For unit quaternions this is the inverse rotation."""
        x, y, z, w = self._q
        return Quaternion(-x, -y, -z, w)

    def inverse(self) -> "Quaternion":
        """
        Multiplicative inverse: conjugate / length_squared.

        The squared norm (not the norm) is the divisor, so for the zero
        quaternion every component is NaN.
        """
        x, y, z, w = self._q
        with np.errstate(divide="ignore", invalid="ignore"):
            return Quaternion._from_array(
                np.array([-x, -y, -z, w]) / np.dot(self._q, self._q)
            )

    @staticmethod
    def hamilton_product(a: "Quaternion", b: "Quaternion") -> "Quaternion":
        """
        Hamilton product ``a * b``.

        As a rotation the product applies ``b`` first and then ``a``:

            (v_a, w_a)(v_b, w_b) = (w_a v_b + w_b v_a + v_a x v_b,
                                    w_a w_b - v_a . v_b)
        """
        ax, ay, az, aw = a._q
        bx, by, bz, bw = b._q

        # Cross product of the vector parts
        cx = ay * bz - az * by
        cy = az * bx - ax * bz
        cz = ax * by - ay * bx

        dot = ax * bx + ay * by + az * bz

        return Quaternion(
            ax * bw + bx * aw + cx,
            ay * bw + by * aw + cy,
            az * bw + bz * aw + cz,
            aw * bw - dot,
        )

    @staticmethod
    def compose_then_apply(first: "Quaternion", then: "Quaternion") -> "Quaternion":
        """
        Rotation that applies ``first`` and then ``then``.

        Equal to ``hamilton_product(then, first)``, i.e. ``then * first``.
        """
        return Quaternion.hamilton_product(then, first)

    concatenate = compose_then_apply

    @staticmethod
    def divide(a: "Quaternion", b: "Quaternion") -> "Quaternion":
        """``a * inverse(b)``."""
        return Quaternion.hamilton_product(a, b.inverse())

    # =========================================================================
    # INTERPOLATION
    # =========================================================================

    @staticmethod
    def lerp(a: "Quaternion", b: "Quaternion", t: float) -> "Quaternion":
        """
        Normalized linear interpolation along the shorter arc.

            r = a * (1 - t) + b * t        if dot(a, b) >= 0
            r = a * (1 - t) - b * t        otherwise

        followed by normalization. ``t`` is not clamped, so values outside
        [0, 1] extrapolate.

        Parameters
        ----------
        a, b : Quaternion
            Start (t = 0) and end (t = 1) orientations.
        t : float
            Interpolation parameter.

        Returns
        -------
        Quaternion
            Unit quaternion, except when the blended value has zero length
            (e.g. ``a`` and ``-a`` blended to cancel), in which case the
            zero result is returned as-is rather than normalized to NaN.
        """
        t1 = 1.0 - t

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            if np.dot(a._q, b._q) >= 0.0:
                r = t1 * a._q + t * b._q
            else:
                r = t1 * a._q - t * b._q

            length_sq = np.dot(r, r)
            if length_sq == 0.0:
                return Quaternion._from_array(r)
            return Quaternion._from_array(r / np.sqrt(length_sq))

    @staticmethod
    def slerp(a: "Quaternion", b: "Quaternion", t: float,
              epsilon: float = SLERP_EPSILON) -> "Quaternion":
        """
        Spherical linear interpolation (constant angular velocity).

            slerp(a, b, t) = a * sin((1-t)*omega) / sin(omega)
                           + b * sin(t*omega) / sin(omega)

        where cos(omega) = dot(a, b).

        Parameters
        ----------
        a, b : Quaternion
            Start (t = 0) and end (t = 1) orientations, normally unit length.
        t : float
            Interpolation parameter; not clamped.
        epsilon : float, optional
            When cos(omega) > 1 - epsilon the quaternions are too close for
            1/sin(omega) to be accurate and linear coefficients are used.

        Returns
        -------
        Quaternion
            Not renormalized: the coefficients preserve unit length for unit
            inputs.

        Notes
        -----
        If dot(a, b) < 0 the contribution of ``b`` is negated so the short
        arc is taken. With that correction ``slerp(a, b, 1)`` returns ``-b``,
        the same rotation as ``b`` with the opposite sign.
        """
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            cos_omega = float(np.dot(a._q, b._q))
            flip = False

            if cos_omega < 0.0:
                flip = True
                cos_omega = -cos_omega

            if cos_omega > 1.0 - epsilon:
                # Too close for a stable 1/sin(omega): linear coefficients
                s1 = 1.0 - t
                s2 = -t if flip else t
            else:
                omega = np.arccos(cos_omega)
                inv_sin_omega = 1.0 / np.sin(omega)

                s1 = np.sin((1.0 - t) * omega) * inv_sin_omega
                s2 = (-np.sin(t * omega) if flip else np.sin(t * omega)) * inv_sin_omega

            return Quaternion._from_array(s1 * a._q + s2 * b._q)

    # =========================================================================
    # CONVERSIONS
    # =========================================================================

    def to_axis_angle(self) -> Tuple[Vector3, float]:
        """
        Convert to (unit axis, angle in radians).

        The quaternion is normalized first. The angle is in [0, 2*pi]:
        ``from_axis_angle(*q.to_axis_angle())`` reproduces ``q`` itself, not
        just its rotation.

        Returns
        -------
        tuple of (Vector3, float)
            For a quaternion with no vector part (identity or its negation)
            the axis is undefined and Z is returned by convention.
        """
        q = self.normalize()._q
        w = np.clip(q[3], -1.0, 1.0)
        angle = 2.0 * np.arccos(w)

        vec_norm = np.linalg.norm(q[:3])
        if vec_norm < AXIS_EPSILON:
            return Vector3.unit_z(), float(angle)

        axis = q[:3] / vec_norm
        return Vector3(axis[0], axis[1], axis[2]), float(angle)

    def to_yaw_pitch_roll(self) -> Tuple[float, float, float]:
        """
        Convert a unit quaternion to (yaw, pitch, roll) in radians, the
        inverse of :meth:`from_yaw_pitch_roll`.

        pitch is in [-pi/2, pi/2]; yaw and roll in [-pi, pi].

        At gimbal lock (pitch = +/-90 degrees) yaw and roll rotate about the
        same axis and only their combination is determined; roll is reported
        as 0 and the whole rotation is attributed to yaw.
        """
        x, y, z, w = self._q

        sin_pitch = 2.0 * (w * x - y * z)

        if abs(sin_pitch) >= 1.0 - GIMBAL_LOCK_EPSILON:
            pitch = float(np.copysign(HALF_PI, sin_pitch))
            yaw = float(np.arctan2(2.0 * (w * y - x * z), 1.0 - 2.0 * (y * y + z * z)))
            return yaw, pitch, 0.0

        pitch = float(np.arcsin(sin_pitch))
        yaw = float(np.arctan2(2.0 * (x * z + w * y), 1.0 - 2.0 * (x * x + y * y)))
        roll = float(np.arctan2(2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z)))
        return yaw, pitch, roll

    def to_rotation_matrix(self) -> Matrix4x4:
        """Same as ``Matrix4x4.from_quaternion(self)``."""
        return Matrix4x4.from_quaternion(self)

    # =========================================================================
    # COMPARISON HELPERS
    # =========================================================================

    def angle_to(self, other: "Quaternion") -> float:
        """
        Smallest rotation angle (radians, in [0, pi]) taking this
        orientation to ``other``.

            angle = 2 * arccos(|a . b|)
        """
        a = self.normalize()._q
        b = other.normalize()._q
        dot = np.clip(abs(np.dot(a, b)), 0.0, 1.0)
        return float(2.0 * np.arccos(dot))

    def is_unit(self, tolerance: float = 1e-8) -> bool:
        """True when the norm is within ``tolerance`` of 1."""
        return abs(self.length() - 1.0) < tolerance

    def equals_rotation(self, other: "Quaternion",
                        tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """
        Approximate comparison modulo the double cover: True when either
        ``other`` or ``-other`` matches every component within ``tolerance``.
        """
        same = np.max(np.abs(self._q - other._q))
        opposite = np.max(np.abs(self._q + other._q))
        return bool(min(same, opposite) <= tolerance)

    def equals(self, other: object) -> bool:
        """
        Structural IEEE equality; False for non-quaternions.

        NaN never equals NaN, so a quaternion containing NaN is not equal to
        itself.
        """
        return isinstance(other, Quaternion) and bool(np.all(self._q == other._q))

    # =========================================================================
    # OPERATOR OVERLOADS
    # =========================================================================

    def __add__(self, other):
        if isinstance(other, Quaternion):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Quaternion):
            return self.subtract(other)
        return NotImplemented

    def __neg__(self) -> "Quaternion":
        return self.negate()

    def __mul__(self, other):
        """
        - Quaternion * Quaternion -> Hamilton product (``other`` applied first)
        - Quaternion * scalar -> component-wise scaling
        """
        if isinstance(other, Quaternion):
            return Quaternion.hamilton_product(self, other)
        if isinstance(other, Real):
            return self.scale(float(other))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self.scale(float(other))
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Quaternion):
            return Quaternion.divide(self, other)
        if isinstance(other, Real):
            with np.errstate(divide="ignore", invalid="ignore"):
                return Quaternion._from_array(self._q / np.float64(other))
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return bool(np.all(self._q == other._q))

    def __hash__(self) -> int:
        return hash(tuple(float(c) for c in self._q))

    def __repr__(self) -> str:
        x, y, z, w = (float(c) for c in self._q)
        return f"Quaternion(x={x!r}, y={y!r}, z={z!r}, w={w!r})"

    def __str__(self) -> str:
        x, y, z, w = (float(c) for c in self._q)
        return f"{{X:{x:g} Y:{y:g} Z:{z:g} W:{w:g}}}"
