"""
===============================================================================
GEOMALG - Binary Layout
===============================================================================
numpy structured dtypes describing how the value types are laid out in
memory: little-endian IEEE-754 doubles in declaration order, no padding.

    Quaternion   x@0  y@8  z@16 w@24            32 bytes
    Vector2      x@0  y@8                       16 bytes
    Vector3      x@0  y@8  z@16                 24 bytes
    Vector4      x@0  y@8  z@16 w@24            32 bytes
    Matrix4x4    m11@0 ... m44@120 (row-major) 128 bytes

Larger records embed these types with :func:`composite_dtype`, which also
packs fields back to back.
===============================================================================
"""

from typing import List, Sequence, Tuple, Union

import numpy as np

from .matrix import Matrix4x4
from .quaternion import Quaternion
from .vector import Vector2, Vector3, Vector4

_F8 = "<f8"

QUATERNION_DTYPE = np.dtype([("x", _F8), ("y", _F8), ("z", _F8), ("w", _F8)])
VECTOR2_DTYPE = np.dtype([("x", _F8), ("y", _F8)])
VECTOR3_DTYPE = np.dtype([("x", _F8), ("y", _F8), ("z", _F8)])
VECTOR4_DTYPE = np.dtype([("x", _F8), ("y", _F8), ("z", _F8), ("w", _F8)])
MATRIX4X4_DTYPE = np.dtype([(f"m{r}{c}", _F8) for r in range(1, 5) for c in range(1, 5)])

_DTYPES = {
    Quaternion: QUATERNION_DTYPE,
    Vector2: VECTOR2_DTYPE,
    Vector3: VECTOR3_DTYPE,
    Vector4: VECTOR4_DTYPE,
    Matrix4x4: MATRIX4X4_DTYPE,
}


def dtype_for(value_type: type) -> np.dtype:
    """Structured dtype for one of the value types."""
    try:
        return _DTYPES[value_type]
    except KeyError:
        raise TypeError(f"No binary layout for {value_type.__name__}") from None


def pack(values: Sequence) -> np.ndarray:
    """
    Pack a homogeneous sequence of values into a structured array.

    Parameters
    ----------
    values : sequence of Quaternion, Vector2/3/4 or Matrix4x4
        All elements must be of the same type.

    Returns
    -------
    np.ndarray
        One record per value; ``.tobytes()`` gives the raw layout.
    """
    if len(values) == 0:
        raise ValueError("Cannot infer a layout from an empty sequence")
    value_type = type(values[0])
    if any(type(v) is not value_type for v in values):
        raise TypeError("pack() requires values of a single type")

    dtype = dtype_for(value_type)
    return np.array([tuple(v) for v in values], dtype=dtype)


def unpack(array: np.ndarray) -> List:
    """Inverse of :func:`pack`; the value type is inferred from the dtype."""
    for value_type, dtype in _DTYPES.items():
        if array.dtype == dtype:
            break
    else:
        raise TypeError(f"Unrecognized record layout {array.dtype}")

    # Vector4 and Quaternion share a layout; such records come back as quaternions.
    return [value_type(*record) for record in array.tolist()]


def composite_dtype(*fields: Tuple[str, Union[np.dtype, str]]) -> np.dtype:
    """
    Unpadded sequential record, e.g.

    >>> composite_dtype(("orientation", QUATERNION_DTYPE), ("time", "<f8")).itemsize
    40
    """
    return np.dtype(list(fields), align=False)
