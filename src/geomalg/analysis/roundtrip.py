"""
===============================================================================
GEOMALG - Rotation Round-Trip Audit
===============================================================================
Sweeps rotation angles about a fixed axis and checks that

    matrix  ->  quaternion  ->  matrix

reproduces both the expected axis-angle quaternion (modulo sign) and the
original matrix. The sweep covers every matrix-extraction branch, so a
broken branch shows up as a cluster of failures in the summary table.

Axes
----
    x, y, z   create_rotation_{x,y,z}(angle)
    xyz       create_rotation_x(a) * create_rotation_y(a) * create_rotation_z(a)
              whose quaternion is q_z(a) * q_y(a) * q_x(a)
===============================================================================
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Tuple, Union

import numpy as np
import pandas as pd

from ..core.constants import DEFAULT_TOLERANCE
from ..core.matrix import Matrix4x4
from ..core.quaternion import Quaternion, select_rotation_branch
from ..core.vector import Vector3

logger = logging.getLogger(__name__)

AXES = ("x", "y", "z", "xyz")

REPORT_COLUMNS = ["axis", "angle_rad", "branch", "quaternion_error",
                  "matrix_error", "passed"]


def sweep_angles(start: float, stop: float, step: float) -> np.ndarray:
    """Evenly spaced angles from ``start`` up to, not including, ``stop``."""
    if step <= 0.0:
        raise ValueError(f"step must be positive, got {step}")
    return np.arange(start, stop, step, dtype=np.float64)


def _rotation_pair(axis: str, angle: float) -> Tuple[Matrix4x4, Quaternion]:
    """Matrix built by the axis factories and the quaternion it should yield."""
    if axis == "x":
        return (Matrix4x4.create_rotation_x(angle),
                Quaternion.from_axis_angle(Vector3.unit_x(), angle))
    if axis == "y":
        return (Matrix4x4.create_rotation_y(angle),
                Quaternion.from_axis_angle(Vector3.unit_y(), angle))
    if axis == "z":
        return (Matrix4x4.create_rotation_z(angle),
                Quaternion.from_axis_angle(Vector3.unit_z(), angle))
    if axis == "xyz":
        m = (Matrix4x4.create_rotation_x(angle)
             * Matrix4x4.create_rotation_y(angle)
             * Matrix4x4.create_rotation_z(angle))
        q = (Quaternion.from_axis_angle(Vector3.unit_z(), angle)
             * Quaternion.from_axis_angle(Vector3.unit_y(), angle)
             * Quaternion.from_axis_angle(Vector3.unit_x(), angle))
        return m, q
    raise ValueError(f"Unknown axis {axis!r}; expected one of {AXES}")


def _sign_invariant_error(q: Quaternion, expected: Quaternion) -> float:
    a = q.to_numpy()
    b = expected.to_numpy()
    return float(min(np.max(np.abs(a - b)), np.max(np.abs(a + b))))


def audit_round_trip(angles_rad: Iterable[float], axis: str = "x",
                     tolerance: float = DEFAULT_TOLERANCE) -> pd.DataFrame:
    """
    Run the matrix/quaternion round trip for every angle.

    Parameters
    ----------
    angles_rad : iterable of float
        Rotation angles in radians.
    axis : str
        One of ``"x"``, ``"y"``, ``"z"``, ``"xyz"``.
    tolerance : float
        Maximum component error accepted for both comparisons.

    Returns
    -------
    pd.DataFrame
        One row per angle with columns
        ``axis, angle_rad, branch, quaternion_error, matrix_error, passed``.
    """
    if axis not in AXES:
        raise ValueError(f"Unknown axis {axis!r}; expected one of {AXES}")

    rows = []
    for angle in angles_rad:
        angle = float(angle)
        matrix, expected = _rotation_pair(axis, angle)

        branch = select_rotation_branch(matrix)
        q = Quaternion.from_rotation_matrix(matrix)
        rebuilt = Matrix4x4.from_quaternion(q)

        q_err = _sign_invariant_error(q, expected)
        m_err = float(np.max(np.abs(rebuilt.to_numpy() - matrix.to_numpy())))
        passed = q_err <= tolerance and m_err <= tolerance

        if not passed:
            logger.warning(
                "Round trip failed: axis=%s angle=%.6f rad branch=%s "
                "q_err=%.3e m_err=%.3e", axis, angle, branch.value, q_err, m_err)

        rows.append({
            "axis": axis,
            "angle_rad": angle,
            "branch": branch.value,
            "quaternion_error": q_err,
            "matrix_error": m_err,
            "passed": passed,
        })

    df = pd.DataFrame(rows, columns=REPORT_COLUMNS)
    logger.info("Audited %d rotations about %s: %d failed",
                len(df), axis, int((~df["passed"]).sum()) if len(df) else 0)
    return df


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-axis, per-branch summary of an audit table.

    Columns: ``axis, branch, samples, failures, max_quaternion_error,
    max_matrix_error``.
    """
    if df.empty:
        return pd.DataFrame(columns=["axis", "branch", "samples", "failures",
                                     "max_quaternion_error", "max_matrix_error"])
    grouped = df.groupby(["axis", "branch"], sort=True)
    summary = grouped.agg(
        samples=("passed", "size"),
        failures=("passed", lambda p: int((~p.astype(bool)).sum())),
        max_quaternion_error=("quaternion_error", "max"),
        max_matrix_error=("matrix_error", "max"),
    )
    return summary.reset_index()


def write_report(df: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write the audit table as CSV, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info("Round-trip report written to %s", path)
    return path


def run_audit(axes: Iterable[str], angles_rad: np.ndarray,
              tolerance: float = DEFAULT_TOLERANCE) -> pd.DataFrame:
    """Audit several axes over the same angles and concatenate the tables."""
    frames: Dict[str, pd.DataFrame] = {
        axis: audit_round_trip(angles_rad, axis, tolerance) for axis in axes
    }
    return pd.concat(frames.values(), ignore_index=True)
