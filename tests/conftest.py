"""
===============================================================================
GEOMALG - Shared Test Fixtures and Comparison Helpers
===============================================================================
Approximate comparisons use an absolute tolerance of 1e-5 per component,
which is loose enough for double-precision round trips through trig
functions and tight enough to catch any wrong sign or swapped term.
===============================================================================
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from geomalg import Matrix4x4, Quaternion, Vector3

TOL = 1e-5


def assert_quat_close(actual, expected, atol=TOL):
    """Component-wise comparison (sign matters)."""
    assert_allclose(actual.to_numpy(), expected.to_numpy(), rtol=0.0, atol=atol)


def assert_same_rotation(actual, expected, atol=TOL):
    """Comparison modulo the double cover: ``actual`` may equal ``-expected``."""
    a = actual.to_numpy()
    b = expected.to_numpy()
    err = min(np.max(np.abs(a - b)), np.max(np.abs(a + b)))
    assert err <= atol, f"{actual!r} is not the same rotation as {expected!r}"


def assert_matrix_close(actual, expected, atol=TOL):
    assert_allclose(actual.to_numpy(), expected.to_numpy(), rtol=0.0, atol=atol)


def assert_vec_close(actual, expected, atol=TOL):
    assert_allclose(actual.to_numpy(), expected.to_numpy(), rtol=0.0, atol=atol)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def axis123():
    """Normalized (1, 2, 3), the axis used throughout the interpolation cases."""
    return Vector3(1.0, 2.0, 3.0).normalize()


@pytest.fixture
def q1234():
    return Quaternion(1.0, 2.0, 3.0, 4.0)


@pytest.fixture
def q5678():
    return Quaternion(5.0, 6.0, 7.0, 8.0)


@pytest.fixture
def rot_xyz_30():
    """RotationX(30deg) * RotationY(30deg) * RotationZ(30deg)."""
    a = np.radians(30.0)
    return (Matrix4x4.create_rotation_x(a)
            * Matrix4x4.create_rotation_y(a)
            * Matrix4x4.create_rotation_z(a))


@pytest.fixture
def rng():
    """Deterministic generator for reproducible random rotations."""
    return np.random.default_rng(42)
