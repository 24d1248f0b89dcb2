"""
===============================================================================
GEOMALG - Vector3 Test Suite
===============================================================================
Component-wise algebra, geometric helpers (cross, reflect, clamp, lerp),
matrix and quaternion transforms, IEEE edge cases and value semantics.
===============================================================================
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from geomalg import Matrix4x4, Quaternion, Vector2, Vector3

from conftest import assert_vec_close


@pytest.fixture
def v123():
    return Vector3(1.0, 2.0, 3.0)


@pytest.fixture
def v456():
    return Vector3(4.0, 5.0, 6.0)


@pytest.fixture
def translated_xyz_30(rot_xyz_30):
    return rot_xyz_30.with_translation(Vector3(10.0, 20.0, 30.0))


# =============================================================================
# Test: Construction
# =============================================================================

class TestConstruction:

    def test_components(self, v123):
        assert (v123.x, v123.y, v123.z) == (1.0, 2.0, 3.0)

    def test_from_vector2(self):
        assert Vector3.from_vector2(Vector2(1.0, 2.0), 3.0) == Vector3(1.0, 2.0, 3.0)

    def test_splat(self):
        assert Vector3.splat(2.5) == Vector3(2.5, 2.5, 2.5)

    @pytest.mark.parametrize("factory,expected", [
        (Vector3.zero, (0.0, 0.0, 0.0)),
        (Vector3.one, (1.0, 1.0, 1.0)),
        (Vector3.unit_x, (1.0, 0.0, 0.0)),
        (Vector3.unit_y, (0.0, 1.0, 0.0)),
        (Vector3.unit_z, (0.0, 0.0, 1.0)),
    ])
    def test_constants(self, factory, expected):
        assert tuple(factory()) == expected

    def test_with_components(self, v123):
        assert v123.with_components(y=-2.0) == Vector3(1.0, -2.0, 3.0)
        with pytest.raises(TypeError):
            v123.with_components(w=1.0)


# =============================================================================
# Test: Geometry
# =============================================================================

class TestGeometry:

    def test_cross(self):
        assert Vector3.cross(Vector3.unit_x(), Vector3.unit_y()) == Vector3.unit_z()

    def test_cross_parallel(self):
        assert Vector3.cross(Vector3.unit_y(), Vector3.unit_y()) == Vector3.zero()

    def test_dot(self, v123, v456):
        assert Vector3.dot(v123, v456) == 32.0

    def test_length(self, v123):
        assert_allclose(v123.length(), np.sqrt(14.0))
        assert v123.length_squared() == 14.0

    def test_distance(self, v123, v456):
        assert_allclose(Vector3.distance(v123, v456), np.sqrt(27.0))
        assert Vector3.distance_squared(v123, v456) == 27.0

    def test_normalize(self, v123):
        assert_allclose(v123.normalize().length(), 1.0, atol=1e-15)

    def test_normalize_zero_is_nan(self):
        assert np.all(np.isnan(Vector3().normalize().to_numpy()))

    @pytest.mark.parametrize("t,expected", [
        (0.0, (1.0, 2.0, 3.0)),
        (1.0, (4.0, 5.0, 6.0)),
        (0.5, (2.5, 3.5, 4.5)),
        (2.0, (7.0, 8.0, 9.0)),
        (-2.0, (-5.0, -4.0, -3.0)),
    ])
    def test_lerp(self, v123, v456, t, expected):
        assert tuple(Vector3.lerp(v123, v456, t)) == expected

    def test_min_max(self):
        a = Vector3(-1.0, 4.0, -3.0)
        b = Vector3(2.0, 1.0, -1.0)
        assert Vector3.minimum(a, b) == Vector3(-1.0, 1.0, -3.0)
        assert Vector3.maximum(a, b) == Vector3(2.0, 4.0, -1.0)

    def test_reflect_on_planes(self):
        a = Vector3(1.0, 1.0, 1.0).normalize()
        assert_vec_close(a.reflect(Vector3.unit_y()), Vector3(a.x, -a.y, a.z))
        assert_vec_close(a.reflect(Vector3.unit_z()), Vector3(a.x, a.y, -a.z))
        assert_vec_close(a.reflect(Vector3.unit_x()), Vector3(-a.x, a.y, a.z))

    def test_reflect_along_normal(self):
        n = Vector3(0.45, 1.28, 0.86).normalize()
        assert_vec_close(n.reflect(n), -n)
        assert_vec_close((-n).reflect(n), n)

    def test_reflect_perpendicular(self):
        n = Vector3(0.45, 1.28, 0.86)
        a = Vector3.cross(Vector3(1.28, 0.45, 0.01), n)
        assert_vec_close(a.reflect(n), a)


class TestClamp:
    """Upper bound first, lower bound last."""

    @pytest.mark.parametrize("value,expected", [
        ((0.5, 0.3, 0.33), (0.5, 0.3, 0.33)),
        ((2.0, 3.0, 4.0), (1.0, 1.1, 1.13)),
        ((-2.0, -3.0, -4.0), (0.0, 0.1, 0.13)),
        ((-2.0, 0.5, 4.0), (0.0, 0.5, 1.13)),
    ])
    def test_in_order_bounds(self, value, expected):
        lo = Vector3(0.0, 0.1, 0.13)
        hi = Vector3(1.0, 1.1, 1.13)
        assert Vector3(*value).clamp(lo, hi) == Vector3(*expected)

    @pytest.mark.parametrize("value", [
        (0.5, 0.3, 0.33),
        (2.0, 3.0, 4.0),
        (-2.0, -3.0, -4.0),
    ])
    def test_reversed_bounds_return_lower(self, value):
        lo = Vector3(1.0, 1.1, 1.13)
        hi = Vector3(0.0, 0.1, 0.13)
        assert Vector3(*value).clamp(lo, hi) == lo


# =============================================================================
# Test: Transforms
# =============================================================================

class TestTransform:

    def test_by_matrix(self, v123, translated_xyz_30):
        expected = Vector3(12.191987, 21.533493, 32.616024)
        assert_vec_close(Vector3.transform(v123, translated_xyz_30), expected)

    def test_normal_ignores_translation(self, v123, translated_xyz_30):
        expected = Vector3(2.19198728, 1.53349364, 2.61602545)
        assert_vec_close(Vector3.transform_normal(v123, translated_xyz_30), expected)

    def test_by_quaternion_matches_matrix(self, v123, rot_xyz_30):
        q = Quaternion.from_rotation_matrix(rot_xyz_30)
        assert_vec_close(Vector3.transform(v123, q), Vector3.transform(v123, rot_xyz_30))

    def test_zero_quaternion_leaves_vector(self, v123):
        assert Vector3.transform(v123, Quaternion()) == v123

    def test_identity_quaternion_leaves_vector(self, v123):
        assert Vector3.transform(v123, Quaternion.identity()) == v123

    def test_unsupported_transformation(self, v123):
        with pytest.raises(TypeError):
            Vector3.transform(v123, np.eye(4))


# =============================================================================
# Test: Operators and IEEE behavior
# =============================================================================

class TestOperators:

    def test_add_subtract(self, v123, v456):
        assert v123 + v456 == Vector3(5.0, 7.0, 9.0)
        assert v456 - v123 == Vector3(3.0, 3.0, 3.0)

    def test_negation(self, v123):
        assert -v123 == Vector3(-1.0, -2.0, -3.0)
        assert v123.negate() == -v123

    def test_multiply(self, v123, v456):
        assert v123 * v456 == Vector3(4.0, 10.0, 18.0)
        assert v123 * 2.0 == Vector3(2.0, 4.0, 6.0)
        assert 2.0 * v123 == Vector3(2.0, 4.0, 6.0)

    def test_divide(self, v123, v456):
        assert_vec_close(v456 / v123, Vector3(4.0, 2.5, 2.0))
        assert v123 / 2.0 == Vector3(0.5, 1.0, 1.5)

    def test_divide_by_zero(self, v123):
        result = v123 / 0.0
        assert np.all(np.isposinf(result.to_numpy()))

    def test_divide_zero_by_zero(self):
        result = Vector3() / Vector3()
        assert np.all(np.isnan(result.to_numpy()))

    def test_abs(self):
        assert Vector3(-2.5, 2.0, 0.5).absolute() == Vector3(2.5, 2.0, 0.5)
        v = Vector3(0.0, -np.inf, np.nan).absolute()
        assert v.x == 0.0
        assert v.y == np.inf
        assert np.isnan(v.z)

    def test_sqrt(self):
        r = Vector3(5.5, 4.5, 16.5).square_root()
        assert (int(r.x), int(r.y), int(r.z)) == (2, 2, 4)
        assert np.isnan(Vector3(-2.5, 2.0, 0.5).square_root().x)

    def test_mixed_types_rejected(self, v123):
        with pytest.raises(TypeError):
            v123 + Vector2(1.0, 2.0)


class TestValueSemantics:

    def test_equality(self, v123):
        assert v123 == Vector3(1.0, 2.0, 3.0)
        assert v123 != Vector3(1.0, 2.0, 4.0)
        assert not v123.equals(Quaternion(1.0, 2.0, 3.0, 0.0))

    @pytest.mark.parametrize("v", [
        Vector3(np.nan, 0, 0), Vector3(0, np.nan, 0), Vector3(0, 0, np.nan),
    ])
    def test_nan_not_equal(self, v):
        assert v != Vector3.zero()
        assert not v.equals(v)

    def test_hash(self, v123):
        assert hash(v123) == hash(Vector3(1.0, 2.0, 3.0))
        assert hash(v123) != hash(Vector3(3.0, 2.0, 1.0))

    def test_str(self):
        assert str(Vector3(1.0, 2.5, -3.0)) == "<1, 2.5, -3>"

    def test_copy_to(self, v123):
        dest = [0.0] * 5
        v123.copy_to(dest, 2)
        assert dest == [0.0, 0.0, 1.0, 2.0, 3.0]

    def test_copy_to_errors(self, v123):
        with pytest.raises(TypeError):
            v123.copy_to(None)
        with pytest.raises(IndexError):
            v123.copy_to([0.0] * 3, 3)
        with pytest.raises(ValueError):
            v123.copy_to([0.0] * 3, 1)
