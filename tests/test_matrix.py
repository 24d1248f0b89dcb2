"""
===============================================================================
GEOMALG - Matrix Test Suite
===============================================================================
Matrix4x4 and Matrix3x2 factories, element access, products in the
row-vector convention and IEEE equality.
===============================================================================
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from geomalg import Matrix3x2, Matrix4x4, Vector2, Vector3

from conftest import assert_matrix_close, assert_vec_close


class TestMatrix4x4Construction:

    def test_elements_row_major(self):
        m = Matrix4x4(*range(1, 17))
        assert m.m11 == 1.0 and m.m14 == 4.0 and m.m21 == 5.0 and m.m44 == 16.0
        assert_allclose(m.to_numpy(), np.arange(1, 17).reshape(4, 4))
        assert list(m) == [float(i) for i in range(1, 17)]

    def test_from_array_shape(self):
        with pytest.raises(ValueError):
            Matrix4x4.from_array(np.eye(3))

    def test_identity(self):
        assert Matrix4x4.identity().is_identity
        assert not Matrix4x4.create_rotation_x(0.1).is_identity

    def test_translation(self):
        m = Matrix4x4.create_translation(1.0, 2.0, 3.0)
        assert m.translation == Vector3(1.0, 2.0, 3.0)
        assert m.m41 == 1.0 and m.m42 == 2.0 and m.m43 == 3.0

    def test_with_translation_is_copy(self):
        m = Matrix4x4.identity()
        m2 = m.with_translation(Vector3(4.0, 5.0, 6.0))
        assert m.is_identity
        assert m2.translation == Vector3(4.0, 5.0, 6.0)

    def test_with_elements(self):
        m = Matrix4x4.identity().with_elements(m23=0.5, m41=2.0)
        assert m.m23 == 0.5 and m.m41 == 2.0
        with pytest.raises(TypeError):
            Matrix4x4.identity().with_elements(m55=1.0)

    def test_scale(self):
        v = Vector3.transform(Vector3(1.0, 2.0, 3.0), Matrix4x4.create_scale(2.0, 3.0, 4.0))
        assert v == Vector3(2.0, 6.0, 12.0)


class TestMatrix4x4Rotation:
    """Axis rotations follow the right-hand rule for row vectors."""

    @pytest.mark.parametrize("factory,v_in,v_out", [
        (Matrix4x4.create_rotation_x, Vector3(0, 1, 0), Vector3(0, 0, 1)),
        (Matrix4x4.create_rotation_y, Vector3(0, 0, 1), Vector3(1, 0, 0)),
        (Matrix4x4.create_rotation_z, Vector3(1, 0, 0), Vector3(0, 1, 0)),
    ])
    def test_quarter_turns(self, factory, v_in, v_out):
        assert_vec_close(Vector3.transform(v_in, factory(np.pi / 2)), v_out, atol=1e-15)

    def test_rotation_z_layout(self):
        c, s = np.cos(0.3), np.sin(0.3)
        m = Matrix4x4.create_rotation_z(0.3)
        assert (m.m11, m.m12, m.m21, m.m22) == (c, s, -s, c)

    def test_product_applies_left_first(self):
        rx = Matrix4x4.create_rotation_x(np.pi / 2)
        rz = Matrix4x4.create_rotation_z(np.pi / 2)
        v = Vector3(0.0, 1.0, 0.0)
        assert_vec_close(Vector3.transform(v, rx * rz),
                         Vector3.transform(Vector3.transform(v, rx), rz), atol=1e-15)

    def test_from_axis_angle_matches_axis_factories(self):
        assert_matrix_close(Matrix4x4.from_axis_angle(Vector3.unit_y(), 0.9),
                            Matrix4x4.create_rotation_y(0.9), atol=1e-15)

    def test_from_yaw_pitch_roll(self):
        yaw, pitch, roll = 0.4, -0.2, 1.1
        expected = (Matrix4x4.create_rotation_z(roll)
                    * Matrix4x4.create_rotation_x(pitch)
                    * Matrix4x4.create_rotation_y(yaw))
        assert_matrix_close(Matrix4x4.from_yaw_pitch_roll(yaw, pitch, roll), expected)


class TestMatrix4x4Arithmetic:

    def test_scalar_multiply(self):
        m = Matrix4x4.identity() * 2.0
        assert_allclose(m.to_numpy(), 2.0 * np.eye(4))
        assert 2.0 * Matrix4x4.identity() == m

    def test_add_subtract_negate(self):
        a = Matrix4x4(*range(16))
        b = Matrix4x4.identity()
        assert_allclose((a + b).to_numpy(), np.arange(16).reshape(4, 4) + np.eye(4))
        assert_allclose((a - b).to_numpy(), np.arange(16).reshape(4, 4) - np.eye(4))
        assert (-a) == Matrix4x4.from_array(-np.arange(16).reshape(4, 4))

    def test_multiply_method(self):
        a = Matrix4x4.create_rotation_x(0.2)
        b = Matrix4x4.create_translation(1.0, 2.0, 3.0)
        assert a.multiply(b) == a * b

    def test_nan_not_equal(self):
        m = Matrix4x4.identity().with_elements(m11=np.nan)
        assert m != m
        assert m != Matrix4x4.identity()


class TestMatrix3x2:

    def test_identity(self):
        assert_allclose(Matrix3x2.identity().to_numpy(), [[1, 0], [0, 1], [0, 0]])

    def test_rotation(self):
        v = Vector2.transform(Vector2(1.0, 0.0), Matrix3x2.create_rotation(np.pi / 2))
        assert_vec_close(v, Vector2(0.0, 1.0), atol=1e-15)

    def test_translation_and_scale(self):
        m = Matrix3x2.create_scale(2.0, 3.0) * Matrix3x2.create_translation(1.0, -1.0)
        assert Vector2.transform(Vector2(1.0, 1.0), m) == Vector2(3.0, 2.0)
        assert (m.m31, m.m32) == (1.0, -1.0)

    def test_product_order(self):
        t = Matrix3x2.create_translation(1.0, 0.0)
        r = Matrix3x2.create_rotation(np.pi / 2)
        # translate then rotate
        assert_vec_close(Vector2.transform(Vector2(0.0, 0.0), t * r), Vector2(0.0, 1.0), atol=1e-15)
