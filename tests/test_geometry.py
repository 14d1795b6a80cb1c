import numpy as np
import pytest
from numpy.testing import assert_allclose

from imagechain import AffineTransform, InvalidParameterError


class TestAffineTransform:
    def test_identity_leaves_points_alone(self):
        assert AffineTransform.identity().transform_point(3.5, -2.0) == (3.5, -2.0)

    def test_scaling(self):
        assert AffineTransform.scaling(2.0, 3.0).transform_point(1.0, 1.0) == (2.0, 3.0)

    def test_quarter_rotation_is_exact(self):
        rotation = AffineTransform.rotation(90.0)
        assert (rotation.a, rotation.b, rotation.c, rotation.d) == (0.0, 1.0, -1.0, 0.0)

    def test_rotation_about_anchor_keeps_anchor_fixed(self):
        rotation = AffineTransform.rotation(37.0, 4.0, -2.0)
        assert_allclose(rotation.transform_point(4.0, -2.0), (4.0, -2.0), atol=1e-12)

    def test_rotation_turns_x_axis_toward_y_axis(self):
        x, y = AffineTransform.rotation(90.0, 1.0, 1.0).transform_point(2.0, 1.0)
        assert (x, y) == (1.0, 2.0)

    def test_concatenated_transform_applies_argument_first(self):
        combined = AffineTransform.scaling(2.0, 2.0).concatenate(AffineTransform.translation(3.0, 0.0))
        assert combined.transform_point(1.0, 1.0) == (8.0, 2.0)

    def test_concatenation_is_not_commutative(self):
        scale = AffineTransform.scaling(2.0, 2.0)
        move = AffineTransform.translation(3.0, 0.0)
        assert scale.concatenate(move) != move.concatenate(scale)

    def test_inverse_undoes_transform(self):
        transform = (
            AffineTransform.scaling(1.5, 0.5)
            .concatenate(AffineTransform.rotation(30.0, 2.0, 2.0))
            .concatenate(AffineTransform.translation(-4.0, 7.0))
        )
        x, y = transform.transform_point(3.0, 9.0)
        assert_allclose(transform.inverse().transform_point(x, y), (3.0, 9.0), atol=1e-9)

    def test_singular_transform_has_no_inverse(self):
        with pytest.raises(InvalidParameterError):
            AffineTransform.scaling(0.0, 1.0).inverse()

    def test_transform_points_matches_transform_point(self):
        transform = AffineTransform.rotation(45.0, 1.0, 2.0).concatenate(AffineTransform.translation(1.0, 1.0))
        xs = np.array([[0.0, 1.0], [2.0, 3.0]])
        ys = np.array([[5.0, 4.0], [3.0, 2.0]])
        out_x, out_y = transform.transform_points(xs, ys)
        for x, y, ex, ey in zip(xs.ravel(), ys.ravel(), out_x.ravel(), out_y.ravel()):
            assert_allclose(transform.transform_point(x, y), (ex, ey))

    def test_as_matrix_layout(self):
        matrix = AffineTransform(a=1, b=2, c=3, d=4, tx=5, ty=6).as_matrix()
        assert matrix.tolist() == [[1, 3, 5], [2, 4, 6]]
