import numpy as np
from numpy.testing import assert_array_equal

from imagechain.services import color_math


def test_lerp_truncates_instead_of_rounding():
    out = color_math.lerp(np.array([255, 0]), np.array([0, 255]), 0.5)
    assert_array_equal(out, [127, 127])


def test_lerp_clamps_overshoot():
    out = color_math.lerp(np.array([200, 50]), np.array([250, 0]), 3.0)
    assert_array_equal(out, [255, 0])
    assert out.dtype == np.uint8


def test_luminance_weights():
    rgb = np.array([[255, 0, 0], [0, 255, 0], [0, 0, 255], [255, 255, 255]])
    np.testing.assert_allclose(color_math.luminance(rgb), [0.299, 0.587, 0.114, 1.0])


def test_pack_and_unpack_argb():
    rgba = np.array([[0x12, 0x34, 0x56, 0x78]], dtype=np.uint8)
    packed = color_math.pack_argb(rgba)
    assert packed.tolist() == [0x78123456]
    assert_array_equal(color_math.unpack_argb(packed), rgba)


class TestSourceOver:
    def test_opaque_source_replaces_destination(self):
        dest = np.array([[10, 20, 30, 255]], dtype=np.uint8)
        src = np.array([[200, 100, 50, 255]], dtype=np.uint8)
        assert_array_equal(color_math.source_over(dest, src), src)

    def test_transparent_source_keeps_destination(self):
        dest = np.array([[10, 20, 30, 90]], dtype=np.uint8)
        src = np.array([[200, 100, 50, 0]], dtype=np.uint8)
        assert_array_equal(color_math.source_over(dest, src), dest)

    def test_opacity_blends_over_opaque_destination(self):
        dest = np.array([[0, 0, 0, 255]], dtype=np.uint8)
        src = np.array([[200, 100, 50, 255]], dtype=np.uint8)
        assert_array_equal(color_math.source_over(dest, src, 0.5), [[100, 50, 25, 255]])

    def test_onto_transparent_destination_keeps_source_color(self):
        dest = np.zeros((1, 4), dtype=np.uint8)
        src = np.array([[200, 100, 50, 128]], dtype=np.uint8)
        assert_array_equal(color_math.source_over(dest, src), src)
