# tests/test_compositor.py
"""
Tests for blend modes and layered compositing.
"""
import numpy as np
import pytest
from PIL import Image

from hexbloop.compositor import (
    BlendMode,
    LayerStack,
    blend_images,
    composite_arrays,
)


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------

def _solid(rgba, size=(4, 4)) -> np.ndarray:
    return np.tile(np.array(rgba, dtype=np.uint8), (size[1], size[0], 1))


# -----------------------------------------------------------------------------
# BlendMode
# -----------------------------------------------------------------------------

class TestBlendModeParse:

    def test_names(self):
        assert BlendMode.parse("soft_light") is BlendMode.SOFT_LIGHT
        assert BlendMode.parse("Screen") is BlendMode.SCREEN

    def test_lighter_alias(self):
        assert BlendMode.parse("lighter") is BlendMode.ADD

    def test_unknown(self):
        with pytest.raises(ValueError):
            BlendMode.parse("hue-rotate")


# -----------------------------------------------------------------------------
# composite_arrays
# -----------------------------------------------------------------------------

class TestCompositeArrays:

    def test_opaque_normal_reproduces_source(self):
        src = _solid((10, 200, 30, 255))
        out = composite_arrays(_solid((90, 90, 90, 255)), src, BlendMode.NORMAL)
        assert np.array_equal(out, src)

    def test_zero_opacity_keeps_backdrop(self):
        back = _solid((90, 40, 20, 255))
        out = composite_arrays(back, _solid((255, 255, 255, 255)), "screen", opacity=0.0)
        assert np.array_equal(out, back)

    def test_transparent_source_keeps_backdrop(self):
        back = _solid((90, 40, 20, 255))
        out = composite_arrays(back, _solid((255, 0, 0, 0)), "multiply")
        assert np.array_equal(out, back)

    def test_multiply_white_is_identity(self):
        back = _solid((90, 40, 20, 255))
        out = composite_arrays(back, _solid((255, 255, 255, 255)), "multiply")
        assert np.array_equal(out, back)

    def test_screen_black_is_identity(self):
        back = _solid((90, 40, 20, 255))
        out = composite_arrays(back, _solid((0, 0, 0, 255)), "screen")
        assert np.array_equal(out, back)

    def test_add_saturates(self):
        out = composite_arrays(_solid((200, 100, 0, 255)), _solid((100, 100, 100, 255)), "add")
        assert tuple(out[0, 0]) == (255, 200, 100, 255)

    def test_difference(self):
        out = composite_arrays(_solid((200, 100, 0, 255)), _solid((100, 100, 100, 255)), "difference")
        assert tuple(out[0, 0]) == (100, 0, 100, 255)

    def test_half_opacity_normal(self):
        out = composite_arrays(_solid((0, 0, 0, 255)), _solid((200, 200, 200, 255)), "normal", 0.5)
        assert tuple(out[0, 0]) == (100, 100, 100, 255)

    def test_every_mode_in_range(self):
        back = np.random.default_rng(1).integers(0, 256, (8, 8, 4), dtype=np.uint8)
        src = np.random.default_rng(2).integers(0, 256, (8, 8, 4), dtype=np.uint8)
        for mode in BlendMode:
            out = composite_arrays(back, src, mode, 0.7)
            assert out.dtype == np.uint8
            assert out.shape == back.shape

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            composite_arrays(_solid((0, 0, 0, 255), (4, 4)), _solid((0, 0, 0, 255), (5, 4)))


def test_blend_images_size_mismatch():
    with pytest.raises(ValueError):
        blend_images(Image.new("RGBA", (4, 4)), Image.new("RGBA", (5, 5)))


# -----------------------------------------------------------------------------
# LayerStack
# -----------------------------------------------------------------------------

class TestLayerStack:

    def test_unknown_pass(self):
        with pytest.raises(ValueError):
            LayerStack(8, 8).add_layer("sky")

    def test_empty_flatten_is_backdrop(self):
        out = LayerStack(8, 8).flatten()
        assert out.size == (8, 8)
        assert out.getpixel((3, 3)) == (0, 0, 0, 255)

    def test_pass_order_not_insertion_order(self):
        stack = LayerStack(8, 8)
        fg = stack.add_layer("foreground")
        fg.draw().rectangle([0, 0, 7, 7], fill=(255, 0, 0, 255))
        bg = stack.add_layer("background")
        bg.draw().rectangle([0, 0, 7, 7], fill=(0, 0, 255, 255))
        assert [layer.pass_name for layer in stack.layers()] == ["background", "foreground"]
        assert stack.flatten().getpixel((4, 4)) == (255, 0, 0, 255)

    def test_len_and_empty_layers(self):
        stack = LayerStack(8, 8)
        layer = stack.add_layer("effects", "screen", 0.5)
        assert len(stack) == 1
        assert layer.is_empty
        assert layer.blend_mode is BlendMode.SCREEN

    def test_opacity_clamped(self):
        layer = LayerStack(8, 8).add_layer("lighting", opacity=3.0)
        assert layer.opacity == 1.0
