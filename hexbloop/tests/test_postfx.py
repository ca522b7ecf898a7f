# tests/test_postfx.py
"""
Tests for post effects and post-effect settings.
"""
import numpy as np
import pytest
from PIL import Image

from hexbloop import postfx
from hexbloop.config import PostEffectSettings
from hexbloop.postfx import (
    apply_post_effects,
    bloom,
    chromatic_aberration,
    grain,
    scanlines,
    vignette,
)


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------

def _ramp(w: int = 32, h: int = 16) -> Image.Image:
    """Horizontal red ramp, constant green/blue."""
    arr = np.zeros((h, w, 4), dtype=np.uint8)
    arr[..., 0] = (np.arange(w) * 8).astype(np.uint8)
    arr[..., 1] = 100
    arr[..., 2] = (255 - np.arange(w) * 8).astype(np.uint8)
    arr[..., 3] = 255
    return Image.fromarray(arr)


def _grey(value: int = 128, size: int = 32) -> Image.Image:
    return Image.new("RGBA", (size, size), (value, value, value, 255))


# -----------------------------------------------------------------------------
# Effects
# -----------------------------------------------------------------------------

class TestEffects:

    def test_zero_intensity_is_noop(self):
        img = _ramp()
        assert vignette(img, 0) is img
        assert bloom(img, 0) is img
        assert chromatic_aberration(img, 0) is img
        assert scanlines(img, 0) is img
        assert grain(img, 0, np.random.default_rng(0)) is img

    def test_vignette_darkens_corners(self):
        out = vignette(_grey(200, 64), 0.8)
        corner = out.getpixel((0, 0))
        centre = out.getpixel((32, 32))
        assert corner[0] < centre[0]
        assert centre[0] == 200

    def test_bloom_only_brightens(self):
        img = _ramp()
        out = np.asarray(bloom(img, 0.8, threshold=0.3, radius=2), dtype=int)
        src = np.asarray(img, dtype=int)
        assert (out[..., :3] >= src[..., :3]).all()

    def test_chromatic_shifts_channels(self):
        img = _ramp()
        out = np.asarray(chromatic_aberration(img, 2))
        src = np.asarray(img)
        assert out[0, 5, 0] == src[0, 3, 0]
        assert out[0, 5, 2] == src[0, 7, 2]
        assert out[0, 5, 1] == src[0, 5, 1]
        # edges clamp
        assert out[0, 0, 0] == src[0, 0, 0]

    def test_scanlines_rows(self):
        out = np.asarray(scanlines(_grey(200), 0.5, spacing=4))
        assert out[0, 0, 0] == 100
        assert out[1, 0, 0] == 200
        assert out[4, 0, 0] == 100

    def test_grain_reproducible(self):
        a = grain(_grey(), 10, np.random.default_rng(7))
        b = grain(_grey(), 10, np.random.default_rng(7))
        assert a.tobytes() == b.tobytes()
        assert a.tobytes() != _grey().tobytes()


class TestApplyPostEffects:

    def test_defaults_only_vignette(self):
        img = _grey(200, 64)
        out, skipped = apply_post_effects(img, PostEffectSettings())
        assert skipped == []
        assert out.tobytes() == vignette(img, 0.4).tobytes()

    def test_grain_needs_rng(self):
        settings = PostEffectSettings(vignette=0, grain=20)
        out, _ = apply_post_effects(_grey(), settings)
        assert out.tobytes() == _grey().tobytes()
        out, _ = apply_post_effects(_grey(), settings, np.random.default_rng(1))
        assert out.tobytes() != _grey().tobytes()

    def test_failing_effect_skipped(self, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(postfx, "bloom", broken)
        out, skipped = apply_post_effects(_grey(), PostEffectSettings(bloom=0.5))
        assert skipped == ["bloom"]
        assert out.size == (32, 32)


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------

class TestPostEffectSettings:

    def test_overrides(self):
        s = PostEffectSettings().with_overrides({"bloom": True, "vignette": False, "chromatic_aberration": 2})
        assert s.bloom == 0.6
        assert s.vignette == 0
        assert s.chromatic == 2.0

    def test_true_restores_default(self):
        s = PostEffectSettings(vignette=0.0).with_overrides({"vignette": True})
        assert s.vignette == 0.4

    def test_unknown_ignored(self):
        base = PostEffectSettings()
        assert base.with_overrides({"sparkle": 1}) == base
        assert base.with_overrides(None) is base

    def test_uncoercible_value_dropped(self):
        rejected = []
        s = PostEffectSettings().with_overrides(
            {"bloom": "strong", "scanline_spacing": float("inf"), "grain": "4"}, rejected)
        assert s.bloom == 0.0
        assert s.scanline_spacing == 4
        assert s.grain == 4.0
        assert rejected == ["bloom='strong'", "scanline_spacing=inf"]

    def test_blend(self):
        a = PostEffectSettings(bloom=1.0, scanline_spacing=2)
        b = PostEffectSettings(bloom=0.0, scanline_spacing=6)
        mixed = PostEffectSettings.blend([(a, 0.25), (b, 0.75)])
        assert mixed.bloom == pytest.approx(0.25)
        assert mixed.scanline_spacing == 6

    def test_to_dict(self):
        d = PostEffectSettings().to_dict()
        assert d["vignette"] == 0.4
        assert "INTENSITY_FIELDS" not in d
