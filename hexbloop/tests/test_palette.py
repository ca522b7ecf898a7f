# tests/test_palette.py
"""
Tests for HSL conversion, harmony schemes and palette derivation.
"""
import pytest

from hexbloop.models import ContextSignals
from hexbloop.palette import (
    HSLColor,
    HarmonyScheme,
    PaletteError,
    base_triple,
    generate_palette,
    hsl_to_rgb,
    palette_for,
)
from hexbloop.seeds import SeededStream, derive_dna


# -----------------------------------------------------------------------------
# Colour conversion
# -----------------------------------------------------------------------------

class TestHslToRgb:

    def test_primaries(self):
        assert hsl_to_rgb(0, 100, 50) == (255, 0, 0)
        assert hsl_to_rgb(120, 100, 50) == (0, 255, 0)
        assert hsl_to_rgb(240, 100, 50) == (0, 0, 255)

    def test_greys(self):
        assert hsl_to_rgb(200, 0, 0) == (0, 0, 0)
        assert hsl_to_rgb(200, 0, 100) == (255, 255, 255)

    def test_hue_wraps(self):
        assert hsl_to_rgb(360, 100, 50) == hsl_to_rgb(0, 100, 50)
        assert hsl_to_rgb(-120, 100, 50) == hsl_to_rgb(240, 100, 50)

    def test_hex(self):
        assert HSLColor(0, 100, 50).to_hex() == "#ff0000"

    def test_clamped(self):
        c = HSLColor(400, 150, -5).clamped()
        assert c == HSLColor(40, 100, 0)


# -----------------------------------------------------------------------------
# Schemes
# -----------------------------------------------------------------------------

class TestHarmonyScheme:

    def test_parse_variants(self):
        assert HarmonyScheme.parse("split_complementary") is HarmonyScheme.SPLIT_COMPLEMENTARY
        assert HarmonyScheme.parse(" Triadic ") is HarmonyScheme.TRIADIC

    def test_parse_unknown(self):
        with pytest.raises(PaletteError):
            HarmonyScheme.parse("rainbowish")

    def test_palette_error_is_value_error(self):
        assert issubclass(PaletteError, ValueError)

    def test_fixed_flag(self):
        assert HarmonyScheme.NEON.is_fixed
        assert not HarmonyScheme.TRIADIC.is_fixed


# -----------------------------------------------------------------------------
# generate_palette
# -----------------------------------------------------------------------------

class TestGeneratePalette:

    def test_complementary_offsets(self):
        p = generate_palette(200, 70, 50, "complementary", count=5)
        assert p[0].h == 200
        assert p[1].h == 20
        assert p.scheme is HarmonyScheme.COMPLEMENTARY

    def test_count_clamped(self):
        assert len(generate_palette(10, 50, 50, "triadic", count=1)) == 3
        assert len(generate_palette(10, 50, 50, "triadic", count=50)) == 12

    def test_pads_by_repeating_last(self):
        p = generate_palette(10, 50, 50, "analogous", count=8)
        assert len(p) == 8
        assert p[5] == p[4]
        assert p[7] == p[4]

    def test_truncates(self):
        p = generate_palette(10, 50, 50, "tetradic", count=3)
        assert [c.h for c in p] == [10, 100, 190]

    def test_fixed_palette_ignores_base(self):
        a = generate_palette(10, 50, 50, "neon", count=5)
        b = generate_palette(250, 20, 80, "neon", count=5)
        assert a == b
        assert a[0] == HSLColor(300, 100, 50)

    def test_values_clamped(self):
        p = generate_palette(10, 95, 90, "monochromatic", count=5)
        for c in p:
            assert 0 <= c.s <= 100
            assert 0 <= c.l <= 100

    def test_jitter_bounded_and_reproducible(self):
        plain = generate_palette(200, 60, 50, "triadic", count=5)
        a = generate_palette(200, 60, 50, "triadic", count=5, stream=SeededStream(4))
        b = generate_palette(200, 60, 50, "triadic", count=5, stream=SeededStream(4))
        assert a == b
        assert a != plain
        for p, j in zip(plain, a):
            dh = abs((j.h - p.h + 180) % 360 - 180)
            assert dh <= 8.0 + 1e-9
            assert abs(j.s - p.s) <= 6.0 + 1e-9
            assert abs(j.l - p.l) <= 6.0 + 1e-9

    def test_index_wraps(self):
        p = generate_palette(10, 50, 50, "triadic", count=5)
        assert p[5] == p[0]
        assert p[-1] == p[4]

    def test_background_and_accents(self):
        p = generate_palette(10, 50, 50, "triadic", count=5)
        assert p.background == p[0]
        assert len(p.accents) == 4
        assert len(p.hex_codes()) == 5


# -----------------------------------------------------------------------------
# palette_for
# -----------------------------------------------------------------------------

def _neutral():
    return ContextSignals().normalized()


class TestPaletteFor:

    def test_base_triple_neutral(self):
        dna = derive_dna("Hexbloop")
        hue, s, l = base_triple(dna, _neutral())
        assert hue == pytest.approx((dna.hue_offset + 120.0) % 360)
        assert s == pytest.approx(45 + dna.energy * 25 + 12.5)
        assert l == pytest.approx(45.5)

    def test_moon_shifts_hue(self):
        dna = derive_dna("Hexbloop")
        a = base_triple(dna, ContextSignals(moon_phase=0.0).normalized())
        b = base_triple(dna, ContextSignals(moon_phase=0.25).normalized())
        assert (b[0] - a[0]) % 360 == pytest.approx(60.0)

    def test_default_count_from_diversity(self):
        dna = derive_dna("QUANTUM DIGITAL CORE")
        p = palette_for(dna, _neutral(), "triadic")
        assert len(p) == 5 + round(dna.diversity * 3)

    def test_reproducible_with_stream(self):
        dna = derive_dna("QUANTUM DIGITAL CORE")
        a = palette_for(dna, _neutral(), "aurora", SeededStream(8))
        b = palette_for(dna, _neutral(), "aurora", SeededStream(8))
        assert a == b
