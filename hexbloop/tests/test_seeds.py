# tests/test_seeds.py
"""
Tests for DNA derivation, seed normalization and seeded streams.
"""
import pytest

from hexbloop.config import FALLBACK_IDENTIFIER
from hexbloop.seeds import (
    SeededStream,
    StreamBank,
    derive_dna,
    normalize_seed,
    raster_fingerprint,
    resolve_identifier,
    stable_u32,
)


# -----------------------------------------------------------------------------
# stable_u32 / fingerprint
# -----------------------------------------------------------------------------

class TestStableU32:

    def test_repeatable(self):
        assert stable_u32("shape", "QUANTUM DIGITAL CORE") == stable_u32("shape", "QUANTUM DIGITAL CORE")

    def test_range(self):
        for i in range(50):
            assert 0 <= stable_u32("x", i) < 2 ** 32

    def test_salt_changes_value(self):
        assert stable_u32("shape", "abc") != stable_u32("color", "abc")

    def test_part_boundaries_matter(self):
        assert stable_u32("ab", "c") != stable_u32("a", "bc")


def test_raster_fingerprint_format():
    fp = raster_fingerprint(b"\x00\x01")
    assert fp.startswith("sha256:")
    assert len(fp) == len("sha256:") + 64
    assert fp != raster_fingerprint(b"\x00\x02")


# -----------------------------------------------------------------------------
# Seeds and identifiers
# -----------------------------------------------------------------------------

class TestNormalizeSeed:

    def test_positive_in_range_unchanged(self):
        assert normalize_seed(12345) == 12345

    def test_zero_and_negative(self):
        assert normalize_seed(0) == 1
        assert normalize_seed(-99) == 1

    def test_wraps_modulo_2_32(self):
        assert normalize_seed(2 ** 32 + 7) == 7
        assert normalize_seed(2 ** 32) == 1


class TestResolveIdentifier:

    def test_trims(self):
        assert resolve_identifier("  neon  ") == "neon"

    def test_empty_uses_placeholder(self):
        assert resolve_identifier("") == FALLBACK_IDENTIFIER
        assert resolve_identifier(None) == FALLBACK_IDENTIFIER
        assert resolve_identifier("   ") == FALLBACK_IDENTIFIER

    def test_clock_fallback_is_opt_in(self):
        name = resolve_identifier("", allow_clock=True)
        assert name.startswith(FALLBACK_IDENTIFIER + "-")


# -----------------------------------------------------------------------------
# DNA
# -----------------------------------------------------------------------------

class TestDeriveDNA:

    def test_pure(self):
        assert derive_dna("QUANTUM DIGITAL CORE") == derive_dna("QUANTUM DIGITAL CORE")

    def test_different_identifiers_differ(self):
        a = derive_dna("QUANTUM DIGITAL CORE")
        b = derive_dna("quantum digital core!")
        assert a.primary != b.primary

    def test_seeds_are_decorrelated(self):
        dna = derive_dna("Hexbloop")
        assert len({dna.primary, dna.shape_seed, dna.color_seed, dna.composition_seed}) == 4

    def test_scalars_in_range(self):
        for text in ["a", "QUANTUM DIGITAL CORE", "1234", "xyzzy plugh", "ÆØÅ ✨ bloom"]:
            dna = derive_dna(text)
            for name in ("complexity", "energy", "chaos", "diversity", "density", "style_blend"):
                assert 0.0 <= getattr(dna, name) <= 1.0, (text, name)
            assert 0.0 <= dna.hue_offset < 360.0
            assert dna.primary >= 1

    def test_text_statistics(self):
        dna = derive_dna("aaa")
        assert dna.energy == 1.0           # all vowels, gain saturates
        assert dna.chaos == 0.0
        assert dna.diversity == pytest.approx(1 / 3)
        assert dna.complexity == pytest.approx(3 / 24)
        assert dna.density == pytest.approx(3 / 16)

    def test_digits_only(self):
        dna = derive_dna("1234")
        assert dna.energy == 0.0
        assert dna.chaos == 0.0
        assert dna.density == 0.0

    def test_empty_identifier(self):
        dna = derive_dna("")
        assert dna.identifier == FALLBACK_IDENTIFIER
        assert dna == derive_dna(FALLBACK_IDENTIFIER)

    def test_with_seed(self):
        dna = derive_dna("Hexbloop")
        seeded = dna.with_seed(12345)
        assert seeded.primary == 12345
        assert seeded.shape_seed == dna.shape_seed
        assert dna.with_seed(0).primary == 1


# -----------------------------------------------------------------------------
# Streams
# -----------------------------------------------------------------------------

class TestSeededStream:

    def test_first_value(self):
        s = SeededStream(1)
        assert s.next() == (1664525 + 1013904223) / 2 ** 32

    def test_reproducible(self):
        a = SeededStream(42)
        b = SeededStream(42)
        assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]

    def test_seed_zero_normalized(self):
        assert SeededStream(0).seed == 1

    def test_unit_interval(self):
        s = SeededStream(7)
        for _ in range(1000):
            v = s.next()
            assert 0.0 <= v < 1.0

    def test_randint_inclusive(self):
        s = SeededStream(99)
        seen = {s.randint(1, 3) for _ in range(300)}
        assert seen == {1, 2, 3}

    def test_choice_empty_raises(self):
        with pytest.raises(ValueError):
            SeededStream(1).choice([])

    def test_shuffled_is_permutation(self):
        out = SeededStream(5).shuffled(range(10))
        assert sorted(out) == list(range(10))

    def test_numpy_rng_reproducible(self):
        a = SeededStream(3).numpy_rng().random(4)
        b = SeededStream(3).numpy_rng().random(4)
        assert list(a) == list(b)


class TestStreamBank:

    def test_from_dna_reproducible(self):
        dna = derive_dna("Hexbloop")
        a = StreamBank.from_dna(dna)
        b = StreamBank.from_dna(dna)
        assert a.shape.next() == b.shape.next()
        assert a.color.seed == b.color.seed

    def test_streams_independent(self):
        bank = StreamBank.from_dna(derive_dna("Hexbloop"))
        assert len({bank.shape.seed, bank.color.seed, bank.composition.seed}) == 3

    def test_explicit_seed_changes_streams(self):
        dna = derive_dna("Hexbloop")
        a = StreamBank.from_dna(dna.with_seed(12345))
        b = StreamBank.from_dna(dna.with_seed(54321))
        assert a.shape.seed != b.shape.seed

    def test_for_style_derives_new_bank(self):
        bank = StreamBank.from_dna(derive_dna("Hexbloop"))
        plasma = bank.for_style("plasma")
        neural = bank.for_style("neural")
        assert plasma.shape.seed != neural.shape.seed
        assert plasma.primary == bank.primary
