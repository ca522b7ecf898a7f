"""
hexbloop/seeds.py
Deterministic seed generation, DNA derivation and seeded streams

CRITICAL: Do NOT use Python's built-in hash() - it's salted per-process.
Do NOT use the random module or np.random globals - every stream here is
a call-local object so concurrent generations never share state.
"""

import hashlib
import math
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar

import numpy as np

from .config import DNA_CONFIG, FALLBACK_IDENTIFIER, MIN_SEED, SEED_MODULUS
from .models import DNA

T = TypeVar("T")


def stable_u32(*parts) -> int:
    """
    Generate a stable 32-bit unsigned integer from arbitrary parts.

    Uses SHA-256 truncated to 4 bytes for cross-platform determinism.

    Example:
        stable_u32("shape", "QUANTUM DIGITAL CORE") -> consistent value across runs
    """
    s = "|".join(str(p) for p in parts).encode("utf-8")
    return int.from_bytes(hashlib.sha256(s).digest()[:4], "big")


def raster_fingerprint(data: bytes) -> str:
    """
    Generate SHA-256 fingerprint for raster bytes.

    Used by determinism checks and generation reports.
    """
    return f"sha256:{hashlib.sha256(data).hexdigest()}"


def normalize_seed(seed) -> int:
    """Map any integer onto [MIN_SEED, 2^32). Zero and negatives become MIN_SEED."""
    seed = int(seed)
    if seed <= 0:
        return MIN_SEED
    return seed % SEED_MODULUS or MIN_SEED


def resolve_identifier(identifier: Optional[str], allow_clock: bool = False) -> str:
    """
    Trim the identifier and substitute a fallback when empty.

    The fallback is the fixed placeholder unless allow_clock is set, in
    which case a timestamp-derived name is used (non-deterministic, opt-in).
    """
    text = "" if identifier is None else str(identifier).strip()
    if text:
        return text
    if allow_clock:
        return f"{FALLBACK_IDENTIFIER}-{int(time.time())}"
    return FALLBACK_IDENTIFIER


# =============================================================================
# DNA Derivation
# =============================================================================

def derive_dna(identifier: Optional[str]) -> DNA:
    """
    Derive DNA from an identifier. Pure: same text -> identical DNA.

    Each seed hashes the identifier under its own salt so that the
    seeds are decorrelated. Scalars come from simple text statistics.
    """
    ident = resolve_identifier(identifier)
    cfg = DNA_CONFIG

    lowered = ident.lower()
    letters = [c for c in lowered if c.isalpha()]
    vowels = sum(1 for c in letters if c in cfg.vowels)
    consonants = len(letters) - vowels

    # resolve_identifier guarantees at least one character
    n_chars = len(ident)
    n_letters = len(letters)

    energy = min(1.0, (vowels / n_letters) * cfg.energy_gain) if n_letters else 0.0
    chaos = min(1.0, (consonants / n_letters) * cfg.chaos_gain) if n_letters else 0.0
    diversity = len(set(lowered)) / n_chars
    complexity = min(n_chars, cfg.complexity_ceiling) / cfg.complexity_ceiling
    density = min(n_letters, cfg.density_ceiling) / cfg.density_ceiling

    primary = stable_u32("primary", ident)

    return DNA(
        identifier=ident,
        primary=primary or MIN_SEED,
        shape_seed=stable_u32("shape", ident),
        color_seed=stable_u32("color", ident),
        composition_seed=stable_u32("composition", ident),
        complexity=complexity,
        energy=energy,
        chaos=chaos,
        diversity=diversity,
        density=density,
        hue_offset=float(primary % 360),
        style_blend=(stable_u32("blend", ident) % 1000) / 1000.0,
    )


# =============================================================================
# Seeded Streams
# =============================================================================

class SeededStream:
    """
    Linear congruential stream (Numerical Recipes constants, mod 2^32).

    Reproducible across platforms; never touches global random state.
    """

    A = 1664525
    C = 1013904223
    M = 2 ** 32

    def __init__(self, seed: int):
        self.seed = normalize_seed(seed)
        self._state = self.seed

    def next(self) -> float:
        """Next value in [0, 1)."""
        self._state = (self._state * self.A + self.C) % self.M
        return self._state / self.M

    def uniform(self, lo: float, hi: float) -> float:
        return lo + (hi - lo) * self.next()

    def randint(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi] inclusive."""
        if hi < lo:
            lo, hi = hi, lo
        return lo + min(hi - lo, int(self.next() * (hi - lo + 1)))

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("choice() from empty sequence")
        return items[min(len(items) - 1, int(self.next() * len(items)))]

    def chance(self, probability: float) -> bool:
        return self.next() < probability

    def gauss(self, mu: float = 0.0, sigma: float = 1.0) -> float:
        """Box-Muller normal deviate."""
        u1 = max(self.next(), 1e-12)
        u2 = self.next()
        return mu + sigma * math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Fisher-Yates shuffle into a new list."""
        out = list(items)
        for i in range(len(out) - 1, 0, -1):
            j = min(i, int(self.next() * (i + 1)))
            out[i], out[j] = out[j], out[i]
        return out

    def spawn_seed(self) -> int:
        """Draw a fresh 32-bit seed for a child stream."""
        return normalize_seed(int(self.next() * self.M))

    def numpy_rng(self) -> np.random.Generator:
        """Call-local numpy generator seeded from this stream (for vectorised noise)."""
        return np.random.default_rng(self.spawn_seed())


@dataclass
class StreamBank:
    """
    Independent streams for one generation call.

    shape:       placement / sizes of shapes
    color:       palette jitter and per-shape colour picks
    composition: layout, anchors, pass-level decisions
    """
    shape: SeededStream
    color: SeededStream
    composition: SeededStream
    primary: int

    @classmethod
    def from_dna(cls, dna: DNA) -> "StreamBank":
        return cls(
            shape=SeededStream(stable_u32("shape-stream", dna.primary, dna.shape_seed)),
            color=SeededStream(stable_u32("color-stream", dna.primary, dna.color_seed)),
            composition=SeededStream(
                stable_u32("composition-stream", dna.primary, dna.composition_seed)
            ),
            primary=dna.primary,
        )

    def for_style(self, style_name: str) -> "StreamBank":
        """Derive a separate bank for one style renderer (mix mode)."""
        return StreamBank(
            shape=SeededStream(stable_u32("shape-stream", self.primary, self.shape.seed, style_name)),
            color=SeededStream(stable_u32("color-stream", self.primary, self.color.seed, style_name)),
            composition=SeededStream(
                stable_u32("composition-stream", self.primary, self.composition.seed, style_name)
            ),
            primary=self.primary,
        )
