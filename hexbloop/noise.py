"""
hexbloop/noise.py
Coherent gradient noise with multi-octave turbulence

The permutation table is built once from a seed and never mutated, so
a NoiseField can be shared read-only between concurrent generations.

Policy:
    NoiseMode.FIXED     one process-wide table from NOISE_CONFIG.fixed_seed (default)
    NoiseMode.PER_CALL  a fresh table per generation, seeded from the DNA
"""

import logging
import math
from enum import Enum
from functools import lru_cache
from typing import Optional, Tuple

import numpy as np

from .config import NOISE_CONFIG
from .models import DNA
from .seeds import SeededStream, stable_u32

logger = logging.getLogger(__name__)


def fade(t):
    """Quintic smoothstep 6t^5 - 15t^4 + 10t^3 (works on floats and arrays)."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a, b, t):
    return a + t * (b - a)


def _grad(h, x, y):
    """Gradient from the low two bits of the hash: (+-1, +-1) directions."""
    h = h & 3
    u = x if (h & 2) == 0 else -x
    v = y if (h & 1) == 0 else -y
    return u + v


def _grad_array(h: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    h = h & 3
    u = np.where((h & 2) == 0, x, -x)
    v = np.where((h & 1) == 0, y, -y)
    return u + v


class NoiseMode(str, Enum):
    FIXED = "fixed"
    PER_CALL = "per-call"

    @classmethod
    def parse(cls, value: Optional[str]) -> "NoiseMode":
        if value is None:
            return cls(NOISE_CONFIG.default_mode)
        if isinstance(value, NoiseMode):
            return value
        key = str(value).strip().lower().replace("_", "-")
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown noise mode: {value!r}")


class NoiseField:
    """
    2D gradient noise over an immutable, seed-shuffled permutation table.

    noise2d and turbulence return values in [0, 1]. The *_grid variants
    evaluate whole coordinate arrays and agree with the scalar versions.
    """

    def __init__(self, seed: int, table_size: int = NOISE_CONFIG.table_size):
        self.seed = seed
        stream = SeededStream(seed)
        base = stream.shuffled(range(table_size))
        perm = np.array(base + base, dtype=np.int64)
        perm.setflags(write=False)
        self._perm = perm
        self._perm_list: Tuple[int, ...] = tuple(int(v) for v in perm)
        self._mask = table_size - 1

    @property
    def permutation(self) -> np.ndarray:
        """Read-only view of the doubled permutation table."""
        return self._perm

    # -------------------------------------------------------------------------
    # Scalar evaluation
    # -------------------------------------------------------------------------

    def noise2d(self, x: float, y: float) -> float:
        p = self._perm_list
        fx = math.floor(x)
        fy = math.floor(y)
        xi = fx & self._mask
        yi = fy & self._mask
        xf = x - fx
        yf = y - fy
        u = fade(xf)
        v = fade(yf)

        aa = p[p[xi] + yi]
        ab = p[p[xi] + yi + 1]
        ba = p[p[xi + 1] + yi]
        bb = p[p[xi + 1] + yi + 1]

        x1 = _lerp(_grad(aa, xf, yf), _grad(ba, xf - 1, yf), u)
        x2 = _lerp(_grad(ab, xf, yf - 1), _grad(bb, xf - 1, yf - 1), u)
        value = (_lerp(x1, x2, v) + 1.0) / 2.0
        return min(1.0, max(0.0, value))

    def turbulence(self, x: float, y: float, octaves: int = NOISE_CONFIG.octaves) -> float:
        octaves = max(1, int(octaves))
        total = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0
        for _ in range(octaves):
            total += self.noise2d(x * frequency, y * frequency) * amplitude
            max_value += amplitude
            amplitude *= 0.5
            frequency *= 2.0
        return total / max_value

    # -------------------------------------------------------------------------
    # Vectorised evaluation
    # -------------------------------------------------------------------------

    def noise_grid(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """noise2d over broadcastable coordinate arrays."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        x, y = np.broadcast_arrays(x, y)
        p = self._perm

        fx = np.floor(x)
        fy = np.floor(y)
        xi = fx.astype(np.int64) & self._mask
        yi = fy.astype(np.int64) & self._mask
        xf = x - fx
        yf = y - fy
        u = fade(xf)
        v = fade(yf)

        aa = p[p[xi] + yi]
        ab = p[p[xi] + yi + 1]
        ba = p[p[xi + 1] + yi]
        bb = p[p[xi + 1] + yi + 1]

        x1 = _lerp(_grad_array(aa, xf, yf), _grad_array(ba, xf - 1, yf), u)
        x2 = _lerp(_grad_array(ab, xf, yf - 1), _grad_array(bb, xf - 1, yf - 1), u)
        return np.clip((_lerp(x1, x2, v) + 1.0) / 2.0, 0.0, 1.0)

    def turbulence_grid(
        self, x: np.ndarray, y: np.ndarray, octaves: int = NOISE_CONFIG.octaves
    ) -> np.ndarray:
        octaves = max(1, int(octaves))
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        total = np.zeros(np.broadcast_shapes(x.shape, y.shape))
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0
        for _ in range(octaves):
            total += self.noise_grid(x * frequency, y * frequency) * amplitude
            max_value += amplitude
            amplitude *= 0.5
            frequency *= 2.0
        return total / max_value

    def field(
        self,
        width: int,
        height: int,
        scale: float,
        octaves: int = NOISE_CONFIG.octaves,
        offset: Tuple[float, float] = (0.0, 0.0),
    ) -> np.ndarray:
        """(height, width) turbulence image sampled at pixel * scale + offset."""
        xs = np.arange(width, dtype=np.float64) * scale + offset[0]
        ys = np.arange(height, dtype=np.float64) * scale + offset[1]
        return self.turbulence_grid(xs[np.newaxis, :], ys[:, np.newaxis], octaves)


# =============================================================================
# Table policy
# =============================================================================

@lru_cache(maxsize=1)
def shared_noise_field() -> NoiseField:
    """Process-wide immutable field, built on first use."""
    logger.debug(f"Building shared noise table (seed={NOISE_CONFIG.fixed_seed})")
    return NoiseField(NOISE_CONFIG.fixed_seed)


def noise_for(mode: NoiseMode, dna: DNA) -> NoiseField:
    """Resolve the noise field for one generation call."""
    if mode is NoiseMode.PER_CALL:
        return NoiseField(stable_u32("noise", dna.primary))
    return shared_noise_field()
