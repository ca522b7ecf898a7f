"""
hexbloop/palette.py
Harmonic palette generation

A scheme is a fixed table of (hue offset, saturation multiplier,
lightness multiplier) applied to a base HSL triple. Fixed-anchor schemes
(neon, aurora, ...) ignore the base triple and use absolute colours.
Palette index 0 is the background anchor.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .config import PALETTE_CONFIG
from .models import ContextSignals, DNA
from .seeds import SeededStream

logger = logging.getLogger(__name__)


class PaletteError(ValueError):
    """Raised for an unknown harmony scheme."""
    pass


class HarmonyScheme(str, Enum):
    COMPLEMENTARY = "complementary"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    ANALOGOUS = "analogous"
    SPLIT_COMPLEMENTARY = "split-complementary"
    MONOCHROMATIC = "monochromatic"
    # Fixed anchors
    NEON = "neon"
    AURORA = "aurora"
    EARTHY = "earthy"
    METALLIC = "metallic"
    CHAKRA = "chakra"

    @classmethod
    def parse(cls, value) -> "HarmonyScheme":
        if isinstance(value, HarmonyScheme):
            return value
        key = str(value).strip().lower().replace("_", "-")
        for scheme in cls:
            if scheme.value == key:
                return scheme
        raise PaletteError(f"Unknown harmony scheme: {value!r}")

    @property
    def is_fixed(self) -> bool:
        return self in FIXED_PALETTES


# (hue offset degrees, saturation multiplier, lightness multiplier)
HARMONY_TABLE: Dict[HarmonyScheme, List[Tuple[float, float, float]]] = {
    HarmonyScheme.COMPLEMENTARY: [
        (0, 1.0, 1.0), (180, 1.0, 1.0), (0, 0.5, 1.2), (180, 0.5, 0.8), (0, 0.3, 0.6),
    ],
    HarmonyScheme.TRIADIC: [
        (0, 1.0, 1.0), (120, 1.0, 1.0), (240, 1.0, 1.0), (0, 0.7, 1.1), (120, 0.7, 0.9),
    ],
    HarmonyScheme.TETRADIC: [
        (0, 1.0, 1.0), (90, 1.0, 1.0), (180, 1.0, 1.0), (270, 1.0, 1.0), (0, 0.6, 0.7),
    ],
    HarmonyScheme.ANALOGOUS: [
        (0, 1.0, 1.0), (30, 1.0, 1.0), (-30, 1.0, 1.0), (15, 0.8, 1.1), (-15, 0.8, 0.9),
    ],
    HarmonyScheme.SPLIT_COMPLEMENTARY: [
        (0, 1.0, 1.0), (150, 1.0, 1.0), (210, 1.0, 1.0), (0, 0.6, 1.2), (180, 0.4, 0.7),
    ],
    HarmonyScheme.MONOCHROMATIC: [
        (0, 1.0, 1.0), (0, 0.7, 1.3), (0, 0.5, 0.8), (0, 0.3, 1.5), (0, 0.9, 0.5),
    ],
}

# Absolute (hue, saturation, lightness) anchors
FIXED_PALETTES: Dict[HarmonyScheme, List[Tuple[float, float, float]]] = {
    HarmonyScheme.NEON: [
        (300, 100, 50), (180, 100, 50), (60, 100, 50), (270, 100, 50), (120, 100, 50),
    ],
    HarmonyScheme.AURORA: [
        (120, 70, 50), (180, 60, 60), (270, 50, 55), (90, 60, 65), (210, 55, 50),
    ],
    HarmonyScheme.EARTHY: [
        (30, 40, 35), (90, 30, 40), (25, 50, 50), (120, 25, 35), (40, 35, 60),
    ],
    HarmonyScheme.METALLIC: [
        (40, 15, 70), (0, 5, 75), (30, 25, 40), (200, 10, 60), (20, 30, 50),
    ],
    HarmonyScheme.CHAKRA: [
        (0, 70, 45), (30, 80, 50), (60, 70, 55), (120, 60, 45), (240, 65, 50),
    ],
}


# =============================================================================
# Colour
# =============================================================================

def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert HSL (degrees, 0-100, 0-100) to RGB (0-255)."""
    h = (h % 360) / 360.0
    s = max(0.0, min(100.0, s)) / 100.0
    l = max(0.0, min(100.0, l)) / 100.0

    if s == 0:
        v = int(round(l * 255))
        return (v, v, v)

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q

    def channel(t: float) -> float:
        t %= 1.0
        if t < 1 / 6:
            return p + (q - p) * 6 * t
        if t < 1 / 2:
            return q
        if t < 2 / 3:
            return p + (q - p) * (2 / 3 - t) * 6
        return p

    return tuple(int(round(channel(h + off) * 255)) for off in (1 / 3, 0.0, -1 / 3))


@dataclass(frozen=True)
class HSLColor:
    h: float  # degrees [0, 360)
    s: float  # percent [0, 100]
    l: float  # percent [0, 100]

    def clamped(self) -> "HSLColor":
        return HSLColor(
            h=self.h % 360.0,
            s=max(0.0, min(100.0, self.s)),
            l=max(0.0, min(100.0, self.l)),
        )

    def to_rgb(self) -> Tuple[int, int, int]:
        return hsl_to_rgb(self.h, self.s, self.l)

    def to_rgba(self, alpha: int = 255) -> Tuple[int, int, int, int]:
        return (*self.to_rgb(), max(0, min(255, int(alpha))))

    def to_hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self.to_rgb())

    def shifted(self, dh: float = 0.0, ds: float = 0.0, dl: float = 0.0) -> "HSLColor":
        return HSLColor(self.h + dh, self.s + ds, self.l + dl).clamped()


# =============================================================================
# Palette
# =============================================================================

@dataclass(frozen=True)
class Palette:
    """Ordered colours; index 0 is the background anchor."""
    colors: Tuple[HSLColor, ...]
    scheme: HarmonyScheme

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[HSLColor]:
        return iter(self.colors)

    def __getitem__(self, index: int) -> HSLColor:
        return self.colors[index % len(self.colors)]

    @property
    def background(self) -> HSLColor:
        return self.colors[0]

    @property
    def accents(self) -> Tuple[HSLColor, ...]:
        return self.colors[1:]

    def rgb(self, index: int) -> Tuple[int, int, int]:
        return self[index].to_rgb()

    def hex_codes(self) -> List[str]:
        return [c.to_hex() for c in self.colors]


def generate_palette(
    base_hue: float,
    saturation: float,
    lightness: float,
    scheme,
    count: int = PALETTE_CONFIG.default_colors,
    stream: Optional[SeededStream] = None,
) -> Palette:
    """
    Build a palette from a base HSL triple and a harmony scheme.

    count is clamped to the configured bounds; schemes with fewer native
    colours are padded by repeating the last colour. When a stream is
    given every native colour receives bounded hue/s/l jitter.

    Raises:
        PaletteError: unknown scheme name
    """
    cfg = PALETTE_CONFIG
    scheme = HarmonyScheme.parse(scheme)
    count = max(cfg.min_colors, min(cfg.max_colors, int(count)))

    if scheme.is_fixed:
        native = [HSLColor(h, s, l) for h, s, l in FIXED_PALETTES[scheme]]
    else:
        native = [
            HSLColor(base_hue + off, saturation * s_mul, lightness * l_mul)
            for off, s_mul, l_mul in HARMONY_TABLE[scheme]
        ]

    colors: List[HSLColor] = []
    for color in native[:count]:
        if stream is not None:
            color = HSLColor(
                color.h + stream.uniform(-cfg.hue_jitter, cfg.hue_jitter),
                color.s + stream.uniform(-cfg.saturation_jitter, cfg.saturation_jitter),
                color.l + stream.uniform(-cfg.lightness_jitter, cfg.lightness_jitter),
            )
        colors.append(color.clamped())

    while len(colors) < count:
        colors.append(colors[-1])

    return Palette(colors=tuple(colors), scheme=scheme)


def base_triple(dna: DNA, signals: ContextSignals) -> Tuple[float, float, float]:
    """Base hue/saturation/lightness from DNA and normalized context."""
    hue = (dna.hue_offset + signals.moon_phase * 240.0) % 360.0
    saturation = 45.0 + dna.energy * 25.0 + signals.audio_energy * 25.0
    lightness = 38.0 + signals.moon_phase * 15.0 + (0.5 - signals.system_load) * 10.0
    return hue, saturation, lightness


def palette_for(
    dna: DNA,
    signals: ContextSignals,
    scheme,
    stream: Optional[SeededStream] = None,
    count: Optional[int] = None,
) -> Palette:
    """Palette for one generation; signals must already be normalized."""
    if count is None:
        count = 5 + round(dna.diversity * 3)
    hue, saturation, lightness = base_triple(dna, signals)
    logger.debug(
        f"Palette base h={hue:.1f} s={saturation:.1f} l={lightness:.1f} "
        f"scheme={scheme} count={count}"
    )
    return generate_palette(hue, saturation, lightness, scheme, count, stream)
