"""
hexbloop/config.py
Configuration constants for the Hexbloop art engine

Style parameter tables live in hexbloop/styles/catalog.py; everything
else that tunes the pipeline is collected here.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Dict, List, Mapping, Optional, Tuple

# =============================================================================
# Version
# =============================================================================

ENGINE_VERSION = "0.1.0"

# =============================================================================
# Identifiers & Seeds
# =============================================================================

# Used whenever the caller supplies an empty / whitespace identifier
FALLBACK_IDENTIFIER = "hexbloop"

# Seeds <= 0 are normalized to this value
MIN_SEED = 1
SEED_MODULUS = 2 ** 32

# =============================================================================
# Canvas
# =============================================================================

@dataclass
class CanvasConfig:
    """Output raster dimensions."""
    default_width: int = 1000
    default_height: int = 1000
    min_dimension: int = 64
    max_dimension: int = 4096

    def clamp(self, value: Optional[int], default: int) -> int:
        if value is None:
            return default
        return max(self.min_dimension, min(self.max_dimension, int(value)))


CANVAS_CONFIG = CanvasConfig()

# =============================================================================
# DNA Derivation
# =============================================================================

@dataclass
class DNAConfig:
    """Textual statistics -> scalar descriptors."""
    vowels: str = "aeiouy"
    complexity_ceiling: int = 24   # characters
    density_ceiling: int = 16      # letters
    energy_gain: float = 1.6       # vowel ratio rarely exceeds ~0.6
    chaos_gain: float = 1.2


DNA_CONFIG = DNAConfig()

# =============================================================================
# Context Signals
# =============================================================================

NEUTRAL_SIGNAL = 0.5
DEFAULT_TEMPO = 120.0
TEMPO_RANGE: Tuple[float, float] = (20.0, 300.0)

# =============================================================================
# Noise
# =============================================================================

@dataclass
class NoiseConfig:
    """Permutation-table policy and turbulence defaults."""
    fixed_seed: int = 0x4E0153  # process-wide table seed
    table_size: int = 256
    octaves: int = 4
    default_mode: str = "fixed"   # "fixed" | "per-call"


NOISE_CONFIG = NoiseConfig()

# =============================================================================
# Palette
# =============================================================================

@dataclass
class PaletteConfig:
    """Palette size bounds and jitter amplitudes."""
    min_colors: int = 3
    max_colors: int = 12
    default_colors: int = 6
    hue_jitter: float = 8.0         # degrees, +/-
    saturation_jitter: float = 6.0  # percent points, +/-
    lightness_jitter: float = 6.0   # percent points, +/-


PALETTE_CONFIG = PaletteConfig()

# =============================================================================
# Style Mixer
# =============================================================================

# IMPORTANT: order is stable; mix weights are reported in this order
STYLE_FAMILIES: List[str] = ["plasma", "cosmic", "bioform", "neural"]


@dataclass
class MixerConfig:
    """Thresholds and boosts for continuous style mixing."""
    baseline: float = 0.1
    epsilon: float = 0.05

    energy_threshold: float = 0.7
    slow_tempo: float = 80.0
    dark_centroid: float = 0.3
    transient_threshold: float = 0.6
    moon_edge: float = 0.1          # near new / full
    load_threshold: float = 0.7
    night_hours: Tuple[int, int] = (6, 22)  # < start or > end

    primary_boost: float = 0.4
    secondary_boost: float = 0.2
    dna_boost: float = 0.2


MIXER_CONFIG = MixerConfig()

# =============================================================================
# Layer Passes
# =============================================================================

PASS_ORDER: Tuple[str, ...] = (
    "background",
    "atmosphere",
    "midground",
    "foreground",
    "effects",
    "lighting",
)

# =============================================================================
# Post Effects
# =============================================================================

@dataclass
class PostEffectSettings:
    """
    Post-effect intensities. Zero disables an effect.

    Options may override any field by name; True restores the
    default intensity and False disables it.
    """
    vignette: float = 0.4
    bloom: float = 0.0
    bloom_threshold: float = 0.7
    bloom_radius: float = 12.0
    chromatic: float = 0.0        # pixels of horizontal offset
    scanlines: float = 0.0        # darkening of each band
    scanline_spacing: int = 4
    grain: float = 0.0            # stddev in 0-255 units

    # Fields that are intensities rather than shape parameters
    INTENSITY_FIELDS = ("vignette", "bloom", "chromatic", "scanlines", "grain")

    def with_overrides(self, overrides: Optional[Mapping[str, object]],
                       rejected: Optional[List[str]] = None) -> "PostEffectSettings":
        """
        Return a copy with caller overrides applied. Unknown keys are ignored.

        A value that cannot be coerced to the field's type is dropped and,
        when a rejected list is given, reported there as "name=value".
        """
        if not overrides:
            return self
        defaults = PostEffectSettings()
        known = {f.name for f in fields(self)}
        changes = {}
        for key, value in overrides.items():
            name = str(key).replace("-", "_")
            if name == "chromatic_aberration":
                name = "chromatic"
            if name not in known:
                continue
            if value is False or value is None:
                changes[name] = 0
            elif value is True:
                default = getattr(defaults, name)
                changes[name] = default if default else _ENABLED_INTENSITY.get(name, 1.0)
            else:
                try:
                    changes[name] = type(getattr(defaults, name))(value)
                except (TypeError, ValueError, OverflowError):
                    if rejected is not None:
                        rejected.append(f"{key}={value!r}")
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def blend(cls, weighted: List[Tuple["PostEffectSettings", float]]) -> "PostEffectSettings":
        """Weighted average of intensities; shape parameters come from the heaviest entry."""
        if not weighted:
            return cls()
        total = sum(w for _, w in weighted) or 1.0
        heaviest = max(weighted, key=lambda item: item[1])[0]
        changes = {
            name: sum(getattr(s, name) * w for s, w in weighted) / total
            for name in cls.INTENSITY_FIELDS
        }
        return replace(heaviest, **changes)


# Intensity used when an effect that is off by default is switched on with True
_ENABLED_INTENSITY: Dict[str, float] = {
    "bloom": 0.6,
    "chromatic": 3.0,
    "scanlines": 0.25,
    "grain": 10.0,
}

POST_EFFECTS = PostEffectSettings()

# =============================================================================
# Title Overlay
# =============================================================================

@dataclass
class TitleConfig:
    """Bottom title band."""
    band_fraction: float = 0.12     # of image height
    band_alpha: int = 178           # 0.7 * 255 at the bottom edge
    font_fraction: float = 0.045    # of image width
    glow_radius: float = 6.0
    max_length: int = 64


TITLE_CONFIG = TitleConfig()
