"""
hexbloop/models.py
Core data models for the Hexbloop art engine

DNA, context signals, generation options and the produced artwork.
"""

import logging
import math
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np
from PIL import Image

from .config import (
    DEFAULT_TEMPO,
    ENGINE_VERSION,
    NEUTRAL_SIGNAL,
    TEMPO_RANGE,
)

logger = logging.getLogger(__name__)


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp value into [lo, hi]. NaN maps to lo."""
    if value != value:
        return lo
    return max(lo, min(hi, value))


def _as_float(raw: Any) -> Optional[float]:
    """Best-effort float conversion; unusable values read as missing."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


# =============================================================================
# DNA
# =============================================================================

@dataclass(frozen=True)
class DNA:
    """
    Deterministic seeds and descriptors derived from an identifier.

    Seeds are unsigned 32-bit integers. Scalars are in [0, 1] except
    hue_offset which is in [0, 360).
    """
    identifier: str
    primary: int
    shape_seed: int
    color_seed: int
    composition_seed: int
    complexity: float
    energy: float
    chaos: float
    diversity: float
    density: float
    hue_offset: float
    style_blend: float

    def with_seed(self, seed: int) -> "DNA":
        """Copy with the primary seed replaced (explicit seed override)."""
        from .seeds import normalize_seed
        return replace(self, primary=normalize_seed(seed))

    def to_dict(self) -> dict:
        return asdict(self)


# =============================================================================
# Context Signals
# =============================================================================

@dataclass
class ContextSignals:
    """
    Optional per-call signals. Missing values default to neutral;
    out-of-range values are clamped by normalized().
    """
    moon_phase: Optional[float] = None
    audio_energy: Optional[float] = None
    tempo: Optional[float] = None
    system_load: Optional[float] = None
    spectral_centroid: Optional[float] = None
    transient_density: Optional[float] = None
    hour_of_day: Optional[int] = None
    explicit_seed: Optional[int] = None

    _UNIT_FIELDS = (
        "moon_phase",
        "audio_energy",
        "system_load",
        "spectral_centroid",
        "transient_density",
    )

    def normalized(self) -> "ContextSignals":
        """Fill defaults and clamp every signal into its valid range."""
        values: Dict[str, Any] = {}
        for name in self._UNIT_FIELDS:
            raw = _as_float(getattr(self, name))
            values[name] = NEUTRAL_SIGNAL if raw is None else clamp(raw)

        tempo = _as_float(self.tempo)
        if tempo is None or tempo != tempo:
            tempo = DEFAULT_TEMPO
        values["tempo"] = clamp(tempo, *TEMPO_RANGE)

        hour = _as_float(self.hour_of_day)
        values["hour_of_day"] = None if hour is None or not math.isfinite(hour) else int(hour) % 24
        values["explicit_seed"] = self.explicit_seed
        return ContextSignals(**values)

    def out_of_range(self) -> List[str]:
        """Names of supplied signals that normalized() had to clamp."""
        names = []
        for name in self._UNIT_FIELDS:
            raw = _as_float(getattr(self, name))
            if raw is not None and not (0.0 <= raw <= 1.0):
                names.append(name)
        tempo = _as_float(self.tempo)
        if tempo is not None and not (TEMPO_RANGE[0] <= tempo <= TEMPO_RANGE[1]):
            names.append("tempo")
        return names

    def to_dict(self) -> dict:
        return {
            "moon_phase": self.moon_phase,
            "audio_energy": self.audio_energy,
            "tempo": self.tempo,
            "system_load": self.system_load,
            "spectral_centroid": self.spectral_centroid,
            "transient_density": self.transient_density,
            "hour_of_day": self.hour_of_day,
            "explicit_seed": self.explicit_seed,
        }


# =============================================================================
# Generation Options
# =============================================================================

# Caller-facing aliases (camelCase) -> field names
_OPTION_ALIASES = {
    "moonPhase": "moon_phase",
    "audioEnergy": "audio_energy",
    "systemLoad": "system_load",
    "spectralCentroid": "spectral_centroid",
    "transientDensity": "transient_density",
    "hourOfDay": "hour_of_day",
    "noiseMode": "noise_mode",
    "paletteSize": "palette_size",
    "explicitSeed": "seed",
}


@dataclass
class GenerationOptions:
    """Everything a caller may pass to generate()."""
    style: Optional[str] = None
    seed: Optional[int] = None

    # Context signals
    moon_phase: Optional[float] = None
    audio_energy: Optional[float] = None
    tempo: Optional[float] = None
    system_load: Optional[float] = None
    spectral_centroid: Optional[float] = None
    transient_density: Optional[float] = None
    hour_of_day: Optional[int] = None

    # Output
    title: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    # Pipeline policy
    mode: str = "discrete"              # "discrete" | "mix"
    scheme: Optional[str] = None        # harmony scheme override
    palette_size: Optional[int] = None
    noise_mode: Optional[str] = None    # "fixed" | "per-call"
    effects: Dict[str, Any] = field(default_factory=dict)

    def signals(self) -> ContextSignals:
        return ContextSignals(
            moon_phase=self.moon_phase,
            audio_energy=self.audio_energy,
            tempo=self.tempo,
            system_load=self.system_load,
            spectral_centroid=self.spectral_centroid,
            transient_density=self.transient_density,
            hour_of_day=self.hour_of_day,
            explicit_seed=self.seed,
        )

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "GenerationOptions":
        known = set(cls.__dataclass_fields__)
        kwargs = {}
        for key, value in d.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                logger.debug(f"Ignoring unknown option: {key}")
        if kwargs.get("effects") is None:
            kwargs.pop("effects", None)
        return cls(**kwargs)

    @classmethod
    def coerce(cls, options: Any = None, **overrides) -> "GenerationOptions":
        """Accept None, a mapping or a GenerationOptions, plus keyword overrides."""
        if options is None:
            base = cls()
        elif isinstance(options, GenerationOptions):
            base = options
        elif isinstance(options, Mapping):
            base = cls.from_dict(options)
        else:
            raise TypeError(f"Unsupported options type: {type(options).__name__}")
        if overrides:
            merged = {k: v for k, v in asdict(base).items()}
            merged.update(overrides)
            base = cls.from_dict(merged)
        return base


# =============================================================================
# Artwork
# =============================================================================

@dataclass
class ArtworkMetadata:
    """Describes how an artwork was produced."""
    identifier: str
    style_used: str
    palette_used: List[str]
    seed_used: int
    width: int
    height: int
    scheme: str = ""
    mode: str = "discrete"
    style_weights: Dict[str, float] = field(default_factory=dict)
    title: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    engine_version: str = ENGINE_VERSION

    @property
    def dimensions(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def to_dict(self) -> dict:
        return {
            "engine_version": self.engine_version,
            "identifier": self.identifier,
            "style_used": self.style_used,
            "palette_used": list(self.palette_used),
            "seed_used": self.seed_used,
            "width": self.width,
            "height": self.height,
            "scheme": self.scheme,
            "mode": self.mode,
            "style_weights": {k: round(v, 6) for k, v in self.style_weights.items()},
            "title": self.title,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class Artwork:
    """Final RGBA raster plus its metadata. The raster is never handed out mutable."""
    _image: Image.Image = field(repr=False, compare=False)
    metadata: ArtworkMetadata

    @property
    def image(self) -> Image.Image:
        return self._image.copy()

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def mode(self) -> str:
        return self._image.mode

    def to_rgba_bytes(self) -> bytes:
        return self._image.tobytes()

    def to_array(self) -> np.ndarray:
        """(height, width, 4) uint8 copy of the raster."""
        return np.array(self._image, dtype=np.uint8)
