"""
hexbloop/signals.py
Context signal sources

Nothing here is called by generate() itself. These helpers read the
clock or the host and are therefore opt-in: callers sample them and
pass the values in through GenerationOptions.
"""

import logging
import math
import os
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from .models import ContextSignals, clamp

logger = logging.getLogger(__name__)

SYNODIC_MONTH = 29.530588853  # days
REFERENCE_NEW_MOON = datetime(2000, 1, 6)


# =============================================================================
# Lunar phase
# =============================================================================

def moon_phase_for(when: Union[date, datetime]) -> float:
    """
    Moon phase in [0, 1): 0 = new moon, 0.5 = full moon.

    Simple synodic-month approximation from the 2000-01-06 new moon.
    """
    if not isinstance(when, datetime):
        when = datetime(when.year, when.month, when.day)
    if when.tzinfo is not None:
        when = when.replace(tzinfo=None)
    days = (when - REFERENCE_NEW_MOON).total_seconds() / 86400.0
    return (days % SYNODIC_MONTH) / SYNODIC_MONTH


def phase_name(phase: float) -> str:
    if phase < 0.03 or phase > 0.97:
        return "New Moon"
    if phase < 0.22:
        return "Waxing Crescent"
    if phase < 0.28:
        return "First Quarter"
    if phase < 0.47:
        return "Waxing Gibbous"
    if phase < 0.53:
        return "Full Moon"
    if phase < 0.72:
        return "Waning Gibbous"
    if phase < 0.78:
        return "Last Quarter"
    return "Waning Crescent"


def illumination(phase: float) -> float:
    """Illuminated fraction, 0 at new moon and 1 at full."""
    return (1.0 - math.cos(phase * 2.0 * math.pi)) / 2.0


# =============================================================================
# Host
# =============================================================================

def sample_system_load() -> Optional[float]:
    """1-minute load average per CPU, clamped to [0, 1]. None where unsupported."""
    try:
        load = os.getloadavg()[0]
    except (AttributeError, OSError) as e:
        logger.debug(f"Load average unavailable: {e}")
        return None
    return clamp(load / (os.cpu_count() or 1))


# =============================================================================
# Audio analyzer snapshot
# =============================================================================

# Analyzer key -> ContextSignals field
_AUDIO_KEYS = {
    "energy": "audio_energy",
    "audioEnergy": "audio_energy",
    "audio_energy": "audio_energy",
    "tempo": "tempo",
    "bpm": "tempo",
    "spectralCentroid": "spectral_centroid",
    "spectral_centroid": "spectral_centroid",
    "transientDensity": "transient_density",
    "transient_density": "transient_density",
}


def from_audio_features(
    features: Mapping[str, Any],
    moon_phase: Optional[float] = None,
    system_load: Optional[float] = None,
) -> ContextSignals:
    """
    Map a single analyzer snapshot onto ContextSignals.

    Unknown keys are ignored; values are clamped later by normalized().
    """
    values = {}
    for key, value in features.items():
        name = _AUDIO_KEYS.get(key)
        if name is not None and value is not None:
            values[name] = value
    return ContextSignals(moon_phase=moon_phase, system_load=system_load, **values)
