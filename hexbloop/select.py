"""
hexbloop/select.py
Style selection (discrete) and style mixing (continuous)

Discrete: one style from the identifier hash, overridable by name.
Continuous: weights over STYLE_FAMILIES driven by context thresholds.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .config import MIXER_CONFIG, STYLE_FAMILIES
from .models import ContextSignals, DNA
from .seeds import resolve_identifier, stable_u32
from .styles import get_style, list_styles

logger = logging.getLogger(__name__)

AUTO = "auto"


@dataclass
class StyleSelection:
    """Result of discrete selection."""
    style: str
    requested: Optional[str] = None
    auto: bool = True
    warnings: List[str] = field(default_factory=list)


def auto_style(identifier: str) -> str:
    """Style chosen purely from the identifier text."""
    styles = list_styles()
    if not styles:
        raise RuntimeError("No styles registered")
    return styles[stable_u32("style", resolve_identifier(identifier)) % len(styles)]


def select_style(identifier: str, requested: Optional[str] = None) -> StyleSelection:
    """
    Resolve the style for one generation.

    A registered name wins. None / "auto" / unknown names fall back to
    auto_style(); unknown names are logged and recorded.
    """
    if requested is not None:
        name = str(requested).strip().lower()
        if name and name != AUTO:
            if get_style(name) is not None:
                return StyleSelection(style=name, requested=requested, auto=False)
            msg = f"Unknown style {requested!r}, falling back to auto selection"
            logger.warning(msg)
            selection = StyleSelection(style=auto_style(identifier), requested=requested)
            selection.warnings.append(msg)
            return selection
    return StyleSelection(style=auto_style(identifier), requested=requested)


# =============================================================================
# Continuous mixing
# =============================================================================

@dataclass
class StyleMix:
    """Normalized weights per style family (sum to 1)."""
    weights: Dict[str, float]

    @property
    def dominant(self) -> str:
        # ties resolve to the earliest family in STYLE_FAMILIES
        return max(STYLE_FAMILIES, key=lambda f: (self.weights.get(f, 0.0), -STYLE_FAMILIES.index(f)))

    def active(self, epsilon: float = MIXER_CONFIG.epsilon) -> List[Tuple[str, float]]:
        """(family, weight) pairs at or above epsilon, in family order."""
        return [(f, self.weights[f]) for f in STYLE_FAMILIES if self.weights.get(f, 0.0) >= epsilon]


def mix_styles(signals: ContextSignals, dna: Optional[DNA] = None) -> StyleMix:
    """
    Weight the style families from normalized context signals.

    Each family starts at the baseline; thresholds add boosts; the DNA
    style_blend nudges one family so identifiers differ under equal context.
    """
    cfg = MIXER_CONFIG
    acc = {family: cfg.baseline for family in STYLE_FAMILIES}

    if signals.audio_energy > cfg.energy_threshold:
        acc["neural"] += cfg.primary_boost
    if signals.tempo < cfg.slow_tempo:
        acc["cosmic"] += cfg.primary_boost
    if signals.spectral_centroid < cfg.dark_centroid:
        acc["plasma"] += cfg.primary_boost
    if signals.transient_density > cfg.transient_threshold:
        acc["bioform"] += cfg.primary_boost

    if signals.moon_phase < cfg.moon_edge or signals.moon_phase > 1.0 - cfg.moon_edge:
        acc["cosmic"] += cfg.secondary_boost
    hour = signals.hour_of_day
    if hour is not None and (hour < cfg.night_hours[0] or hour > cfg.night_hours[1]):
        acc["neural"] += cfg.secondary_boost
    if signals.system_load > cfg.load_threshold:
        acc["plasma"] += cfg.secondary_boost

    if dna is not None:
        index = min(len(STYLE_FAMILIES) - 1, int(dna.style_blend * len(STYLE_FAMILIES)))
        acc[STYLE_FAMILIES[index]] += cfg.dna_boost

    total = sum(acc.values())
    weights = {family: value / total for family, value in acc.items()}
    logger.debug(f"Style mix: {weights}")
    return StyleMix(weights=weights)
