"""
hexbloop/compositor.py
Blend modes and layered compositing

Blend functions follow the W3C Compositing and Blending formulas on
straight-alpha channels in [0, 1]; the result is composited source-over:

    Cs' = (1 - ab) * Cs + ab * B(Cb, Cs)
    co  = as * Cs' + ab * Cb * (1 - as)
    ao  = as + ab * (1 - as)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

import numpy as np
from PIL import Image, ImageDraw

from .config import PASS_ORDER

logger = logging.getLogger(__name__)


class BlendMode(str, Enum):
    NORMAL = "normal"
    SCREEN = "screen"
    MULTIPLY = "multiply"
    OVERLAY = "overlay"
    SOFT_LIGHT = "soft-light"
    COLOR_DODGE = "color-dodge"
    DIFFERENCE = "difference"
    ADD = "add"

    @classmethod
    def parse(cls, value) -> "BlendMode":
        if isinstance(value, BlendMode):
            return value
        key = str(value).strip().lower().replace("_", "-")
        if key == "lighter":
            key = "add"
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown blend mode: {value!r}")


# =============================================================================
# Per-channel blend functions (cb = backdrop, cs = source)
# =============================================================================

def _normal(cb, cs):
    return cs


def _multiply(cb, cs):
    return cb * cs


def _screen(cb, cs):
    return cb + cs - cb * cs


def _overlay(cb, cs):
    # hard-light with the layers swapped
    return np.where(cb <= 0.5, 2.0 * cb * cs, _screen(2.0 * cb - 1.0, cs))


def _soft_light(cb, cs):
    d = np.where(cb <= 0.25, ((16.0 * cb - 12.0) * cb + 4.0) * cb, np.sqrt(cb))
    return np.where(
        cs <= 0.5,
        cb - (1.0 - 2.0 * cs) * cb * (1.0 - cb),
        cb + (2.0 * cs - 1.0) * (d - cb),
    )


def _color_dodge(cb, cs):
    with np.errstate(divide="ignore", invalid="ignore"):
        dodged = np.minimum(1.0, cb / np.maximum(1.0 - cs, 1e-12))
    out = np.where(cs >= 1.0, 1.0, dodged)
    return np.where(cb <= 0.0, 0.0, out)


def _difference(cb, cs):
    return np.abs(cb - cs)


def _add(cb, cs):
    return np.minimum(1.0, cb + cs)


BLEND_FUNCTIONS: Dict[BlendMode, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    BlendMode.NORMAL: _normal,
    BlendMode.SCREEN: _screen,
    BlendMode.MULTIPLY: _multiply,
    BlendMode.OVERLAY: _overlay,
    BlendMode.SOFT_LIGHT: _soft_light,
    BlendMode.COLOR_DODGE: _color_dodge,
    BlendMode.DIFFERENCE: _difference,
    BlendMode.ADD: _add,
}


def composite_arrays(
    backdrop: np.ndarray,
    source: np.ndarray,
    mode=BlendMode.NORMAL,
    opacity: float = 1.0,
) -> np.ndarray:
    """
    Composite two (H, W, 4) uint8 RGBA arrays; returns a new uint8 array.

    A fully opaque source at opacity 1 with NORMAL reproduces the source
    exactly.
    """
    mode = BlendMode.parse(mode)
    if backdrop.shape != source.shape:
        raise ValueError(f"Shape mismatch: {backdrop.shape} vs {source.shape}")
    opacity = max(0.0, min(1.0, float(opacity)))

    b = backdrop.astype(np.float64) / 255.0
    s = source.astype(np.float64) / 255.0
    cb, ab = b[..., :3], b[..., 3:4]
    cs, a_s = s[..., :3], s[..., 3:4] * opacity

    mixed = (1.0 - ab) * cs + ab * BLEND_FUNCTIONS[mode](cb, cs)
    co = a_s * mixed + ab * cb * (1.0 - a_s)
    ao = a_s + ab * (1.0 - a_s)
    with np.errstate(divide="ignore", invalid="ignore"):
        color = np.where(ao > 0, co / np.maximum(ao, 1e-12), 0.0)

    out = np.concatenate([color, ao], axis=-1)
    return np.rint(np.clip(out, 0.0, 1.0) * 255.0).astype(np.uint8)


def blend_images(base: Image.Image, top: Image.Image, mode=BlendMode.NORMAL, opacity: float = 1.0) -> Image.Image:
    """PIL wrapper around composite_arrays (both images converted to RGBA)."""
    if base.size != top.size:
        raise ValueError(f"Size mismatch: {base.size} vs {top.size}")
    out = composite_arrays(
        np.asarray(base.convert("RGBA")),
        np.asarray(top.convert("RGBA")),
        mode,
        opacity,
    )
    return Image.fromarray(out)


# =============================================================================
# Layers
# =============================================================================

@dataclass
class Layer:
    """One transparent surface inside a depth pass."""
    pass_name: str
    surface: Image.Image
    blend_mode: BlendMode = BlendMode.NORMAL
    opacity: float = 1.0

    def draw(self) -> ImageDraw.ImageDraw:
        return ImageDraw.Draw(self.surface, "RGBA")

    @property
    def is_empty(self) -> bool:
        return self.surface.getchannel("A").getbbox() is None


@dataclass
class LayerStack:
    """
    Ordered depth passes, each holding any number of layers.

    Layers are created lazily per call and discarded after flatten().
    """
    width: int
    height: int
    _passes: Dict[str, List[Layer]] = field(default_factory=lambda: {p: [] for p in PASS_ORDER})

    def add_layer(self, pass_name: str, blend_mode=BlendMode.NORMAL, opacity: float = 1.0) -> Layer:
        if pass_name not in self._passes:
            raise ValueError(f"Unknown pass: {pass_name!r} (expected one of {PASS_ORDER})")
        layer = Layer(
            pass_name=pass_name,
            surface=Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0)),
            blend_mode=BlendMode.parse(blend_mode),
            opacity=max(0.0, min(1.0, float(opacity))),
        )
        self._passes[pass_name].append(layer)
        return layer

    def layers(self) -> Iterator[Layer]:
        for pass_name in PASS_ORDER:
            yield from self._passes[pass_name]

    def __len__(self) -> int:
        return sum(len(v) for v in self._passes.values())

    def flatten(self, backdrop: Optional[Image.Image] = None) -> Image.Image:
        """Composite every non-empty layer over the backdrop in pass order."""
        if backdrop is None:
            backdrop = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 255))
        canvas = np.asarray(backdrop.convert("RGBA")).copy()
        for layer in self.layers():
            if layer.opacity <= 0 or layer.is_empty:
                continue
            canvas = composite_arrays(
                canvas, np.asarray(layer.surface), layer.blend_mode, layer.opacity
            )
        return Image.fromarray(canvas)
