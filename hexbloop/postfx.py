"""
hexbloop/postfx.py
Post effects applied after layer compositing

Each effect takes and returns an RGBA image and is a no-op at zero
intensity. apply_post_effects() runs them in a fixed order and skips
any effect that fails instead of aborting the generation.
"""

import logging
from typing import Callable, List, Optional, Tuple

import numpy as np
from PIL import Image, ImageFilter

from .compositor import BlendMode, blend_images
from .config import PostEffectSettings
from .raster import radial_gradient

logger = logging.getLogger(__name__)


def vignette(img: Image.Image, intensity: float) -> Image.Image:
    """Radial darkening from a third of the width out to the corners."""
    if intensity <= 0:
        return img
    w, h = img.size
    outer = max(w, h) * 0.75
    shade = radial_gradient(
        w, h,
        center=(w / 2, h / 2),
        radius=outer,
        inner_radius=min(w, h) / 3,
        stops=[(0.0, (0, 0, 0, 0)), (1.0, (0, 0, 0, int(min(1.0, intensity) * 255)))],
    )
    return Image.alpha_composite(img.convert("RGBA"), shade)


def bloom(
    img: Image.Image,
    intensity: float,
    threshold: float = 0.7,
    radius: float = 12.0,
) -> Image.Image:
    """Extract pixels brighter than threshold, blur them, screen back on."""
    if intensity <= 0 or threshold >= 1.0:
        return img
    base = img.convert("RGBA")
    arr = np.asarray(base, dtype=np.float64) / 255.0
    rgb = arr[..., :3]
    luma = rgb @ np.array([0.299, 0.587, 0.114])
    gain = np.clip((luma - threshold) / (1.0 - threshold), 0.0, 1.0)[..., np.newaxis]
    bright = np.concatenate([rgb * gain, gain], axis=-1)
    glow = Image.fromarray(np.rint(bright * 255).astype(np.uint8))
    glow = glow.filter(ImageFilter.GaussianBlur(radius))
    return blend_images(base, glow, BlendMode.SCREEN, min(1.0, intensity))


def chromatic_aberration(img: Image.Image, offset: float) -> Image.Image:
    """Red sampled from x - offset, blue from x + offset (edge pixels clamp)."""
    shift = int(round(offset))
    if shift <= 0:
        return img
    arr = np.asarray(img.convert("RGBA")).copy()
    w = arr.shape[1]
    shift = min(shift, w - 1)
    idx = np.arange(w)
    red_src = np.clip(idx - shift, 0, w - 1)
    blue_src = np.clip(idx + shift, 0, w - 1)
    out = arr.copy()
    out[:, :, 0] = arr[:, red_src, 0]
    out[:, :, 2] = arr[:, blue_src, 2]
    return Image.fromarray(out)


def scanlines(img: Image.Image, intensity: float, spacing: int = 4) -> Image.Image:
    """Darken every `spacing`-th row by `intensity`."""
    if intensity <= 0:
        return img
    spacing = max(2, int(spacing))
    arr = np.asarray(img.convert("RGBA"), dtype=np.float64).copy()
    arr[::spacing, :, :3] *= 1.0 - min(1.0, intensity)
    return Image.fromarray(np.rint(arr).astype(np.uint8))


def grain(img: Image.Image, intensity: float, rng: np.random.Generator) -> Image.Image:
    """Additive monochrome film grain; stddev in 0-255 units."""
    if intensity <= 0:
        return img
    arr = np.asarray(img.convert("RGBA"), dtype=np.float64).copy()
    h, w = arr.shape[:2]
    noise = rng.normal(0.0, intensity, size=(h, w, 1))
    arr[..., :3] = np.clip(arr[..., :3] + noise, 0, 255)
    return Image.fromarray(np.rint(arr).astype(np.uint8))


def apply_post_effects(
    img: Image.Image,
    settings: PostEffectSettings,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[Image.Image, List[str]]:
    """
    Run every enabled effect in order: bloom, chromatic, scanlines, grain, vignette.

    Returns (image, skipped) where skipped names effects that raised.
    """
    steps: List[Tuple[str, Callable[[Image.Image], Image.Image]]] = [
        ("bloom", lambda im: bloom(im, settings.bloom, settings.bloom_threshold, settings.bloom_radius)),
        ("chromatic", lambda im: chromatic_aberration(im, settings.chromatic)),
        ("scanlines", lambda im: scanlines(im, settings.scanlines, settings.scanline_spacing)),
        ("vignette", lambda im: vignette(im, settings.vignette)),
    ]
    if rng is not None:
        steps.insert(3, ("grain", lambda im: grain(im, settings.grain, rng)))

    skipped = []
    for name, effect in steps:
        try:
            img = effect(img)
        except Exception as e:
            logger.warning(f"Post effect {name} failed, skipping: {e}")
            skipped.append(name)
    return img, skipped
