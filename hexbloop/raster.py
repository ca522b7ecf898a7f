"""
hexbloop/raster.py
Surface helpers, gradients and the title overlay
"""

import logging
from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageFont

from .config import TITLE_CONFIG

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]


def rgba(rgb: Sequence[int], alpha: float = 1.0) -> RGBA:
    """RGB tuple plus alpha given as a 0-1 fraction."""
    return (int(rgb[0]), int(rgb[1]), int(rgb[2]), max(0, min(255, int(round(alpha * 255)))))


def new_surface(width: int, height: int, fill: RGBA = (0, 0, 0, 0)) -> Image.Image:
    return Image.new("RGBA", (width, height), fill)


def _lerp_colors(t: np.ndarray, stops: Sequence[Tuple[float, RGBA]]) -> np.ndarray:
    """Map t in [0, 1] through colour stops -> (..., 4) float array."""
    positions = [s[0] for s in stops]
    channels = [np.interp(t, positions, [s[1][c] for s in stops]) for c in range(4)]
    return np.stack(channels, axis=-1)


def radial_gradient(
    width: int,
    height: int,
    center: Tuple[float, float],
    radius: float,
    stops: Sequence[Tuple[float, RGBA]],
    inner_radius: float = 0.0,
) -> Image.Image:
    """Radial gradient between inner_radius and radius; stops are (position, rgba)."""
    yy, xx = np.mgrid[0:height, 0:width]
    dist = np.hypot(xx - center[0], yy - center[1])
    span = max(radius - inner_radius, 1e-6)
    t = np.clip((dist - inner_radius) / span, 0.0, 1.0)
    arr = _lerp_colors(t, stops)
    return Image.fromarray(np.rint(arr).clip(0, 255).astype(np.uint8))


def linear_gradient(
    width: int,
    height: int,
    stops: Sequence[Tuple[float, RGBA]],
    angle_deg: float = 90.0,
) -> Image.Image:
    """Linear gradient; 90 degrees runs top to bottom, 0 left to right."""
    yy, xx = np.mgrid[0:height, 0:width]
    a = np.deg2rad(angle_deg)
    dx, dy = np.cos(a), np.sin(a)
    proj = (xx - width / 2) * dx + (yy - height / 2) * dy
    extent = abs(width / 2 * dx) + abs(height / 2 * dy)
    t = np.clip(proj / max(extent * 2, 1e-6) + 0.5, 0.0, 1.0)
    arr = _lerp_colors(t, stops)
    return Image.fromarray(np.rint(arr).clip(0, 255).astype(np.uint8))


def surface_from_values(values: np.ndarray, color_low: RGBA, color_high: RGBA) -> Image.Image:
    """Colourise a (H, W) array of 0-1 values between two RGBA colours."""
    arr = _lerp_colors(np.clip(values, 0.0, 1.0), [(0.0, color_low), (1.0, color_high)])
    return Image.fromarray(np.rint(arr).clip(0, 255).astype(np.uint8))


# =============================================================================
# Title overlay
# =============================================================================

def _title_font(size: int) -> ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def add_title(
    img: Image.Image,
    title: str,
    glow_color: Tuple[int, int, int] = (255, 255, 255),
) -> Image.Image:
    """
    Darkened bottom band with centred, glowing title text.

    Returns a new RGBA image; an empty title returns the input unchanged.
    """
    text = (title or "").strip()[:TITLE_CONFIG.max_length]
    if not text:
        return img
    cfg = TITLE_CONFIG
    w, h = img.size
    base = img.convert("RGBA")

    band_h = max(24, int(h * cfg.band_fraction))
    band = linear_gradient(
        w, band_h, [(0.0, (0, 0, 0, 0)), (1.0, (0, 0, 0, cfg.band_alpha))], angle_deg=90.0
    )
    overlay = new_surface(w, h)
    overlay.paste(band, (0, h - band_h))
    base = Image.alpha_composite(base, overlay)

    font = _title_font(max(10, int(w * cfg.font_fraction)))
    probe = ImageDraw.Draw(base)
    left, top, right, bottom = probe.textbbox((0, 0), text, font=font)
    tw, th = right - left, bottom - top
    x = (w - tw) / 2 - left
    y = h - band_h / 2 - th / 2 - top

    glow = new_surface(w, h)
    ImageDraw.Draw(glow).text((x, y), text, font=font, fill=(*glow_color, 200))
    glow = glow.convert("RGBa").filter(ImageFilter.GaussianBlur(cfg.glow_radius)).convert("RGBA")
    base = Image.alpha_composite(base, glow)

    ImageDraw.Draw(base).text((x, y), text, font=font, fill=(255, 255, 255, 255))
    return base


def finalize(img: Image.Image, width: int, height: int) -> Image.Image:
    """Ensure an opaque RGBA raster of exactly width x height."""
    out = img.convert("RGBA")
    if out.size != (width, height):
        logger.debug(f"Resizing {out.size} -> {(width, height)}")
        out = out.resize((width, height), Image.Resampling.LANCZOS)
    backing = Image.new("RGBA", out.size, (0, 0, 0, 255))
    return Image.alpha_composite(backing, out)
