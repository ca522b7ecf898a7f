"""
hexbloop/shapes.py
Parametric shape generators

Every generator is a pure function of its numeric arguments plus an
explicit NoiseField or SeededStream. Point lists are (x, y) float tuples
ready for ImageDraw.polygon / ImageDraw.line.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageFilter

from .noise import NoiseField
from .seeds import SeededStream

Point = Tuple[float, float]

PHI = 1.618033988749895


# =============================================================================
# Curves
# =============================================================================

def cubic_bezier(p0: Point, p1: Point, p2: Point, p3: Point, steps: int = 12) -> List[Point]:
    """Sample a cubic Bezier at `steps` points, t in [0, 1) (end point excluded)."""
    out = []
    for i in range(steps):
        t = i / steps
        mt = 1.0 - t
        a = mt * mt * mt
        b = 3 * mt * mt * t
        c = 3 * mt * t * t
        d = t * t * t
        out.append((
            a * p0[0] + b * p1[0] + c * p2[0] + d * p3[0],
            a * p0[1] + b * p1[1] + c * p2[1] + d * p3[1],
        ))
    return out


def smooth_closed(points: Sequence[Point], tension: float = 0.3, steps: int = 12) -> List[Point]:
    """
    Closed smooth curve through `points`.

    Each segment is a cubic whose control points lean toward the
    neighbouring points by `tension`.
    """
    n = len(points)
    if n < 3:
        return list(points)
    out: List[Point] = []
    for i in range(n):
        p_prev = points[(i - 1) % n]
        p0 = points[i]
        p1 = points[(i + 1) % n]
        p_next = points[(i + 2) % n]
        c1 = (p0[0] + (p1[0] - p_prev[0]) * tension, p0[1] + (p1[1] - p_prev[1]) * tension)
        c2 = (p1[0] - (p_next[0] - p0[0]) * tension, p1[1] - (p_next[1] - p0[1]) * tension)
        out.extend(cubic_bezier(p0, c1, c2, p1, steps))
    return out


# =============================================================================
# Organic blob
# =============================================================================

def organic_blob(
    cx: float,
    cy: float,
    radius: float,
    noise: NoiseField,
    k: int = 8,
    variance: float = 0.6,
    offset: Point = (0.0, 0.0),
    tension: float = 0.3,
) -> List[Point]:
    """
    Noise-perturbed closed blob.

    k control points sit at even angles with radius * (1 + perturbation),
    perturbation = (noise - 0.5) * variance, so radii stay within
    radius * (1 +- variance / 2).
    """
    k = max(3, int(k))
    controls = []
    for i in range(k):
        angle = (i / k) * 2 * math.pi
        n = noise.noise2d(offset[0] + math.cos(angle) * 2.0, offset[1] + math.sin(angle) * 2.0)
        r = radius * (1.0 + (n - 0.5) * variance)
        controls.append((cx + math.cos(angle) * r, cy + math.sin(angle) * r))
    return smooth_closed(controls, tension)


# =============================================================================
# Spirals
# =============================================================================

class SpiralKind(str, Enum):
    ARCHIMEDEAN = "archimedean"
    LOGARITHMIC = "logarithmic"
    FERMAT = "fermat"


def spiral_points(
    cx: float,
    cy: float,
    kind: SpiralKind,
    scale: float,
    turns: float = 3.0,
    steps_per_turn: int = 60,
    growth: float = 0.15,
    rotation: float = 0.0,
) -> List[Point]:
    """
    Sample r(t) over turns * steps_per_turn steps.

    archimedean r = scale * t
    logarithmic r = scale * e^(growth * t)
    fermat      r = scale * sqrt(t)
    """
    kind = SpiralKind(kind)
    total = max(1, int(turns * steps_per_turn))
    span = turns * 2 * math.pi
    out = []
    for i in range(total + 1):
        t = span * i / total
        if kind is SpiralKind.ARCHIMEDEAN:
            r = scale * t
        elif kind is SpiralKind.LOGARITHMIC:
            r = scale * math.exp(growth * t)
        else:
            r = scale * math.sqrt(t)
        a = t + rotation
        out.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return out


# =============================================================================
# Superformula
# =============================================================================

def superformula_points(
    cx: float,
    cy: float,
    size: float,
    m: float,
    n1: float,
    n2: float,
    n3: float,
    a: float = 1.0,
    b: float = 1.0,
    steps: int = 360,
    normalize: bool = True,
    rotation: float = 0.0,
) -> List[Point]:
    """
    Gielis superformula r(t) = (|cos(m t / 4) / a|^n2 + |sin(m t / 4) / b|^n3)^(-1 / n1).

    With normalize the largest radius equals `size`; otherwise radii are
    multiplied by `size`. Non-finite radii collapse to the centre.

    Raises:
        ValueError: n1 == 0, or a / b == 0
    """
    if n1 == 0:
        raise ValueError("superformula n1 must be non-zero")
    if a == 0 or b == 0:
        raise ValueError("superformula a and b must be non-zero")

    theta = np.linspace(0.0, 2 * math.pi, steps, endpoint=False)
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        t1 = np.abs(np.cos(m * theta / 4.0) / a) ** n2
        t2 = np.abs(np.sin(m * theta / 4.0) / b) ** n3
        r = (t1 + t2) ** (-1.0 / n1)
    r = np.where(np.isfinite(r), r, 0.0)

    peak = float(r.max()) if r.size else 0.0
    if normalize:
        r = r * (size / peak) if peak > 0 else r
    else:
        r = r * size

    xs = cx + r * np.cos(theta + rotation)
    ys = cy + r * np.sin(theta + rotation)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


# =============================================================================
# Metaballs
# =============================================================================

@dataclass
class Metaball:
    x: float
    y: float
    radius: float
    color: Tuple[int, int, int, int]
    weight: float = 1.0


# Radial gradient stops (distance / (2 * radius) -> intensity)
_FALLOFF_STOPS = ([0.0, 0.3, 0.5, 1.0], [1.0, 0.9, 0.5, 0.0])


def metaball_field(
    width: int,
    height: int,
    balls: Sequence[Metaball],
    blur_radius: float = 20.0,
    contrast: float = 2.0,
    brightness: float = 1.5,
) -> Image.Image:
    """
    Accumulate radial falloffs, blur, then boost contrast so overlapping
    falloffs fuse into merged blobs. Returns an RGBA surface.
    """
    color_acc = np.zeros((height, width, 3), dtype=np.float64)
    weight_acc = np.zeros((height, width), dtype=np.float64)
    alpha_acc = np.zeros((height, width), dtype=np.float64)

    for ball in balls:
        reach = ball.radius * 2.0
        if reach <= 0:
            continue
        x0 = max(0, int(ball.x - reach))
        x1 = min(width, int(ball.x + reach) + 1)
        y0 = max(0, int(ball.y - reach))
        y1 = min(height, int(ball.y + reach) + 1)
        if x0 >= x1 or y0 >= y1:
            continue
        yy, xx = np.mgrid[y0:y1, x0:x1]
        dist = np.hypot(xx - ball.x, yy - ball.y) / reach
        falloff = np.interp(dist, *_FALLOFF_STOPS) * ball.weight

        rgb = np.array(ball.color[:3], dtype=np.float64)
        color_acc[y0:y1, x0:x1] += falloff[..., np.newaxis] * rgb
        weight_acc[y0:y1, x0:x1] += falloff
        alpha_acc[y0:y1, x0:x1] += falloff * (ball.color[3] / 255.0)

    safe = np.maximum(weight_acc, 1e-9)[..., np.newaxis]
    rgb = color_acc / safe
    alpha = np.clip(alpha_acc, 0.0, 1.0)

    rgba = np.dstack([rgb, alpha * 255.0]).clip(0, 255).astype(np.uint8)
    surface = Image.fromarray(rgba)
    if blur_radius > 0:
        # blur premultiplied so transparent pixels do not darken the edges
        surface = surface.convert("RGBa").filter(ImageFilter.GaussianBlur(blur_radius)).convert("RGBA")

    arr = np.asarray(surface, dtype=np.float64)
    a = arr[..., 3] / 255.0
    a = np.clip((a - 0.5) * contrast + 0.5, 0.0, 1.0)
    out_rgb = np.clip(arr[..., :3] * brightness, 0, 255)
    out = np.dstack([out_rgb, a * 255.0]).astype(np.uint8)
    return Image.fromarray(out)


# =============================================================================
# Flow field
# =============================================================================

def flow_trace(
    noise: NoiseField,
    x: float,
    y: float,
    steps: int,
    width: int,
    height: int,
    step_length: float = 4.0,
    scale: float = 0.005,
    angle_span: float = 4 * math.pi,
) -> List[List[Point]]:
    """
    Advect a point through angle = noise(x * scale, y * scale) * angle_span.

    Crossing a canvas edge wraps the point to the opposite side and starts
    a new polyline, so the result is a list of segments.
    """
    segments: List[List[Point]] = []
    current: List[Point] = [(x, y)]
    for _ in range(max(0, int(steps))):
        angle = noise.noise2d(x * scale, y * scale) * angle_span
        x += math.cos(angle) * step_length
        y += math.sin(angle) * step_length
        if x < 0 or x >= width or y < 0 or y >= height:
            x %= width
            y %= height
            if len(current) > 1:
                segments.append(current)
            current = [(x, y)]
        else:
            current.append((x, y))
    if len(current) > 1:
        segments.append(current)
    return segments


# =============================================================================
# Supplementary geometry
# =============================================================================

def polygon_points(
    cx: float,
    cy: float,
    radius: float,
    sides: int,
    rotation: float = 0.0,
    jitter: float = 0.0,
    stream: Optional[SeededStream] = None,
) -> List[Point]:
    """Regular polygon; with a stream each vertex radius varies by +-jitter."""
    sides = max(3, int(sides))
    out = []
    for i in range(sides):
        a = rotation + (i / sides) * 2 * math.pi
        r = radius
        if stream is not None and jitter:
            r *= 1.0 + stream.uniform(-jitter, jitter)
        out.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return out


def star_points(cx: float, cy: float, outer: float, inner: float, spikes: int, rotation: float = 0.0) -> List[Point]:
    spikes = max(2, int(spikes))
    out = []
    for i in range(spikes * 2):
        r = outer if i % 2 == 0 else inner
        a = rotation + i * math.pi / spikes
        out.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return out


def wave_points(
    x0: float,
    x1: float,
    y: float,
    amplitude: float,
    wavelength: float,
    phase: float = 0.0,
    steps: int = 120,
    noise: Optional[NoiseField] = None,
    noise_scale: float = 0.01,
) -> List[Point]:
    """Horizontal sine ribbon, optionally modulated by noise."""
    out = []
    steps = max(2, int(steps))
    for i in range(steps + 1):
        x = x0 + (x1 - x0) * i / steps
        offset = math.sin((x / max(wavelength, 1e-6)) * 2 * math.pi + phase) * amplitude
        if noise is not None:
            offset += (noise.noise2d(x * noise_scale, y * noise_scale) - 0.5) * amplitude
        out.append((x, y + offset))
    return out


def hex_ring_centers(cx: float, cy: float, spacing: float, rings: int) -> List[Point]:
    """Centre plus hexagonal rings (flower-of-life layout)."""
    out = [(cx, cy)]
    for ring in range(1, max(0, int(rings)) + 1):
        for side in range(6):
            a0 = side * math.pi / 3
            a1 = (side + 1) * math.pi / 3
            corner0 = (math.cos(a0) * ring * spacing, math.sin(a0) * ring * spacing)
            corner1 = (math.cos(a1) * ring * spacing, math.sin(a1) * ring * spacing)
            for step in range(ring):
                t = step / ring
                out.append((
                    cx + corner0[0] + (corner1[0] - corner0[0]) * t,
                    cy + corner0[1] + (corner1[1] - corner0[1]) * t,
                ))
    return out


def golden_points(width: float, height: float) -> List[Tuple[float, float, float]]:
    """Golden-ratio composition anchors as (x, y, weight), strongest first."""
    x1 = width / PHI
    x2 = width - x1
    y1 = height / PHI
    y2 = height - y1
    return [
        (x1, y1, 1.0),
        (x2, y1, 0.8),
        (x1, y2, 0.8),
        (x2, y2, 0.6),
        (width / 2, y1, 0.5),
        (x1, height / 2, 0.5),
    ]
