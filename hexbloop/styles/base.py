"""
hexbloop/styles/base.py
Style definitions and the shared renderer

A style is a frozen parameter table. One StyleRenderer draws every
style; styles differ only in their tables.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFilter

from ..compositor import BlendMode, Layer, LayerStack
from ..config import MIXER_CONFIG, PASS_ORDER, POST_EFFECTS, PostEffectSettings
from ..models import ContextSignals, DNA
from ..noise import NoiseField
from ..palette import HSLColor, Palette
from ..raster import linear_gradient, radial_gradient, surface_from_values
from ..seeds import SeededStream, StreamBank
from .. import shapes

logger = logging.getLogger(__name__)

Range = Tuple[float, float]

# Noise backgrounds are evaluated on a grid no larger than this, then upsampled
NOISE_GRID_LIMIT = 256


class ShapeKind(str, Enum):
    BLOB = "blob"
    CIRCLE = "circle"
    SPIRAL = "spiral"
    SUPERFORMULA = "superformula"
    METABALL = "metaball"
    FLOW = "flow"
    POLYGON = "polygon"
    STAR = "star"
    SHARD = "shard"
    WAVE = "wave"
    RECT = "rect"
    LEAF = "leaf"
    BRANCH = "branch"


class BackgroundKind(str, Enum):
    RADIAL = "radial"
    LINEAR = "linear"
    TURBULENT = "turbulent"
    MARBLE = "marble"


class AtmosphereKind(str, Enum):
    NONE = "none"
    NEBULA = "nebula"
    FLOW = "flow"
    MIST = "mist"


class Motif(str, Enum):
    NONE = "none"
    GALAXY = "galaxy"
    FLOWER_OF_LIFE = "flower-of-life"
    ROSETTE = "rosette"
    FRAGMENTS = "fragments"
    HORIZON_GRID = "horizon-grid"
    AURORA_RIBBONS = "aurora-ribbons"
    NEURAL_WEB = "neural-web"


@dataclass(frozen=True)
class StyleDefinition:
    """
    Fixed parameters for one style.

    density:  shape count range for the midground pass
    scale:    shape size range as a fraction of the shorter canvas side
    opacity:  per-shape alpha range (0-1)
    """
    name: str
    display_name: str
    description: str
    scheme: str
    shapes: Tuple[ShapeKind, ...]
    density: Range
    scale: Range
    opacity: Range
    blend_mode: BlendMode = BlendMode.NORMAL
    background: BackgroundKind = BackgroundKind.RADIAL
    atmosphere: AtmosphereKind = AtmosphereKind.NONE
    motif: Motif = Motif.NONE
    family: str = "cosmic"
    glow: bool = False
    refraction: bool = False
    symmetry: int = 0
    scanlines: bool = False
    reactive: bool = False       # energy lightning in the effects pass
    blur: float = 0.0            # midground softening radius
    particles: int = 0
    post: Tuple[Tuple[str, float], ...] = ()

    def post_settings(self) -> PostEffectSettings:
        overrides = dict(self.post)
        if self.scanlines and "scanlines" not in overrides:
            overrides["scanlines"] = True
        return POST_EFFECTS.with_overrides(overrides)


@dataclass
class RenderContext:
    """Per-call state handed to renderers. Never shared between calls."""
    width: int
    height: int
    dna: DNA
    signals: ContextSignals       # normalized
    palette: Palette
    noise: NoiseField
    streams: StreamBank
    warnings: List[str] = field(default_factory=list)

    @property
    def short_side(self) -> int:
        return min(self.width, self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.width / 2, self.height / 2)


def _lerp(r: Range, t: float) -> float:
    return r[0] + (r[1] - r[0]) * t


def _rotate(points: Sequence[shapes.Point], center: Tuple[float, float], angle: float) -> List[shapes.Point]:
    c, s = math.cos(angle), math.sin(angle)
    cx, cy = center
    return [(cx + (x - cx) * c - (y - cy) * s, cy + (x - cx) * s + (y - cy) * c) for x, y in points]


def _soften(surface: Image.Image, radius: float) -> Image.Image:
    """Gaussian blur in premultiplied space so transparent areas stay clean."""
    return surface.convert("RGBa").filter(ImageFilter.GaussianBlur(radius)).convert("RGBA")


class StyleRenderer:
    """
    Draws one style into a LayerStack.

    Each pass (see PASS_ORDER) is isolated: a pass that raises is logged,
    recorded on the context and skipped.
    """

    def __init__(self, definition: StyleDefinition):
        self.definition = definition

    @property
    def name(self) -> str:
        return self.definition.name

    def render(self, ctx: RenderContext, stack: LayerStack, weight: float = 1.0) -> bool:
        """Render every pass at `weight`. Returns False (and draws nothing) below epsilon."""
        if weight < MIXER_CONFIG.epsilon:
            logger.debug(f"Skipping {self.name} (weight={weight:.3f})")
            return False

        for pass_name in PASS_ORDER:
            method = getattr(self, f"_pass_{pass_name}")
            try:
                method(ctx, stack, weight)
            except Exception as e:
                msg = f"{self.name}: {pass_name} pass failed: {e}"
                logger.warning(msg)
                ctx.warnings.append(msg)
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _accent(self, ctx: RenderContext, stream: SeededStream) -> HSLColor:
        accents = ctx.palette.accents or (ctx.palette.background,)
        return stream.choice(accents)

    def _position(self, ctx: RenderContext) -> Tuple[float, float]:
        """Golden-ratio anchor (jittered) or a free position, from the composition stream."""
        comp = ctx.streams.composition
        if comp.chance(0.5):
            anchors = shapes.golden_points(ctx.width, ctx.height)
            x, y, weight = comp.choice(anchors)
            spread = ctx.short_side * 0.25 * (1.2 - weight)
            return (x + comp.uniform(-spread, spread), y + comp.uniform(-spread, spread))
        return (comp.uniform(0, ctx.width), comp.uniform(0, ctx.height))

    def _noise_values(self, ctx: RenderContext, frequency: float, offset: Tuple[float, float]):
        """Turbulence over the canvas on a bounded grid, upsampled to full size."""
        grid_w = min(ctx.width, NOISE_GRID_LIMIT)
        grid_h = max(1, round(grid_w * ctx.height / ctx.width))
        values = ctx.noise.field(grid_w, grid_h, frequency / grid_w, offset=offset)
        img = Image.fromarray((values * 255).astype("uint8"))
        return img.resize((ctx.width, ctx.height), Image.Resampling.BICUBIC)

    # -------------------------------------------------------------------------
    # Passes
    # -------------------------------------------------------------------------

    def _pass_background(self, ctx: RenderContext, stack: LayerStack, weight: float) -> None:
        d = self.definition
        w, h = ctx.width, ctx.height
        comp = ctx.streams.composition
        bg = ctx.palette.background
        deep = bg.shifted(dl=-25, ds=-10)
        lift = bg.shifted(dl=8)
        layer = stack.add_layer("background", BlendMode.NORMAL, weight)

        if d.background is BackgroundKind.RADIAL:
            gx, gy, _ = shapes.golden_points(w, h)[0]
            surface = radial_gradient(
                w, h,
                center=(gx, gy),
                radius=max(w, h) * 1.1,
                stops=[(0.0, lift.to_rgba()), (0.6, bg.to_rgba()), (1.0, deep.to_rgba())],
            )
        elif d.background is BackgroundKind.LINEAR:
            other = ctx.palette[1].shifted(dl=-20)
            surface = linear_gradient(
                w, h,
                stops=[(0.0, deep.to_rgba()), (0.5, bg.to_rgba()), (1.0, other.to_rgba())],
                angle_deg=comp.uniform(45, 135),
            )
        else:
            offset = (comp.uniform(0, 100), comp.uniform(0, 100))
            values = self._noise_values(ctx, 3.0 + ctx.dna.complexity * 3.0, offset)
            v = np.asarray(values, dtype=np.float64) / 255.0
            if d.background is BackgroundKind.MARBLE:
                xs = np.linspace(0, 6 * math.pi, w)[np.newaxis, :]
                v = (np.sin(xs + v * 8.0) + 1.0) / 2.0
            surface = surface_from_values(v, deep.to_rgba(), ctx.palette[1].shifted(dl=-10).to_rgba())
        layer.surface = surface

    def _pass_atmosphere(self, ctx: RenderContext, stack: LayerStack, weight: float) -> None:
        d = self.definition
        if d.atmosphere is AtmosphereKind.NONE:
            return
        comp = ctx.streams.composition
        color = ctx.streams.color
        w, h = ctx.width, ctx.height

        if d.atmosphere is AtmosphereKind.NEBULA:
            layer = stack.add_layer("atmosphere", BlendMode.SCREEN, 0.8 * weight)
            offset = (comp.uniform(100, 200), comp.uniform(100, 200))
            v = np.asarray(self._noise_values(ctx, 4.0, offset), dtype=np.float64) / 255.0
            alpha = np.clip((v - 0.45) * 2.5, 0.0, 1.0)
            tint = self._accent(ctx, color).to_rgba(0)
            glow = (*tint[:3], 190)
            layer.surface = surface_from_values(alpha, tint, glow)

        elif d.atmosphere is AtmosphereKind.FLOW:
            layer = stack.add_layer("atmosphere", BlendMode.NORMAL, 0.7 * weight)
            draw = layer.draw()
            n_traces = int(20 + ctx.dna.density * 40)
            step = max(2.0, ctx.short_side / 250)
            for _ in range(n_traces):
                c = self._accent(ctx, color).to_rgba(int(40 + color.next() * 60))
                segments = shapes.flow_trace(
                    ctx.noise,
                    comp.uniform(0, w), comp.uniform(0, h),
                    steps=int(60 + ctx.dna.chaos * 80),
                    width=w, height=h,
                    step_length=step,
                    scale=2.5 / ctx.short_side,
                )
                for seg in segments:
                    draw.line(seg, fill=c, width=max(1, int(ctx.short_side / 400)))

        elif d.atmosphere is AtmosphereKind.MIST:
            layer = stack.add_layer("atmosphere", BlendMode.SCREEN, 0.6 * weight)
            draw = layer.draw()
            for _ in range(int(4 + ctx.dna.density * 6)):
                cx, cy = comp.uniform(0, w), comp.uniform(0, h)
                rx = ctx.short_side * comp.uniform(0.15, 0.4)
                ry = rx * comp.uniform(0.3, 0.8)
                c = self._accent(ctx, color).to_rgba(int(40 + color.next() * 50))
                draw.ellipse([cx - rx, cy - ry, cx + rx, cy + ry], fill=c)
            layer.surface = _soften(layer.surface, ctx.short_side / 20)

    def _pass_midground(self, ctx: RenderContext, stack: LayerStack, weight: float) -> None:
        d = self.definition
        shape_s = ctx.streams.shape
        color = ctx.streams.color
        drive = 0.5 * ctx.dna.density + 0.5 * ctx.signals.audio_energy
        count = max(1, int(round(_lerp(d.density, drive) * weight)))

        layer = stack.add_layer("midground", d.blend_mode, weight)
        draw = layer.draw()
        balls: List[shapes.Metaball] = []
        outline = d.refraction

        for _ in range(count):
            kind = shape_s.choice(d.shapes)
            cx, cy = self._position(ctx)
            size = ctx.short_side * shape_s.uniform(*d.scale)
            fill = self._accent(ctx, color).to_rgba(int(255 * color.uniform(*d.opacity)))
            rotation = shape_s.uniform(0, 2 * math.pi)

            if kind is ShapeKind.METABALL:
                balls.append(shapes.Metaball(cx, cy, size / 2, fill, 1.0))
                continue
            for pts, is_line in self._shape(ctx, kind, cx, cy, size, rotation, shape_s):
                copies = max(1, d.symmetry)
                for k in range(copies):
                    p = _rotate(pts, ctx.center, 2 * math.pi * k / copies) if copies > 1 else pts
                    if is_line:
                        draw.line(p, fill=fill, width=max(1, int(size / 40)))
                    elif len(p) >= 3:
                        draw.polygon(p, fill=fill)
                        if outline:
                            draw.line(list(p) + [p[0]], fill=(255, 255, 255, 90), width=1)

        if balls:
            merged = shapes.metaball_field(
                ctx.width, ctx.height, balls, blur_radius=max(4.0, ctx.short_side / 50)
            )
            layer.surface = Image.alpha_composite(layer.surface, merged)

        if d.blur > 0:
            layer.surface = _soften(layer.surface, d.blur * ctx.short_side / 1000)

        if d.glow:
            glow = stack.add_layer("effects", BlendMode.SCREEN, 0.6 * weight)
            glow.surface = _soften(layer.surface, ctx.short_side / 60)

    def _shape(self, ctx, kind, cx, cy, size, rotation, s: SeededStream):
        """Yield (points, is_line) for one shape."""
        r = size / 2
        if kind is ShapeKind.BLOB:
            yield shapes.organic_blob(cx, cy, r, ctx.noise, k=s.randint(6, 10),
                                      offset=(s.uniform(0, 50), s.uniform(0, 50))), False
        elif kind is ShapeKind.CIRCLE:
            yield shapes.polygon_points(cx, cy, r, 48), False
        elif kind is ShapeKind.SPIRAL:
            spiral = s.choice(list(shapes.SpiralKind))
            turns = s.uniform(2, 4)
            if spiral is shapes.SpiralKind.LOGARITHMIC:
                growth = 0.2
                scale = r / math.exp(growth * turns * 2 * math.pi)
            elif spiral is shapes.SpiralKind.FERMAT:
                growth, scale = 0.0, r / math.sqrt(turns * 2 * math.pi)
            else:
                growth, scale = 0.0, r / (turns * 2 * math.pi)
            yield shapes.spiral_points(cx, cy, spiral, scale, turns, 48, growth, rotation), True
        elif kind is ShapeKind.SUPERFORMULA:
            yield shapes.superformula_points(
                cx, cy, r, m=s.randint(3, 8), n1=s.uniform(0.3, 2.0),
                n2=s.uniform(0.5, 2.0), n3=s.uniform(0.5, 2.0), rotation=rotation,
            ), False
        elif kind is ShapeKind.FLOW:
            yield from ((seg, True) for seg in shapes.flow_trace(
                ctx.noise, cx, cy, steps=int(size / 3), width=ctx.width, height=ctx.height,
                step_length=3.0, scale=2.0 / ctx.short_side,
            ))
        elif kind is ShapeKind.POLYGON:
            yield shapes.polygon_points(cx, cy, r, s.randint(3, 6), rotation), False
        elif kind is ShapeKind.STAR:
            yield shapes.star_points(cx, cy, r, r * 0.382, s.randint(5, 8), rotation), False
        elif kind is ShapeKind.SHARD:
            yield shapes.polygon_points(cx, cy, r, s.randint(3, 5), rotation, jitter=0.45, stream=s), False
        elif kind is ShapeKind.WAVE:
            yield shapes.wave_points(cx - size, cx + size, cy, r * 0.25, size * 0.6,
                                     phase=rotation, noise=ctx.noise), True
        elif kind is ShapeKind.RECT:
            hw, hh = r, r * s.uniform(0.05, 0.4)
            yield [(cx - hw, cy - hh), (cx + hw, cy - hh), (cx + hw, cy + hh), (cx - hw, cy + hh)], False
        elif kind is ShapeKind.LEAF:
            pts = shapes.superformula_points(cx, cy, r, m=2, n1=1.0, n2=1.0, n3=1.0)
            stretched = [(cx + (x - cx), cy + (y - cy) * 0.45) for x, y in pts]
            yield _rotate(stretched, (cx, cy), rotation), False
        elif kind is ShapeKind.BRANCH:
            yield from ((seg, True) for seg in self._branch(cx, cy, r, rotation - math.pi / 2, 4, s))

    def _branch(self, x, y, length, angle, depth, s: SeededStream):
        if depth <= 0 or length < 2:
            return
        x2 = x + math.cos(angle) * length
        y2 = y + math.sin(angle) * length
        yield [(x, y), (x2, y2)]
        spread = s.uniform(0.3, 0.7)
        yield from self._branch(x2, y2, length * 0.68, angle - spread, depth - 1, s)
        yield from self._branch(x2, y2, length * 0.68, angle + spread, depth - 1, s)

    def _pass_foreground(self, ctx: RenderContext, stack: LayerStack, weight: float) -> None:
        motif = self.definition.motif
        if motif is Motif.NONE:
            return
        layer = stack.add_layer("foreground", BlendMode.NORMAL, weight)
        draw = layer.draw()
        getattr(self, "_motif_" + motif.name.lower())(ctx, layer, draw)

    def _pass_effects(self, ctx: RenderContext, stack: LayerStack, weight: float) -> None:
        d = self.definition
        energy = ctx.signals.audio_energy
        n = int(d.particles * (0.5 + energy) * weight)
        lightning = d.reactive and energy > MIXER_CONFIG.energy_threshold
        if n <= 0 and not lightning:
            return

        layer = stack.add_layer("effects", BlendMode.SCREEN, weight)
        draw = layer.draw()
        s = ctx.streams.shape
        color = ctx.streams.color
        for _ in range(n):
            x, y = s.uniform(0, ctx.width), s.uniform(0, ctx.height)
            r = s.uniform(0.5, 2.5) * ctx.short_side / 1000
            c = self._accent(ctx, color).shifted(dl=25).to_rgba(int(120 + color.next() * 135))
            draw.ellipse([x - r, y - r, x + r, y + r], fill=c)

        if lightning:
            for _ in range(s.randint(1, 3)):
                x, y = s.uniform(0, ctx.width), 0.0
                pts = [(x, y)]
                while y < ctx.height:
                    x += s.uniform(-1, 1) * ctx.short_side * 0.04
                    y += s.uniform(0.02, 0.06) * ctx.height
                    pts.append((x, y))
                draw.line(pts, fill=(255, 255, 255, 200), width=max(1, ctx.short_side // 400))
            layer.surface = Image.alpha_composite(layer.surface, _soften(layer.surface, 3))

    def _pass_lighting(self, ctx: RenderContext, stack: LayerStack, weight: float) -> None:
        comp = ctx.streams.composition
        w, h = ctx.width, ctx.height
        layer = stack.add_layer("lighting", BlendMode.SOFT_LIGHT, 0.5 * weight)
        anchors = shapes.golden_points(w, h)
        for x, y, strength in anchors[: 1 + comp.randint(0, 2)]:
            tint = ctx.palette[comp.randint(1, len(ctx.palette) - 1)].shifted(dl=30)
            light = radial_gradient(
                w, h, center=(x, y), radius=ctx.short_side * 0.6 * strength,
                stops=[(0.0, tint.to_rgba(int(200 * strength))), (1.0, tint.to_rgba(0))],
            )
            layer.surface = Image.alpha_composite(layer.surface, light)

    # -------------------------------------------------------------------------
    # Foreground motifs
    # -------------------------------------------------------------------------

    def _motif_galaxy(self, ctx: RenderContext, layer: Layer, draw: ImageDraw.ImageDraw) -> None:
        s = ctx.streams.shape
        color = ctx.streams.color
        cx, cy, _ = shapes.golden_points(ctx.width, ctx.height)[0]
        arms = s.randint(2, 4)
        reach = ctx.short_side * 0.45
        growth = 0.25
        turns = 1.6
        scale = reach / math.exp(growth * turns * 2 * math.pi)
        for arm in range(arms):
            pts = shapes.spiral_points(cx, cy, shapes.SpiralKind.LOGARITHMIC, scale, turns, 90,
                                       growth, rotation=2 * math.pi * arm / arms)
            for i, (x, y) in enumerate(pts):
                spread = 2 + i * 0.15
                px, py = x + s.gauss(0, spread), y + s.gauss(0, spread)
                r = max(0.6, 2.5 - i / 60)
                c = self._accent(ctx, color).shifted(dl=20).to_rgba(int(100 + color.next() * 120))
                draw.ellipse([px - r, py - r, px + r, py + r], fill=c)

    def _motif_flower_of_life(self, ctx: RenderContext, layer: Layer, draw: ImageDraw.ImageDraw) -> None:
        cx, cy = ctx.center
        spacing = ctx.short_side * 0.09
        c = ctx.palette[1].shifted(dl=25).to_rgba(170)
        for x, y in shapes.hex_ring_centers(cx, cy, spacing, 2):
            draw.ellipse([x - spacing, y - spacing, x + spacing, y + spacing], outline=c,
                         width=max(1, ctx.short_side // 500))
        outer = spacing * 3
        draw.ellipse([cx - outer, cy - outer, cx + outer, cy + outer], outline=c,
                     width=max(1, ctx.short_side // 300))

    def _motif_rosette(self, ctx: RenderContext, layer: Layer, draw: ImageDraw.ImageDraw) -> None:
        s = ctx.streams.shape
        cx, cy = ctx.center
        symmetry = max(2, self.definition.symmetry or 8)
        rings = 3 + int(ctx.dna.complexity * 3)
        for ring in range(rings, 0, -1):
            radius = ctx.short_side * 0.42 * ring / rings
            c = ctx.palette[ring].to_rgba(int(140 + 100 * ring / rings))
            pts = shapes.superformula_points(
                cx, cy, radius, m=symmetry, n1=s.uniform(0.4, 1.2),
                n2=s.uniform(0.8, 1.8), n3=s.uniform(0.8, 1.8),
                rotation=math.pi * ring / symmetry,
            )
            draw.polygon(pts, fill=c, outline=(255, 255, 255, 60))
        dot = ctx.short_side * 0.02
        draw.ellipse([cx - dot, cy - dot, cx + dot, cy + dot], fill=(255, 255, 255, 220))

    def _motif_fragments(self, ctx: RenderContext, layer: Layer, draw: ImageDraw.ImageDraw) -> None:
        s = ctx.streams.shape
        color = ctx.streams.color
        for _ in range(int(10 + ctx.dna.chaos * 30)):
            y = s.uniform(0, ctx.height)
            h = s.uniform(1, ctx.height * 0.03)
            x = s.uniform(-ctx.width * 0.2, ctx.width)
            w = s.uniform(ctx.width * 0.05, ctx.width * 0.6)
            c = self._accent(ctx, color).to_rgba(int(80 + color.next() * 150))
            draw.rectangle([x, y, x + w, y + h], fill=c)
            if s.chance(0.3):
                # channel-split ghost
                draw.rectangle([x + 6, y, x + w + 6, y + h], fill=(255, 0, 80, 60))

    def _motif_horizon_grid(self, ctx: RenderContext, layer: Layer, draw: ImageDraw.ImageDraw) -> None:
        w, h = ctx.width, ctx.height
        horizon = h * 0.62
        sun_r = ctx.short_side * 0.2
        sun_c = (w / 2, horizon - sun_r * 0.35)
        sun = linear_gradient(
            w, h, stops=[(0.0, ctx.palette[3].to_rgba()), (1.0, ctx.palette[1].to_rgba())]
        )
        mask = Image.new("L", (w, h), 0)
        mdraw = ImageDraw.Draw(mask)
        mdraw.ellipse([sun_c[0] - sun_r, sun_c[1] - sun_r, sun_c[0] + sun_r, sun_c[1] + sun_r], fill=255)
        bands = 6
        for i in range(bands):
            y = sun_c[1] + sun_r * (0.1 + i * 0.15)
            mdraw.rectangle([0, y, w, y + max(1, sun_r * 0.03 * (i + 1))], fill=0)
        mdraw.rectangle([0, horizon, w, h], fill=0)
        layer.surface.paste(sun, (0, 0), mask)

        line = ctx.palette[1].shifted(dl=15).to_rgba(200)
        lw = max(1, ctx.short_side // 400)
        for i in range(1, 12):
            t = (i / 12) ** 2
            y = horizon + (h - horizon) * t
            draw.line([(0, y), (w, y)], fill=line, width=lw)
        for i in range(-10, 11):
            x_far = w / 2 + i * w * 0.04
            x_near = w / 2 + i * w * 0.18
            draw.line([(x_far, horizon), (x_near, h)], fill=line, width=lw)

    def _motif_aurora_ribbons(self, ctx: RenderContext, layer: Layer, draw: ImageDraw.ImageDraw) -> None:
        s = ctx.streams.shape
        color = ctx.streams.color
        for i in range(3 + int(ctx.signals.audio_energy * 3)):
            y = ctx.height * s.uniform(0.15, 0.55)
            pts = shapes.wave_points(
                -20, ctx.width + 20, y,
                amplitude=ctx.height * s.uniform(0.03, 0.08),
                wavelength=ctx.width * s.uniform(0.4, 0.9),
                phase=s.uniform(0, 2 * math.pi),
                noise=ctx.noise,
            )
            c = self._accent(ctx, color).shifted(dl=15).to_rgba(int(70 + color.next() * 60))
            draw.line(pts, fill=c, width=max(2, int(ctx.short_side * s.uniform(0.02, 0.06))))
        layer.surface = _soften(layer.surface, ctx.short_side / 80)

    def _motif_neural_web(self, ctx: RenderContext, layer: Layer, draw: ImageDraw.ImageDraw) -> None:
        s = ctx.streams.shape
        color = ctx.streams.color
        nodes = [(s.uniform(0, ctx.width), s.uniform(0, ctx.height))
                 for _ in range(int(12 + ctx.dna.complexity * 20))]
        reach = ctx.short_side * 0.3
        for i, (x1, y1) in enumerate(nodes):
            for x2, y2 in nodes[i + 1:]:
                if math.hypot(x2 - x1, y2 - y1) < reach:
                    draw.line([(x1, y1), (x2, y2)], fill=self._accent(ctx, color).to_rgba(70), width=1)
        for x, y in nodes:
            r = ctx.short_side * s.uniform(0.004, 0.012)
            draw.ellipse([x - r, y - r, x + r, y + r], fill=(255, 255, 255, 200))
