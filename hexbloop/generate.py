"""
hexbloop/generate.py
Artwork generation pipeline

    identifier + options
      -> DNA (+ explicit seed)
      -> streams, noise field
      -> style selection / mix
      -> palette
      -> layer passes per style
      -> composite -> post effects -> title -> raster

Every step that can fail on bad input degrades to a fallback and records
a warning; generate() always returns a valid raster.
"""

import logging
from typing import Any, List, Mapping, Optional, Tuple

from PIL import Image

from .compositor import LayerStack
from .config import CANVAS_CONFIG, PostEffectSettings
from .models import Artwork, ArtworkMetadata, ContextSignals, DNA, GenerationOptions
from .noise import NoiseMode, noise_for
from .palette import HarmonyScheme, Palette, PaletteError, hsl_to_rgb, palette_for
from .postfx import apply_post_effects
from .raster import add_title, finalize
from .seeds import StreamBank, derive_dna, normalize_seed, resolve_identifier
from .select import StyleMix, auto_style, mix_styles, select_style
from .styles import RenderContext, get_renderer, get_style

logger = logging.getLogger(__name__)

MODES = ("discrete", "mix")


class ArtworkGenerator:
    """
    One generation call. Holds only call-local state so separate
    instances can run concurrently.
    """

    def __init__(self, identifier: Optional[str], options: GenerationOptions):
        self.identifier = resolve_identifier(identifier)
        self.options = options
        self.warnings: List[str] = []

    def _warn(self, msg: str) -> None:
        logger.warning(msg)
        self.warnings.append(msg)

    # -------------------------------------------------------------------------
    # Option resolution
    # -------------------------------------------------------------------------

    def _dimension(self, value: Any, default: int, name: str) -> int:
        try:
            size = CANVAS_CONFIG.clamp(None if value is None else int(value), default)
        except (TypeError, ValueError, OverflowError):
            self._warn(f"Invalid {name} {value!r}, using {default}")
            return default
        if value is not None and size != int(value):
            self._warn(f"{name} {value} clamped to {size}")
        return size

    def _dna(self) -> DNA:
        dna = derive_dna(self.identifier)
        seed = self.options.seed
        if seed is None:
            return dna
        try:
            seeded = dna.with_seed(int(seed))
        except (TypeError, ValueError, OverflowError):
            self._warn(f"Invalid seed {seed!r}, using identifier seed")
            return dna
        if seeded.primary != int(seed):
            logger.debug(f"Seed {seed} normalized to {seeded.primary}")
        return seeded

    def _signals(self) -> ContextSignals:
        raw = self.options.signals()
        clamped = raw.out_of_range()
        if clamped:
            self._warn(f"Clamped out-of-range signals: {', '.join(clamped)}")
        return raw.normalized()

    def _noise_mode(self) -> NoiseMode:
        try:
            return NoiseMode.parse(self.options.noise_mode)
        except ValueError as e:
            self._warn(f"{e}, using {NoiseMode.FIXED.value}")
            return NoiseMode.FIXED

    def _mode(self) -> str:
        mode = str(self.options.mode or "discrete").strip().lower()
        if mode not in MODES:
            self._warn(f"Unknown mode {self.options.mode!r}, using discrete")
            return "discrete"
        return mode

    def _effects(self) -> Mapping[str, Any]:
        effects = self.options.effects
        if effects is None:
            return {}
        if not isinstance(effects, Mapping):
            self._warn(f"Invalid effects {effects!r}, ignoring overrides")
            return {}
        return effects

    def _plan(self, mode: str, signals: ContextSignals, dna: DNA) -> Tuple[str, List[Tuple[str, float]]]:
        """(style_used, [(style, weight), ...])."""
        if mode == "mix":
            if self.options.style not in (None, "", "auto"):
                self._warn(f"Style {self.options.style!r} ignored in mix mode")
            mix: StyleMix = mix_styles(signals, dna)
            return mix.dominant, mix.active()
        selection = select_style(self.identifier, self.options.style)
        self.warnings.extend(selection.warnings)
        return selection.style, [(selection.style, 1.0)]

    def _palette(self, style_used: str, dna: DNA, signals: ContextSignals, streams: StreamBank) -> Palette:
        default_scheme = get_style(style_used).scheme
        scheme = self.options.scheme or default_scheme
        try:
            HarmonyScheme.parse(scheme)
        except PaletteError as e:
            self._warn(f"{e}, using {default_scheme}")
            scheme = default_scheme

        count = self.options.palette_size
        if count is not None:
            try:
                count = int(count)
            except (TypeError, ValueError, OverflowError):
                self._warn(f"Invalid palette size {count!r}, using default")
                count = None
        return palette_for(dna, signals, scheme, streams.color, count)

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def run(self) -> Tuple[Artwork, ArtworkMetadata]:
        opts = self.options
        width = self._dimension(opts.width, CANVAS_CONFIG.default_width, "width")
        height = self._dimension(opts.height, CANVAS_CONFIG.default_height, "height")

        signals = self._signals()
        dna = self._dna()
        noise = noise_for(self._noise_mode(), dna)
        streams = StreamBank.from_dna(dna)

        mode = self._mode()
        style_used, plan = self._plan(mode, signals, dna)
        palette = self._palette(style_used, dna, signals, streams)
        logger.debug(f"{self.identifier}: style={style_used} plan={plan} palette={palette.hex_codes()}")

        stack = LayerStack(width, height)
        for name, weight in plan:
            renderer = get_renderer(name)
            bank = streams if len(plan) == 1 else streams.for_style(name)
            ctx = RenderContext(
                width=width,
                height=height,
                dna=dna,
                signals=signals,
                palette=palette,
                noise=noise,
                streams=bank,
            )
            renderer.render(ctx, stack, weight)
            self.warnings.extend(ctx.warnings)

        backdrop = Image.new("RGBA", (width, height), palette.background.to_rgba())
        img = stack.flatten(backdrop)

        rejected: List[str] = []
        settings = PostEffectSettings.blend(
            [(get_style(name).post_settings(), weight) for name, weight in plan]
        ).with_overrides(self._effects(), rejected)
        for item in rejected:
            self._warn(f"Post effect override skipped: {item}")
        img, skipped = apply_post_effects(img, settings, streams.composition.numpy_rng())
        for name in skipped:
            self.warnings.append(f"Post effect skipped: {name}")

        if opts.title:
            try:
                img = add_title(img, str(opts.title), glow_color=palette[1].to_rgb())
            except Exception as e:
                self._warn(f"Title overlay failed, skipping: {e}")

        img = finalize(img, width, height)
        metadata = ArtworkMetadata(
            identifier=self.identifier,
            style_used=style_used,
            palette_used=palette.hex_codes(),
            seed_used=dna.primary,
            width=width,
            height=height,
            scheme=palette.scheme.value,
            mode=mode,
            style_weights=dict(plan),
            title=opts.title,
            warnings=list(self.warnings),
        )
        return Artwork(img, metadata), metadata


def _fallback_option(options: Optional[GenerationOptions], name: str, default: int, convert) -> int:
    value = getattr(options, name, None)
    if value is None:
        return default
    try:
        return convert(value, default)
    except (TypeError, ValueError, OverflowError):
        return default


def _fallback(identifier: Optional[str], options: Optional[GenerationOptions], error: Exception) -> Tuple[Artwork, ArtworkMetadata]:
    """Solid raster from the DNA hue. Used only when the pipeline itself fails."""
    ident = resolve_identifier(identifier)
    dna = derive_dna(ident)
    width = _fallback_option(options, "width", CANVAS_CONFIG.default_width, CANVAS_CONFIG.clamp)
    height = _fallback_option(options, "height", CANVAS_CONFIG.default_height, CANVAS_CONFIG.clamp)
    seed = _fallback_option(options, "seed", dna.primary, lambda v, _: normalize_seed(v))
    color = hsl_to_rgb(dna.hue_offset, 50, 30)
    img = Image.new("RGBA", (width, height), (*color, 255))
    metadata = ArtworkMetadata(
        identifier=ident,
        style_used=auto_style(ident),
        palette_used=["#{:02x}{:02x}{:02x}".format(*color)],
        seed_used=seed,
        width=width,
        height=height,
        warnings=[f"Generation failed, solid fallback used: {error}"],
    )
    return Artwork(img, metadata), metadata


def generate(identifier: Optional[str], options: Any = None, **overrides) -> Tuple[Artwork, ArtworkMetadata]:
    """
    Generate an artwork.

    Args:
        identifier: text the artwork derives from (empty -> fixed fallback)
        options: GenerationOptions, a mapping (camelCase keys accepted) or None
        **overrides: individual options, e.g. seed=12345, width=400

    Returns:
        (Artwork, ArtworkMetadata)
    """
    opts: Optional[GenerationOptions] = None
    try:
        opts = GenerationOptions.coerce(options, **overrides)
        return ArtworkGenerator(identifier, opts).run()
    except Exception as e:
        logger.exception(f"Generation failed for {identifier!r}")
        return _fallback(identifier, opts, e)
