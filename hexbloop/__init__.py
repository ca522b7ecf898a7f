"""
Hexbloop - Deterministic generative artwork engine

Turns an identifier (e.g. a track name) plus optional context signals
(moon phase, audio energy, tempo, system load) into a layered raster.
Same identifier, seed and context -> identical pixels.

Usage:
    python -m hexbloop generate "QUANTUM DIGITAL CORE" --seed 12345
    python -m hexbloop generate "night drive" --mix --audio-energy 0.9
    python -m hexbloop list-styles
    python -m hexbloop verify "Hexbloop"
"""

__version__ = "0.1.0"

from .models import DNA, ContextSignals, GenerationOptions, Artwork, ArtworkMetadata
from .seeds import stable_u32, derive_dna, SeededStream, StreamBank, raster_fingerprint
from .noise import NoiseField, NoiseMode
from .palette import HarmonyScheme, HSLColor, Palette, PaletteError, generate_palette
from .select import select_style, auto_style, mix_styles, StyleMix
from .styles import list_styles, get_style, register_style, StyleDefinition
from .compositor import BlendMode, LayerStack
from .generate import generate, ArtworkGenerator
from .export import save_artwork, ExportResult
from .config import (
    ENGINE_VERSION,
    STYLE_FAMILIES,
    CANVAS_CONFIG,
    PostEffectSettings,
)

__all__ = [
    # Version
    "__version__",
    "ENGINE_VERSION",
    # Models
    "DNA",
    "ContextSignals",
    "GenerationOptions",
    "Artwork",
    "ArtworkMetadata",
    # Seeds
    "stable_u32",
    "derive_dna",
    "SeededStream",
    "StreamBank",
    "raster_fingerprint",
    # Noise / palette
    "NoiseField",
    "NoiseMode",
    "HarmonyScheme",
    "HSLColor",
    "Palette",
    "PaletteError",
    "generate_palette",
    # Styles
    "select_style",
    "auto_style",
    "mix_styles",
    "StyleMix",
    "list_styles",
    "get_style",
    "register_style",
    "StyleDefinition",
    # Compositing
    "BlendMode",
    "LayerStack",
    "PostEffectSettings",
    # Generation
    "generate",
    "ArtworkGenerator",
    "save_artwork",
    "ExportResult",
    # Config
    "STYLE_FAMILIES",
    "CANVAS_CONFIG",
]
