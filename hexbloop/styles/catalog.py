"""
hexbloop/styles/catalog.py
Built-in style parameter tables

IMPORTANT: Order is stable - append only.
Discrete selection indexes into this order.
"""

from typing import List

from ..compositor import BlendMode
from .base import AtmosphereKind, BackgroundKind, Motif, ShapeKind, StyleDefinition


BUILTIN_STYLES: List[StyleDefinition] = [
    StyleDefinition(
        name="cosmic",
        display_name="Cosmic Nebula",
        description="Deep space with nebulas and stars",
        scheme="analogous",
        shapes=(ShapeKind.CIRCLE, ShapeKind.BLOB, ShapeKind.STAR),
        density=(20, 35),
        scale=(0.02, 0.10),
        opacity=(0.4, 0.8),
        blend_mode=BlendMode.SCREEN,
        background=BackgroundKind.RADIAL,
        atmosphere=AtmosphereKind.NEBULA,
        motif=Motif.GALAXY,
        family="cosmic",
        blur=2.0,
        particles=300,
        post=(("grain", 8.0), ("bloom", 0.35)),
    ),
    StyleDefinition(
        name="organic",
        display_name="Organic Flow",
        description="Natural flowing forms and curves",
        scheme="triadic",
        shapes=(ShapeKind.BLOB, ShapeKind.WAVE, ShapeKind.SPIRAL),
        density=(15, 25),
        scale=(0.08, 0.25),
        opacity=(0.2, 0.6),
        background=BackgroundKind.LINEAR,
        atmosphere=AtmosphereKind.FLOW,
        family="bioform",
        post=(("grain", 4.0),),
    ),
    StyleDefinition(
        name="geometric",
        display_name="Sacred Geometry",
        description="Precise geometric patterns with golden ratio",
        scheme="complementary",
        shapes=(ShapeKind.POLYGON, ShapeKind.STAR, ShapeKind.SUPERFORMULA),
        density=(10, 20),
        scale=(0.06, 0.20),
        opacity=(0.3, 0.7),
        background=BackgroundKind.RADIAL,
        motif=Motif.FLOWER_OF_LIFE,
        family="neural",
        post=(("grain", 2.0),),
    ),
    StyleDefinition(
        name="glitch",
        display_name="Digital Glitch",
        description="Corrupted digital aesthetics",
        scheme="split-complementary",
        shapes=(ShapeKind.RECT, ShapeKind.SHARD),
        density=(25, 40),
        scale=(0.05, 0.30),
        opacity=(0.4, 0.9),
        blend_mode=BlendMode.DIFFERENCE,
        background=BackgroundKind.LINEAR,
        motif=Motif.FRAGMENTS,
        family="neural",
        scanlines=True,
        post=(("grain", 12.0), ("chromatic", 4.0)),
    ),
    StyleDefinition(
        name="watercolor",
        display_name="Watercolor Dreams",
        description="Soft, bleeding watercolor effects",
        scheme="analogous",
        shapes=(ShapeKind.BLOB, ShapeKind.CIRCLE, ShapeKind.WAVE),
        density=(8, 15),
        scale=(0.15, 0.40),
        opacity=(0.1, 0.3),
        background=BackgroundKind.RADIAL,
        atmosphere=AtmosphereKind.MIST,
        family="bioform",
        blur=12.0,
        post=(("grain", 6.0), ("vignette", 0.25)),
    ),
    StyleDefinition(
        name="crystalline",
        display_name="Crystal Formation",
        description="Faceted crystal structures",
        scheme="monochromatic",
        shapes=(ShapeKind.SHARD, ShapeKind.POLYGON),
        density=(15, 30),
        scale=(0.05, 0.18),
        opacity=(0.2, 0.8),
        blend_mode=BlendMode.SCREEN,
        background=BackgroundKind.LINEAR,
        family="neural",
        refraction=True,
        post=(("grain", 4.0), ("bloom", 0.3)),
    ),
    StyleDefinition(
        name="retro",
        display_name="Retro Wave",
        description="80s synthwave aesthetics",
        scheme="neon",
        shapes=(ShapeKind.POLYGON, ShapeKind.CIRCLE),
        density=(4, 10),
        scale=(0.02, 0.06),
        opacity=(0.5, 1.0),
        background=BackgroundKind.LINEAR,
        motif=Motif.HORIZON_GRID,
        family="plasma",
        scanlines=True,
        particles=80,
        post=(("grain", 8.0), ("bloom", 0.3)),
    ),
    StyleDefinition(
        name="minimal",
        display_name="Minimal Zen",
        description="Clean, minimal compositions",
        scheme="monochromatic",
        shapes=(ShapeKind.CIRCLE,),
        density=(3, 8),
        scale=(0.05, 0.30),
        opacity=(0.3, 0.9),
        background=BackgroundKind.LINEAR,
        family="cosmic",
        post=(("grain", 1.0), ("vignette", 0.2)),
    ),
    StyleDefinition(
        name="aurora",
        display_name="Aurora Borealis",
        description="Northern lights flowing patterns",
        scheme="aurora",
        shapes=(ShapeKind.WAVE, ShapeKind.FLOW),
        density=(5, 12),
        scale=(0.2, 0.5),
        opacity=(0.2, 0.5),
        blend_mode=BlendMode.SCREEN,
        background=BackgroundKind.LINEAR,
        atmosphere=AtmosphereKind.MIST,
        motif=Motif.AURORA_RIBBONS,
        family="cosmic",
        glow=True,
        blur=6.0,
        particles=120,
        post=(("grain", 4.0),),
    ),
    StyleDefinition(
        name="botanical",
        display_name="Botanical Garden",
        description="Organic plant-like growth patterns",
        scheme="earthy",
        shapes=(ShapeKind.LEAF, ShapeKind.BRANCH, ShapeKind.BLOB),
        density=(20, 35),
        scale=(0.05, 0.15),
        opacity=(0.3, 0.7),
        background=BackgroundKind.RADIAL,
        family="bioform",
        post=(("grain", 3.0),),
    ),
    StyleDefinition(
        name="liquid",
        display_name="Liquid Metal",
        description="Flowing metallic surfaces",
        scheme="metallic",
        shapes=(ShapeKind.METABALL, ShapeKind.BLOB, ShapeKind.WAVE),
        density=(10, 18),
        scale=(0.10, 0.25),
        opacity=(0.4, 0.8),
        background=BackgroundKind.LINEAR,
        family="plasma",
        blur=4.0,
        post=(("grain", 2.0), ("bloom", 0.5)),
    ),
    StyleDefinition(
        name="mandala",
        display_name="Sacred Mandala",
        description="Symmetrical spiritual patterns",
        scheme="chakra",
        shapes=(ShapeKind.SUPERFORMULA, ShapeKind.STAR),
        density=(1, 3),
        scale=(0.04, 0.10),
        opacity=(0.8, 1.0),
        background=BackgroundKind.RADIAL,
        motif=Motif.ROSETTE,
        family="cosmic",
        symmetry=8,
        post=(("grain", 1.0),),
    ),
    StyleDefinition(
        name="plasma",
        display_name="Plasma Field",
        description="Hot fused metaballs over turbulent energy",
        scheme="triadic",
        shapes=(ShapeKind.METABALL, ShapeKind.BLOB),
        density=(8, 16),
        scale=(0.15, 0.35),
        opacity=(0.6, 1.0),
        blend_mode=BlendMode.ADD,
        background=BackgroundKind.TURBULENT,
        atmosphere=AtmosphereKind.NEBULA,
        family="plasma",
        glow=True,
        particles=100,
        post=(("bloom", 0.5), ("chromatic", 2.0)),
    ),
    StyleDefinition(
        name="bioform",
        display_name="Bioform",
        description="Cellular growth over veined marble",
        scheme="analogous",
        shapes=(ShapeKind.BLOB, ShapeKind.METABALL, ShapeKind.SPIRAL),
        density=(12, 24),
        scale=(0.06, 0.20),
        opacity=(0.3, 0.7),
        blend_mode=BlendMode.OVERLAY,
        background=BackgroundKind.MARBLE,
        atmosphere=AtmosphereKind.FLOW,
        family="bioform",
        particles=60,
        post=(("grain", 5.0),),
    ),
    StyleDefinition(
        name="neural",
        display_name="Neural Web",
        description="Connected nodes, flow traces and energy discharge",
        scheme="tetradic",
        shapes=(ShapeKind.FLOW, ShapeKind.CIRCLE),
        density=(10, 20),
        scale=(0.02, 0.08),
        opacity=(0.4, 0.9),
        blend_mode=BlendMode.SCREEN,
        background=BackgroundKind.TURBULENT,
        motif=Motif.NEURAL_WEB,
        family="neural",
        glow=True,
        reactive=True,
        particles=80,
        post=(("chromatic", 2.0), ("grain", 4.0)),
    ),
]
