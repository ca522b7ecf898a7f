#!/usr/bin/env python3
"""
Generate a full showcase set into ~/Pictures/showcase/hexbloop/

- styles/: every registered style across a grid of moon phase / audio energy
- mix/:    continuous mode across contrasting contexts
"""

from __future__ import annotations

from itertools import product
from pathlib import Path

from hexbloop.generate import generate
from hexbloop.styles import list_styles

IDENTIFIER = "QUANTUM DIGITAL CORE"

MIX_CONTEXTS = {
    "calm_night": dict(audio_energy=0.2, tempo=70, moon_phase=0.02, hour_of_day=2),
    "loud_day": dict(audio_energy=0.9, tempo=150, moon_phase=0.5, hour_of_day=14),
    "dark_dense": dict(spectral_centroid=0.1, transient_density=0.8, system_load=0.9),
    "neutral": dict(),
}


def main() -> int:
    base = Path.home() / "Pictures" / "showcase" / "hexbloop"
    styles_dir = base / "styles"
    mix_dir = base / "mix"
    styles_dir.mkdir(parents=True, exist_ok=True)
    mix_dir.mkdir(parents=True, exist_ok=True)

    # 2x2 grid: low / high
    moons = [0.1, 0.6]
    energies = [0.2, 0.9]

    size = 512

    # --- styles ---
    i = 0
    for style in list_styles():
        for moon, energy in product(moons, energies):
            out = styles_dir / f"{style}_m{moon:.2f}_e{energy:.2f}.png"
            artwork, _ = generate(
                IDENTIFIER,
                style=style,
                seed=42000 + i,
                moon_phase=moon,
                audio_energy=energy,
                width=size,
                height=size,
            )
            artwork.image.save(out)
            print(out)
            i += 1

    # --- mix ---
    for name, context in MIX_CONTEXTS.items():
        out = mix_dir / f"{name}.png"
        artwork, meta = generate(IDENTIFIER, mode="mix", seed=4242, width=size, height=size, **context)
        artwork.image.save(out)
        print(f"{out}  ({meta.style_used})")

    print(f"\nDone. Output: {base}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
