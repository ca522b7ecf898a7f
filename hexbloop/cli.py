"""
hexbloop/cli.py
Command-line interface for Hexbloop

Usage:
    python -m hexbloop generate "QUANTUM DIGITAL CORE" --seed 12345 --size 400
    python -m hexbloop generate "night drive" --mix --audio-energy 0.9 --tempo 70
    python -m hexbloop list-styles
    python -m hexbloop dna "Hexbloop"
    python -m hexbloop palette --hue 200 --scheme triadic
    python -m hexbloop verify "Hexbloop" --seed 42
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from . import __version__
from .config import ENGINE_VERSION


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def _parse_effects(pairs) -> dict:
    """name=value pairs -> effects dict ("off"/"on" map to False/True)."""
    effects = {}
    for pair in pairs or []:
        name, _, value = pair.partition("=")
        value = value.strip().lower()
        if value in ("", "on", "true", "yes"):
            effects[name.strip()] = True
        elif value in ("off", "false", "no", "0"):
            effects[name.strip()] = False
        else:
            effects[name.strip()] = float(value)
    return effects


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate an artwork and save it with its report."""
    from .export import save_artwork
    from .generate import generate
    from .naming import NamingError
    from .signals import moon_phase_for, phase_name, sample_system_load

    moon_phase = args.moon_phase
    if moon_phase == "now":
        moon_phase = moon_phase_for(datetime.now())
        print(f"Moon: {phase_name(moon_phase)} ({moon_phase:.3f})")
    elif moon_phase is not None:
        try:
            moon_phase = float(moon_phase)
        except ValueError:
            print(f"ERROR: --moon-phase must be a number or 'now': {moon_phase}")
            return 1

    system_load = args.system_load
    if args.sample_load:
        system_load = sample_system_load()

    try:
        effects = _parse_effects(args.effect)
    except ValueError as e:
        print(f"ERROR: bad --effect value: {e}")
        return 1

    width = args.width or args.size
    height = args.height or args.size

    print(f"Hexbloop {ENGINE_VERSION}")
    print(f"Identifier: {args.identifier!r}")
    print()
    print("[1/2] Generating...")

    artwork, meta = generate(
        args.identifier,
        style=args.style,
        seed=args.seed,
        moon_phase=moon_phase,
        audio_energy=args.audio_energy,
        tempo=args.tempo,
        system_load=system_load,
        title=args.title,
        width=width,
        height=height,
        mode="mix" if args.mix else "discrete",
        scheme=args.scheme,
        noise_mode=args.noise_mode,
        effects=effects,
    )

    print(f"  Style:   {meta.style_used}")
    if meta.mode == "mix":
        for family, weight in meta.style_weights.items():
            print(f"    {family}: {weight:.2f}")
    print(f"  Scheme:  {meta.scheme}")
    print(f"  Palette: {' '.join(meta.palette_used)}")
    print(f"  Seed:    {meta.seed_used}")
    print(f"  Size:    {meta.width}x{meta.height}")
    for warning in meta.warnings:
        print(f"  Warning: {warning}")
    print()

    print("[2/2] Saving...")
    output_dir = Path(args.output) if args.output else Path("artwork")
    try:
        result = save_artwork(artwork, output_dir, name=args.name, fmt=args.format)
    except NamingError as e:
        print(f"ERROR: {e}")
        return 1
    print(f"  Image:  {result.image_path}")
    print(f"  Report: {result.report_path}")
    return 0


def cmd_list_styles(args: argparse.Namespace) -> int:
    """List registered styles."""
    from .styles import get_all_styles

    styles = get_all_styles()
    print("Registered styles:")
    print()
    if not styles:
        print("  (none)")
        return 0

    for name, d in styles.items():
        print(f"  {name}")
        print(f"    Display: {d.display_name}")
        print(f"    Family:  {d.family}")
        print(f"    Scheme:  {d.scheme}")
        print(f"    Shapes:  {', '.join(s.value for s in d.shapes)}")
        flags = [f for f in ("glow", "refraction", "scanlines", "reactive") if getattr(d, f)]
        if d.symmetry:
            flags.append(f"symmetry={d.symmetry}")
        if flags:
            print(f"    Flags:   {', '.join(flags)}")
    return 0


def cmd_dna(args: argparse.Namespace) -> int:
    """Print the DNA derived from an identifier."""
    from .seeds import derive_dna
    from .select import auto_style

    dna = derive_dna(args.identifier)
    if args.seed is not None:
        dna = dna.with_seed(args.seed)
    out = dna.to_dict()
    out["auto_style"] = auto_style(dna.identifier)
    print(json.dumps(out, indent=2))
    return 0


def cmd_palette(args: argparse.Namespace) -> int:
    """Print a palette for a base colour and scheme."""
    from .palette import PaletteError, generate_palette
    from .seeds import SeededStream

    stream = SeededStream(args.seed) if args.seed is not None else None
    try:
        palette = generate_palette(args.hue, args.saturation, args.lightness, args.scheme, args.count, stream)
    except PaletteError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Scheme: {palette.scheme.value}")
    for i, color in enumerate(palette):
        role = "background" if i == 0 else "accent"
        print(f"  {i:2d}  {color.to_hex()}  h={color.h:6.1f} s={color.s:5.1f} l={color.l:5.1f}  {role}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Check that generation is deterministic for an identifier."""
    from .generate import generate
    from .seeds import raster_fingerprint

    opts = dict(seed=args.seed, width=args.size, height=args.size, style=args.style)
    first, meta = generate(args.identifier, **opts)
    second, _ = generate(args.identifier, **opts)
    other, _ = generate(args.identifier, **dict(opts, seed=args.seed + 1))

    fp1 = raster_fingerprint(first.to_rgba_bytes())
    fp2 = raster_fingerprint(second.to_rgba_bytes())
    fp3 = raster_fingerprint(other.to_rgba_bytes())

    print(f"Identifier: {args.identifier!r} style={meta.style_used} seed={args.seed}")
    print(f"  run 1:    {fp1[:23]}...")
    print(f"  run 2:    {fp2[:23]}...")
    print(f"  seed + 1: {fp3[:23]}...")

    ok = True
    if fp1 == fp2:
        print("OK: same seed -> identical raster")
    else:
        print("FAIL: same seed produced different rasters")
        ok = False
    if fp1 != fp3:
        print("OK: different seed -> different raster")
    else:
        print("FAIL: different seed produced identical raster")
        ok = False
    return 0 if ok else 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="hexbloop",
        description="Hexbloop deterministic artwork generator",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # generate command
    gen_parser = subparsers.add_parser("generate", help="Generate an artwork")
    gen_parser.add_argument("identifier", type=str, help="Identifier text (e.g. track name)")
    gen_parser.add_argument("--style", type=str, help="Style name or 'auto'")
    gen_parser.add_argument("--seed", "-s", type=int, help="Explicit seed")
    gen_parser.add_argument("--mix", action="store_true", help="Blend style families from context")
    gen_parser.add_argument("--moon-phase", type=str, help="0-1, or 'now'")
    gen_parser.add_argument("--audio-energy", type=float, help="0-1")
    gen_parser.add_argument("--tempo", type=float, help="BPM")
    gen_parser.add_argument("--system-load", type=float, help="0-1")
    gen_parser.add_argument("--sample-load", action="store_true", help="Read system load from the host")
    gen_parser.add_argument("--title", "-t", type=str, help="Title overlay text")
    gen_parser.add_argument("--size", type=int, default=1000, help="Square size in px")
    gen_parser.add_argument("--width", type=int, help="Width (overrides --size)")
    gen_parser.add_argument("--height", type=int, help="Height (overrides --size)")
    gen_parser.add_argument("--scheme", type=str, help="Harmony scheme override")
    gen_parser.add_argument("--noise-mode", type=str, choices=["fixed", "per-call"], help="Noise table policy")
    gen_parser.add_argument("--effect", "-e", action="append", metavar="NAME=VALUE",
                            help="Post effect override, e.g. bloom=0.5 or scanlines=off")
    gen_parser.add_argument("--output", "-o", type=str, help="Output directory")
    gen_parser.add_argument("--name", "-n", type=str, help="Output file stem")
    gen_parser.add_argument("--format", "-f", type=str, default="png", help="png or jpg")
    gen_parser.set_defaults(func=cmd_generate)

    # list-styles command
    list_parser = subparsers.add_parser("list-styles", help="List styles")
    list_parser.set_defaults(func=cmd_list_styles)

    # dna command
    dna_parser = subparsers.add_parser("dna", help="Show DNA for an identifier")
    dna_parser.add_argument("identifier", type=str)
    dna_parser.add_argument("--seed", "-s", type=int, help="Explicit seed override")
    dna_parser.set_defaults(func=cmd_dna)

    # palette command
    pal_parser = subparsers.add_parser("palette", help="Show a harmony palette")
    pal_parser.add_argument("--hue", type=float, default=200.0)
    pal_parser.add_argument("--saturation", type=float, default=70.0)
    pal_parser.add_argument("--lightness", type=float, default=50.0)
    pal_parser.add_argument("--scheme", type=str, default="complementary")
    pal_parser.add_argument("--count", type=int, default=5)
    pal_parser.add_argument("--seed", "-s", type=int, help="Jitter seed (no jitter when omitted)")
    pal_parser.set_defaults(func=cmd_palette)

    # verify command
    verify_parser = subparsers.add_parser("verify", help="Check determinism")
    verify_parser.add_argument("identifier", type=str)
    verify_parser.add_argument("--seed", "-s", type=int, default=42)
    verify_parser.add_argument("--size", type=int, default=256)
    verify_parser.add_argument("--style", type=str)
    verify_parser.set_defaults(func=cmd_verify)

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
