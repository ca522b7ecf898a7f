#!/usr/bin/env python3
"""
determinism_check.py
Determinism verification: proves the seed contract works both ways

Tests:
1. Same seed -> identical raster (reproducibility, across processes)
2. Different seed -> different raster (seed actually affects output)

Each render runs in its own interpreter so process-level state
(hash randomization, caches) cannot mask nondeterminism.
"""

import argparse
import json
import subprocess
import sys
import tempfile
from pathlib import Path

VERSION = "1.0"

DETERMINISM_SENTINEL_OK = "HEXBLOOP_DETERMINISM_OK"
DETERMINISM_SENTINEL_FAIL = "HEXBLOOP_DETERMINISM_FAIL"


def render_with_seed(identifier: str, output_dir: Path, name: str, seed: int, size: int,
                     style: str = None) -> tuple[bool, str]:
    """Render via the CLI; return (ok, fingerprint or error message)."""
    cmd = [
        sys.executable, "-m", "hexbloop", "generate", identifier,
        "--seed", str(seed), "--size", str(size),
        "--output", str(output_dir), "--name", name,
    ]
    if style:
        cmd += ["--style", style]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=120)
    except subprocess.TimeoutExpired:
        return False, "Render timed out"

    if result.returncode != 0:
        output = (result.stdout or "") + (result.stderr or "")
        return False, f"Render failed (seed={seed}): {output.strip()[-200:]}"

    report = output_dir / f"{name}.json"
    if not report.exists():
        return False, f"No report written (seed={seed})"
    with open(report) as f:
        return True, json.load(f)["fingerprint"]


def main() -> int:
    parser = argparse.ArgumentParser(description=f"Hexbloop Determinism Check v{VERSION}")
    parser.add_argument("--identifier", default="QUANTUM DIGITAL CORE")
    parser.add_argument("--style", default=None, help="Force a style (default: auto)")
    parser.add_argument("--size", type=int, default=256)
    args = parser.parse_args()

    print("=" * 60)
    print(f"HEXBLOOP DETERMINISM CHECK v{VERSION}")
    print("=" * 60)
    print()

    results = {}
    fp1 = None
    seed_a, seed_b = 12345, 54321

    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)

        # ============================================================
        # TEST 1: Same seed -> identical raster
        # ============================================================
        print("[1/2] Testing: Same seed -> identical output")
        print("-" * 40)

        ok1, fp1 = render_with_seed(args.identifier, tmpdir, "same_1", seed_a, args.size, args.style)
        ok2, fp2 = render_with_seed(args.identifier, tmpdir, "same_2", seed_a, args.size, args.style) if ok1 else (False, "")
        if not ok1 or not ok2:
            print(f"  FAIL: {fp1 if not ok1 else fp2}")
            results["same_seed"] = False
            fp1 = None
        elif fp1 == fp2:
            print(f"  PASS: Identical raster ({fp1[:23]}...)")
            results["same_seed"] = True
        else:
            print("  FAIL: Different rasters!")
            print(f"    render1: {fp1[:23]}...")
            print(f"    render2: {fp2[:23]}...")
            results["same_seed"] = False

        print()

        # ============================================================
        # TEST 2: Different seed -> different raster
        # ============================================================
        print("[2/2] Testing: Different seed -> different output")
        print("-" * 40)

        if fp1 is None:
            print("  SKIP: Cannot run (first test failed)")
            results["diff_seed"] = False
        else:
            ok3, fp3 = render_with_seed(args.identifier, tmpdir, "diff", seed_b, args.size, args.style)
            if not ok3:
                print(f"  FAIL: {fp3}")
                results["diff_seed"] = False
            elif fp1 != fp3:
                print(f"  PASS: Different raster (seed {seed_a} vs {seed_b})")
                results["diff_seed"] = True
            else:
                print("  FAIL: Identical raster despite different seeds!")
                results["diff_seed"] = False

        print()

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    for name, passed in results.items():
        print(f"  {name}: {'PASS' if passed else 'FAIL'}")
    print()

    if all(results.values()):
        print(DETERMINISM_SENTINEL_OK)
        return 0
    print(DETERMINISM_SENTINEL_FAIL)
    return 1


if __name__ == "__main__":
    sys.exit(main())
