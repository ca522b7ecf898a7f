"""
hexbloop/export.py
Write an artwork to disk

- {stem}.png / {stem}.jpg   the raster
- {stem}.json               generation report (metadata + fingerprint)

Runs only after generation has completed; the pipeline itself never
touches the filesystem.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import ENGINE_VERSION
from .models import Artwork
from .naming import image_format, make_artwork_stem, sanitize_to_slug
from .seeds import raster_fingerprint

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    image_path: Path
    report_path: Path
    fingerprint: str


def save_artwork(
    artwork: Artwork,
    output_dir: Path,
    name: Optional[str] = None,
    fmt: str = "png",
    quality: int = 95,
) -> ExportResult:
    """
    Save the raster plus a JSON report into output_dir.

    Args:
        artwork: generated artwork
        output_dir: created if missing
        name: file stem override (sanitized); defaults to identifier_style_seed
        fmt: "png" or "jpg"/"jpeg" (JPEG drops alpha)

    Raises:
        NamingError: unsupported format
    """
    ext, pil_format = image_format(fmt)
    meta = artwork.metadata
    stem = sanitize_to_slug(name) if name else make_artwork_stem(
        meta.identifier, meta.style_used, meta.seed_used
    )

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    image_path = output_dir / f"{stem}.{ext}"
    report_path = output_dir / f"{stem}.json"

    img = artwork.image
    if pil_format == "JPEG":
        img = img.convert("RGB")
        img.save(image_path, pil_format, quality=quality)
    else:
        img.save(image_path, pil_format)

    fingerprint = raster_fingerprint(artwork.to_rgba_bytes())
    report = {
        "engine_version": ENGINE_VERSION,
        "exported_at": datetime.now().isoformat(),
        "image": image_path.name,
        "format": pil_format,
        "fingerprint": fingerprint,
        "metadata": meta.to_dict(),
    }
    with open(report_path, "w") as f:
        json.dump(report, f, indent=2)

    logger.info(f"Saved {image_path} ({meta.style_used}, seed {meta.seed_used})")
    return ExportResult(image_path=image_path, report_path=report_path, fingerprint=fingerprint)
