"""
hexbloop/naming.py
Naming rules for exported artwork files

- slug:      [a-z][a-z0-9_]*  (max 48 chars)
- filename:  {slug}_{style}_{seed}.{ext}
- report:    {slug}_{style}_{seed}.json
"""

import re
from typing import Tuple

SLUG_REGEX = re.compile(r"^[a-z][a-z0-9_]*$")

MAX_SLUG_LENGTH = 48

IMAGE_FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
}


class NamingError(ValueError):
    """Raised when a name violates the naming rules."""
    pass


def sanitize_to_slug(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """
    Convert arbitrary string to valid slug.

    - Lowercase
    - Replace non-alphanumeric with underscore
    - Collapse multiple underscores
    - Strip leading/trailing underscores
    - Ensure starts with letter
    - Truncate to max_length
    """
    slug = "".join(c if c.isascii() and c.isalnum() else "_" for c in name.lower())

    while "__" in slug:
        slug = slug.replace("__", "_")

    slug = slug.strip("_")

    if slug and not slug[0].isalpha():
        slug = "x" + slug

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip("_")

    if len(slug) < 1:
        slug = "untitled"

    return slug


def validate_slug(slug: str) -> None:
    """Validate a slug or raise NamingError."""
    if not slug:
        raise NamingError("slug cannot be empty")
    if not SLUG_REGEX.match(slug):
        raise NamingError(
            f"slug '{slug}' must be lowercase "
            "(letters, digits, underscores; start with letter)"
        )
    if len(slug) > MAX_SLUG_LENGTH:
        raise NamingError(f"slug '{slug}' exceeds {MAX_SLUG_LENGTH} characters")


def image_format(fmt: str) -> Tuple[str, str]:
    """Map a user format to (extension, PIL format name)."""
    key = (fmt or "").strip().lower().lstrip(".")
    if key not in IMAGE_FORMATS:
        raise NamingError(f"Unsupported image format '{fmt}' (expected one of {sorted(IMAGE_FORMATS)})")
    ext = "jpg" if key == "jpeg" else key
    return ext, IMAGE_FORMATS[key]


def make_artwork_stem(identifier: str, style: str, seed: int) -> str:
    """File stem shared by the image and its report."""
    slug = sanitize_to_slug(identifier)
    validate_slug(slug)
    style_slug = sanitize_to_slug(style, max_length=16)
    return f"{slug}_{style_slug}_{int(seed)}"


def make_artwork_filename(identifier: str, style: str, seed: int, fmt: str = "png") -> str:
    ext, _ = image_format(fmt)
    return f"{make_artwork_stem(identifier, style, seed)}.{ext}"
