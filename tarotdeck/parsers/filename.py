"""
Normalizer for uploaded card image filenames.

Turns an arbitrary original filename into a canonical token:

    "The Fool.png"   -> "the_fool"
    "the-fool.PNG"   -> "the_fool"
    "THE_FOOL.jpeg"  -> "the_fool"
    "Ace of Cups.jpg" -> "ace_of_cups"

Normalization is idempotent: normalize_filename(normalize_filename(x))
equals normalize_filename(x) for every string x.
"""

import re

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "webp"})

# Trailing ".png", ".JPG", ".jpeg", ".WebP" (one at a time)
IMAGE_EXTENSION_PATTERN = re.compile(
    r"\.(?:" + "|".join(sorted(IMAGE_EXTENSIONS)) + r")$", re.IGNORECASE
)

# Any run of hyphens, underscores or whitespace
SEPARATOR_PATTERN = re.compile(r"[\s_-]+")

SEPARATOR = "_"


def strip_image_extension(filename: str) -> str:
    """
    Remove trailing image extensions, preserving case.

    Repeated extensions ("card.png.png") are all removed.
    """
    base = filename.strip()
    while True:
        stripped = IMAGE_EXTENSION_PATTERN.sub("", base).rstrip()
        if stripped == base:
            return base
        base = stripped


def normalize_filename(filename: str) -> str:
    """
    Normalize a filename into a lower-case underscore-separated token.

    Args:
        filename: Original filename without directory components

    Returns:
        Normalized token. Empty string if nothing but separators and
        extensions remain.
    """
    token = SEPARATOR_PATTERN.sub(SEPARATOR, filename.lower()).strip(SEPARATOR)

    # Stripping an extension can expose a trailing separator ("fool_.png"),
    # and trimming that can expose another extension ("fool.png_.png").
    while True:
        stripped = IMAGE_EXTENSION_PATTERN.sub("", token).strip(SEPARATOR)
        if stripped == token:
            return token
        token = stripped
