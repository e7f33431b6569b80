from tarotdeck.parsers.filename import normalize_filename, strip_image_extension

__all__ = [
    "normalize_filename",
    "strip_image_extension",
]
