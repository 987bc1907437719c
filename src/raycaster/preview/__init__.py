"""Preview module: image export through Pillow."""

from .export import DEFAULT_DPI, resolve_format, save_image, to_pil_image

__all__ = [
    "DEFAULT_DPI",
    "resolve_format",
    "save_image",
    "to_pil_image",
]
