"""Image export for rendered frame buffers.

Encoding is delegated to Pillow. The format follows the file extension;
paths without an extension Pillow knows are written as BMP. A pixel-density
hint (DPI) is stored in formats that support it (BMP, PNG, JPEG, TIFF).

Example:
    >>> from raycaster.preview.export import save_image
    >>> save_image(framebuffer, "spheres.bmp", dpi=80)
"""

import logging
from pathlib import Path

from PIL import Image as PILImage

from raycaster.core.framebuffer import FrameBuffer

logger = logging.getLogger(__name__)

# Pixel density written into image headers
DEFAULT_DPI = 80

# Format used when the extension does not name one
DEFAULT_FORMAT = "BMP"


def resolve_format(filepath: str | Path, image_format: str | None = None) -> str:
    """Pick the Pillow format name for an output path.

    Args:
        filepath: Output path.
        image_format: Explicit format name; wins over the extension.

    Returns:
        A Pillow format name such as "BMP" or "PNG". Extensions of formats
        Pillow can only read (such as .psd) fall back to BMP.

    Raises:
        ValueError: If image_format names a format Pillow cannot write.
    """
    PILImage.init()

    if image_format is not None:
        fmt = image_format.upper()
        if fmt not in PILImage.SAVE:
            raise ValueError(f"Pillow cannot write {image_format!r} images")
        return fmt

    suffix = Path(filepath).suffix.lower()
    fmt = PILImage.EXTENSION.get(suffix, DEFAULT_FORMAT)
    if fmt not in PILImage.SAVE:
        logger.debug("No writer for %s; saving %s as %s", fmt, filepath, DEFAULT_FORMAT)
        fmt = DEFAULT_FORMAT
    return fmt


def to_pil_image(framebuffer: FrameBuffer) -> PILImage.Image:
    """Convert a frame buffer to an RGB Pillow image, top row first."""
    return PILImage.fromarray(framebuffer.to_image_array())


def save_image(
    framebuffer: FrameBuffer,
    filepath: str | Path,
    *,
    dpi: int = DEFAULT_DPI,
    image_format: str | None = None,
) -> Path:
    """Encode a frame buffer and write it to disk.

    Args:
        framebuffer: The rendered image.
        filepath: Output file path.
        dpi: Pixel density hint stored in the file header.
        image_format: Pillow format name; inferred from the extension
            (BMP if unknown) when omitted.

    Returns:
        The path written to.

    Raises:
        ValueError: If dpi is not positive.
        OSError: If the file cannot be written.
    """
    if dpi <= 0:
        raise ValueError(f"DPI must be positive, got {dpi}")

    path = Path(filepath)
    fmt = resolve_format(path, image_format)

    image = to_pil_image(framebuffer)
    image.save(path, format=fmt, dpi=(dpi, dpi))

    logger.info(
        "Wrote %dx%d %s image to %s", framebuffer.width, framebuffer.height, fmt, path
    )
    return path
