"""Output pixel buffer for rendered images.

The buffer is a ``(height, width, 3)`` array of 8-bit RGB channels indexed as
``pixels[y, x]``. Row ``y = 0`` is the bottom of the image: the render driver
maps it to the bottom edge of the camera's image plane (``cam_y = -0.5``,
the ``-up`` side). ``to_image_array()`` returns the rows top-first, which is
what image encoders expect.

Example:
    >>> from raycaster.core.framebuffer import FrameBuffer
    >>> fb = FrameBuffer(4, 2)
    >>> fb.set_pixel(1, 0, (255, 0, 0))
    >>> fb.get_pixel(1, 0)
    (255, 0, 0)
"""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

RGB = tuple[int, int, int]


def as_rgb(color: Sequence[int], name: str = "color") -> RGB:
    """Validate an 8-bit RGB triple.

    Channels must be whole numbers in [0, 255]; 10.0 is accepted as 10 but
    0.9 is rejected rather than truncated.
    """
    values = tuple(color)
    if len(values) != 3:
        raise ValueError(f"{name} must have 3 channels, got {len(values)}")
    try:
        channels = tuple(int(c) for c in values)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"{name} channels must be integers, got {values}") from e
    if any(c != v for c, v in zip(channels, values)):
        raise ValueError(f"{name} channels must be integers, got {values}")
    if not all(0 <= c <= 255 for c in channels):
        raise ValueError(f"{name} channels must be in [0, 255], got {channels}")
    return channels  # type: ignore[return-value]


class FrameBuffer:
    """A width x height grid of 8-bit RGB pixels.

    The buffer is cleared to a background color on creation; the renderer
    only overwrites the pixels whose ray hits the scene.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        background: Color used by clear() when none is given.
    """

    def __init__(self, width: int, height: int, background: Sequence[int] = (0, 0, 0)) -> None:
        """Allocate the buffer and clear it to the background color.

        Raises:
            ValueError: If width or height is not positive, or the background
                is not a valid RGB triple.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

        self._width = int(width)
        self._height = int(height)
        self.background = as_rgb(background, "background")
        self._pixels = np.empty((self._height, self._width, 3), dtype=np.uint8)
        self.clear()

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def pixels(self) -> npt.NDArray[np.uint8]:
        """The raw ``(height, width, 3)`` pixel array, bottom row first."""
        return self._pixels

    def clear(self, color: Sequence[int] | None = None) -> None:
        """Fill every pixel with color (default: the background color)."""
        rgb = self.background if color is None else as_rgb(color)
        self._pixels[:, :] = rgb

    def _check_coords(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise ValueError(
                f"Pixel ({x}, {y}) is outside the {self._width}x{self._height} image"
            )

    def set_pixel(self, x: int, y: int, color: Sequence[int]) -> None:
        """Set the pixel at (x, y) to an 8-bit RGB color.

        Raises:
            ValueError: If (x, y) is outside the image or color is invalid.
        """
        self._check_coords(x, y)
        self._pixels[y, x] = as_rgb(color)

    def get_pixel(self, x: int, y: int) -> RGB:
        """Get the 8-bit RGB color at (x, y)."""
        self._check_coords(x, y)
        r, g, b = self._pixels[y, x]
        return (int(r), int(g), int(b))

    def to_image_array(self) -> npt.NDArray[np.uint8]:
        """Copy of the pixels with the top row first, for image encoders."""
        return np.flipud(self._pixels).copy()

    def __repr__(self) -> str:
        return f"FrameBuffer(width={self._width}, height={self._height})"
