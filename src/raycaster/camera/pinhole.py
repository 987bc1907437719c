"""Pinhole camera model mapping image-plane coordinates to world-space rays.

The camera is a physical object positioned in the scene like any other. Its
image plane is a rectangle of ``width`` x ``height`` world units centered on
``center`` and spanned by the ``right`` and ``up`` vectors. The pinhole
(vantage point) sits ``focal_distance`` behind the plane along ``-forward``.

Rays are requested in normalized plane coordinates, so the camera knows
nothing about the output resolution::

    (x=-0.5, y=0.5)                (x=0.5, y=0.5)
          +------------------------------+
          |              ^ y             |
          |              |               |
          |              +---> x         |
          |            center            |
          |                              |
          +------------------------------+
    (x=-0.5, y=-0.5)               (x=0.5, y=-0.5)

A ray starts on the image plane and points away from the vantage point.

Example:
    >>> from raycaster.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera.from_fov(
    ...     center=(0.0, 0.0, 0.0),
    ...     forward=(0.0, 1.0, 0.0),
    ...     up=(0.0, 0.0, 1.0),
    ...     width=10.0,
    ...     height=5.625,
    ...     fov=80.0,
    ... )
    >>> # inside a kernel:
    >>> # frame = make_camera_frame(center, forward, up, width, height, focal)
    >>> # ray = cast_ray(frame, 0.0, 0.0)
"""

import math
from dataclasses import dataclass

import taichi as ti

from raycaster.core.ray import Ray, make_ray
from raycaster.core.vector import (
    Vec3Tuple,
    as_vec3,
    cross,
    cross_host,
    normalize,
    normalized,
    vec3,
    vector_length,
)

# =============================================================================
# Camera Configuration (Python-side)
# =============================================================================


def focal_distance_from_fov(width: float, fov: float) -> float:
    """Distance from the image plane to the pinhole for a horizontal FOV.

    Computes (width / 2) / tan(fov / 2), so that the plane of the given width
    exactly spans ``fov`` degrees as seen from the vantage point.

    Args:
        width: Physical width of the image plane (positive).
        fov: Horizontal field of view in degrees, in (0, 180).

    Returns:
        The focal distance in world units.

    Raises:
        ValueError: If width is not positive or fov is outside (0, 180).
    """
    if not (math.isfinite(width) and width > 0.0):
        raise ValueError(f"Image plane width must be finite and positive, got {width}")
    if not 0.0 < fov < 180.0:
        raise ValueError(f"Field of view must be in (0, 180) degrees, got {fov}")

    fov_rad = math.radians(fov)
    return (width / 2.0) / math.tan(fov_rad / 2.0)


@dataclass
class PinholeCamera:
    """Configuration for a pinhole camera.

    ``forward`` and ``up`` are normalized on construction. They do not have
    to be orthogonal, but they must not be parallel: the horizontal axis of
    the image plane is their cross product.

    Attributes:
        center: Center of the image plane in world space.
        forward: Viewing direction.
        up: Vertical axis of the image plane.
        width: Physical width of the image plane.
        height: Physical height of the image plane.
        focal_distance: Distance from the image plane back to the pinhole.
    """

    center: Vec3Tuple
    forward: Vec3Tuple
    up: Vec3Tuple
    width: float
    height: float
    focal_distance: float

    def __post_init__(self) -> None:
        self.center = as_vec3(self.center, "camera center")
        self.forward = normalized(self.forward, "camera forward vector")
        self.up = normalized(self.up, "camera up vector")

        if vector_length(cross_host(self.forward, self.up)) < 1e-9:
            raise ValueError(
                f"Camera forward {self.forward} and up {self.up} must not be parallel"
            )

        self.width = float(self.width)
        self.height = float(self.height)
        self.focal_distance = float(self.focal_distance)

        if not all(math.isfinite(v) and v > 0.0 for v in (self.width, self.height)):
            raise ValueError(
                f"Image plane size must be finite and positive, got {self.width}x{self.height}"
            )
        if not (math.isfinite(self.focal_distance) and self.focal_distance > 0.0):
            raise ValueError(
                f"Focal distance must be finite and positive, got {self.focal_distance}"
            )

    @classmethod
    def from_fov(
        cls,
        center: Vec3Tuple,
        forward: Vec3Tuple,
        up: Vec3Tuple,
        width: float,
        height: float,
        fov: float,
    ) -> "PinholeCamera":
        """Build a camera from a horizontal field of view in degrees."""
        return cls(
            center=center,
            forward=forward,
            up=up,
            width=width,
            height=height,
            focal_distance=focal_distance_from_fov(width, fov),
        )

    @property
    def right(self) -> Vec3Tuple:
        """Horizontal axis of the image plane (forward x up)."""
        return cross_host(self.forward, self.up)

    @property
    def vantage_point(self) -> Vec3Tuple:
        """Position of the pinhole behind the image plane."""
        return tuple(  # type: ignore[return-value]
            c - f * self.focal_distance for c, f in zip(self.center, self.forward)
        )

    @property
    def fov(self) -> float:
        """Horizontal field of view in degrees."""
        return math.degrees(2.0 * math.atan((self.width / 2.0) / self.focal_distance))


def get_camera_info(camera: PinholeCamera) -> dict[str, Vec3Tuple | float]:
    """Get the derived camera geometry for inspection.

    Returns:
        Dictionary with center, forward, up, right, vantage_point, width,
        height and focal_distance.
    """
    return {
        "center": camera.center,
        "forward": camera.forward,
        "up": camera.up,
        "right": camera.right,
        "vantage_point": camera.vantage_point,
        "width": camera.width,
        "height": camera.height,
        "focal_distance": camera.focal_distance,
    }


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.dataclass
class CameraFrame:
    """Kernel-side camera state with the derived right vector."""

    center: vec3
    forward: vec3
    up: vec3
    right: vec3
    width: ti.f32
    height: ti.f32
    focal_distance: ti.f32


@ti.func
def make_camera_frame(
    center: vec3,
    forward: vec3,
    up: vec3,
    width: ti.f32,
    height: ti.f32,
    focal_distance: ti.f32,
) -> CameraFrame:
    """Assemble a CameraFrame inside a kernel.

    forward and up must already be unit length (PinholeCamera guarantees it).
    """
    return CameraFrame(
        center=center,
        forward=forward,
        up=up,
        right=cross(forward, up),
        width=width,
        height=height,
        focal_distance=focal_distance,
    )


@ti.func
def cast_ray(frame: CameraFrame, cam_x: ti.f32, cam_y: ti.f32) -> Ray:
    """Generate the ray through normalized image-plane coordinates.

    Args:
        frame: The camera state.
        cam_x: Horizontal coordinate in [-0.5, 0.5] (left to right).
        cam_y: Vertical coordinate in [-0.5, 0.5] (bottom to top).

    Returns:
        A Ray starting on the image plane with a normalized direction
        pointing away from the vantage point.
    """
    # relative plane position -> absolute position on the plane
    offset = frame.right * (cam_x * frame.width) + frame.up * (cam_y * frame.height)
    plane_point = frame.center + offset

    vantage_point = frame.center - frame.forward * frame.focal_distance
    direction = normalize(plane_point - vantage_point)

    return make_ray(plane_point, direction)
