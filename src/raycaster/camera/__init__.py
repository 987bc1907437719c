"""Camera module for ray generation.

Ray generation uses normalized image-plane coordinates centered on the
plane: cam_x in [-0.5, 0.5] left to right, cam_y in [-0.5, 0.5] bottom to
top. Converting pixels to these coordinates is the render driver's job.
"""

from .pinhole import (
    CameraFrame,
    PinholeCamera,
    cast_ray,
    focal_distance_from_fov,
    get_camera_info,
    make_camera_frame,
)

__all__ = [
    "PinholeCamera",
    "CameraFrame",
    "focal_distance_from_fov",
    "get_camera_info",
    "make_camera_frame",
    "cast_ray",
]
