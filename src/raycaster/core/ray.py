"""Ray data structure used by the camera and the intersection tests.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 1.0, 0.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> # ray_at(ray, 6.0) inside a kernel gives (0, 6, 0)
"""

import taichi as ti

from raycaster.core.vector import vec3


@ti.dataclass
class Ray:
    """A half-line with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Camera rays are always
            normalized; the intersection test relies on it.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point origin + t * direction."""
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction inside a kernel."""
    return Ray(origin=origin, direction=direction)
