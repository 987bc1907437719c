"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric construction rather than the algebraic
quadratic: project the sphere center onto the ray, measure how far the ray
passes from the center, and step back and forth from the projection by the
half-chord length.

    L   = C - O             vector from the ray origin to the center
    tca = L . D             distance along the ray to the closest approach
    d^2 = |L|^2 - tca^2     squared distance from the center to the ray
    thc = sqrt(r^2 - d^2)   half-chord length
    t0, t1 = tca - thc, tca + thc

Known simplification: a sphere whose center projects behind the ray origin
(tca < 0) is rejected outright. For a ray starting inside the sphere and
facing away from the center this misses the exit point that a general
solver would report. Primary camera rays start on the image plane, outside
every visible sphere, so rendering is unaffected.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 10, 0), radius=4.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from raycaster.core.vector import as_vec3, dot, length_squared, normalize, vec3

# Distance reported when the ray misses
NO_HIT = tm.inf


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-sphere intersection.

    Attributes:
        hit: 1 if the ray intersected the sphere, 0 otherwise.
        t: Distance along the ray to the hit point, or +inf on a miss.
        point: The hit point. Only valid if hit == 1.
        normal: Outward unit normal at the hit point. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord for a ray that hit nothing."""
    return HitRecord(
        hit=0,
        t=NO_HIT,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> HitRecord:
    """Find the nearest non-negative intersection of a ray with a sphere.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        sphere: The sphere to test.

    Returns:
        A HitRecord with the smallest non-negative distance (t0 if it is
        non-negative, t1 otherwise), the hit point and the outward normal,
        or a miss record with t = +inf.
    """
    result = make_miss_record()

    to_center = sphere.center - ray_origin
    tca = dot(to_center, ray_direction)

    # center behind the origin (see module docstring)
    if tca >= 0.0:
        d2 = length_squared(to_center) - tca * tca
        r2 = sphere.radius * sphere.radius

        if d2 <= r2:
            thc = ti.sqrt(r2 - d2)
            t0 = tca - thc
            t1 = tca + thc

            t = t0
            if t < 0.0:
                t = t1

            if t >= 0.0:
                point = ray_origin + ray_direction * t
                result = HitRecord(
                    hit=1,
                    t=t,
                    point=point,
                    normal=normalize(point - sphere.center),
                )

    return result


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius inside a kernel."""
    return Sphere(center=center, radius=radius)


def validate_sphere(center, radius: float) -> tuple[tuple[float, float, float], float]:
    """Check sphere parameters on the host before they reach a kernel.

    Returns:
        The center as a float tuple and the radius as a float.

    Raises:
        ValueError: If the center is malformed or the radius is not positive.
    """
    center = as_vec3(center, "sphere center")
    radius = float(radius)
    if not radius > 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")
    return center, radius
