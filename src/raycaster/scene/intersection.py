"""Scene-level nearest-hit search over all spheres.

Sphere data is handed to kernels as two arrays in Structure-of-Arrays
layout: ``centers`` of shape (N, 3) and ``radii`` of shape (N,). Every sphere
is tested; the hit with the strictly smallest distance wins, so on an exact
tie the sphere that comes first in the scene is kept.

Example:
    >>> import numpy as np
    >>> centers = np.array([[0.0, 10.0, 0.0]], dtype=np.float32)
    >>> radii = np.array([4.0], dtype=np.float32)
    >>> # inside a kernel taking centers/radii as ndarrays:
    >>> # rec = intersect_spheres(origin, direction, centers, radii)
"""

import taichi as ti

from raycaster.core.vector import vec3
from raycaster.geometry.sphere import HitRecord, Sphere, hit_sphere, make_miss_record


@ti.func
def intersect_spheres(
    ray_origin: vec3,
    ray_direction: vec3,
    centers: ti.template(),
    radii: ti.template(),
) -> HitRecord:
    """Test a ray against every sphere and return the closest hit.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        centers: Sphere centers, an ndarray of vec3 with shape (N,).
        radii: Sphere radii, an ndarray of f32 with shape (N,).

    Returns:
        The HitRecord with the smallest finite t, or a miss record
        (t = +inf) when no sphere is hit.
    """
    closest = make_miss_record()

    for i in range(radii.shape[0]):
        sphere = Sphere(center=centers[i], radius=radii[i])
        rec = hit_sphere(ray_origin, ray_direction, sphere)
        if rec.hit == 1 and rec.t < closest.t:
            closest = rec

    return closest
