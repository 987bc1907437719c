"""Vector algebra for kernel-side shading and host-side validation.

Kernel functions operate on Taichi ``vec3`` values and are pure. They assume
well-formed input: in particular ``normalize`` expects a non-zero vector.
Every direction that reaches a kernel is therefore produced on the host with
``normalized()``, which rejects zero-length vectors instead of handing a NaN
to the shading pipeline.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.core.vector import normalized
    >>> normalized((-1.0, 1.0, 1.0))
    (-0.5773502691896258, 0.5773502691896258, 0.5773502691896258)
"""

import math
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

Vec3Tuple = tuple[float, float, float]


# =============================================================================
# Kernel-side operations
# =============================================================================


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum a + b."""
    return a + b


@ti.func
def sub(a: vec3, b: vec3) -> vec3:
    """Component-wise difference a - b."""
    return a - b


@ti.func
def scale(v: vec3, s: ti.f32) -> vec3:
    """Multiply every component of v by the scalar s."""
    return v * s


@ti.func
def mul(a: vec3, b: vec3) -> vec3:
    """Elementwise (channel-wise) product.

    Used to filter a light color through a surface color: each channel of
    the result is a[c] * b[c].
    """
    return vec3(a.x * b.x, a.y * b.y, a.z * b.z)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return tm.cross(a, b)


@ti.func
def length(v: vec3) -> ti.f32:
    """Euclidean length of v."""
    return ti.sqrt(tm.dot(v, v))


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Squared Euclidean length of v (no square root)."""
    return tm.dot(v, v)


@ti.func
def normalize(v: vec3) -> vec3:
    """Scale v to unit length.

    The input must be non-zero. Callers inside kernels only normalize vectors
    that are non-zero by construction (a hit point and the sphere center, a
    plane point and the vantage point behind it).
    """
    return v / length(v)


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Computes incident - 2 * (incident . normal) * normal. The normal must be
    unit length; reflecting a unit vector then yields a unit vector.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The unit surface normal.

    Returns:
        The mirrored direction.
    """
    return incident - 2.0 * tm.dot(incident, normal) * normal


# =============================================================================
# Host-side helpers
# =============================================================================


def as_vec3(values: Sequence[float], name: str = "vector") -> Vec3Tuple:
    """Convert a 3-element sequence into a tuple of finite floats.

    Args:
        values: Any sequence of three numbers.
        name: Name used in error messages.

    Returns:
        The components as a ``(x, y, z)`` tuple of floats.

    Raises:
        ValueError: If values does not hold exactly three finite numbers.
    """
    try:
        components = tuple(float(c) for c in values)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a sequence of 3 numbers, got {values!r}") from e

    if len(components) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(components)}")
    if not all(math.isfinite(c) for c in components):
        raise ValueError(f"{name} components must be finite, got {components}")

    return components  # type: ignore[return-value]


def vector_length(values: Sequence[float]) -> float:
    """Euclidean length of a host-side vector."""
    x, y, z = as_vec3(values)
    return math.sqrt(x * x + y * y + z * z)


def normalized(values: Sequence[float], name: str = "vector") -> Vec3Tuple:
    """Return values scaled to unit length.

    Args:
        values: The vector to normalize.
        name: Name used in error messages.

    Returns:
        A unit-length ``(x, y, z)`` tuple.

    Raises:
        ValueError: If the vector has zero length (normalization is undefined).
    """
    x, y, z = as_vec3(values, name)
    norm = math.sqrt(x * x + y * y + z * z)
    if norm == 0.0:
        raise ValueError(f"Cannot normalize zero-length {name}")
    return (x / norm, y / norm, z / norm)


def cross_host(a: Sequence[float], b: Sequence[float]) -> Vec3Tuple:
    """Cross product a x b of two host-side vectors."""
    ax, ay, az = as_vec3(a)
    bx, by, bz = as_vec3(b)
    return (ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)
