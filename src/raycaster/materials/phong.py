"""Phong-style local shading: ambient + diffuse + specular.

The surface response to a single directional light is the sum of three
non-negative terms:

    ambient  = surface_color * ambient_intensity
    diffuse  = (light_color * light_intensity) (x) surface_color
               * max(0, -N . L) * k_d
    specular = light_color * max(0, -R . D)^n * k_s,   R = reflect(L, N)

where (x) is channel-wise multiplication, N is the outward surface normal,
L the direction the light travels (from the light toward the scene) and D
the view ray direction (from the camera toward the surface). The sum is
left unclamped; bringing it into display range is the tone mapper's job.

Example:
    >>> from raycaster.materials.phong import PhongMaterial
    >>> material = PhongMaterial(
    ...     surface_color=(0.75, 0.125, 0.125),
    ...     diffuse_weight=0.2,
    ...     specular_weight=0.2,
    ...     specular_exponent=10.0,
    ... )
    >>> # inside a kernel:
    >>> # color = shade_phong(normal, view_dir, light_dir, light_color, ...)
"""

import math
from dataclasses import dataclass

import taichi as ti

from raycaster.core.vector import Vec3Tuple, as_vec3, dot, mul, reflect, scale, vec3

# =============================================================================
# Material Configuration (Python-side)
# =============================================================================


@dataclass
class PhongMaterial:
    """Surface material shared by every sphere in the scene.

    Attributes:
        surface_color: Base reflectance color (RGB).
        diffuse_weight: k_d, how much diffuse light the surface scatters.
        specular_weight: k_s, how much the specular highlight contributes.
        specular_exponent: n, highlight tightness (larger is narrower).
    """

    surface_color: Vec3Tuple = (0.75, 0.125, 0.125)
    diffuse_weight: float = 0.2
    specular_weight: float = 0.2
    specular_exponent: float = 10.0

    def __post_init__(self) -> None:
        self.surface_color = as_vec3(self.surface_color, "surface_color")
        if any(c < 0.0 for c in self.surface_color):
            raise ValueError(
                f"surface_color components must be non-negative, got {self.surface_color}"
            )

        for name in ("diffuse_weight", "specular_weight", "specular_exponent"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"{name} must be a non-negative number, got {value}")
            setattr(self, name, value)


# =============================================================================
# Shading Terms (Taichi-compatible)
# =============================================================================


@ti.func
def ambient_term(surface_color: vec3, ambient_intensity: ti.f32) -> vec3:
    """Uniform background illumination reflected by the surface."""
    return scale(surface_color, ambient_intensity)


@ti.func
def diffuse_term(
    normal: vec3,
    light_direction: vec3,
    light_color: vec3,
    light_intensity: ti.f32,
    surface_color: vec3,
    diffuse_weight: ti.f32,
) -> vec3:
    """Lambertian diffuse contribution.

    The cosine law uses -N . L because the light arrives from the direction
    opposite to the one it travels in. Surfaces facing away receive nothing.
    """
    cosine = ti.max(-dot(normal, light_direction), 0.0)
    filtered = mul(scale(light_color, light_intensity), surface_color)
    return scale(filtered, cosine * diffuse_weight)


@ti.func
def specular_term(
    normal: vec3,
    view_direction: vec3,
    light_direction: vec3,
    light_color: vec3,
    specular_weight: ti.f32,
    specular_exponent: ti.f32,
) -> vec3:
    """Phong specular highlight.

    The light direction is mirrored about the normal; the highlight is as
    strong as the reflected light points back toward the camera.
    """
    reflected = reflect(light_direction, normal)
    alignment = -dot(reflected, view_direction)

    result = vec3(0.0, 0.0, 0.0)
    if alignment > 0.0:
        result = scale(light_color, alignment**specular_exponent * specular_weight)
    return result


@ti.func
def shade_phong(
    normal: vec3,
    view_direction: vec3,
    light_direction: vec3,
    light_color: vec3,
    light_intensity: ti.f32,
    ambient_intensity: ti.f32,
    surface_color: vec3,
    diffuse_weight: ti.f32,
    specular_weight: ti.f32,
    specular_exponent: ti.f32,
) -> vec3:
    """Light-space color of a surface point.

    Args:
        normal: Outward unit normal at the hit point.
        view_direction: Unit direction of the view ray (camera to surface).
        light_direction: Unit direction the light travels in.
        light_color: Light color (RGB).
        light_intensity: Scalar light intensity.
        ambient_intensity: Scalar ambient light level.
        surface_color: Surface base color (RGB).
        diffuse_weight: k_d.
        specular_weight: k_s.
        specular_exponent: n.

    Returns:
        ambient + diffuse + specular, unclamped (channels may exceed 1.0).
    """
    ambient = ambient_term(surface_color, ambient_intensity)
    diffuse = diffuse_term(
        normal, light_direction, light_color, light_intensity, surface_color, diffuse_weight
    )
    specular = specular_term(
        normal, view_direction, light_direction, light_color, specular_weight, specular_exponent
    )
    return ambient + diffuse + specular
