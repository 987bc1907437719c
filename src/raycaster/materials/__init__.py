"""Materials module: the Phong surface model."""

from .phong import PhongMaterial, ambient_term, diffuse_term, shade_phong, specular_term

__all__ = [
    "PhongMaterial",
    "ambient_term",
    "diffuse_term",
    "specular_term",
    "shade_phong",
]
