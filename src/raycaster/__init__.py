"""Taichi-based ray caster for sphere scenes.

This package renders still images of spheres lit by one directional light
and an ambient term, with:
- Pinhole camera ray generation decoupled from the output resolution
- Geometric ray-sphere intersection with nearest-hit selection
- Ambient + Lambertian diffuse + Phong specular shading
- Hard-clip (or optional compressive) tone mapping to 8-bit RGB

Subpackages:
    core: Vector algebra, rays, tone mapping, frame buffer and render driver
    camera: Pinhole camera model
    geometry: Sphere primitive and intersection
    materials: Phong shading model
    scene: Scene description, reference scene and JSON scene files
    preview: Image export
"""

__version__ = "0.1.0"
