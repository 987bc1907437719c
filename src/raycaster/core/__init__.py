"""Core rendering module.

Components:
    vector: vec3 algebra for kernels and checked host-side normalization
    ray: Ray data structure
    tonemap: Light-space color to 8-bit channel conversion
    framebuffer: Output pixel buffer
    renderer: Per-pixel render driver

Note: renderer is NOT imported here because it depends on the camera,
materials and scene packages. Import it directly:
    from raycaster.core.renderer import render_scene
"""

from .framebuffer import FrameBuffer
from .ray import Ray, make_ray, ray_at
from .tonemap import ToneMapMethod, light_to_rgb, parse_tone_map, tone_map_channel
from .vector import (
    add,
    as_vec3,
    cross,
    dot,
    length,
    length_squared,
    mul,
    normalize,
    normalized,
    reflect,
    scale,
    sub,
    vec3,
)

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "add",
    "sub",
    "scale",
    "mul",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "as_vec3",
    "normalized",
    "ToneMapMethod",
    "parse_tone_map",
    "tone_map_channel",
    "light_to_rgb",
    "FrameBuffer",
]
