"""Render driver: one primary ray per pixel, nearest hit, local shading.

For every pixel (x, y) of the output:

1. map the pixel to normalized image-plane coordinates
   (cam_x, cam_y) = (x / width - 0.5, y / height - 0.5);
2. cast the camera ray through that point;
3. test the ray against every sphere and keep the nearest finite hit;
4. shade the hit with the Phong model and the scene light;
5. tone map the light-space color and write it into the frame buffer.

Pixels whose ray hits nothing skip steps 4-5 and keep the background color
the buffer was cleared to. Row y = 0 maps to cam_y = -0.5, the bottom edge
of the image plane, so the frame buffer is stored bottom row first.

The per-pixel loop is the outermost loop of a Taichi kernel, which Taichi
runs in parallel. Each iteration reads the shared, read-only scene arrays
and writes only its own pixel, so no synchronization is needed and the
result is identical from run to run.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.core.renderer import render_scene
    >>> from raycaster.scene.reference import create_reference_scene
    >>> fb = render_scene(create_reference_scene(320, 180), 320, 180)
"""

import logging
import time

import taichi as ti

from raycaster.camera.pinhole import CameraFrame, cast_ray, make_camera_frame
from raycaster.core.framebuffer import FrameBuffer
from raycaster.core.tonemap import ToneMapMethod, light_to_rgb, parse_tone_map
from raycaster.core.vector import vec3
from raycaster.materials.phong import shade_phong
from raycaster.scene.intersection import intersect_spheres
from raycaster.scene.scene import Scene

logger = logging.getLogger(__name__)

vec4 = ti.math.vec4


# =============================================================================
# Kernel-side helpers
# =============================================================================


@ti.dataclass
class ShadingParams:
    """Light and material constants shared by every pixel."""

    light_direction: vec3
    light_color: vec3
    light_intensity: ti.f32
    ambient_intensity: ti.f32
    surface_color: vec3
    diffuse_weight: ti.f32
    specular_weight: ti.f32
    specular_exponent: ti.f32


@ti.func
def pixel_to_plane_coords(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32):
    """Map a pixel to normalized image-plane coordinates.

    Args:
        x: Pixel column, 0 <= x < width.
        y: Pixel row, 0 <= y < height (row 0 is the bottom edge).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Tuple (cam_x, cam_y), each in [-0.5, 0.5).
    """
    cam_x = ti.cast(x, ti.f32) / ti.cast(width, ti.f32) - 0.5
    cam_y = ti.cast(y, ti.f32) / ti.cast(height, ti.f32) - 0.5
    return cam_x, cam_y


@ti.func
def trace_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    frame: CameraFrame,
    centers: ti.template(),
    radii: ti.template(),
    shading: ShadingParams,
):
    """Cast the ray for one pixel and shade the nearest hit.

    Returns:
        Tuple (hit, color): hit is 1 if any sphere was hit, and color is the
        unclamped light-space color (zero on a miss).
    """
    cam_x, cam_y = pixel_to_plane_coords(x, y, width, height)
    ray = cast_ray(frame, cam_x, cam_y)
    rec = intersect_spheres(ray.origin, ray.direction, centers, radii)

    color = vec3(0.0, 0.0, 0.0)
    if rec.hit == 1:
        color = shade_phong(
            rec.normal,
            ray.direction,
            shading.light_direction,
            shading.light_color,
            shading.light_intensity,
            shading.ambient_intensity,
            shading.surface_color,
            shading.diffuse_weight,
            shading.specular_weight,
            shading.specular_exponent,
        )
    return rec.hit, color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(
    pixels: ti.types.ndarray(dtype=ti.u8, ndim=3),
    centers: ti.types.ndarray(dtype=vec3, ndim=1),
    radii: ti.types.ndarray(dtype=ti.f32, ndim=1),
    cam_center: vec3,
    cam_forward: vec3,
    cam_up: vec3,
    plane_width: ti.f32,
    plane_height: ti.f32,
    focal_distance: ti.f32,
    light_direction: vec3,
    light_color: vec3,
    light_intensity: ti.f32,
    ambient_intensity: ti.f32,
    surface_color: vec3,
    diffuse_weight: ti.f32,
    specular_weight: ti.f32,
    specular_exponent: ti.f32,
    tone_map: ti.i32,
    exposure: ti.f32,
):
    """Render every pixel of the buffer, leaving misses untouched."""
    height = pixels.shape[0]
    width = pixels.shape[1]

    for y, x in ti.ndrange(height, width):
        frame = make_camera_frame(
            cam_center, cam_forward, cam_up, plane_width, plane_height, focal_distance
        )
        shading = ShadingParams(
            light_direction=light_direction,
            light_color=light_color,
            light_intensity=light_intensity,
            ambient_intensity=ambient_intensity,
            surface_color=surface_color,
            diffuse_weight=diffuse_weight,
            specular_weight=specular_weight,
            specular_exponent=specular_exponent,
        )

        hit, color = trace_pixel(x, y, width, height, frame, centers, radii, shading)
        if hit == 1:
            rgb = light_to_rgb(color, tone_map, exposure)
            for c in ti.static(range(3)):
                pixels[y, x, c] = ti.cast(rgb[c], ti.u8)


@ti.kernel
def _shade_pixel_kernel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    centers: ti.types.ndarray(dtype=vec3, ndim=1),
    radii: ti.types.ndarray(dtype=ti.f32, ndim=1),
    cam_center: vec3,
    cam_forward: vec3,
    cam_up: vec3,
    plane_width: ti.f32,
    plane_height: ti.f32,
    focal_distance: ti.f32,
    light_direction: vec3,
    light_color: vec3,
    light_intensity: ti.f32,
    ambient_intensity: ti.f32,
    surface_color: vec3,
    diffuse_weight: ti.f32,
    specular_weight: ti.f32,
    specular_exponent: ti.f32,
) -> vec4:
    """Light-space color of one pixel in xyz, hit flag in w."""
    frame = make_camera_frame(
        cam_center, cam_forward, cam_up, plane_width, plane_height, focal_distance
    )
    shading = ShadingParams(
        light_direction=light_direction,
        light_color=light_color,
        light_intensity=light_intensity,
        ambient_intensity=ambient_intensity,
        surface_color=surface_color,
        diffuse_weight=diffuse_weight,
        specular_weight=specular_weight,
        specular_exponent=specular_exponent,
    )
    hit, color = trace_pixel(x, y, width, height, frame, centers, radii, shading)
    return vec4(color.x, color.y, color.z, ti.cast(hit, ti.f32))


# =============================================================================
# Public Rendering API
# =============================================================================


def _scene_constants(scene: Scene) -> tuple:
    """Camera, light and material arguments shared by the kernels."""
    camera = scene.camera
    light = scene.light
    material = scene.material
    return (
        vec3(*camera.center),
        vec3(*camera.forward),
        vec3(*camera.up),
        camera.width,
        camera.height,
        camera.focal_distance,
        vec3(*light.direction),
        vec3(*light.color),
        light.intensity,
        scene.ambient_intensity,
        vec3(*material.surface_color),
        material.diffuse_weight,
        material.specular_weight,
        material.specular_exponent,
    )


def render_into(
    scene: Scene,
    framebuffer: FrameBuffer,
    *,
    tone_map: str | ToneMapMethod = ToneMapMethod.CLIP,
    exposure: float = 1.0,
) -> FrameBuffer:
    """Render a scene into an existing frame buffer.

    The buffer is not cleared: pixels whose ray hits nothing keep their
    current color. Every other pixel is overwritten.

    Args:
        scene: The scene to render.
        framebuffer: Destination buffer, usually freshly cleared.
        tone_map: Tone mapping method (default: hard clip).
        exposure: Exposure factor for the exposure tone map.

    Returns:
        The same frame buffer, for chaining.

    Raises:
        ValueError: If the tone map name is unknown or exposure is negative.
    """
    method = parse_tone_map(tone_map)
    if exposure < 0.0:
        raise ValueError(f"Exposure must be non-negative, got {exposure}")

    if not scene.spheres:
        logger.info("Scene has no spheres; leaving the buffer at its background")
        return framebuffer

    centers, radii = scene.sphere_arrays()

    logger.info(
        "Rendering %d sphere(s) at %dx%d (tone map: %s)",
        len(scene.spheres),
        framebuffer.width,
        framebuffer.height,
        method.name.lower(),
    )
    start_time = time.perf_counter()

    _render_kernel(
        framebuffer.pixels,
        centers,
        radii,
        *_scene_constants(scene),
        int(method),
        float(exposure),
    )
    ti.sync()

    logger.debug("Render finished in %.3fs", time.perf_counter() - start_time)
    return framebuffer


def render_scene(
    scene: Scene,
    width: int,
    height: int,
    *,
    tone_map: str | ToneMapMethod = ToneMapMethod.CLIP,
    exposure: float = 1.0,
) -> FrameBuffer:
    """Render a scene into a new frame buffer cleared to its background.

    Args:
        scene: The scene to render.
        width: Image width in pixels.
        height: Image height in pixels.
        tone_map: Tone mapping method (default: hard clip).
        exposure: Exposure factor for the exposure tone map.

    Returns:
        The rendered FrameBuffer.
    """
    framebuffer = FrameBuffer(width, height, background=scene.background)
    return render_into(scene, framebuffer, tone_map=tone_map, exposure=exposure)


def shade_pixel(
    scene: Scene, x: int, y: int, width: int, height: int
) -> tuple[float, float, float] | None:
    """Light-space color of a single pixel, before tone mapping.

    This is a Python-callable debugging entry point; render_scene() is the
    way to produce images.

    Returns:
        The (r, g, b) light color, or None if the pixel's ray hits nothing.

    Raises:
        ValueError: If (x, y) is outside a width x height image.
    """
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"Pixel ({x}, {y}) is outside the {width}x{height} image")
    if not scene.spheres:
        return None

    centers, radii = scene.sphere_arrays()
    result = _shade_pixel_kernel(x, y, width, height, centers, radii, *_scene_constants(scene))

    if result[3] < 0.5:
        return None
    return (float(result[0]), float(result[1]), float(result[2]))
