"""JSON scene files.

A scene file is a JSON object. Every section is optional; anything left out
takes the value of the reference scene::

    {
        "spheres": [{"center": [0, 10, 0], "radius": 4}],
        "camera": {
            "center": [0, 0, 0],
            "forward": [0, 1, 0],
            "up": [0, 0, 1],
            "width": 10,
            "height": 5.625,
            "fov": 80
        },
        "light": {"direction": [-1, 1, 1], "color": [1, 1, 0], "intensity": 5},
        "material": {
            "surface_color": [0.75, 0.125, 0.125],
            "diffuse_weight": 0.2,
            "specular_weight": 0.2,
            "specular_exponent": 10
        },
        "ambient_intensity": 0.1,
        "background": [0, 0, 0]
    }

The camera takes either ``fov`` (degrees) or ``focal_distance``. When
``height`` is omitted it follows the aspect ratio of the output image.

Example:
    >>> from raycaster.scene.loader import load_scene
    >>> scene = load_scene("examples/two_spheres.json", image_size=(640, 360))
"""

import json
import logging
from pathlib import Path
from typing import Any

from raycaster.camera.pinhole import PinholeCamera
from raycaster.materials.phong import PhongMaterial
from raycaster.scene.reference import (
    REFERENCE_HEIGHT,
    REFERENCE_WIDTH,
    ReferenceSceneParams,
    create_reference_scene,
)
from raycaster.scene.scene import DirectionalLight, Scene, SphereSpec

logger = logging.getLogger(__name__)

_SCENE_KEYS = {"spheres", "camera", "light", "material", "ambient_intensity", "background"}
_CAMERA_KEYS = {"center", "forward", "up", "width", "height", "fov", "focal_distance"}
_LIGHT_KEYS = {"direction", "color", "intensity"}
_MATERIAL_KEYS = {"surface_color", "diffuse_weight", "specular_weight", "specular_exponent"}
_SPHERE_KEYS = {"center", "radius"}


def _check_section(data: Any, name: str, allowed: set[str]) -> dict[str, Any]:
    """Ensure a section is a JSON object with only known keys."""
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be an object, got {type(data).__name__}")
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"Unknown key(s) in '{name}': {', '.join(sorted(unknown))}")
    return data


def _build(name: str, factory, **kwargs):
    """Construct a config object, prefixing validation errors with the section name."""
    try:
        return factory(**kwargs)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid '{name}': {e}") from e


def scene_from_dict(
    data: dict[str, Any],
    image_size: tuple[int, int] = (REFERENCE_WIDTH, REFERENCE_HEIGHT),
) -> Scene:
    """Build a Scene from a parsed scene document.

    Args:
        data: The parsed JSON object.
        image_size: Output (width, height) in pixels, used to derive the
            image plane height when the camera does not give one.

    Returns:
        The validated Scene.

    Raises:
        ValueError: If a section is malformed or a value fails validation.
            The message names the offending key.
    """
    data = _check_section(data, "scene", _SCENE_KEYS)
    width, height = image_size
    defaults = create_reference_scene(width, height)
    reference = ReferenceSceneParams()

    # Spheres
    spheres = defaults.spheres
    if "spheres" in data:
        if not isinstance(data["spheres"], list):
            raise ValueError("'spheres' must be a list")
        spheres = []
        for i, entry in enumerate(data["spheres"]):
            entry = _check_section(entry, f"spheres[{i}]", _SPHERE_KEYS)
            if "center" not in entry or "radius" not in entry:
                raise ValueError(f"'spheres[{i}]' needs both 'center' and 'radius'")
            spheres.append(_build(f"spheres[{i}]", SphereSpec, **entry))

    # Camera
    camera = defaults.camera
    if "camera" in data:
        cam = _check_section(data["camera"], "camera", _CAMERA_KEYS)
        if "fov" in cam and "focal_distance" in cam:
            raise ValueError("'camera' takes either 'fov' or 'focal_distance', not both")

        plane_width = cam.get("width", reference.plane_width)
        plane_height = cam.get("height")
        if plane_height is None:
            try:
                plane_height = float(plane_width) * height / width
            except (TypeError, ValueError) as e:
                raise ValueError(
                    f"Invalid 'camera': width must be a number, got {plane_width!r}"
                ) from e

        common = {
            "center": cam.get("center", defaults.camera.center),
            "forward": cam.get("forward", defaults.camera.forward),
            "up": cam.get("up", defaults.camera.up),
            "width": plane_width,
            "height": plane_height,
        }
        if "focal_distance" in cam:
            camera = _build(
                "camera", PinholeCamera, focal_distance=cam["focal_distance"], **common
            )
        else:
            camera = _build(
                "camera", PinholeCamera.from_fov, fov=cam.get("fov", reference.fov), **common
            )

    # Light
    light = defaults.light
    if "light" in data:
        entry = _check_section(data["light"], "light", _LIGHT_KEYS)
        light = _build(
            "light",
            DirectionalLight,
            direction=entry.get("direction", reference.light_direction),
            color=entry.get("color", defaults.light.color),
            intensity=entry.get("intensity", defaults.light.intensity),
        )

    # Material
    material = defaults.material
    if "material" in data:
        entry = _check_section(data["material"], "material", _MATERIAL_KEYS)
        material = _build(
            "material",
            PhongMaterial,
            surface_color=entry.get("surface_color", defaults.material.surface_color),
            diffuse_weight=entry.get("diffuse_weight", defaults.material.diffuse_weight),
            specular_weight=entry.get("specular_weight", defaults.material.specular_weight),
            specular_exponent=entry.get(
                "specular_exponent", defaults.material.specular_exponent
            ),
        )

    return _build(
        "scene",
        Scene,
        spheres=spheres,
        camera=camera,
        light=light,
        material=material,
        ambient_intensity=data.get("ambient_intensity", defaults.ambient_intensity),
        background=data.get("background", defaults.background),
    )


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Serialize a Scene into a JSON-compatible document.

    The camera is written with an explicit ``focal_distance`` so that a
    round trip reproduces it exactly.
    """
    camera = scene.camera
    return {
        "spheres": [
            {"center": list(s.center), "radius": s.radius} for s in scene.spheres
        ],
        "camera": {
            "center": list(camera.center),
            "forward": list(camera.forward),
            "up": list(camera.up),
            "width": camera.width,
            "height": camera.height,
            "focal_distance": camera.focal_distance,
        },
        "light": {
            "direction": list(scene.light.direction),
            "color": list(scene.light.color),
            "intensity": scene.light.intensity,
        },
        "material": {
            "surface_color": list(scene.material.surface_color),
            "diffuse_weight": scene.material.diffuse_weight,
            "specular_weight": scene.material.specular_weight,
            "specular_exponent": scene.material.specular_exponent,
        },
        "ambient_intensity": scene.ambient_intensity,
        "background": list(scene.background),
    }


def load_scene(
    filepath: str | Path,
    image_size: tuple[int, int] = (REFERENCE_WIDTH, REFERENCE_HEIGHT),
) -> Scene:
    """Load a scene from a JSON file.

    Args:
        filepath: Path to the scene file.
        image_size: Output (width, height) in pixels.

    Returns:
        The validated Scene.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or the scene is malformed.
    """
    path = Path(filepath)
    logger.info("Loading scene from %s", path)

    with path.open(encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: not valid JSON ({e})") from e

    scene = scene_from_dict(data, image_size=image_size)
    logger.debug("Loaded %d sphere(s) from %s", len(scene.spheres), path)
    return scene


def save_scene(scene: Scene, filepath: str | Path) -> None:
    """Write a scene to a JSON file."""
    path = Path(filepath)
    with path.open("w", encoding="utf-8") as f:
        json.dump(scene_to_dict(scene), f, indent=2)
        f.write("\n")
    logger.info("Saved scene to %s", path)
