"""Reference single-sphere scene.

One red sphere floats ten units in front of a camera at the origin and is
lit by a yellow directional light coming from the upper left, behind the
viewer. The scene is the default for the command-line renderer and the
baseline for end-to-end tests.

    camera   at (0, 0, 0), looking along +y, z up, 80 degree FOV,
             image plane 10 units wide (height follows the aspect ratio)
    sphere   center (0, 10, 0), radius 4
    light    yellow (1, 1, 0), traveling along (-1, 1, 1), intensity 5
    material (0.75, 0.125, 0.125), k_d = 0.2, k_s = 0.2, n = 10
    ambient  0.1, black background

Example:
    >>> from raycaster.scene.reference import create_reference_scene
    >>> scene = create_reference_scene(1920, 1080)
    >>> scene.camera.height
    5.625
"""

from dataclasses import dataclass

from raycaster.camera.pinhole import PinholeCamera
from raycaster.materials.phong import PhongMaterial
from raycaster.scene.scene import DirectionalLight, Scene, SphereSpec

# Default output resolution
REFERENCE_WIDTH = 1920
REFERENCE_HEIGHT = 1080


@dataclass
class ReferenceSceneParams:
    """Tunable parameters of the reference scene.

    Attributes:
        plane_width: Physical width of the camera image plane.
        fov: Horizontal field of view in degrees.
        light_color: RGB color of the light.
        light_direction: Direction the light travels in.
        light_intensity: Scalar light intensity.
        ambient_intensity: Ambient light level.
    """

    plane_width: float = 10.0
    fov: float = 80.0
    light_color: tuple[float, float, float] = (1.0, 1.0, 0.0)
    light_direction: tuple[float, float, float] = (-1.0, 1.0, 1.0)
    light_intensity: float = 5.0
    ambient_intensity: float = 0.1


def create_reference_scene(
    width: int = REFERENCE_WIDTH,
    height: int = REFERENCE_HEIGHT,
    params: ReferenceSceneParams | None = None,
) -> Scene:
    """Create the reference scene for an output of width x height pixels.

    The image plane height is derived from the output aspect ratio so that
    pixels stay square.

    Args:
        width: Output image width in pixels.
        height: Output image height in pixels.
        params: Optional overrides for the camera and light.

    Returns:
        The reference Scene.

    Raises:
        ValueError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    if params is None:
        params = ReferenceSceneParams()

    plane_height = params.plane_width * height / width

    camera = PinholeCamera.from_fov(
        center=(0.0, 0.0, 0.0),
        forward=(0.0, 1.0, 0.0),
        up=(0.0, 0.0, 1.0),
        width=params.plane_width,
        height=plane_height,
        fov=params.fov,
    )

    light = DirectionalLight(
        direction=params.light_direction,
        color=params.light_color,
        intensity=params.light_intensity,
    )

    material = PhongMaterial(
        surface_color=(0.75, 0.125, 0.125),
        diffuse_weight=0.2,
        specular_weight=0.2,
        specular_exponent=10.0,
    )

    return Scene(
        spheres=[SphereSpec(center=(0.0, 10.0, 0.0), radius=4.0)],
        camera=camera,
        light=light,
        material=material,
        ambient_intensity=params.ambient_intensity,
        background=(0, 0, 0),
    )
