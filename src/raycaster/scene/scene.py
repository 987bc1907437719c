"""Scene description: spheres, camera, light, material and ambient level.

A Scene is an explicit value handed to the render driver. Nothing in the
package keeps a global scene, so tests can build synthetic scenes freely.
All validation happens when the dataclasses are constructed; a Scene that
exists is safe to send to a kernel.

Example:
    >>> from raycaster.scene.scene import DirectionalLight, Scene, SphereSpec
    >>> from raycaster.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera.from_fov(
    ...     (0, 0, 0), (0, 1, 0), (0, 0, 1), width=10.0, height=10.0, fov=80.0
    ... )
    >>> scene = Scene(
    ...     spheres=[SphereSpec(center=(0, 10, 0), radius=4.0)],
    ...     camera=camera,
    ...     light=DirectionalLight(direction=(-1, 1, 1)),
    ... )
"""

import math
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from raycaster.camera.pinhole import PinholeCamera
from raycaster.core.framebuffer import RGB, as_rgb
from raycaster.core.vector import Vec3Tuple, as_vec3, normalized
from raycaster.geometry.sphere import validate_sphere
from raycaster.materials.phong import PhongMaterial


@dataclass
class SphereSpec:
    """A sphere in the scene.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
    """

    center: Vec3Tuple
    radius: float

    def __post_init__(self) -> None:
        self.center, self.radius = validate_sphere(self.center, self.radius)


@dataclass
class DirectionalLight:
    """A single directional light source.

    Attributes:
        direction: Direction the light travels in (from the light toward the
            scene). Normalized on construction.
        color: Light color (RGB).
        intensity: Scalar intensity applied to the diffuse term.
    """

    direction: Vec3Tuple
    color: Vec3Tuple = (1.0, 1.0, 1.0)
    intensity: float = 1.0

    def __post_init__(self) -> None:
        self.direction = normalized(self.direction, "light direction")
        self.color = as_vec3(self.color, "light color")
        if any(c < 0.0 for c in self.color):
            raise ValueError(f"Light color components must be non-negative, got {self.color}")
        self.intensity = float(self.intensity)
        if not math.isfinite(self.intensity) or self.intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {self.intensity}")


@dataclass
class Scene:
    """Everything the render driver needs besides the output resolution.

    Attributes:
        spheres: Renderable spheres; order decides exact distance ties.
        camera: The viewpoint.
        light: The directional light.
        material: Surface material shared by all spheres.
        ambient_intensity: Uniform ambient light level.
        background: 8-bit color of pixels whose ray hits nothing.
    """

    spheres: list[SphereSpec]
    camera: PinholeCamera
    light: DirectionalLight
    material: PhongMaterial = field(default_factory=PhongMaterial)
    ambient_intensity: float = 0.1
    background: RGB = (0, 0, 0)

    def __post_init__(self) -> None:
        self.spheres = list(self.spheres)
        self.ambient_intensity = float(self.ambient_intensity)
        if not math.isfinite(self.ambient_intensity) or self.ambient_intensity < 0.0:
            raise ValueError(
                f"Ambient intensity must be non-negative, got {self.ambient_intensity}"
            )
        self.background = as_rgb(self.background, "background")

    def add_sphere(self, center: Vec3Tuple, radius: float) -> int:
        """Append a sphere and return its index."""
        self.spheres.append(SphereSpec(center=center, radius=radius))
        return len(self.spheres) - 1

    def sphere_arrays(self) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.float32]]:
        """Sphere data in kernel layout.

        Returns:
            Tuple of (centers, radii) as contiguous float32 arrays with shapes
            (N, 3) and (N,).
        """
        centers = np.array([s.center for s in self.spheres], dtype=np.float32).reshape(-1, 3)
        radii = np.array([s.radius for s in self.spheres], dtype=np.float32)
        return np.ascontiguousarray(centers), np.ascontiguousarray(radii)
