"""Unit tests for scene description and the reference scene.

Tests cover:
- SphereSpec, DirectionalLight and Scene validation
- Sphere data in kernel array layout
- Reference scene parameters
"""

import math

import numpy as np
import pytest


class TestSceneObjects:
    """Tests for scene dataclasses."""

    def test_sphere_spec_converts_values(self):
        from raycaster.scene.scene import SphereSpec

        sphere = SphereSpec(center=[1, 2, 3], radius=2)
        assert sphere.center == (1.0, 2.0, 3.0)
        assert sphere.radius == 2.0

    def test_sphere_spec_rejects_bad_radius(self):
        from raycaster.scene.scene import SphereSpec

        with pytest.raises(ValueError, match="radius"):
            SphereSpec(center=(0, 0, 0), radius=0)

    def test_light_direction_is_normalized(self):
        from raycaster.scene.scene import DirectionalLight

        light = DirectionalLight(direction=(-1, 1, 1), color=(1, 1, 0), intensity=5)
        s = 1.0 / math.sqrt(3.0)
        assert all(abs(a - e) < 1e-12 for a, e in zip(light.direction, (-s, s, s)))
        assert light.intensity == 5.0

    def test_light_zero_direction_raises(self):
        from raycaster.scene.scene import DirectionalLight

        with pytest.raises(ValueError, match="light direction"):
            DirectionalLight(direction=(0, 0, 0))

    @pytest.mark.parametrize(
        "kwargs", [{"color": (1.0, -1.0, 0.0)}, {"intensity": -1.0}, {"intensity": float("nan")}]
    )
    def test_light_invalid_values_raise(self, kwargs):
        from raycaster.scene.scene import DirectionalLight

        with pytest.raises(ValueError):
            DirectionalLight(direction=(0, 1, 0), **kwargs)

    def test_scene_rejects_negative_ambient(self, reference_scene):
        from raycaster.scene.scene import Scene

        with pytest.raises(ValueError, match="Ambient"):
            Scene(
                spheres=[],
                camera=reference_scene.camera,
                light=reference_scene.light,
                ambient_intensity=-0.1,
            )

    def test_scene_rejects_bad_background(self, reference_scene):
        from raycaster.scene.scene import Scene

        with pytest.raises(ValueError, match="background"):
            Scene(
                spheres=[],
                camera=reference_scene.camera,
                light=reference_scene.light,
                background=(0, 0, 256),
            )


class TestSphereArrays:
    """Tests for Scene.sphere_arrays and add_sphere."""

    def test_add_sphere_returns_index(self, reference_scene):
        assert reference_scene.add_sphere((1, 2, 3), 0.5) == 1
        assert len(reference_scene.spheres) == 2

    def test_arrays_layout(self, reference_scene):
        reference_scene.add_sphere((1, 2, 3), 0.5)
        centers, radii = reference_scene.sphere_arrays()

        assert centers.shape == (2, 3)
        assert radii.shape == (2,)
        assert centers.dtype == np.float32
        assert radii.dtype == np.float32
        assert np.array_equal(centers[1], np.array([1, 2, 3], dtype=np.float32))
        assert radii[0] == 4.0

    def test_empty_arrays(self, reference_scene):
        reference_scene.spheres = []
        centers, radii = reference_scene.sphere_arrays()
        assert centers.shape == (0, 3)
        assert radii.shape == (0,)


class TestReferenceScene:
    """Tests for create_reference_scene."""

    def test_full_hd_geometry(self):
        from raycaster.scene.reference import create_reference_scene

        scene = create_reference_scene(1920, 1080)
        assert scene.camera.width == 10.0
        assert abs(scene.camera.height - 5.625) < 1e-12
        assert abs(scene.camera.fov - 80.0) < 1e-9
        assert scene.camera.center == (0.0, 0.0, 0.0)
        assert scene.camera.forward == (0.0, 1.0, 0.0)
        assert scene.camera.up == (0.0, 0.0, 1.0)

    def test_sphere_light_and_material(self):
        from raycaster.scene.reference import create_reference_scene

        scene = create_reference_scene()
        assert len(scene.spheres) == 1
        assert scene.spheres[0].center == (0.0, 10.0, 0.0)
        assert scene.spheres[0].radius == 4.0
        assert scene.light.color == (1.0, 1.0, 0.0)
        assert scene.light.intensity == 5.0
        assert scene.material.surface_color == (0.75, 0.125, 0.125)
        assert scene.ambient_intensity == 0.1
        assert scene.background == (0, 0, 0)

    def test_square_output_gives_square_plane(self):
        from raycaster.scene.reference import create_reference_scene

        scene = create_reference_scene(100, 100)
        assert scene.camera.height == scene.camera.width

    def test_params_override(self):
        from raycaster.scene.reference import ReferenceSceneParams, create_reference_scene

        scene = create_reference_scene(
            640, 360, ReferenceSceneParams(fov=60.0, light_intensity=2.0)
        )
        assert abs(scene.camera.fov - 60.0) < 1e-9
        assert scene.light.intensity == 2.0

    def test_invalid_size_raises(self):
        from raycaster.scene.reference import create_reference_scene

        with pytest.raises(ValueError, match="dimensions"):
            create_reference_scene(0, 1080)
