"""Unit tests for ray-sphere intersection.

Tests cover:
- Hits in front of the ray with distance, point and outward normal
- Misses, spheres behind the ray and tangent rays
- Rays starting inside a sphere, including the center-behind early exit
- Host-side sphere validation
"""

import math

import pytest
import taichi as ti


def _hit(origin, direction, center, radius):
    """Intersect one ray with one sphere in a kernel.

    The direction is normalized inside the kernel.

    Returns:
        Tuple (hit, t, point, normal).
    """
    from raycaster.core.vector import normalize, vec3
    from raycaster.geometry.sphere import hit_sphere, make_sphere

    hit = ti.field(dtype=ti.i32, shape=())
    t = ti.field(dtype=ti.f32, shape=())
    point = ti.field(dtype=ti.math.vec3, shape=())
    normal = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(o: vec3, d: vec3, c: vec3, r: ti.f32):
        rec = hit_sphere(o, normalize(d), make_sphere(c, r))
        hit[None] = rec.hit
        t[None] = rec.t
        point[None] = rec.point
        normal[None] = rec.normal

    test_kernel(vec3(*origin), vec3(*direction), vec3(*center), radius)
    return (
        hit[None],
        t[None],
        tuple(point.to_numpy().tolist()),
        tuple(normal.to_numpy().tolist()),
    )


def _assert_vec(actual, expected, tol=1e-5):
    for a, e in zip(actual, expected):
        assert abs(a - e) < tol


class TestSphereHit:
    """Tests for rays that hit the sphere."""

    def test_reference_sphere_front_hit(self):
        """Test the camera axis ray meets the reference sphere at t=6."""
        hit, t, point, normal = _hit((0, 0, 0), (0, 1, 0), (0, 10, 0), 4.0)

        assert hit == 1
        assert abs(t - 6.0) < 1e-5
        _assert_vec(point, (0.0, 6.0, 0.0))
        _assert_vec(normal, (0.0, -1.0, 0.0))

    def test_tangent_ray_hits_once(self):
        """Test a ray grazing the sphere reports the tangent point."""
        hit, t, point, normal = _hit((4, 0, 0), (0, 1, 0), (0, 10, 0), 4.0)

        assert hit == 1
        assert abs(t - 10.0) < 1e-5
        _assert_vec(point, (4.0, 10.0, 0.0))
        _assert_vec(normal, (1.0, 0.0, 0.0))

    def test_normal_is_unit_length(self):
        hit, _, point, normal = _hit((0, 0, 0), (1, 10, 0.5), (0, 10, 0), 4.0)

        assert hit == 1
        assert abs(math.sqrt(sum(c * c for c in normal)) - 1.0) < 1e-5
        # point lies on the surface
        dist = math.sqrt(point[0] ** 2 + (point[1] - 10.0) ** 2 + point[2] ** 2)
        assert abs(dist - 4.0) < 1e-4

    def test_origin_on_surface_hits_at_zero(self):
        """Test t=0 counts as a hit (non-negative, not strictly positive)."""
        hit, t, _, _ = _hit((0, 6, 0), (0, 1, 0), (0, 10, 0), 4.0)

        assert hit == 1
        assert abs(t) < 1e-5


class TestSphereMiss:
    """Tests for rays that miss the sphere."""

    def test_ray_pointing_away_misses(self):
        """Test a sideways ray misses and reports t=+inf."""
        hit, t, _, _ = _hit((0, 0, 0), (1, 0, 0), (0, 10, 0), 4.0)

        assert hit == 0
        assert math.isinf(t) and t > 0

    def test_sphere_behind_ray_misses(self):
        hit, t, _, _ = _hit((0, 0, 0), (0, -1, 0), (0, 10, 0), 4.0)

        assert hit == 0
        assert math.isinf(t)

    def test_ray_passing_just_outside_misses(self):
        hit, _, _, _ = _hit((4.01, 0, 0), (0, 1, 0), (0, 10, 0), 4.0)
        assert hit == 0


class TestRayInsideSphere:
    """Tests for rays that start inside the sphere."""

    def test_inside_facing_center_uses_far_root(self):
        """Test t0 < 0 falls back to the exit distance t1."""
        hit, t, point, normal = _hit((0, 8, 0), (0, 1, 0), (0, 10, 0), 4.0)

        assert hit == 1
        assert abs(t - 6.0) < 1e-5
        _assert_vec(point, (0.0, 14.0, 0.0))
        _assert_vec(normal, (0.0, 1.0, 0.0))

    def test_inside_facing_away_from_center_misses(self):
        """Test the center-behind early exit.

        The ray starts inside the sphere with the center behind it, so a
        general quadratic solver would report the exit at t=2. The
        geometric test rejects it because the center projects behind the
        origin. Camera rays never start inside a visible sphere.
        """
        hit, t, _, _ = _hit((0, 12, 0), (0, 1, 0), (0, 10, 0), 4.0)

        assert hit == 0
        assert math.isinf(t)


class TestSphereValidation:
    """Tests for host-side sphere validation."""

    def test_valid_sphere(self):
        from raycaster.geometry.sphere import validate_sphere

        assert validate_sphere([0, 10, 0], 4) == ((0.0, 10.0, 0.0), 4.0)

    @pytest.mark.parametrize("radius", [0.0, -1.0, float("nan")])
    def test_non_positive_radius_raises(self, radius):
        from raycaster.geometry.sphere import validate_sphere

        with pytest.raises(ValueError, match="radius"):
            validate_sphere((0.0, 0.0, 0.0), radius)

    def test_malformed_center_raises(self):
        from raycaster.geometry.sphere import validate_sphere

        with pytest.raises(ValueError, match="sphere center"):
            validate_sphere((0.0, 1.0), 1.0)
