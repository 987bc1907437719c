"""Unit tests for tone mapping.

Tests cover:
- Hard clip with truncation to 8-bit values
- Reinhard and exposure curves
- Tone map name parsing
"""

import math

import pytest
import taichi as ti


def _to_rgb(color, method=0, exposure=1.0):
    """Run light_to_rgb in a kernel.

    Returns:
        Tuple (floats, bytes): the 0-255 floats and their 8-bit casts.
    """
    from raycaster.core.tonemap import light_to_rgb
    from raycaster.core.vector import vec3

    result = ti.field(dtype=ti.math.vec3, shape=())
    result_u8 = ti.field(dtype=ti.u8, shape=3)

    @ti.kernel
    def test_kernel(c: vec3, m: ti.i32, e: ti.f32):
        rgb = light_to_rgb(c, m, e)
        result[None] = rgb
        for i in ti.static(range(3)):
            result_u8[i] = ti.cast(rgb[i], ti.u8)

    test_kernel(vec3(*color), int(method), exposure)
    return tuple(result.to_numpy().tolist()), tuple(int(v) for v in result_u8.to_numpy())


class TestClip:
    """Tests for the default hard clip."""

    def test_clamps_then_scales(self):
        """Test out-of-range channels saturate and in-range ones truncate."""
        from raycaster.core.tonemap import ToneMapMethod

        _, rgb = _to_rgb((2.0, -0.5, 0.5), ToneMapMethod.CLIP)
        assert rgb == (255, 0, 127)

    def test_unit_range_maps_to_full_range(self):
        floats, rgb = _to_rgb((0.0, 1.0, 0.25))
        assert abs(floats[1] - 255.0) < 1e-4
        assert rgb == (0, 255, 63)


class TestCompressiveCurves:
    """Tests for Reinhard and exposure tone mapping."""

    def test_reinhard(self):
        """Test c / (1 + c): 1.0 maps to half brightness."""
        from raycaster.core.tonemap import ToneMapMethod

        floats, _ = _to_rgb((1.0, 0.0, 3.0), ToneMapMethod.REINHARD)
        assert abs(floats[0] - 127.5) < 1e-3
        assert abs(floats[1]) < 1e-6
        assert abs(floats[2] - 0.75 * 255.0) < 1e-3

    def test_reinhard_never_saturates(self):
        from raycaster.core.tonemap import ToneMapMethod

        floats, _ = _to_rgb((1000.0, 1000.0, 1000.0), ToneMapMethod.REINHARD)
        assert all(c < 255.0 for c in floats)

    def test_reinhard_negative_is_black(self):
        from raycaster.core.tonemap import ToneMapMethod

        _, rgb = _to_rgb((-2.0, -2.0, -2.0), ToneMapMethod.REINHARD)
        assert rgb == (0, 0, 0)

    def test_exposure(self):
        """Test 1 - exp(-c * exposure)."""
        from raycaster.core.tonemap import ToneMapMethod

        floats, _ = _to_rgb((1.0, 0.0, 0.5), ToneMapMethod.EXPOSURE, exposure=2.0)
        assert abs(floats[0] - (1.0 - math.exp(-2.0)) * 255.0) < 1e-3
        assert abs(floats[1]) < 1e-6
        assert abs(floats[2] - (1.0 - math.exp(-1.0)) * 255.0) < 1e-3

    def test_higher_exposure_is_brighter(self):
        from raycaster.core.tonemap import ToneMapMethod

        low, _ = _to_rgb((0.5, 0.5, 0.5), ToneMapMethod.EXPOSURE, exposure=0.5)
        high, _ = _to_rgb((0.5, 0.5, 0.5), ToneMapMethod.EXPOSURE, exposure=2.0)
        assert high[0] > low[0]


class TestParseToneMap:
    """Tests for parse_tone_map."""

    @pytest.mark.parametrize(
        "name, expected",
        [("clip", "CLIP"), ("Reinhard", "REINHARD"), ("EXPOSURE", "EXPOSURE")],
    )
    def test_names_are_case_insensitive(self, name, expected):
        from raycaster.core.tonemap import ToneMapMethod, parse_tone_map

        assert parse_tone_map(name) is ToneMapMethod[expected]

    def test_enum_passes_through(self):
        from raycaster.core.tonemap import ToneMapMethod, parse_tone_map

        assert parse_tone_map(ToneMapMethod.REINHARD) is ToneMapMethod.REINHARD

    def test_unknown_name_raises(self):
        from raycaster.core.tonemap import parse_tone_map

        with pytest.raises(ValueError, match="Unknown tone map 'gamma'"):
            parse_tone_map("gamma")
